import hashlib
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("docsign.audit")


@dataclass(frozen=True)
class IntegrityRecord:
    original_hash: str
    signed_hash: str
    timestamp: datetime
    output_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


def compute_digest(data: bytes) -> str:
    """SHA-256 hex digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


class IntegrityService:
    """Records before/after digests of transformed documents.

    Advisory only: nothing here is embedded in the output or verified later,
    and a failing sink never fails the request.
    """

    def __init__(self, sink: Optional[Callable[[IntegrityRecord], None]] = None):
        self.sink = sink

    def log_transform(self,
                      original_bytes: bytes,
                      signed_bytes: bytes,
                      output_name: Optional[str] = None) -> IntegrityRecord:
        """
        Hash the input and output of a transform and emit an audit entry

        Args:
            original_bytes: PDF bytes as received
            signed_bytes: PDF bytes after the fields were drawn
            output_name: Stored file name, when known

        Returns:
            The emitted record
        """
        record = IntegrityRecord(
            original_hash=compute_digest(original_bytes),
            signed_hash=compute_digest(signed_bytes),
            timestamp=datetime.now(timezone.utc),
            output_name=output_name,
        )

        audit_logger.info(" ".join(f"{key}={value}" for key, value in record.to_dict().items()))

        if self.sink:
            try:
                self.sink(record)
            except Exception as e:
                logger.error(f"Integrity sink failed: {e}", exc_info=True)

        return record
