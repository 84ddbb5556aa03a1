"""
Local storage for signed PDFs.

Every stored file is immutable and named from the time it was written;
nothing is overwritten, deduplicated or expired.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from docsign.utils.exceptions import StorageError

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "signed_"
MAX_NAME_ATTEMPTS = 100


@dataclass(frozen=True)
class StoredFile:
    filename: str
    path: Path
    url: str


class LocalStorageService:
    """Writes signed PDFs under ``root`` and serves them from ``url_prefix``."""

    def __init__(self, root: str, url_prefix: str = "/uploads", clock: Optional[Callable[[], float]] = None):
        self.root = Path(root).resolve()
        self.url_prefix = "/" + url_prefix.strip("/")
        self._clock = clock or time.time
        self.root.mkdir(parents=True, exist_ok=True)

    def _candidate_names(self):
        stamp = int(self._clock() * 1000)
        yield f"{FILENAME_PREFIX}{stamp}.pdf"
        for n in range(1, MAX_NAME_ATTEMPTS):
            yield f"{FILENAME_PREFIX}{stamp}-{n}.pdf"

    def get_file_url(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def save_pdf(self, content: bytes) -> StoredFile:
        """
        Write ``content`` to a new, timestamp-named file.

        Args:
            content: The PDF bytes

        Returns:
            The stored file's name, path and retrieval URL

        Raises:
            StorageError: If no free name was found or the write failed
        """
        for filename in self._candidate_names():
            path = self.root / filename
            try:
                # "xb" refuses to clobber a file written by a concurrent request
                with open(path, "xb") as f:
                    f.write(content)
            except FileExistsError:
                continue
            except OSError as e:
                logger.error(f"Failed to write {path}: {e}")
                raise StorageError("write", str(path), str(e)) from e

            logger.info(f"Stored signed PDF: {path} ({len(content)} bytes)")
            return StoredFile(filename=filename, path=path, url=self.get_file_url(filename))

        raise StorageError("write", str(self.root), "no free file name")

    def resolve(self, filename: str) -> Optional[Path]:
        """Return the path of a stored file, or None if absent or outside the root."""
        try:
            candidate = (self.root / filename).resolve()
            if candidate.parent != self.root or not candidate.is_file():
                return None
        except (OSError, ValueError):
            # NUL bytes and over-long names
            return None
        return candidate
