"""
Signing Service: the request-level pipeline behind POST /api/sign-pdf.

decode -> transform (on the worker pool) -> store -> integrity log
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from docsign.config import Settings
from docsign.schemas.field import FieldErrorItem, FieldPlacement, FieldType, SignPdfRequest
from docsign.services.integrity_service import IntegrityService
from docsign.services.pdf_transform_service import PdfTransformService
from docsign.services.storage_service import LocalStorageService
from docsign.services.worker_pool import WorkerPool
from docsign.utils.exceptions import MissingInputError, ParseError, PayloadTooLargeError
from docsign.utils.pdf_helpers import decode_base64_payload

logger = logging.getLogger(__name__)


@dataclass
class SignResult:
    url: str
    field_errors: List[FieldErrorItem] = field(default_factory=list)


class SigningService:
    def __init__(
        self,
        transform_service: PdfTransformService,
        storage: LocalStorageService,
        integrity: IntegrityService,
        pool: WorkerPool,
        max_payload_size: int,
        timeout_seconds: Optional[float] = None
    ):
        self.transform_service = transform_service
        self.storage = storage
        self.integrity = integrity
        self.pool = pool
        self.max_payload_size = max_payload_size
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, config: Settings) -> "SigningService":
        return cls(
            transform_service=PdfTransformService(),
            storage=LocalStorageService(config.storage_root, config.uploads_url_prefix),
            integrity=IntegrityService(),
            pool=WorkerPool(max_workers=config.transform_workers),
            max_payload_size=config.max_body_size,
            timeout_seconds=config.transform_timeout_seconds,
        )

    def _decode_pdf(self, pdf_data: Optional[str]) -> bytes:
        if not pdf_data or not pdf_data.strip():
            raise MissingInputError("pdfData", "No PDF data provided")

        try:
            pdf_bytes = decode_base64_payload(pdf_data)
        except ValueError as e:
            raise ParseError(f"PDF data is not valid base64 ({e})") from e

        if len(pdf_bytes) > self.max_payload_size:
            raise PayloadTooLargeError(len(pdf_bytes), self.max_payload_size)
        return pdf_bytes

    @staticmethod
    def _apply_default_signature(fields: List[FieldPlacement], signature_image: Optional[str]) -> List[FieldPlacement]:
        """Give signature fields without a value the request-level signature image."""
        if not signature_image:
            return fields
        return [
            f.model_copy(update={"value": signature_image})
            if f.field_type is FieldType.SIGNATURE and not f.value else f
            for f in fields
        ]

    def sign(self, request: SignPdfRequest) -> SignResult:
        """
        Flatten the request's fields into its PDF and store the result.

        Raises:
            MissingInputError: If no PDF data was supplied
            ParseError: If the PDF can't be decoded or parsed
            PayloadTooLargeError: If the decoded PDF exceeds the upload cap
            TransformTimeoutError: If the transform exceeded its time budget
            StorageError: If the output could not be written
        """
        pdf_bytes = self._decode_pdf(request.pdf_data)
        fields = self._apply_default_signature(request.fields, request.signature_image)

        result = self.pool.run_with_timeout(
            self.transform_service.transform,
            pdf_bytes,
            fields,
            task_name="transform",
            timeout=self.timeout_seconds,
        )

        stored = self.storage.save_pdf(result.pdf_bytes)
        self.integrity.log_transform(pdf_bytes, result.pdf_bytes, output_name=stored.filename)

        logger.info(
            f"Signed PDF stored as {stored.filename}: {result.rendered_fields}/{len(fields)} field(s) rendered"
        )
        return SignResult(
            url=stored.url,
            field_errors=result.field_errors,
        )
