"""
PDF Transform Service for flattening editor fields into page content.

Each page that has fields gets one ReportLab overlay, which is merged into the
page with pypdf. The source document is never modified on disk.
"""

import io
import logging
import zlib
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from pypdf import PdfReader, PdfWriter, Transformation
from pypdf.errors import PyPdfError
from reportlab.pdfgen import canvas

from docsign.schemas.field import FieldErrorItem, FieldPlacement
from docsign.services.field_renderer import FieldRenderer
from docsign.utils.coordinates import map_normalized_rect
from docsign.utils.exceptions import AssetDecodeError, DocSignError, PageRangeError, ParseError

logger = logging.getLogger(__name__)


# Errors pypdf raises from malformed objects while cloning, merging or writing
PDF_READ_ERRORS = (
    PyPdfError, ValueError, KeyError, TypeError, AttributeError, IndexError, NotImplementedError, zlib.error
)


@dataclass
class TransformResult:
    pdf_bytes: bytes
    page_count: int
    rendered_fields: int = 0
    field_errors: List[FieldErrorItem] = field(default_factory=list)


def _field_error(item: FieldPlacement, error: DocSignError) -> FieldErrorItem:
    return FieldErrorItem(field_id=item.id, page=item.page, code=error.code, message=error.message)


def _parse_failure(stage: str, error: Exception) -> ParseError:
    logger.warning(f"[Transform] PDF {stage} failed: {type(error).__name__}: {error}")
    return ParseError(str(error) or type(error).__name__)


class PdfTransformService:
    """Service for drawing placed fields into a PDF's static content."""

    def __init__(self, renderer: Optional[FieldRenderer] = None):
        self.renderer = renderer or FieldRenderer()

    def _load(self, pdf_bytes: bytes) -> Tuple[PdfWriter, int]:
        """Parse the input into a writable copy, raising ParseError for anything unreadable."""
        if not pdf_bytes:
            raise ParseError("document is empty")

        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))
            if reader.is_encrypted:
                raise ParseError("encrypted documents are not supported")
            page_count = len(reader.pages)
            if page_count == 0:
                raise ParseError("document has no pages")
            # pypdf reads objects lazily; cloning walks the whole object graph
            writer = PdfWriter(clone_from=reader)
        except ParseError:
            raise
        except Exception as e:
            raise _parse_failure("parse", e) from e

        return writer, page_count

    def _group_by_page(
        self,
        fields: Iterable[FieldPlacement],
        page_count: int
    ) -> Tuple[Dict[int, List[FieldPlacement]], List[FieldErrorItem]]:
        """Bucket fields by 0-based page index, reporting fields whose page doesn't exist."""
        by_page: Dict[int, List[FieldPlacement]] = defaultdict(list)
        errors: List[FieldErrorItem] = []

        for item in fields:
            page_index = item.page - 1
            if page_index < 0 or page_index >= page_count:
                error = PageRangeError(item.page, page_count, field_id=item.id)
                logger.warning(f"[Transform] Field {item.id}: {error.message}")
                errors.append(_field_error(item, error))
                continue
            by_page[page_index].append(item)

        return by_page, errors

    def _render_overlay(
        self,
        page_width: float,
        page_height: float,
        fields: List[FieldPlacement],
        errors: List[FieldErrorItem]
    ) -> Tuple[Optional[bytes], int]:
        """Draw ``fields`` on a blank page of the given size.

        Returns the overlay PDF (None when nothing was drawn) and the number
        of fields that produced output.
        """
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(page_width, page_height))
        drawn = 0

        for item in fields:
            rect = map_normalized_rect(page_width, page_height, item.x, item.y, item.w, item.h)
            try:
                if self.renderer.render(pdf, rect, item):
                    drawn += 1
            except AssetDecodeError as e:
                logger.warning(f"[Transform] Field {item.id}: {e.message}")
                errors.append(_field_error(item, e))

        if not drawn:
            return None, 0

        pdf.showPage()
        pdf.save()
        return buffer.getvalue(), drawn

    def transform(self, pdf_bytes: bytes, fields: Iterable[FieldPlacement]) -> TransformResult:
        """
        Flatten ``fields`` into the document and return the new bytes.

        Fields on missing pages and signatures whose image won't decode are
        reported in ``field_errors``; the remaining fields are still drawn.

        Raises:
            ParseError: If ``pdf_bytes`` is not a readable PDF
        """
        writer, page_count = self._load(pdf_bytes)
        by_page, errors = self._group_by_page(fields, page_count)
        rendered = 0

        for page_index in sorted(by_page):
            try:
                page = writer.pages[page_index]
                media_box = page.mediabox
                page_width = float(media_box.width)
                page_height = float(media_box.height)
                # Overlay is drawn from (0, 0); shift it onto media boxes with a non-zero origin.
                origin = Transformation().translate(float(media_box.left), float(media_box.bottom))
            except PDF_READ_ERRORS as e:
                raise _parse_failure(f"page {page_index + 1}", e) from e

            overlay_bytes, drawn = self._render_overlay(page_width, page_height, by_page[page_index], errors)
            if overlay_bytes is None:
                continue

            overlay_page = PdfReader(io.BytesIO(overlay_bytes)).pages[0]
            try:
                page.merge_transformed_page(overlay_page, origin)
            except PDF_READ_ERRORS as e:
                raise _parse_failure(f"page {page_index + 1}", e) from e
            rendered += drawn

        output = io.BytesIO()
        try:
            writer.write(output)
        except PDF_READ_ERRORS as e:
            raise _parse_failure("write", e) from e

        logger.info(
            f"[Transform] Rendered {rendered} field(s) across {len(by_page)} page(s), "
            f"{len(errors)} field error(s)"
        )
        return TransformResult(
            pdf_bytes=output.getvalue(),
            page_count=page_count,
            rendered_fields=rendered,
            field_errors=errors,
        )
