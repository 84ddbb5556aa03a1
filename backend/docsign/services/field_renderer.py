"""
Field Renderer for drawing editor fields onto a ReportLab canvas.
"""

import io
import logging
from datetime import date
from typing import Callable, Dict, Optional

from PIL import Image
from reportlab.lib.colors import black
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from docsign.schemas.field import CHECKBOX_CHECKED, FieldPlacement, FieldType
from docsign.utils.coordinates import AbsoluteRect, clamp_rect, fit_and_center
from docsign.utils.exceptions import AssetDecodeError
from docsign.utils.pdf_helpers import decode_base64_payload, format_date_value

logger = logging.getLogger(__name__)

FONT_NAME = "Helvetica"
TEXT_SIZE_RATIO = 0.6
TEXT_BASELINE_RATIO = 0.3


class FieldRenderer:
    """Draws fields onto an overlay canvas.

    Every ``_draw_*`` method returns True when it issued drawing operations,
    so callers can skip merging overlays that stayed empty.
    """

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self._today = today or date.today
        self._handlers: Dict[FieldType, Callable[[canvas.Canvas, AbsoluteRect, FieldPlacement], bool]] = {
            FieldType.TEXT: self._draw_text,
            FieldType.DATE: self._draw_date,
            FieldType.CHECKBOX: self._draw_checkbox,
            FieldType.SIGNATURE: self._draw_signature,
        }

    def render(self, pdf: canvas.Canvas, rect: AbsoluteRect, field: FieldPlacement) -> bool:
        """Draw ``field`` at the already-mapped ``rect``.

        Unknown field types and fields without a usable value draw nothing.

        Raises:
            AssetDecodeError: If a signature image cannot be decoded
        """
        handler = self._handlers.get(field.field_type)
        if handler is None:
            logger.debug(f"Skipping field {field.id} with unknown type {field.type!r}")
            return False

        rect = clamp_rect(rect)
        if rect.height <= 0:
            return False

        return handler(pdf, rect, field)

    def _draw_line_of_text(
        self,
        pdf: canvas.Canvas,
        rect: AbsoluteRect,
        text: str,
        field_id: Optional[str] = None
    ) -> bool:
        missing = unsupported_characters(text)
        if missing:
            logger.warning(
                f"Field {field_id}: {FONT_NAME} has no glyph for {missing!r}; "
                f"those characters render as placeholder boxes"
            )

        # Single line, no wrapping; overflow is left to the viewer's clipping.
        pdf.setFillColor(black)
        pdf.setFont(FONT_NAME, rect.height * TEXT_SIZE_RATIO)
        pdf.drawString(rect.x, rect.y + rect.height * TEXT_BASELINE_RATIO, text)
        return True

    def _draw_text(self, pdf: canvas.Canvas, rect: AbsoluteRect, field: FieldPlacement) -> bool:
        if not field.value:
            return False
        return self._draw_line_of_text(pdf, rect, field.value, field.id)

    def _draw_date(self, pdf: canvas.Canvas, rect: AbsoluteRect, field: FieldPlacement) -> bool:
        return self._draw_line_of_text(pdf, rect, format_date_value(field.value, today=self._today()), field.id)

    def _draw_checkbox(self, pdf: canvas.Canvas, rect: AbsoluteRect, field: FieldPlacement) -> bool:
        # Unchecked boxes are omitted entirely, outline included.
        if field.value != CHECKBOX_CHECKED:
            return False

        x, y, side = rect.x, rect.y, rect.height
        pad = side * 0.2
        pdf.setStrokeColor(black)

        pdf.setLineWidth(1)
        pdf.rect(x, y, side, side, stroke=1, fill=0)

        pdf.setLineWidth(2)
        pdf.line(x + pad, y + side * 0.5, x + side * 0.4, y + pad)
        pdf.line(x + side * 0.4, y + pad, x + side - pad, y + side - pad)
        return True

    def _draw_signature(self, pdf: canvas.Canvas, rect: AbsoluteRect, field: FieldPlacement) -> bool:
        if not field.value:
            return False

        image = load_signature_image(field.value, field_id=field.id)
        img_w, img_h = image.size
        target = fit_and_center(rect, img_w, img_h)
        if target.width <= 0 or target.height <= 0:
            return False

        pdf.drawImage(
            ImageReader(image),
            target.x,
            target.y,
            width=target.width,
            height=target.height,
            mask="auto",
        )
        return True


def load_signature_image(value: str, field_id: Optional[str] = None) -> Image.Image:
    """Decode a data-URL or bare base64 raster image into a loaded PIL image."""
    try:
        raw = decode_base64_payload(value)
    except ValueError as e:
        raise AssetDecodeError(str(e), field_id=field_id) from e

    try:
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise AssetDecodeError(str(e), field_id=field_id) from e

    # ReportLab handles RGB, RGBA and L directly; palette and other modes are normalized.
    if image.mode not in ("RGB", "RGBA", "L"):
        image = image.convert("RGBA")
    return image


def unsupported_characters(text: str, font_name: str = FONT_NAME) -> str:
    """Characters of ``text`` that neither the font nor its substitution fonts can encode.

    ReportLab draws these as placeholder boxes instead of failing.
    """
    font = pdfmetrics.getFont(font_name)
    fonts = [font] + list(getattr(font, "substitutionFonts", None) or [])

    missing = []
    for ch in dict.fromkeys(text):
        for candidate in fonts:
            try:
                ch.encode(candidate.encName)
                break
            except UnicodeEncodeError:
                continue
            except LookupError:
                # Unknown codec: can't tell, assume it renders
                break
        else:
            missing.append(ch)
    return "".join(missing)
