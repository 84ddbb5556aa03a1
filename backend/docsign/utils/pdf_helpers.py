"""PDF payload helpers for base64 decoding and date formatting.

Shared by the HTTP boundary (decoding the uploaded PDF) and the field
renderer (decoding signature images, formatting date fields).
"""

import base64
import binascii
import locale
import logging
from datetime import date, datetime
from typing import Optional

logger = logging.getLogger(__name__)


def strip_data_url(payload: str) -> str:
    """Drop a ``data:<mime>;base64,`` header if present."""
    value = payload.strip()
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value


def decode_base64_payload(payload: str) -> bytes:
    """Decode a base64 string, optionally prefixed with a data-URL header.

    Whitespace is ignored and missing padding is restored. URL-safe
    alphabets are accepted as a fallback.

    Args:
        payload: The encoded string

    Returns:
        The decoded bytes

    Raises:
        ValueError: If the payload is empty or is not valid base64
    """
    if not isinstance(payload, str):
        raise ValueError("payload must be a string")

    value = "".join(strip_data_url(payload).split())
    if not value:
        raise ValueError("payload is empty")

    pad = len(value) % 4
    if pad:
        value += "=" * (4 - pad)

    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        try:
            return base64.urlsafe_b64decode(value)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"invalid base64 data: {e}") from e


def parse_date_value(value: Optional[str]) -> Optional[date]:
    """Parse an ISO date or datetime string; returns None if it doesn't parse."""
    if not value or not str(value).strip():
        return None

    raw = str(value).strip()
    try:
        if "T" in raw or " " in raw:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        return date.fromisoformat(raw[:10])
    except (ValueError, TypeError):
        return None


def format_date_value(value: Optional[str], today: Optional[date] = None) -> str:
    """Format a date field value in the locale's short date format.

    Falls back to ``today`` (or the current date) when the value is absent
    or unparsable.
    """
    parsed = parse_date_value(value)
    if parsed is None:
        parsed = today or date.today()
    return parsed.strftime("%x")


def use_system_date_locale() -> Optional[str]:
    """Switch LC_TIME to the host's configured locale so ``%x`` dates follow it.

    Python starts in the C locale, which would always format dates as
    MM/DD/YY. Returns the active LC_TIME locale, or None when the host's
    locale isn't installed (dates then stay in the C format).
    """
    try:
        return locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        logger.warning(f"Host locale unavailable for date formatting, using C locale: {e}")
        return None
