"""Coordinate helpers for placing editor fields on PDF pages.

The editor stores field rectangles as fractions of the page size with the
origin at the top-left corner. PDF content streams use points with the origin
at the bottom-left corner, so the vertical axis is flipped here.
"""

from typing import NamedTuple, Union

Number = Union[int, float]


class AbsoluteRect(NamedTuple):
    """A rectangle in PDF page space (points, bottom-left origin)."""
    x: float
    y: float
    width: float
    height: float


def map_normalized_rect(
    page_width: Number,
    page_height: Number,
    x: Number,
    y: Number,
    w: Number,
    h: Number
) -> AbsoluteRect:
    """Map a normalized, top-anchored rect onto a page of the given size.

    No clamping is applied: degenerate or out-of-range inputs produce
    whatever numbers the arithmetic gives, and callers decide how to draw them.

    Example:
        A field at y=0 with h=0.1 on an 800pt tall page lands at y=720,
        i.e. its bottom edge sits 80pt below the top of the page.
    """
    abs_x = x * page_width
    abs_w = w * page_width
    abs_h = h * page_height
    abs_y = page_height - y * page_height - abs_h
    return AbsoluteRect(abs_x, abs_y, abs_w, abs_h)


def clamp_rect(rect: AbsoluteRect) -> AbsoluteRect:
    """Return ``rect`` with negative width/height clamped to zero."""
    return AbsoluteRect(rect.x, rect.y, max(rect.width, 0.0), max(rect.height, 0.0))


def fit_and_center(rect: AbsoluteRect, content_width: Number, content_height: Number) -> AbsoluteRect:
    """Scale content uniformly to fit inside ``rect`` and center it there."""
    if content_width <= 0 or content_height <= 0:
        return AbsoluteRect(rect.x, rect.y, 0.0, 0.0)

    scale = min(rect.width / content_width, rect.height / content_height)
    draw_w = content_width * scale
    draw_h = content_height * scale
    return AbsoluteRect(
        rect.x + (rect.width - draw_w) / 2,
        rect.y + (rect.height - draw_h) / 2,
        draw_w,
        draw_h,
    )
