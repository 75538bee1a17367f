"""
Module: editor.output.painting

Purpose:
    Pillow painting of a laid-out page: paper, pattern, framed images
    fitted with contain/cover semantics, optional cut lines.

Key Functions:
    - fit_image(): Scale content into a cell (contain or cover)
    - paint_page(): Full raster page for a LayoutResult

Dependencies:
    - PIL: Image, ImageDraw, ImageOps, ImageColor

Used By:
    - editor.output.renderer: Raster export and PDF image preparation
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageOps

from a4king.core.models import PageSettings, PaperPattern
from a4king.editor.layout import CutLine, FitMode, LayoutResult, PageGeometry, Placement

logger = logging.getLogger(__name__)

# Pattern look, in layout units (matches the on-screen page)
PATTERN_SPACING = 15.0
PATTERN_ALPHA = 37  # 0x25
DOT_RADIUS = 1.0

CELL_BACKGROUND = "white"
CUT_LINE_COLOR = (128, 128, 128, 128)
CUT_LINE_DASH = 6.0


class PaintError(Exception):
    """Content cannot be painted."""
    pass


def parse_color(value: str) -> Tuple[int, int, int]:
    """
    Parse any PIL colour string to RGB.

    Raises:
        PaintError: If the colour is not recognised
    """
    try:
        return ImageColor.getrgb(value)[:3]
    except ValueError as e:
        raise PaintError(f"Unknown colour: {value!r}") from e


def as_pil_image(content: object) -> Image.Image:
    """Return content as a PIL image or raise PaintError."""
    if not isinstance(content, Image.Image):
        raise PaintError(f"Content is not a PIL image: {type(content).__name__}")
    return content


def fit_image(content: Image.Image, width: int, height: int, fit: FitMode) -> Image.Image:
    """
    Scale an image into a width x height cell.

    Args:
        content: Source image
        width: Cell width in pixels (>= 1)
        height: Cell height in pixels (>= 1)
        fit: CONTAIN keeps the whole image, COVER fills and crops

    Returns:
        RGBA image; exactly width x height for COVER, at most that for CONTAIN
    """
    img = content.convert("RGBA")
    if fit is FitMode.COVER:
        return ImageOps.fit(img, (width, height), method=Image.Resampling.LANCZOS, centering=(0.5, 0.5))
    # Each side is kept >= 1 px so extreme aspect ratios still draw
    ratio = min(width / img.width, height / img.height)
    size = (
        max(1, min(width, round(img.width * ratio))),
        max(1, min(height, round(img.height * ratio))),
    )
    return img.resize(size, resample=Image.Resampling.LANCZOS)


def paint_page(
    layout: LayoutResult,
    geometry: PageGeometry,
    settings: Optional[PageSettings] = None,
    *,
    scale: float = 1.0,
    cut_lines: Iterable[CutLine] = (),
) -> Image.Image:
    """
    Paint a page as an RGB image.

    Args:
        layout: Frozen engine output
        geometry: Page size in layout units
        settings: Cosmetic settings (default PageSettings())
        scale: Output pixels per layout unit
        cut_lines: Trim lines to draw on top

    Returns:
        RGB image of size (geometry.width * scale, geometry.height * scale)

    Raises:
        PaintError: If a colour or a placement's content is unusable
    """
    settings = settings or PageSettings()
    size = (max(1, round(geometry.width * scale)), max(1, round(geometry.height * scale)))

    page = Image.new("RGBA", size, parse_color(settings.paper_color) + (255,))
    _paint_pattern(page, settings.paper_pattern, scale)

    border_px = settings.border_size * geometry.px_per_mm * scale
    border_rgb = parse_color(settings.border_color) if border_px > 0 else None

    for placement in layout.placements:
        _paint_placement(page, placement, scale, border_px, border_rgb)

    lines = list(cut_lines)
    if lines:
        _paint_cut_lines(page, lines, scale)

    return page.convert("RGB")


def _paint_pattern(page: Image.Image, pattern: PaperPattern, scale: float) -> None:
    if pattern is PaperPattern.NONE:
        return

    overlay = Image.new("RGBA", page.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    ink = (0, 0, 0, PATTERN_ALPHA)
    step = PATTERN_SPACING * scale
    line_w = max(1, round(scale))
    width, height = page.size

    if pattern in (PaperPattern.LINES, PaperPattern.GRID):
        y = 0.0
        while y < height:
            draw.line([(0, y), (width, y)], fill=ink, width=line_w)
            y += step
    if pattern is PaperPattern.GRID:
        x = 0.0
        while x < width:
            draw.line([(x, 0), (x, height)], fill=ink, width=line_w)
            x += step
    if pattern is PaperPattern.DOTS:
        r = DOT_RADIUS * scale
        y = 0.0
        while y < height:
            x = 0.0
            while x < width:
                draw.ellipse([x - r, y - r, x + r, y + r], fill=ink)
                x += step
            y += step

    page.alpha_composite(overlay)


def _paint_placement(
    page: Image.Image,
    placement: Placement,
    scale: float,
    border_px: float,
    border_rgb: Optional[Tuple[int, int, int]],
) -> None:
    left = round(placement.x * scale)
    top = round(placement.y * scale)
    right = round(placement.right * scale)
    bottom = round(placement.bottom * scale)
    if right - left < 1 or bottom - top < 1:
        logger.debug(f"Skipping zero-size placement for {placement.image_id}")
        return

    draw = ImageDraw.Draw(page)
    draw.rectangle([left, top, right - 1, bottom - 1], fill=CELL_BACKGROUND)

    # Border sits inside the cell
    inset = round(border_px)
    if border_rgb is not None and inset > 0:
        draw.rectangle([left, top, right - 1, bottom - 1], fill=border_rgb)
        left, top, right, bottom = left + inset, top + inset, right - inset, bottom - inset
        if right - left < 1 or bottom - top < 1:
            return
        draw.rectangle([left, top, right - 1, bottom - 1], fill=CELL_BACKGROUND)

    cell_w, cell_h = right - left, bottom - top
    fitted = fit_image(as_pil_image(placement.image.content), cell_w, cell_h, placement.fit)
    dx = left + (cell_w - fitted.width) // 2
    dy = top + (cell_h - fitted.height) // 2
    page.alpha_composite(fitted, dest=(dx, dy))


def _paint_cut_lines(page: Image.Image, lines: list[CutLine], scale: float) -> None:
    overlay = Image.new("RGBA", page.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    dash = CUT_LINE_DASH * scale
    width = max(1, round(scale))

    for line in lines:
        x0, y0, x1, y1 = (v * scale for v in (line.x0, line.y0, line.x1, line.y1))
        length = ((x1 - x0) ** 2 + (y1 - y0) ** 2) ** 0.5
        if length == 0:
            continue
        ux, uy = (x1 - x0) / length, (y1 - y0) / length
        pos = 0.0
        while pos < length:
            end = min(pos + dash, length)
            draw.line(
                [(x0 + ux * pos, y0 + uy * pos), (x0 + ux * end, y0 + uy * end)],
                fill=CUT_LINE_COLOR,
                width=width,
            )
            pos += 2 * dash

    page.alpha_composite(overlay)
