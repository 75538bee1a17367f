"""
Module: editor.output.renderer

Purpose:
    Render a frozen LayoutResult to a binary artifact: a PNG raster or a
    single-page PDF document. The renderer never sees or changes the
    document; it only consumes the layout snapshot.

Key Classes:
    - ExportFormat: raster (PNG) or document (PDF)
    - ExportRenderer: Abstract renderer interface
    - PageRenderer: Pillow raster + ReportLab document implementation
    - RenderError / EncodeError: Failures while drawing / encoding

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - editor.output.painting: Raster painting

Used By:
    - editor.controller: export_document
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from a4king.core.models import PageSettings, PaperPattern
from a4king.editor.layout import FitMode, LayoutResult, PageGeometry, Placement, cut_lines

from .painting import (
    DOT_RADIUS,
    PATTERN_ALPHA,
    PATTERN_SPACING,
    PaintError,
    as_pil_image,
    fit_image,
    paint_page,
    parse_color,
)

logger = logging.getLogger(__name__)

# Constants
DEFAULT_RASTER_SCALE = 3.0
DEFAULT_DPI = 300


class RenderError(Exception):
    """Page could not be drawn."""
    pass


class EncodeError(Exception):
    """Drawn page could not be encoded."""
    pass


class ExportFormat(Enum):
    """
    Export target.

    Attributes:
        RASTER: PNG image
        DOCUMENT: PDF document
    """

    RASTER = "raster"
    DOCUMENT = "document"

    @classmethod
    def _missing_(cls, value: object) -> "ExportFormat | None":
        aliases = {"png": cls.RASTER, "pdf": cls.DOCUMENT}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None

    @property
    def extension(self) -> str:
        """File extension without dot."""
        return "png" if self is ExportFormat.RASTER else "pdf"


class ExportRenderer(ABC):
    """
    Abstract page renderer.

    Implementations must treat the layout as read-only.
    """

    @abstractmethod
    def render(
        self,
        layout: LayoutResult,
        geometry: PageGeometry,
        target_format: Union[ExportFormat, str],
        *,
        settings: Optional[PageSettings] = None,
        draw_cut_lines: bool = False,
    ) -> bytes:
        """
        Render a layout.

        Args:
            layout: Frozen engine output
            geometry: Page geometry the layout was computed for
            target_format: ExportFormat or "png"/"pdf"
            settings: Cosmetic page settings (paper, pattern, border)
            draw_cut_lines: Draw trim lines on top

        Returns:
            Encoded artifact bytes

        Raises:
            RenderError: If drawing fails
            EncodeError: If encoding fails
        """


class PageRenderer(ExportRenderer):
    """
    Standard renderer.

    Raster pages are painted with Pillow at raster_scale pixels per
    layout unit. Documents are one ReportLab page of the physical page
    size with each image drawn at dpi resolution.

    Example:
        >>> data = PageRenderer().render(layout, PageGeometry.a4(600), "pdf")
        >>> data[:4]
        b'%PDF'
    """

    def __init__(
        self,
        *,
        raster_scale: float = DEFAULT_RASTER_SCALE,
        dpi: int = DEFAULT_DPI,
    ) -> None:
        if raster_scale <= 0:
            raise ValueError(f"raster_scale must be positive: {raster_scale}")
        if dpi <= 0:
            raise ValueError(f"dpi must be positive: {dpi}")
        self.raster_scale = raster_scale
        self.dpi = dpi

    def render(
        self,
        layout: LayoutResult,
        geometry: PageGeometry,
        target_format: Union[ExportFormat, str],
        *,
        settings: Optional[PageSettings] = None,
        draw_cut_lines: bool = False,
    ) -> bytes:
        target_format = ExportFormat(target_format)
        settings = settings or PageSettings()
        if geometry.width <= 0 or geometry.height <= 0:
            raise RenderError(f"Page has no area: {geometry.width}x{geometry.height}")

        if target_format is ExportFormat.RASTER:
            return self._render_raster(layout, geometry, settings, draw_cut_lines)
        return self._render_document(layout, geometry, settings, draw_cut_lines)

    # ─────────────────────────────────────────────────────────────────────────
    # Raster
    # ─────────────────────────────────────────────────────────────────────────

    def _render_raster(
        self,
        layout: LayoutResult,
        geometry: PageGeometry,
        settings: PageSettings,
        draw_cut_lines: bool,
    ) -> bytes:
        lines = _lines_for(layout, geometry, settings) if draw_cut_lines else []
        try:
            page = paint_page(layout, geometry, settings, scale=self.raster_scale, cut_lines=lines)
        except (PaintError, OSError, ValueError) as e:
            raise RenderError(f"Failed to paint page: {e}") from e

        buf = io.BytesIO()
        try:
            page.save(buf, format="PNG")
        except (OSError, ValueError) as e:
            raise EncodeError(f"Failed to encode PNG: {e}") from e

        logger.info(f"Rendered {layout.placement_count} placements to PNG {page.width}x{page.height}")
        return buf.getvalue()

    # ─────────────────────────────────────────────────────────────────────────
    # Document
    # ─────────────────────────────────────────────────────────────────────────

    def _render_document(
        self,
        layout: LayoutResult,
        geometry: PageGeometry,
        settings: PageSettings,
        draw_cut_lines: bool,
    ) -> bytes:
        pt_per_unit = mm / geometry.px_per_mm
        page_w_pt = geometry.width * pt_per_unit
        page_h_pt = geometry.height * pt_per_unit

        buf = io.BytesIO()
        c = canvas.Canvas(buf, pagesize=(page_w_pt, page_h_pt))

        try:
            _draw_paper(c, settings, page_w_pt, page_h_pt, pt_per_unit)
            border_pt = settings.border_size * mm
            for placement in layout.placements:
                self._draw_placement(c, placement, settings, pt_per_unit, page_h_pt, border_pt)
            if draw_cut_lines:
                _draw_cut_lines(c, _lines_for(layout, geometry, settings), pt_per_unit, page_h_pt)
        except (PaintError, OSError, ValueError) as e:
            raise RenderError(f"Failed to draw page: {e}") from e

        try:
            c.showPage()
            c.save()
        except (OSError, ValueError) as e:
            raise EncodeError(f"Failed to encode PDF: {e}") from e

        logger.info(
            f"Rendered {layout.placement_count} placements to PDF "
            f"{geometry.width_mm:.0f}x{geometry.height_mm:.0f}mm"
        )
        return buf.getvalue()

    def _draw_placement(
        self,
        c: canvas.Canvas,
        placement: Placement,
        settings: PageSettings,
        pt_per_unit: float,
        page_h_pt: float,
        border_pt: float,
    ) -> None:
        x_pt = placement.x * pt_per_unit
        w_pt = placement.width * pt_per_unit
        h_pt = placement.height * pt_per_unit
        y_pt = _transform_y(page_h_pt, placement.y * pt_per_unit, h_pt)
        if w_pt <= 0 or h_pt <= 0:
            return

        c.saveState()
        c.setFillColorRGB(1, 1, 1)
        if border_pt > 0:
            c.setFillColorRGB(*_rgb_fraction(settings.border_color))
        c.rect(x_pt, y_pt, w_pt, h_pt, stroke=0, fill=1)

        # Border sits inside the cell
        if border_pt > 0:
            x_pt, y_pt = x_pt + border_pt, y_pt + border_pt
            w_pt, h_pt = w_pt - 2 * border_pt, h_pt - 2 * border_pt
            if w_pt <= 0 or h_pt <= 0:
                c.restoreState()
                return
            c.setFillColorRGB(1, 1, 1)
            c.rect(x_pt, y_pt, w_pt, h_pt, stroke=0, fill=1)
        c.restoreState()

        content = as_pil_image(placement.image.content)
        px_w = max(1, round(_pt_to_px(w_pt, self.dpi)))
        px_h = max(1, round(_pt_to_px(h_pt, self.dpi)))
        fitted = fit_image(content, px_w, px_h, placement.fit)

        # Contained images are centred in the cell
        draw_w = _px_to_pt(fitted.width, self.dpi)
        draw_h = _px_to_pt(fitted.height, self.dpi)
        if placement.fit is FitMode.COVER:
            draw_w, draw_h = w_pt, h_pt
        dx = x_pt + (w_pt - draw_w) / 2
        dy = y_pt + (h_pt - draw_h) / 2

        c.drawImage(_pil_to_reader(fitted), dx, dy, width=draw_w, height=draw_h, mask="auto")


def _lines_for(layout: LayoutResult, geometry: PageGeometry, settings: PageSettings):
    return cut_lines(layout, geometry.to_units(settings.margin), geometry.width, geometry.height)


def _draw_paper(
    c: canvas.Canvas,
    settings: PageSettings,
    page_w_pt: float,
    page_h_pt: float,
    pt_per_unit: float,
) -> None:
    c.saveState()
    c.setFillColorRGB(*_rgb_fraction(settings.paper_color))
    c.rect(0, 0, page_w_pt, page_h_pt, stroke=0, fill=1)

    pattern = settings.paper_pattern
    if pattern is not PaperPattern.NONE:
        step = PATTERN_SPACING * pt_per_unit
        alpha = PATTERN_ALPHA / 255
        c.setStrokeColorRGB(0, 0, 0, alpha=alpha)
        c.setFillColorRGB(0, 0, 0, alpha=alpha)
        c.setLineWidth(pt_per_unit)

        rows = [page_h_pt - i * step for i in range(int(page_h_pt // step) + 1)]
        cols = [i * step for i in range(int(page_w_pt // step) + 1)]
        if pattern in (PaperPattern.LINES, PaperPattern.GRID):
            for y in rows:
                c.line(0, y, page_w_pt, y)
        if pattern is PaperPattern.GRID:
            for x in cols:
                c.line(x, 0, x, page_h_pt)
        if pattern is PaperPattern.DOTS:
            r = DOT_RADIUS * pt_per_unit
            for y in rows:
                for x in cols:
                    c.circle(x, y, r, stroke=0, fill=1)
    c.restoreState()


def _draw_cut_lines(c: canvas.Canvas, lines, pt_per_unit: float, page_h_pt: float) -> None:
    c.saveState()
    c.setStrokeColorRGB(0.5, 0.5, 0.5, alpha=0.5)
    c.setDash(6 * pt_per_unit, 6 * pt_per_unit)
    for line in lines:
        c.line(
            line.x0 * pt_per_unit,
            page_h_pt - line.y0 * pt_per_unit,
            line.x1 * pt_per_unit,
            page_h_pt - line.y1 * pt_per_unit,
        )
    c.restoreState()


def _rgb_fraction(color: str) -> tuple[float, float, float]:
    """PIL colour string to ReportLab 0..1 RGB."""
    r, g, b = parse_color(color)
    return r / 255, g / 255, b / 255


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _px_to_pt(px: float, dpi: int = DEFAULT_DPI) -> float:
    """Convert pixels to PDF points (1/72 inch)."""
    return px * 72.0 / dpi


def _pt_to_px(pt: float, dpi: int = DEFAULT_DPI) -> float:
    """Convert PDF points to pixels."""
    return pt * dpi / 72.0


def _transform_y(page_height_pt: float, y_pt_top: float, height_pt: float) -> float:
    """
    Convert a top-down Y coordinate to bottom-up PDF Y.

    Args:
        page_height_pt: Page height in points
        y_pt_top: Y position from top in points
        height_pt: Height of element in points

    Returns:
        Y position of the element's bottom edge from the page bottom
    """
    return page_height_pt - y_pt_top - height_pt
