"""
Module: editor.layout.guides

Purpose:
    Trim ("cut") line geometry derived from a LayoutResult, for on-screen
    overlays and optional export.

Key Functions:
    - cut_lines(): Segments to draw as dashed trim lines

Rules:
    - Grid: one vertical line per column boundary and one horizontal
      line per row boundary, centred in the gap, spanning the page.
    - Adaptive: a rectangle CUT_BOX_PADDING outside each placement.

Used By:
    - editor.output.renderer: draw_cut_lines option
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from a4king.core.models import LayoutMode

from .models import LayoutResult

CUT_BOX_PADDING = 2.0


@dataclass(frozen=True)
class CutLine:
    """A straight trim line segment in page coordinates."""

    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def is_vertical(self) -> bool:
        return self.x0 == self.x1


def cut_lines(
    layout: LayoutResult,
    margin: float,
    page_width: float,
    page_height: float,
) -> List[CutLine]:
    """
    Return the trim lines for a layout.

    Args:
        layout: Engine output
        margin: Margin used for the layout (layout units)
        page_width: Page width, the extent of grid lines
        page_height: Page height, the extent of grid lines

    Returns:
        List of CutLine segments (empty for an empty layout)
    """
    if layout.is_empty:
        return []

    if layout.mode is LayoutMode.GRID:
        return _grid_lines(layout, margin, page_width, page_height)
    return _box_lines(layout)


def _grid_lines(
    layout: LayoutResult,
    margin: float,
    page_width: float,
    page_height: float,
) -> List[CutLine]:
    count = layout.placement_count
    cols = layout.column_count
    rows = math.ceil(count / cols)
    cell = layout.placements[0]
    gap = layout.gap

    lines = []
    for i in range(cols - 1):
        x = margin + (i + 1) * (cell.width + gap) - gap / 2
        lines.append(CutLine(x, 0.0, x, page_height))
    for i in range(rows - 1):
        y = margin + (i + 1) * (cell.height + gap) - gap / 2
        lines.append(CutLine(0.0, y, page_width, y))
    return lines


def _box_lines(layout: LayoutResult) -> List[CutLine]:
    lines = []
    pad = CUT_BOX_PADDING
    for p in layout.placements:
        left, top = p.x - pad, p.y - pad
        right, bottom = p.right + pad, p.bottom + pad
        lines.extend([
            CutLine(left, top, right, top),
            CutLine(right, top, right, bottom),
            CutLine(left, bottom, right, bottom),
            CutLine(left, top, left, bottom),
        ])
    return lines
