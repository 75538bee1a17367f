"""
Module: editor.layout.grid

Purpose:
    Uniform grid layout. N images fill a near-square grid in row-major
    order; every image is contained (letterboxed) in its cell.

Algorithm:
    cols = ceil(sqrt(N)), rows = ceil(N / cols)
    cell = (content - (count - 1) * gap) / count, per axis
    image i -> row i // cols, column i % cols

    Gap and margin are never rescaled and the scale stays 1, even when
    the cells come out degenerate.

Used By:
    - editor.layout.engine: Strategy dispatch
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

from a4king.core.models import ImageEntity, LayoutMode

from .models import FitMode, LayoutResult, Placement
from .strategy import LayoutStrategy


def grid_shape(count: int) -> Tuple[int, int]:
    """
    Return (cols, rows) for a grid of count items.

    Example:
        >>> grid_shape(5)
        (3, 2)
    """
    if count <= 0:
        return 0, 0
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    return cols, rows


class GridStrategy(LayoutStrategy):
    """Row-major grid, contain fit."""

    mode = LayoutMode.GRID

    def arrange(
        self,
        images: Sequence[ImageEntity],
        content_width: float,
        content_height: float,
        gap: float,
        margin: float,
    ) -> LayoutResult:
        cols, rows = grid_shape(len(images))
        cell_w = (content_width - (cols - 1) * gap) / cols
        cell_h = (content_height - (rows - 1) * gap) / rows

        placements = []
        for i, img in enumerate(images):
            row, col = divmod(i, cols)
            placements.append(Placement(
                image=img,
                x=margin + col * (cell_w + gap),
                y=margin + row * (cell_h + gap),
                width=cell_w,
                height=cell_h,
                fit=FitMode.CONTAIN,
                column=col,
            ))

        return LayoutResult(
            mode=LayoutMode.GRID,
            placements=tuple(placements),
            gap=gap,
            scale=1.0,
            column_count=cols,
        )
