"""
Module: editor.layout.adaptive

Purpose:
    Column packing that uses the page height as efficiently as possible,
    scaling images down only as much as needed.

Key Functions:
    - pack_columns(): Greedy shortest-column packing for one column count
    - choose_packing(): Search column counts and keep the best scale

Key Classes:
    - ColumnPacking: Unscaled packing for one column count
    - AdaptivePackingStrategy: Applies the winning packing to the page

Algorithm:
    For c in 1..min(N, max_columns):
    1. colW = (content_width - (c - 1) * gap) / c; skip if colW < min width
    2. Walk images in order; each goes to the currently shortest column
       (lowest index wins ties) at height colW * h / w
    3. natural height = tallest column - one trailing gap
    4. scale = min(1, content_height / natural height)
    Keep the c with the strictly greatest scale (first found wins ties),
    scale column width, gap and heights uniformly and centre the block.

    The shortest-column rule is greedy and order preserving, not an
    optimal packing.

Used By:
    - editor.layout.engine: Strategy dispatch
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from a4king.core.models import ImageEntity, LayoutMode

from ..config import DEFAULT_MAX_COLUMNS, DEFAULT_MIN_COLUMN_WIDTH
from .models import FitMode, LayoutResult, Placement
from .strategy import LayoutStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnSlot:
    """An image assigned to a column, before scaling."""

    image: ImageEntity
    column: int
    offset: float  # y relative to the column top
    height: float


@dataclass(frozen=True)
class ColumnPacking:
    """
    Unscaled packing of images into a fixed number of columns.

    Attributes:
        columns: Column count
        column_width: Unscaled column width
        slots: One ColumnSlot per image, input order
        natural_height: Tallest column without its trailing gap
        scale: Factor that fits natural_height into the content height
    """

    columns: int
    column_width: float
    slots: tuple[ColumnSlot, ...]
    natural_height: float
    scale: float


def pack_columns(
    images: Sequence[ImageEntity],
    columns: int,
    content_width: float,
    content_height: float,
    gap: float,
) -> ColumnPacking:
    """
    Pack images into a fixed number of columns, shortest column first.

    Args:
        images: Images in traversal order
        columns: Column count (>= 1)
        content_width: Width inside the margins
        content_height: Height inside the margins
        gap: Spacing between columns and between stacked images

    Returns:
        ColumnPacking with the scale needed to fit the content height
    """
    column_width = (content_width - (columns - 1) * gap) / columns
    heights: List[float] = [0.0] * columns
    slots: List[ColumnSlot] = []

    for img in images:
        h = column_width * (img.height / img.width)
        shortest = min(heights)
        col = heights.index(shortest)
        slots.append(ColumnSlot(image=img, column=col, offset=shortest, height=h))
        heights[col] += h + gap

    natural_height = max(heights) - gap
    scale = content_height / natural_height if natural_height > content_height else 1.0

    return ColumnPacking(
        columns=columns,
        column_width=column_width,
        slots=tuple(slots),
        natural_height=natural_height,
        scale=scale,
    )


def choose_packing(
    images: Sequence[ImageEntity],
    content_width: float,
    content_height: float,
    gap: float,
    *,
    max_columns: int = DEFAULT_MAX_COLUMNS,
    min_column_width: float = DEFAULT_MIN_COLUMN_WIDTH,
) -> Optional[ColumnPacking]:
    """
    Evaluate every candidate column count and return the best packing.

    Returns:
        The packing with the greatest scale, or None when no column
        count leaves a column at least min_column_width wide
    """
    best: Optional[ColumnPacking] = None

    for columns in range(1, min(len(images), max_columns) + 1):
        column_width = (content_width - (columns - 1) * gap) / columns
        if column_width < min_column_width:
            logger.debug(f"Skipping {columns} columns: width {column_width:.2f} below minimum")
            continue

        packing = pack_columns(images, columns, content_width, content_height, gap)
        logger.debug(
            f"{columns} columns: width {column_width:.2f}, "
            f"natural height {packing.natural_height:.2f}, scale {packing.scale:.4f}"
        )
        if best is None or packing.scale > best.scale:
            best = packing

    return best


class AdaptivePackingStrategy(LayoutStrategy):
    """Best-scale column packing, cover fit."""

    mode = LayoutMode.ADAPTIVE

    def __init__(
        self,
        *,
        max_columns: int = DEFAULT_MAX_COLUMNS,
        min_column_width: float = DEFAULT_MIN_COLUMN_WIDTH,
    ) -> None:
        self.max_columns = max_columns
        self.min_column_width = min_column_width

    def arrange(
        self,
        images: Sequence[ImageEntity],
        content_width: float,
        content_height: float,
        gap: float,
        margin: float,
    ) -> LayoutResult:
        packing = choose_packing(
            images,
            content_width,
            content_height,
            gap,
            max_columns=self.max_columns,
            min_column_width=self.min_column_width,
        )
        if packing is None:
            logger.debug("No usable column count for this page width")
            return LayoutResult.empty(LayoutMode.ADAPTIVE, gap)

        scale = packing.scale
        columns = packing.columns
        final_gap = gap * scale
        final_col_w = packing.column_width * scale

        # Centre horizontally when scaled down
        used_width = columns * final_col_w + (columns - 1) * final_gap
        offset_x = (content_width - used_width) / 2

        placements = tuple(
            Placement(
                image=slot.image,
                x=margin + offset_x + slot.column * (final_col_w + final_gap),
                y=margin + slot.offset * scale,
                width=final_col_w,
                height=slot.height * scale,
                fit=FitMode.COVER,
                column=slot.column,
            )
            for slot in packing.slots
        )

        return LayoutResult(
            mode=LayoutMode.ADAPTIVE,
            placements=placements,
            gap=final_gap,
            scale=scale,
            column_width=final_col_w,
            column_count=columns,
        )
