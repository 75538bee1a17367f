"""
Module: editor.layout.engine

Purpose:
    Public entry point of the layout engine. Validates geometry, then
    dispatches to the strategy for the requested mode.

Key Functions:
    - compute(): Placements for images on a page of a given size
    - compute_for_document(): Same, for a DocumentState and PageGeometry

Guarantees:
    Pure and deterministic; degenerate input (empty list, margins that
    swallow the page, a page too narrow for any column) yields an empty
    result with scale 1 and the requested gap, never an exception.

Dependencies:
    - editor.layout.grid: GridStrategy
    - editor.layout.adaptive: AdaptivePackingStrategy

Used By:
    - editor.controller: export_document
    - Rendering consumers (recompute on every geometry/config change)
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence, Union

from a4king.core.models import DocumentState, ImageEntity, LayoutMode

from .adaptive import AdaptivePackingStrategy
from .config import PageGeometry
from .grid import GridStrategy
from .models import LayoutResult
from .strategy import LayoutStrategy

STRATEGIES: Dict[LayoutMode, LayoutStrategy] = {
    LayoutMode.GRID: GridStrategy(),
    LayoutMode.ADAPTIVE: AdaptivePackingStrategy(),
}


def compute(
    images: Sequence[ImageEntity],
    width: float,
    height: float,
    mode: Union[LayoutMode, str],
    gap: float,
    margin: float,
    *,
    strategies: Optional[Mapping[LayoutMode, LayoutStrategy]] = None,
) -> LayoutResult:
    """
    Lay out images on a page.

    Args:
        images: Placed images in traversal order
        width: Page width (content width is width - 2 * margin)
        height: Page height
        mode: LayoutMode or its value ("grid", "adaptive", "max")
        gap: Spacing between items
        margin: Uniform inset from the page edge
        strategies: Strategy per mode (default STRATEGIES)

    Returns:
        LayoutResult in page coordinates

    Raises:
        ValueError: If mode is not a known LayoutMode value

    Example:
        >>> result = compute(images, 600, 800, "adaptive", gap=0, margin=0)
        >>> result.scale
        1.0
    """
    mode = LayoutMode(mode)
    content_width = width - 2 * margin
    content_height = height - 2 * margin

    if content_width <= 0 or content_height <= 0 or not images:
        return LayoutResult.empty(mode, gap)

    strategy = (strategies or STRATEGIES)[mode]
    return strategy.arrange(images, content_width, content_height, gap, margin)


def compute_for_document(
    document: DocumentState,
    geometry: PageGeometry,
    *,
    strategies: Optional[Mapping[LayoutMode, LayoutStrategy]] = None,
) -> LayoutResult:
    """
    Lay out a document's placed images on a page.

    Margin and gap are converted from millimetres with geometry.px_per_mm.

    Args:
        document: Snapshot to lay out
        geometry: Page size and unit scale
        strategies: Strategy per mode (default STRATEGIES)

    Returns:
        LayoutResult in layout units
    """
    settings = document.settings
    return compute(
        document.placed_images(),
        geometry.width,
        geometry.height,
        settings.mode,
        geometry.to_units(settings.gap),
        geometry.to_units(settings.margin),
        strategies=strategies,
    )
