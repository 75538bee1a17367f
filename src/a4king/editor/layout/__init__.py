"""
Module: editor.layout

Purpose:
    Page layout engine. Maps a document's placed images and the page
    geometry to concrete placements.

Key Functions:
    - compute(): Main entry point for layout
    - compute_for_document(): Layout for a DocumentState
    - cut_lines(): Trim line geometry for a layout

Key Classes:
    - PageGeometry: Page size and unit scale
    - Placement: Image positioned on the page
    - LayoutResult: Engine output
    - GridStrategy / AdaptivePackingStrategy: Layout strategies

Dependencies:
    - a4king.core.models: ImageEntity, DocumentState, LayoutMode

Used By:
    - editor.controller: Export pipeline
    - editor.output: Rendering
"""

from .config import PageGeometry, A4_RATIO, A4_WIDTH_MM, A4_HEIGHT_MM
from .models import FitMode, Placement, LayoutResult
from .strategy import LayoutStrategy
from .grid import GridStrategy, grid_shape
from .adaptive import AdaptivePackingStrategy, ColumnPacking, pack_columns, choose_packing
from .engine import compute, compute_for_document
from .guides import CutLine, cut_lines

__all__ = [
    # Config
    "PageGeometry",
    "A4_RATIO",
    "A4_WIDTH_MM",
    "A4_HEIGHT_MM",
    # Models
    "FitMode",
    "Placement",
    "LayoutResult",
    # Strategies
    "LayoutStrategy",
    "GridStrategy",
    "grid_shape",
    "AdaptivePackingStrategy",
    "ColumnPacking",
    "pack_columns",
    "choose_packing",
    # Functions
    "compute",
    "compute_for_document",
    "CutLine",
    "cut_lines",
]
