"""
Module: editor.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses representing placements and the engine output.

Key Classes:
    - FitMode: How an image fills its cell
    - Placement: An image positioned on the page
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)
    - core.models: ImageEntity, LayoutMode

Used By:
    - editor.layout.grid / adaptive: Create Placements
    - editor.output.renderer: Consumes LayoutResult
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from a4king.core.models import ImageEntity, LayoutMode


class FitMode(Enum):
    """
    How an image is scaled into its cell.

    Attributes:
        CONTAIN: Fit entirely inside, preserve aspect, may letterbox
        COVER: Fill the cell, preserve aspect, crop overflow
    """

    CONTAIN = "contain"
    COVER = "cover"


@dataclass(frozen=True)
class Placement:
    """
    An image positioned on the page.

    Coordinates are page coordinates (margin included), y grows down.

    Attributes:
        image: The placed ImageEntity
        x: Left edge
        y: Top edge
        width: Cell width
        height: Cell height
        fit: How the image fills the cell
        column: Column index (for separators and cut lines)

    Example:
        >>> placement = Placement(img, x=10, y=20, width=100, height=50,
        ...                       fit=FitMode.COVER, column=0)
        >>> placement.bottom
        70
    """

    image: ImageEntity
    x: float
    y: float
    width: float
    height: float
    fit: FitMode
    column: int

    @property
    def image_id(self) -> str:
        """Id of the placed image."""
        return self.image.id

    @property
    def right(self) -> float:
        """Right X coordinate (x + width)."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom Y coordinate (y + height)."""
        return self.y + self.height


@dataclass(frozen=True)
class LayoutResult:
    """
    Layout engine output (immutable, never stored in history).

    Attributes:
        mode: Strategy that produced the result
        placements: One Placement per laid-out image, in input order
        gap: Effective gap (scaled in adaptive mode)
        scale: Uniform scale applied (1.0 unless adaptive scaled down)
        column_width: Effective column width (adaptive mode only)
        column_count: Number of columns used (0 when empty)

    Example:
        >>> result = compute(images, 600, 800, LayoutMode.GRID, gap=0, margin=0)
        >>> result.placement_count
        4
    """

    mode: LayoutMode
    placements: tuple[Placement, ...]
    gap: float
    scale: float = 1.0
    column_width: Optional[float] = None
    column_count: int = 0

    @classmethod
    def empty(cls, mode: LayoutMode, gap: float) -> LayoutResult:
        """Degenerate result: no placements, scale 1, gap unchanged."""
        return cls(mode=mode, placements=(), gap=gap, scale=1.0)

    @property
    def is_empty(self) -> bool:
        """Check if nothing was placed."""
        return len(self.placements) == 0

    @property
    def placement_count(self) -> int:
        """Number of placements."""
        return len(self.placements)

    def placement_for(self, image_id: str) -> Optional[Placement]:
        """Return the placement of an image, or None."""
        for placement in self.placements:
            if placement.image.id == image_id:
                return placement
        return None
