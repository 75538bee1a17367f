"""
Module: editor.layout.config

Purpose:
    Page geometry for the layout engine.
    Defines the page size in layout units and the single scale factor
    between physical millimetres and those units.

Key Classes:
    - PageGeometry: Immutable page geometry

Dependencies:
    - dataclasses (std)

Used By:
    - editor.layout.engine: compute_for_document
    - editor.output.renderer: Page painting and PDF sizing
"""

from __future__ import annotations

from dataclasses import dataclass


# A4 paper in millimetres
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
A4_RATIO = A4_WIDTH_MM / A4_HEIGHT_MM

# Largest on-screen page width
DEFAULT_PAGE_WIDTH_PX = 600


@dataclass(frozen=True)
class PageGeometry:
    """
    Page geometry in layout units (immutable).

    Attributes:
        width: Page width in layout units (pixels on screen)
        height: Page height in layout units
        px_per_mm: Layout units per physical millimetre

    Example:
        >>> geometry = PageGeometry.a4(210)
        >>> geometry.px_per_mm
        1.0
        >>> geometry.height
        297.0
    """

    width: float
    height: float
    px_per_mm: float = 1.0

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")
        if self.px_per_mm <= 0:
            raise ValueError(f"px_per_mm must be positive: {self.px_per_mm}")

    @classmethod
    def a4(cls, width: float = DEFAULT_PAGE_WIDTH_PX) -> PageGeometry:
        """A4 portrait page of the given width."""
        px_per_mm = width / A4_WIDTH_MM if width > 0 else 1.0
        return cls(width=width, height=width / A4_RATIO, px_per_mm=px_per_mm)

    @property
    def width_mm(self) -> float:
        """Physical page width."""
        return self.width / self.px_per_mm

    @property
    def height_mm(self) -> float:
        """Physical page height."""
        return self.height / self.px_per_mm

    def to_units(self, mm: float) -> float:
        """Convert millimetres to layout units."""
        return mm * self.px_per_mm
