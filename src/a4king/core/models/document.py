"""
Module: document

Purpose:
    Provides DocumentState - the ordered image collection plus the page
    configuration. A DocumentState is a complete snapshot: it is never
    mutated, every change builds a new one.

Key Classes:
    - LayoutMode: grid or adaptive packing
    - PaperPattern: Background pattern for the page
    - PageSettings: Margin, gap and cosmetic fields (immutable)
    - DocumentState: Images + settings (immutable)

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - editor.history.HistoryStack
    - editor.session.DocumentSession
    - editor.layout.engine.compute_for_document
    - editor.controller.export_document
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional

from .images import ImageEntity, ImageStatus


class LayoutMode(Enum):
    """
    How placed images are arranged on the page.

    Attributes:
        GRID: Uniform rows x columns, images contained in their cells
        ADAPTIVE: Column packing scaled to fit, images cover their cells
    """

    GRID = "grid"
    ADAPTIVE = "adaptive"

    @classmethod
    def _missing_(cls, value: object) -> "LayoutMode | None":
        # "max" was the original name of the adaptive mode
        if isinstance(value, str) and value.lower() == "max":
            return cls.ADAPTIVE
        return None


class PaperPattern(Enum):
    """Background pattern painted on the page."""

    NONE = "none"
    LINES = "lines"
    GRID = "grid"
    DOTS = "dots"


@dataclass(frozen=True)
class PageSettings:
    """
    Page configuration (immutable).

    Lengths are in millimetres on the physical page; the layout engine
    receives them converted by PageGeometry.px_per_mm.

    Attributes:
        mode: Layout strategy
        margin: Uniform inset from the page edge (mm, >= 0)
        gap: Spacing between items (mm, >= 0)
        border_size: Frame drawn inside each cell (mm, >= 0)
        border_color: Frame colour (any PIL colour string)
        paper_color: Page background colour
        paper_pattern: Page background pattern
        show_guides: Show margin guides on screen (never exported)
        show_cut_lines: Show trim lines on screen
    """

    mode: LayoutMode = LayoutMode.ADAPTIVE
    margin: float = 10.0
    gap: float = 2.0

    # Cosmetic - not consumed by the layout engine
    border_size: float = 0.0
    border_color: str = "white"
    paper_color: str = "#ffffff"
    paper_pattern: PaperPattern = PaperPattern.NONE
    show_guides: bool = True
    show_cut_lines: bool = False

    def __post_init__(self) -> None:
        """Validate and normalise on construction."""
        if not isinstance(self.mode, LayoutMode):
            object.__setattr__(self, "mode", LayoutMode(self.mode))
        if not isinstance(self.paper_pattern, PaperPattern):
            object.__setattr__(self, "paper_pattern", PaperPattern(self.paper_pattern))
        if self.margin < 0:
            raise ValueError(f"margin must be >= 0: {self.margin}")
        if self.gap < 0:
            raise ValueError(f"gap must be >= 0: {self.gap}")
        if self.border_size < 0:
            raise ValueError(f"border_size must be >= 0: {self.border_size}")


@dataclass(frozen=True)
class DocumentState:
    """
    One complete snapshot of the document (immutable).

    Attributes:
        images: Ordered images; order is traversal order and z-order
        settings: Page configuration

    Example:
        >>> doc = DocumentState()
        >>> doc.with_images([img]).image_count
        1
    """

    images: tuple[ImageEntity, ...] = ()
    settings: PageSettings = field(default_factory=PageSettings)

    def __post_init__(self) -> None:
        """Freeze the image sequence and check ids are unique."""
        if not isinstance(self.images, tuple):
            object.__setattr__(self, "images", tuple(self.images))
        ids = [img.id for img in self.images]
        if len(ids) != len(set(ids)):
            raise ValueError("image ids must be unique within a document")

    @property
    def image_count(self) -> int:
        """Number of images, held and placed."""
        return len(self.images)

    def placed_images(self) -> list[ImageEntity]:
        """Images on the page, in document order."""
        return [img for img in self.images if img.status is ImageStatus.PLACED]

    def held_images(self) -> list[ImageEntity]:
        """Images in the holding area, in document order."""
        return [img for img in self.images if img.status is ImageStatus.HELD]

    def find(self, image_id: str) -> Optional[ImageEntity]:
        """Return the image with this id, or None."""
        for img in self.images:
            if img.id == image_id:
                return img
        return None

    def with_images(self, images: Iterable[ImageEntity]) -> DocumentState:
        """Return a new document with the same settings and a new image list."""
        return replace(self, images=tuple(images))

    def with_settings(self, settings: PageSettings) -> DocumentState:
        """Return a new document with the same images and new settings."""
        return replace(self, settings=settings)
