"""
Module: images

Purpose:
    Provides the ImageEntity dataclass - the unit of content placed on
    the page. Carries identity, display name, an opaque content reference
    and the intrinsic dimensions used by the layout engine.

Key Classes:
    - ImageEntity: Immutable photograph record
    - ImageStatus: Whether the image is held aside or placed on the page

Key Functions:
    - new_image_id(): Generate a short opaque identifier

Dependencies:
    - dataclasses (std)
    - enum (std)
    - uuid (std)

Used By:
    - core.models.document.DocumentState
    - editor.session: Document operations
    - editor.layout: Placement computation
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

# Length of generated ids (matches the short ids of earlier releases)
IMAGE_ID_LENGTH = 9


def new_image_id() -> str:
    """Return a new short opaque image identifier."""
    return uuid.uuid4().hex[:IMAGE_ID_LENGTH]


class ImageStatus(Enum):
    """
    Placement status of an image.

    Attributes:
        HELD: Waiting in the holding area, not laid out
        PLACED: On the page, eligible for layout

    Example:
        >>> ImageStatus("canvas")
        <ImageStatus.PLACED: 'placed'>
    """

    HELD = "held"
    PLACED = "placed"

    @classmethod
    def _missing_(cls, value: object) -> "ImageStatus | None":
        # Older documents used the zone names
        aliases = {"basket": cls.HELD, "canvas": cls.PLACED}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


@dataclass(frozen=True)
class ImageEntity:
    """
    A photograph known to the document (immutable).

    The content reference is owned by the entity and never mutated:
    a transform produces a new entity with new content and dimensions.

    Attributes:
        id: Opaque unique identifier
        name: Display name (usually the source filename)
        content: Opaque content reference (a PIL image for the Pillow services)
        width: Intrinsic width (positive)
        height: Intrinsic height (positive)
        status: HELD or PLACED

    Invariants:
        - width > 0
        - height > 0

    Example:
        >>> img = ImageEntity("a1", "beach.jpg", None, 200, 100)
        >>> img.aspect_ratio
        2.0
        >>> img.with_status(ImageStatus.PLACED).is_placed
        True
    """

    id: str
    name: str
    content: Any
    width: float
    height: float
    status: ImageStatus = ImageStatus.HELD

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if not self.id:
            raise ValueError("id must not be empty")
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if not isinstance(self.status, ImageStatus):
            object.__setattr__(self, "status", ImageStatus(self.status))

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def is_placed(self) -> bool:
        """True if the image is on the page."""
        return self.status is ImageStatus.PLACED

    def with_status(self, status: ImageStatus) -> ImageEntity:
        """Return a copy with a different placement status."""
        return replace(self, status=status)

    def with_content(self, content: Any, width: float, height: float) -> ImageEntity:
        """Return a copy with content and dimensions replaced together."""
        return replace(self, content=content, width=width, height=height)

    def __repr__(self) -> str:
        return (
            f"ImageEntity(id={self.id!r}, name={self.name!r}, "
            f"size={self.width}x{self.height}, status={self.status.value})"
        )
