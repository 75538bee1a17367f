"""
Module: editor.images.transform

Purpose:
    Image transforms that replace an entity's content and dimensions.

Key Classes:
    - TransformResult: New content and size
    - ImageTransformService: Abstract transform interface
    - PillowTransformService: Standard Pillow implementation
    - TransformError: Transform failure

Dependencies:
    - PIL: Rotation

Used By:
    - editor.session.DocumentSession.rotate
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from PIL import Image


class TransformError(Exception):
    """Image transform failed."""
    pass


@dataclass(frozen=True)
class TransformResult:
    """New content with its dimensions (immutable)."""
    content: Any
    width: float
    height: float


class ImageTransformService(ABC):
    """Abstract interface for content transforms."""

    @abstractmethod
    def rotate90(self, content: Any, width: float, height: float) -> TransformResult:
        """
        Rotate content a quarter turn clockwise.

        Args:
            content: Current content reference
            width: Current width
            height: Current height

        Returns:
            TransformResult with width and height swapped

        Raises:
            TransformError: If the content cannot be rotated
        """


class PillowTransformService(ImageTransformService):
    """Rotates PIL images; four calls return to the original size."""

    def rotate90(self, content: Any, width: float, height: float) -> TransformResult:
        if not isinstance(content, Image.Image):
            raise TransformError(f"Expected a PIL image, got {type(content).__name__}")
        try:
            rotated = content.transpose(Image.Transpose.ROTATE_270)
        except (OSError, ValueError) as e:
            raise TransformError(f"Rotation failed: {e}") from e
        return TransformResult(content=rotated, width=height, height=width)
