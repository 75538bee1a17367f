"""
Module: editor.layout.strategy

Purpose:
    Abstract interface shared by the layout strategies.

Key Classes:
    - LayoutStrategy: Arrange images inside a content area

Used By:
    - editor.layout.grid: GridStrategy
    - editor.layout.adaptive: AdaptivePackingStrategy
    - editor.layout.engine: Strategy dispatch
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from a4king.core.models import ImageEntity, LayoutMode

from .models import LayoutResult


class LayoutStrategy(ABC):
    """
    Arranges images inside a content area.

    Implementations are pure: no state is kept between calls, so one
    instance may be shared freely.
    """

    mode: LayoutMode

    @abstractmethod
    def arrange(
        self,
        images: Sequence[ImageEntity],
        content_width: float,
        content_height: float,
        gap: float,
        margin: float,
    ) -> LayoutResult:
        """
        Compute placements for a non-empty image list.

        Args:
            images: Images in traversal order (at least one)
            content_width: Width inside the margins (> 0)
            content_height: Height inside the margins (> 0)
            gap: Spacing between items
            margin: Offset of the content area from the page edge

        Returns:
            LayoutResult in page coordinates
        """
