"""
Module: core.models

Purpose:
    Immutable data models for the page editor.

Key Classes:
    - ImageEntity: A photograph on the page or in the holding area
    - DocumentState: Ordered images plus page settings
    - PageSettings: Layout and cosmetic page configuration
"""

from .images import ImageEntity, ImageStatus, new_image_id
from .document import DocumentState, PageSettings, LayoutMode, PaperPattern

__all__ = [
    "ImageEntity",
    "ImageStatus",
    "new_image_id",
    "DocumentState",
    "PageSettings",
    "LayoutMode",
    "PaperPattern",
]
