"""
A4King Core Package

Shared data models for the page editor. These are the single source of
truth for every editor module.

**Design rules:**

1. **Immutable Data Models**
   - Frozen dataclasses; a change always builds a new instance.

2. **Content Is Opaque**
   - An image's content reference is replaced wholesale on a transform,
     never mutated in place.

3. **Order Is Significant**
   - The document's image order is the layout traversal order and the
     z-order of overlapping placements.
"""

from .models import (
    ImageEntity,
    ImageStatus,
    DocumentState,
    PageSettings,
    LayoutMode,
    PaperPattern,
)

__all__ = [
    "ImageEntity",
    "ImageStatus",
    "DocumentState",
    "PageSettings",
    "LayoutMode",
    "PaperPattern",
]
