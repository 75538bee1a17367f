"""
Module: editor.images

Purpose:
    Collaborator interfaces for image decoding and transforms, with
    Pillow implementations.

Key Classes:
    - ImageIngestService / PillowIngestService
    - ImageTransformService / PillowTransformService
    - DecodeError, TransformError

Dependencies:
    - PIL: Image manipulation

Used By:
    - editor.session: ingest and rotate operations
"""

from .ingest import ImageIngestService, PillowIngestService, IngestResult, DecodeError
from .transform import ImageTransformService, PillowTransformService, TransformResult, TransformError

__all__ = [
    "ImageIngestService",
    "PillowIngestService",
    "IngestResult",
    "DecodeError",
    "ImageTransformService",
    "PillowTransformService",
    "TransformResult",
    "TransformError",
]
