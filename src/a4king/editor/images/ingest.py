"""
Module: editor.images.ingest

Purpose:
    Decoding of raw image bytes into content the editor can lay out.
    Provides an abstract interface and a Pillow implementation.

Key Classes:
    - IngestResult: Decoded content and intrinsic size
    - ImageIngestService: Abstract decode interface
    - PillowIngestService: Standard Pillow decoder
    - DecodeError: Unreadable or corrupt input

Dependencies:
    - PIL: Image decoding

Used By:
    - editor.session.DocumentSession.ingest
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)


class DecodeError(Exception):
    """Image bytes could not be decoded."""
    pass


@dataclass(frozen=True)
class IngestResult:
    """
    Decoded image (immutable).

    Attributes:
        content: Opaque content reference
        width: Intrinsic width in pixels
        height: Intrinsic height in pixels
    """
    content: Any
    width: int
    height: int


class ImageIngestService(ABC):
    """
    Abstract interface for decoding uploaded images.

    Implementations must not touch the document; the caller builds the
    ImageEntity from the result.
    """

    @abstractmethod
    def ingest(self, raw: bytes) -> IngestResult:
        """
        Decode raw bytes.

        Args:
            raw: Encoded image file contents

        Returns:
            IngestResult with content and intrinsic size

        Raises:
            DecodeError: If the bytes are not a readable image
        """


class PillowIngestService(ImageIngestService):
    """
    Decodes with Pillow and loads pixel data eagerly.

    EXIF orientation is applied so the intrinsic size matches what a
    viewer shows.
    """

    def ingest(self, raw: bytes) -> IngestResult:
        """Decode bytes into a loaded PIL image."""
        if not raw:
            raise DecodeError("Empty image data")
        try:
            with Image.open(io.BytesIO(raw)) as img:
                img.load()
                decoded = ImageOps.exif_transpose(img)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeError(f"Cannot decode image: {e}") from e

        width, height = decoded.size
        if width <= 0 or height <= 0:
            raise DecodeError(f"Image has no pixels: {width}x{height}")

        logger.debug(f"Decoded {decoded.format or 'image'} {width}x{height}")
        return IngestResult(content=decoded, width=width, height=height)
