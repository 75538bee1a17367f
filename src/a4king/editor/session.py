"""
Module: editor.session

Purpose:
    The document being edited: the active snapshot, its history, and
    every operation that changes the image list. Each operation reads
    the current list, builds a complete replacement and commits it with
    a single push_snapshot call.

Key Classes:
    - DocumentSession: Public editing surface
    - ImagePayload: Name + raw bytes for ingestion

Concurrency:
    push_snapshot is atomic (guarded by a lock), but two operations that
    each derive a list from the same old list still race: the later push
    wins. Slow work (decode, rotate) runs before the current list is
    read, so a result never overwrites changes made while it ran.

Dependencies:
    - editor.history: HistoryStack
    - editor.images: Ingest and transform collaborators

Used By:
    - editor.dragdrop: DragController
    - Front ends (screen, tests)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence

from a4king.core.models import (
    DocumentState,
    ImageEntity,
    ImageStatus,
    LayoutMode,
    PageSettings,
    new_image_id,
)

from .config import EditorConfig
from .history import HistoryStack
from .images import ImageIngestService, ImageTransformService
from .layout import (
    AdaptivePackingStrategy,
    GridStrategy,
    LayoutResult,
    LayoutStrategy,
    PageGeometry,
    compute_for_document,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImagePayload:
    """An uploaded file: display name and encoded bytes."""
    name: str
    data: bytes


class DocumentSession:
    """
    Editing session over a bounded history of document snapshots.

    Page settings are live configuration: they are not recorded in
    history, and undo/redo only restore image lists.

    Example:
        >>> session = DocumentSession()
        >>> session.add_images([img])
        True
        >>> session.undo()
        >>> session.current_images()
        ()
    """

    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        self.config = config or EditorConfig()
        self._settings = self.config.settings
        self._lock = threading.RLock()
        self._history = HistoryStack(
            DocumentState(settings=self._settings),
            limit=self.config.history_limit,
        )
        self.strategies: Dict[LayoutMode, LayoutStrategy] = {
            LayoutMode.GRID: GridStrategy(),
            LayoutMode.ADAPTIVE: AdaptivePackingStrategy(
                max_columns=self.config.max_columns,
                min_column_width=self.config.min_column_width,
            ),
        }

    # ─────────────────────────────────────────────────────────────────────────
    # Snapshot surface
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def history(self) -> HistoryStack:
        """The underlying snapshot history."""
        return self._history

    @property
    def settings(self) -> PageSettings:
        """Live page settings."""
        return self._settings

    @property
    def document(self) -> DocumentState:
        """Active snapshot's images combined with the live settings."""
        with self._lock:
            return self._history.current.with_settings(self._settings)

    def current_images(self) -> tuple[ImageEntity, ...]:
        """Read-only view of the active image list."""
        with self._lock:
            return self._history.current.images

    def push_snapshot(self, images: Iterable[ImageEntity]) -> DocumentState:
        """
        Commit a new image list.

        The only mutation entry point: builds a DocumentState from the
        live settings plus images and pushes it onto history, discarding
        any redo branch.

        Args:
            images: Complete replacement image list

        Returns:
            The committed snapshot
        """
        with self._lock:
            snapshot = DocumentState(images=tuple(images), settings=self._settings)
            self._history.push(snapshot)
            return snapshot

    def undo(self) -> None:
        """Activate the previous snapshot (no-op at the oldest)."""
        with self._lock:
            self._history.undo()

    def redo(self) -> None:
        """Activate the next snapshot (no-op at the newest)."""
        with self._lock:
            self._history.redo()

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def layout(self, geometry: PageGeometry) -> LayoutResult:
        """Lay out the active document on a page of the given geometry."""
        return compute_for_document(self.document, geometry, strategies=self.strategies)

    def update_settings(self, **changes) -> PageSettings:
        """
        Replace live page settings.

        Args:
            **changes: PageSettings fields to change

        Returns:
            The new settings

        Raises:
            ValueError: If a value is invalid (settings stay unchanged)
        """
        with self._lock:
            self._settings = replace(self._settings, **changes)
            return self._settings

    # ─────────────────────────────────────────────────────────────────────────
    # Document operations
    # ─────────────────────────────────────────────────────────────────────────

    def add_images(self, new_images: Sequence[ImageEntity]) -> bool:
        """Append images to the document (as given, usually held)."""
        if not new_images:
            return False
        with self._lock:
            self.push_snapshot([*self.current_images(), *new_images])
        logger.info(f"Added {len(new_images)} images")
        return True

    def ingest(self, payloads: Sequence[ImagePayload], service: ImageIngestService) -> List[ImageEntity]:
        """
        Decode uploads and add them as held images.

        Every payload is decoded before the document is touched; one
        failure aborts the whole batch.

        Args:
            payloads: Uploaded files
            service: Decoder

        Returns:
            The new entities, in upload order

        Raises:
            DecodeError: If any payload cannot be decoded (nothing is added)
        """
        entities = []
        for payload in payloads:
            result = service.ingest(payload.data)
            entities.append(ImageEntity(
                id=new_image_id(),
                name=payload.name,
                content=result.content,
                width=result.width,
                height=result.height,
                status=ImageStatus.HELD,
            ))
        self.add_images(entities)
        return entities

    def delete(self, image_id: str) -> bool:
        """Remove an image from the document."""
        with self._lock:
            images = self.current_images()
            if not any(img.id == image_id for img in images):
                return False
            self.push_snapshot(img for img in images if img.id != image_id)
        logger.info(f"Deleted image {image_id}")
        return True

    def set_status(self, image_id: str, status: ImageStatus) -> bool:
        """Change one image's status, keeping its position in the order."""
        with self._lock:
            images = self.current_images()
            if not any(img.id == image_id for img in images):
                return False
            self.push_snapshot(
                img.with_status(status) if img.id == image_id else img
                for img in images
            )
        return True

    def place(self, image_id: str) -> bool:
        """Put a held image on the page."""
        return self.set_status(image_id, ImageStatus.PLACED)

    def hold(self, image_id: str) -> bool:
        """Return an image to the holding area."""
        return self.set_status(image_id, ImageStatus.HELD)

    def move_to_end(self, image_id: str) -> bool:
        """Move an image to the end of the order, placed."""
        with self._lock:
            images = self.current_images()
            target = next((img for img in images if img.id == image_id), None)
            if target is None:
                return False
            others = [img for img in images if img.id != image_id]
            self.push_snapshot([*others, target.with_status(ImageStatus.PLACED)])
        return True

    def recycle_all(self) -> bool:
        """Return every placed image to the holding area."""
        with self._lock:
            images = self.current_images()
            if not any(img.is_placed for img in images):
                return False
            self.push_snapshot(img.with_status(ImageStatus.HELD) for img in images)
        logger.info("Returned all images to the holding area")
        return True

    def rotate(self, image_id: str, service: ImageTransformService) -> bool:
        """
        Rotate an image a quarter turn clockwise.

        The transform runs on the entity captured at call time; the
        result is merged into the list current at completion.

        Returns:
            True if a snapshot was pushed; False if the image is unknown
            or was removed while rotating

        Raises:
            TransformError: If the transform fails (nothing is pushed)
        """
        target = self.document.find(image_id)
        if target is None:
            return False

        result = service.rotate90(target.content, target.width, target.height)

        with self._lock:
            images = self.current_images()
            if not any(img.id == image_id for img in images):
                logger.warning(f"Image {image_id} removed during rotation; discarding result")
                return False
            self.push_snapshot(
                img.with_content(result.content, result.width, result.height)
                if img.id == image_id else img
                for img in images
            )
        return True
