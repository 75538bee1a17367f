"""
Module: editor.dragdrop

Purpose:
    Input-agnostic drag and drop. A pick-up remembers which image left
    which zone; the drop resolves to one document operation. Mouse,
    touch and programmatic callers all go through the same two calls.

Key Classes:
    - Zone: Holding area, page, trash
    - DragController: pick_up() / drop_into()

Drop rules:
    - trash: delete the image
    - holding: hold it if it came from the page, else nothing
    - page: place a held image where it is in the order, or move an
      already placed image to the end

Used By:
    - Front ends wiring pointer events
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from a4king.core.models import ImageStatus

from .session import DocumentSession

logger = logging.getLogger(__name__)


class Zone(Enum):
    """Drop targets and drag sources."""

    HOLDING = "holding"
    PAGE = "page"
    TRASH = "trash"


@dataclass(frozen=True)
class PendingDrag:
    """An image picked up from a zone."""
    image_id: str
    source: Zone


class DragController:
    """
    Resolves drags into session operations.

    Example:
        >>> drag = DragController(session)
        >>> drag.pick_up(img.id, Zone.HOLDING)
        >>> drag.drop_into(Zone.PAGE)
        True
    """

    def __init__(self, session: DocumentSession) -> None:
        self.session = session
        self._pending: Optional[PendingDrag] = None

    @property
    def pending(self) -> Optional[PendingDrag]:
        """Current pick-up, if any."""
        return self._pending

    def pick_up(self, image_id: str, source_zone: Zone) -> None:
        """Start dragging an image out of a zone."""
        self._pending = PendingDrag(image_id=image_id, source=Zone(source_zone))

    def cancel(self) -> None:
        """Abandon the current pick-up."""
        self._pending = None

    def drop_into(self, target_zone: Zone) -> bool:
        """
        Finish the drag.

        Returns:
            True if the document changed
        """
        pending, self._pending = self._pending, None
        if pending is None:
            return False

        target_zone = Zone(target_zone)
        image = self.session.document.find(pending.image_id)
        if image is None:
            logger.debug(f"Dropped image {pending.image_id} no longer exists")
            return False

        if target_zone is Zone.TRASH:
            return self.session.delete(image.id)

        if target_zone is Zone.HOLDING:
            if pending.source is Zone.PAGE:
                return self.session.hold(image.id)
            return False

        if image.status is ImageStatus.HELD:
            return self.session.place(image.id)
        return self.session.move_to_end(image.id)
