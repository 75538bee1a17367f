"""
Module: editor.history

Purpose:
    Bounded, linear undo/redo log of DocumentState snapshots.
    A single cursor walks a capped list; pushing after an undo drops
    the undone snapshots, so history never branches.

Key Classes:
    - HistoryStack: Snapshot log with cursor

State machine:
    push: truncate after cursor -> append -> evict oldest if over
          capacity -> cursor to last
    undo: cursor - 1 (no-op at 0)
    redo: cursor + 1 (no-op at last)

Dependencies:
    - core.models.DocumentState

Used By:
    - editor.session.DocumentSession
"""

from __future__ import annotations

import logging
from typing import Optional

from a4king.core.models import DocumentState

from .config import DEFAULT_HISTORY_LIMIT

logger = logging.getLogger(__name__)


class HistoryStack:
    """
    Capped snapshot history with a cursor.

    Invariants:
        - len(self) >= 1 after construction
        - 0 <= cursor < len(self)
        - len(self) <= limit

    Example:
        >>> history = HistoryStack()
        >>> history.push(DocumentState(images=(img,)))
        >>> history.undo()
        True
        >>> history.can_redo()
        True
    """

    def __init__(
        self,
        initial: Optional[DocumentState] = None,
        *,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        """
        Initialize history with one snapshot.

        Args:
            initial: First snapshot (default: empty document)
            limit: Maximum snapshots kept; the oldest is evicted beyond it
        """
        if limit < 1:
            raise ValueError(f"limit must be >= 1: {limit}")
        self.limit = limit
        self._snapshots: list[DocumentState] = [initial if initial is not None else DocumentState()]
        self._cursor = 0

    @property
    def cursor(self) -> int:
        """Index of the active snapshot."""
        return self._cursor

    @property
    def current(self) -> DocumentState:
        """The active snapshot."""
        return self._snapshots[self._cursor]

    @property
    def snapshots(self) -> tuple[DocumentState, ...]:
        """All snapshots, oldest first."""
        return tuple(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def push(self, snapshot: DocumentState) -> None:
        """Commit a snapshot and make it active."""
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(snapshot)
        if len(self._snapshots) > self.limit:
            self._snapshots.pop(0)
        self._cursor = len(self._snapshots) - 1
        logger.debug(f"History push: {len(self._snapshots)} snapshots, cursor {self._cursor}")

    def undo(self) -> bool:
        """Step back one snapshot. Returns False at the oldest snapshot."""
        if self._cursor == 0:
            return False
        self._cursor -= 1
        logger.debug(f"Undo to snapshot {self._cursor}")
        return True

    def redo(self) -> bool:
        """Step forward one snapshot. Returns False at the newest snapshot."""
        if self._cursor >= len(self._snapshots) - 1:
            return False
        self._cursor += 1
        logger.debug(f"Redo to snapshot {self._cursor}")
        return True

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self._cursor > 0

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self._cursor < len(self._snapshots) - 1

    def get_stats(self) -> dict:
        """
        Get statistics about history usage.

        Returns:
            dict: Snapshot count, cursor, limit and whether the log is full
        """
        return {
            "snapshot_count": len(self._snapshots),
            "cursor": self._cursor,
            "limit": self.limit,
            "full": len(self._snapshots) >= self.limit,
        }
