"""
Module: editor.config

Purpose:
    Configuration dataclass for the page editor. Immutable configuration
    with validation on construction.

Key Classes:
    - EditorConfig: History capacity, initial page settings and
      column search limits

Dependencies:
    - dataclasses (std)

Used By:
    - editor.session: DocumentSession
    - editor.layout.adaptive: Column search limits
"""

from __future__ import annotations

from dataclasses import dataclass, field

from a4king.core.models import PageSettings

# Snapshot capacity of the undo/redo log
DEFAULT_HISTORY_LIMIT = 10

# Adaptive packing search
DEFAULT_MAX_COLUMNS = 6
DEFAULT_MIN_COLUMN_WIDTH = 10.0


@dataclass(frozen=True)
class EditorConfig:
    """
    Configuration for an editing session (immutable).

    Attributes:
        history_limit: Maximum snapshots kept for undo/redo
        settings: Page settings the session starts with
        max_columns: Upper bound of the adaptive column search
        min_column_width: Narrowest usable column (layout units)

    Example:
        >>> config = EditorConfig(history_limit=5)
        >>> config.settings.margin
        10.0
    """

    history_limit: int = DEFAULT_HISTORY_LIMIT
    settings: PageSettings = field(default_factory=PageSettings)
    max_columns: int = DEFAULT_MAX_COLUMNS
    min_column_width: float = DEFAULT_MIN_COLUMN_WIDTH

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.history_limit < 1:
            raise ValueError(f"history_limit must be >= 1: {self.history_limit}")
        if self.max_columns < 1:
            raise ValueError(f"max_columns must be >= 1: {self.max_columns}")
        if self.min_column_width < 0:
            raise ValueError(f"min_column_width must be >= 0: {self.min_column_width}")
