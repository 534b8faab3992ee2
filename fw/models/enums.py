"""Shared enumerations."""

from __future__ import annotations

from enum import StrEnum


class MergeStrategy(StrEnum):
    """How values contributed by several tags are combined."""

    LAST_WINS = "last_wins"
    """Take the value of the highest-priority tag (workspace)."""

    ORDERED_JOIN = "ordered_join"
    """Join all values with ``" && "``, lowest priority first (commands)."""
