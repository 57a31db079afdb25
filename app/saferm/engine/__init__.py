"""Removal pipeline: selection, naming, guards, removal and history.

This package provides the trash-first removal engine and the history
log that makes the most recent trash move revertible.
"""

from saferm.engine.dedup import ContentDeduplicator
from saferm.engine.history import HistoryLog, RevertResult
from saferm.engine.interaction import InteractionPolicy, InteractiveMode
from saferm.engine.models import (
    BatchReport,
    Entry,
    EntryKind,
    HistoryRecord,
    OutcomeKind,
    RemovalResult,
    Selection,
    SelectionCriteria,
)
from saferm.engine.naming import TimestampClock, TrashNamer
from saferm.engine.remover import RemovalEngine
from saferm.engine.selector import PathSelector

__all__ = [
    "BatchReport",
    "ContentDeduplicator",
    "Entry",
    "EntryKind",
    "HistoryLog",
    "HistoryRecord",
    "InteractionPolicy",
    "InteractiveMode",
    "OutcomeKind",
    "PathSelector",
    "RemovalEngine",
    "RemovalResult",
    "RevertResult",
    "Selection",
    "SelectionCriteria",
    "TimestampClock",
    "TrashNamer",
]
