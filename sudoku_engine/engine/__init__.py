"""Game session module: play state, undo history and persistence."""

from .config import EngineConfig
from .history import HistoryLedger, HistoryEntry
from .snapshot import SessionSnapshot, SnapshotError, NO_SELECTION
from .session import SudokuEngine, LoadStatus, LoadResult, MoveResult, ProgressReport

__all__ = [
    "EngineConfig",
    "HistoryLedger",
    "HistoryEntry",
    "SessionSnapshot",
    "SnapshotError",
    "NO_SELECTION",
    "SudokuEngine",
    "LoadStatus",
    "LoadResult",
    "MoveResult",
    "ProgressReport",
]
