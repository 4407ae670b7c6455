"""Linear undo/redo history of board mutations."""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Optional, Dict, Any

from ..core.board import SudokuBoard


@dataclass(frozen=True)
class HistoryEntry:
    """One cell change: the value before and after."""
    row: int
    col: int
    old_value: int
    new_value: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> HistoryEntry:
        return cls(
            row=int(data["row"]),
            col=int(data["col"]),
            old_value=int(data["old_value"]),
            new_value=int(data["new_value"]),
        )


class HistoryLedger:
    """
    Undo/redo log with a pointer to the last applied entry.

    A pointer of -1 means nothing can be undone. Recording while the
    pointer is behind the tail discards the redo branch, so history stays
    linear.
    """

    def __init__(self, entries: Optional[List[HistoryEntry]] = None,
                 pointer: Optional[int] = None, limit: Optional[int] = None):
        self.entries: List[HistoryEntry] = list(entries or [])
        self.pointer = len(self.entries) - 1 if pointer is None else pointer
        self.limit = limit
        if not -1 <= self.pointer < len(self.entries):
            raise ValueError(f"History pointer {self.pointer} out of range")

    def record(self, row: int, col: int, old_value: int, new_value: int) -> HistoryEntry:
        """Append a change, discarding anything after the pointer first."""
        del self.entries[self.pointer + 1:]
        entry = HistoryEntry(row, col, old_value, new_value)
        self.entries.append(entry)
        if self.limit is not None and len(self.entries) > self.limit:
            del self.entries[:len(self.entries) - self.limit]
        self.pointer = len(self.entries) - 1
        return entry

    def can_undo(self) -> bool:
        return self.pointer >= 0

    def can_redo(self) -> bool:
        return self.pointer < len(self.entries) - 1

    def undo(self, board: SudokuBoard) -> Optional[HistoryEntry]:
        """
        Restore the old value of the entry at the pointer.

        Returns:
            The undone entry, or None if there was nothing to undo.
        """
        if not self.can_undo():
            return None
        entry = self.entries[self.pointer]
        board.set(entry.row, entry.col, entry.old_value)
        self.pointer -= 1
        return entry

    def redo(self, board: SudokuBoard) -> Optional[HistoryEntry]:
        """
        Reapply the entry after the pointer.

        Returns:
            The redone entry, or None if already at the tail.
        """
        if not self.can_redo():
            return None
        self.pointer += 1
        entry = self.entries[self.pointer]
        board.set(entry.row, entry.col, entry.new_value)
        return entry

    def clear(self) -> None:
        self.entries = []
        self.pointer = -1

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"HistoryLedger(entries={len(self.entries)}, pointer={self.pointer})"
