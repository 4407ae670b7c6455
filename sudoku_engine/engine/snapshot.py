"""Session snapshots for external persistence."""

from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Set, Any

from ..core.board import SudokuBoard, SIZE, Cell
from ..core.validator import validate_solution
from ..generator import Difficulty
from ..solvers.technique_solver import Technique
from .history import HistoryEntry

NO_SELECTION: Cell = (-1, -1)


class SnapshotError(ValueError):
    """Raised when a persisted snapshot is missing fields or inconsistent."""


@dataclass
class SessionSnapshot:
    """
    Everything needed to rebuild an engine session.

    Candidates are never stored; they are recomputed from the current
    board on restore.
    """
    current: SudokuBoard
    initial: SudokuBoard
    solved: Optional[SudokuBoard]
    elapsed_seconds: int = 0
    difficulty: Difficulty = Difficulty.MEDIUM
    rating: Technique = Technique.NONE
    selected: Cell = NO_SELECTION
    history: List[HistoryEntry] = field(default_factory=list)
    history_pointer: int = -1
    game_active: bool = False
    notes: Dict[Cell, Set[int]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain JSON-compatible types."""
        return {
            "current_board": self.current.to_string(),
            "initial_board": self.initial.to_string(),
            "solved_board": self.solved.to_string() if self.solved is not None else None,
            "elapsed_seconds": self.elapsed_seconds,
            "difficulty": self.difficulty.value,
            "rating": int(self.rating),
            "selected_cell": list(self.selected),
            "history": [entry.to_dict() for entry in self.history],
            "history_pointer": self.history_pointer,
            "game_active": self.game_active,
            "notes": [
                {"row": row, "col": col, "values": sorted(values)}
                for (row, col), values in sorted(self.notes.items())
                if values
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SessionSnapshot:
        """
        Decode and validate a snapshot.

        Raises:
            SnapshotError: If any field is missing, malformed or breaks a
                board invariant.
        """
        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot must be an object, got {type(data).__name__}")
        try:
            snapshot = cls(
                current=_decode_board(data["current_board"], "current_board"),
                initial=_decode_board(data["initial_board"], "initial_board"),
                solved=(
                    _decode_board(data["solved_board"], "solved_board")
                    if data.get("solved_board") is not None else None
                ),
                elapsed_seconds=int(data.get("elapsed_seconds", 0)),
                difficulty=Difficulty(data.get("difficulty", Difficulty.MEDIUM.value)),
                rating=Technique(int(data.get("rating", 0))),
                selected=_decode_cell(data.get("selected_cell", list(NO_SELECTION))),
                history=[HistoryEntry.from_dict(item) for item in data.get("history", [])],
                history_pointer=int(data.get("history_pointer", -1)),
                game_active=bool(data.get("game_active", False)),
                notes=_decode_notes(data.get("notes", [])),
            )
        except SnapshotError:
            raise
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise SnapshotError(f"Malformed snapshot: {e!r}") from e

        snapshot.check()
        return snapshot

    @classmethod
    def from_json(cls, blob: str) -> SessionSnapshot:
        try:
            data = json.loads(blob)
        except (TypeError, ValueError, RecursionError) as e:
            raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
        return cls.from_dict(data)

    def check(self) -> None:
        """Verify the cross-field invariants of a decoded snapshot."""
        for row in range(SIZE):
            for col in range(SIZE):
                fixed = self.initial.get(row, col)
                if fixed != 0 and self.current.get(row, col) != fixed:
                    raise SnapshotError(f"Fixed cell ({row}, {col}) was modified")

        if self.solved is not None and not validate_solution(self.initial, self.solved):
            raise SnapshotError("Solved board does not complete the initial board")
        if self.game_active and self.solved is None:
            raise SnapshotError("An active game needs a solution")
        if self.elapsed_seconds < 0:
            raise SnapshotError(f"Negative elapsed time {self.elapsed_seconds}")

        if not -1 <= self.history_pointer < len(self.history):
            raise SnapshotError(f"History pointer {self.history_pointer} out of range")
        for entry in self.history:
            if not (_in_range(entry.row, entry.col)
                    and 0 <= entry.old_value <= SIZE and 0 <= entry.new_value <= SIZE):
                raise SnapshotError(f"Invalid history entry {entry}")
            if self.initial.get(entry.row, entry.col) != 0:
                raise SnapshotError(f"History entry touches fixed cell {entry}")
        self._check_history_replay()

    def _check_history_replay(self) -> None:
        """Every undo and every redo must start from the value it recorded."""
        board = self.current.copy()
        for entry in reversed(self.history[:self.history_pointer + 1]):
            if board.get(entry.row, entry.col) != entry.new_value:
                raise SnapshotError(f"Undo entry {entry} does not match the board")
            board.set(entry.row, entry.col, entry.old_value)

        board = self.current.copy()
        for entry in self.history[self.history_pointer + 1:]:
            if board.get(entry.row, entry.col) != entry.old_value:
                raise SnapshotError(f"Redo entry {entry} does not match the board")
            board.set(entry.row, entry.col, entry.new_value)


def _in_range(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def _decode_board(value: Any, name: str) -> SudokuBoard:
    if not isinstance(value, str) or len(value) != SIZE * SIZE or not value.isdigit():
        raise SnapshotError(f"{name} must be a string of {SIZE * SIZE} digits")
    return SudokuBoard.from_string(value)


def _decode_cell(value: Any) -> Cell:
    row, col = (int(v) for v in value)
    if (row, col) != NO_SELECTION and not _in_range(row, col):
        raise SnapshotError(f"Selected cell ({row}, {col}) out of range")
    return row, col


def _decode_notes(items: Any) -> Dict[Cell, Set[int]]:
    notes: Dict[Cell, Set[int]] = {}
    for item in items:
        row, col = int(item["row"]), int(item["col"])
        values = {int(v) for v in item["values"]}
        if not _in_range(row, col) or not values <= set(range(1, SIZE + 1)):
            raise SnapshotError(f"Invalid note at ({row}, {col})")
        if values:
            notes[(row, col)] = values
    return notes
