"""Unit tests for session snapshots."""

import json

import pytest
from sudoku_engine.core.board import SudokuBoard
from sudoku_engine.engine.history import HistoryEntry
from sudoku_engine.engine.snapshot import SessionSnapshot, SnapshotError, NO_SELECTION
from sudoku_engine.generator import Difficulty
from sudoku_engine.solvers import Technique

from puzzles import TEST_PUZZLE, TEST_SOLUTION


def make_snapshot():
    current = SudokuBoard.from_string(TEST_PUZZLE)
    current.set(0, 2, 4)
    return SessionSnapshot(
        current=current,
        initial=SudokuBoard.from_string(TEST_PUZZLE),
        solved=SudokuBoard.from_string(TEST_SOLUTION),
        elapsed_seconds=42,
        difficulty=Difficulty.HARD,
        rating=Technique.HIDDEN_SINGLE,
        selected=(0, 2),
        history=[HistoryEntry(0, 2, 0, 4)],
        history_pointer=0,
        game_active=True,
        notes={(0, 3): {2, 6}},
    )


class TestSessionSnapshot:

    def test_json_round_trip(self):
        snapshot = make_snapshot()
        restored = SessionSnapshot.from_json(snapshot.to_json())
        assert restored == snapshot

    def test_boards_are_strings(self):
        data = make_snapshot().to_dict()
        assert data["initial_board"] == TEST_PUZZLE
        assert data["solved_board"] == TEST_SOLUTION
        assert data["history"] == [{"row": 0, "col": 2, "old_value": 0, "new_value": 4}]

    def test_defaults_for_optional_fields(self):
        data = {
            "current_board": TEST_PUZZLE,
            "initial_board": TEST_PUZZLE,
            "solved_board": TEST_SOLUTION,
        }
        snapshot = SessionSnapshot.from_dict(data)
        assert snapshot.selected == NO_SELECTION
        assert snapshot.history == []
        assert snapshot.history_pointer == -1
        assert not snapshot.game_active

    @pytest.mark.parametrize("blob", ["", "not json", "[]", "{}", "null", "[" * 100000],
                             ids=["empty", "text", "list", "object", "null", "deep-nesting"])
    def test_garbage_is_rejected(self, blob):
        with pytest.raises(SnapshotError):
            SessionSnapshot.from_json(blob)

    @pytest.mark.parametrize("key, value", [
        ("current_board", "0" * 80),
        ("initial_board", 12345),
        ("solved_board", "1" * 81),
        ("history_pointer", 5),
        ("difficulty", "impossible"),
        ("selected_cell", [9, 9]),
        ("elapsed_seconds", -1),
        ("history", [{"row": 0}]),
        ("notes", [{"row": 0, "col": 3, "values": [10]}]),
        ("elapsed_seconds", float("inf")),
        ("rating", float("inf")),
        ("history_pointer", float("-inf")),
        ("history", [{"row": 0, "col": 2, "old_value": 0, "new_value": float("inf")}]),
    ])
    def test_corruption_is_rejected(self, key, value):
        data = make_snapshot().to_dict()
        data[key] = value
        with pytest.raises(SnapshotError):
            SessionSnapshot.from_dict(data)

    def test_modified_fixed_cell_is_rejected(self):
        data = make_snapshot().to_dict()
        data["current_board"] = "1" + TEST_PUZZLE[1:]
        with pytest.raises(SnapshotError):
            SessionSnapshot.from_dict(data)

    def test_history_on_fixed_cell_is_rejected(self):
        data = make_snapshot().to_dict()
        data["history"] = [{"row": 0, "col": 0, "old_value": 5, "new_value": 1}]
        with pytest.raises(SnapshotError):
            SessionSnapshot.from_dict(data)

    def test_active_game_needs_solution(self):
        data = make_snapshot().to_dict()
        data["solved_board"] = None
        with pytest.raises(SnapshotError):
            SessionSnapshot.from_dict(data)

        data["game_active"] = False
        assert SessionSnapshot.from_dict(data).solved is None

    @pytest.mark.parametrize("key", ["elapsed_seconds", "rating"])
    def test_infinite_numbers_in_json_are_rejected(self, key):
        """json accepts Infinity, which cannot become an int."""
        data = make_snapshot().to_dict()
        data[key] = float("inf")
        blob = json.dumps(data)
        assert "Infinity" in blob
        with pytest.raises(SnapshotError):
            SessionSnapshot.from_json(blob)

    def test_history_must_match_current_board(self):
        data = make_snapshot().to_dict()
        data["current_board"] = TEST_PUZZLE[:2] + "1" + TEST_PUZZLE[3:]
        with pytest.raises(SnapshotError, match="Undo entry"):
            SessionSnapshot.from_dict(data)

    def test_undone_history_must_match_current_board(self):
        """With nothing applied, the cell must still hold the entry's old value."""
        data = make_snapshot().to_dict()
        data["history_pointer"] = -1
        with pytest.raises(SnapshotError, match="Redo entry"):
            SessionSnapshot.from_dict(data)

        data["current_board"] = TEST_PUZZLE
        assert SessionSnapshot.from_dict(data).history_pointer == -1

    def test_undo_and_redo_chain_is_accepted(self):
        current = SudokuBoard.from_string(TEST_PUZZLE)
        current.set(0, 2, 4)
        snapshot = make_snapshot()
        snapshot.current = current
        snapshot.history = [
            HistoryEntry(0, 2, 0, 1),
            HistoryEntry(0, 2, 1, 4),
            HistoryEntry(0, 3, 0, 6),
        ]
        snapshot.history_pointer = 1
        snapshot.check()

    def test_snapshot_error_is_value_error(self):
        assert issubclass(SnapshotError, ValueError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
