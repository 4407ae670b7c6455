"""Tests for the SudokuEngine play session."""

import json
import logging

import pytest
from sudoku_engine.core.board import SudokuBoard
from sudoku_engine.core.candidates import compute_candidates
from sudoku_engine.engine import SudokuEngine, EngineConfig, LoadStatus, NO_SELECTION
from sudoku_engine.generator import Difficulty
from sudoku_engine.solvers import Technique

from puzzles import TEST_PUZZLE, TEST_SOLUTION


@pytest.fixture
def engine():
    engine = SudokuEngine(EngineConfig(default_difficulty=Difficulty.EASY, seed=3))
    assert engine.load_custom_puzzle(TEST_PUZZLE).ok
    return engine


def fill_all_but_one(engine):
    """Play the solution into every empty cell except the last one."""
    empty = engine.current.get_empty_cells()
    for row, col in empty[:-1]:
        assert engine.place_value(row, col, engine.solved.get(row, col)).accepted
    return empty[-1]


class TestNewPuzzle:

    def test_generated_session(self):
        engine = SudokuEngine(EngineConfig(seed=11))
        engine.new_puzzle("easy")

        assert engine.difficulty is Difficulty.EASY
        assert engine.game_active
        assert engine.current == engine.initial
        assert engine.initial.count_empty() == 30
        assert engine.solved.is_solved()
        for row in range(9):
            for col in range(9):
                if not engine.initial.is_empty(row, col):
                    assert engine.initial.get(row, col) == engine.solved.get(row, col)
        assert engine.candidates == compute_candidates(engine.current)
        assert engine.conflicts == set()
        assert len(engine.history) == 0
        assert engine.rating >= Technique.NAKED_SINGLE

    def test_new_puzzle_clears_state(self, engine):
        engine.place_value(0, 2, 4)
        engine.select_cell(0, 2)
        engine.tick(10)
        engine.new_puzzle(Difficulty.EASY)

        assert len(engine.history) == 0
        assert engine.selected == NO_SELECTION
        assert engine.elapsed_seconds == 0


class TestLoadCustomPuzzle:

    def test_loads_valid_puzzle(self, engine):
        assert engine.solved.to_string() == TEST_SOLUTION
        assert engine.current.to_string() == TEST_PUZZLE
        assert engine.game_active

    def test_invalid_input_leaves_state(self, engine):
        engine.place_value(0, 2, 4)
        before = engine.snapshot()

        result = engine.load_custom_puzzle("1" * 80)
        assert result.status is LoadStatus.INVALID_INPUT
        assert engine.snapshot() == before

    def test_unsolvable_leaves_state(self, engine):
        before = engine.snapshot()
        result = engine.load_custom_puzzle("123456780" + "000000009" + "0" * 63)
        assert result.status is LoadStatus.UNSOLVABLE
        assert engine.snapshot() == before

    def test_conflicting_clues_load_for_inspection(self, engine):
        result = engine.load_custom_puzzle("55" + "0" * 79)

        assert result.status is LoadStatus.CONFLICTS
        assert result.conflicts == {(0, 0), (0, 1)}
        assert engine.current.to_string() == "55" + "0" * 79
        assert engine.conflicts == {(0, 0), (0, 1)}
        assert not engine.game_active
        assert engine.solved is None

        assert not engine.place_value(5, 5, 1).accepted
        assert engine.request_hint() is None
        engine.tick(5)
        assert engine.elapsed_seconds == 0


class TestPlaceValue:

    def test_fixed_cells_never_change(self, engine):
        for value in range(10):
            result = engine.place_value(0, 0, value)
            assert not result.accepted
            assert "part of the puzzle" in result.message
            assert engine.current.get(0, 0) == 5
        assert len(engine.history) == 0

    def test_rejects_bad_input(self, engine):
        assert not engine.place_value(9, 0, 1).accepted
        assert not engine.place_value(0, 2, 10).accepted
        assert engine.current.to_string() == TEST_PUZZLE

    @pytest.mark.parametrize("value", [4.5, 4.0, True, "4", None])
    def test_rejects_non_integer_values(self, engine, value):
        result = engine.place_value(0, 2, value)
        assert not result.accepted
        assert "integer" in result.message
        assert engine.current.get(0, 2) == 0
        assert len(engine.history) == 0
        assert not engine.toggle_note(0, 2, value)

    def test_conflicts_reported_and_cleared(self, engine):
        """Two 4s in row 0 clash; clearing either one clears both."""
        engine.place_value(0, 6, 4)
        result = engine.place_value(0, 8, 4)
        assert result.accepted
        assert result.conflicts == {(0, 6), (0, 8)}

        assert engine.place_value(0, 8, 0).conflicts == set()

        engine.place_value(0, 8, 4)
        assert engine.place_value(0, 6, 0).conflicts == set()

    def test_conflict_with_fixed_cell(self, engine):
        result = engine.place_value(0, 2, 5)
        assert result.conflicts == {(0, 0), (0, 2)}

    def test_candidates_follow_placements(self, engine):
        engine.place_value(0, 2, 4)
        assert engine.candidates == compute_candidates(engine.current)
        assert engine.get_candidates(0, 2) == set()

        engine.place_value(0, 2, 1)
        assert engine.candidates == compute_candidates(engine.current)

        engine.place_value(0, 2, 0)
        assert engine.candidates == compute_candidates(engine.current)
        assert engine.get_candidates(0, 2) == {1, 2, 4}

    def test_same_value_is_not_recorded(self, engine):
        engine.place_value(0, 2, 4)
        engine.place_value(0, 2, 4)
        assert len(engine.history) == 1

    def test_selection_routes_input(self, engine):
        assert not engine.input_value(4).accepted
        assert engine.select_cell(0, 2)
        assert engine.input_value(4).accepted
        assert engine.current.get(0, 2) == 4

        engine.clear_selection()
        assert engine.selected == NO_SELECTION
        assert not engine.select_cell(-1, 3)

    def test_win_ends_game(self, engine):
        row, col = fill_all_but_one(engine)
        assert engine.game_active

        result = engine.place_value(row, col, engine.solved.get(row, col))
        assert result.solved
        assert not engine.game_active
        assert engine.check_progress().complete


class TestUndoRedo:

    MOVES = [(0, 2, 4), (0, 3, 6), (1, 1, 7), (0, 2, 1), (8, 0, 3)]

    def test_undo_all_returns_to_start(self, engine):
        for move in self.MOVES:
            engine.place_value(*move)
        after = engine.current.copy()

        for _ in self.MOVES:
            assert engine.undo()
        assert engine.current.to_string() == TEST_PUZZLE
        assert not engine.undo()

        for _ in self.MOVES:
            assert engine.redo()
        assert engine.current == after
        assert not engine.redo()

    def test_undo_recomputes_candidates(self, engine):
        engine.place_value(0, 2, 4)
        engine.undo()
        assert engine.candidates == compute_candidates(engine.current)
        assert 4 in engine.get_candidates(0, 2)

    def test_new_move_discards_redo(self, engine):
        engine.place_value(0, 2, 4)
        engine.place_value(0, 3, 6)
        engine.undo()
        engine.place_value(1, 1, 7)

        assert not engine.redo()
        assert engine.current.get(0, 3) == 0


class TestAssistance:

    def test_hint_is_applied(self, engine):
        hint = engine.request_hint()
        assert hint is not None
        assert hint.value == engine.solved.get(hint.row, hint.col)
        assert engine.current.get(hint.row, hint.col) == hint.value
        assert len(engine.history) == 1

    def test_hint_without_applying(self, engine):
        hint = engine.request_hint(apply=False)
        assert hint.technique in (Technique.NAKED_SINGLE, Technique.HIDDEN_SINGLE)
        assert engine.current.to_string() == TEST_PUZZLE

    def test_hint_corrects_mistake_first(self, engine):
        engine.place_value(0, 2, 1)
        hint = engine.request_hint(apply=False)
        assert (hint.row, hint.col, hint.value) == (0, 2, 4)
        assert hint.technique is Technique.NONE

    def test_check_progress(self, engine):
        engine.place_value(0, 2, 1)
        engine.place_value(0, 3, 6)
        report = engine.check_progress()
        assert report.incorrect_cells == {(0, 2)}
        assert report.empty_cells == SudokuBoard.from_string(TEST_PUZZLE).count_empty() - 2
        assert not report.complete

    def test_reveal_solution(self, engine):
        engine.place_value(0, 2, 1)
        assert engine.reveal_solution()
        assert engine.current.to_string() == TEST_SOLUTION
        assert not engine.game_active
        assert engine.conflicts == set()
        assert not engine.place_value(0, 2, 1).accepted

    def test_reset_to_initial(self, engine):
        engine.place_value(0, 2, 4)
        engine.select_cell(0, 2)
        engine.tick(30)
        engine.reset_to_initial()

        assert engine.current.to_string() == TEST_PUZZLE
        assert len(engine.history) == 0
        assert engine.selected == NO_SELECTION
        assert engine.elapsed_seconds == 0
        assert engine.game_active

    def test_estimate_and_conflict_queries(self, engine):
        assert engine.estimate_difficulty() == engine.rating
        assert engine.find_conflicts() == set()


class TestNotes:

    def test_toggle_note(self, engine):
        assert engine.toggle_note(0, 2, 4)
        assert engine.toggle_note(0, 2, 1)
        assert engine.notes[(0, 2)] == {1, 4}
        assert engine.toggle_note(0, 2, 4)
        assert engine.notes[(0, 2)] == {1}

    def test_notes_separate_from_candidates(self, engine):
        engine.toggle_note(0, 2, 9)
        assert 9 not in engine.get_candidates(0, 2)

    def test_placement_clears_note(self, engine):
        engine.toggle_note(0, 2, 4)
        engine.place_value(0, 2, 4)
        assert (0, 2) not in engine.notes

    def test_no_notes_on_filled_cells(self, engine):
        assert not engine.toggle_note(0, 0, 1)
        engine.place_value(0, 2, 4)
        assert not engine.toggle_note(0, 2, 1)


class TestPersistence:

    def test_save_and_restore(self, engine):
        engine.place_value(0, 2, 4)
        engine.place_value(0, 3, 6)
        engine.undo()
        engine.select_cell(1, 1)
        engine.toggle_note(1, 1, 2)
        engine.tick(12)
        blob = engine.save()

        other = SudokuEngine()
        assert other.restore(blob)
        assert other.snapshot() == engine.snapshot()
        assert other.candidates == compute_candidates(other.current)

        assert other.redo()
        assert other.current.get(0, 3) == 6

    def test_restore_inspection_state(self, engine):
        engine.load_custom_puzzle("55" + "0" * 79)
        other = SudokuEngine()
        assert other.restore(engine.save())
        assert other.solved is None
        assert not other.game_active

    @pytest.mark.parametrize("blob", [None, ""])
    def test_missing_blob_starts_fresh(self, blob):
        engine = SudokuEngine(EngineConfig(default_difficulty=Difficulty.EASY, seed=5))
        assert not engine.restore(blob)
        assert engine.game_active
        assert engine.difficulty is Difficulty.EASY

    @pytest.mark.parametrize("blob", ['{"current_board": "123"}', "[" * 100000],
                             ids=["truncated", "deep-nesting"])
    def test_corrupted_blob_starts_fresh(self, blob, caplog):
        engine = SudokuEngine(EngineConfig(default_difficulty=Difficulty.EASY, seed=5))
        with caplog.at_level(logging.WARNING, logger="sudoku_engine.engine.session"):
            assert not engine.restore(blob)

        assert engine.game_active
        assert engine.initial.count_empty() == 30
        assert "corrupted" in caplog.text

    @pytest.mark.parametrize("key, raw", [
        ("elapsed_seconds", "Infinity"),
        ("rating", "1e400"),
        ("history_pointer", "-Infinity"),
    ])
    def test_non_finite_numbers_start_fresh(self, engine, key, raw):
        engine.place_value(0, 2, 4)
        data = json.loads(engine.save())
        data[key] = "PLACEHOLDER"
        blob = json.dumps(data).replace('"PLACEHOLDER"', raw)

        fresh = SudokuEngine(EngineConfig(default_difficulty=Difficulty.EASY, seed=5))
        assert not fresh.restore(blob)
        assert fresh.game_active
        assert fresh.initial.count_empty() == 30

    def test_tampered_history_starts_fresh(self, engine):
        engine.place_value(0, 2, 4)
        data = json.loads(engine.save())
        data["current_board"] = TEST_PUZZLE

        fresh = SudokuEngine(EngineConfig(default_difficulty=Difficulty.EASY, seed=5))
        assert not fresh.restore(json.dumps(data))
        assert fresh.initial.count_empty() == 30

    def test_tick_only_while_active(self, engine):
        engine.tick()
        engine.tick(4)
        assert engine.elapsed_seconds == 5
        engine.reveal_solution()
        engine.tick()
        assert engine.elapsed_seconds == 5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
