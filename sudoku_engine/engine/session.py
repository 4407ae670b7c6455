"""Single-player game session: the state and operations behind a Sudoku UI."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set, Union

from ..core.board import SudokuBoard, SIZE, Cell
from ..core.candidates import CandidateMap, compute_candidates, update_candidates
from ..core.validator import find_conflicts
from ..generator import SudokuGenerator, Difficulty, estimate_difficulty
from ..solvers.backtracking_solver import fill_board
from ..solvers.technique_solver import Technique, Hint, find_hint
from .config import EngineConfig
from .history import HistoryLedger
from .snapshot import SessionSnapshot, SnapshotError, NO_SELECTION

logger = logging.getLogger(__name__)


class LoadStatus(Enum):
    """Outcome of loading a user-supplied puzzle."""
    LOADED = "loaded"
    INVALID_INPUT = "invalid_input"
    CONFLICTS = "conflicts"
    UNSOLVABLE = "unsolvable"


@dataclass
class LoadResult:
    status: LoadStatus
    message: str = ""
    conflicts: Set[Cell] = field(default_factory=set)

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.LOADED


@dataclass
class MoveResult:
    """Outcome of a placement. Rejected moves leave the session unchanged."""
    accepted: bool
    message: str = ""
    conflicts: Set[Cell] = field(default_factory=set)
    solved: bool = False


@dataclass
class ProgressReport:
    incorrect_cells: Set[Cell]
    empty_cells: int
    complete: bool


class SudokuEngine:
    """
    Owns the three boards of a game and every operation that changes them.

    - initial: the carved puzzle; its non-zero cells are fixed
    - current: the player's working copy
    - solved: the reference solution (None while inspecting a puzzle
      that failed to load because of clashing clues)

    Candidates are kept in step with current after every mutation and
    are never persisted. Nothing here renders; callers query
    conflicts and candidates and redraw on their own schedule.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.generator = SudokuGenerator(seed=self.config.seed)

        self.initial = SudokuBoard()
        self.current = SudokuBoard()
        self.solved: Optional[SudokuBoard] = None
        self.candidates: CandidateMap = {}
        self.notes = {}
        self.history = HistoryLedger(limit=self.config.history_limit)
        self.selected: Cell = NO_SELECTION
        self.elapsed_seconds = 0
        self.difficulty = self.config.default_difficulty
        self.rating = Technique.NONE
        self.game_active = False
        self.conflicts: Set[Cell] = set()

    # ------------------------------------------------------------------
    # Starting games
    # ------------------------------------------------------------------

    def new_puzzle(self, difficulty: Union[Difficulty, str, None] = None) -> None:
        """Generate and start a fresh puzzle."""
        if difficulty is None:
            difficulty = self.config.default_difficulty
        elif not isinstance(difficulty, Difficulty):
            difficulty = Difficulty(difficulty)

        generated = self.generator.generate(difficulty)
        self._start(generated.puzzle, generated.solution, difficulty, generated.rating)
        logger.info("Started %s puzzle with %d clues (rated %s)",
                    difficulty.value, generated.puzzle.count_filled(), generated.rating.label)

    def load_custom_puzzle(self, puzzle_string: str) -> LoadResult:
        """
        Start a game from an 81-digit puzzle string.

        Malformed and unsolvable puzzles are rejected without touching the
        session. A puzzle whose clues already clash is loaded for
        inspection only: it is shown, but play and the clock stay stopped.
        """
        board = SudokuBoard.parse(puzzle_string)
        if board is None:
            return LoadResult(LoadStatus.INVALID_INPUT,
                              f"A puzzle needs exactly {SIZE * SIZE} digits")

        conflicts = find_conflicts(board)
        if conflicts:
            self._start(board, None, self.difficulty, Technique.NONE)
            logger.info("Loaded puzzle with %d clashing clues for inspection", len(conflicts))
            return LoadResult(LoadStatus.CONFLICTS,
                              "The puzzle has clashing clues; fix them before playing",
                              set(conflicts))

        solution = board.copy()
        if not fill_board(solution, shuffle=False):
            return LoadResult(LoadStatus.UNSOLVABLE, "The puzzle has no solution")

        self._start(board, solution, self.difficulty, estimate_difficulty(board))
        return LoadResult(LoadStatus.LOADED, "Puzzle loaded")

    def _start(self, puzzle: SudokuBoard, solution: Optional[SudokuBoard],
               difficulty: Difficulty, rating: Technique) -> None:
        self.initial = puzzle.copy()
        self.current = puzzle.copy()
        self.solved = solution.copy() if solution is not None else None
        self.difficulty = difficulty
        self.rating = rating
        self.history = HistoryLedger(limit=self.config.history_limit)
        self.notes = {}
        self.selected = NO_SELECTION
        self.elapsed_seconds = 0
        self._refresh()
        self.game_active = self.solved is not None and not self.current.is_solved()

    # ------------------------------------------------------------------
    # Play
    # ------------------------------------------------------------------

    def is_fixed(self, row: int, col: int) -> bool:
        return not self.initial.is_empty(row, col)

    def place_value(self, row: int, col: int, value: int) -> MoveResult:
        """Write value (0 clears) into an editable cell and record it for undo."""
        if not self.game_active:
            return MoveResult(False, "No game in progress", set(self.conflicts))
        if not _in_range(row, col):
            return MoveResult(False, f"Cell ({row}, {col}) is off the board", set(self.conflicts))
        if not _is_digit(value, 0):
            return MoveResult(False, f"Value must be an integer 0-{SIZE}, got {value!r}",
                              set(self.conflicts))
        if self.is_fixed(row, col):
            return MoveResult(False, f"Cell ({row + 1}, {col + 1}) is part of the puzzle",
                              set(self.conflicts))

        old_value = self.current.get(row, col)
        if old_value == value:
            return MoveResult(True, "", set(self.conflicts))

        self.history.record(row, col, old_value, value)
        self.current.set(row, col, value)
        if value != 0:
            self.notes.pop((row, col), None)

        if old_value == 0:
            self.candidates = update_candidates(self.candidates, self.current, row, col, value)
        else:
            # Overwriting frees old_value for the peers again
            self.candidates = compute_candidates(self.current)
        self.conflicts = find_conflicts(self.current)

        solved = self._check_win()
        logger.debug("Placed %d at (%d, %d)", value, row, col)
        return MoveResult(True, "Puzzle solved!" if solved else "", set(self.conflicts), solved)

    def select_cell(self, row: int, col: int) -> bool:
        if not _in_range(row, col):
            return False
        self.selected = (row, col)
        return True

    def clear_selection(self) -> None:
        self.selected = NO_SELECTION

    def input_value(self, value: int) -> MoveResult:
        """Route numeric input to the selected cell."""
        if self.selected == NO_SELECTION:
            return MoveResult(False, "No cell selected", set(self.conflicts))
        return self.place_value(self.selected[0], self.selected[1], value)

    def toggle_note(self, row: int, col: int, value: int) -> bool:
        """
        Add or remove a pencil mark on an empty editable cell.

        Notes are the player's own annotations and are independent of the
        computed candidates.
        """
        if (not self.game_active or not _in_range(row, col) or not _is_digit(value, 1)
                or not self.current.is_empty(row, col) or self.is_fixed(row, col)):
            return False
        marks = self.notes.setdefault((row, col), set())
        if value in marks:
            marks.remove(value)
            if not marks:
                del self.notes[(row, col)]
        else:
            marks.add(value)
        return True

    def undo(self) -> bool:
        if not self.game_active or self.history.undo(self.current) is None:
            return False
        self._refresh()
        return True

    def redo(self) -> bool:
        if not self.game_active or self.history.redo(self.current) is None:
            return False
        self._refresh()
        self._check_win()
        return True

    def tick(self, seconds: int = 1) -> None:
        """Advance the clock; stopped while no game is active."""
        if self.game_active:
            self.elapsed_seconds += seconds

    # ------------------------------------------------------------------
    # Assistance
    # ------------------------------------------------------------------

    def request_hint(self, apply: bool = True) -> Optional[Hint]:
        """
        Suggest, and by default play, the next value.

        Wrong entries are corrected first. Otherwise the easiest single is
        used, and when singles are exhausted the value is read from the
        solution. Technique.NONE marks hints that come from the solution.
        """
        if not self.game_active:
            return None

        incorrect = self._incorrect_cells()
        if incorrect:
            row, col = min(incorrect)
            hint = Hint(row, col, self.solved.get(row, col), Technique.NONE)
        else:
            hint = find_hint(self.current, self.candidates)
            if hint is None:
                empty = self.current.get_empty_cells()
                if not empty:
                    return None
                row, col = empty[0]
                hint = Hint(row, col, self.solved.get(row, col), Technique.NONE)

        if apply:
            self.place_value(hint.row, hint.col, hint.value)
        return hint

    def reveal_solution(self) -> bool:
        """Fill the board with the solution and end the game."""
        if self.solved is None:
            return False
        self.current = self.solved.copy()
        self.history.clear()
        self.notes = {}
        self._refresh()
        self.game_active = False
        return True

    def check_progress(self) -> ProgressReport:
        return ProgressReport(
            incorrect_cells=self._incorrect_cells(),
            empty_cells=self.current.count_empty(),
            complete=self.current.is_solved(),
        )

    def reset_to_initial(self) -> None:
        """Throw away all player input and restart the clock."""
        self.current = self.initial.copy()
        self.history.clear()
        self.notes = {}
        self.selected = NO_SELECTION
        self.elapsed_seconds = 0
        self._refresh()
        self.game_active = self.solved is not None and not self.current.is_solved()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_candidates(self, row: int, col: int) -> Set[int]:
        return set(self.candidates.get((row, col), ()))

    def find_conflicts(self) -> Set[Cell]:
        return find_conflicts(self.current)

    def estimate_difficulty(self) -> Technique:
        return estimate_difficulty(self.initial)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            current=self.current.copy(),
            initial=self.initial.copy(),
            solved=self.solved.copy() if self.solved is not None else None,
            elapsed_seconds=self.elapsed_seconds,
            difficulty=self.difficulty,
            rating=self.rating,
            selected=self.selected,
            history=list(self.history.entries),
            history_pointer=self.history.pointer,
            game_active=self.game_active,
            notes={cell: set(values) for cell, values in self.notes.items()},
        )

    def save(self) -> str:
        """Serialize the session for an external store."""
        return self.snapshot().to_json()

    def restore(self, blob: Optional[str]) -> bool:
        """
        Rebuild the session from a saved blob.

        A missing or corrupted blob is discarded and a fresh puzzle at the
        default difficulty is started instead.

        Returns:
            True if the saved session was restored.
        """
        if not blob:
            logger.info("No saved session, starting a new puzzle")
            self.new_puzzle()
            return False
        try:
            snapshot = SessionSnapshot.from_json(blob)
        except SnapshotError as e:
            logger.warning("Discarding corrupted session snapshot: %s", e)
            self.new_puzzle()
            return False

        self.restore_snapshot(snapshot)
        return True

    def restore_snapshot(self, snapshot: SessionSnapshot) -> None:
        self.initial = snapshot.initial.copy()
        self.current = snapshot.current.copy()
        self.solved = snapshot.solved.copy() if snapshot.solved is not None else None
        self.elapsed_seconds = snapshot.elapsed_seconds
        self.difficulty = snapshot.difficulty
        self.rating = snapshot.rating
        self.selected = snapshot.selected
        self.history = HistoryLedger(snapshot.history, snapshot.history_pointer,
                                     limit=self.config.history_limit)
        self.game_active = snapshot.game_active
        self.notes = {cell: set(values) for cell, values in snapshot.notes.items()}
        self._refresh()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        """Recompute derived state after an out-of-band board change."""
        self.candidates = compute_candidates(self.current)
        self.conflicts = find_conflicts(self.current)

    def _check_win(self) -> bool:
        if self.current.is_solved():
            self.game_active = False
            logger.info("Puzzle solved in %d seconds", self.elapsed_seconds)
            return True
        return False

    def _incorrect_cells(self) -> Set[Cell]:
        if self.solved is None:
            return set()
        return {
            (row, col)
            for row in range(SIZE)
            for col in range(SIZE)
            if not self.current.is_empty(row, col)
            and self.current.get(row, col) != self.solved.get(row, col)
        }


def _in_range(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def _is_digit(value, low: int) -> bool:
    # bool is an int subclass but never a cell value
    return isinstance(value, int) and not isinstance(value, bool) and low <= value <= SIZE
