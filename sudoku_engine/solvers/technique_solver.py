"""Human-style solving with naked and hidden singles."""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, List

from .base_solver import BaseSolver, SolverStats
from ..core.board import SudokuBoard, SIZE, BOX_SIZE, Cell
from ..core.candidates import CandidateMap, compute_candidates
from ..core.validator import is_legal_placement


class Technique(IntEnum):
    """
    Ordered solving-technique tiers used for hints and ratings.

    NAKED_PAIR is never applied; it stands for "needs more than singles".
    """
    NONE = 0
    NAKED_SINGLE = 1
    HIDDEN_SINGLE = 2
    NAKED_PAIR = 3

    @property
    def label(self) -> str:
        """Difficulty label for a puzzle whose hardest step is this tier."""
        labels = {
            Technique.NAKED_SINGLE: "Easy",
            Technique.HIDDEN_SINGLE: "Medium",
            Technique.NAKED_PAIR: "Hard",
        }
        return labels.get(self, "Unknown")

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class Hint:
    """A single deduced placement."""
    row: int
    col: int
    value: int
    technique: Technique


ROW_UNITS: List[List[Cell]] = [[(r, c) for c in range(SIZE)] for r in range(SIZE)]
COL_UNITS: List[List[Cell]] = [[(r, c) for r in range(SIZE)] for c in range(SIZE)]
BOX_UNITS: List[List[Cell]] = [
    [(box_r + i, box_c + j) for i in range(BOX_SIZE) for j in range(BOX_SIZE)]
    for box_r in range(0, SIZE, BOX_SIZE)
    for box_c in range(0, SIZE, BOX_SIZE)
]


def find_naked_singles(board: SudokuBoard, candidates: CandidateMap) -> List[Hint]:
    """List every empty cell with exactly one candidate, in row-major order."""
    found = []
    for (row, col) in sorted(candidates):
        cell_candidates = candidates[(row, col)]
        if board.is_empty(row, col) and len(cell_candidates) == 1:
            found.append(Hint(row, col, next(iter(cell_candidates)), Technique.NAKED_SINGLE))
    return found


def _hidden_single_in_unit(
    board: SudokuBoard,
    candidates: CandidateMap,
    unit: List[Cell],
    value: int,
) -> Optional[Cell]:
    """Return the only empty cell of unit that can hold value, if there is one."""
    positions = []
    for row, col in unit:
        if board.get(row, col) == value:
            return None
        if board.is_empty(row, col) and value in candidates.get((row, col), ()):
            positions.append((row, col))
    if len(positions) == 1:
        return positions[0]
    return None


def apply_naked_singles(board: SudokuBoard, candidates: CandidateMap) -> bool:
    """
    Place every naked single found in the candidate snapshot.

    Returns:
        True if any value was placed.
    """
    progress = False
    for hint in find_naked_singles(board, candidates):
        # Stale snapshots on contradictory boards can propose clashing values
        if board.is_empty(hint.row, hint.col) and is_legal_placement(board, hint.row, hint.col, hint.value):
            board.set(hint.row, hint.col, hint.value)
            progress = True
    return progress


def apply_hidden_singles(board: SudokuBoard, candidates: CandidateMap) -> bool:
    """
    Place every hidden single, sweeping rows, then columns, then boxes.

    Returns:
        True if any value was placed.
    """
    progress = False
    for units in (ROW_UNITS, COL_UNITS, BOX_UNITS):
        for unit in units:
            for value in range(1, SIZE + 1):
                cell = _hidden_single_in_unit(board, candidates, unit, value)
                if cell is not None and is_legal_placement(board, cell[0], cell[1], value):
                    board.set(cell[0], cell[1], value)
                    progress = True
    return progress


def apply_singles(board: SudokuBoard, candidates: CandidateMap) -> bool:
    """
    One sweep of both techniques over a static candidate snapshot.

    Candidates are not re-derived between placements; callers wanting
    convergence recompute them and call again until this returns False.
    """
    naked = apply_naked_singles(board, candidates)
    hidden = apply_hidden_singles(board, candidates)
    return naked or hidden


def solve_with_singles(board: SudokuBoard, stats: Optional[SolverStats] = None) -> Technique:
    """
    Run singles to convergence, mutating board in place.

    Each pass recomputes candidates and tries naked singles first; hidden
    singles are only tried when a pass finds no naked single.

    Returns:
        The hardest technique that made progress (NONE if nothing was placed).
    """
    hardest = Technique.NONE
    while not board.is_complete():
        if stats is not None:
            stats.iterations += 1
        candidates = compute_candidates(board)
        if apply_naked_singles(board, candidates):
            hardest = max(hardest, Technique.NAKED_SINGLE)
        elif apply_hidden_singles(board, candidates):
            hardest = max(hardest, Technique.HIDDEN_SINGLE)
        else:
            break
    return hardest


def find_hint(board: SudokuBoard, candidates: Optional[CandidateMap] = None) -> Optional[Hint]:
    """
    Find the easiest next deduction without changing the board.

    Naked singles are preferred over hidden singles; hidden singles are
    searched rows, then columns, then boxes.
    """
    if candidates is None:
        candidates = compute_candidates(board)

    naked = find_naked_singles(board, candidates)
    if naked:
        return naked[0]

    for units in (ROW_UNITS, COL_UNITS, BOX_UNITS):
        for unit in units:
            for value in range(1, SIZE + 1):
                cell = _hidden_single_in_unit(board, candidates, unit, value)
                if cell is not None:
                    return Hint(cell[0], cell[1], value, Technique.HIDDEN_SINGLE)

    return None


class TechniqueSolver(BaseSolver):
    """
    Logic-only solver: naked and hidden singles, no guessing.

    Deliberately incomplete. Failing to finish a puzzle only means it
    needs techniques beyond singles, not that it has no solution.
    """

    name = "Singles"

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        if not board.is_valid():
            return None

        hardest = solve_with_singles(board, self.stats)
        self.stats.placements = self.stats.empty_cells - board.count_empty()
        self.stats.hardest_technique = hardest.display_name

        if board.is_solved():
            return board
        return None
