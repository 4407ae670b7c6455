"""Difficulty estimation from the techniques needed to solve a puzzle."""

from __future__ import annotations

from ..core.board import SudokuBoard
from ..solvers.technique_solver import Technique, solve_with_singles


def estimate_difficulty(puzzle: SudokuBoard) -> Technique:
    """
    Rate a puzzle by the hardest technique a singles-only solve needs.

    The puzzle is copied and solved with naked singles, falling back to
    hidden singles only when a pass finds no naked single. If singles stall
    before the board is full, the puzzle is put in the NAKED_PAIR bucket
    without checking whether pairs would actually help.

    This is a coarse three-bucket upper-approximation, not a calibrated
    score: Easy, Medium, or Hard (anything beyond singles).
    """
    work = puzzle.copy()
    hardest = solve_with_singles(work)
    if not work.is_complete():
        hardest = Technique.NAKED_PAIR
    return hardest


def rating_label(puzzle: SudokuBoard) -> str:
    """Human readable difficulty label for a puzzle."""
    return estimate_difficulty(puzzle).label
