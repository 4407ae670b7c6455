"""Randomized depth-first backtracking filler."""

from __future__ import annotations
import random
from typing import Optional

from .base_solver import BaseSolver, SolverStats
from ..core.board import SudokuBoard, SIZE
from ..core.validator import is_legal_placement


def fill_board(board: SudokuBoard, shuffle: bool = True,
               stats: Optional[SolverStats] = None) -> bool:
    """
    Complete a partially filled board in place.

    Cells are visited in row-major order and candidate values are tried in
    a freshly shuffled order at every cell, which is what makes generated
    solutions differ between runs. Running out of options is a normal
    outcome: the board is left as it was and False is returned.

    Args:
        board: Board to complete. Only empty cells are written.
        shuffle: Try values in random order (False tries 1..9 ascending).
        stats: Optional stats object to count iterations and backtracks.

    Returns:
        True if the board was completed, False if no completion exists.
    """
    # Existing duplicates would never be caught by per-placement checks
    if not board.is_valid():
        return False
    return _fill(board, shuffle, stats)


def _fill(board: SudokuBoard, shuffle: bool, stats: Optional[SolverStats]) -> bool:
    if stats is not None:
        stats.iterations += 1

    for row in range(SIZE):
        for col in range(SIZE):
            if not board.is_empty(row, col):
                continue

            values = list(range(1, SIZE + 1))
            if shuffle:
                random.shuffle(values)

            for value in values:
                if is_legal_placement(board, row, col, value):
                    board.set(row, col, value)
                    if stats is not None:
                        stats.placements += 1
                    if _fill(board, shuffle, stats):
                        return True
                    board.clear(row, col)
                    if stats is not None:
                        stats.backtracks += 1

            return False

    return True


class BacktrackingSolver(BaseSolver):
    """
    Exhaustive solver built on fill_board.

    Authoritative but potentially expensive: it answers whether any
    completion of the puzzle exists.
    """

    name = "Backtracking"

    def __init__(self, shuffle: bool = False):
        """
        Initialize the solver.

        Args:
            shuffle: Randomize value order. Deterministic by default so
                     that multi-solution puzzles always solve the same way.
        """
        super().__init__()
        self.shuffle = shuffle

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        if fill_board(board, shuffle=self.shuffle, stats=self.stats):
            return board
        return None
