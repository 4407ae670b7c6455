"""Validation utilities for Sudoku boards."""

from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING, Set

from .board import SIZE, Cell

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_legal_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if value can legally occupy (row, col) on the given board.

    The cell itself is ignored, so the check works both before and after
    the value has been written. Value 0 (clearing) is always legal.

    Args:
        board: The Sudoku board.
        row: Row index.
        col: Column index.
        value: Value to check (0 to 9).

    Returns:
        True if no other cell in the row, column or box holds value.
    """
    if value == 0:
        return True
    if value < 1 or value > SIZE:
        return False

    # The cell's own occurrence is allowed once in each unit
    own = 1 if board.get(row, col) == value else 0
    for unit in (board.get_row(row), board.get_col(col), board.get_box(row, col)):
        if np.count_nonzero(unit == value) > own:
            return False

    return True


def find_conflicts(board: SudokuBoard) -> Set[Cell]:
    """
    Find every cell currently violating row, column or box uniqueness.

    Both cells of each clashing pair are reported, so the result is
    symmetric. This says what looks wrong now, not whether the board
    can still be solved.
    """
    conflicts: Set[Cell] = set()
    for row in range(SIZE):
        for col in range(SIZE):
            value = board.get(row, col)
            if value == 0:
                continue
            for peer_row, peer_col in board.get_peers(row, col):
                if board.get(peer_row, peer_col) == value:
                    conflicts.add((row, col))
                    conflicts.add((peer_row, peer_col))
    return conflicts


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches puzzle clues.
    """
    for i in range(SIZE):
        for j in range(SIZE):
            if not puzzle.is_empty(i, j):
                if puzzle.get(i, j) != solution.get(i, j):
                    return False

    return solution.is_solved()
