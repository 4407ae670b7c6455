"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .backtracking_solver import BacktrackingSolver, fill_board
from .technique_solver import (
    Technique,
    Hint,
    TechniqueSolver,
    apply_naked_singles,
    apply_hidden_singles,
    apply_singles,
    solve_with_singles,
    find_hint,
)

__all__ = [
    "BaseSolver",
    "SolverStats",
    "BacktrackingSolver",
    "fill_board",
    "Technique",
    "Hint",
    "TechniqueSolver",
    "apply_naked_singles",
    "apply_hidden_singles",
    "apply_singles",
    "solve_with_singles",
    "find_hint",
]
