"""Core module for Sudoku board representation and validation."""

from .board import SudokuBoard, Cell
from .validator import is_legal_placement, find_conflicts, validate_solution
from .candidates import CandidateMap, compute_candidates, update_candidates

__all__ = [
    "SudokuBoard",
    "Cell",
    "is_legal_placement",
    "find_conflicts",
    "validate_solution",
    "CandidateMap",
    "compute_candidates",
    "update_candidates",
]
