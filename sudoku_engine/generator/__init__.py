"""Generator module for creating and rating Sudoku puzzles."""

from .generator import SudokuGenerator, Difficulty, GeneratedPuzzle
from .rating import estimate_difficulty, rating_label

__all__ = ["SudokuGenerator", "Difficulty", "GeneratedPuzzle", "estimate_difficulty", "rating_label"]
