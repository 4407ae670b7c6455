"""Sudoku puzzle engine: generation, human-style solving, rating and play sessions."""

from .core import SudokuBoard
from .generator import SudokuGenerator, Difficulty
from .engine import SudokuEngine, EngineConfig

__all__ = ["SudokuBoard", "SudokuGenerator", "Difficulty", "SudokuEngine", "EngineConfig"]
