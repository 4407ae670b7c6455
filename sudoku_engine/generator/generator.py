"""Sudoku puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import logging
import os
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import numpy as np

from ..core.board import SudokuBoard, SIZE
from ..solvers.backtracking_solver import fill_board
from ..solvers.technique_solver import Technique, solve_with_singles

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Difficulty levels for Sudoku puzzles."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def cells_to_remove(self) -> int:
        """Number of cells carved out of the solved board."""
        counts = {
            Difficulty.EASY: 30,
            Difficulty.MEDIUM: 40,
            Difficulty.HARD: 50,
        }
        return counts[self]


@dataclass
class GeneratedPuzzle:
    """A carved puzzle with its reference solution and rating."""
    puzzle: SudokuBoard
    solution: SudokuBoard
    difficulty: Difficulty
    rating: Technique
    removed: int


class SudokuGenerator:
    """
    Generator for Sudoku puzzles with various difficulty levels.

    Algorithm:
    1. Fill an empty board with randomized backtracking
    2. Visit cells in random order and tentatively clear each one
    3. Keep a removal if singles (cheap) or backtracking (authoritative)
       can still complete the puzzle, otherwise restore the cell

    Solutions are not checked for uniqueness.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
        """
        if seed is not None:
            random.seed(seed)
            np.random.seed(seed)

    def generate(self, difficulty: Difficulty = Difficulty.MEDIUM) -> GeneratedPuzzle:
        """
        Generate a Sudoku puzzle with the specified difficulty.

        Args:
            difficulty: Desired difficulty level.

        Returns:
            The puzzle, its solution and the generation-time rating.
        """
        solution = self._generate_complete_board()
        puzzle, rating, removed = self._remove_cells(solution, difficulty)

        logger.debug(
            "Generated %s puzzle: removed %d/%d cells, rating %s",
            difficulty.value, removed, difficulty.cells_to_remove, rating.display_name,
        )
        return GeneratedPuzzle(
            puzzle=puzzle,
            solution=solution,
            difficulty=difficulty,
            rating=rating,
            removed=removed,
        )

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIUM) -> List[GeneratedPuzzle]:
        """
        Generate multiple puzzles of the same difficulty.

        Args:
            count: Number of puzzles to generate.
            difficulty: Desired difficulty level.
        """
        return [self.generate(difficulty) for _ in range(count)]

    def _generate_complete_board(self) -> SudokuBoard:
        """Generate a complete valid Sudoku board using backtracking."""
        board = SudokuBoard()
        # An empty board always has a completion
        fill_board(board)
        return board

    def _remove_cells(self, solution: SudokuBoard, difficulty: Difficulty):
        """
        Carve cells out of a complete solution.

        Returns:
            Tuple of (puzzle, hardest technique needed, cells removed).
        """
        puzzle = solution.copy()
        cells_to_remove = difficulty.cells_to_remove

        positions = [(i, j) for i in range(SIZE) for j in range(SIZE)]
        random.shuffle(positions)

        removed = 0
        rating = Technique.NONE

        for row, col in positions:
            if removed >= cells_to_remove:
                break
            if puzzle.is_empty(row, col):
                continue

            original_value = puzzle.get(row, col)
            puzzle.clear(row, col)

            needed = self._required_technique(puzzle)
            if needed is None:
                puzzle.set(row, col, original_value)
                continue

            removed += 1
            rating = max(rating, needed)

        return puzzle, rating, removed

    @staticmethod
    def _required_technique(puzzle: SudokuBoard) -> Optional[Technique]:
        """
        Check that a tentatively carved puzzle is still solvable.

        Returns:
            The technique tier the solve needed, or None if unsolvable.
        """
        work = puzzle.copy()
        technique = solve_with_singles(work)
        if work.is_solved():
            return technique

        if fill_board(puzzle.copy()):
            return Technique.NAKED_PAIR
        return None

    @staticmethod
    def save_to_folder(puzzles: List[GeneratedPuzzle], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: Generated puzzles.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, generated in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(generated.puzzle.to_string())
                f.write(f"\n\nRating: {generated.rating.label}")
                f.write("\n\nPretty format:\n")
                f.write(str(generated.puzzle))
                f.write("\n\nSolution:\n")
                f.write(generated.solution.to_string())
                f.write("\n")
