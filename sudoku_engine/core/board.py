"""Sudoku board representation and the 81-character puzzle codec."""

from __future__ import annotations
import re
import numpy as np
from typing import List, Tuple, Optional, Set

SIZE = 9
BOX_SIZE = 3

Cell = Tuple[int, int]

_NON_DIGITS = re.compile(r"[^0-9]")


class SudokuBoard:
    """
    A standard 9x9 Sudoku grid.

    Values are integers in [0, 9] where 0 means empty. Boxes (blocks) are
    the nine 3x3 sub-grids addressed by (row // 3, col // 3).
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid. If None, creates an empty board.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise ValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        new_board = SudokuBoard()
        new_board.grid = self.grid.copy()
        return new_board

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                         box_col:box_col + BOX_SIZE].flatten()

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Get all valid candidate values for an empty cell.

        Returns:
            Set of values (1 to 9) not used in the cell's row, column or box.
            Returns empty set if cell is not empty.
        """
        if not self.is_empty(row, col):
            return set()

        used = set(self.get_row(row).tolist())
        used |= set(self.get_col(col).tolist())
        used |= set(self.get_box(row, col).tolist())

        return set(range(1, SIZE + 1)) - used

    def get_peers(self, row: int, col: int) -> Set[Cell]:
        """
        Get all peer cell positions (those in same row, column, or box).

        Returns:
            Set of (r, c) tuples, excluding (row, col) itself.
        """
        peers = set()
        for i in range(SIZE):
            peers.add((row, i))
            peers.add((i, col))

        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        for i in range(BOX_SIZE):
            for j in range(BOX_SIZE):
                peers.add((box_row + i, box_col + j))

        peers.remove((row, col))
        return peers

    def get_empty_cells(self) -> List[Cell]:
        """Get list of all empty cell positions in row-major order."""
        empty = []
        for i in range(SIZE):
            for j in range(SIZE):
                if self.is_empty(i, j):
                    empty.append((i, j))
        return empty

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        for i in range(SIZE):
            row = self.get_row(i)
            non_zero = row[row != 0]
            if len(non_zero) != len(set(non_zero)):
                return False

        for j in range(SIZE):
            col = self.get_col(j)
            non_zero = col[col != 0]
            if len(non_zero) != len(set(non_zero)):
                return False

        for box_row in range(0, SIZE, BOX_SIZE):
            for box_col in range(0, SIZE, BOX_SIZE):
                box = self.get_box(box_row, box_col)
                non_zero = box[box != 0]
                if len(non_zero) != len(set(non_zero)):
                    return False

        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    def to_string(self) -> str:
        """Serialize to 81 row-major digits, 0 for empty cells."""
        return ''.join(str(v) for v in self.grid.flatten())

    @classmethod
    def parse(cls, text: str) -> Optional[SudokuBoard]:
        """
        Lenient parser for user-supplied puzzle strings.

        Every non-digit character is stripped first, so grids pasted with
        separators or line breaks are accepted.

        Returns:
            The board, or None unless exactly 81 digits remain.
        """
        if text is None:
            return None
        digits = _NON_DIGITS.sub('', text)
        if len(digits) != SIZE * SIZE:
            return None
        grid = np.array([int(c) for c in digits], dtype=np.int32).reshape(SIZE, SIZE)
        return cls(grid)

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from a strict string representation.

        Args:
            s: String of length 81. 0 or . for empty, 1-9 for values.
        """
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        grid = np.zeros((SIZE, SIZE), dtype=np.int32)
        for idx, c in enumerate(s):
            if c == '.':
                continue
            if not c.isdigit():
                raise ValueError(f"Invalid character {c!r} at position {idx}")
            grid[idx // SIZE, idx % SIZE] = int(c)

        return cls(grid)

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> SudokuBoard:
        """Create a board from a 2D list."""
        return cls(np.array(data, dtype=np.int32))

    def to_2d_list(self) -> List[List[int]]:
        """Convert the board to a nested list of ints."""
        return self.grid.tolist()

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
