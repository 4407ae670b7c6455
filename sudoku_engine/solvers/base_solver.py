"""Common solver interface: run on a copy, count the work, time it."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any
import time

from ..core.board import SudokuBoard


@dataclass
class SolverStats:
    """Counters from one solver run."""
    algorithm: str = ""
    solved: bool = False
    time_seconds: float = 0.0

    # Board progress
    empty_cells: int = 0
    remaining_cells: int = 0

    # Search effort
    iterations: int = 0
    backtracks: int = 0
    placements: int = 0

    # Display name of the hardest logic step; empty for search solvers
    hardest_technique: str = ""
    error: Optional[str] = None

    @property
    def filled_cells(self) -> int:
        """Cells the solver managed to fill before finishing or giving up."""
        return self.empty_cells - self.remaining_cells

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: SudokuBoard) -> tuple[Optional[SudokuBoard], SolverStats]:
        """
        Solve a copy of the puzzle and record how far the solver got.

        Giving up is a normal outcome: the solution is None and
        remaining_cells tells how many cells were still empty. A puzzle the
        board class refuses to handle is recorded in stats.error.

        Args:
            board: The puzzle to solve. It is never modified.

        Returns:
            Tuple of (solution or None, stats).
        """
        self.stats = SolverStats(algorithm=self.name, empty_cells=board.count_empty())
        work = board.copy()
        start_time = time.perf_counter()

        try:
            solution = self._solve(work)
        except ValueError as e:
            self.stats.error = str(e)
            solution = None

        self.stats.time_seconds = time.perf_counter() - start_time
        self.stats.solved = solution is not None and solution.is_solved()
        self.stats.remaining_cells = work.count_empty()
        return solution, self.stats

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """
        Fill board in place.

        Returns:
            The solved board, or None if the solver gave up.
        """
