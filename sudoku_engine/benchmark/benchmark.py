"""Survey of puzzle generation: timing, clue counts and ratings per difficulty."""

from __future__ import annotations
import json
import os
import time
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from tqdm import tqdm

from ..generator import SudokuGenerator, Difficulty, GeneratedPuzzle, estimate_difficulty
from ..solvers import BaseSolver, BacktrackingSolver, TechniqueSolver


@dataclass
class BenchmarkResult:
    """Measurements for one generated puzzle."""
    puzzle_id: int
    difficulty: str
    puzzle: str
    clues: int
    removed: int
    generation_seconds: float
    generation_rating: str
    estimated_rating: str
    solve_seconds: Dict[str, float] = field(default_factory=dict)
    solved_by: Dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "puzzle": self.puzzle,
            "clues": self.clues,
            "removed": self.removed,
            "generation_seconds": self.generation_seconds,
            "generation_rating": self.generation_rating,
            "estimated_rating": self.estimated_rating,
            "solve_seconds": dict(self.solve_seconds),
            "solved_by": dict(self.solved_by),
        }


class Benchmark:
    """
    Generates puzzles per difficulty and measures how they came out.

    For every puzzle it records generation time, clue count, the rating
    tracked during carving and the rating from a fresh estimate, and
    how each solver fares on it.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        solvers: Optional[Dict[str, BaseSolver]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: List of difficulties to test (default: all).
            solvers: Dict of solver_name -> solver_instance (default: both).
            seed: Random seed for reproducibility.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.seed = seed

        if solvers is None:
            self.solvers = {
                "Backtracking": BacktrackingSolver(),
                "Singles": TechniqueSolver(),
            }
        else:
            self.solvers = solvers

        self.results: List[BenchmarkResult] = []
        self.puzzles: Dict[str, List[GeneratedPuzzle]] = {}

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Generate and measure all puzzles.

        Returns:
            List of BenchmarkResult objects.
        """
        generator = SudokuGenerator(seed=self.seed)
        self.results = []
        self.puzzles = {}

        total = len(self.difficulties) * self.puzzles_per_difficulty
        pbar = tqdm(total=total, desc="Generating", disable=not show_progress)

        for difficulty in self.difficulties:
            generated_list = []
            for puzzle_id in range(self.puzzles_per_difficulty):
                start_time = time.perf_counter()
                generated = generator.generate(difficulty)
                elapsed = time.perf_counter() - start_time

                generated_list.append(generated)
                self.results.append(self._measure(puzzle_id, generated, elapsed))
                pbar.update(1)
            self.puzzles[difficulty.value] = generated_list

        pbar.close()
        return self.results

    def _measure(self, puzzle_id: int, generated: GeneratedPuzzle, elapsed: float) -> BenchmarkResult:
        """Rate and solve a single generated puzzle."""
        result = BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=generated.difficulty.value,
            puzzle=generated.puzzle.to_string(),
            clues=generated.puzzle.count_filled(),
            removed=generated.removed,
            generation_seconds=elapsed,
            generation_rating=generated.rating.label,
            estimated_rating=estimate_difficulty(generated.puzzle).label,
        )
        for solver_name, solver in self.solvers.items():
            _, stats = solver.solve(generated.puzzle)
            result.solve_seconds[solver_name] = stats.time_seconds
            result.solved_by[solver_name] = stats.solved
        return result

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics grouped by difficulty."""
        summary = {
            "total_puzzles": len(self.results),
            "solvers_tested": list(self.solvers.keys()),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_difficulty": {}
        }

        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if not diff_results:
                continue

            times = [r.generation_seconds for r in diff_results]
            clues = [r.clues for r in diff_results]
            ratings: Dict[str, int] = {}
            for r in diff_results:
                ratings[r.estimated_rating] = ratings.get(r.estimated_rating, 0) + 1

            solver_rates = {}
            for solver_name in self.solvers:
                solved = sum(1 for r in diff_results if r.solved_by.get(solver_name))
                solver_rates[solver_name] = solved / len(diff_results) * 100

            summary["results_by_difficulty"][difficulty.value] = {
                "avg_generation_seconds": sum(times) / len(times),
                "max_generation_seconds": max(times),
                "avg_clues": sum(clues) / len(clues),
                "min_clues": min(clues),
                "max_clues": max(clues),
                "rating_counts": ratings,
                "solve_rate": solver_rates,
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save survey results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        puzzles_dir = os.path.join(output_dir, "puzzles")
        for difficulty, puzzles in self.puzzles.items():
            diff_dir = os.path.join(puzzles_dir, difficulty)
            SudokuGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty}")

        print(f"Results and puzzles saved to {output_dir}")
