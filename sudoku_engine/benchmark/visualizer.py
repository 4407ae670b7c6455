"""Visualization utilities for generation survey results."""

from __future__ import annotations
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult

RATING_ORDER = ["Easy", "Medium", "Hard", "Unknown"]
DIFFICULTY_ORDER = ["easy", "medium", "hard"]


class Visualizer:
    """
    Chart generator for generation survey results.

    Creates charts comparing difficulties by clue count, generation time
    and estimated rating.
    """

    COLORS = {
        "easy": "#2ecc71",    # Green
        "medium": "#f39c12",  # Orange
        "hard": "#e74c3c",    # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _difficulties(self) -> List[str]:
        present = {r.difficulty for r in self.results}
        return [d for d in DIFFICULTY_ORDER if d in present]

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_clue_distribution(),
            self.plot_generation_time(),
            self.plot_rating_distribution(),
        ]

    def plot_clue_distribution(self) -> str:
        """Create box plot of clue counts per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        data = [[r.clues for r in self.results if r.difficulty == d] for d in difficulties]

        bp = ax.boxplot(data, patch_artist=True)
        ax.set_xticks(range(1, len(difficulties) + 1))
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        for patch, diff in zip(bp['boxes'], difficulties):
            patch.set_facecolor(self.COLORS.get(diff, "#95a5a6"))
            patch.set_alpha(0.7)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Clues', fontsize=12)
        ax.set_title('Clue Count by Difficulty', fontsize=14, fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "clue_distribution.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_generation_time(self) -> str:
        """Create bar chart of average generation time per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        avg_times = [
            np.mean([r.generation_seconds for r in self.results if r.difficulty == d])
            for d in difficulties
        ]
        colors = [self.COLORS.get(d, "#95a5a6") for d in difficulties]

        bars = ax.bar([d.capitalize() for d in difficulties], avg_times,
                      color=colors, edgecolor='black', linewidth=0.5)

        for bar, value in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{value:.3f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Generation Time (seconds)', fontsize=12)
        ax.set_title('Generation Time by Difficulty', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "generation_time.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_rating_distribution(self) -> str:
        """Create grouped bar chart of estimated ratings per requested difficulty."""
        fig, ax = plt.subplots(figsize=(12, 6))

        difficulties = self._difficulties()
        ratings = [r for r in RATING_ORDER if any(res.estimated_rating == r for res in self.results)]

        x = np.arange(len(ratings))
        width = 0.8 / max(len(difficulties), 1)

        for i, diff in enumerate(difficulties):
            counts = [
                sum(1 for r in self.results if r.difficulty == diff and r.estimated_rating == rating)
                for rating in ratings
            ]
            offset = (i - len(difficulties) / 2 + 0.5) * width
            ax.bar(x + offset, counts, width,
                   label=diff.capitalize(),
                   color=self.COLORS.get(diff, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Estimated Rating', fontsize=12)
        ax.set_ylabel('Puzzles', fontsize=12)
        ax.set_title('Estimated Rating by Requested Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(ratings)
        ax.legend(title='Difficulty')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "rating_distribution.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Generation Summary\n",
            "| Difficulty | Puzzles | Avg Clues | Avg Time | Easy | Medium | Hard |",
            "|------------|---------|-----------|----------|------|--------|------|"
        ]

        for diff in self._difficulties():
            diff_results = [r for r in self.results if r.difficulty == diff]
            avg_clues = np.mean([r.clues for r in diff_results])
            avg_time = np.mean([r.generation_seconds for r in diff_results])
            counts = [sum(1 for r in diff_results if r.estimated_rating == rating)
                      for rating in ("Easy", "Medium", "Hard")]

            lines.append(
                f"| {diff.capitalize()} | {len(diff_results)} | {avg_clues:.1f} | "
                f"{avg_time:.4f}s | {counts[0]} | {counts[1]} | {counts[2]} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
