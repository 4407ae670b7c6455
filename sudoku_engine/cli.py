"""Command-line interface for the Sudoku engine."""

import argparse
import json
import logging
import os
import sys

from .generator import SudokuGenerator, Difficulty, estimate_difficulty
from .solvers import BacktrackingSolver, TechniqueSolver
from .core.board import SudokuBoard
from .core.validator import find_conflicts
from .engine import SudokuEngine, EngineConfig, LoadStatus

DIFFICULTY_CHOICES = [d.value for d in Difficulty] + ["all"]


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku Puzzle Engine: generation, rating, hints and solving",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 medium difficulty puzzles
  sudoku-engine generate --count 5 --difficulty medium

  # Solve a puzzle with backtracking
  sudoku-engine solve --algorithm backtracking --puzzle "530070000600195000..."

  # Rate a puzzle and ask for a hint
  sudoku-engine rate --puzzle "530070000600195000..."
  sudoku-engine hint --puzzle "530070000600195000..."

  # Survey generated puzzles
  sudoku-engine benchmark --puzzles 10 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON config file (default_difficulty, seed, history_limit)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES,
        default=None,
        help="Difficulty level (default: from config, else medium)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--algorithm", "-a",
        choices=["backtracking", "technique", "all"],
        default="backtracking",
        help="Solving algorithm to use (default: backtracking)"
    )
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 digits, 0 for empty cells)"
    )

    rate_parser = subparsers.add_parser("rate", help="Estimate the difficulty of a puzzle")
    rate_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 digits, 0 for empty cells)"
    )

    hint_parser = subparsers.add_parser("hint", help="Show the next deduction for a puzzle")
    hint_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 digits, 0 for empty cells)"
    )

    bench_parser = subparsers.add_parser("benchmark", help="Survey generated puzzles")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES,
        default="all",
        help="Difficulty to survey (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = EngineConfig.from_json(args.config) if args.config else EngineConfig()

    if args.command == "generate":
        cmd_generate(args, config)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "rate":
        cmd_rate(args)
    elif args.command == "hint":
        cmd_hint(args, config)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _parse_puzzle_or_exit(text: str) -> SudokuBoard:
    board = SudokuBoard.parse(text)
    if board is None:
        print("Error parsing puzzle: expected exactly 81 digits")
        sys.exit(1)
    return board


def _difficulties(choice: str):
    if choice == "all":
        return list(Difficulty)
    return [Difficulty(choice)]


def cmd_generate(args, config: EngineConfig):
    """Handle the generate command."""
    seed = args.seed if args.seed is not None else config.seed
    generator = SudokuGenerator(seed=seed)
    difficulties = _difficulties(args.difficulty or config.default_difficulty.value)

    all_puzzles = []

    for difficulty in difficulties:
        print(f"\nGenerating {args.count} {difficulty.value} puzzles...")
        puzzles = generator.generate_batch(args.count, difficulty)

        for i, generated in enumerate(puzzles, 1):
            puzzle = generated.puzzle
            all_puzzles.append({
                "difficulty": difficulty.value,
                "index": i,
                "puzzle": puzzle.to_string(),
                "solution": generated.solution.to_string(),
                "clues": puzzle.count_filled(),
                "rating": generated.rating.label,
            })

            print(f"\n--- {difficulty.value.capitalize()} Puzzle {i} "
                  f"({puzzle.count_filled()} clues, rated {generated.rating.label}) ---")
            print(puzzle)

        if not args.output:
            diff_dir = os.path.join("puzzles", difficulty.value)
            SudokuGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty.value}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")
    else:
        print("\nPuzzles also saved individually in the 'puzzles/' directory")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_solve(args):
    """Handle the solve command."""
    board = _parse_puzzle_or_exit(args.puzzle)

    print("Input puzzle:")
    print(board)
    print()

    conflicts = find_conflicts(board)
    if conflicts:
        cells = ", ".join(f"({r + 1}, {c + 1})" for r, c in sorted(conflicts))
        print(f"✗ Puzzle has clashing clues at {cells}")
        sys.exit(1)

    solver_map = {
        "backtracking": ("Backtracking", BacktrackingSolver()),
        "technique": ("Singles", TechniqueSolver()),
    }
    if args.algorithm == "all":
        solvers = dict(solver_map.values())
    else:
        name, solver = solver_map[args.algorithm]
        solvers = {name: solver}

    for name, solver in solvers.items():
        print(f"Solving with {name}...")
        solution, stats = solver.solve(board)

        if stats.solved:
            print(f"✓ Solved in {stats.time_seconds:.4f}s")
            logging.getLogger(__name__).debug(
                "iterations=%d backtracks=%d placements=%d",
                stats.iterations, stats.backtracks, stats.placements,
            )
            print(solution)
        else:
            print("✗ Failed to solve")
            if stats.hardest_technique:
                print(f"  Singles alone stall with {stats.remaining_cells} of "
                      f"{stats.empty_cells} empty cells left")
        print()


def cmd_rate(args):
    """Handle the rate command."""
    board = _parse_puzzle_or_exit(args.puzzle)
    technique = estimate_difficulty(board)
    print(f"Hardest technique: {technique.display_name}")
    print(f"Rating: {technique.label}")


def cmd_hint(args, config: EngineConfig):
    """Handle the hint command."""
    engine = SudokuEngine(config)
    result = engine.load_custom_puzzle(args.puzzle)
    if result.status is not LoadStatus.LOADED:
        print(f"✗ {result.message}")
        sys.exit(1)

    hint = engine.request_hint(apply=False)
    if hint is None:
        print("The puzzle is already complete")
        return

    source = hint.technique.display_name if hint.technique else "solution lookup"
    print(f"Place {hint.value} at row {hint.row + 1}, column {hint.col + 1} ({source})")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    from .benchmark import Benchmark
    from .benchmark.visualizer import Visualizer

    difficulties = _difficulties(args.difficulty)

    print("=" * 60)
    print("SUDOKU GENERATION SURVEY")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        seed=args.seed
    )
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for diff, stats in summary["results_by_difficulty"].items():
        print(f"\n{diff.capitalize()}:")
        print(f"  Avg Clues: {stats['avg_clues']:.1f} ({stats['min_clues']}-{stats['max_clues']})")
        print(f"  Avg Generation Time: {stats['avg_generation_seconds']:.4f}s")
        print(f"  Ratings: {stats['rating_counts']}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {os.path.basename(chart)}")

    print("\n" + "=" * 60)
    print("Survey complete!")


if __name__ == "__main__":
    main()
