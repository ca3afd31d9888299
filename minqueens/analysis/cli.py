"""Command-line interface and high-level pipelines for solver experiments.

This module wires together configuration loading and execution of batch
experiments (sequential or process-parallel), followed by CSV export and
charts. It isolates I/O, argument parsing, and progress reporting from the
core search modules so that the rest of the codebase remains easy to test
programmatically.
"""
from __future__ import annotations

import argparse
import os
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from . import settings
from .experiments import run_experiments, run_experiments_parallel
from .plots import plot_and_save
from .reporting import save_raw_data_to_csv, save_results_to_csv
from config_manager import ConfigManager
from minqueens.search import mc_nqueens
from minqueens.utils import is_valid_solution, naive_violations


# ------------- Utils --------------------------------------------------------

def parse_n_values(n_args: Optional[List[str]]) -> Optional[List[int]]:
    """Normalize ``--n`` CLI inputs into a sorted list of unique board sizes.

    Accepts repeated flags (e.g., ``--n 8 --n 16``) and comma-separated lists
    (e.g., ``--n 8,16,32``). Returns ``None`` when no value is provided so that
    callers can fall back to the configured default set.
    """
    if not n_args:
        return None
    selected: List[int] = []
    for entry in n_args:
        for token in entry.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                selected.append(int(token))
            except ValueError as exc:
                raise ValueError(f"Invalid board size '{token}'") from exc
    return sorted(set(selected)) or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and copy its values into ``settings``.

    Missing sections or keys leave the current module defaults untouched.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.N_VALUES = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)
        base_seed = experiment_settings.get("base_seed", settings.BASE_SEED)
        settings.BASE_SEED = None if base_seed is None else int(base_seed)
        settings.RUNS_PER_N = int(experiment_settings.get("runs_per_n", settings.RUNS_PER_N))

    search_settings = config_mgr.get_search_settings()
    if search_settings:
        settings.MAX_ATTEMPTS = int(search_settings.get("max_attempts", settings.MAX_ATTEMPTS))
        settings.PARALLEL_RECOUNT = bool(search_settings.get("parallel_recount", settings.PARALLEL_RECOUNT))

    if settings.RUNS_PER_N < 1 or settings.MAX_ATTEMPTS < 1:
        raise ValueError("runs_per_n and max_attempts must be >= 1")
    return config_mgr


# ------------- Pipeline -----------------------------------------------------

def run_pipeline(mode: str = "parallel", validate: bool = False, plots: bool = True) -> None:
    """Run the configured batch, then export CSVs and (optionally) charts."""
    os.makedirs(settings.OUT_DIR, exist_ok=True)
    print("\n============================================")
    print(f"MIN-CONFLICTS EXPERIMENTS ({mode.upper()})")
    print("============================================")
    print(f"N values: {settings.N_VALUES}")
    print(f"Runs per N: {settings.RUNS_PER_N}, max attempts per restart: {settings.MAX_ATTEMPTS}")
    if mode == "parallel":
        print(f"Worker processes: {settings.NUM_PROCESSES} (available CPU cores: {os.cpu_count()})")

    start_total = perf_counter()
    runner = run_experiments_parallel if mode == "parallel" else run_experiments
    results = runner(
        settings.N_VALUES,
        runs=settings.RUNS_PER_N,
        progress_label="Experiments",
        validate=validate,
    )

    save_results_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    save_raw_data_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    if plots:
        plot_and_save(results, settings.N_VALUES, settings.OUT_DIR)

    total_time = perf_counter() - start_total
    print(f"\nPipeline completed in {total_time:.1f}s")


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, seeded smoke test of the solver and exporters at N=8.

    Verifies that:
    - the solver returns a valid zero-violation board for N=8 under fixed
      seeds, and the same seed reproduces the same board;
    - the experiment pipeline produces non-empty CSVs in a temporary folder.
    """
    print("Running quick regression tests (N=8)...")

    first = None
    for seed in range(5):
        solution, violations, restarts, moves, elapsed = mc_nqueens(8, seed=seed)
        if violations != 0 or not is_valid_solution(solution) or naive_violations(solution) != 0:
            raise AssertionError(f"Solver returned an invalid board for N=8, seed={seed}: {solution}.")
        if first is None:
            first = solution
        print(f"  seed={seed}: {solution} restarts={restarts} moves={moves} time={elapsed:.4f}s")

    if mc_nqueens(8, seed=0).solution != first:
        raise AssertionError("Same seed produced a different board for N=8.")

    results = run_experiments([8], runs=3, progress_label="Quick regression experiments", validate=True)
    if results[8]["successes"] != 3:
        raise AssertionError("Experiment batch reported failed runs for N=8.")

    with tempfile.TemporaryDirectory() as tmpdir:
        for path in (
            save_results_to_csv(results, [8], tmpdir),
            save_raw_data_to_csv(results, [8], tmpdir),
        ):
            if not Path(path).exists() or Path(path).stat().st_size == 0:
                raise AssertionError(f"CSV was not generated successfully during quick tests: {path}")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Run min-conflicts N-Queens experiment batches.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="parallel",
        help="Execution mode: sequential runs in this process, or parallel runs on a process pool (default).",
    )
    parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    parser.add_argument(
        "--n",
        action="append",
        help="Board sizes to run (comma-separated or multiple flags). Default: from configuration.",
    )
    parser.add_argument("--runs", type=int, default=None, help="Runs per board size (overrides configuration).")
    parser.add_argument("--seed", type=int, default=None, help="Base seed for a reproducible batch.")
    parser.add_argument("--tag", default=None, help="Label appended to output filenames.")
    parser.add_argument("--no-plots", action="store_true", help="Skip chart generation.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests (N=8) and exit.")
    parser.add_argument("--validate", action="store_true", help="Re-check every returned board with the reference counters.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        apply_configuration(args.config)
        n_values = parse_n_values(args.n)
        if n_values:
            settings.N_VALUES = n_values
        if args.runs is not None or args.seed is not None:
            settings.set_runs(
                runs_per_n=args.runs if args.runs is not None else settings.RUNS_PER_N,
                max_attempts=settings.MAX_ATTEMPTS,
                base_seed=args.seed if args.seed is not None else settings.BASE_SEED,
            )
        if args.tag:
            settings.RUN_TAG = args.tag
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    try:
        run_pipeline(args.mode, validate=args.validate, plots=not args.no_plots)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user. Cleaning up workers...")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
