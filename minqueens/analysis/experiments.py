"""Batch experiment runners for the min-conflicts solver (sequential and parallel).

These routines execute repeatable batches of solver runs over a set of board
sizes and shape the outcome into per-N summaries suitable for CSV export and
plotting. Validation hooks optionally check every returned solution against
the reference counters in ``minqueens.utils``.
"""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional, Tuple

from . import settings
from .stats import (
    ExperimentResults,
    ProgressPrinter,
    SearchRecord,
    summarize_runs,
)
from minqueens.search import UNSOLVABLE_SIZES, mc_nqueens
from minqueens.utils import is_valid_solution, naive_violations

RunParams = Tuple[int, int, Optional[int], bool, bool]


def derive_seed(base_seed: Optional[int], N: int, run_index: int) -> Optional[int]:
    """Return the seed for run ``run_index`` at size ``N`` (None when unseeded)."""
    if base_seed is None:
        return None
    return base_seed * 1_000_003 + N * 10_007 + run_index


# Reusable worker (top-level so ProcessPoolExecutor can pickle it) ------------

def run_single_search(params: RunParams) -> SearchRecord:
    """Worker wrapper to invoke a single solver run (for parallel mapping)."""
    N, max_attempts, seed, parallel_recount, validate = params
    solution, violations, restarts, moves, elapsed = mc_nqueens(
        N,
        max_attempts=max_attempts,
        seed=seed,
        parallel=parallel_recount,
    )
    success = violations == 0
    if validate:
        success = success and is_valid_solution(solution) and naive_violations(solution) == 0
    return {
        "success": success,
        "restarts": restarts,
        "moves": moves,
        "time": elapsed,
        "violations": violations,
        "seed": seed,
    }


def _build_params(N: int, runs: int, validate: bool) -> List[RunParams]:
    return [
        (N, settings.MAX_ATTEMPTS, derive_seed(settings.BASE_SEED, N, i), settings.PARALLEL_RECOUNT, validate)
        for i in range(runs)
    ]


def _check_sizes(N_values: List[int]) -> None:
    bad = [N for N in N_values if N < 1 or N in UNSOLVABLE_SIZES]
    if bad:
        raise ValueError("Board sizes without solutions: " + ", ".join(str(N) for N in bad))


def run_experiments(
    N_values: List[int],
    runs: int,
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> ExperimentResults:
    """Run ``runs`` solver runs per N, one after another, in this process."""
    _check_sizes(N_values)
    results: ExperimentResults = {}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None

    for index, N in enumerate(N_values, start=1):
        if progress:
            progress.update(index, f"N={N}")
        records = [run_single_search(params) for params in _build_params(N, runs, validate)]
        results[N] = summarize_runs(records)
        _print_entry(N, results)

    return results


def run_experiments_parallel(
    N_values: List[int],
    runs: int,
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> ExperimentResults:
    """Run the same batch as ``run_experiments`` on a process pool.

    Runs for one N are mapped across ``settings.NUM_PROCESSES`` workers;
    sizes are processed in order so progress output stays readable.
    """
    _check_sizes(N_values)
    results: ExperimentResults = {}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None

    with ProcessPoolExecutor(max_workers=settings.NUM_PROCESSES) as executor:
        for index, N in enumerate(N_values, start=1):
            if progress:
                progress.update(index, f"N={N}")
            records = list(executor.map(run_single_search, _build_params(N, runs, validate)))
            results[N] = summarize_runs(records)
            _print_entry(N, results)

    return results


def _print_entry(N: int, results: ExperimentResults) -> None:
    entry = results[N]
    restarts = entry["restarts"]
    time_stats = entry["time"]
    mean_restarts = restarts.get("mean")
    mean_time = time_stats.get("mean")
    print(
        f"  N={N}: {entry['successes']}/{entry['total_runs']} solved"
        + (f", mean restarts {mean_restarts:.2f}" if mean_restarts is not None else "")
        + (f", mean time {mean_time:.4f}s" if mean_time is not None else "")
    )
