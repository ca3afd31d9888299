"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to compute aggregate statistics across per-run solver records.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class SearchRecord(TypedDict):
    success: bool
    restarts: int
    moves: int
    time: float
    violations: int
    seed: Optional[int]


class SearchResultEntry(TypedDict, total=False):
    total_runs: int
    successes: int
    success_rate: float
    restarts: StatsSummary
    moves: StatsSummary
    time: StatsSummary
    raw_runs: List[SearchRecord]


ExperimentResults = Dict[int, SearchResultEntry]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout.

        Values of ``index`` greater than ``total`` are allowed and print >100%.
        """
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th and 75th
    percentiles (q25, q75), and range. When ``values`` is empty, all numeric
    fields are ``None`` and ``count`` is 0 to keep CSV/plot generation
    consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    min_val = min(values)
    max_val = max(values)

    return {
        "count": n,
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std": statistics.pstdev(values) if n > 1 else 0,
        "min": min_val,
        "max": max_val,
        "q25": sorted_vals[n // 4] if n >= 4 else min_val,
        "q75": sorted_vals[3 * n // 4] if n >= 4 else max_val,
        "range": max_val - min_val,
    }


def summarize_runs(records: List[SearchRecord]) -> SearchResultEntry:
    """Aggregate the per-run records collected for one board size.

    Restart, move and time statistics are computed over successful runs
    only; the solver does not stop before succeeding, so a failed record
    only appears when validation rejected the returned board.
    """
    successes = [r for r in records if r["success"]]
    return {
        "total_runs": len(records),
        "successes": len(successes),
        "success_rate": len(successes) / len(records) if records else 0.0,
        "restarts": compute_detailed_statistics([r["restarts"] for r in successes]),
        "moves": compute_detailed_statistics([r["moves"] for r in successes]),
        "time": compute_detailed_statistics([r["time"] for r in successes]),
        "raw_runs": list(records),
    }
