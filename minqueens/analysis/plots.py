"""Visualization utilities for analysis outputs.

Overview
--------
This module generates PNG charts from the per-N summaries produced by the
experiment runners. It degrades gracefully: if the plotting stack
(matplotlib/numpy, optionally seaborn) is unavailable, public functions emit a
short message and return without raising so upstream pipelines can continue.

Chart map
---------
- 01_time_vs_N_log_scale.png: mean solve time (log scale) vs N, with std bars.
- 02_restarts_vs_N.png: mean and median restarts vs N.
- 03_moves_vs_N.png: mean committed swaps vs N with a least-squares trend
  line (moves are expected to grow roughly linearly in N).
- 04_restart_histogram_N{N}.png: distribution of restarts at the largest N.

Filenames carry the same optional tag/date suffix as the CSV exports.
"""
from __future__ import annotations

import os
from typing import Any, List, cast

from .reporting import file_suffix
from .stats import ExperimentResults

try:
    import matplotlib.pyplot as plt  # type: ignore
    import numpy as np  # type: ignore
    _PLOTS_AVAILABLE = True
except Exception:
    plt = cast(Any, None)  # type: ignore
    np = cast(Any, None)  # type: ignore
    _PLOTS_AVAILABLE = False

try:
    import seaborn as sns  # type: ignore
except Exception:
    sns = None  # type: ignore


def _stat(results: ExperimentResults, N_values: List[int], metric: str, field: str) -> List[float]:
    return [float(results[N].get(metric, {}).get(field) or 0.0) for N in N_values]


def _save(fname: str, label: str) -> None:
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved {label}: {fname}")


def plot_and_save(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Generate all charts for a finished batch.

    Parameters
    ----------
    results : ExperimentResults
        Per-N summaries from ``run_experiments`` / ``run_experiments_parallel``.
    N_values : List[int]
        Ordered list of N values to display on the x-axis.
    out_dir : str
        Destination directory; will be created if missing.

    Returns
    -------
    List[str]
        Paths of the images written (empty when plotting is unavailable).
    """
    if not _PLOTS_AVAILABLE:
        print("Plotting skipped: matplotlib not installed.")
        return []
    N_values = [N for N in N_values if N in results]
    if not N_values:
        print("Plotting skipped: no results.")
        return []

    os.makedirs(out_dir, exist_ok=True)
    if sns is not None:
        sns.set_theme(style="whitegrid")
    suffix = file_suffix()
    written: List[str] = []

    mean_time = _stat(results, N_values, "time", "mean")
    std_time = _stat(results, N_values, "time", "std")
    plt.figure(figsize=(10, 6))
    plt.errorbar(N_values, [max(t, 1e-6) for t in mean_time], yerr=std_time, marker="o", linewidth=2, capsize=4)
    plt.yscale("log")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Mean time [s] (log scale)", fontsize=12)
    plt.title("Min-conflicts solve time vs problem size", fontsize=14)
    plt.grid(True, alpha=0.7)
    fname = os.path.join(out_dir, f"01_time_vs_N_log_scale{suffix}.png")
    _save(fname, "execution-time chart (log scale)")
    written.append(fname)

    plt.figure(figsize=(10, 6))
    plt.plot(N_values, _stat(results, N_values, "restarts", "mean"), marker="o", linewidth=2, label="mean")
    plt.plot(N_values, _stat(results, N_values, "restarts", "median"), marker="s", linewidth=2, label="median")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Restarts", fontsize=12)
    plt.title("Random restarts vs problem size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    fname = os.path.join(out_dir, f"02_restarts_vs_N{suffix}.png")
    _save(fname, "restart chart")
    written.append(fname)

    mean_moves = _stat(results, N_values, "moves", "mean")
    plt.figure(figsize=(10, 6))
    plt.plot(N_values, mean_moves, marker="o", linewidth=2, label="mean moves")
    if len(N_values) >= 2:
        z = np.polyfit(N_values, mean_moves, 1)
        p = np.poly1d(z)
        x_trend = np.linspace(min(N_values), max(N_values), 100)
        plt.plot(x_trend, p(x_trend), "--", alpha=0.8, label=f"trend: {z[0]:.3f}*N + {z[1]:.1f}")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Committed swaps", fontsize=12)
    plt.title("Repair moves vs problem size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    fname = os.path.join(out_dir, f"03_moves_vs_N{suffix}.png")
    _save(fname, "moves chart")
    written.append(fname)

    largest = N_values[-1]
    restarts = [r["restarts"] for r in results[largest].get("raw_runs", []) if r["success"]]
    if len(restarts) >= 2:
        plt.figure(figsize=(10, 6))
        bins = np.arange(0, max(restarts) + 2) - 0.5
        plt.hist(restarts, bins=bins, edgecolor="black", alpha=0.8)
        mean_restarts = float(np.mean(restarts))
        plt.axvline(mean_restarts, color="red", linestyle="--", label=f"mean = {mean_restarts:.2f}")
        plt.xlabel("Restarts", fontsize=12)
        plt.ylabel("Runs", fontsize=12)
        plt.title(f"Restart distribution at N={largest}", fontsize=14)
        plt.legend(fontsize=11)
        fname = os.path.join(out_dir, f"04_restart_histogram_N{largest}{suffix}.png")
        _save(fname, "restart histogram")
        written.append(fname)

    return written
