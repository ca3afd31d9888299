"""CSV export utilities for experiment outputs (aggregates and raw runs).

These helpers materialize concise per-N CSV summaries as well as full per-run
raw data for downstream analysis or spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import List

from . import settings
from .stats import ExperimentResults

SUMMARY_METRICS = ("restarts", "moves", "time")
SUMMARY_FIELDS = ("mean", "median", "std", "min", "max")


def file_suffix() -> str:
    """Return the filename suffix built from ``RUN_TAG`` and ``RUN_ID`` (or empty)."""
    parts: List[str] = []
    if settings.RUN_TAG:
        parts.append(str(settings.RUN_TAG))
    if settings.DATE_IN_FILENAMES and settings.RUN_ID:
        parts.append(str(settings.RUN_ID))
    return ("_" + "_".join(parts)) if parts else ""


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write compact per-N aggregate metrics to CSV and return the file path.

    Column names follow lowercase snake_case: ``<metric>_<statistic>`` for
    restarts, moves and time over successful runs.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results_min_conflicts{file_suffix()}.csv")

    header = ["n", "total_runs", "successes", "success_rate"]
    header += [f"{metric}_{field}" for metric in SUMMARY_METRICS for field in SUMMARY_FIELDS]

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for N in N_values:
            entry = results.get(N)
            if not entry:
                continue
            row = [N, entry.get("total_runs", 0), entry.get("successes", 0), entry.get("success_rate", 0.0)]
            for metric in SUMMARY_METRICS:
                summary = entry.get(metric, {})
                row += ["" if summary.get(field) is None else summary.get(field) for field in SUMMARY_FIELDS]
            writer.writerow(row)

    print(f"Saved aggregate results: {filename}")
    return filename


def save_raw_data_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write one CSV row per solver run and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_min_conflicts{file_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["n", "run", "success", "restarts", "moves", "time_seconds", "violations", "seed"])
        for N in N_values:
            entry = results.get(N)
            if not entry:
                continue
            for run_index, record in enumerate(entry.get("raw_runs", [])):
                writer.writerow([
                    N,
                    run_index,
                    record["success"],
                    record["restarts"],
                    record["moves"],
                    record["time"],
                    record["violations"],
                    "" if record["seed"] is None else record["seed"],
                ])

    print(f"Saved raw run data: {filename}")
    return filename
