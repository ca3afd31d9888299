"""
Analysis and orchestration package for min-conflicts experiments.

This package contains:
- settings: global knobs for batches (sizes, runs, seeds, output)
- stats: typed summaries and aggregation helpers
- experiments: sequential and process-parallel batch runners
- reporting: CSV exports of aggregates and raw runs
- plots: chart generation
- cli: top-level pipeline entry point and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    SearchRecord,
    SearchResultEntry,
    ExperimentResults,
    compute_detailed_statistics,
    summarize_runs,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "SearchRecord",
    "SearchResultEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "summarize_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
