"""Global settings for the minqueens analysis pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`minqueens.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

# Board sizes to evaluate (in ascending order) for scalability analysis
N_VALUES: List[int] = [8, 16, 32, 64, 128, 256]

# Number of independent runs per N (higher = more robust stats)
RUNS_PER_N: int = 20

# Repair budget per restart attempt handed to the solver
MAX_ATTEMPTS: int = 2000

# Run the three recount tallies on worker threads inside each solver run
PARALLEL_RECOUNT: bool = True

# Base seed for reproducible batches (None = fresh randomness per run)
BASE_SEED: Optional[int] = None

# Output directory for CSV and charts
OUT_DIR: str = "results_minqueens"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots will include a datestamp suffix (e.g., _20251113-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run labeling to avoid overwriting outputs
RUN_TAG: Optional[str] = None


def set_runs(
        runs_per_n: int = 20,
        max_attempts: int = 2000,
        base_seed: Optional[int] = None,
) -> None:
        """Configure run counts, solver budget and seeding for experiment batches.

        Parameters
        - runs_per_n: independent solver runs per board size.
        - max_attempts: repair budget per restart attempt.
        - base_seed: when set, run ``i`` at size ``N`` uses a seed derived from
            it, making whole batches reproducible (None disables).

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active settings explicit at run start.
        """
        global RUNS_PER_N, MAX_ATTEMPTS, BASE_SEED
        if runs_per_n < 1:
            raise ValueError(f"runs_per_n must be >= 1, got {runs_per_n}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        RUNS_PER_N = runs_per_n
        MAX_ATTEMPTS = max_attempts
        BASE_SEED = base_seed

        print("Run settings configured:")
        print(f"   - Runs per N: {RUNS_PER_N}")
        print(f"   - Max attempts per restart: {MAX_ATTEMPTS}")
        print(f"   - Base seed: {BASE_SEED}" if BASE_SEED is not None else "   - Base seed: random")
