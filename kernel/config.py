"""
kernel/config.py -- Default paths and benchmark settings.

All path constants and CLI defaults live here. kernel/cli.py and wiring.py
import from this file.
"""

from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# Paths (relative to the work directory unless absolute)
# ---------------------------------------------------------------------------

DEFAULT_BIN_DIR = Path("bin")
DEFAULT_WORK_DIR = Path()
INPUT_DIR_NAME = "input"
RESULTS_DIR_NAME = "benchmark_results"

# Files written by the generator into INPUT_DIR_NAME
INPUT_PATTERN = "randnum_*"

# ---------------------------------------------------------------------------
# Sweep defaults
# ---------------------------------------------------------------------------

DEFAULT_MIN_SIZE = 1000
DEFAULT_MAX_SIZE = 1_000_000
DEFAULT_STEP = 100_000
DEFAULT_REPEATS = 3
DEFAULT_ALGORITHM = "heap"

# ---------------------------------------------------------------------------
# Completion hint
# ---------------------------------------------------------------------------

# Consumes the CSV report; not part of this package
VISUALIZER_COMMAND = "python3 visualize_benchmark.py"
