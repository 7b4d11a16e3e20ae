"""Core data types for sortbench.

All types are frozen dataclasses or enums with complete type annotations.
This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from domain.errors import ConfigValidationError

# Mean reported for an algorithm when no trial produced a usable duration.
FAILED_MEASUREMENT = -1.0

GENERATOR_BINARY = "genrand_f"


class Algorithm(Enum):
    """A sorting executable taking part in a sweep."""

    HEAP_SORT = "heap"
    QUICK_SORT = "quick"

    @property
    def display_name(self) -> str:
        return "HeapSort" if self is Algorithm.HEAP_SORT else "QuickSort"

    @property
    def binary_name(self) -> str:
        return "heapsort" if self is Algorithm.HEAP_SORT else "quicksort"


class BenchmarkTarget(Enum):
    """Algorithm selection. Decides which executables run and the report schema."""

    HEAP_SORT = "heap"
    QUICK_SORT = "quick"
    BOTH = "both"

    @classmethod
    def parse(cls, name: str) -> BenchmarkTarget:
        """Return the target for a CLI name (``heap``, ``quick`` or ``both``)."""
        try:
            return cls(name)
        except ValueError:
            msg = f"Unknown algorithm '{name}'"
            raise ConfigValidationError(msg) from None

    @property
    def algorithms(self) -> tuple[Algorithm, ...]:
        if self is BenchmarkTarget.HEAP_SORT:
            return (Algorithm.HEAP_SORT,)
        if self is BenchmarkTarget.QUICK_SORT:
            return (Algorithm.QUICK_SORT,)
        return (Algorithm.HEAP_SORT, Algorithm.QUICK_SORT)

    @property
    def is_comparison(self) -> bool:
        return self is BenchmarkTarget.BOTH

    @property
    def title(self) -> str:
        if self.is_comparison:
            return "Algorithm Comparison"
        return self.algorithms[0].display_name

    @property
    def report_stem(self) -> str:
        if self.is_comparison:
            return "algorithm_comparison"
        return f"{self.algorithms[0].binary_name}_benchmark"


# ---------------------------------------------------------------------------
# Execution results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CommandOutput:
    """Captured result of one external command."""

    stdout: str
    exit_code: int
    stderr: str = ""


@dataclass(frozen=True)
class TrialResult:
    """Outcome of one timed invocation: a duration or an error message."""

    seconds: float | None = None
    error: str = ""

    @property
    def usable(self) -> bool:
        """True when the trial succeeded with a strictly positive duration."""
        return self.seconds is not None and self.seconds > 0


@dataclass(frozen=True)
class AlgorithmMeasurement:
    """Averaged timing of one algorithm for one array size."""

    algorithm: Algorithm
    seconds: float
    successful_trials: int
    attempted_trials: int

    @property
    def ok(self) -> bool:
        return self.seconds >= 0


@dataclass(frozen=True)
class ProvisionedInput:
    """A freshly generated input file and how long generating it took."""

    path: Path
    generation_seconds: float


@dataclass(frozen=True)
class SizeMeasurement:
    """Everything measured for one array size; becomes one report row."""

    size: int
    measurements: tuple[AlgorithmMeasurement, ...]
    generation_seconds: float

    def seconds_for(self, algorithm: Algorithm) -> float:
        """Return the mean for *algorithm*, or FAILED_MEASUREMENT if absent."""
        for m in self.measurements:
            if m.algorithm is algorithm:
                return m.seconds
        return FAILED_MEASUREMENT

    @property
    def degraded(self) -> bool:
        """True when at least one algorithm has no usable measurement."""
        return any(not m.ok for m in self.measurements)


# ---------------------------------------------------------------------------
# Sweep configuration and outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SweepConfig:
    """Validated, immutable parameters of one benchmark sweep.

    Construction fails with ConfigValidationError when any numeric field is
    not positive or when ``min_size > max_size``.
    """

    min_size: int
    max_size: int
    step: int
    repeats: int
    target: BenchmarkTarget
    bin_dir: Path = field(default_factory=lambda: Path("bin"))

    def __post_init__(self) -> None:
        if min(self.min_size, self.max_size, self.step, self.repeats) <= 0:
            msg = "All size and repeat parameters must be positive"
            raise ConfigValidationError(msg)
        if self.min_size > self.max_size:
            msg = "Minimum size must be less than or equal to maximum size"
            raise ConfigValidationError(msg)

    def sizes(self) -> range:
        """Array sizes from min_size to max_size inclusive, by step."""
        return range(self.min_size, self.max_size + 1, self.step)

    def executable(self, algorithm: Algorithm) -> Path:
        return self.bin_dir / algorithm.binary_name

    @property
    def generator(self) -> Path:
        return self.bin_dir / GENERATOR_BINARY


@dataclass(frozen=True)
class SweepSummary:
    """Outcome of a finished sweep."""

    report_path: Path
    rows_written: int
    skipped_sizes: tuple[int, ...] = ()
    degraded_rows: int = 0
