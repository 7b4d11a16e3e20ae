"""Report writer module -- streams sweep results to a CSV file.

One file per sweep, a header chosen by the benchmark target, then one row per
array size. The stream is flushed after every row so an interrupted sweep
keeps everything written so far.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import csv
import logging
import math
from typing import IO, TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from domain.models import BenchmarkTarget, SizeMeasurement

logger = logging.getLogger("sortbench.report")

NOT_AVAILABLE = "N/A"

SINGLE_HEADER: tuple[str, ...] = (
    "Size",
    "Time (s)",
    "Time (ms)",
    "Formatted Time",
    "Array Generation Time (s)",
)

COMPARISON_HEADER: tuple[str, ...] = (
    "Size",
    "HeapSort Time (s)",
    "HeapSort Time (ms)",
    "HeapSort Formatted Time",
    "QuickSort Time (s)",
    "QuickSort Time (ms)",
    "QuickSort Formatted Time",
    "Array Generation Time (s)",
)


def format_duration(seconds: float) -> str:
    """Human-readable duration, or N/A for a failed measurement."""
    if seconds < 0 or not math.isfinite(seconds):
        return NOT_AVAILABLE
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f} us"
    if seconds < 1:
        return f"{seconds * 1e3:.3f} ms"
    if seconds < 60:
        return f"{seconds:.3f} s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)} min {rest:.3f} s"


def report_filename(target: BenchmarkTarget, min_size: int, max_size: int) -> str:
    """Deterministic report name, e.g. ``heapsort_benchmark_1000_5000.csv``."""
    return f"{target.report_stem}_{min_size}_{max_size}.csv"


def header_for(target: BenchmarkTarget) -> tuple[str, ...]:
    return COMPARISON_HEADER if target.is_comparison else SINGLE_HEADER


def _timing_cells(seconds: float) -> list[str]:
    return [f"{seconds:f}", f"{seconds * 1000:f}", format_duration(seconds)]


def row_for(target: BenchmarkTarget, measurement: SizeMeasurement) -> list[str]:
    """Render one SizeMeasurement as CSV cells for *target*'s schema.

    Algorithms of the target that were not measured render as failed.
    """
    cells = [str(measurement.size)]
    for algorithm in target.algorithms:
        cells.extend(_timing_cells(measurement.seconds_for(algorithm)))
    cells.append(f"{measurement.generation_seconds:f}")
    return cells


class ReportWriter:
    """Owns the report file handle for the lifetime of one sweep.

    Usable as a context manager; ``close()`` may be called more than once but
    closes the underlying stream exactly once.
    """

    def __init__(self, path: Path, target: BenchmarkTarget) -> None:
        self._path = path
        self._target = target
        self._handle: IO[str] | None = None
        self._writer: Any = None
        self._rows_written = 0
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def rows_written(self) -> int:
        return self._rows_written

    @property
    def is_open(self) -> bool:
        return self._handle is not None and not self._closed

    def open(self) -> None:
        """Create (truncate) the report file and write the header row."""
        if self._handle is not None:
            msg = f"Report already opened: {self._path}"
            raise RuntimeError(msg)
        self._handle = self._path.open("w", encoding="utf-8", newline="")
        self._writer = csv.writer(self._handle, lineterminator="\n")
        self._writer.writerow(header_for(self._target))
        self._handle.flush()
        logger.info("Writing report to %s", self._path)

    def write_row(self, measurement: SizeMeasurement) -> None:
        """Append one row and flush it to disk."""
        if not self.is_open or self._writer is None or self._handle is None:
            msg = f"Report is not open: {self._path}"
            raise RuntimeError(msg)
        self._writer.writerow(row_for(self._target, measurement))
        self._handle.flush()
        self._rows_written += 1

    def close(self) -> None:
        """Close the stream. Later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        if self._handle is not None:
            self._handle.close()
            logger.info("Closed report %s after %d rows", self._path, self._rows_written)

    def __enter__(self) -> ReportWriter:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

