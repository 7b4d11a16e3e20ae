"""Trial aggregator module -- averages repeated timings of one executable.

Failed trials and non-positive durations are logged and left out of the mean.
When no trial is usable the result is the FAILED_MEASUREMENT sentinel.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from domain.errors import ExecutionError
from domain.models import FAILED_MEASUREMENT, AlgorithmMeasurement, TrialResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from domain.models import Algorithm
    from domain.ports import TimerPort

logger = logging.getLogger("sortbench.trials")


def mean_of_usable(results: Iterable[TrialResult]) -> float:
    """Return the mean of the usable trial durations.

    Returns FAILED_MEASUREMENT when no trial is usable.
    """
    durations = [r.seconds for r in results if r.usable and r.seconds is not None]
    if not durations:
        return FAILED_MEASUREMENT
    return sum(durations) / len(durations)


class TrialAggregator:
    """Repeats a timer for one (executable, input) pair and averages the results."""

    def __init__(self, timer: TimerPort) -> None:
        self._timer = timer

    def run_trial(self, executable: Path, input_file: Path) -> TrialResult:
        """Run one timed trial, turning execution errors into a failed result."""
        try:
            seconds = self._timer.measure(executable, input_file)
        except ExecutionError as exc:
            logger.warning("Trial failed for %s: %s", executable.name, exc)
            return TrialResult(error=str(exc))
        if seconds <= 0:
            logger.warning("Discarding non-positive time %s from %s", seconds, executable.name)
        return TrialResult(seconds=seconds)

    def collect(self, executable: Path, input_file: Path, repeats: int) -> list[TrialResult]:
        """Run *repeats* trials sequentially; a failure never stops the rest."""
        return [self.run_trial(executable, input_file) for _ in range(repeats)]

    def average(self, executable: Path, input_file: Path, repeats: int) -> float:
        """Return the mean usable duration, or FAILED_MEASUREMENT."""
        return mean_of_usable(self.collect(executable, input_file, repeats))

    def measure(
        self,
        algorithm: Algorithm,
        executable: Path,
        input_file: Path,
        repeats: int,
    ) -> AlgorithmMeasurement:
        """Average *repeats* trials and keep the trial counts alongside the mean."""
        results = self.collect(executable, input_file, repeats)
        return AlgorithmMeasurement(
            algorithm=algorithm,
            seconds=mean_of_usable(results),
            successful_trials=sum(1 for r in results if r.usable),
            attempted_trials=len(results),
        )
