"""
kernel/sweep.py -- Size sweep controller.

Drives one benchmark sweep: for every array size from min to max by step it
provisions an input, measures each selected algorithm, and appends a report
row. Components are injected (see wiring.py) so the controller runs against
fakes in tests.

Failure policy:
  - missing executables or uncreatable directories abort before any report
    file exists;
  - a failed provisioning skips that size only;
  - an algorithm without usable trials is recorded as N/A and the sweep
    continues.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from domain.errors import DirectoryCreationError, MissingBinaryError, ProvisioningError
from domain.models import SizeMeasurement, SweepSummary
from kernel.config import VISUALIZER_COMMAND
from kernel.console import console
from modules.report_writer.core import ReportWriter, format_duration, report_filename

if TYPE_CHECKING:
    from pathlib import Path

    from domain.models import AlgorithmMeasurement, BenchmarkTarget, SweepConfig
    from modules.input_provisioner.core import InputProvisioner
    from modules.trial_aggregator.core import TrialAggregator

logger = logging.getLogger("sortbench.sweep")


def visualization_hint(target: BenchmarkTarget, report_path: Path) -> str:
    """Command line that plots the report."""
    if target.is_comparison:
        return f"{VISUALIZER_COMMAND} --compare {report_path}"
    return f"{VISUALIZER_COMMAND} {report_path}"


def _describe(measurement: AlgorithmMeasurement) -> str:
    name = measurement.algorithm.display_name
    if not measurement.ok:
        return f"Error measuring {name} time"
    text = f"{name} time: {format_duration(measurement.seconds)}"
    if measurement.successful_trials < measurement.attempted_trials:
        text += f" ({measurement.successful_trials}/{measurement.attempted_trials} trials)"
    return text


class SweepController:
    """Runs one sweep described by a SweepConfig.

    All state (config, components, output directory) lives on the instance,
    so independent sweeps can run in the same process.
    """

    def __init__(
        self,
        config: SweepConfig,
        aggregator: TrialAggregator,
        provisioner: InputProvisioner,
        results_dir: Path,
    ) -> None:
        self._config = config
        self._aggregator = aggregator
        self._provisioner = provisioner
        self._results_dir = results_dir

    @property
    def config(self) -> SweepConfig:
        return self._config

    @property
    def report_path(self) -> Path:
        cfg = self._config
        return self._results_dir / report_filename(cfg.target, cfg.min_size, cfg.max_size)

    # -- Phases -------------------------------------------------------------

    def preflight(self) -> None:
        """Check executables and create working directories.

        Raises:
            MissingBinaryError: A required executable or the generator is absent.
            DirectoryCreationError: The results or input directory cannot be created.
        """
        cfg = self._config
        for algorithm in cfg.target.algorithms:
            path = cfg.executable(algorithm)
            if not path.exists():
                raise MissingBinaryError(path, f"{algorithm.display_name} binary")
        if not cfg.generator.exists():
            raise MissingBinaryError(cfg.generator, "Random number generator binary")

        try:
            self._results_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(self._results_dir, str(exc)) from exc
        self._provisioner.ensure_input_dir()

    def measure_size(self, size: int) -> SizeMeasurement | None:
        """Provision an input and time every selected algorithm on it.

        Returns None when provisioning fails; the size is then skipped.
        """
        try:
            provisioned = self._provisioner.provision(size)
        except ProvisioningError as exc:
            logger.warning("Skipping size %d: %s", size, exc)
            console.warning(f"{exc} -- skipping size {size}")
            return None

        measurements = []
        for algorithm in self._config.target.algorithms:
            measurement = self._aggregator.measure(
                algorithm,
                self._config.executable(algorithm),
                provisioned.path,
                self._config.repeats,
            )
            if measurement.ok:
                console.step_detail(_describe(measurement))
            else:
                logger.warning("No usable trials for %s at size %d", algorithm.display_name, size)
                console.warning(_describe(measurement))
            measurements.append(measurement)

        return SizeMeasurement(
            size=size,
            measurements=tuple(measurements),
            generation_seconds=provisioned.generation_seconds,
        )

    def run(self) -> SweepSummary:
        """Run the whole sweep and return what was written.

        Fatal errors from preflight propagate before any report is created.
        The report is closed however the loop ends.
        """
        self.preflight()
        cfg = self._config
        sizes = cfg.sizes()
        self._print_header()

        skipped: list[int] = []
        measured: list[SizeMeasurement] = []
        writer = ReportWriter(self.report_path, cfg.target)
        with writer:
            for index, size in enumerate(sizes, start=1):
                console.step(index, len(sizes), f"Benchmarking array size {size}...")
                measurement = self.measure_size(size)
                if measurement is None:
                    skipped.append(size)
                    continue
                writer.write_row(measurement)
                measured.append(measurement)

        summary = SweepSummary(
            report_path=writer.path,
            rows_written=writer.rows_written,
            skipped_sizes=tuple(skipped),
            degraded_rows=sum(1 for m in measured if m.degraded),
        )
        logger.info(
            "Sweep finished: %d rows, %d skipped, %d degraded",
            summary.rows_written,
            len(summary.skipped_sizes),
            summary.degraded_rows,
        )
        self._print_summary(summary, measured)
        return summary

    # -- Output -------------------------------------------------------------

    def _print_header(self) -> None:
        cfg = self._config
        console.panel(
            f"Running {cfg.target.title} Algorithm Benchmarks",
            title="sortbench",
            style="cyan",
        )
        console.kv(
            {
                "Size range": f"{cfg.min_size} to {cfg.max_size} (step {cfg.step})",
                "Repetitions per size": str(cfg.repeats),
                "Report": str(self.report_path),
            }
        )

    def _print_summary(self, summary: SweepSummary, measured: list[SizeMeasurement]) -> None:
        algorithms = self._config.target.algorithms
        rows = [
            [str(m.size), *(format_duration(m.seconds_for(a)) for a in algorithms)]
            for m in measured
        ]
        console.table(["Size", *(a.display_name for a in algorithms)], rows, title="Results")
        console.success(f"Benchmark complete. Results saved to {summary.report_path}")
        console.info("Timings cover the sorting algorithm only, excluding file I/O.")
        if summary.skipped_sizes:
            sizes = ", ".join(str(s) for s in summary.skipped_sizes)
            console.warning(f"Skipped {len(summary.skipped_sizes)} size(s): {sizes}")
        if summary.degraded_rows:
            console.warning(
                f"{summary.degraded_rows} of {summary.rows_written} row(s) contain N/A measurements"
            )
        console.panel(
            visualization_hint(self._config.target, summary.report_path),
            title="To visualize the results, run",
        )
