"""Shared pytest fixtures and test factories for sortbench.

Provides:
- Fake port implementations (CommandRunner, Timer)
- A scripted runner that imitates the generator and sort executables
- Factory functions for domain models with sensible defaults
- Pytest fixtures wrapping the most commonly used fakes
"""

from __future__ import annotations

import stat
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from domain.errors import ExecutionError
from domain.models import (
    GENERATOR_BINARY,
    Algorithm,
    AlgorithmMeasurement,
    BenchmarkTarget,
    CommandOutput,
    SizeMeasurement,
    SweepConfig,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence


# ── Fake Port Implementations ─────────────────────────────────────────────


class FakeRunner:
    """CommandRunnerPort returning pre-configured outputs in order.

    Pass ``handler`` instead to compute each output from the argv.
    Every call is recorded in ``calls``.
    """

    def __init__(
        self,
        outputs: Iterable[CommandOutput] = (),
        *,
        handler: Callable[[list[str]], CommandOutput] | None = None,
    ) -> None:
        self._outputs = list(outputs)
        self._handler = handler
        self.calls: list[list[str]] = []

    def execute(self, args: Sequence[str]) -> CommandOutput:
        """Record the call and return the next output."""
        argv = [str(a) for a in args]
        self.calls.append(argv)
        if self._handler is not None:
            return self._handler(argv)
        assert self._outputs, f"unexpected command: {argv}"
        return self._outputs.pop(0)


class FakeTimer:
    """TimerPort yielding scripted values; exceptions in the script are raised."""

    def __init__(self, script: Iterable[float | ExecutionError]) -> None:
        self._script = list(script)
        self.calls: list[tuple[Path, Path]] = []

    def measure(self, executable: Path, input_file: Path) -> float:
        """Return or raise the next scripted item."""
        self.calls.append((executable, input_file))
        item = self._script.pop(0)
        if isinstance(item, ExecutionError):
            raise item
        return item


class FakeBenchRunner:
    """Runner imitating ``genrand_f`` and the sort executables.

    The generator writes ``randnum_<seq>_<size>`` into *input_dir*, or exits
    with status 1 for sizes in *failing_sizes*. Sort executables print the
    value configured for their binary name in *timings*; binaries absent from
    *timings* exit with status 1.
    """

    def __init__(
        self,
        input_dir: Path,
        timings: dict[str, float] | None = None,
        *,
        failing_sizes: Iterable[int] = (),
    ) -> None:
        self._input_dir = input_dir
        self._timings = dict(timings or {})
        self._failing = set(failing_sizes)
        self._seq = 0
        self.calls: list[list[str]] = []

    def execute(self, args: Sequence[str]) -> CommandOutput:
        argv = [str(a) for a in args]
        self.calls.append(argv)
        name = Path(argv[0]).name
        if name == GENERATOR_BINARY:
            return self._generate(int(argv[2]))
        if name in self._timings:
            return CommandOutput(stdout=f"{self._timings[name]}\n", exit_code=0)
        return CommandOutput(stdout="", exit_code=1, stderr="boom")

    def _generate(self, size: int) -> CommandOutput:
        if size in self._failing:
            return CommandOutput(stdout="", exit_code=1, stderr="generator failed")
        self._seq += 1
        path = self._input_dir / f"randnum_{self._seq:06d}_{size}"
        path.write_text(" ".join(str(i) for i in range(3)), encoding="utf-8")
        return CommandOutput(stdout=f"Generated {size} numbers\n", exit_code=0)

    def sort_calls(self, binary: str) -> list[list[str]]:
        return [c for c in self.calls if Path(c[0]).name == binary]


# ── Filesystem helpers ───────────────────────────────────────────────────


def write_script(path: Path, body: str) -> Path:
    """Write an executable /bin/sh script to *path*."""
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def make_bin_dir(root: Path, names: Iterable[str] = ("heapsort", "quicksort", "genrand_f")) -> Path:
    """Create ``root/bin`` holding empty placeholder executables."""
    bin_dir = root / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (bin_dir / name).touch()
    return bin_dir


# ── Domain Model Factories ───────────────────────────────────────────────


def make_config(
    min_size: int = 1000,
    max_size: int = 3000,
    step: int = 1000,
    repeats: int = 2,
    target: BenchmarkTarget = BenchmarkTarget.HEAP_SORT,
    bin_dir: Path | None = None,
) -> SweepConfig:
    """Create a SweepConfig with sensible defaults."""
    return SweepConfig(
        min_size=min_size,
        max_size=max_size,
        step=step,
        repeats=repeats,
        target=target,
        bin_dir=bin_dir if bin_dir is not None else Path("bin"),
    )


def make_measurement(
    algorithm: Algorithm = Algorithm.HEAP_SORT,
    seconds: float = 0.5,
    successful_trials: int = 3,
    attempted_trials: int = 3,
) -> AlgorithmMeasurement:
    """Create an AlgorithmMeasurement with sensible defaults."""
    return AlgorithmMeasurement(
        algorithm=algorithm,
        seconds=seconds,
        successful_trials=successful_trials,
        attempted_trials=attempted_trials,
    )


def make_size_measurement(
    size: int = 1000,
    measurements: Iterable[AlgorithmMeasurement] | None = None,
    generation_seconds: float = 0.01,
) -> SizeMeasurement:
    """Create a SizeMeasurement with sensible defaults."""
    if measurements is None:
        measurements = [make_measurement()]
    return SizeMeasurement(
        size=size,
        measurements=tuple(measurements),
        generation_seconds=generation_seconds,
    )


# ── Pytest Fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Provide a bin/ directory with all three executables present."""
    return make_bin_dir(tmp_path)


@pytest.fixture
def config_factory() -> Callable[..., SweepConfig]:
    """Provide the make_config factory function."""
    return make_config


@pytest.fixture
def size_measurement_factory() -> Callable[..., SizeMeasurement]:
    """Provide the make_size_measurement factory function."""
    return make_size_measurement


@pytest.fixture
def measurement_factory() -> Callable[..., AlgorithmMeasurement]:
    """Provide the make_measurement factory function."""
    return make_measurement


@pytest.fixture
def runner_factory() -> type[FakeRunner]:
    """Provide the FakeRunner class for scripted command outputs."""
    return FakeRunner


@pytest.fixture
def timer_factory() -> type[FakeTimer]:
    """Provide the FakeTimer class for scripted trial outcomes."""
    return FakeTimer


@pytest.fixture
def bench_runner_factory() -> type[FakeBenchRunner]:
    """Provide the FakeBenchRunner class imitating generator and sort binaries."""
    return FakeBenchRunner


@pytest.fixture
def script_writer() -> Callable[[Path, str], Path]:
    """Provide write_script for real /bin/sh stub executables."""
    return write_script
