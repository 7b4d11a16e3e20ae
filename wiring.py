"""
wiring.py -- Composition root.

Builds the component graph for one sweep:

    SubprocessRunner -> ProcessTimer -> TrialAggregator
    SubprocessRunner -> InputProvisioner
    TrialAggregator + InputProvisioner -> SweepController

Every dependency can be replaced (tests pass a fake runner); nothing here
holds state between calls.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from adapters.subprocess_runner import SubprocessRunner
from kernel.config import INPUT_DIR_NAME, INPUT_PATTERN, RESULTS_DIR_NAME
from kernel.sweep import SweepController
from modules.input_provisioner.core import InputProvisioner
from modules.process_timer.core import ProcessTimer
from modules.trial_aggregator.core import TrialAggregator

if TYPE_CHECKING:
    from collections.abc import Callable

    from domain.models import SweepConfig
    from domain.ports import CommandRunnerPort

logger = logging.getLogger("sortbench.wiring")


def build_controller(
    config: SweepConfig,
    work_dir: Path,
    *,
    runner: CommandRunnerPort | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> SweepController:
    """Assemble a SweepController rooted at *work_dir*.

    Args:
        config: Validated sweep parameters. A relative ``bin_dir`` is
            resolved against *work_dir*.
        work_dir: Directory holding ``input/`` and ``benchmark_results/``.
            The generator runs with this as its current directory.
        runner: Command runner; defaults to a SubprocessRunner in *work_dir*.
        clock: Clock used to time input generation.
    """
    work_dir = Path(work_dir).resolve()
    if not config.bin_dir.is_absolute():
        config = replace(config, bin_dir=work_dir / config.bin_dir)

    if runner is None:
        runner = SubprocessRunner(cwd=work_dir)

    provisioner = InputProvisioner(
        runner,
        config.generator,
        work_dir / INPUT_DIR_NAME,
        pattern=INPUT_PATTERN,
        clock=clock,
    )
    aggregator = TrialAggregator(ProcessTimer(runner))

    logger.debug("Wired sweep in %s with binaries from %s", work_dir, config.bin_dir)
    return SweepController(
        config,
        aggregator,
        provisioner,
        results_dir=work_dir / RESULTS_DIR_NAME,
    )
