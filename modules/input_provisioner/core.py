"""Input provisioner module -- produces a fresh random input file per array size.

Runs the generator executable (``<genrand> -c <size>``), then picks the most
recently modified ``randnum_*`` file in the input directory. Discovery by
modification time is only sound while provisioning runs sequentially.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from domain.errors import DirectoryCreationError, ProvisioningError
from domain.models import ProvisionedInput

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from domain.ports import CommandRunnerPort

logger = logging.getLogger("sortbench.inputs")

INPUT_PATTERN = "randnum_*"


class InputProvisioner:
    """Generates input files and locates the newest one.

    Generated files are never removed; they accumulate across runs.
    """

    def __init__(
        self,
        runner: CommandRunnerPort,
        generator: Path,
        input_dir: Path,
        *,
        pattern: str = INPUT_PATTERN,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._runner = runner
        self._generator = generator
        self._input_dir = input_dir
        self._pattern = pattern
        self._clock = clock

    @property
    def input_dir(self) -> Path:
        return self._input_dir

    def ensure_input_dir(self) -> None:
        """Create the input directory if it does not exist.

        Raises:
            DirectoryCreationError: The directory cannot be created.
        """
        try:
            self._input_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(self._input_dir, str(exc)) from exc

    def latest_input(self) -> Path | None:
        """Return the most recently modified matching file, or None."""
        candidates = [p for p in self._input_dir.glob(self._pattern) if p.is_file()]
        if not candidates:
            return None
        return max(candidates, key=lambda p: (p.stat().st_mtime_ns, p.name))

    def provision(self, size: int) -> ProvisionedInput:
        """Generate an input of *size* numbers and return its path.

        Raises:
            DirectoryCreationError: The input directory cannot be created.
            ProvisioningError: The generator failed or no file was found.
        """
        self.ensure_input_dir()

        start = self._clock()
        output = self._runner.execute([str(self._generator), "-c", str(size)])
        elapsed = self._clock() - start

        if output.exit_code != 0:
            msg = f"Error generating random numbers for size {size} (exit status {output.exit_code})"
            if output.stderr.strip():
                msg = f"{msg}: {output.stderr.strip()}"
            raise ProvisioningError(msg)

        path = self.latest_input()
        if path is None:
            msg = f"Failed to find generated input matching {self._pattern} in {self._input_dir}"
            raise ProvisioningError(msg)

        logger.debug("Generated %s for size %d in %.6fs", path.name, size, elapsed)
        return ProvisionedInput(path=path, generation_seconds=elapsed)
