"""Adapter: SubprocessRunner implements CommandRunnerPort.

Runs external executables via subprocess and returns a structured
CommandOutput. Commands run to completion; no timeout is applied.
Undecodable output bytes are replaced rather than raised.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from domain.models import CommandOutput

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("sortbench.adapters")

# Exit status reported when the command could not be spawned at all.
SPAWN_FAILURE_EXIT_CODE = 127


class SubprocessRunner:
    """Concrete CommandRunnerPort implementation backed by subprocess.run."""

    def __init__(self, cwd: Path | None = None) -> None:
        """Initialise with the working directory for spawned commands.

        Args:
            cwd: Directory the child runs in. ``None`` keeps the current one.
        """
        self._cwd = Path(cwd).resolve() if cwd is not None else None

    def execute(self, args: Sequence[str]) -> CommandOutput:
        """Run the command and capture its output.

        Returns:
            A CommandOutput with stdout, stderr and the exit status. Spawn
            errors are reported as exit status 127 with the reason on stderr.
        """
        argv = [str(a) for a in args]
        logger.debug("Running %s", " ".join(argv))
        try:
            result = subprocess.run(
                argv,
                cwd=self._cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            logger.warning("Failed to execute command %s: %s", argv[0], exc)
            return CommandOutput(stdout="", exit_code=SPAWN_FAILURE_EXIT_CODE, stderr=str(exc))
        return CommandOutput(
            stdout=result.stdout or "",
            exit_code=result.returncode,
            stderr=result.stderr or "",
        )

    @property
    def cwd(self) -> Path | None:
        """Return the working directory commands run in."""
        return self._cwd
