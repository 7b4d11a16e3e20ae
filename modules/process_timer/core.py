"""Process timer module -- times one run of a sort executable.

Invokes ``<exe> -f <input> --bench-time`` through a CommandRunnerPort and
parses the first stdout line as elapsed seconds.

This module depends only on domain/ types and has zero external imports beyond stdlib.
"""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING

from domain.errors import (
    MissingBinaryError,
    MissingInputError,
    NoOutputError,
    ParseFailureError,
    ProcessFailureError,
)

if TYPE_CHECKING:
    from pathlib import Path

    from domain.ports import CommandRunnerPort

logger = logging.getLogger("sortbench.timer")

BENCH_TIME_FLAG = "--bench-time"

# Leading decimal number; trailing text is ignored.
_NUMBER = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def parse_seconds(line: str) -> float:
    """Parse the leading decimal number of *line*.

    Raises:
        ParseFailureError: If the line does not start with a finite number.
    """
    match = _NUMBER.match(line)
    if match is None:
        raise ParseFailureError(line.rstrip("\n"))
    value = float(match.group(1))
    if not math.isfinite(value):
        raise ParseFailureError(line.rstrip("\n"))
    return value


def build_command(executable: Path, input_file: Path) -> list[str]:
    """Return the argv that runs *executable* on *input_file* in timing mode."""
    return [str(executable), "-f", str(input_file), BENCH_TIME_FLAG]


class ProcessTimer:
    """Runs a sort executable once and returns the seconds it reports.

    Values <= 0 are returned as-is; deciding whether they count is the
    caller's job.
    """

    def __init__(self, runner: CommandRunnerPort) -> None:
        self._runner = runner

    def measure(self, executable: Path, input_file: Path) -> float:
        """Time one run of *executable* on *input_file*.

        Raises:
            MissingBinaryError: The executable does not exist.
            MissingInputError: The input file does not exist.
            NoOutputError: Nothing was printed on stdout.
            ProcessFailureError: The process exited non-zero.
            ParseFailureError: The first line is not a number.
        """
        if not executable.exists():
            raise MissingBinaryError(executable)
        if not input_file.exists():
            raise MissingInputError(input_file)

        argv = build_command(executable, input_file)
        command = " ".join(argv)
        output = self._runner.execute(argv)

        lines = output.stdout.splitlines()
        if not lines:
            raise NoOutputError(command)
        if output.exit_code != 0:
            raise ProcessFailureError(command, output.exit_code)

        seconds = parse_seconds(lines[0])
        logger.debug("%s reported %.6fs", executable.name, seconds)
        return seconds
