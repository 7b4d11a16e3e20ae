"""Port interfaces for sortbench.

All ports are defined as typing.Protocol -- structural subtyping means any class
with matching method signatures satisfies the Protocol without inheritance.

This module has ZERO external imports -- only stdlib and typing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from domain.models import CommandOutput


class CommandRunnerPort(Protocol):
    """Abstraction over running an external command to completion."""

    def execute(self, args: Sequence[str]) -> CommandOutput:
        """Run *args* and return captured stdout, stderr and exit status.

        Blocks until the child exits. Must not raise for a non-zero exit.
        """
        ...


class TimerPort(Protocol):
    """Abstraction over timing one run of a sort executable."""

    def measure(self, executable: Path, input_file: Path) -> float:
        """Return the seconds reported by the executable for *input_file*.

        Raises an ExecutionError subclass when the run fails.
        """
        ...
