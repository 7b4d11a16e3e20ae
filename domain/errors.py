"""Exception hierarchy for sortbench.

Per-trial failures derive from ExecutionError and are absorbed by the trial
aggregator. Everything else is raised to the sweep controller or the CLI.

This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class BenchmarkError(Exception):
    """Base class for all sortbench errors."""


# ---------------------------------------------------------------------------
# Subprocess execution (one timed trial)
# ---------------------------------------------------------------------------


class ExecutionError(BenchmarkError):
    """A single timed invocation of a sort executable failed."""


class MissingBinaryError(ExecutionError):
    """An executable does not exist on the filesystem."""

    def __init__(self, path: Path, label: str = "Sort binary") -> None:
        self.path = path
        super().__init__(f"{label} not found: {path}")


class MissingInputError(ExecutionError):
    """An input file does not exist on the filesystem."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Input file not found: {path}")


class NoOutputError(ExecutionError):
    """The command printed nothing on stdout."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"No output from command: {command}")


class ProcessFailureError(ExecutionError):
    """The command exited with a non-zero status."""

    def __init__(self, command: str, exit_code: int) -> None:
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"Command returned error status {exit_code}: {command}")


class ParseFailureError(ExecutionError):
    """The command output is not a decimal number."""

    def __init__(self, output: str) -> None:
        self.output = output
        super().__init__(f"Failed to parse time output: {output!r}")


# ---------------------------------------------------------------------------
# Sweep-level failures
# ---------------------------------------------------------------------------


class ProvisioningError(BenchmarkError):
    """The generator failed or left no input file behind."""


class DirectoryCreationError(BenchmarkError):
    """A working directory could not be created."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to create directory {path}: {reason}")


class ConfigValidationError(BenchmarkError):
    """The sweep configuration violates its invariants."""
