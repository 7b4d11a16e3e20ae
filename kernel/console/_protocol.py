"""kernel.console._protocol -- ConsoleProtocol definition.

Pure standard-library typing.Protocol for the sortbench terminal output system.
No external dependencies allowed in this file.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleProtocol(Protocol):
    """sortbench terminal output protocol.

    **General messages** -- usable from any module::

        console.info("Size range: 1000 to 5000 (step 1000)")
        console.success("Benchmark complete")
        console.warning("Error generating random numbers")
        console.error("HeapSort binary not found")

    Warnings and errors are diagnostics and go to stderr.

    **Structured panels** -- tables, key-value displays, panels::

        console.panel("python3 visualize_benchmark.py ...", title="Visualize")
        console.table(["Size", "HeapSort"], [["1000", "1.2 ms"]], title="Results")
        console.kv({"Repetitions per size": "3"})

    **Sweep progress** -- used by kernel/sweep.py::

        console.step(1, 5, "Benchmarking array size 1000...")
        console.step_detail("HeapSort time: 1.234 ms")
    """

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        """Informational message."""
        ...

    def success(self, message: str) -> None:
        """Success / positive-outcome message."""
        ...

    def warning(self, message: str) -> None:
        """Warning message."""
        ...

    def error(self, message: str) -> None:
        """Error message."""
        ...

    # -- Structured panels --------------------------------------------------

    def panel(self, content: str, *, title: str = "", style: str = "") -> None:
        """Display *content* in a bordered panel."""
        ...

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        """Display a table with *headers* and *rows*."""
        ...

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        """Display key-value pairs."""
        ...

    # -- Sweep progress -----------------------------------------------------

    def step(self, current: int, total: int, description: str) -> None:
        """Display a progress indicator ``[current/total] description``."""
        ...

    def step_detail(self, message: str) -> None:
        """Display an indented detail line under the current step."""
        ...
