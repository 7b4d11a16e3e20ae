#!/usr/bin/env python3
"""
sortbench CLI -- entry point for the sorting benchmark harness.

Usage:
  sortbench [--min N] [--max N] [--step N] [--repeats N]
            [--algorithm {heap,quick,both} | --algorithm-compare]
            [--bin-dir PATH] [--work-dir PATH] [--plain] [--verbose | --quiet]

Exit status is 0 on success (and for --help), 1 on invalid arguments or
when the sweep cannot start.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from domain.errors import BenchmarkError, ConfigValidationError
from domain.models import BenchmarkTarget, SweepConfig
from kernel.config import (
    DEFAULT_ALGORITHM,
    DEFAULT_BIN_DIR,
    DEFAULT_MAX_SIZE,
    DEFAULT_MIN_SIZE,
    DEFAULT_REPEATS,
    DEFAULT_STEP,
    DEFAULT_WORK_DIR,
)
from kernel.console import configure, console

logger = logging.getLogger("sortbench")

EXIT_OK = 0
EXIT_FAILURE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on bad arguments."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="sortbench",
        description="Benchmark external sorting executables over a range of array sizes.",
    )
    parser.add_argument(
        "--min",
        dest="min_size",
        type=int,
        default=DEFAULT_MIN_SIZE,
        metavar="SIZE",
        help=f"Minimum array size (default: {DEFAULT_MIN_SIZE})",
    )
    parser.add_argument(
        "--max",
        dest="max_size",
        type=int,
        default=DEFAULT_MAX_SIZE,
        metavar="SIZE",
        help=f"Maximum array size (default: {DEFAULT_MAX_SIZE})",
    )
    parser.add_argument(
        "--step",
        type=int,
        default=DEFAULT_STEP,
        metavar="SIZE",
        help=f"Step size between benchmarks (default: {DEFAULT_STEP})",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=DEFAULT_REPEATS,
        metavar="N",
        help=f"Number of repetitions per size (default: {DEFAULT_REPEATS})",
    )
    parser.add_argument(
        "--algorithm",
        default=DEFAULT_ALGORITHM,
        metavar="NAME",
        help="Algorithm to benchmark: 'heap', 'quick', or 'both' (default: 'heap')",
    )
    parser.add_argument(
        "--algorithm-compare",
        dest="algorithm",
        action="store_const",
        const="both",
        help="Compare heapsort and quicksort (shorthand for --algorithm both)",
    )
    parser.add_argument(
        "--bin-dir",
        type=Path,
        default=DEFAULT_BIN_DIR,
        metavar="PATH",
        help=(
            "Directory holding heapsort, quicksort and genrand_f; "
            "a relative path is resolved against --work-dir (default: bin)"
        ),
    )
    parser.add_argument(
        "--work-dir",
        type=Path,
        default=DEFAULT_WORK_DIR,
        metavar="PATH",
        help="Directory for input/ and benchmark_results/ (default: current directory)",
    )
    parser.add_argument("--plain", action="store_true", help="Disable rich terminal output")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Only log errors")
    return parser


def config_from_args(args: argparse.Namespace) -> SweepConfig:
    """Build the validated SweepConfig.

    Raises:
        ConfigValidationError: Unknown algorithm or invalid sizes.
    """
    return SweepConfig(
        min_size=args.min_size,
        max_size=args.max_size,
        step=args.step,
        repeats=args.repeats,
        target=BenchmarkTarget.parse(args.algorithm),
        bin_dir=args.bin_dir,
    )


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        stream=sys.stderr,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        level=level,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # -- Console configuration (terminal output) ----------------------------
    configure(backend="plain" if args.plain else "auto")

    # -- Logging configuration (stderr diagnostics) -------------------------
    _configure_logging(args)

    try:
        config = config_from_args(args)
    except ConfigValidationError as exc:
        console.error(str(exc))
        parser.print_usage(sys.stderr)
        sys.exit(EXIT_FAILURE)

    import wiring

    controller = wiring.build_controller(config, args.work_dir)
    try:
        controller.run()
    except BenchmarkError as exc:
        logger.error("Benchmark aborted: %s", exc)
        console.error(str(exc))
        sys.exit(EXIT_FAILURE)
    except OSError as exc:
        logger.error("Benchmark aborted: %s", exc)
        console.error(f"Failed to write benchmark results: {exc}")
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        console.warning("Interrupted. Rows written so far are kept in the report.")
        sys.exit(130)


if __name__ == "__main__":
    main()
