"""Tests for kernel/cli.py -- argument parsing, validation and exit codes."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from domain.errors import ConfigValidationError
from domain.models import BenchmarkTarget
from kernel import cli

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo the logging.basicConfig call made by main()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _parse(*argv: str) -> cli.argparse.Namespace:
    return cli.build_parser().parse_args(list(argv))


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsing:
    def test_defaults(self) -> None:
        config = cli.config_from_args(_parse())

        assert config.min_size == 1000
        assert config.max_size == 1_000_000
        assert config.step == 100_000
        assert config.repeats == 3
        assert config.target is BenchmarkTarget.HEAP_SORT
        assert config.bin_dir == Path("bin")

    def test_all_flags(self) -> None:
        args = _parse(
            "--min", "10", "--max", "50", "--step", "20", "--repeats", "4",
            "--algorithm", "quick", "--bin-dir", "/opt/sorts",
        )  # fmt: skip
        config = cli.config_from_args(args)

        assert (config.min_size, config.max_size, config.step, config.repeats) == (10, 50, 20, 4)
        assert config.target is BenchmarkTarget.QUICK_SORT
        assert config.bin_dir == Path("/opt/sorts")

    def test_algorithm_compare_is_alias_for_both(self) -> None:
        config = cli.config_from_args(_parse("--algorithm-compare"))
        assert config.target is BenchmarkTarget.BOTH

    def test_unknown_algorithm_fails_validation(self) -> None:
        with pytest.raises(ConfigValidationError, match="Unknown algorithm 'merge'"):
            cli.config_from_args(_parse("--algorithm", "merge"))


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_help_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as info:
            cli.main(["--help"])

        assert info.value.code == 0
        assert "--algorithm-compare" in capsys.readouterr().out

    def test_help_states_bin_dir_resolution(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            cli.main(["--help"])

        help_text = " ".join(capsys.readouterr().out.split())
        assert "a relative path is resolved against" in help_text

    @pytest.mark.parametrize(
        "argv",
        [
            ["--algorithm", "bubble"],
            ["--min", "5000", "--max", "1000"],
            ["--repeats", "0"],
            ["--step", "-10"],
            ["--min", "ten"],
        ],
    )
    def test_invalid_arguments_exit_one(
        self, argv: list[str], tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as info:
            cli.main([*argv, "--work-dir", str(tmp_path), "--plain"])

        assert info.value.code == 1
        assert capsys.readouterr().err
        assert not (tmp_path / "benchmark_results").exists()
        assert not (tmp_path / "input").exists()

    def test_missing_binaries_exit_one_without_report(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as info:
            cli.main(["--work-dir", str(tmp_path), "--plain", "--max", "2000"])

        assert info.value.code == 1
        assert "HeapSort binary not found" in capsys.readouterr().err
        assert not (tmp_path / "benchmark_results").exists()


@pytest.mark.skipif(os.name != "posix", reason="needs /bin/sh")
def test_successful_run_writes_report(
    tmp_path: Path,
    script_writer: Callable[[Path, str], Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script_writer(bin_dir / "heapsort", "echo 0.002")
    script_writer(bin_dir / "quicksort", "echo 0.001")
    script_writer(bin_dir / "genrand_f", 'mkdir -p input\necho "2 1" > "input/randnum_$2_$$"')

    cli.main(
        [
            "--min", "100", "--max", "300", "--step", "100", "--repeats", "1",
            "--algorithm-compare", "--work-dir", str(tmp_path), "--plain",
        ]
    )  # fmt: skip

    report = tmp_path / "benchmark_results" / "algorithm_comparison_100_300.csv"
    lines = report.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4
    assert lines[1].startswith("100,0.002000,2.000000,2.000 ms,0.001000,1.000000,1.000 ms,")
    assert "Benchmark complete" in capsys.readouterr().out
