"""Test the command-line entrypoint."""
import io
import logging
from pathlib import Path

import pytest

from interactive_calculator.common.logger import logger
from interactive_calculator.main import CliArgs, main, parse_args
from interactive_calculator.shell.shell import GOODBYE_TEXT, WELCOME_TEXT


@pytest.fixture(autouse=True)
def restore_log_level():
    """main() changes the package log level, put it back after each test."""
    level = logger.level
    yield
    logger.setLevel(level)


def test_parse_args_defaults() -> None:
    """Without arguments the shell is selected."""
    args = parse_args([])
    assert args == CliArgs()
    assert args.file_path is None
    assert args.log_level == "WARNING"


def test_parse_args_file(tmp_path: Path) -> None:
    """An existing file selects batch mode."""
    ops = tmp_path / "ops.txt"
    ops.write_text("1 + 1\n")
    args = parse_args([str(ops), "-o", str(tmp_path / "out.txt"), "--log-level", "debug"])
    assert args.file_path == ops
    assert args.output_path == tmp_path / "out.txt"
    assert args.log_level == "DEBUG"


def test_parse_args_missing_file(tmp_path: Path) -> None:
    """A missing input file is rejected by argparse."""
    with pytest.raises(SystemExit):
        parse_args([str(tmp_path / "missing.txt")])


def test_parse_args_invalid_log_level() -> None:
    """Unknown log levels are rejected."""
    with pytest.raises(SystemExit):
        parse_args(["--log-level", "LOUD"])


def test_main_interactive(monkeypatch, capsys) -> None:
    """main() runs the shell on stdin/stdout when no file is given."""
    monkeypatch.setattr("sys.stdin", io.StringIO("10 + 5\nquit\n"))
    assert main([]) == 0
    assert capsys.readouterr().out == WELCOME_TEXT + "> = 15\n\n" + "> " + GOODBYE_TEXT


def test_main_batch_default_output(tmp_path: Path, capsys) -> None:
    """main() evaluates a file and derives the output path."""
    ops = tmp_path / "ops.txt"
    ops.write_text("2 ^ 3\n5 / 0\n")

    assert main([str(ops), "--log-level", "INFO"]) == 0
    assert logger.level == logging.INFO

    results = tmp_path / "ops_txt_results.txt"
    assert results.read_text() == "2 ^ 3 = 8\n5 / 0 -> ERROR: Error: Division by zero\n"
    assert "2 expressions evaluated, 1 failed" in capsys.readouterr().out


def test_main_batch_explicit_output(tmp_path: Path) -> None:
    """The -o option overrides the output path."""
    ops = tmp_path / "ops.txt"
    ops.write_text("3.14 * 2\n")
    out = tmp_path / "custom.txt"

    assert main([str(ops), "-o", str(out)]) == 0
    assert out.read_text() == "3.14 * 2 = 6.28\n"


def test_main_batch_unreadable_archive(tmp_path: Path, capsys) -> None:
    """An unsupported archive is reported and gives exit code 1."""
    archive = tmp_path / "ops.rar"
    archive.write_text("1 + 1")

    assert main([str(archive)]) == 1
    assert "Unsupported archive format" in capsys.readouterr().out


def test_main_batch_corrupt_archive(tmp_path: Path, capsys) -> None:
    """A damaged archive is reported and gives exit code 1."""
    archive = tmp_path / "ops.zip"
    archive.write_bytes(b"not a zip")

    assert main([str(archive)]) == 1
    assert "Corrupt .zip archive" in capsys.readouterr().out
