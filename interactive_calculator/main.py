"""
Command-line entrypoint of the calculator.

This script:
- Starts the interactive shell when no file is given
- Evaluates an operations file (text or archive) otherwise

Examples
--------
calculator
calculator resources/operations.7z -o results.txt --log-level INFO
"""

import argparse
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, FilePath, ValidationError, field_validator

from interactive_calculator.batch.evaluator import BatchEvaluator, build_output_path
from interactive_calculator.common.logger import LOG_LEVELS, logger, set_level
from interactive_calculator.shell.shell import CalculatorShell


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath, optional
        Path to the file containing arithmetic operations. None starts the shell.
    output_path : Path, optional
        Where batch results are written. Derived from file_path when omitted.
    log_level : str
        Level of the package logger.
    """

    file_path: Optional[FilePath] = None
    output_path: Optional[Path] = None
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to sys.argv[1:]
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="calculator",
        description="Interactive two-operand arithmetic calculator",
    )

    parser.add_argument(
        "file_path",
        nargs="?",
        help="File (.txt, .zip, .tar.xz, .7z) of expressions to evaluate; omit for interactive mode",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_path",
        help="Where to write batch results (default: <input>_<ext>_results.txt)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help=f"Logging level, one of {', '.join(LOG_LEVELS)}",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            file_path=args.file_path,
            output_path=args.output_path,
            log_level=args.log_level,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def run_batch(input_path: Path, output_path: Optional[Path]) -> int:
    """
    Evaluate a file of expressions.

    :param Path input_path: Operations file or archive
    :param output_path: Results file, derived from input_path when None
    :return: Process exit code
    :rtype: int
    """
    output_path = output_path or build_output_path(input_path)
    try:
        outcomes = BatchEvaluator(input_file=input_path, output_file=output_path).run()
    except ValueError as exc:
        logger.error(f"📄❌ Could not read {input_path}: {exc}")
        print(f"Error: {exc}")
        return 1

    failed = sum(1 for outcome in outcomes if outcome.error is not None)
    print(f"{len(outcomes)} expressions evaluated, {failed} failed. Results in {output_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the calculator console script.
    """
    cli_args = parse_args(argv)
    set_level(cli_args.log_level)

    if cli_args.file_path is None:
        CalculatorShell().run()
        return 0

    return run_batch(Path(cli_args.file_path), cli_args.output_path)


if __name__ == "__main__":
    raise SystemExit(main())
