"""Evaluate every expression of a text file or archive and write the results."""
import lzma
from pathlib import Path
import tarfile
import tempfile
from typing import Callable, Dict, Iterable, List, Optional, TextIO
import zipfile

import py7zr
from py7zr.exceptions import Bad7zFile
from pydantic import BaseModel, ConfigDict, Field, FilePath

from interactive_calculator.common.errors import CalculatorError
from interactive_calculator.common.formatter import format_result
from interactive_calculator.common.logger import logger
from interactive_calculator.common.models import OperationResult
from interactive_calculator.common.parser import WHITESPACE, ExpressionParser


def build_output_path(input_path: Path) -> Path:
    """
    Construct a safe output file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    # Path.stem only drops the last suffix, strip them all for "ops.tar.xz"
    stem = input_path.name[: len(input_path.name) - len("".join(input_path.suffixes))]
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


# Errors raised by the archive libraries on damaged or truncated files
ARCHIVE_ERRORS = (zipfile.BadZipFile, tarfile.TarError, Bad7zFile, lzma.LZMAError, EOFError)


def _first_txt(names: Iterable[str], kind: str) -> str:
    for name in names:
        if name.endswith(".txt"):
            return name
    raise ValueError(f"📄❌ No .txt file found in {kind} archive")


def _read_zip(archive_path: Path) -> str:
    with zipfile.ZipFile(archive_path, "r") as zf:
        member = _first_txt(zf.namelist(), ".zip")
        return zf.read(member).decode("utf-8")


def _read_tar_xz(archive_path: Path) -> str:
    with tarfile.open(archive_path, "r:xz") as tf:
        files = {m.name: m for m in tf.getmembers() if m.isfile()}
        member = _first_txt(files, ".tar.xz")
        # Read in memory, nothing is written to disk
        return tf.extractfile(files[member]).read().decode("utf-8")


def _read_7z(archive_path: Path) -> str:
    # py7zr only extracts to disk, use a throwaway directory
    with tempfile.TemporaryDirectory() as tmpdir, py7zr.SevenZipFile(archive_path, mode="r") as archive:
        member = _first_txt(archive.getnames(), ".7z")
        archive.extract(path=tmpdir, targets=[member])
        return (Path(tmpdir) / member).read_text(encoding="utf-8")


ARCHIVE_READERS: Dict[str, Callable[[Path], str]] = {
    ".zip": _read_zip,
    ".tar.xz": _read_tar_xz,
    ".7z": _read_7z,
}


def _archive_kind(archive_path: Path) -> Optional[str]:
    """Return the ARCHIVE_READERS key matching the file suffixes, if any."""
    if archive_path.suffixes[-2:] == [".tar", ".xz"]:
        return ".tar.xz"
    return archive_path.suffix if archive_path.suffix in ARCHIVE_READERS else None


class BatchEvaluator(BaseModel):
    """
    Evaluate a file of arithmetic expressions, one per line.

    The batch evaluator:
    - reads expressions from a plain text file or an archive
    - evaluates each non-empty line independently
    - writes each result to the output file as soon as it is computed
    """

    # Make the Pydantic instance immutable (read-only)
    model_config = ConfigDict(frozen=True)

    input_file: FilePath = Field(..., description="Text file or archive holding expressions")
    output_file: Path = Field(..., description="Path to write computation results")

    def read_expressions(self) -> List[str]:
        """
        Load the input and return its non-empty, trimmed lines.

        :return: List of expression lines
        :rtype: List[str]
        :raises ValueError: If the archive is unsupported, corrupt or contains no .txt file
        """
        if self.input_file.suffix == ".txt":
            content = self.input_file.read_text(encoding="utf-8")
        else:
            content = self._extract_archive(self.input_file)

        lines = (line.strip(WHITESPACE) for line in content.splitlines())
        return [line for line in lines if line]

    def _extract_archive(self, archive_path: Path) -> str:
        """
        Return the content of the first .txt member of a supported archive.

        Supported formats: .zip, .tar.xz, .7z

        :param Path archive_path: Path to the archive file

        :return: Content of the .txt member
        :rtype: str
        :raises ValueError: If the format is unsupported, the archive is corrupt
            or it holds no .txt file
        """
        kind = _archive_kind(archive_path)
        if kind is None:
            raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")

        try:
            return ARCHIVE_READERS[kind](archive_path)
        except ARCHIVE_ERRORS as exc:
            raise ValueError(f"📄❌ Corrupt {kind} archive {archive_path.name}: {exc}") from exc

    @staticmethod
    def evaluate_line(line_number: int, expression: str) -> OperationResult:
        """
        Evaluate one expression and wrap the outcome.

        :param int line_number: Position among the non-empty input lines
        :param str expression: Arithmetic expression

        :return: Result or error for this line
        :rtype: OperationResult
        """
        try:
            result = ExpressionParser.evaluate(expression)
        except CalculatorError as exc:
            logger.error(f"🧮❌ Line {line_number}: {exc}")
            return OperationResult(line=line_number, expression=expression, error=exc.message)
        return OperationResult(line=line_number, expression=expression, result=result)

    @staticmethod
    def _write_result(outcome: OperationResult, f_out: TextIO) -> None:
        if outcome.error is None:
            f_out.write(f"{outcome.expression} = {format_result(outcome.result)}\n")
        else:
            f_out.write(f"{outcome.expression} -> ERROR: {outcome.error}\n")
        f_out.flush()

    def run(self) -> List[OperationResult]:
        """
        Evaluate all expressions and write them to the output file.

        :return: One OperationResult per non-empty input line, in input order
        :rtype: List[OperationResult]
        :raises ValueError: If the input archive cannot be read
        """
        logger.info(f"📄 Evaluating expressions from {self.input_file}")
        expressions: List[str] = self.read_expressions()
        outcomes: List[OperationResult] = []

        with self.output_file.open("w", encoding="utf-8") as f_out:
            for line_number, expr in enumerate(expressions, start=1):
                outcome = self.evaluate_line(line_number, expr)
                self._write_result(outcome, f_out)
                outcomes.append(outcome)

        logger.info(f"✉️ {len(outcomes)} results written to {self.output_file}")
        return outcomes
