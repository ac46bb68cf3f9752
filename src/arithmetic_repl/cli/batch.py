"""Evaluate a file of expressions."""
from contextlib import contextmanager
import io
from pathlib import Path
import tarfile
from typing import IO, Callable, ContextManager, Dict, Iterable, Iterator, List
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, FilePath

from arithmetic_repl.common.logger import logger
from arithmetic_repl.common.models import CalculationResult
from arithmetic_repl.core.calculator import calculate


EXPRESSION_FILE_SUFFIX = ".txt"


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations.7z
    output: resources/operations_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{input_path.stem.split('.')[0]}{suffix_safe}_results.txt")


def format_result_line(outcome: CalculationResult) -> str:
    """Render one result the way it is written to the results file."""
    if outcome.ok:
        return f"{outcome.expression} = {outcome.result}"
    return f"{outcome.expression} -> ERROR: {outcome.error}"


def _expression_member(names: Iterable[str], archive_path: Path) -> str:
    """Pick the archive member holding the expressions: the first .txt file."""
    for name in names:
        if name.endswith(EXPRESSION_FILE_SUFFIX):
            return name
    raise ValueError(f"📄❌ No expression file ({EXPRESSION_FILE_SUFFIX}) in {archive_path.name}")


@contextmanager
def _zip_member(archive_path: Path) -> Iterator[IO[bytes]]:
    with zipfile.ZipFile(archive_path) as zf:
        with zf.open(_expression_member(zf.namelist(), archive_path)) as member:
            yield member


@contextmanager
def _tar_xz_member(archive_path: Path) -> Iterator[IO[bytes]]:
    with tarfile.open(archive_path, "r:xz") as tf:
        files = [m.name for m in tf.getmembers() if m.isfile()]
        with tf.extractfile(_expression_member(files, archive_path)) as member:
            yield member


@contextmanager
def _7z_member(archive_path: Path) -> Iterator[IO[bytes]]:
    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
        name = _expression_member(archive.getnames(), archive_path)
        # read() decompresses into memory, keyed by member name
        yield archive.read(targets=[name])[name]


ARCHIVE_MEMBER_OPENERS: Dict[str, Callable[[Path], ContextManager[IO[bytes]]]] = {
    ".zip": _zip_member,
    ".tar.xz": _tar_xz_member,
    ".7z": _7z_member,
}


@contextmanager
def open_expressions(input_file: Path) -> Iterator[IO[str]]:
    """
    Open the expressions of a text file or archive as a text stream.

    :param Path input_file: .txt file, or .zip/.tar.xz/.7z archive holding one

    :return: Context manager yielding a UTF-8 text stream
    :raises ValueError: If the format is unsupported or the archive holds no .txt file
    """
    if input_file.suffix == EXPRESSION_FILE_SUFFIX:
        with input_file.open(encoding="utf-8") as stream:
            yield stream
        return

    double_suffix = "".join(input_file.suffixes[-2:])
    opener = ARCHIVE_MEMBER_OPENERS.get(double_suffix) or ARCHIVE_MEMBER_OPENERS.get(input_file.suffix)
    if opener is None:
        raise ValueError(f"📄❌ Unsupported input format: {input_file.suffix}")

    with opener(input_file) as member:
        yield io.TextIOWrapper(member, encoding="utf-8")


class BatchCalculator(BaseModel):
    """
    Evaluate every expression of a text file or archive and write the results.

    Lines are read and evaluated one at a time; blank lines are skipped.
    """

    model_config = ConfigDict(frozen=True)

    def read_expressions(self, input_file: FilePath) -> List[str]:
        """
        Load the non-empty lines of the input file or archive.

        :param FilePath input_file: Path to the input file or archive

        :return: Stripped expressions
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        with open_expressions(input_file) as stream:
            return [line.strip() for line in stream if line.strip()]

    def run(self, input_file: FilePath, output_file: Path) -> List[CalculationResult]:
        """
        Evaluate the expressions of ``input_file`` into ``output_file``.

        The input is opened before the output, so an unreadable input leaves no
        results file behind. Each result line is flushed as soon as it is computed.

        :param FilePath input_file: Path to the input file or archive
        :param Path output_file: Path where results will be written

        :return: Results in input order
        :rtype: List[CalculationResult]
        """
        results: List[CalculationResult] = []
        with open_expressions(input_file) as stream, output_file.open("w", encoding="utf-8") as f_out:
            for line in stream:
                expression = line.strip()
                if not expression:
                    continue
                outcome = calculate(expression)
                results.append(outcome)
                f_out.write(format_result_line(outcome) + "\n")
                f_out.flush()

        failed = sum(1 for outcome in results if not outcome.ok)
        logger.info(f"✉️ {len(results)} results written to {output_file} ({failed} failed)")
        return results
