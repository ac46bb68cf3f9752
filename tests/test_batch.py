"""Test class BatchCalculator."""
from pathlib import Path
import tarfile
import zipfile

import py7zr
import pytest

from arithmetic_repl.cli.batch import BatchCalculator, build_output_path, format_result_line
from arithmetic_repl.common.models import CalculationResult


@pytest.mark.parametrize("name,expected", [
    ("ops.txt", "ops_txt_results.txt"),
    ("ops.7z", "ops_7z_results.txt"),
    ("ops.tar.xz", "ops_tar_xz_results.txt"),
])
def test_build_output_path(tmp_path: Path, name: str, expected: str) -> None:
    """The results file sits next to the input with its suffixes folded in."""
    assert build_output_path(tmp_path / name) == tmp_path / expected


def test_format_result_line() -> None:
    """Results and errors use distinct line formats."""
    ok = CalculationResult(expression="2 + 3", result=5.0)
    failed = CalculationResult(expression="5 / 0", error="Division by zero", error_kind="division_by_zero")
    assert format_result_line(ok) == "2 + 3 = 5.0"
    assert format_result_line(failed) == "5 / 0 -> ERROR: Division by zero"


def test_run_txt(tmp_path: Path) -> None:
    """Every non-empty line is evaluated and written in order."""
    input_file = tmp_path / "ops.txt"
    output_file = tmp_path / "results.txt"
    input_file.write_text("2 + 3 * 4\n\n  8 - 4 - 2  \n5 / 0\n3 +\n")

    results = BatchCalculator().run(input_file, output_file)

    assert [r.ok for r in results] == [True, True, False, False]
    lines = output_file.read_text().splitlines()
    assert lines[0] == "2 + 3 * 4 = 14.0"
    assert lines[1] == "8 - 4 - 2 = 2.0"
    assert lines[2] == "5 / 0 -> ERROR: Division by zero"
    assert lines[3].startswith("3 + -> ERROR: ")


def test_read_expressions_zip(tmp_path: Path) -> None:
    """Check that a .zip archive can be extracted and read correctly."""
    txt = tmp_path / "ops.txt"
    txt.write_text("3+3\n")

    zip_path = tmp_path / "ops.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.write(txt, arcname="ops.txt")

    assert BatchCalculator().read_expressions(zip_path) == ["3+3"]


def test_read_expressions_tar_xz(tmp_path: Path) -> None:
    """Check that a .tar.xz archive can be extracted and read correctly."""
    txt = tmp_path / "ops.txt"
    txt.write_text("4*4\n")

    tar_path = tmp_path / "ops.tar.xz"
    with tarfile.open(tar_path, "w:xz") as tf:
        tf.add(txt, arcname="ops.txt")

    assert BatchCalculator().read_expressions(tar_path) == ["4*4"]


def test_run_7z(tmp_path: Path) -> None:
    """A .7z archive is evaluated like a plain file."""
    txt = tmp_path / "ops.txt"
    txt.write_text("5-2\n(1+1)*3\n")

    archive_path = tmp_path / "ops.7z"
    with py7zr.SevenZipFile(archive_path, "w") as archive:
        archive.write(txt, arcname="ops.txt")

    output_file = tmp_path / "out.txt"
    BatchCalculator().run(archive_path, output_file)

    assert output_file.read_text() == "5-2 = 3.0\n(1+1)*3 = 6.0\n"


def test_extract_archive_no_txt(tmp_path: Path) -> None:
    """Verify that extraction fails if no .txt file exists in the archive."""
    zip_path = tmp_path / "empty.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("data.bin", b"\x00\x01")

    with pytest.raises(ValueError, match="No expression file"):
        BatchCalculator().read_expressions(zip_path)


def test_extract_unsupported_format(tmp_path: Path) -> None:
    """Ensure unsupported archive formats raise a ValueError."""
    file_path = tmp_path / "ops.rar"
    file_path.write_text("1+1")

    with pytest.raises(ValueError, match="Unsupported input format"):
        BatchCalculator().read_expressions(file_path)


def test_read_expressions_zip_member_in_folder(tmp_path: Path) -> None:
    """The expression file may sit in a folder inside the archive."""
    zip_path = tmp_path / "ops.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("README.md", "not expressions")
        zf.writestr("data/ops.txt", "1 + 1\n\n(2 + 3) * 4\n")

    assert BatchCalculator().read_expressions(zip_path) == ["1 + 1", "(2 + 3) * 4"]


def test_run_unreadable_input_writes_nothing(tmp_path: Path) -> None:
    """An unsupported input fails before the results file is created."""
    input_file = tmp_path / "ops.rar"
    input_file.write_text("1+1")
    output_file = tmp_path / "out.txt"

    with pytest.raises(ValueError):
        BatchCalculator().run(input_file, output_file)

    assert not output_file.exists()
