"""
Command-line entrypoint.

Without a file argument, runs the interactive calculator on stdin/stdout.
With a file argument, evaluates every expression of the file (or archive)
and writes the results next to it.
"""

import argparse
from pathlib import Path
import sys
from typing import List, Literal, Optional

from pydantic import BaseModel, FilePath, ValidationError

from arithmetic_repl.cli.batch import BatchCalculator, build_output_path
from arithmetic_repl.cli.repl import Repl
from arithmetic_repl.common.logger import configure_logging
from arithmetic_repl.common.models import ReplSettings


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : Optional[FilePath]
        File containing arithmetic expressions, one per line. None starts the REPL.
    log_level : LogLevel
        Level of the package logger.
    show_banner : bool
        Whether the REPL prints its banner.
    """

    file_path: Optional[FilePath] = None
    log_level: LogLevel = "WARNING"
    show_banner: bool = True


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="arithmetic-repl",
        description="Evaluate infix arithmetic expressions interactively or from a file",
    )

    parser.add_argument(
        "file_path",
        nargs="?",
        default=None,
        help="Path to a .txt file or .zip/.tar.xz/.7z archive of expressions",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Do not print the welcome banner in interactive mode",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            file_path=args.file_path,
            log_level=args.log_level,
            show_banner=not args.no_banner,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the ``arithmetic-repl`` command.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``
    :return: Process exit code
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)

    if cli_args.file_path is None:
        Repl(settings=ReplSettings(show_banner=cli_args.show_banner)).run()
        return 0

    input_path: Path = Path(cli_args.file_path)
    output_path: Path = build_output_path(input_path)
    try:
        BatchCalculator().run(input_path, output_path)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
