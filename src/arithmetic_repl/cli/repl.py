"""Interactive read-evaluate-print loop."""
import io
import sys

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_repl.common.logger import logger
from arithmetic_repl.common.models import CalculationResult, ReplSettings
from arithmetic_repl.core.calculator import calculate


BANNER = (
    "Arithmetic Expression Calculator REPL\n"
    "Enter an expression (e.g., 2 + 3 * (4 - 1)) or '{quit}' to exit."
)


def format_number(value: float) -> str:
    """
    Format a result the way a calculator display would.

    Integral values drop the trailing ``.0`` and at most six significant
    digits are shown (``14.0`` -> ``14``, ``1 / 3`` -> ``0.333333``).

    :param float value: Number to format

    :return: Formatted number
    :rtype: str
    """
    return f"{value:g}"


class Repl(BaseModel):
    """
    Read expressions line by line and print their results.

    Lifecycle:
        - Prints the banner (unless disabled)
        - Reads one line at a time until end of input or the quit command
        - Prints ``Result: <value>`` to ``stdout`` or ``Error: <message>`` to ``stderr``
        - Never stops on a bad expression
    """

    # Allow arbitrary types like io.TextIOWrapper
    model_config = ConfigDict(arbitrary_types_allowed=True)

    settings: ReplSettings = Field(default_factory=ReplSettings, description="Loop configuration")
    stdin: io.TextIOBase = Field(default_factory=lambda: sys.stdin, description="Stream read for expressions")
    stdout: io.TextIOBase = Field(default_factory=lambda: sys.stdout, description="Stream for results")
    stderr: io.TextIOBase = Field(default_factory=lambda: sys.stderr, description="Stream for error messages")

    def _report(self, outcome: CalculationResult) -> None:
        """
        Print the outcome of one expression.

        :param CalculationResult outcome: Result or error of the expression
        """
        if outcome.ok:
            print(f"Result: {format_number(outcome.result)}", file=self.stdout)
        else:
            print(f"Error: {outcome.error}", file=self.stderr)

    def handle_line(self, line: str) -> bool:
        """
        Process one input line.

        :param str line: Raw line, with or without its trailing newline

        :return: False when the line is the quit command, True otherwise
        :rtype: bool
        """
        expression = line.rstrip("\r\n")
        if expression == self.settings.quit_command:
            return False
        if not expression.strip():
            return True
        self._report(calculate(expression))
        return True

    def run(self) -> int:
        """
        Run the loop until the quit command or end of input.

        :return: Number of expressions evaluated; blank lines and the quit command are not counted
        :rtype: int
        """
        if self.settings.show_banner:
            print(BANNER.format(quit=self.settings.quit_command), file=self.stdout)

        processed = 0
        while True:
            if self.settings.prompt:
                self.stdout.write(self.settings.prompt)
                self.stdout.flush()

            line = self.stdin.readline()
            if not line:
                logger.info("End of input reached")
                break
            if not line.strip():
                continue
            if not self.handle_line(line):
                logger.info("Quit command received")
                break
            processed += 1

        return processed
