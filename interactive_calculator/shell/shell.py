"""Interactive read-eval-print loop around the expression parser."""
import io
import sys
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from interactive_calculator.common.errors import CalculatorError
from interactive_calculator.common.formatter import format_result
from interactive_calculator.common.logger import logger
from interactive_calculator.common.parser import WHITESPACE, ExpressionParser


WELCOME_TEXT: str = (
    "\n=== Interactive Calculator ===\n"
    "Enter expressions like: 10 + 5, 20 / 4, 7 * 3\n"
    "Supported operators: +, -, *, /, % (modulo), ^ (power)\n"
    "Commands: 'help' for this message, 'quit' or 'exit' to quit\n"
    "==========================================\n\n"
)

HELP_TEXT: str = (
    "\nCalculator Help:\n"
    "  Basic operations: 10 + 5, 20 - 3, 7 * 8, 15 / 3\n"
    "  Modulo: 17 % 5 (remainder of division)\n"
    "  Power: 2 ^ 3 (2 to the power of 3)\n"
    "  Decimals supported: 3.14 * 2\n"
    "  Negative numbers: -5 + 10\n"
    "  Commands: 'help', 'quit', 'exit'\n\n"
)

GOODBYE_TEXT: str = "Goodbye!\n"

QUIT_COMMANDS = frozenset({"quit", "exit"})
HELP_COMMAND = "help"


class CalculatorShell(BaseModel):
    """
    Interactive calculator reading one expression per line.

    Lifecycle:
        - Prints the welcome banner once
        - Prompts, reads a line, prints the result or an error message
        - Stops on 'quit', 'exit', end of input or Ctrl+C

    A failing line never stops the loop; the next line starts from scratch.
    """

    # Allow arbitrary types like io.TextIOBase
    model_config = ConfigDict(arbitrary_types_allowed=True)

    prompt: str = Field(default="> ", description="Prompt printed before each line")
    input_stream: io.TextIOBase = Field(
        default_factory=lambda: sys.stdin, description="Stream expressions are read from"
    )
    output_stream: io.TextIOBase = Field(
        default_factory=lambda: sys.stdout, description="Stream results are written to"
    )

    def _write(self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()

    def handle_line(self, raw: str) -> Optional[str]:
        """
        Process one input line and return the text to display.

        :param str raw: Line as read from the input stream

        :return: Text to print (possibly empty), or None when the shell must stop
        :rtype: Optional[str]
        """
        line: str = raw.strip(WHITESPACE)

        if not line:
            return ""
        if line in QUIT_COMMANDS:
            return None
        if line == HELP_COMMAND:
            return HELP_TEXT

        try:
            result: float = ExpressionParser.evaluate(line)
        except CalculatorError as exc:
            logger.info(f"🧮❌ {type(exc).__name__} for {line!r}: {exc}")
            return f"{exc.message}\n"

        return f"= {format_result(result)}\n\n"

    def run(self) -> None:
        """
        Run the loop until the user quits or the input ends.

        :return: None
        """
        logger.info("🖥️ Calculator shell started")
        self._write(WELCOME_TEXT)

        while True:
            self._write(self.prompt)
            try:
                raw: str = self.input_stream.readline()
            except KeyboardInterrupt:
                raw = ""

            # End of input (Ctrl+D) or interrupt
            if not raw:
                self._write("\n" + GOODBYE_TEXT)
                break

            output: Optional[str] = self.handle_line(raw)
            if output is None:
                self._write(GOODBYE_TEXT)
                break
            self._write(output)

        logger.info("🖥️ Calculator shell stopped")
