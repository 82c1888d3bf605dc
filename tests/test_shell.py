"""Test class CalculatorShell."""
import io

import pytest

from interactive_calculator.shell.shell import (
    GOODBYE_TEXT,
    HELP_TEXT,
    WELCOME_TEXT,
    CalculatorShell,
)


def run_shell(user_input: str) -> str:
    """Run a shell over the given input and return everything it printed."""
    output = io.StringIO()
    shell = CalculatorShell(input_stream=io.StringIO(user_input), output_stream=output)
    shell.run()
    return output.getvalue()


@pytest.fixture
def shell() -> CalculatorShell:
    """Shell with empty in-memory streams."""
    return CalculatorShell(input_stream=io.StringIO(), output_stream=io.StringIO())


@pytest.mark.parametrize("line,expected", [
    ("10 + 5\n", "= 15\n\n"),
    ("20 / 4", "= 5\n\n"),
    ("17 % 5", "= 2\n\n"),
    ("2 ^ 3", "= 8\n\n"),
    ("3.14 * 2", "= 6.28\n\n"),
    ("  -5 + 10\r\n", "= 5\n\n"),
    ("-8 ^ 0.5", "= nan\n\n"),
])
def test_handle_line_result(shell: CalculatorShell, line: str, expected: str) -> None:
    """Valid expressions are printed with '= ' and a blank line."""
    assert shell.handle_line(line) == expected


@pytest.mark.parametrize("line,expected", [
    ("5 / 0", "Error: Division by zero\n"),
    ("5 % 0", "Error: Division by zero\n"),
    ("42", "Error: Invalid expression. Use format: number operator number\n"),
    ("abc + 5", "Error: Invalid number format\n"),
])
def test_handle_line_error(shell: CalculatorShell, line: str, expected: str) -> None:
    """Each error kind is reported with its fixed message."""
    assert shell.handle_line(line) == expected


@pytest.mark.parametrize("line", ["", "   ", "\t\n"])
def test_handle_line_empty(shell: CalculatorShell, line: str) -> None:
    """Blank lines print nothing."""
    assert shell.handle_line(line) == ""


@pytest.mark.parametrize("line", ["quit", "exit", "  quit \n"])
def test_handle_line_quit(shell: CalculatorShell, line: str) -> None:
    """Quit commands stop the shell."""
    assert shell.handle_line(line) is None


def test_handle_line_help(shell: CalculatorShell) -> None:
    """The help command prints the help text."""
    assert shell.handle_line("help") == HELP_TEXT


def test_run_session() -> None:
    """A whole session prints banner, prompts, results, errors and goodbye."""
    printed = run_shell("10 + 5\nhelp\n\n5 / 0\nquit\n1 + 1\n")
    assert printed == (
        WELCOME_TEXT
        + "> = 15\n\n"
        + "> " + HELP_TEXT
        + "> "
        + "> Error: Division by zero\n"
        + "> " + GOODBYE_TEXT
    )


def test_run_stops_at_end_of_input() -> None:
    """End of input ends the session with a goodbye on a new line."""
    printed = run_shell("2 ^ 3\n")
    assert printed == WELCOME_TEXT + "> = 8\n\n" + "> \n" + GOODBYE_TEXT


def test_run_continues_after_errors() -> None:
    """A failing line does not stop the loop."""
    printed = run_shell("abc + 1\n1 / 0\n4 * 4\nexit\n")
    assert "Error: Invalid number format\n" in printed
    assert "Error: Division by zero\n" in printed
    assert "= 16\n" in printed
    assert printed.endswith(GOODBYE_TEXT)


def test_run_custom_prompt() -> None:
    """The prompt is configurable."""
    output = io.StringIO()
    CalculatorShell(prompt="calc> ", input_stream=io.StringIO("quit\n"), output_stream=output).run()
    assert output.getvalue() == WELCOME_TEXT + "calc> " + GOODBYE_TEXT


def test_run_interrupted() -> None:
    """Ctrl+C while reading ends the session like end of input."""

    class InterruptingInput(io.StringIO):
        def readline(self, *args):
            raise KeyboardInterrupt

    output = io.StringIO()
    CalculatorShell(input_stream=InterruptingInput(), output_stream=output).run()
    assert output.getvalue() == WELCOME_TEXT + "> \n" + GOODBYE_TEXT
