"""Error kinds raised while parsing and evaluating a single expression."""


class CalculatorError(ValueError):
    """
    Base class for every failure the calculator reports to the user.

    Each subclass carries the fixed message printed by the shell, so callers
    only need to catch this class and print ``exc.message``.
    """

    message: str = "Error: Calculation failed"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class InvalidExpression(CalculatorError):
    """No operator could be located in the input."""

    message = "Error: Invalid expression. Use format: number operator number"


class ParseError(CalculatorError):
    """An operand is not a valid numeric literal."""

    message = "Error: Invalid number format"


class DivisionByZero(CalculatorError):
    """Zero divisor under ``/`` or ``%``."""

    message = "Error: Division by zero"


class InvalidOperation(CalculatorError):
    """The operator is not one of the supported symbols."""

    message = "Error: Invalid operator. Use +, -, *, /, %, or ^"
