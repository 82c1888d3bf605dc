"""Parse and evaluate two-operand arithmetic expressions safely."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Callable, Dict, Tuple

from interactive_calculator.common.errors import (
    DivisionByZero,
    InvalidExpression,
    InvalidOperation,
    ParseError,
)
from interactive_calculator.common.logger import logger
from interactive_calculator.common.models import ParsedExpression


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]

# Characters removed around an operand before numeric conversion
WHITESPACE: str = " \t\n\r"


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise DivisionByZero(f"{a} / {b}")
    return operator.truediv(a, b)


def _modulo(a: float, b: float) -> float:
    # Floored remainder: the result takes the sign of the divisor
    if b == 0:
        raise DivisionByZero(f"{a} % {b}")
    return operator.mod(a, b)


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and x % 2 == 1


def _power(a: float, b: float) -> float:
    """
    Raise a to the power b with IEEE 754 results instead of exceptions.

    math.pow raises where the floating-point pow function returns a value:
        - overflow gives +/-inf
        - zero to a negative power gives +/-inf
        - any other domain error (negative base, fractional exponent) gives nan

    :param float a: Base
    :param float b: Exponent

    :return: a ** b
    :rtype: float
    """
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            negative_zero = math.copysign(1.0, a) < 0
            return -math.inf if negative_zero and _is_odd_integer(b) else math.inf
        return math.nan


# Mapping of operator symbols to their arithmetic function
OPERATORS: Dict[str, OperatorFn] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
    "%": _modulo,
    "^": _power,
}


class ExpressionParser:
    """
    Parse and evaluate a single binary arithmetic operation.

    Design constraints:
        - No eval(), no dynamic code execution
        - Stateless: every call depends only on its arguments

    Algorithm:
        1. Locate the first operator symbol, skipping index 0 so that a
           leading sign belongs to the left operand
        2. Split the input around it and parse both operands as floats
        3. Dispatch the operator to its arithmetic function

    Examples:
        - "10 + 5" -> 15.0
        - "-5 + 10" -> 5.0 (the leading "-" is a sign, not the operator)
        - "5 + -3" -> 2.0 (split on the first "+", right operand is " -3")
    """

    @staticmethod
    def parse_number(text: str) -> float:
        """
        Convert an operand substring into a float.

        Surrounding spaces, tabs, newlines and carriage returns are removed,
        the rest must be a complete floating-point literal.

        :param str text: Operand substring

        :return: Parsed value
        :rtype: float
        :raises ParseError: If the trimmed text is empty or not a number
        """
        trimmed: str = text.strip(WHITESPACE)
        if not trimmed:
            raise ParseError("Empty operand")
        # float() would also skip other whitespace and accept non-ASCII digits
        if not trimmed.isascii() or any(c.isspace() for c in trimmed):
            raise ParseError(f"Not a number: {trimmed!r}")
        try:
            return float(trimmed)
        except ValueError:
            raise ParseError(f"Not a number: {trimmed!r}") from None

    @staticmethod
    def split(expr: str) -> Tuple[str, str, str]:
        """
        Split an expression around its operator.

        The scan starts at index 1 and stops at the first operator symbol.

        :param str expr: Arithmetic expression, e.g. "10 + 5"

        :return: Tuple of (left operand text, operator, right operand text)
        :rtype: Tuple[str, str, str]
        :raises InvalidExpression: If no operator is found after index 0
        """
        for index in range(1, len(expr)):
            if expr[index] in OPERATORS:
                logger.debug(f"🔎 Operator {expr[index]!r} found at index {index} in {expr!r}")
                return expr[:index], expr[index], expr[index + 1:]
        raise InvalidExpression(f"No operator found in {expr!r}")

    @staticmethod
    def parse(expr: str) -> ParsedExpression:
        """
        Parse an expression into its operands and operator.

        The left operand is parsed before the right one, the first failure wins.

        :param str expr: Arithmetic expression

        :return: Parsed expression
        :rtype: ParsedExpression
        :raises InvalidExpression: If no operator is found
        :raises ParseError: If an operand is not a valid number
        """
        left_text, symbol, right_text = ExpressionParser.split(expr)
        left: float = ExpressionParser.parse_number(left_text)
        right: float = ExpressionParser.parse_number(right_text)
        return ParsedExpression(left=left, operator=symbol, right=right)

    @staticmethod
    def calculate(a: float, symbol: str, b: float) -> float:
        """
        Apply an operator to two operands.

        :param float a: Left operand
        :param str symbol: Operator symbol
        :param float b: Right operand

        :return: Computed result
        :rtype: float
        :raises DivisionByZero: If b is zero under "/" or "%"
        :raises InvalidOperation: If the symbol is not a supported operator
        """
        try:
            fn: OperatorFn = OPERATORS[symbol]
        except KeyError:
            raise InvalidOperation(f"Unsupported operator: {symbol!r}") from None
        return fn(a, b)

    @staticmethod
    def evaluate(expr: str) -> float:
        """
        Evaluate an arithmetic expression safely.

        :param str expr: Trimmed, non-empty arithmetic expression

        :return: Computed result as float
        :rtype: float
        :raises CalculatorError: InvalidExpression, ParseError, DivisionByZero or InvalidOperation
        """
        parsed: ParsedExpression = ExpressionParser.parse(expr)
        result: float = ExpressionParser.calculate(parsed.left, parsed.operator, parsed.right)
        logger.debug(f"🧮 {expr!r} evaluated to {result}")
        return result


def evaluate(line: str) -> float:
    """Evaluate one expression line, see ExpressionParser.evaluate."""
    return ExpressionParser.evaluate(line)
