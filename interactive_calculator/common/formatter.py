"""Render evaluation results for display."""
from decimal import Decimal
import math


def format_result(value: float) -> str:
    """
    Format a result as the shortest plain decimal string.

    Integral values lose their fractional part and no exponent notation is
    used, e.g. 15.0 -> "15", 6.28 -> "6.28", 1e-07 -> "0.0000001".

    :param float value: Result to format

    :return: Display string
    :rtype: str
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    # repr() is the shortest string that round-trips, normalize() drops trailing zeros
    return format(Decimal(repr(value)).normalize(), "f")
