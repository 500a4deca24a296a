"""
Numeric text representation for metric values.

Values are rendered with the shortest digit string that round-trips
through ``float()``, laid out like ``%g``: positional notation for decimal
exponents in [-4, 6), scientific otherwise, no trailing ``.0`` on integral
values. Infinities and NaN use the exposition format tokens.
"""

from __future__ import annotations

import math
from decimal import Decimal

POSITIVE_INFINITY = "+Inf"
NEGATIVE_INFINITY = "-Inf"
NOT_A_NUMBER = "NaN"

# %e is used if the decimal exponent is below -4 or at least this value
_EXPONENT_THRESHOLD = 6


def format_value(value: float) -> str:
    """Render a sample value, count, bound or quantile level as text.

    >>> format_value(5.0)
    '5'
    >>> format_value(0.25)
    '0.25'
    >>> format_value(1e6)
    '1e+06'
    >>> format_value(float("inf"))
    '+Inf'
    """
    value = float(value)
    if math.isnan(value):
        return NOT_A_NUMBER
    if math.isinf(value):
        return POSITIVE_INFINITY if value > 0 else NEGATIVE_INFINITY

    # repr() yields the shortest round-tripping digits
    sign, digits, exponent = Decimal(repr(value)).as_tuple()
    digit_str = "".join(str(d) for d in digits).rstrip("0")
    prefix = "-" if sign else ""
    if not digit_str:
        return f"{prefix}0"

    # digits[0] carries decimal exponent ``point``
    point = len(digits) + int(exponent) - 1

    if point < -4 or point >= _EXPONENT_THRESHOLD:
        mantissa = digit_str[0]
        if len(digit_str) > 1:
            mantissa += "." + digit_str[1:]
        exp_sign = "-" if point < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(point):02d}"

    if point < 0:
        return f"{prefix}0.{'0' * (-point - 1)}{digit_str}"
    integer_len = point + 1
    if len(digit_str) <= integer_len:
        return f"{prefix}{digit_str}{'0' * (integer_len - len(digit_str))}"
    return f"{prefix}{digit_str[:integer_len]}.{digit_str[integer_len:]}"
