"""Round results to the digit limit and render them as display text."""
from decimal import ROUND_HALF_UP, Decimal, localcontext
import math
from typing import Tuple


def count_digits(text: str) -> int:
    """Count the digit characters of a number text, ignoring sign and decimal point."""
    return sum(char.isdigit() for char in text)


def format_number(value: float) -> str:
    """
    Render a float as plain positional decimal text.

    Integral values lose their fractional part (``8.0`` -> ``"8"``), other values
    keep the shortest digits that round-trip (``1e-05`` -> ``"0.00001"``).

    :param float value: Value to render

    :return: Decimal text without exponent
    :rtype: str
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def sanitize(value: float, digit_limit: int) -> Tuple[float, str]:
    """
    Round a result the way a calculator display does.

    The value is scaled by ``10 ** (digit_limit - 1)``, rounded half away from
    zero and scaled back, i.e. rounded to ``digit_limit - 1`` decimal places.
    The rounding runs on the shortest decimal form of the float, so binary
    noise such as ``0.1 + 0.2 == 0.30000000000000004`` disappears. When the
    rounded value still needs more than ``digit_limit`` digits, the display
    text falls back to exponential notation with 2 fractional digits.

    :param float value: Raw result
    :param int digit_limit: Configured digit limit

    :return: Tuple of (rounded value, display text)
    :rtype: Tuple[float, str]
    """
    if not math.isfinite(value):
        return value, format_number(value)

    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # Room for every integer digit plus the kept decimal places
        ctx.prec = max(ctx.prec, exact.adjusted() + digit_limit + 1)
        rounded: float = float(exact.quantize(Decimal(1).scaleb(1 - digit_limit), rounding=ROUND_HALF_UP))

    text = format_number(rounded)
    if count_digits(text) > digit_limit:
        text = format(rounded, ".2e")
    return rounded, text
