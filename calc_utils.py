import math
from typing import Union

from calc_core import CalcError, CalcErrorKind, powf

FACTORIAL_MAX_N = 20
U64_MAX = 2 ** 64 - 1


def percentage(value: float, percent: float) -> float:
    """
    Returns `percent` percent of `value`.
    Args:
        value: The base amount.
        percent: Percentage to take, e.g. 10 for ten percent. Negative and >100 are allowed.
    Returns:
        value * percent / 100
    """
    return value * (percent / 100.0)


def compound_interest(principal: float, rate: float, years: float, compounds_per_year: float) -> float:
    """
    Future value of `principal` with `rate` percent yearly interest compounded
    `compounds_per_year` times a year over `years` years.
    Args:
        principal: Starting amount.
        rate: Yearly interest rate in percent (5 means 5%).
        years: Duration in years, may be fractional.
        compounds_per_year: Compounding periods per year (12 for monthly).
    Returns:
        principal * (1 + rate / (100 * n)) ** (n * years)
    """
    growth = 1.0 + _ieee_div(rate, 100.0 * compounds_per_year)
    return principal * powf(growth, compounds_per_year * years)


def factorial(n: int) -> int:
    """
    Iterative n! within the unsigned 64-bit range.
    Args:
        n: Non-negative integer.
    Returns:
        The product 1 * 2 * ... * n (1 for n = 0 and n = 1).
    Raises:
        CalcError: OVERFLOW when n > 20 or the product leaves the 64-bit range.
        ValueError: When n is negative or not an integer.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f"factorial requires a non-negative integer, got {n!r}")
    if n < 0:
        raise ValueError(f"factorial requires a non-negative integer, got {n}")
    if n > FACTORIAL_MAX_N:
        raise CalcError(CalcErrorKind.OVERFLOW)

    result = 1
    for i in range(2, n + 1):
        result *= i
        if result > U64_MAX:
            raise CalcError(CalcErrorKind.OVERFLOW)
    return result


def format_number(value: Union[int, float]) -> str:
    """
    Formats a number for display the way the browser front end printed it
    (Number.prototype.toString): shortest round-trip digits, plain notation
    for decimal exponents from -6 to 20, otherwise 1.5e+21 / 1e-7 style.
    Infinity and NaN are spelled out.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0.0:
        return "0"

    text = repr(value)
    sign = '-' if text.startswith('-') else ''
    mantissa, _, exp_text = text.lstrip('-').partition('e')
    int_part, _, frac_part = mantissa.partition('.')

    # value = 0.DIGITS * 10 ** point
    digits = int_part + frac_part
    point = len(int_part) + (int(exp_text) if exp_text else 0)
    stripped = digits.lstrip('0')
    point -= len(digits) - len(stripped)
    digits = stripped.rstrip('0')
    k = len(digits)

    if k <= point <= 21:
        body = digits + '0' * (point - k)
    elif 0 < point <= 21:
        body = digits[:point] + '.' + digits[point:]
    elif -6 < point <= 0:
        body = '0.' + '0' * (-point) + digits
    else:
        exponent = point - 1
        body = digits[0] + ('.' + digits[1:] if k > 1 else '')
        body += 'e' + ('+' if exponent >= 0 else '-') + str(abs(exponent))
    return sign + body


def _ieee_div(numerator: float, denominator: float) -> float:
    # x / 0 gives a signed infinity (NaN for 0 / 0) instead of ZeroDivisionError
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator
