"""Integer fixed-point helpers with explicit truncating rounding.

Python ints never wrap, so every helper checks its result against a bounded
working width and raises ``ArithmeticOverflow`` instead. Division is ``//`` on
non-negative operands, i.e. truncation toward zero (rounding down).
"""
from __future__ import annotations

from .constants import MAX_DECIMALS, PERCENTAGE_FACTOR, WIDE_BITS, WORD_BITS
from .errors import ArithmeticOverflow


def _bound(bits: int) -> int:
    return (1 << bits) - 1


def checked_add(a: int, b: int, bits: int = WORD_BITS) -> int:
    """Add with overflow checking (256-bit by default)."""
    result = a + b
    if result > _bound(bits):
        raise ArithmeticOverflow(f"Arithmetic overflow in addition ({bits}-bit)")
    return result


def checked_mul(a: int, b: int, bits: int = WIDE_BITS) -> int:
    """Multiply with overflow checking (512-bit by default)."""
    result = a * b
    if result > _bound(bits):
        raise ArithmeticOverflow(f"Arithmetic overflow in multiplication ({bits}-bit)")
    return result


def mul_all(*factors: int, bits: int = WIDE_BITS) -> int:
    """Checked product of *factors*, evaluated left to right."""
    result = 1
    for factor in factors:
        result = checked_mul(result, factor, bits)
    return result


def checked_div(a: int, b: int) -> int:
    """Truncating division; callers validate divisors beforehand."""
    if b == 0:
        raise ZeroDivisionError("Division by zero")
    return a // b


def percent_mul(value: int, percentage: int) -> int:
    """``value * percentage / 10000``, rounded down.

    Example:  percent_mul(500, 10500)  ->  525
    """
    return checked_div(checked_mul(value, percentage), PERCENTAGE_FACTOR)


def percent_div(value: int, percentage: int) -> int:
    """``value * 10000 / percentage``, rounded down.

    Example:  percent_div(200, 10500)  ->  190
    """
    return checked_div(checked_mul(value, PERCENTAGE_FACTOR), percentage)


def pow10(decimals: int) -> int:
    """``10**decimals`` for token precisions representable in 256 bits."""
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ArithmeticOverflow(f"10**{decimals} is outside the supported range")
    return 10**decimals
