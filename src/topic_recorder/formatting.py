"""Numeric formatting and CSV field escaping."""

from __future__ import annotations

from typing import Callable, Iterable

NumericFormatter = Callable[[float], str]

DEFAULT_SIGNIFICANT_DIGITS = 5


def make_numeric_formatter(significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS) -> NumericFormatter:
    """
    Build a formatter that keeps ``significant_digits`` digits, trailing zeros included.

    Large and small magnitudes switch to exponent notation the same way
    ``%g`` does, e.g. with 5 digits: 98.6 -> "98.600", 123456.0 -> "1.2346e+05".
    """
    if significant_digits < 1:
        raise ValueError(f"significant_digits must be >= 1, got {significant_digits}")
    spec = f"%#.{significant_digits}g"

    def format_numeric(value: float) -> str:
        return spec % float(value)

    return format_numeric


format_numeric = make_numeric_formatter()


def escape_field(text: str) -> str:
    """Wrap a field containing a comma in double quotes. Embedded quotes are left alone."""
    if "," in text:
        return f'"{text}"'
    return text


def join_fields(fields: Iterable[str]) -> str:
    """Escape each field and join with commas."""
    return ",".join(escape_field(f) for f in fields)
