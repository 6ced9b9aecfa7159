"""Utility functions shared by the calculators.

This module provides helpers for turning user input into ``Decimal`` values,
for validating the inputs an engine requires and for the percentage and
rounding conventions used in results. Form values arrive as free text
("1,00,000", " 7.1 ") so parsing is lenient; validation is strict.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, Overflow, getcontext
from typing import Iterator, Optional, Union

from .config import DECIMAL_PRECISION
from .errors import CalculatorValidationError

getcontext().prec = DECIMAL_PRECISION  # increase decimal precision to avoid rounding errors

Number = Union[Decimal, int, float, str]

# Leading numeric prefix, the part of "12.5%" or "7abc" a form would keep
_NUMERIC_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_STRIP = re.compile(r"[,\s]")


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and handles both integer and float-like
    strings. It raises ``ValueError`` if conversion fails.
    """
    try:
        cleaned = value.replace(",", "").strip()
        return Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc


def to_decimal(value: Number, field: Optional[str] = None) -> Decimal:
    """Coerce ``value`` to a finite ``Decimal``.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion. Raises ``CalculatorValidationError``
    for anything that is not a finite number.
    """
    if isinstance(value, bool):
        raise CalculatorValidationError(f"{_label(field)} must be a number", field)
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, int):
            result = Decimal(value)
        elif isinstance(value, float):
            result = Decimal(str(value))
        elif isinstance(value, str):
            result = decimal_from_str(value)
        else:
            raise ValueError(f"Unsupported type: {type(value).__name__}")
    except ValueError as exc:
        raise CalculatorValidationError(f"{_label(field)} must be a number", field) from exc
    if not result.is_finite():
        raise CalculatorValidationError(f"{_label(field)} must be a finite number", field)
    return result


def parse_numeric_input(value: Optional[Number]) -> Decimal:
    """Parse a raw form value the lenient way.

    Commas and whitespace are removed, then the leading numeric part is read.
    Empty or unparsable input yields ``0`` instead of an error, so that
    optional fields can simply be left blank.
    """
    if value is None:
        return Decimal("0")
    if not isinstance(value, str):
        try:
            return to_decimal(value)
        except CalculatorValidationError:
            return Decimal("0")
    match = _NUMERIC_PREFIX.match(_STRIP.sub("", value))
    if not match:
        return Decimal("0")
    return Decimal(match.group(0))


def validate_positive_number(value: Optional[Number]) -> bool:
    """Return True when ``value`` parses to a number greater than zero."""
    return parse_numeric_input(value) > 0


def require_positive(value: Number, field: str) -> Decimal:
    """Return ``value`` as a Decimal, raising unless it is strictly positive."""
    number = to_decimal(value, field)
    if number <= 0:
        raise CalculatorValidationError(f"{_label(field)} must be greater than 0", field)
    return number


def require_non_negative(value: Optional[Number], field: str) -> Decimal:
    """Return ``value`` as a Decimal (``None`` meaning 0), raising if negative."""
    if value is None:
        return Decimal("0")
    number = to_decimal(value, field)
    if number < 0:
        raise CalculatorValidationError(f"{_label(field)} cannot be negative", field)
    return number


def require_at_most(value: Decimal, limit: Number, field: str) -> Decimal:
    """Return ``value``, raising if it exceeds ``limit``."""
    if value > to_decimal(limit):
        raise CalculatorValidationError(f"{_label(field)} cannot exceed {limit}", field)
    return value


@contextmanager
def guard_overflow(field: str) -> Iterator[None]:
    """Report results beyond the decimal context's range as invalid ``field`` input.

    Powers such as ``(1 + i) ** n`` exceed the exponent limit long before any
    realistic amount would, so an extreme tenure is what usually trips this.
    """
    try:
        yield
    except (Overflow, InvalidOperation) as exc:
        raise CalculatorValidationError(f"{_label(field)} is too large to calculate", field) from exc


def percent_to_rate(percent: Decimal, periods_per_year: int = 1) -> Decimal:
    """Convert an annual percentage (``7.1``) to a per-period fraction."""
    return percent / Decimal(100) / Decimal(periods_per_year)


def calculate_percentage(part: Number, whole: Number) -> Decimal:
    """Return ``part`` as a percentage of ``whole``; 0 when ``whole`` is not positive."""
    part_dec = to_decimal(part)
    whole_dec = to_decimal(whole)
    if whole_dec <= 0:
        return Decimal("0")
    return part_dec / whole_dec * Decimal(100)


def round_to_decimal_places(value: Number, places: int = 2) -> Decimal:
    """Round half up to ``places`` decimal places.

    Non-finite values (an unbounded payoff, for instance) are returned as is,
    and so are values too large to carry ``places`` decimals at the context
    precision.
    """
    number = value if isinstance(value, Decimal) else to_decimal(value)
    if not number.is_finite() or number.adjusted() + places >= getcontext().prec:
        return number
    return number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_currency(value: Decimal) -> Decimal:
    """Round to whole currency units (half up)."""
    return round_to_decimal_places(value, 0)


def _label(field: Optional[str]) -> str:
    if not field:
        return "Value"
    return field.replace("_", " ").capitalize()
