"""Utility functions for the mortgage calculator.

This module provides helpers for turning caller input into Python data types
(dates parsed with a caller-supplied pattern, numbers converted to
``Decimal``), for moving dates forward by whole months and for rounding money
to cents. Rounding is half-even (banker's rounding) throughout.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, getcontext
import calendar
from typing import Union

from .errors import InvalidArgument

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def parse_date(date_str: str, pattern: str) -> date:
    """Parse ``date_str`` with a ``strptime`` pattern into a ``date``.

    Parameters
    ----------
    date_str: str
        The date to parse, e.g. ``"2024-01-15"``.
    pattern: str
        A ``datetime.strptime`` format such as ``"%Y-%m-%d"``.

    Returns
    -------
    date
        The calendar date; any time-of-day component is discarded.

    Raises
    ------
    InvalidArgument
        If either argument is missing or the string does not match the pattern.
    """
    if date_str is None:
        raise InvalidArgument("The date string must not be None")
    if pattern is None:
        raise InvalidArgument("The date pattern must not be None")
    try:
        return datetime.strptime(date_str.strip(), pattern).date()
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(
            f"Invalid date {date_str!r} for pattern {pattern!r}"
        ) from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def to_decimal(value: Number, name: str = "value") -> Decimal:
    """Convert a number or numeric string into a ``Decimal``.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion. Strings may contain thousands
    separators. ``bool`` is rejected even though it is an ``int``.
    """
    if value is None or isinstance(value, bool):
        raise InvalidArgument(f"{name} must be a number; got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).replace(",", "").strip())
        except InvalidOperation as exc:
            raise InvalidArgument(f"Invalid numeric value for {name}: {value!r}") from exc
    if not result.is_finite():
        raise InvalidArgument(f"{name} must be finite; got {value!r}")
    return result


def round_cents(value: Decimal) -> Decimal:
    """Round ``value`` to two decimal places, ties to even."""
    return value.quantize(CENT, rounding=ROUND_HALF_EVEN)
