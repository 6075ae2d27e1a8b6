"""Payment intervals and due-date keys.

A ``PeriodKey`` identifies one payment due date. Keys compare, hash and sort
by their calendar date alone, so a key built for a monthly schedule and one
built for a yearly extra payment on the same day are the same map key. The
key also remembers an ``Interval`` which decides how ``next_key`` moves it
forward.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterator, Optional, Union

from .errors import InvalidArgument
from .utils import add_months, parse_date


class Interval(Enum):
    """Cadence of a payment series.

    Each member carries the calendar unit it advances by, the number of units
    per advance and the number of payments per year. Only weekly, biweekly and
    monthly are valid for the regular payment; yearly and one-time exist for
    extra payments. ``ONE_TIME`` never advances.
    """

    WEEKLY = ("weeks", 1, 52)
    BIWEEKLY = ("weeks", 2, 26)
    MONTHLY = ("months", 1, 12)
    YEARLY = ("years", 1, 1)
    ONE_TIME = ("years", 0, 0)

    def __init__(self, unit: str, increment: int, payments_per_year: int) -> None:
        self.unit = unit
        self.increment = increment
        self.payments_per_year = payments_per_year

    @property
    def is_primary(self) -> bool:
        """Whether the interval can be used for the regular payment."""
        return self in (Interval.WEEKLY, Interval.BIWEEKLY, Interval.MONTHLY)

    @classmethod
    def parse(cls, name: Union[str, "Interval"]) -> "Interval":
        """Look up an interval by name, ignoring case, dashes and underscores."""
        if isinstance(name, Interval):
            return name
        if name is None:
            raise InvalidArgument("The interval must not be None")
        normalized = str(name).strip().upper().replace("-", "").replace("_", "")
        for member in cls:
            if member.name.replace("_", "") == normalized:
                return member
        choices = ", ".join(m.name.lower() for m in cls)
        raise InvalidArgument(f"Unknown interval {name!r}; expected one of {choices}")


def _advance(dt: date, interval: Interval, n: int) -> date:
    units = interval.increment * n
    if units == 0:
        return dt
    if interval.unit == "weeks":
        return dt + timedelta(weeks=units)
    if interval.unit == "months":
        return add_months(dt, units)
    return add_months(dt, 12 * units)


@dataclass(frozen=True, order=True)
class PeriodKey:
    """An immutable, ordered due-date key.

    Only ``date`` takes part in equality, hashing and ordering.
    """

    date: date
    interval: Interval = field(compare=False)

    def __post_init__(self) -> None:
        if self.interval is None:
            raise InvalidArgument("The interval must not be None")
        if not isinstance(self.interval, Interval):
            raise InvalidArgument(f"Not an Interval: {self.interval!r}")
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        elif not isinstance(self.date, date):
            raise InvalidArgument(f"Not a date: {self.date!r}")

    @classmethod
    def from_date(cls, interval: Interval, value: Union[date, datetime]) -> "PeriodKey":
        """Build a key from a ``date`` or ``datetime`` (time of day is dropped)."""
        if value is None:
            raise InvalidArgument("The date must not be None")
        return cls(value, interval)

    @classmethod
    def parse(cls, interval: Interval, date_str: str, pattern: str) -> "PeriodKey":
        """Build a key from a date string and a ``strptime`` pattern."""
        if interval is None:
            raise InvalidArgument("The interval must not be None")
        return cls(parse_date(date_str, pattern), interval)

    @classmethod
    def today(cls, interval: Interval) -> "PeriodKey":
        return cls(date.today(), interval)

    def with_interval(self, interval: Interval) -> "PeriodKey":
        return PeriodKey(self.date, interval)

    def next(self, n: int = 1) -> "PeriodKey":
        return next_key(self, self.interval, n)

    def __str__(self) -> str:
        return f"{self.date.isoformat()} ({self.interval.name.lower()})"


def next_key(key: PeriodKey, interval: Optional[Interval] = None, n: int = 1) -> PeriodKey:
    """Return the key ``n`` advances of ``interval`` after ``key``.

    ``interval`` defaults to the key's own interval and is carried by the
    returned key. Month arithmetic clamps to the end of the month. A
    ``ONE_TIME`` interval returns an equal key, so loops that rely on it must
    be bounded by a count.
    """
    if key is None:
        raise InvalidArgument("The key must not be None")
    interval = interval if interval is not None else key.interval
    if interval is None:
        raise InvalidArgument("The interval must not be None")
    if n < 0:
        raise InvalidArgument(f"n must not be negative; got {n}")
    return PeriodKey(_advance(key.date, interval, n), interval)


def iter_keys(start: PeriodKey, count: int) -> Iterator[PeriodKey]:
    """Yield the ``count`` keys that follow ``start`` on its own interval."""
    key = start
    for _ in range(count):
        key = key.next()
        yield key
