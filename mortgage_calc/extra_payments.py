"""Merge extra payments onto the regular payment calendar.

Each ``ExtraPayment`` recurs on its own interval (weekly, biweekly, monthly,
yearly or once), independent of the loan's payment interval. This module
walks the regular due dates and, at each one, collects every extra payment
whose next occurrence falls on exactly that date. The result maps due dates
to the summed extra amount, which is what the amortization engine consumes.

Occurrences that never coincide with a regular due date are silently
ignored; a weekly extra payment on a monthly loan therefore only lands on
the dates the two calendars share.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from .data_models import ExtraPayment
from .errors import InvalidArgument
from .period_keys import Interval, PeriodKey, next_key

logger = logging.getLogger(__name__)

EMPTY_EXTRA_MAP: Mapping[date, Decimal] = MappingProxyType({})


class _Cursor:
    """Where an extra payment will land next and how many occurrences remain."""

    __slots__ = ("key", "remaining", "amount")

    def __init__(self, extra: ExtraPayment) -> None:
        self.key = extra.start
        self.remaining = extra.count
        self.amount = extra.amount

    def apply(self) -> Decimal:
        if self.key.interval is Interval.ONE_TIME:
            self.remaining = 0
        else:
            self.key = next_key(self.key)
            self.remaining -= 1
        return self.amount


def build_extra_payment_map(
    extra_payments: Iterable[ExtraPayment], start_key: PeriodKey, total_periods: int
) -> Mapping[date, Decimal]:
    """Return a read-only map of regular due date to total extra amount.

    Parameters
    ----------
    extra_payments: Iterable[ExtraPayment]
        The extra payments to merge. The collection is copied before it is
        read.
    start_key: PeriodKey
        The loan's start key. The first regular due date is the key after it,
        and later due dates follow on ``start_key.interval``.
    total_periods: int
        How many regular due dates to walk at most (the loan term).

    The walk ends early once every extra payment is used up. An empty input
    yields an empty map.
    """
    if extra_payments is None:
        raise InvalidArgument("The extra payments list must not be None")
    snapshot: List[ExtraPayment] = list(extra_payments)
    if start_key is None:
        raise InvalidArgument("The start key must not be None")
    if not start_key.interval.is_primary:
        raise InvalidArgument(f"{start_key.interval!r} is not a valid payment interval")
    if isinstance(total_periods, bool) or not isinstance(total_periods, int) or total_periods < 1:
        raise InvalidArgument(f"total_periods must be a positive integer; got {total_periods!r}")
    for extra in snapshot:
        if not isinstance(extra, ExtraPayment):
            raise InvalidArgument(f"Not an ExtraPayment: {extra!r}")
        if extra.count < 1:
            raise InvalidArgument("The count must be greater than 0")
        if extra.amount <= 0:
            raise InvalidArgument("The amount must be greater than 0")

    if not snapshot:
        return EMPTY_EXTRA_MAP

    cursors = [_Cursor(extra) for extra in snapshot]
    amounts: Dict[date, Decimal] = {}
    key = next_key(start_key)
    periods_left = total_periods
    walked = 0
    while periods_left > 0 and cursors:
        periods_left -= 1
        walked += 1
        amount = Decimal("0")
        for cursor in cursors:
            if cursor.key.date == key.date:
                amount += cursor.apply()
        if amount > 0:
            amounts[key.date] = amount
        # Cursors that are used up, or whose next date is already behind the
        # regular calendar, can never match again.
        cursors = [c for c in cursors if c.remaining > 0 and c.key.date > key.date]
        key = next_key(key)

    logger.debug(
        "Merged %d extra payment(s) onto %d due date(s) after walking %d of %d period(s)",
        len(snapshot),
        len(amounts),
        walked,
        total_periods,
    )
    return MappingProxyType(amounts)


@dataclass(frozen=True)
class ExtraPaymentMapBuilder:
    """Bind the regular calendar (start key and term) for repeated merges."""

    start_key: PeriodKey
    years: int

    def __post_init__(self) -> None:
        if self.start_key is None:
            raise InvalidArgument("The start key must not be None")
        if isinstance(self.years, bool) or not isinstance(self.years, int) or self.years < 1:
            raise InvalidArgument("The years must be greater than 0")
        if not self.start_key.interval.is_primary:
            raise InvalidArgument(f"{self.start_key.interval!r} is not a valid payment interval")

    @property
    def total_periods(self) -> int:
        return self.years * self.start_key.interval.payments_per_year

    def build(self, extra_payments: Iterable[ExtraPayment]) -> Mapping[date, Decimal]:
        return build_extra_payment_map(extra_payments, self.start_key, self.total_periods)

    def with_start_key(self, start_key: PeriodKey) -> "ExtraPaymentMapBuilder":
        return ExtraPaymentMapBuilder(start_key, self.years)

    def with_years(self, years: int) -> "ExtraPaymentMapBuilder":
        return ExtraPaymentMapBuilder(self.start_key, years)
