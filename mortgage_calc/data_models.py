"""Data models for the mortgage calculator.

This module defines the values passed between the calculator components:
extra (accelerated) principal payments, the per-period payment records of an
amortization schedule and the read-only table that holds them. All of them
are immutable; "with" methods return modified copies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidArgument
from .period_keys import Interval, PeriodKey
from .utils import Number, round_cents, to_decimal

ZERO = Decimal("0")


@dataclass(frozen=True)
class ExtraPayment:
    """An extra principal payment that may recur.

    Attributes
    ----------
    start: PeriodKey
        The first due date the payment applies to. The key's interval sets the
        recurrence; ``Interval.ONE_TIME`` applies once whatever ``count`` says.
    count: int
        Total number of occurrences, at least one.
    amount: Decimal
        Amount paid at each occurrence, greater than zero.
    """

    start: PeriodKey
    count: int
    amount: Decimal

    def __post_init__(self) -> None:
        if self.start is None:
            raise InvalidArgument("The start key must not be None")
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise InvalidArgument(f"The count must be an integer; got {self.count!r}")
        if self.count < 1:
            raise InvalidArgument("The count must be greater than 0")
        amount = to_decimal(self.amount, "amount")
        if amount <= 0:
            raise InvalidArgument("The amount must be greater than 0")
        object.__setattr__(self, "amount", amount)

    @classmethod
    def create(
        cls, start_date: date, amount: Number, interval: Interval = Interval.ONE_TIME, count: int = 1
    ) -> "ExtraPayment":
        """Convenience constructor from a plain date."""
        return cls(PeriodKey.from_date(interval, start_date), count, amount)

    @property
    def interval(self) -> Interval:
        return self.start.interval

    def with_start(self, start: PeriodKey) -> "ExtraPayment":
        return replace(self, start=start)

    def with_count(self, count: int) -> "ExtraPayment":
        return replace(self, count=count)

    def with_amount(self, amount: Number) -> "ExtraPayment":
        return replace(self, amount=amount)


@dataclass(frozen=True)
class PaymentRecord:
    """One entry in the amortization schedule.

    The stored values are unrounded and are the state carried into the next
    period. The ``*_rounded`` properties round each value to cents on access;
    they must never be fed back into the calculation.
    """

    total: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal
    cumulative_interest: Decimal
    extra: Decimal = ZERO

    @property
    def total_rounded(self) -> Decimal:
        return round_cents(self.total)

    @property
    def principal_rounded(self) -> Decimal:
        return round_cents(self.principal)

    @property
    def interest_rounded(self) -> Decimal:
        return round_cents(self.interest)

    @property
    def balance_rounded(self) -> Decimal:
        return round_cents(self.balance)

    @property
    def cumulative_interest_rounded(self) -> Decimal:
        return round_cents(self.cumulative_interest)

    @property
    def extra_rounded(self) -> Decimal:
        return round_cents(self.extra)

    def as_dict(self, rounded: bool = True) -> Dict[str, Decimal]:
        """Return the record's values keyed by name."""
        names = ("total", "principal", "interest", "balance", "cumulative_interest", "extra")
        if rounded:
            return {name: round_cents(getattr(self, name)) for name in names}
        return {name: getattr(self, name) for name in names}


@dataclass(frozen=True)
class AmortizationTable(Mapping):
    """A read-only, chronologically ordered map of due date to payment.

    Iteration yields due dates in order; lookups accept a ``date`` or a
    ``PeriodKey``.
    """

    _entries: Tuple[Tuple[date, PaymentRecord], ...] = ()
    _index: Dict[date, PaymentRecord] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = tuple(self._entries)
        index: Dict[date, PaymentRecord] = {}
        previous: Optional[date] = None
        for due, record in entries:
            if previous is not None and due <= previous:
                raise InvalidArgument(f"Due dates must be strictly increasing; {due} follows {previous}")
            index[due] = record
            previous = due
        object.__setattr__(self, "_entries", entries)
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_entries(cls, entries: Iterable[Tuple[date, PaymentRecord]]) -> "AmortizationTable":
        return cls(tuple(entries))

    def __getitem__(self, key) -> PaymentRecord:
        if isinstance(key, PeriodKey):
            key = key.date
        return self._index[key]

    def __iter__(self) -> Iterator[date]:
        return (due for due, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> List[Tuple[date, PaymentRecord]]:
        """Return ``(due_date, record)`` pairs in chronological order."""
        return list(self._entries)

    @property
    def payment_count(self) -> int:
        return len(self._entries)

    @property
    def first(self) -> Optional[Tuple[date, PaymentRecord]]:
        return self._entries[0] if self._entries else None

    @property
    def last(self) -> Optional[Tuple[date, PaymentRecord]]:
        return self._entries[-1] if self._entries else None
