"""Core calculation engine for the mortgage calculator.

This module builds fixed-rate amortization schedules. Starting from the full
loan amount it walks the regular due dates one period at a time, splitting
each payment into interest and principal and folding in any extra principal
due on that date. The final payment is capped at the outstanding balance plus
interest, so extra payments shorten the schedule instead of overpaying it.

Values are carried between periods unrounded; rounding to cents happens only
when a ``PaymentRecord`` is read for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, getcontext
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .data_models import AmortizationTable, ExtraPayment, PaymentRecord
from .errors import InvalidArgument
from .extra_payments import build_extra_payment_map
from .payment import PaymentCalculator
from .period_keys import PeriodKey, next_key
from .utils import round_cents, to_decimal

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

ExtraMap = Mapping[Union[date, PeriodKey], Decimal]


def _snapshot_extra_map(extra_map: ExtraMap) -> Dict[date, Decimal]:
    """Copy the caller's map once, normalising keys to dates."""
    if extra_map is None:
        raise InvalidArgument("The extra payments map must not be None")
    snapshot: Dict[date, Decimal] = {}
    for key, amount in dict(extra_map).items():
        due = key.date if isinstance(key, PeriodKey) else key
        if not isinstance(due, date):
            raise InvalidArgument(f"Extra payment map keys must be dates; got {key!r}")
        value = to_decimal(amount, "extra amount")
        if value <= 0:
            raise InvalidArgument(f"Extra payment amounts must be greater than 0; got {amount!r} for {due}")
        snapshot[due] = snapshot.get(due, ZERO) + value
    return snapshot


@dataclass(frozen=True)
class AmortizationBuilder:
    """Build amortization tables for one loan and start date.

    Parameters
    ----------
    calculator: PaymentCalculator
        The loan terms. Its interval is the regular payment interval.
    start_key: PeriodKey
        The loan start. The first payment is due one interval later.
    """

    calculator: PaymentCalculator
    start_key: PeriodKey

    def __post_init__(self) -> None:
        if self.calculator is None:
            raise InvalidArgument("The payment calculator must not be None")
        if self.start_key is None:
            raise InvalidArgument("The start key must not be None")
        # Due dates follow the loan's payment interval, whatever the key carried.
        if self.start_key.interval is not self.calculator.interval:
            object.__setattr__(self, "start_key", self.start_key.with_interval(self.calculator.interval))

    def with_calculator(self, calculator: PaymentCalculator) -> "AmortizationBuilder":
        return replace(self, calculator=calculator)

    def with_start_key(self, start_key: PeriodKey) -> "AmortizationBuilder":
        return replace(self, start_key=start_key)

    def build(
        self,
        extra_payments: Optional[Iterable[ExtraPayment]] = None,
        extra_map: Optional[ExtraMap] = None,
    ) -> AmortizationTable:
        """Build the schedule, optionally with extra payments.

        Pass either a list of ``ExtraPayment`` (merged onto the regular
        calendar first) or an already merged ``extra_map``, not both.
        """
        if extra_payments is not None and extra_map is not None:
            raise InvalidArgument("Pass either extra_payments or extra_map, not both")
        if extra_payments is not None:
            return self.build_with_payments(extra_payments)
        if extra_map is not None:
            return self.build_with_map(extra_map)
        return self._build({})

    def build_with_map(self, extra_map: ExtraMap) -> AmortizationTable:
        """Build the schedule using a map of exact due date to extra amount.

        Dates that are not regular due dates are ignored.
        """
        return self._build(_snapshot_extra_map(extra_map))

    def build_with_payments(self, extra_payments: Iterable[ExtraPayment]) -> AmortizationTable:
        """Merge ``extra_payments`` onto the due dates, then build the schedule."""
        if extra_payments is None:
            raise InvalidArgument("The extra payments list must not be None")
        extra_map = build_extra_payment_map(extra_payments, self.start_key, self.calculator.payment_count)
        return self.build_with_map(extra_map)

    def _build(self, extras: Mapping[date, Decimal]) -> AmortizationTable:
        periodic = self.calculator.calc()
        rate = periodic.periodic_rate
        payment = periodic.payment_unrounded

        balance = self.calculator.loan_amount
        cumulative_interest = ZERO
        key = next_key(self.start_key)
        periods_left = self.calculator.payment_count
        entries: List[Tuple[date, PaymentRecord]] = []

        while round_cents(balance) > 0 and periods_left > 0:
            periods_left -= 1
            interest = balance * rate
            extra = extras.get(key.date, ZERO)
            total = min(balance + interest, payment + extra)
            principal = total - interest
            balance = balance - principal
            cumulative_interest = cumulative_interest + interest
            entries.append(
                (
                    key.date,
                    PaymentRecord(
                        total=total,
                        principal=principal,
                        interest=interest,
                        balance=balance,
                        cumulative_interest=cumulative_interest,
                        extra=max(total - payment, ZERO) if extra else ZERO,
                    ),
                )
            )
            key = next_key(key)

        logger.debug(
            "Built %d of %d payment(s) for %s at %s%% from %s (%d extra date(s))",
            len(entries),
            self.calculator.payment_count,
            self.calculator.loan_amount,
            self.calculator.annual_rate,
            self.start_key.date.isoformat(),
            len(extras),
        )
        return AmortizationTable.from_entries(entries)


def build_amortization_table(
    calculator: PaymentCalculator,
    start_key: PeriodKey,
    extra_payments: Optional[Iterable[ExtraPayment]] = None,
    extra_map: Optional[ExtraMap] = None,
) -> AmortizationTable:
    """Shortcut for ``AmortizationBuilder(calculator, start_key).build(...)``."""
    return AmortizationBuilder(calculator, start_key).build(extra_payments=extra_payments, extra_map=extra_map)


def summarize(
    table: AmortizationTable,
    calculator: PaymentCalculator,
    start_key: PeriodKey,
    baseline: Optional[AmortizationTable] = None,
) -> Dict[str, object]:
    """Compute summary metrics for a schedule.

    Parameters
    ----------
    table: AmortizationTable
        The schedule to summarise.
    calculator: PaymentCalculator
        The loan terms the schedule was built from.
    start_key: PeriodKey
        The loan start; used for the scheduled end date.
    baseline: AmortizationTable, optional
        The same loan without extra payments. When given, the summary includes
        a ``comparison`` section with the interest and periods saved.

    Returns
    -------
    Dict[str, object]
        Rounded ``Decimal`` amounts, counts and ISO dates.
    """
    records = [record for _, record in table.entries()]
    total_paid = sum((r.total for r in records), ZERO)
    total_extra = sum((r.extra for r in records), ZERO)
    total_interest = records[-1].cumulative_interest if records else ZERO
    scheduled_end = next_key(start_key.with_interval(calculator.interval), n=calculator.payment_count)
    last = table.last
    summary: Dict[str, object] = {
        "loan_amount": round_cents(calculator.loan_amount),
        "annual_rate": calculator.annual_rate,
        "interval": calculator.interval.name.lower(),
        "periodic_payment": calculator.calc_payment(),
        "total_paid": round_cents(total_paid),
        "total_interest": round_cents(total_interest),
        "total_extra": round_cents(total_extra),
        "payments_made": len(records),
        "scheduled_payments": calculator.payment_count,
        "original_end_date": scheduled_end.date.isoformat(),
        "payoff_date": last[0].isoformat() if last else None,
    }
    if baseline is not None:
        base_records = [record for _, record in baseline.entries()]
        base_interest = base_records[-1].cumulative_interest if base_records else ZERO
        summary["comparison"] = {
            "baseline_total_interest": round_cents(base_interest),
            "interest_saved": round_cents(base_interest - total_interest),
            "periods_saved": len(base_records) - len(records),
        }
    return summary
