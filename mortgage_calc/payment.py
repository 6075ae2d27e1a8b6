"""Fixed periodic payment for a fully amortizing loan.

The payment is the textbook annuity amount

    payment = P * r / (1 - (1 + r)^-N)

where ``P`` is the loan amount, ``r`` the periodic rate (annual percentage
divided by 100 and by the payments per year) and ``N`` the number of
payments. When the rate is zero the payment is simply ``P / N``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import NamedTuple

from .errors import InvalidArgument
from .period_keys import Interval
from .utils import Number, round_cents, to_decimal


class PeriodicPayment(NamedTuple):
    payment: Decimal
    payment_unrounded: Decimal
    periodic_rate: Decimal


def _validate(loan_amount: Decimal, annual_rate: Decimal, years: int, interval: Interval) -> None:
    if loan_amount <= 0:
        raise InvalidArgument("The loan amount must be greater than 0")
    if annual_rate < 0:
        raise InvalidArgument("The interest rate must not be negative")
    if isinstance(years, bool) or not isinstance(years, int):
        raise InvalidArgument(f"The years must be an integer; got {years!r}")
    if years < 1:
        raise InvalidArgument("The years must be greater than 0")
    if interval is None:
        raise InvalidArgument("The interval must not be None")
    if not isinstance(interval, Interval) or not interval.is_primary:
        raise InvalidArgument(f"{interval!r} is not a valid payment interval")


def _annuity_payment(loan_amount: Decimal, periodic_rate: Decimal, payment_count: int) -> Decimal:
    if periodic_rate == 0:
        return loan_amount / Decimal(payment_count)
    return loan_amount * periodic_rate / (1 - (1 + periodic_rate) ** -payment_count)


def calc_periodic_payment(
    loan_amount: Number, annual_rate: Number, years: int, interval: Interval
) -> PeriodicPayment:
    """Return the rounded and unrounded periodic payment and the periodic rate.

    Raises ``InvalidArgument`` when the loan amount is not positive, the rate
    is negative, the term is shorter than a year or the interval is yearly or
    one-time.
    """
    amount = to_decimal(loan_amount, "loan_amount")
    rate = to_decimal(annual_rate, "annual_rate")
    _validate(amount, rate, years, interval)
    periodic_rate = rate / Decimal(100) / Decimal(interval.payments_per_year)
    unrounded = _annuity_payment(amount, periodic_rate, years * interval.payments_per_year)
    return PeriodicPayment(round_cents(unrounded), unrounded, periodic_rate)


@dataclass(frozen=True)
class PaymentCalculator:
    """The loan terms that determine the periodic payment.

    Instances are validated on construction and never change; the ``with_*``
    methods return new calculators.
    """

    loan_amount: Decimal
    annual_rate: Decimal
    years: int
    interval: Interval = Interval.MONTHLY

    def __post_init__(self) -> None:
        amount = to_decimal(self.loan_amount, "loan_amount")
        rate = to_decimal(self.annual_rate, "annual_rate")
        _validate(amount, rate, self.years, self.interval)
        object.__setattr__(self, "loan_amount", amount)
        object.__setattr__(self, "annual_rate", rate)

    @property
    def payment_count(self) -> int:
        """Number of payments over the full term."""
        return self.years * self.interval.payments_per_year

    @property
    def periodic_rate(self) -> Decimal:
        return self.calc().periodic_rate

    def calc(self) -> PeriodicPayment:
        return calc_periodic_payment(self.loan_amount, self.annual_rate, self.years, self.interval)

    def calc_payment(self) -> Decimal:
        return self.calc().payment

    def calc_payment_unrounded(self) -> Decimal:
        return self.calc().payment_unrounded

    def with_loan_amount(self, loan_amount: Number) -> "PaymentCalculator":
        return replace(self, loan_amount=loan_amount)

    def with_annual_rate(self, annual_rate: Number) -> "PaymentCalculator":
        return replace(self, annual_rate=annual_rate)

    def with_years(self, years: int) -> "PaymentCalculator":
        return replace(self, years=years)

    def with_interval(self, interval: Interval) -> "PaymentCalculator":
        return replace(self, interval=interval)
