# tests/test_payment.py
from decimal import Decimal

import pytest

from mortgage_calc.errors import InvalidArgument
from mortgage_calc.payment import PaymentCalculator, calc_periodic_payment
from mortgage_calc.period_keys import Interval


def test_thirty_year_monthly_payment():
    result = calc_periodic_payment(100_000, 6.0, 30, Interval.MONTHLY)
    assert result.periodic_rate == Decimal("0.005")
    assert result.payment == Decimal("599.55")
    assert abs(result.payment_unrounded - Decimal("599.550525")) < Decimal("0.000001")


def test_zero_rate_is_straight_line():
    result = calc_periodic_payment(Decimal("120000"), 0, 10, Interval.MONTHLY)
    assert result.periodic_rate == 0
    assert result.payment_unrounded == Decimal("1000")
    assert result.payment == Decimal("1000.00")


def test_biweekly_rate_and_count():
    calc = PaymentCalculator(Decimal("260000"), Decimal("5.2"), 15, Interval.BIWEEKLY)
    assert calc.payment_count == 390
    assert calc.periodic_rate == Decimal("0.002")
    # More payments per year means a smaller payment than monthly.
    assert calc.calc_payment() < calc.with_interval(Interval.MONTHLY).calc_payment()


def test_accepts_strings_and_floats():
    from_str = calc_periodic_payment("100,000", "6", 30, Interval.MONTHLY)
    from_float = calc_periodic_payment(100000.0, 6.0, 30, Interval.MONTHLY)
    assert from_str == from_float


@pytest.mark.parametrize(
    "amount, rate, years, interval",
    [
        (0, 6, 30, Interval.MONTHLY),
        (-1, 6, 30, Interval.MONTHLY),
        (100_000, -0.5, 30, Interval.MONTHLY),
        (100_000, 6, 0, Interval.MONTHLY),
        (100_000, 6, 30, Interval.YEARLY),
        (100_000, 6, 30, Interval.ONE_TIME),
        (100_000, 6, 30, None),
        (None, 6, 30, Interval.MONTHLY),
        ("abc", 6, 30, Interval.MONTHLY),
    ],
)
def test_invalid_arguments(amount, rate, years, interval):
    with pytest.raises(InvalidArgument):
        calc_periodic_payment(amount, rate, years, interval)
    with pytest.raises(InvalidArgument):
        PaymentCalculator(amount, rate, years, interval)


def test_with_methods_return_new_instances():
    calc = PaymentCalculator(100_000, 6, 30)
    shorter = calc.with_years(15)
    assert calc.years == 30
    assert shorter.years == 15
    assert shorter.payment_count == 180
    assert shorter.calc_payment() > calc.calc_payment()
    assert calc.with_loan_amount(200_000).calc_payment() == Decimal("1199.10")
    assert calc.with_annual_rate(0).calc_payment() == Decimal("277.78")
    assert isinstance(calc.loan_amount, Decimal)


def test_with_methods_validate():
    calc = PaymentCalculator(100_000, 6, 30)
    with pytest.raises(InvalidArgument):
        calc.with_years(0)
    with pytest.raises(InvalidArgument):
        calc.with_interval(Interval.YEARLY)
    with pytest.raises(InvalidArgument):
        calc.with_loan_amount(0)
