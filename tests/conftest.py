# tests/conftest.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from mortgage_calc.engine import AmortizationBuilder
from mortgage_calc.payment import PaymentCalculator
from mortgage_calc.period_keys import Interval, PeriodKey


@pytest.fixture
def start_key():
    """Loan start; the first monthly payment falls on 2024-02-01."""
    return PeriodKey.from_date(Interval.MONTHLY, date(2024, 1, 1))


@pytest.fixture
def calculator():
    """100k at 6 % over 30 years, paid monthly."""
    return PaymentCalculator(Decimal("100000"), Decimal("6.0"), 30, Interval.MONTHLY)


@pytest.fixture
def builder(calculator, start_key):
    return AmortizationBuilder(calculator, start_key)


@pytest.fixture
def baseline_table(builder):
    return builder.build()
