# tests/test_pmi.py
from decimal import Decimal

import pytest

from mortgage_calc.errors import InvalidArgument
from mortgage_calc.pmi import PmiCalculator, calc_pmi


@pytest.mark.parametrize(
    "home_value, amount_down, expected",
    [
        (200_000, 15_000, Decimal("123.33")),  # 7.5 % down -> / 1500
        (200_000, 20_000, Decimal("78.26")),  # 10 % down -> / 2300
        (200_000, 30_000, Decimal("45.95")),  # 15 % down -> / 3700
        (200_000, 39_999, Decimal("43.24")),
        (200_000, 40_000, Decimal("0.00")),  # 20 % down -> no PMI
        (200_000, 200_000, Decimal("0.00")),
        (200_000, 0, Decimal("133.33")),
    ],
)
def test_banded_divisors(home_value, amount_down, expected):
    assert calc_pmi(home_value, amount_down) == expected


def test_rounds_half_even():
    # 187.5 / 1500 = 0.125 and 202.5 / 1500 = 0.135
    assert calc_pmi(Decimal("200"), Decimal("12.5")) == Decimal("0.12")
    assert calc_pmi(Decimal("215"), Decimal("12.5")) == Decimal("0.14")


def test_custom_dividers():
    calc = PmiCalculator(1000, 2000, 4000)
    assert calc.calc_pmi(100_000, 5_000) == Decimal("95.00")
    assert calc.calc_pmi(100_000, 12_000) == Decimal("44.00")
    assert calc.calc_pmi(100_000, 16_000) == Decimal("21.00")


@pytest.mark.parametrize(
    "home_value, amount_down",
    [(0, 0), (-100, 0), (100_000, -1), (100_000, 100_001), (None, 0), ("abc", 0)],
)
def test_invalid_arguments(home_value, amount_down):
    with pytest.raises(InvalidArgument):
        calc_pmi(home_value, amount_down)


def test_dividers_must_be_positive():
    with pytest.raises(InvalidArgument):
        PmiCalculator(0, 2300, 3700)
