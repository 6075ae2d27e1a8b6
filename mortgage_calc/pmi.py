"""Private Mortgage Insurance (PMI) estimate.

Lenders typically charge PMI while the down payment is under 20 % of the
home value. The estimate divides the financed amount by a divisor picked from
the down payment band:

    down payment < 10 %  -> financed / 1500
    down payment < 15 %  -> financed / 2300
    down payment < 20 %  -> financed / 3700
    otherwise            -> 0

The result is the monthly PMI amount, rounded half-even to cents.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .errors import InvalidArgument
from .utils import Number, round_cents, to_decimal

DEFAULT_FIVE_PCT_DIVIDER = Decimal("1500")
DEFAULT_TEN_PCT_DIVIDER = Decimal("2300")
DEFAULT_FIFTEEN_PCT_DIVIDER = Decimal("3700")


@dataclass(frozen=True)
class PmiCalculator:
    five_pct_divider: Decimal = DEFAULT_FIVE_PCT_DIVIDER
    ten_pct_divider: Decimal = DEFAULT_TEN_PCT_DIVIDER
    fifteen_pct_divider: Decimal = DEFAULT_FIFTEEN_PCT_DIVIDER

    def __post_init__(self) -> None:
        for name in ("five_pct_divider", "ten_pct_divider", "fifteen_pct_divider"):
            value = to_decimal(getattr(self, name), name)
            if value <= 0:
                raise InvalidArgument(f"{name} must be greater than 0")
            object.__setattr__(self, name, value)

    def calc_pmi(self, home_value: Number, amount_down: Number) -> Decimal:
        """Return the monthly PMI for a home bought with ``amount_down``."""
        value = to_decimal(home_value, "home_value")
        down = to_decimal(amount_down, "amount_down")
        if value <= 0:
            raise InvalidArgument("The home value must be greater than 0")
        if down < 0:
            raise InvalidArgument("The amount down must not be negative")
        if down > value:
            raise InvalidArgument("The amount down must not exceed the home value")

        down_pct = down * 100 / value
        if down_pct < 10:
            divider = self.five_pct_divider
        elif down_pct < 15:
            divider = self.ten_pct_divider
        elif down_pct < 20:
            divider = self.fifteen_pct_divider
        else:
            return Decimal("0.00")
        return round_cents((value - down) / divider)


def calc_pmi(home_value: Number, amount_down: Number) -> Decimal:
    """Monthly PMI using the default divisor bands."""
    return PmiCalculator().calc_pmi(home_value, amount_down)
