"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can print full amortization schedules (with recurring extra
payments), view summaries, estimate PMI or compare two loan scenarios.
"""

from __future__ import annotations

import logging
import shlex
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

import click

from .data_models import AmortizationTable, ExtraPayment
from .engine import AmortizationBuilder, summarize
from .errors import InvalidArgument
from .formatter import print_comparison, print_pmi, print_schedule, print_summary
from .payment import PaymentCalculator
from .period_keys import Interval, PeriodKey
from .pmi import calc_pmi
from .utils import to_decimal

DEFAULT_DATE_PATTERN = "%Y-%m-%d"
DATE_PATTERN_ENVVAR = "MORTGAGE_CALC_DATE_PATTERN"

PRIMARY_INTERVALS = [i.name.lower() for i in Interval if i.is_primary]
EXTRA_INTERVALS = [i.name.lower() for i in Interval]


def parse_amount(value: str) -> Decimal:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("250000") and shorthand with ``k``/``m`` suffixes
    (e.g., "250k" meaning 250_000).
    """
    value = value.strip().lower()
    value = value.replace(",", "")
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return to_decimal(value, "amount") * factor
    except InvalidArgument:
        raise click.BadParameter(f"Invalid amount: {value}")


def parse_extra_strings(values: Tuple[str, ...], pattern: str) -> List[ExtraPayment]:
    """Parse ``DATE:AMOUNT[:INTERVAL[:COUNT]]`` entries into extra payments.

    The interval defaults to ``one_time`` and the count to 1. ``DATE`` keeps
    as many colons as ``pattern`` has, so time-of-day patterns such as
    ``%Y-%m-%d %H:%M`` work.
    """
    date_fields = pattern.count(":") + 1
    extras: List[ExtraPayment] = []
    for item in values:
        parts = item.split(":")
        date_str = ":".join(parts[:date_fields])
        rest = parts[date_fields:]
        if not 1 <= len(rest) <= 3:
            raise click.BadParameter(
                f"Extra payment must be in DATE:AMOUNT[:INTERVAL[:COUNT]] format; got {item}"
            )
        amount_str = rest[0]
        interval_str = rest[1] if len(rest) > 1 else "one_time"
        count_str = rest[2] if len(rest) > 2 else "1"
        try:
            interval = Interval.parse(interval_str)
            start = PeriodKey.parse(interval, date_str, pattern)
            count = int(count_str)
            extras.append(ExtraPayment(start, count, parse_amount(amount_str)))
        except (InvalidArgument, ValueError) as exc:
            raise click.BadParameter(f"{item}: {exc}")
    return extras


def build_loan_from_options(
    amount: str,
    rate: float,
    years: int,
    interval: str,
    start_date: Optional[str],
    date_pattern: str,
    extra: Tuple[str, ...] = (),
) -> Tuple[PaymentCalculator, PeriodKey, List[ExtraPayment]]:
    """Turn raw option values into the calculator, start key and extras."""
    try:
        payment_interval = Interval.parse(interval)
        calculator = PaymentCalculator(parse_amount(amount), to_decimal(rate, "rate"), years, payment_interval)
        if start_date:
            start_key = PeriodKey.parse(payment_interval, start_date, date_pattern)
        else:
            start_key = PeriodKey.today(payment_interval)
    except InvalidArgument as exc:
        raise click.BadParameter(str(exc))
    extras = parse_extra_strings(extra, date_pattern) if extra else []
    return calculator, start_key, extras


def _build_tables(
    calculator: PaymentCalculator, start_key: PeriodKey, extras: List[ExtraPayment]
) -> Tuple[AmortizationTable, Optional[AmortizationTable]]:
    """Return the schedule and, when there are extras, the plain baseline."""
    builder = AmortizationBuilder(calculator, start_key)
    try:
        if not extras:
            return builder.build(), None
        return builder.build_with_payments(extras), builder.build()
    except InvalidArgument as exc:
        raise click.UsageError(str(exc))


def loan_options(func: Callable) -> Callable:
    """Attach the options shared by every loan-based command."""
    options = [
        click.option("--amount", "-p", "amount", required=True, help="Loan amount (accepts k/m suffixes)"),
        click.option("--rate", "-r", "rate", required=True, type=float, help="Annual interest rate (percent)"),
        click.option("--years", "-y", "years", required=True, type=int, help="Loan term in years"),
        click.option(
            "--interval",
            "-i",
            "interval",
            type=click.Choice(PRIMARY_INTERVALS, case_sensitive=False),
            default="monthly",
            show_default=True,
            help="Regular payment interval",
        ),
        click.option("--start-date", "-s", "start_date", help="Loan start date; the first payment is one interval later (default: today)"),
        click.option(
            "--date-pattern",
            "date_pattern",
            default=DEFAULT_DATE_PATTERN,
            envvar=DATE_PATTERN_ENVVAR,
            show_default=True,
            help="strptime pattern for every date option",
        ),
        click.option(
            "--extra",
            "extra",
            multiple=True,
            help=f"Extra payment in DATE:AMOUNT[:INTERVAL[:COUNT]] format, DATE written in --date-pattern; INTERVAL is one of {', '.join(EXTRA_INTERVALS)}",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details to stderr")
def cli(verbose: bool) -> None:
    """A command-line mortgage calculator with extra payments and PMI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@loan_options
@click.option("--max-rows", "max_rows", type=int, default=None, help="Print at most this many rows")
def schedule(
    amount: str,
    rate: float,
    years: int,
    interval: str,
    start_date: Optional[str],
    date_pattern: str,
    extra: Tuple[str, ...],
    max_rows: Optional[int],
) -> None:
    """Compute and print the full amortization schedule."""
    calculator, start_key, extras = build_loan_from_options(
        amount, rate, years, interval, start_date, date_pattern, extra
    )
    table, baseline = _build_tables(calculator, start_key, extras)
    print_summary(summarize(table, calculator, start_key, baseline))
    print_schedule(table, max_rows=max_rows)


@cli.command()
@loan_options
def summary(
    amount: str,
    rate: float,
    years: int,
    interval: str,
    start_date: Optional[str],
    date_pattern: str,
    extra: Tuple[str, ...],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    calculator, start_key, extras = build_loan_from_options(
        amount, rate, years, interval, start_date, date_pattern, extra
    )
    table, baseline = _build_tables(calculator, start_key, extras)
    print_summary(summarize(table, calculator, start_key, baseline))


@cli.command()
@click.option("--home-value", "home_value", required=True, help="Purchase price of the home")
@click.option("--down", "amount_down", required=True, help="Down payment amount")
def pmi(home_value: str, amount_down: str) -> None:
    """Estimate the monthly private mortgage insurance."""
    value = parse_amount(home_value)
    down = parse_amount(amount_down)
    try:
        monthly = calc_pmi(value, down)
    except InvalidArgument as exc:
        raise click.BadParameter(str(exc))
    print_pmi(value, down, monthly)


# Parses a scenario string for ``compare``; never registered on the group.
@click.command(name="scenario")
@loan_options
def _scenario(**params: Any) -> Dict[str, Any]:
    return params


@cli.command()
@click.option("--scenario1", "scenario1", required=True, help="First scenario options quoted string")
@click.option("--scenario2", "scenario2", required=True, help="Second scenario options quoted string")
def compare(scenario1: str, scenario2: str) -> None:
    """Compare two loan scenarios.

    Scenarios are provided as quoted option strings, for example:

        mortgage-calc compare --scenario1 "-p 300k -r 6 -y 30 -s 2024-01-01" --scenario2 "-p 300k -r 6 -y 30 -s 2024-01-01 --extra 2024-02-01:200:monthly:360"
    """
    summaries = []
    for opts in (scenario1, scenario2):
        try:
            ctx = _scenario.make_context("scenario", shlex.split(opts))
        except click.ClickException as exc:
            raise click.BadParameter(f"Invalid scenario {opts!r}: {exc.format_message()}")
        params = ctx.params
        calculator, start_key, extras = build_loan_from_options(
            params["amount"],
            params["rate"],
            params["years"],
            params["interval"],
            params["start_date"],
            params["date_pattern"],
            params["extra"],
        )
        table, _ = _build_tables(calculator, start_key, extras)
        summaries.append(summarize(table, calculator, start_key))
    print_comparison(summaries[0], summaries[1])


if __name__ == "__main__":
    cli()
