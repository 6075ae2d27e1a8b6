"""Output helpers for the mortgage calculator.

This module provides simple functions to render amortization tables and
summaries in a tabular text format using built-in printing and string
formatting. All amounts shown are the rounded (half-even, cents) values.
"""

from __future__ import annotations

from typing import Dict, Optional

from .data_models import AmortizationTable


def print_summary(summary: Dict[str, object]) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Loan amount        : {summary['loan_amount']:.2f}")
    print(f"Annual rate        : {summary['annual_rate']}%")
    print(f"Periodic payment   : {summary['periodic_payment']:.2f} ({summary['interval']})")
    print(f"Total interest     : {summary['total_interest']:.2f}")
    if summary.get('total_extra'):
        print(f"Total extra paid   : {summary['total_extra']:.2f}")
    print(f"Total paid         : {summary['total_paid']:.2f}")
    print(f"Original end date  : {summary['original_end_date']}")
    print(f"Payoff date        : {summary['payoff_date']}")
    print(f"Payments made      : {summary['payments_made']} of {summary['scheduled_payments']}")
    comparison = summary.get('comparison')
    if comparison:
        print(f"Baseline interest  : {comparison['baseline_total_interest']:.2f}")
        print(f"Interest saved     : {comparison['interest_saved']:.2f}")
        if comparison.get('periods_saved'):
            print(f"Term reduction     : {comparison['periods_saved']} payments")
    print("-" * 72)


def print_schedule(table: AmortizationTable, max_rows: Optional[int] = None) -> None:
    """Print the amortization table as a simple tab-separated table.

    Parameters
    ----------
    table: AmortizationTable
        The schedule to print.
    max_rows: int, optional
        Print at most this many rows, followed by a note on how many were
        left out.
    """
    headers = ["Period", "Date", "Payment", "Principal", "Interest", "Extra", "Balance", "CumInterest"]
    print("\t".join(headers))
    entries = table.entries()
    shown = entries if max_rows is None else entries[:max_rows]
    for period, (due, record) in enumerate(shown, start=1):
        row = [
            str(period),
            due.isoformat(),
            f"{record.total_rounded:.2f}",
            f"{record.principal_rounded:.2f}",
            f"{record.interest_rounded:.2f}",
            f"{record.extra_rounded:.2f}",
            f"{record.balance_rounded:.2f}",
            f"{record.cumulative_interest_rounded:.2f}",
        ]
        print("\t".join(row))
    if len(shown) < len(entries):
        print(f"... {len(entries) - len(shown)} more rows not shown")


def print_comparison(s1: Dict[str, object], s2: Dict[str, object]) -> None:
    """Print two loan summaries side by side.

    The difference column is scenario2 - scenario1; a negative difference
    means the second scenario is cheaper or shorter.
    """
    print("Comparison")
    print("=" * 72)
    keys = [
        "periodic_payment",
        "total_paid",
        "total_interest",
        "payments_made",
    ]
    print(f"{'Metric':20s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    for key in keys:
        v1 = s1.get(key)
        v2 = s2.get(key)
        diff = v2 - v1
        print(f"{key:20s} {v1:15.2f} {v2:15.2f} {diff:15.2f}")
    print(f"{'payoff_date':20s} {s1['payoff_date']:>15s} {s2['payoff_date']:>15s}")
    print("=" * 72)


def print_pmi(home_value, amount_down, pmi) -> None:
    print(f"Home value         : {home_value:.2f}")
    print(f"Amount down        : {amount_down:.2f}")
    print(f"Monthly PMI        : {pmi:.2f}")
