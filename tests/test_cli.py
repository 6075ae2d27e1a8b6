# tests/test_cli.py
import pytest
from click.testing import CliRunner

from mortgage_calc.main import cli, parse_amount, parse_extra_strings

LOAN = ["-p", "100k", "-r", "6", "-y", "30", "-s", "2024-01-01"]


@pytest.fixture
def runner():
    return CliRunner()


def test_summary(runner):
    result = runner.invoke(cli, ["summary", *LOAN])
    assert result.exit_code == 0, result.output
    assert "599.55" in result.output
    assert "360 of 360" in result.output
    assert "2054-01-01" in result.output


def test_schedule_with_row_limit(runner):
    result = runner.invoke(cli, ["schedule", *LOAN, "--max-rows", "3"])
    assert result.exit_code == 0, result.output
    assert "2024-02-01\t599.55\t99.55\t500.00" in result.output
    assert "2024-05-01" not in result.output
    assert "357 more rows not shown" in result.output


def test_extra_payment_reports_savings(runner):
    result = runner.invoke(cli, ["summary", *LOAN, "--extra", "2024-02-01:10k"])
    assert result.exit_code == 0, result.output
    assert "Interest saved" in result.output
    assert "Total extra paid   : 10000.00" in result.output


def test_recurring_extra_payment(runner):
    result = runner.invoke(cli, ["summary", *LOAN, "--extra", "2024-02-01:200:monthly:360"])
    assert result.exit_code == 0, result.output
    assert "Term reduction" in result.output


def test_date_pattern_from_environment(runner):
    result = runner.invoke(
        cli,
        ["summary", "-p", "100k", "-r", "6", "-y", "30", "-s", "01/01/2024"],
        env={"MORTGAGE_CALC_DATE_PATTERN": "%d/%m/%Y"},
    )
    assert result.exit_code == 0, result.output
    assert "2054-01-01" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["summary", "-p", "100k", "-r", "6", "-y", "30", "-i", "yearly"],
        ["summary", "-p", "100k", "-r", "6", "-y", "0", "-s", "2024-01-01"],
        ["summary", "-p", "lots", "-r", "6", "-y", "30"],
        ["summary", *LOAN[:-1], "2024-31-01"],
        ["summary", *LOAN, "--extra", "2024-02-01"],
        ["summary", *LOAN, "--extra", "2024-02-01:0"],
        ["summary", *LOAN, "--extra", "2024-02-01:100:fortnightly"],
    ],
)
def test_invalid_input_is_a_usage_error(runner, args):
    result = runner.invoke(cli, args)
    assert result.exit_code == 2


def test_pmi(runner):
    result = runner.invoke(cli, ["pmi", "--home-value", "200k", "--down", "15000"])
    assert result.exit_code == 0, result.output
    assert "123.33" in result.output


def test_pmi_rejects_down_above_value(runner):
    result = runner.invoke(cli, ["pmi", "--home-value", "200k", "--down", "300k"])
    assert result.exit_code == 2


def test_compare(runner):
    base = "-p 100k -r 6 -y 30 -s 2024-01-01"
    result = runner.invoke(
        cli, ["compare", "--scenario1", base, "--scenario2", base + " --extra 2024-02-01:200:monthly:360"]
    )
    assert result.exit_code == 0, result.output
    assert "Comparison" in result.output
    assert "payoff_date" in result.output


def test_compare_rejects_bad_scenario(runner):
    result = runner.invoke(cli, ["compare", "--scenario1", "-p 100k", "--scenario2", "-p 100k -r 6 -y 30"])
    assert result.exit_code == 2


def test_parse_amount_suffixes():
    assert parse_amount("250k") == 250_000
    assert parse_amount("1.5m") == 1_500_000
    assert parse_amount("12,500") == 12_500


def test_parse_extra_defaults_to_one_time():
    (extra,) = parse_extra_strings(("2024-02-01:500",), "%Y-%m-%d")
    assert extra.count == 1
    assert extra.interval.name == "ONE_TIME"


def test_extra_dates_may_contain_colons():
    pattern = "%Y-%m-%d %H:%M"
    (extra,) = parse_extra_strings(("2024-02-01 09:30:250:monthly:12",), pattern)
    assert extra.start.date.isoformat() == "2024-02-01"
    assert extra.interval.name == "MONTHLY"
    assert extra.count == 12
    assert extra.amount == 250


def test_time_of_day_date_pattern(runner):
    result = runner.invoke(
        cli,
        [
            "summary",
            "-p", "100k", "-r", "6", "-y", "30",
            "-s", "2024-01-01 00:00",
            "--date-pattern", "%Y-%m-%d %H:%M",
            "--extra", "2024-02-01 00:00:10k",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Total extra paid   : 10000.00" in result.output
