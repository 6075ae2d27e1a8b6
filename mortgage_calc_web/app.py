import os
from datetime import date

from flask import Flask, jsonify, request

from mortgage_calc.data_models import AmortizationTable, ExtraPayment
from mortgage_calc.engine import AmortizationBuilder, summarize
from mortgage_calc.errors import InvalidArgument
from mortgage_calc.payment import PaymentCalculator
from mortgage_calc.period_keys import Interval, PeriodKey
from mortgage_calc.pmi import calc_pmi
from mortgage_calc.utils import to_decimal

app = Flask(__name__)
app.config["DATE_PATTERN"] = os.environ.get("MORTGAGE_CALC_DATE_PATTERN", "%Y-%m-%d")
app.config["MAX_SCHEDULE_ROWS"] = int(os.environ.get("MAX_SCHEDULE_ROWS", "0"))


def _required(payload: dict, name: str):
    value = payload.get(name)
    if value is None or value == "":
        raise InvalidArgument(f"{name} is required")
    return value


def _start_key(payload: dict, interval: Interval) -> PeriodKey:
    start_date = payload.get("start_date")
    if not start_date:
        return PeriodKey.today(interval)
    return PeriodKey.parse(interval, start_date, app.config["DATE_PATTERN"])


def _extra_payments(payload: dict):
    """Parse the ``extra_payments`` list of ``{date, amount, interval, count}`` objects."""
    extras = []
    items = payload.get("extra_payments") or []
    if not isinstance(items, list):
        raise InvalidArgument("extra_payments must be a list")
    for item in items:
        if not isinstance(item, dict):
            raise InvalidArgument("each extra payment must be an object")
        interval = Interval.parse(item.get("interval", "one_time"))
        start = PeriodKey.parse(interval, _required(item, "date"), app.config["DATE_PATTERN"])
        count = item.get("count", 1)
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidArgument("count must be an integer")
        extras.append(ExtraPayment(start, count, to_decimal(_required(item, "amount"), "amount")))
    return extras


def _form_to_loan(payload: dict):
    interval = Interval.parse(payload.get("interval", "monthly"))
    years = _required(payload, "years")
    if isinstance(years, bool) or not isinstance(years, int):
        raise InvalidArgument("years must be an integer")
    calculator = PaymentCalculator(
        to_decimal(_required(payload, "loan_amount"), "loan_amount"),
        to_decimal(_required(payload, "annual_rate"), "annual_rate"),
        years,
        interval,
    )
    return calculator, _start_key(payload, interval), _extra_payments(payload)


def _serialize_schedule(table: AmortizationTable):
    """Convert table entries into JSON-serialisable dictionaries."""
    serialized = []
    limit = app.config["MAX_SCHEDULE_ROWS"]
    for period, (due, record) in enumerate(table.entries(), start=1):
        if limit and period > limit:
            break
        row = {"period": period, "date": due.isoformat()}
        row.update({name: float(value) for name, value in record.as_dict().items()})
        serialized.append(row)
    return serialized


def _jsonable(summary: dict) -> dict:
    out = {}
    for key, value in summary.items():
        if isinstance(value, dict):
            out[key] = _jsonable(value)
        elif isinstance(value, (int, str)) or value is None:
            out[key] = value
        elif isinstance(value, date):
            out[key] = value.isoformat()
        else:
            out[key] = float(value)
    return out


@app.errorhandler(InvalidArgument)
def invalid_argument(exc):
    return jsonify({"error": str(exc)}), 400


@app.get("/health")
def health():
    return jsonify({"status": "ok"})


@app.post("/schedule")
def schedule():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidArgument("Expected a JSON object")
    calculator, start_key, extras = _form_to_loan(payload)
    builder = AmortizationBuilder(calculator, start_key)
    baseline = None
    if extras:
        table = builder.build_with_payments(extras)
        baseline = builder.build()
    else:
        table = builder.build()
    summary = summarize(table, calculator, start_key, baseline)
    return jsonify({"summary": _jsonable(summary), "schedule": _serialize_schedule(table)})


@app.post("/pmi")
def pmi():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidArgument("Expected a JSON object")
    monthly = calc_pmi(_required(payload, "home_value"), _required(payload, "amount_down"))
    return jsonify({"pmi": float(monthly)})


if __name__ == "__main__":
    print("Starting Mortgage Calculator API...")
    app.run(host="0.0.0.0", port=8710, debug=True)
