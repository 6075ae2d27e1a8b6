# tests/test_web.py
import pytest

from mortgage_calc_web.app import app

LOAN = {"loan_amount": 100000, "annual_rate": 6, "years": 30, "start_date": "2024-01-01"}


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_schedule(client):
    response = client.post("/schedule", json=LOAN)
    assert response.status_code == 200
    data = response.get_json()
    assert data["summary"]["periodic_payment"] == pytest.approx(599.55)
    assert data["summary"]["payments_made"] == 360
    assert len(data["schedule"]) == 360
    first = data["schedule"][0]
    assert first["date"] == "2024-02-01"
    assert first["interest"] == pytest.approx(500.0)
    assert "comparison" not in data["summary"]


def test_schedule_with_extra_payments(client):
    payload = dict(LOAN, extra_payments=[{"date": "2024-02-01", "amount": 10000}])
    data = client.post("/schedule", json=payload).get_json()
    assert data["summary"]["payments_made"] < 360
    assert data["summary"]["comparison"]["periods_saved"] > 0
    assert data["schedule"][0]["extra"] == pytest.approx(10000.0)


def test_schedule_row_limit(client):
    app.config["MAX_SCHEDULE_ROWS"] = 12
    try:
        data = client.post("/schedule", json=LOAN).get_json()
    finally:
        app.config["MAX_SCHEDULE_ROWS"] = 0
    assert len(data["schedule"]) == 12
    assert data["summary"]["payments_made"] == 360


@pytest.mark.parametrize(
    "payload",
    [
        dict(LOAN, loan_amount=0),
        dict(LOAN, interval="yearly"),
        dict(LOAN, years="thirty"),
        dict(LOAN, start_date="01/01/2024"),
        dict(LOAN, extra_payments=[{"date": "2024-02-01", "amount": -5}]),
        dict(LOAN, extra_payments={"date": "2024-02-01"}),
        {"annual_rate": 6, "years": 30},
    ],
)
def test_schedule_rejects_invalid_input(client, payload):
    response = client.post("/schedule", json=payload)
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_schedule_requires_json(client):
    response = client.post("/schedule", data="not json", content_type="text/plain")
    assert response.status_code == 400


def test_pmi(client):
    response = client.post("/pmi", json={"home_value": 200000, "amount_down": 15000})
    assert response.status_code == 200
    assert response.get_json()["pmi"] == pytest.approx(123.33)
