import pytest

from finance_calendar.backend import create_app
from finance_calendar.config import EngineSettings
from finance_calendar.engine.repository import EventRepository, seed_sample_events


@pytest.fixture
def client():
    app = create_app(seed_sample_events(EventRepository()))
    app.config["TESTING"] = True
    return app.test_client()


def test_summary_for_selected_date(client):
    response = client.get("/api/summary?date=2024-07-01")

    assert response.status_code == 200
    assert response.get_json() == {
        "date": "2024-07-01",
        "income": 30000.0,
        "deductions": 11900.0,
        "investments": 500.0,
        "balance": 18600.0,
    }


@pytest.mark.parametrize("query", ["/api/summary?date=2024-13-40", "/api/summary", "/api/events?date=soon"])
def test_malformed_dates_are_rejected(client, query):
    response = client.get(query)

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_DATE"


def test_events_for_double_pay_day(client):
    payload = client.get("/api/events?date=2024-06-15").get_json()

    assert payload["events"][0] == {"type": "income", "name": "Monthly Salary (Double Pay)", "amount": 7500.0}


def test_add_and_remove_deduction_round_trip(client):
    created = client.post(
        "/api/deductions",
        json={"Name": "Gym", "Amount": 50, "Start Date": "2024-07-01", "Category": "Health"},
    )
    assert created.status_code == 201
    entry = created.get_json()["entry"]
    assert entry["start_date"] == "2024-07-01"

    names = [e["name"] for e in client.get("/api/events?date=2024-07-02").get_json()["events"]]
    assert "Gym" in names

    removed = client.delete(f"/api/deductions/{entry['id']}").get_json()
    assert removed["entry"]["name"] == "Gym"
    assert client.delete(f"/api/deductions/{entry['id']}").get_json()["entry"] is None
    assert client.get("/api/summary?date=2024-07-01").get_json()["balance"] == 18600.0


def test_invalid_definition_is_rejected(client):
    response = client.post("/api/incomes", json={"Name": "Pay", "Amount": 100, "Start Date": "2024-01-01", "Tax (%)": 120})

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_EVENT_DEFINITION"
    assert len(client.get("/api/incomes").get_json()["incomes"]) == 1


def test_post_requires_json_object_and_name(client):
    assert client.post("/api/investments", data="oops").status_code == 400
    assert client.post("/api/investments", json={"Amount": 5}).status_code == 400


def test_unknown_collection_is_404(client):
    assert client.get("/api/pets").status_code == 404
    assert client.delete("/api/pets/1").status_code == 404


def test_investment_listing_serializes_kind(client):
    investments = client.get("/api/investments").get_json()["investments"]

    assert investments[0]["return_kind"] == "once"
    assert investments[0]["anchor_date"] == "2024-07-01"


def test_calendar_month_grid(client):
    payload = client.get("/api/calendar?month=2024-07").get_json()

    assert payload["month"] == "2024-07"
    assert len(payload["days"]) == 35
    assert payload["days"][1] == {
        "date": "2024-07-01",
        "inMonth": True,
        "hasIncome": True,
        "hasDeduction": True,
        "hasInvestment": True,
        "eventCount": 4,
        "tone": "mixed",
    }


def test_quarterly_projection(client):
    payload = client.get("/api/projection?start=2024-01-01&end=2024-12-31&freq=Q").get_json()

    assert payload["freq"] == "Q"
    assert [row["Period"] for row in payload["data"]] == ["2024 Q1", "2024 Q2", "2024 Q3", "2024 Q4"]
    assert payload["data"][2]["Balance"] == 22700.0
    assert payload["data"][2]["Date"] == "2024-09-30"


def test_projection_rejects_unknown_frequency(client):
    assert client.get("/api/projection?start=2024-01-01&end=2024-02-01&freq=W").status_code == 400


def test_schema_lists_form_columns(client):
    payload = client.get("/api/schema").get_json()

    assert [col["field"] for col in payload["investments"]["columns"]][:3] == ["Name", "Amount", "Date"]


def test_seeded_app_from_settings():
    app = create_app(settings=EngineSettings(seed_sample=True, double_pay_policy="reject"))
    repo = app.config["REPOSITORY"]

    assert repo.double_pay_policy == "reject"
    assert len(repo.incomes) == 1


@pytest.mark.parametrize("month, first_day", [("0001-01", "0001-01-01"), ("9999-12", "9999-11-28")])
def test_calendar_at_edges_of_date_range(client, month, first_day):
    response = client.get(f"/api/calendar?month={month}")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["month"] == month
    assert payload["days"][0]["date"] == first_day


def test_scalar_double_pay_dates_rejected(client):
    response = client.post(
        "/api/incomes",
        json={"Name": "Pay", "Amount": 100, "Start Date": "2024-01-01", "Double Pay Dates": 5},
    )

    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_EVENT_DEFINITION"
    assert len(client.get("/api/incomes").get_json()["incomes"]) == 1
