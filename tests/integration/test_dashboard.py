"""Integration tests for the dashboard and calendar read paths"""

from decimal import Decimal
from fastapi.testclient import TestClient


def add_bill(client: TestClient, user_id: str, name: str, amount: str, due_day: int, category_id=None) -> dict:
    body = {"name": name, "amount": amount, "due_day": due_day}
    if category_id:
        body["category_id"] = category_id
    return client.post(f"/v1/bills/{user_id}", json=body).json()


def add_income(client: TestClient, user_id: str, amount: str, **fields) -> dict:
    body = {"source": "Salary", "amount": amount, "receipt_day": 5}
    body.update(fields)
    response = client.post(f"/v1/incomes/{user_id}", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_dashboard_balance(client: TestClient, user):
    add_bill(client, user.id, "Rent", "1800.00", 10)
    add_income(client, user.id, "3500.00")

    data = client.get(f"/v1/dashboard/{user.id}").json()

    assert Decimal(data["monthly_income"]) == Decimal("3500.00")
    assert Decimal(data["monthly_expenses"]) == Decimal("1800.00")
    assert Decimal(data["monthly_balance"]) == Decimal("1700.00")


def test_dashboard_upcoming_window(client: TestClient, user):
    add_bill(client, user.id, "Water", "80.00", 15)
    add_bill(client, user.id, "Internet", "120.00", 25)

    data = client.get(f"/v1/dashboard/{user.id}", params={"reference_date": "2024-03-12"}).json()

    assert data["reference_date"] == "2024-03-12"
    assert data["upcoming_bills"] == 1


def test_dashboard_one_off_income_excluded(client: TestClient, user):
    add_income(client, user.id, "800.00", receipt_day=None, is_recurring=False, date="2024-03-20")

    data = client.get(f"/v1/dashboard/{user.id}").json()

    assert Decimal(data["monthly_income"]) == Decimal("0")
    assert len(data["incomes"]) == 1


def test_dashboard_category_breakdown(client: TestClient, user, housing, food):
    add_bill(client, user.id, "Rent", "1200.00", 5, housing.id)
    add_bill(client, user.id, "Groceries", "300.00", 8, food.id)
    add_bill(client, user.id, "Gym", "500.00", 9)

    breakdown = client.get(f"/v1/dashboard/{user.id}").json()["category_breakdown"]
    by_name = {c["name"]: c for c in breakdown}

    assert by_name["Housing"]["percentage"] == 60.0
    assert by_name["Food"]["percentage"] == 15.0
    assert sum(c["percentage"] for c in breakdown) <= 100
    assert by_name["Housing"]["color"] == "#EF4444"


def test_dashboard_reread_is_stable(client: TestClient, user, housing):
    add_bill(client, user.id, "Rent", "1200.00", 5, housing.id)
    add_income(client, user.id, "3000.00")

    first = client.get(f"/v1/dashboard/{user.id}").json()
    second = client.get(f"/v1/dashboard/{user.id}").json()

    for key in ("monthly_income", "monthly_expenses", "monthly_balance", "upcoming_bills", "category_breakdown"):
        assert first[key] == second[key]


def test_dashboard_unknown_user_is_empty(client: TestClient):
    data = client.get("/v1/dashboard/nobody").json()

    assert Decimal(data["monthly_balance"]) == Decimal("0")
    assert data["bills"] == []
    assert data["category_breakdown"] == []


def test_dashboard_bills_carry_status(client: TestClient, user):
    add_bill(client, user.id, "Card", "400.00", 3)

    bills = client.get(f"/v1/dashboard/{user.id}").json()["bills"]

    assert bills[0]["status"] == "overdue"
    assert bills[0]["days_overdue"] == 7


def test_calendar_across_month_end(client: TestClient, user):
    add_bill(client, user.id, "Card", "400.00", 31)
    add_bill(client, user.id, "Rent", "1200.00", 2)
    add_income(client, user.id, "3000.00", receipt_day=1)

    response = client.get(f"/v1/calendar/{user.id}", params={"start": "2024-01-28", "end": "2024-02-29"})

    assert response.status_code == 200
    events = [(o["name"], o["occurrence_date"]) for o in response.json()["occurrences"]]
    assert events == [
        ("Card", "2024-01-31"),
        ("Salary", "2024-02-01"),
        ("Rent", "2024-02-02"),
    ]


def test_calendar_day_31_skipped_in_february(client: TestClient, user):
    add_bill(client, user.id, "Card", "400.00", 31)

    response = client.get(f"/v1/calendar/{user.id}", params={"start": "2023-02-01", "end": "2023-02-28"})

    assert response.json()["occurrences"] == []


def test_calendar_invalid_range(client: TestClient, user):
    response = client.get(f"/v1/calendar/{user.id}", params={"start": "2024-03-31", "end": "2024-03-01"})
    assert response.status_code == 422
