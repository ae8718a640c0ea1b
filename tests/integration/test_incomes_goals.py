"""Integration tests for incomes and goals"""

from decimal import Decimal
from fastapi.testclient import TestClient


def test_create_recurring_income(client: TestClient, user):
    response = client.post(
        f"/v1/incomes/{user.id}",
        json={"source": "Salary", "description": "ACME", "amount": "3500.00", "receipt_day": 5},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["is_recurring"] is True
    assert data["receipt_day"] == 5
    assert data["date"] is None


def test_income_shape_enforced(client: TestClient, user):
    url = f"/v1/incomes/{user.id}"
    assert client.post(url, json={"source": "Salary", "amount": "1"}).status_code == 422
    assert (
        client.post(url, json={"source": "Bonus", "amount": "1", "is_recurring": False}).status_code == 422
    )
    assert (
        client.post(
            url, json={"source": "Bonus", "amount": "1", "is_recurring": False, "receipt_day": 3, "date": "2024-03-01"}
        ).status_code
        == 422
    )


def test_update_income_switches_to_one_off(client: TestClient, user):
    income = client.post(f"/v1/incomes/{user.id}", json={"source": "Freelance", "amount": "900", "receipt_day": 20}).json()

    response = client.patch(
        f"/v1/incomes/item/{income['id']}",
        json={"is_recurring": False, "receipt_day": None, "date": "2024-03-22"},
    )

    assert response.status_code == 200
    assert response.json()["date"] == "2024-03-22"
    assert response.json()["receipt_day"] is None


def test_delete_income(client: TestClient, user):
    income = client.post(f"/v1/incomes/{user.id}", json={"source": "Freelance", "amount": "900", "receipt_day": 20}).json()

    assert client.delete(f"/v1/incomes/item/{income['id']}").status_code == 204
    assert client.get(f"/v1/incomes/{user.id}").json() == []
    assert client.delete(f"/v1/incomes/item/{income['id']}").status_code == 404


def test_goal_progress(client: TestClient, user):
    response = client.post(
        f"/v1/goals/{user.id}",
        json={
            "name": "Emergency fund",
            "type": "savings",
            "target_amount": "10000.00",
            "current_amount": "2500.00",
            "period": "yearly",
        },
    )

    assert response.status_code == 201
    goal = response.json()
    assert goal["progress_percentage"] == 25.0
    assert goal["is_active"] is True

    updated = client.patch(f"/v1/goals/item/{goal['id']}", json={"current_amount": "12000.00"}).json()
    assert updated["progress_percentage"] == 100.0
    assert Decimal(updated["current_amount"]) == Decimal("12000.00")


def test_goal_type_validated(client: TestClient, user):
    response = client.post(
        f"/v1/goals/{user.id}",
        json={"name": "X", "type": "lottery", "target_amount": "1", "period": "monthly"},
    )
    assert response.status_code == 422


def test_list_active_goals(client: TestClient, user):
    body = {"name": "A", "type": "savings", "target_amount": "100", "period": "monthly"}
    first = client.post(f"/v1/goals/{user.id}", json=body).json()
    client.post(f"/v1/goals/{user.id}", json={**body, "name": "B"})
    client.patch(f"/v1/goals/item/{first['id']}", json={"is_active": False})

    active = client.get(f"/v1/goals/{user.id}", params={"active_only": True}).json()

    assert [g["name"] for g in active] == ["B"]


def test_delete_goal(client: TestClient, user):
    goal = client.post(
        f"/v1/goals/{user.id}",
        json={"name": "A", "type": "savings", "target_amount": "100", "period": "monthly"},
    ).json()

    assert client.delete(f"/v1/goals/item/{goal['id']}").status_code == 204
    assert client.get(f"/v1/goals/{user.id}").json() == []
