"""Integration tests for service endpoints and error mapping"""

from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "budget_dashboard_reads_total" in response.text


def test_request_id_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_generated(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_create_user_hashes_password(client: TestClient, db):
    response = client.post(
        "/v1/users",
        json={"username": "joao", "password": "s3cret", "email": "joao@example.com", "name": "Joao"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "joao"
    assert "password" not in data and "password_hash" not in data

    from budget_gateway.infrastructure.database.models import User

    stored = db.get(User, data["id"])
    assert stored.password_hash != "s3cret"
    assert stored.password_hash.startswith("$2")


def test_duplicate_username_conflict(client: TestClient):
    body = {"username": "joao", "password": "pw", "name": "Joao"}
    assert client.post("/v1/users", json=body).status_code == 201
    assert client.post("/v1/users", json=body).status_code == 409


def test_get_user(client: TestClient, user):
    assert client.get(f"/v1/users/{user.id}").json()["name"] == "Maria"
    assert client.get("/v1/users/missing").status_code == 404


def test_duplicate_username_error_body(client: TestClient):
    body = {"username": "joao", "password": "pw", "name": "Joao"}
    client.post("/v1/users", json=body)

    response = client.post("/v1/users", json=body)

    assert response.status_code == 409
    assert "joao" in response.json()["detail"]


def test_unknown_user_error_body(client: TestClient):
    response = client.get("/v1/users/missing")

    assert response.status_code == 404
    assert response.json() == {"detail": "User missing not found"}
