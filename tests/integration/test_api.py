"""Integration tests for service endpoints and formal loans"""

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

API = "/api/v1"


def create_contact(client: TestClient, name: str = "Alice") -> int:
    response = client.post(f"{API}/contacts", json={"name": name, "phone": "555-0100"})
    assert response.status_code == 200
    return response.json()["id"]


def create_loan(client: TestClient, contact_id: int, **overrides) -> int:
    body = {
        "contact_id": contact_id,
        "amount_cents": 100000,
        "interest_rate": 12,
        "interest_type": "simple",
        "start_date": "2023-03-21",
    }
    body.update(overrides)
    response = client.post(f"{API}/loans", json=body)
    assert response.status_code == 200, response.text
    return response.json()["id"]


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_header(client: TestClient):
    """Generated when absent, echoed when supplied"""
    assert client.get("/health").headers["X-Request-ID"]

    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    create_contact(client)
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "pocketledger_records_created" in response.text
    assert "http_request_duration_seconds" in response.text


def test_contacts_listed_by_name(client: TestClient):
    create_contact(client, "Zoe")
    create_contact(client, "Bob")

    response = client.get(f"{API}/contacts")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Bob", "Zoe"]


def test_create_contact_requires_name(client: TestClient):
    response = client.post(f"{API}/contacts", json={"name": ""})
    assert response.status_code == 422


def test_create_and_list_loans(client: TestClient):
    contact_id = create_contact(client)
    loan_id = create_loan(client, contact_id, interest_type="compound")

    response = client.get(f"{API}/loans")
    assert response.status_code == 200
    [loan] = response.json()
    assert loan["id"] == loan_id
    assert loan["contact_name"] == "Alice"
    assert loan["interest_type"] == "compound"
    assert loan["status"] == "active"


def test_create_loan_defaults_to_simple_interest(client: TestClient):
    contact_id = create_contact(client)
    client.post(f"{API}/loans", json={"contact_id": contact_id, "amount_cents": 5000, "start_date": "2024-01-01"})

    [loan] = client.get(f"{API}/loans").json()
    assert loan["interest_type"] == "simple"
    assert loan["interest_rate"] == 0


def test_create_loan_unknown_contact(client: TestClient):
    response = client.post(
        f"{API}/loans",
        json={"contact_id": 999, "amount_cents": 1000, "start_date": "2024-01-01"},
    )
    assert response.status_code == 404


def test_create_loan_rejects_bad_terms(client: TestClient):
    contact_id = create_contact(client)
    base = {"contact_id": contact_id, "amount_cents": 1000, "start_date": "2024-01-01"}

    assert client.post(f"{API}/loans", json={**base, "interest_type": "monthly"}).status_code == 422
    assert client.post(f"{API}/loans", json={**base, "interest_rate": -1}).status_code == 422
    assert client.post(f"{API}/loans", json={**base, "amount_cents": 0}).status_code == 422


def test_loan_balance_with_payment(client: TestClient):
    """$1000 at 12% simple for 365 whole days, minus a $200 payment"""
    loan_id = create_loan(client, create_contact(client))
    response = client.post(
        f"{API}/payments",
        json={"loan_id": loan_id, "amount_cents": 20000, "payment_date": "2023-09-01", "payment_method": "cash"},
    )
    assert response.status_code == 200

    response = client.get(f"{API}/loans/{loan_id}/balance")
    assert response.status_code == 200
    data = response.json()
    assert data["days_elapsed"] == 365
    assert data["original_cents"] == 100000
    assert data["total_owed_cents"] == 112000
    assert data["total_paid_cents"] == 20000
    assert data["balance_cents"] == 92000


def test_loan_balance_not_found(client: TestClient):
    response = client.get(f"{API}/loans/424242/balance")
    assert response.status_code == 404


def test_loan_balance_future_start_rejected(client: TestClient):
    loan_id = create_loan(client, create_contact(client), start_date="2024-04-01")
    response = client.get(f"{API}/loans/{loan_id}/balance")
    assert response.status_code == 422


def test_payments_listed_newest_first(client: TestClient):
    loan_id = create_loan(client, create_contact(client))
    for day in ("2023-05-01", "2023-07-01", "2023-06-01"):
        client.post(f"{API}/payments", json={"loan_id": loan_id, "amount_cents": 1000, "payment_date": day})

    response = client.get(f"{API}/payments/{loan_id}")
    assert [p["payment_date"] for p in response.json()] == ["2023-07-01", "2023-06-01", "2023-05-01"]


def test_payment_for_unknown_loan(client: TestClient):
    response = client.post(f"{API}/payments", json={"loan_id": 7, "amount_cents": 1000, "payment_date": "2024-01-01"})
    assert response.status_code == 404


def test_failed_commit_rolls_back_and_returns_500(client: TestClient, db: Session, monkeypatch):
    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", failing_commit)

    response = client.post(f"{API}/contacts", json={"name": "Alice"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"

    monkeypatch.undo()
    assert client.get(f"{API}/contacts").json() == []


def test_failed_payment_leaves_loan_untouched(client: TestClient, db: Session, monkeypatch):
    loan_id = create_loan(client, create_contact(client))

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("connection reset"))

    monkeypatch.setattr(db, "commit", failing_commit)
    response = client.post(f"{API}/payments", json={"loan_id": loan_id, "amount_cents": 1000, "payment_date": "2024-01-01"})
    assert response.status_code == 500

    monkeypatch.undo()
    assert client.get(f"{API}/payments/{loan_id}").json() == []
    assert client.get(f"{API}/loans/{loan_id}/balance").json()["total_paid_cents"] == 0
