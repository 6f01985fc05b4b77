"""Integration tests for borrowers, their ledger and the loan portfolio summary"""

from fastapi.testclient import TestClient

API = "/api/v1"


def create_borrower(client: TestClient, name: str) -> int:
    response = client.post(f"{API}/borrowers", json={"name": name, "contact": "555-0199"})
    assert response.status_code == 200
    return response.json()["id"]


def add_entry(client: TestClient, borrower_id: int, kind: str, amount_cents: int, day: str, rate: float = 0) -> int:
    response = client.post(
        f"{API}/loan-transactions",
        json={
            "borrower_id": borrower_id,
            "type": kind,
            "amount_cents": amount_cents,
            "interest_rate": rate,
            "transaction_date": day,
        },
    )
    assert response.status_code == 200, response.text
    return response.json()["id"]


def test_borrower_detail_with_interest(client: TestClient):
    """
    $1000 given at 10% on 2023-03-21; the clock reads 2024-03-20 15:30 UTC,
    365.6 days later, which rounds up to 366 days -> 1000 * 0.1 * 366/365 = $100.27
    """
    borrower_id = create_borrower(client, "Carol")
    add_entry(client, borrower_id, "given", 100000, "2023-03-21", rate=10)
    add_entry(client, borrower_id, "received", 30000, "2023-12-01")

    response = client.get(f"{API}/borrowers/{borrower_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Carol"
    assert data["total_lent_cents"] == 100000
    assert data["total_received_cents"] == 30000
    assert data["outstanding_cents"] == 70000
    assert data["total_interest_cents"] == 10027

    given, received = data["transactions"]
    assert given["interest_earned_cents"] == 10027
    assert received["interest_earned_cents"] is None


def test_borrower_not_found(client: TestClient):
    assert client.get(f"{API}/borrowers/99").status_code == 404


def test_loan_transaction_for_unknown_borrower(client: TestClient):
    response = client.post(
        f"{API}/loan-transactions",
        json={"borrower_id": 99, "type": "given", "amount_cents": 100, "transaction_date": "2024-01-01"},
    )
    assert response.status_code == 404


def test_loan_transaction_rejects_unknown_type(client: TestClient):
    borrower_id = create_borrower(client, "Dan")
    response = client.post(
        f"{API}/loan-transactions",
        json={"borrower_id": borrower_id, "type": "gift", "amount_cents": 100, "transaction_date": "2024-01-01"},
    )
    assert response.status_code == 422


def test_delete_loan_transaction(client: TestClient):
    borrower_id = create_borrower(client, "Erin")
    entry_id = add_entry(client, borrower_id, "given", 5000, "2024-03-01")

    assert client.delete(f"{API}/loan-transactions/{entry_id}").json() == {"success": True}
    assert client.delete(f"{API}/loan-transactions/{entry_id}").status_code == 404

    data = client.get(f"{API}/borrowers/{borrower_id}").json()
    assert data["transactions"] == []
    assert data["outstanding_cents"] == 0


def test_list_borrowers_and_portfolio_summary(client: TestClient):
    carol = create_borrower(client, "Carol")
    add_entry(client, carol, "given", 36500, "2024-03-10", rate=10)  # 10.6 days -> 11 days -> 110 cents
    settled = create_borrower(client, "Bob")
    add_entry(client, settled, "given", 20000, "2024-03-01")
    add_entry(client, settled, "received", 20000, "2024-03-15")
    create_borrower(client, "Ann")

    borrowers = client.get(f"{API}/borrowers").json()
    assert [b["name"] for b in borrowers] == ["Ann", "Bob", "Carol"]

    response = client.get(f"{API}/loans/summary")
    assert response.status_code == 200
    assert response.json() == {
        "total_lent_cents": 56500,
        "total_outstanding_cents": 36500,
        "total_interest_cents": 110,
        "active_borrowers": 1,
    }


def test_update_borrower(client: TestClient):
    borrower_id = create_borrower(client, "Carol")
    add_entry(client, borrower_id, "given", 5000, "2024-03-01")

    response = client.put(f"{API}/borrowers/{borrower_id}", json={"name": "Caroline", "notes": "Sister"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Caroline"
    assert data["notes"] == "Sister"
    assert data["contact"] is None
    assert data["outstanding_cents"] == 5000

    assert client.get(f"{API}/borrowers/{borrower_id}").json()["name"] == "Caroline"


def test_update_borrower_validation(client: TestClient):
    borrower_id = create_borrower(client, "Carol")
    assert client.put(f"{API}/borrowers/{borrower_id}", json={"name": ""}).status_code == 422
    assert client.put(f"{API}/borrowers/99", json={"name": "Nobody"}).status_code == 404


def test_delete_borrower_removes_ledger(client: TestClient):
    borrower_id = create_borrower(client, "Frank")
    entry_id = add_entry(client, borrower_id, "given", 5000, "2024-03-01")
    add_entry(client, borrower_id, "received", 1000, "2024-03-10")
    kept = create_borrower(client, "Gina")
    add_entry(client, kept, "given", 2500, "2024-03-01")

    assert client.delete(f"{API}/borrowers/{borrower_id}").json() == {"success": True}

    assert client.get(f"{API}/borrowers/{borrower_id}").status_code == 404
    assert client.delete(f"{API}/loan-transactions/{entry_id}").status_code == 404
    assert [b["name"] for b in client.get(f"{API}/borrowers").json()] == ["Gina"]
    assert client.get(f"{API}/loans/summary").json()["total_lent_cents"] == 2500


def test_delete_missing_borrower(client: TestClient):
    assert client.delete(f"{API}/borrowers/99").status_code == 404
