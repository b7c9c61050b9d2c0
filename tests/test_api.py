from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from cardledger.api.v1.deps import get_activity_reporter, get_transfer_service
from cardledger.main import app
from cardledger.services.activity_service import ActivityReporter
from conftest import DEST, OTHER, SOURCE, InMemoryUserRepository


class BrokenService:
    async def transfer(self, source, destination, amount):
        raise RuntimeError("database is down")


@pytest.fixture
def client(transfer_service, ledger, tx_repo):
    app.dependency_overrides[get_transfer_service] = lambda: transfer_service
    app.dependency_overrides[get_activity_reporter] = lambda: ActivityReporter(
        InMemoryUserRepository(ledger), tx_repo
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    assert client.get("/").status_code == 200


def test_transfer_ok(client, ledger):
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": SOURCE, "destination": DEST, "amount": "5000"})
    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert ledger.cards[1]["balance"] == 4_500


def test_transfer_accepts_numeric_amount(client):
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": SOURCE, "destination": DEST, "amount": 2000})
    assert response.status_code == 200


def test_transfer_validation_errors(client):
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": SOURCE, "destination": SOURCE, "amount": "999"})
    body = response.json()
    assert response.status_code == 422
    assert body["error"] == "VALIDATION_ERROR"
    assert set(body["errors"]) == {"destination", "amount"}


def test_transfer_card_not_found(client):
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": SOURCE, "destination": OTHER, "amount": "5000"})
    assert response.status_code == 404
    assert response.json()["error"] == "CARD_NOT_FOUND"


def test_transfer_insufficient_funds(client, ledger):
    ledger.cards[1]["balance"] = 5_000
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": SOURCE, "destination": DEST, "amount": "5000"})
    assert response.status_code == 400
    assert response.json()["error"] == "INSUFFICIENT_FUNDS"
    assert ledger.cards[1]["balance"] == 5_000


def test_transfer_infrastructure_failure(client):
    app.dependency_overrides[get_transfer_service] = lambda: BrokenService()
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": SOURCE, "destination": DEST, "amount": "5000"})
    assert response.status_code == 500
    assert response.json()["detail"] == "An unknown error occurred."


def test_top_users(client, ledger):
    ledger.add_transaction(1, 2, 5500, datetime.now(timezone.utc))

    response = client.get("/api/v1/transactions/top-users")

    assert response.status_code == 200
    body = response.json()
    assert body[0]["user"]["id"] == 1
    assert body[0]["transaction_count"] == 1
    assert len(body[0]["transactions"]) == 1


def test_transfer_missing_field_reported_with_other_errors(client):
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": "", "destination": DEST})
    body = response.json()
    assert response.status_code == 422
    assert body["error"] == "VALIDATION_ERROR"
    assert body["errors"] == {
        "source": ["The source card field is required."],
        "amount": ["The amount field is required."],
    }


def test_transfer_null_field_is_required(client):
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": SOURCE, "destination": None, "amount": "5000"})
    assert response.status_code == 422
    assert response.json()["errors"] == {"destination": ["The destination card field is required."]}


def test_transfer_fractional_json_amount(client, ledger):
    response = client.post("/api/v1/transactions/transfer",
                           json={"source": SOURCE, "destination": DEST, "amount": 999.5})
    body = response.json()
    assert response.status_code == 422
    assert body["error"] == "VALIDATION_ERROR"
    assert "The amount must be a whole number." in body["errors"]["amount"]
    assert ledger.cards[1]["balance"] == 10_000
