import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str) -> dict:
    client.post("/auth/register", json={"email": email, "password": password})
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def test_customer_crud_and_deactivation():
    client = TestClient(app)
    headers = register_and_login(client, "cust@example.com", "secret")

    created = client.post(
        "/customers",
        json={"company_name": "Beta", "rate_type": "monthly", "default_rate": "1200.00", "payment_terms": 30},
        headers=headers,
    )
    assert created.status_code == 201
    customer_id = created.json()["id"]
    assert created.json()["payment_terms"] == 30

    updated = client.put(f"/customers/{customer_id}", json={"default_rate": "1300.00"}, headers=headers)
    assert updated.status_code == 200
    assert float(updated.json()["default_rate"]) == 1300.0

    removed = client.delete(f"/customers/{customer_id}", headers=headers)
    assert removed.status_code == 200
    assert removed.json()["is_active"] is False

    assert client.get("/customers", headers=headers).json() == []
    listed = client.get("/customers", params={"include_inactive": True}, headers=headers).json()
    assert [c["id"] for c in listed] == [customer_id]


def test_payment_terms_bounds_are_validated():
    client = TestClient(app)
    headers = register_and_login(client, "cust2@example.com", "secret")
    resp = client.post("/customers", json={"company_name": "Gamma", "payment_terms": 0}, headers=headers)
    assert resp.status_code == 422


def test_tasks_are_scoped_to_customer_and_owner():
    client = TestClient(app)
    headers = register_and_login(client, "cust3@example.com", "secret")
    other = register_and_login(client, "cust4@example.com", "secret")
    customer_id = client.post("/customers", json={"company_name": "Delta"}, headers=headers).json()["id"]

    task = client.post(f"/customers/{customer_id}/tasks", json={"name": "Design"}, headers=headers)
    assert task.status_code == 201
    tasks = client.get(f"/customers/{customer_id}/tasks", headers=headers).json()
    assert [t["name"] for t in tasks] == ["Design"]

    assert client.get(f"/customers/{customer_id}", headers=other).status_code == 404
    assert client.post(f"/customers/{customer_id}/tasks", json={"name": "Steal"}, headers=other).status_code == 404


def test_agreements_and_expenses():
    client = TestClient(app)
    headers = register_and_login(client, "cust5@example.com", "secret")
    customer_id = client.post("/customers", json={"company_name": "Epsilon"}, headers=headers).json()["id"]

    bad = client.post(
        "/agreements",
        json={"customer_id": customer_id, "name": "Retainer", "start_date": "2025-02-01", "end_date": "2025-01-01"},
        headers=headers,
    )
    assert bad.status_code == 422
    agreement = client.post(
        "/agreements",
        json={"customer_id": customer_id, "name": "Retainer", "start_date": "2025-01-01"},
        headers=headers,
    )
    assert agreement.status_code == 201

    expense = client.post(
        "/expenses",
        json={"customer_id": customer_id, "description": "Hosting", "amount": "25.00", "expense_date": "2025-03-01"},
        headers=headers,
    )
    assert expense.status_code == 201
    zero = client.post(
        "/expenses",
        json={"description": "Nothing", "amount": "0", "expense_date": "2025-03-01"},
        headers=headers,
    )
    assert zero.status_code == 422

    removed = client.delete(f"/expenses/{expense.json()['id']}", headers=headers)
    assert removed.json()["is_active"] is False
    assert client.get("/expenses", headers=headers).json() == []
