import pytest
from datetime import datetime, time, timedelta
from fastapi.testclient import TestClient

from backend.app.core.time import utc_today
from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.dependencies.delivery import get_invoice_dispatcher
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.clear()


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_customer(client: TestClient, token: str, **overrides) -> int:
    payload = {"company_name": "Acme", "email": "billing@acme.test", "rate_type": "hourly", "default_rate": "100.00"}
    payload.update(overrides)
    resp = client.post("/customers", json=payload, headers=auth(token))
    assert resp.status_code == 201
    return resp.json()["id"]


def log_time(client: TestClient, token: str, customer_id: int, minutes: int, day_offset: int = 0, **extra) -> dict:
    start = datetime.combine(utc_today() - timedelta(days=day_offset), time(8, 0))
    payload = {
        "customer_id": customer_id,
        "task_description": "Consulting",
        "start_time": start.isoformat(),
        "end_time": (start + timedelta(minutes=minutes)).isoformat(),
    }
    payload.update(extra)
    resp = client.post("/time-entries", json=payload, headers=auth(token))
    assert resp.status_code == 201
    return resp.json()


def test_create_invoice_from_time_entries():
    client = TestClient(app)
    token = register_and_login(client, "inv1@example.com", "secret")
    customer_id = create_customer(client, token)
    e1 = log_time(client, token, customer_id, 90)
    e2 = log_time(client, token, customer_id, 30)
    assert e1["duration_minutes"] == 90

    resp = client.post(
        "/invoices",
        json={"customer_id": customer_id, "time_entry_ids": [e1["id"], e2["id"]]},
        headers=auth(token),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["invoice_number"].startswith(f"INV-{utc_today().year}-")
    assert data["status"] == "draft"
    assert float(data["subtotal"]) == 200.0
    assert float(data["vat_amount"]) == 50.0
    assert float(data["total_amount"]) == 250.0
    assert len(data["line_items"]) == 1

    uninvoiced = client.get("/time-entries", params={"uninvoiced_only": True}, headers=auth(token))
    assert uninvoiced.json() == []

    detail = client.get(f"/invoices/{data['id']}", headers=auth(token))
    assert detail.status_code == 200
    assert detail.json()["line_items"][0]["time_entry_ids"] == [e1["id"], e2["id"]]


def test_invoiced_time_entry_cannot_be_edited_or_deleted():
    client = TestClient(app)
    token = register_and_login(client, "inv2@example.com", "secret")
    customer_id = create_customer(client, token)
    entry = log_time(client, token, customer_id, 60)
    client.post("/invoices", json={"customer_id": customer_id, "time_entry_ids": [entry["id"]]}, headers=auth(token))

    edit = client.put(f"/time-entries/{entry['id']}", json={"subtask": "Late change"}, headers=auth(token))
    assert edit.status_code == 400
    delete = client.delete(f"/time-entries/{entry['id']}", headers=auth(token))
    assert delete.status_code == 400


def test_create_invoice_validation_errors_map_to_http_codes():
    client = TestClient(app)
    token = register_and_login(client, "inv3@example.com", "secret")
    customer_id = create_customer(client, token)
    entry = log_time(client, token, customer_id, 60, is_billable=False)

    empty = client.post("/invoices", json={"customer_id": customer_id, "time_entry_ids": []}, headers=auth(token))
    assert empty.status_code == 400
    assert empty.json()["detail"] == "No time entries selected"

    non_billable = client.post(
        "/invoices", json={"customer_id": customer_id, "time_entry_ids": [entry["id"]]}, headers=auth(token)
    )
    assert non_billable.status_code == 400

    missing = client.post("/invoices", json={"customer_id": customer_id, "time_entry_ids": [9999]}, headers=auth(token))
    assert missing.status_code == 404


def test_preview_returns_totals_without_creating_invoice():
    client = TestClient(app)
    token = register_and_login(client, "inv4@example.com", "secret")
    customer_id = create_customer(client, token, rate_type="monthly", default_rate="1500.00")
    entry = log_time(client, token, customer_id, 60)

    resp = client.post(
        "/invoices/preview", json={"customer_id": customer_id, "time_entry_ids": [entry["id"]]}, headers=auth(token)
    )
    assert resp.status_code == 200
    assert float(resp.json()["total_amount"]) == 1875.0
    assert client.get("/invoices", headers=auth(token)).json() == []


def test_send_pay_and_cancel_flow():
    client = TestClient(app)
    token = register_and_login(client, "inv5@example.com", "secret")
    deliveries = []
    app.dependency_overrides[get_invoice_dispatcher] = lambda: deliveries.append
    customer_id = create_customer(client, token)
    entry = log_time(client, token, customer_id, 60)
    invoice = client.post(
        "/invoices", json={"customer_id": customer_id, "time_entry_ids": [entry["id"]]}, headers=auth(token)
    ).json()

    early_pay = client.post(f"/invoices/{invoice['id']}/mark-paid", headers=auth(token))
    assert early_pay.status_code == 400

    sent = client.post(f"/invoices/{invoice['id']}/send", headers=auth(token))
    assert sent.status_code == 200
    assert sent.json()["status"] == "sent"
    assert sent.json()["sent_at"] is not None
    assert len(deliveries) == 1

    paid = client.post(f"/invoices/{invoice['id']}/mark-paid", headers=auth(token))
    assert paid.status_code == 200
    assert paid.json()["status"] == "paid"

    cancel = client.post(f"/invoices/{invoice['id']}/cancel", headers=auth(token))
    assert cancel.status_code == 400

    listed = client.get("/invoices", params={"status": "paid"}, headers=auth(token))
    assert [inv["id"] for inv in listed.json()] == [invoice["id"]]


def test_delete_invoice_returns_entries_to_uninvoiced():
    client = TestClient(app)
    token = register_and_login(client, "inv6@example.com", "secret")
    customer_id = create_customer(client, token)
    entry = log_time(client, token, customer_id, 60)
    invoice = client.post(
        "/invoices", json={"customer_id": customer_id, "time_entry_ids": [entry["id"]]}, headers=auth(token)
    ).json()

    resp = client.delete(f"/invoices/{invoice['id']}", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["reset_time_entry_ids"] == [entry["id"]]

    assert client.get(f"/invoices/{invoice['id']}", headers=auth(token)).status_code == 404
    uninvoiced = client.get("/time-entries", params={"uninvoiced_only": True}, headers=auth(token))
    assert [e["id"] for e in uninvoiced.json()] == [entry["id"]]


def test_turning_off_drive_clears_stored_kilometers():
    client = TestClient(app)
    token = register_and_login(client, "inv7@example.com", "secret")
    customer_id = create_customer(client, token)
    entry = log_time(client, token, customer_id, 60, drive_required=True, kilometers="14.0")
    assert float(entry["kilometers"]) == 14.0

    resp = client.put(f"/time-entries/{entry['id']}", json={"drive_required": False}, headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["drive_required"] is False
    assert resp.json()["kilometers"] is None

    kept = client.put(f"/time-entries/{entry['id']}", json={"subtask": "Review"}, headers=auth(token))
    assert kept.status_code == 200


def test_invoices_are_owner_scoped():
    client = TestClient(app)
    token_a = register_and_login(client, "owner-a@example.com", "secret")
    token_b = register_and_login(client, "owner-b@example.com", "secret")
    customer_id = create_customer(client, token_a)
    entry = log_time(client, token_a, customer_id, 60)
    invoice = client.post(
        "/invoices", json={"customer_id": customer_id, "time_entry_ids": [entry["id"]]}, headers=auth(token_a)
    ).json()

    assert client.get("/invoices", headers=auth(token_b)).json() == []
    assert client.get(f"/invoices/{invoice['id']}", headers=auth(token_b)).status_code == 404
    assert client.delete(f"/invoices/{invoice['id']}", headers=auth(token_b)).status_code == 404
    stolen = client.post(
        "/invoices", json={"customer_id": customer_id, "time_entry_ids": [entry["id"]]}, headers=auth(token_b)
    )
    assert stolen.status_code == 404
