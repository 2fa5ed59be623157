import pytest
from fastapi.testclient import TestClient

from backend.app.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)


def test_token_contains_subject():
    token = create_access_token(user_id=42, expires_minutes=5)
    assert decode_access_token(token)["sub"] == "42"


def test_expired_token_is_rejected():
    token = create_access_token(user_id=42, expires_minutes=-1)
    with pytest.raises(ValueError):
        decode_access_token(token)


def test_register_login_and_me():
    client = TestClient(app)
    resp = client.post("/auth/register", json={"email": "me@example.com", "password": "secret"})
    assert resp.status_code == 200
    duplicate = client.post("/auth/register", json={"email": "me@example.com", "password": "secret"})
    assert duplicate.status_code == 400

    bad = client.post("/auth/login", json={"email": "me@example.com", "password": "nope"})
    assert bad.status_code == 400

    token = client.post("/auth/login", json={"email": "me@example.com", "password": "secret"}).json()["access_token"]
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "me@example.com"


def test_profile_update_and_currencies():
    client = TestClient(app)
    client.post("/auth/register", json={"email": "profile@example.com", "password": "secret"})
    token = client.post("/auth/login", json={"email": "profile@example.com", "password": "secret"}).json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    profile = client.get("/profile/me", headers=headers).json()
    assert profile["currency"] == "USD"
    assert float(profile["internal_hourly_rate"]) == 0.0

    updated = client.put(
        "/profile/me",
        json={"internal_hourly_rate": "55.50", "currency": "DKK", "company_name": "Studio ApS"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["currency"] == "DKK"
    assert updated.json()["company_name"] == "Studio ApS"

    invalid = client.put("/profile/me", json={"currency": "GBP"}, headers=headers)
    assert invalid.status_code == 422

    currencies = client.get("/profile/currencies").json()
    assert [c["value"] for c in currencies] == ["USD", "EUR", "DKK"]


def test_health_endpoints():
    client = TestClient(app)
    assert client.get("/").json() == {"app": "Timebill backend", "status": "ok"}
    assert client.get("/health").json() == {"status": "ok"}
