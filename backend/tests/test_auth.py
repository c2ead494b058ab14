from datetime import timedelta

from fastapi.testclient import TestClient

from khayal.auth import create_access_token, decode_access_token
from khayal.config import settings
from khayal.models.admin import Admin
from khayal.services.bootstrap import ensure_default_admin


def test_login(client: TestClient):
    response = client.post("/api/admin/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    token = response.json()["token"]

    identity = decode_access_token(token)
    assert identity.username == "admin"

    me = client.get("/api/admin/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "admin"
    assert me.json()["email"] == "admin@example.com"

def test_login_wrong_password(client: TestClient):
    response = client.post("/api/admin/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid credentials"}

def test_login_unknown_user_is_indistinguishable(client: TestClient):
    unknown = client.post("/api/admin/login", json={"username": "ghost", "password": "admin123"})
    wrong = client.post("/api/admin/login", json={"username": "admin", "password": "nope"})
    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json() == wrong.json()

def test_login_missing_fields(client: TestClient):
    response = client.post("/api/admin/login", json={"username": "admin"})
    assert response.status_code == 400

def test_expired_token_is_forbidden(client: TestClient, db):
    admin = db.query(Admin).filter(Admin.username == "admin").first()
    token = create_access_token(
        data={"sub": str(admin.id), "username": admin.username},
        expires_delta=timedelta(seconds=-1),
    )
    response = client.get("/api/admin/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403

def test_token_signed_with_other_key_is_forbidden(client: TestClient, db):
    from jose import jwt

    admin = db.query(Admin).filter(Admin.username == "admin").first()
    token = jwt.encode({"sub": str(admin.id), "username": "admin"}, "another-secret", algorithm=settings.algorithm)
    response = client.get("/api/admin/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403

def test_missing_token_is_unauthenticated(client: TestClient):
    assert client.get("/api/admin/me").status_code == 401

def test_default_admin_bootstrap_is_idempotent(client: TestClient, db):
    assert db.query(Admin).count() == 1
    assert ensure_default_admin(db, settings) is False
    assert db.query(Admin).count() == 1

def test_login_is_audited(client: TestClient, auth_headers):
    client.post("/api/admin/login", json={"username": "admin", "password": "wrong"})

    response = client.get("/api/admin/audit-logs", headers=auth_headers)
    assert response.status_code == 200
    actions = [entry["action"] for entry in response.json()]
    assert "login_success" in actions
    assert "login_failed" in actions

    failed = client.get("/api/admin/audit-logs", params={"action": "login_failed"}, headers=auth_headers).json()
    assert all(entry["action"] == "login_failed" for entry in failed)
    assert client.get(f"/api/admin/audit-logs/{failed[0]['id']}", headers=auth_headers).status_code == 200

def test_audit_entry_records_proxy_address_and_browser(client: TestClient, auth_headers):
    client.post(
        "/api/admin/login",
        json={"username": "admin", "password": "wrong"},
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "User-Agent": "BandSiteTest/1.0"},
    )
    client.post(
        "/api/admin/login",
        json={"username": "admin", "password": "wrong"},
        headers={"X-Real-IP": "198.51.100.4"},
    )

    failed = client.get("/api/admin/audit-logs", params={"action": "login_failed"}, headers=auth_headers).json()
    assert [entry["ip_address"] for entry in failed] == ["198.51.100.4", "203.0.113.7"]
    assert failed[1]["user_agent"] == "BandSiteTest/1.0"
