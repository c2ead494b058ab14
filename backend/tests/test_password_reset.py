import re
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from khayal.models.reset_token import ResetToken

RESET_LINK = re.compile(r"http://frontend\.test/admin/reset-password/(\d+)/([0-9a-f]{64})")


def _request_reset(client, email="admin@example.com"):
    return client.post("/api/admin/reset-password", json={"email": email})

def _link_from(message):
    match = RESET_LINK.search(message.html)
    assert match, "reset link missing from email"
    return int(match.group(1)), match.group(2)

def _login(client, password):
    return client.post("/api/admin/login", json={"username": "admin", "password": password})

def test_unknown_email_gets_same_response(client: TestClient, email_connector):
    known = _request_reset(client)
    unknown = _request_reset(client, "nobody@example.com")

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert len(email_connector.sent) == 1
    assert email_connector.sent[0].to == ["admin@example.com"]

def test_reset_request_requires_email(client: TestClient):
    assert client.post("/api/admin/reset-password", json={}).status_code == 400

def test_reset_flow(client: TestClient, email_connector, db):
    _request_reset(client)
    user_id, secret = _link_from(email_connector.sent[0])

    stored = db.query(ResetToken).filter(ResetToken.user_id == user_id).one()
    assert stored.token_hash != secret

    response = client.post(f"/api/admin/reset-password/{user_id}/{secret}", json={"password": "n3w-pass"})
    assert response.status_code == 200
    assert response.json() == {"message": "Password reset successful"}

    assert _login(client, "n3w-pass").status_code == 200
    assert _login(client, "admin123").status_code == 400

def test_reset_token_is_single_use(client: TestClient, email_connector):
    _request_reset(client)
    user_id, secret = _link_from(email_connector.sent[0])

    first = client.post(f"/api/admin/reset-password/{user_id}/{secret}", json={"password": "first-pass"})
    assert first.status_code == 200

    second = client.post(f"/api/admin/reset-password/{user_id}/{secret}", json={"password": "second-pass"})
    assert second.status_code == 400
    assert second.json() == {"message": "Invalid or expired reset token"}
    assert _login(client, "first-pass").status_code == 200

def test_second_request_invalidates_first_token(client: TestClient, email_connector, db):
    _request_reset(client)
    _request_reset(client)
    user_id, old_secret = _link_from(email_connector.sent[0])
    _, new_secret = _link_from(email_connector.sent[1])

    assert db.query(ResetToken).filter(ResetToken.user_id == user_id).count() == 1

    stale = client.post(f"/api/admin/reset-password/{user_id}/{old_secret}", json={"password": "x-pass"})
    assert stale.status_code == 400

    fresh = client.post(f"/api/admin/reset-password/{user_id}/{new_secret}", json={"password": "y-pass"})
    assert fresh.status_code == 200

def test_expired_token_is_rejected_and_removed(client: TestClient, email_connector, db):
    _request_reset(client)
    user_id, secret = _link_from(email_connector.sent[0])

    token = db.query(ResetToken).filter(ResetToken.user_id == user_id).one()
    token.created_at = datetime.now(timezone.utc) - timedelta(hours=2)
    db.commit()

    response = client.post(f"/api/admin/reset-password/{user_id}/{secret}", json={"password": "late-pass"})
    assert response.status_code == 400
    db.expire_all()
    assert db.query(ResetToken).count() == 0

def test_wrong_secret_is_rejected(client: TestClient, email_connector):
    _request_reset(client)
    user_id, _ = _link_from(email_connector.sent[0])
    response = client.post(f"/api/admin/reset-password/{user_id}/{'0' * 64}", json={"password": "p"})
    assert response.status_code == 400

def test_reset_requires_password(client: TestClient, email_connector):
    _request_reset(client)
    user_id, secret = _link_from(email_connector.sent[0])
    assert client.post(f"/api/admin/reset-password/{user_id}/{secret}", json={}).status_code == 400

def test_email_failure_fails_reset_request(client: TestClient, email_connector):
    email_connector.fail_for.add("admin@example.com")
    response = _request_reset(client)
    assert response.status_code == 500
