import os

from fastapi.testclient import TestClient

from khayal.config import settings


def _create_member(client, auth_headers, image_upload, **fields):
    data = {"name": "Asha", "instrument": "Sitar", "bio": "Plays sitar."}
    data.update(fields)
    return client.post("/api/admin/members", data=data, files=image_upload(), headers=auth_headers)

def _upload_path(image: str) -> str:
    return os.path.join(settings.upload_dir, image.rsplit("/", 1)[-1])

def test_admin_routes_require_token(client: TestClient):
    response = client.get("/api/admin/members")
    assert response.status_code == 401

def test_admin_routes_reject_bad_token(client: TestClient):
    response = client.get("/api/admin/members", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403

def test_create_member_requires_image(client: TestClient, auth_headers):
    response = client.post(
        "/api/admin/members",
        data={"name": "Asha", "instrument": "Sitar", "bio": "Plays sitar."},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Image is required"}

def test_create_member_requires_text_fields(client: TestClient, auth_headers, image_upload):
    response = client.post("/api/admin/members", data={"name": "Asha"}, files=image_upload(), headers=auth_headers)
    assert response.status_code == 400
    assert "instrument" in response.json()["message"]
    assert "bio" in response.json()["message"]

def test_create_member_with_jpeg(client: TestClient, auth_headers, image_upload):
    response = _create_member(client, auth_headers, image_upload, isCaptain="true", order="3")
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Asha"
    assert data["isCaptain"] is True
    assert data["order"] == 3
    assert data["active"] is True
    assert data["image"].startswith("/uploads/")
    assert data["image"].endswith(".jpg")
    assert "createdAt" in data

    served = client.get(data["image"])
    assert served.status_code == 200
    assert served.content.startswith(b"\xff\xd8")

def test_create_member_defaults(client: TestClient, auth_headers, image_upload):
    data = _create_member(client, auth_headers, image_upload).json()
    assert data["order"] == 999
    assert data["isCaptain"] is False

def test_create_member_rejects_disallowed_type(client: TestClient, auth_headers, image_upload):
    response = client.post(
        "/api/admin/members",
        data={"name": "Asha", "instrument": "Sitar", "bio": "Plays sitar."},
        files=image_upload("notes.pdf", "application/pdf"),
        headers=auth_headers,
    )
    assert response.status_code == 415

def test_disallowed_type_silently_dropped_in_legacy_mode(client: TestClient, auth_headers, image_upload, monkeypatch):
    monkeypatch.setattr(settings, "upload_reject_silently", True)
    response = client.post(
        "/api/admin/members",
        data={"name": "Asha", "instrument": "Sitar", "bio": "Plays sitar."},
        files=image_upload("notes.gif", "image/gif"),
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Image is required"}

def test_create_member_rejects_oversized_image(client: TestClient, auth_headers, image_upload, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 64)
    before = set(os.listdir(settings.upload_dir))
    response = client.post(
        "/api/admin/members",
        data={"name": "Asha", "instrument": "Sitar", "bio": "Plays sitar."},
        files=image_upload(size=1024),
        headers=auth_headers,
    )
    assert response.status_code == 413
    assert set(os.listdir(settings.upload_dir)) == before

def test_create_member_rejects_bad_flag(client: TestClient, auth_headers, image_upload):
    response = _create_member(client, auth_headers, image_upload, isCaptain="maybe")
    assert response.status_code == 400

def test_public_listing_orders_by_display_order(client: TestClient, auth_headers, image_upload):
    for name, order in (("Five", "5"), ("One", "1"), ("Default", "999")):
        assert _create_member(client, auth_headers, image_upload, name=name, order=order).status_code == 201

    response = client.get("/api/members")
    assert response.status_code == 200
    assert [m["order"] for m in response.json()] == [1, 5, 999]
    assert [m["name"] for m in response.json()] == ["One", "Five", "Default"]

def test_public_listing_hides_inactive(client: TestClient, auth_headers, image_upload):
    _create_member(client, auth_headers, image_upload, name="Visible")
    _create_member(client, auth_headers, image_upload, name="Hidden", active="false")

    public = client.get("/api/members").json()
    assert [m["name"] for m in public] == ["Visible"]

    admin = client.get("/api/admin/members", headers=auth_headers).json()
    assert {m["name"] for m in admin} == {"Visible", "Hidden"}

def test_update_member_without_image_keeps_image(client: TestClient, auth_headers, image_upload):
    created = _create_member(client, auth_headers, image_upload, isCaptain="true", order="2").json()

    response = client.put(
        f"/api/admin/members/{created['id']}",
        data={"name": "Asha K", "instrument": "Sitar", "bio": "Updated.", "active": "true"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Asha K"
    assert data["image"] == created["image"]
    assert data["order"] == 2
    # flags overwrite: an absent checkbox means false
    assert data["isCaptain"] is False
    assert data["active"] is True

def test_update_member_replaces_image_and_removes_old_file(client: TestClient, auth_headers, image_upload):
    created = _create_member(client, auth_headers, image_upload).json()
    old_file = _upload_path(created["image"])
    assert os.path.exists(old_file)

    response = client.put(
        f"/api/admin/members/{created['id']}",
        data={"name": "Asha", "instrument": "Sitar", "bio": "Plays sitar.", "active": "true"},
        files=image_upload("new.png", "image/png"),
        headers=auth_headers,
    )
    assert response.status_code == 200
    new_image = response.json()["image"]
    assert new_image != created["image"]
    assert new_image.endswith(".png")
    assert os.path.exists(_upload_path(new_image))
    assert not os.path.exists(old_file)

def test_update_missing_member_returns_404(client: TestClient, auth_headers):
    response = client.put(
        "/api/admin/members/9999",
        data={"name": "Asha", "instrument": "Sitar", "bio": "Plays sitar."},
        headers=auth_headers,
    )
    assert response.status_code == 404

def test_delete_member(client: TestClient, auth_headers, image_upload):
    created = _create_member(client, auth_headers, image_upload).json()
    image_file = _upload_path(created["image"])

    response = client.delete(f"/api/admin/members/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Member deleted"}
    assert not os.path.exists(image_file)

    assert client.get(f"/api/admin/members/{created['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/admin/members/{created['id']}", headers=auth_headers).status_code == 404
