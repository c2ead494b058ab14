import os
import shutil
import tempfile

# Point the app at a throwaway database and upload directory before it is imported
_TMP_DIR = tempfile.mkdtemp(prefix="khayal-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RESEND_API_KEY"] = "re_test_key"
os.environ["CONTACT_RECIPIENT"] = "owner@example.com"
os.environ["FRONTEND_URL"] = "http://frontend.test"
os.environ["DEFAULT_ADMIN_USERNAME"] = "admin"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin123"
os.environ["DEFAULT_ADMIN_EMAIL"] = "admin@example.com"

from typing import Any, Dict, List, Set

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from khayal.api.deps import get_email_connector
from khayal.connectors.base import EmailConnector, EmailMessage
from khayal.database import Base, SessionLocal, engine
from khayal.exceptions import EmailDeliveryError
from khayal.main import app
import khayal.models  # noqa: F401


class FakeEmailConnector(EmailConnector):
    """Records outgoing email; recipients listed in ``fail_for`` raise EmailDeliveryError."""

    def __init__(self):
        super().__init__({})
        self.sent: List[EmailMessage] = []
        self.fail_for: Set[str] = set()

    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        if self.fail_for.intersection(message.to):
            raise EmailDeliveryError("provider rejected the message")
        self.sent.append(message)
        return {"id": f"email-{len(self.sent)}"}

    async def close(self) -> None:
        pass


@pytest.fixture
def email_connector() -> FakeEmailConnector:
    return FakeEmailConnector()


@pytest.fixture
def client(email_connector: FakeEmailConnector) -> TestClient:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_email_connector] = lambda: email_connector
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db(client: TestClient) -> Session:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def auth_headers(client: TestClient) -> Dict[str, str]:
    response = client.post("/api/admin/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def image_upload():
    """Factory for the multipart `image` field."""
    def _make(name: str = "photo.jpg", content_type: str = "image/jpeg", size: int = 128) -> Dict[str, Any]:
        return {"image": (name, b"\xff\xd8\xff\xe0" + b"0" * size, content_type)}
    return _make


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    shutil.rmtree(_TMP_DIR, ignore_errors=True)
