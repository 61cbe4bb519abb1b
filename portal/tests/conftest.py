"""
pytest configuration and shared fixtures
"""
import json

import pytest
from fastapi.testclient import TestClient

from portal.app import create_app
from portal.config import Settings


@pytest.fixture
def credentials_file(tmp_path):
    """Credentials document with an admin and a regular user"""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "credentials": {
            "admin": "s3cret",
            "alice": "Wonderland",
        }
    }))
    return path


@pytest.fixture
def settings(tmp_path, credentials_file) -> Settings:
    """Settings pointing every directory at tmp_path"""
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "dashboard.html").write_text("<html><body>dashboard</body></html>")
    (static_dir / "app.css").write_text("body { margin: 0; }")

    return Settings(
        _env_file=None,
        files_dir=str(tmp_path / "files"),
        tickets_dir=str(tmp_path / "tickets"),
        credentials_file=str(credentials_file),
        static_dir=str(static_dir),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient sharing one event loop for the whole test"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def ticket_id(client) -> str:
    """A freshly created ticket"""
    response = client.post(
        "/tickets/create",
        json={"product": "ProductX", "discordEmail": "user@x.com"}
    )
    return response.json()["ticketId"]
