"""
Unit tests for CredentialStore
"""
import pytest

from portal.config import Settings
from portal.services.credentials import CredentialStore, load_credentials


@pytest.fixture
def store():
    return CredentialStore({"admin": "s3cret", "alice": "Wonderland"})


class TestAuthenticate:
    """Exact-match credential checks"""

    @pytest.mark.parametrize("username,password,is_admin", [
        ("admin", "s3cret", True),
        ("alice", "Wonderland", False),
    ])
    def test_valid_pairs(self, store, username, password, is_admin):
        result = store.authenticate(username, password)
        assert result.is_valid is True
        assert result.is_admin is is_admin

    @pytest.mark.parametrize("username,password", [
        ("admin", "S3CRET"),
        ("alice", "wonderland"),
        ("Alice", "Wonderland"),
        ("bob", "anything"),
        ("admin", ""),
        (None, "s3cret"),
        ("admin", None),
    ])
    def test_invalid_pairs(self, store, username, password):
        result = store.authenticate(username, password)
        assert result.is_valid is False
        assert result.is_admin is False

    def test_empty_stored_password_never_matches(self):
        store = CredentialStore({"guest": ""})
        assert store.authenticate("guest", "").is_valid is False

    def test_custom_verifier(self):
        """A different verifier can replace plaintext comparison"""
        store = CredentialStore(
            {"admin": "S3CRET"},
            verifier=lambda supplied, stored: supplied.upper() == stored
        )
        assert store.authenticate("admin", "s3cret").is_valid is True
        assert store.authenticate("admin", "secret").is_valid is False


class TestLoading:
    """Loading from the credentials document"""

    def test_load_from_file(self, credentials_file):
        credentials = load_credentials(credentials_file)
        assert credentials == {"admin": "s3cret", "alice": "Wonderland"}

    def test_missing_file_falls_back_to_admin(self, tmp_path):
        settings = Settings(
            _env_file=None,
            credentials_file=str(tmp_path / "missing.json"),
            admin_password="fallback"
        )
        store = CredentialStore.from_settings(settings)

        assert store.usernames() == ["admin"]
        assert store.authenticate("admin", "fallback").is_valid is True

    def test_malformed_file_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        settings = Settings(_env_file=None, credentials_file=str(path), admin_password="pw")

        store = CredentialStore.from_settings(settings)
        assert store.usernames() == ["admin"]

    def test_document_without_credentials_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"port": 3000}')
        assert load_credentials(path) is None

    def test_from_settings_uses_file(self, settings):
        store = CredentialStore.from_settings(settings)
        assert store.usernames() == ["admin", "alice"]
