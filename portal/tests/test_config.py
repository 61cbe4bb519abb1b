"""
Test configuration management
"""
from pathlib import Path

from portal.config import Settings, get_settings


def test_settings_singleton():
    """Test settings returns same instance"""
    settings1 = get_settings()
    settings2 = get_settings()
    assert settings1 is settings2


def test_settings_defaults(monkeypatch):
    """Test default values"""
    for var in ("PORT", "ADMIN_PASSWORD", "LOG_LEVEL", "FILES_DIR", "TICKETS_DIR"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings(_env_file=None)
    assert settings.port == 3000
    assert settings.admin_password == "password123"
    assert settings.credentials_file == "config.json"
    assert settings.log_level == "INFO"
    assert settings.FILES_PATH == Path("files")
    assert settings.TICKETS_PATH == Path("tickets")


def test_settings_environment_override(monkeypatch):
    """PORT and ADMIN_PASSWORD come from the environment"""
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ADMIN_PASSWORD", "from-env")

    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.admin_password == "from-env"


def test_frontend_entry_path():
    settings = Settings(_env_file=None, static_dir="public", frontend_entry="index.html")
    assert settings.FRONTEND_ENTRY_PATH == Path("public") / "index.html"


def test_notify_send_timeout(monkeypatch):
    monkeypatch.delenv("NOTIFY_SEND_TIMEOUT", raising=False)
    assert Settings(_env_file=None).notify_send_timeout == 5.0

    monkeypatch.setenv("NOTIFY_SEND_TIMEOUT", "0.5")
    assert Settings(_env_file=None).notify_send_timeout == 0.5
