"""
Support Portal - Configuration Management
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pathlib import Path


class Settings(BaseSettings):
    """Application settings"""

    # FastAPI
    fastapi_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    app_version: str = "1.0.0"

    # Storage
    files_dir: str = "files"
    tickets_dir: str = "tickets"

    # Authentication
    credentials_file: str = "config.json"
    admin_password: str = "password123"  # Fallback when credentials_file is unusable

    # Front-end
    static_dir: str = "static"
    frontend_entry: str = "dashboard.html"
    login_redirect: str = "/dashboard.html"

    # Live chat
    notify_send_timeout: float = 5.0  # Seconds per subscriber send before it is dropped

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def FILES_PATH(self) -> Path:
        """Root directory of the file manager"""
        return Path(self.files_dir)

    @property
    def TICKETS_PATH(self) -> Path:
        """Directory holding one JSON record per ticket"""
        return Path(self.tickets_dir)

    @property
    def FRONTEND_ENTRY_PATH(self) -> Path:
        """Front-end entry document served for unmatched GET routes"""
        return Path(self.static_dir) / self.frontend_entry


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
