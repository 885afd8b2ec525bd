"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger.core.normalize import normalize_currency


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".honeybear"


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Resolved once at process start and handed to the store-opening
    functions; services never read it on their own.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEDGER_",
    )

    app_name: str = "Honeybear Ledger"
    app_version: str = "0.1.0"

    # Data directory (the ledger database lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Currency balances are reported in when the caller does not ask for one
    target_currency: str = "USD"

    # Timezone used to date opening-balance entries
    timezone: str = "UTC"

    # Market data settings
    rate_cache_ttl_seconds: int = 60
    rate_fetch_timeout_seconds: float = 10.0
    rate_fetch_max_workers: int = 8

    @field_validator("target_currency")
    @classmethod
    def normalize_target_currency(cls, value: str) -> str:
        """Upper-case the code; blank falls back to USD."""
        return normalize_currency(value) or "USD"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "ledger.db"
        return f"sqlite:///{db_path}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process settings; only entry points should call this."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the process settings (used by the in-process context)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
