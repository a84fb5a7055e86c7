"""
Configuration management for PocketLedger.
Uses pydantic-settings for type-safe, centralized configuration.
"""

import logging
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses pydantic-settings for validation and type safety.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'  # Allow extra fields in .env for flexibility
    )

    # Database
    database_url: str = "sqlite:///pocket_ledger.db"
    db_echo: bool = False

    # Logging
    log_level: str = "INFO"

    # Display defaults for users without saved preferences
    default_currency: str = "USD"
    default_theme: str = "light"  # "light" or "dark"

    # Authentication
    min_password_length: int = 6

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for an entry point (the Streamlit app)."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
