# src/fxsync/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables or a local .env file.

Files that USE this module:
- fxsync.app (builds the service graph from settings)
- fxsync.adapters.providers.* (base URLs and HTTP timeout)
- fxsync.application.sync_service (minimum loading duration, language)

Files that this module USES:
- fxsync.domain.models (ProviderSelection for the default provider)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from fxsync.domain.models import ProviderSelection  # Valid provider preference values

SUPPORTED_LANGUAGES = ("en", "de")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Storage ---
    data_dir: Path = Field(default=Path("./data"), alias="FXSYNC_DATA_DIR")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Providers ---
    default_provider: int = Field(default=0, alias="DEFAULT_PROVIDER")
    exchangerate_host_url: str = Field(
        default="https://api.exchangerate.host", alias="EXCHANGERATE_HOST_URL"
    )
    exchangerate_host_key: str = Field(default="", alias="EXCHANGERATE_HOST_KEY")
    frankfurter_url: str = Field(default="https://api.frankfurter.app", alias="FRANKFURTER_URL")
    fer_ee_url: str = Field(default="https://api.fer.ee", alias="FER_EE_URL")

    # --- Sync behaviour ---
    min_loading_seconds: float = Field(default=0.5, alias="MIN_LOADING_SECONDS", ge=0.0)
    timeline_days: int = Field(default=365, alias="TIMELINE_DAYS", ge=1, le=3650)

    # --- Messages ---
    language: str = Field(default="en", alias="FXSYNC_LANGUAGE")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def default_provider_selection(self) -> ProviderSelection:
        return ProviderSelection(self.default_provider)

    @field_validator("default_provider")
    @classmethod
    def validate_default_provider(cls, v: int) -> int:
        """Only known provider values may be configured."""
        if v not in {p.value for p in ProviderSelection}:
            raise ValueError(f"DEFAULT_PROVIDER must be one of {[p.value for p in ProviderSelection]}")
        return v

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate language code."""
        v = v.lower()
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError("FXSYNC_LANGUAGE must be 'en' or 'de'")
        return v

    @field_validator("exchangerate_host_url", "frankfurter_url", "fer_ee_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


# Global settings instance (entry point only; library classes take Settings explicitly)
settings = Settings()
