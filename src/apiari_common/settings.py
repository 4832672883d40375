"""Configuration via environment variables and .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="APIARI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # State files
    state_tmp_suffix: str = ".tmp"

    # CLI
    poll_interval: float = 0.5  # seconds between polls in `tail`
    log_level: str = "WARNING"


settings = CommonSettings()
