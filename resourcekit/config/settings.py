"""resourcekit configuration via environment / .env file."""

from __future__ import annotations

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INSTALL_ROOT = "/opt/resource"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Entry points ---
    RESOURCEKIT_INSTALL_ROOT: str = DEFAULT_INSTALL_ROOT

    # --- Logging (stderr only, stdout carries the response) ---
    RESOURCEKIT_LOG_LEVEL: str = "WARNING"

    @field_validator("RESOURCEKIT_INSTALL_ROOT", mode="after")
    @classmethod
    def _normalize_root(cls, v: str) -> str:
        if not v:
            raise ValueError("install root cannot be empty")
        return os.path.abspath(v)

    @field_validator("RESOURCEKIT_LOG_LEVEL", mode="before")
    @classmethod
    def _check_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return level


settings = Settings()
