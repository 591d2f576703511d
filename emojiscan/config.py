# emojiscan/config.py
from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    # --- Unicode data ---
    # Empty means "use the files bundled with the package".
    EMOJI_DATA_PATH: Optional[str] = Field(
        default=None, description="Override for the emoji property ranges file"
    )
    EMOJI_TEST_PATH: Optional[str] = Field(
        default=None, description="Override for the emoji-test.txt table file"
    )

    # --- Metrics ---
    METRICS_ENABLED: bool = Field(default=True)

    # --- Logging ---
    LOG_JSON: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="EMOJISCAN_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("EMOJI_DATA_PATH", "EMOJI_TEST_PATH", mode="before")
    @classmethod
    def _blank_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {value!r}")
        return level


def get_settings() -> Settings:
    return Settings()
