"""Application settings for dayspan."""

import os
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dayspan.runtime_config import LOG_LEVELS, RuntimeConfig

ENV_PREFIX = "DAYSPAN_"


class Settings(BaseSettings):
    """Effective CLI settings: process env over runtime TOML over defaults."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_zone: str = ""
    output_format: Literal["iso", "epoch-ms", "json"] = "iso"
    log_level: str = "WARNING"

    @field_validator("default_zone")
    @classmethod
    def _strip_zone(cls, value: str) -> str:
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_runtime(cls, runtime: RuntimeConfig, **kwargs: Any) -> "Settings":
        """Construct settings from runtime config; explicit env vars still win."""
        runtime_values: dict[str, Any] = {
            "default_zone": runtime.default_zone,
            "output_format": runtime.output_format,
            "log_level": runtime.log_level,
        }
        values = {
            name: value
            for name, value in runtime_values.items()
            if not os.environ.get(f"{ENV_PREFIX}{name.upper()}", "").strip()
        }
        return cls(**values, **kwargs)
