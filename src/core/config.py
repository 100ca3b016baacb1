"""Hook configuration.

Why pydantic-settings:
- The sidecar is configured through environment variables on its container;
  validation happens at the edge, before the core runs.
- The password annotation key is a contract with the platform and is
  intentionally not part of the settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.vnc import MissingGraphicsPolicy


class HookSettings(BaseSettings):
    """Runtime settings of the hook sidecar."""

    model_config = SettingsConfigDict(
        env_prefix="VNC_PASSWD_HOOK_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional file that receives a copy of the log.",
    )
    missing_graphics: MissingGraphicsPolicy = Field(
        default=MissingGraphicsPolicy.FAIL,
        description="Behaviour when the domain has no graphics device (fail/skip).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: object) -> str:
        name = str(value).strip().upper()
        if name not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value!r}")
        return name
