"""Runtime settings read from TODOKIT_* environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


class Settings(BaseModel):
    """Service configuration."""

    database_url: str = "sqlite+aiosqlite:///./todos.db"
    debug: bool = False
    seed: bool = True
    log_level: str = "INFO"
    log_format: str = "console"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    host: str = "127.0.0.1"
    port: int = 3001

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, value: str) -> str:
        """Only console and json output are supported."""
        value = value.lower()
        if value not in {"console", "json"}:
            raise ValueError(f"log_format must be 'console' or 'json', got {value!r}")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build settings from TODOKIT_* variables, keeping defaults for unset ones."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if "TODOKIT_DATABASE_URL" in env:
            values["database_url"] = env["TODOKIT_DATABASE_URL"]
        if "TODOKIT_DEBUG" in env:
            values["debug"] = _as_bool(env["TODOKIT_DEBUG"])
        if "TODOKIT_SEED" in env:
            values["seed"] = _as_bool(env["TODOKIT_SEED"])
        if "TODOKIT_LOG_LEVEL" in env:
            values["log_level"] = env["TODOKIT_LOG_LEVEL"].upper()
        if "TODOKIT_LOG_FORMAT" in env:
            values["log_format"] = env["TODOKIT_LOG_FORMAT"]
        if "TODOKIT_CORS_ORIGINS" in env:
            values["cors_origins"] = [o.strip() for o in env["TODOKIT_CORS_ORIGINS"].split(",") if o.strip()]
        if "TODOKIT_HOST" in env:
            values["host"] = env["TODOKIT_HOST"]
        if "TODOKIT_PORT" in env:
            values["port"] = int(env["TODOKIT_PORT"])

        return cls.model_validate(values)
