from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GMS_API_BASE_DEFAULT = "https://www.gmodstore.com/api/v3"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _validate_base_url(name: str, value: str) -> None:
    if not value:
        raise RuntimeError(f"{name} is not set in environment (.env).")
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        raise RuntimeError(f"{name} must start with http:// or https://")
    if not parsed.netloc:
        raise RuntimeError(f"{name} must include a host (and optional port).")


def _require(name: str, value: str) -> None:
    if not value:
        raise RuntimeError(f"{name} is not set in environment (.env).")


class Settings(BaseSettings):
    """
    Bot settings.

    Rules:
    - Immutable once loaded (the HTTP clients are built from it once)
    - Missing secrets do not break imports; validate_startup() fails fast
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    # Core / logging
    env: str = Field(default="production", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Discord
    discord_token: str = Field(default="", alias="DISCORD_TOKEN")
    # If set, slash commands are synced to this guild only (fast iteration).
    # Raw string; parsed by discord_guild_id and checked in validate_startup().
    discord_guild_id_raw: str = Field(default="", alias="DISCORD_GUILD_ID")

    # Link service
    api_endpoint: str = Field(default="", alias="API_ENDPOINT")
    api_token: str = Field(default="", alias="API_TOKEN")

    # GmodStore
    gms_pat: str = Field(default="", alias="GMS_PAT")
    gms_api_base: str = Field(default=GMS_API_BASE_DEFAULT, alias="GMS_API_BASE")

    # Error tracking (optional)
    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")

    # -------------------------
    # Normalizers
    # -------------------------

    @field_validator("log_level", mode="before")
    @classmethod
    def _norm_log_level(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip().upper()
        return s or "INFO"

    @field_validator("discord_token", "discord_guild_id_raw", "api_token", "gms_pat", "sentry_dsn", "api_endpoint", mode="before")
    @classmethod
    def _norm_str(cls, v: Any) -> str:
        # API_ENDPOINT keeps its trailing slash so validate_startup() can reject it.
        return ("" if v is None else str(v)).strip()

    @field_validator("gms_api_base", mode="before")
    @classmethod
    def _norm_gms_api_base(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip().rstrip("/")
        return s or GMS_API_BASE_DEFAULT

    # -------------------------
    # Derived helpers
    # -------------------------

    @property
    def discord_guild_id(self) -> Optional[int]:
        """Guild id for command sync, or None for global sync."""
        if not self.discord_guild_id_raw:
            return None
        try:
            return int(self.discord_guild_id_raw)
        except ValueError:
            raise RuntimeError(
                f"DISCORD_GUILD_ID must be an integer, got {self.discord_guild_id_raw!r}."
            ) from None

    @property
    def sentry_enabled(self) -> bool:
        return bool(self.sentry_dsn)

    def validate_startup(self) -> None:
        """
        Strict validation for boot safety. Raises RuntimeError naming the bad key.
        """
        _require("DISCORD_TOKEN", self.discord_token)
        _require("API_TOKEN", self.api_token)
        _require("GMS_PAT", self.gms_pat)

        _validate_base_url("API_ENDPOINT", self.api_endpoint)
        if self.api_endpoint.endswith("/"):
            raise RuntimeError("API_ENDPOINT ends with a slash ('/'); remove it.")
        _validate_base_url("GMS_API_BASE", self.gms_api_base)

        if self.log_level not in _LOG_LEVELS:
            raise RuntimeError(f"LOG_LEVEL must be one of: {', '.join(sorted(_LOG_LEVELS))}")

        # Discord snowflakes are positive; None means global sync.
        guild_id = self.discord_guild_id
        if guild_id is not None and guild_id <= 0:
            raise RuntimeError("DISCORD_GUILD_ID must be a positive integer.")


settings = Settings()

__all__ = ["GMS_API_BASE_DEFAULT", "Settings", "settings"]
