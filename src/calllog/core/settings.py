"""Environment-driven settings for calllog's logging output.

``CallLogSettings`` reads ``CALLLOG_*`` environment variables (and a ``.env``
file when present) so a host application can switch between console and JSON
call records without code changes.

Examples:
    >>> from calllog.core.settings import CallLogSettings, configure_from_settings
    >>> settings = CallLogSettings(log_level="DEBUG", log_format="json")
    >>> configure_from_settings(settings)

Environment:
    CALLLOG_LOG_LEVEL   DEBUG | INFO | WARNING | ERROR (default: INFO)
    CALLLOG_LOG_FORMAT  json | console | auto (default: auto)
    CALLLOG_SERVICE     service name attached to every record
"""

from __future__ import annotations

from typing import IO, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from calllog.core.logging import LEVELS, configure_logging


class CallLogSettings(BaseSettings):
    """Logging settings shared by every service that installs calllog.

    Fields
    ──────
    log_level    : Minimum level written by the sink
    log_format   : json, console, or auto (JSON when not a tty)
    service      : Service name attached to every record
    """

    model_config = SettingsConfigDict(
        env_prefix="CALLLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: Literal["json", "console", "auto"] = "auto"
    service: str = Field(default="calllog", min_length=1)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LEVELS)}")
        return level

    @property
    def json_format(self) -> bool | None:
        if self.log_format == "auto":
            return None
        return self.log_format == "json"


def configure_from_settings(
    settings: CallLogSettings | None = None,
    stream: IO[str] | None = None,
) -> CallLogSettings:
    """Apply settings through ``configure_logging`` and return them."""
    settings = settings or CallLogSettings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_format,
        service=settings.service,
        stream=stream,
    )
    return settings


__all__ = ["CallLogSettings", "configure_from_settings"]
