"""calllog core: errors, logging configuration and settings."""

from calllog.core.errors import (
    CallLogError,
    ConfigError,
    ErrorCategory,
    InstrumentationError,
    RegistrationError,
)
from calllog.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from calllog.core.settings import CallLogSettings, configure_from_settings

__all__ = [
    # Errors
    "CallLogError",
    "ConfigError",
    "ErrorCategory",
    "InstrumentationError",
    "RegistrationError",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
    # Settings
    "CallLogSettings",
    "configure_from_settings",
]
