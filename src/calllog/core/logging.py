"""
calllog logging - structlog configuration for call records.

Call records are plain strings (``Started ...``, ``Finished ...``,
``Failed ...``) handed to a logger named after the concrete class of the
call's target. This module wires those loggers to structlog so the same
records come out as colored console lines in development or as JSON
documents for log aggregation.

Architecture:
    ::

        ┌────────────────────────────────────────────────────────────┐
        │ configure_logging(level="INFO", json_format=True,          │
        │                   service="orders-api")                    │
        │     ↓                                                       │
        │ structlog configured with processor chain:                  │
        │   1. merge_contextvars                                      │
        │   2. filter_by_level                                        │
        │   3. add_log_level / add_logger_name                        │
        │   4. TimeStamper                                            │
        │   5. add_service_metadata                                   │
        │   6. format_exc_info                                        │
        │   7. JSONRenderer (or ConsoleRenderer for dev)              │
        └────────────────────────────────────────────────────────────┘

        {"@timestamp": "2026-10-18T10:00:00Z", "log.level": "info",
         "logger": "shop.orders.OrderService", "service.name": "orders-api",
         "event": "Started place [order_id=42]"}

Examples:
    >>> from calllog.core.logging import configure_logging, get_logger
    >>> configure_logging(level="INFO", json_format=True, service="orders-api")
    >>> logger = get_logger(__name__)
    >>> logger.info("event_happened", key="value")

Tags:
    logging, structlog, observability, calllog

Doc-Types:
    - API Reference
    - Observability Guide
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from calllog.core.errors import ConfigError

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Store service name for metadata
_SERVICE_NAME = "calllog"
_configured = False


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")

    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")

    return event_dict


def resolve_level(level: str) -> int:
    """Translate a level name into its stdlib number, rejecting unknown names."""
    name = level.upper()
    if name not in LEVELS:
        raise ConfigError("log_level", level, f"Unknown log level {level!r}; expected one of {', '.join(LEVELS)}")
    return getattr(logging, name)


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "calllog",
    add_timestamp: bool = True,
    stream: IO[str] | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
        stream: Output stream (default: stderr)

    Example:
        # Production (JSON for log aggregation)
        configure_logging(level="INFO", json_format=True, service="orders-api")

        # Development (auto-detect: colored console if tty)
        configure_logging(level="DEBUG", service="orders-api")
    """
    global _SERVICE_NAME, _configured
    level_num = resolve_level(level)
    _SERVICE_NAME = service
    output = stream or sys.stderr

    if json_format is None:
        json_format = not output.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if json_format:
        shared_processors.append(structlog.processors.format_exc_info)
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=output.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # LoggerCache already memoizes one logger per type
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level_num,
        force=True,
    )

    _configured = True


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog BoundLogger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent call records.

    Example:
        bind_context(request_id="abc123")
        service.place(order)  # Started/Finished records carry request_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(request_id="abc123"):
            controller.get_order(42)
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())

    async def __aenter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    async def __aexit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "LEVELS",
    "configure_logging",
    "is_configured",
    "resolve_level",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
