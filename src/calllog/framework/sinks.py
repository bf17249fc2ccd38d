"""Sink delegate: where rendered call records are written.

The interceptor only knows the :class:`Sink` protocol. It asks for one logger
per concrete target class, named by the class's fully qualified name, and
memoizes it in a :class:`LoggerCache`. The default :class:`StructlogSink`
hands records to structlog, configured by
:func:`calllog.core.logging.configure_logging`.

Usage::

    from calllog.framework.sinks import LoggerCache, StructlogSink

    cache = LoggerCache(StructlogSink())
    cache.logger_for(OrderService).info("Started place [order_id=42]")
"""

from __future__ import annotations

import threading
from typing import Any, Protocol, runtime_checkable

import structlog


@runtime_checkable
class SinkLogger(Protocol):
    """Logger handle for one destination."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str, error: BaseException) -> None: ...

    def error(self, message: str, error: BaseException) -> None: ...


@runtime_checkable
class Sink(Protocol):
    """Resolves a logger handle from a fully qualified type name."""

    def get_logger(self, name: str) -> SinkLogger: ...


class StructlogLogger:
    """:class:`SinkLogger` writing through a structlog logger."""

    __slots__ = ("name", "_log")

    def __init__(self, name: str, log: Any | None = None):
        self.name = name
        self._log = log if log is not None else structlog.get_logger(name)

    def info(self, message: str) -> None:
        self._log.info(message)

    def warning(self, message: str, error: BaseException) -> None:
        self._log.warning(message, exc_info=error)

    def error(self, message: str, error: BaseException) -> None:
        self._log.error(message, exc_info=error)

    def __repr__(self) -> str:
        return f"StructlogLogger({self.name!r})"


class StructlogSink:
    """Default sink: one structlog logger per type name."""

    def get_logger(self, name: str) -> SinkLogger:
        return StructlogLogger(name)


def type_name(cls: type) -> str:
    """Fully qualified name used as the logger name for ``cls``."""
    return f"{cls.__module__}.{cls.__qualname__}"


class LoggerCache:
    """Memo from type identity to logger handle, safe under concurrent first use."""

    def __init__(self, sink: Sink):
        self.sink = sink
        self._loggers: dict[type, SinkLogger] = {}
        self._lock = threading.Lock()

    def logger_for(self, cls: type) -> SinkLogger:
        found = self._loggers.get(cls)
        if found is not None:
            return found
        with self._lock:
            if cls not in self._loggers:
                self._loggers[cls] = self.sink.get_logger(type_name(cls))
            return self._loggers[cls]

    def clear(self) -> None:
        with self._lock:
            self._loggers.clear()

    def __len__(self) -> int:
        return len(self._loggers)


__all__ = [
    "SinkLogger",
    "Sink",
    "StructlogLogger",
    "StructlogSink",
    "LoggerCache",
    "type_name",
]
