"""
Test support utilities for calllog tests.

This module provides an in-memory sink and a fake clock so tests can assert
on exact call records without touching structlog output.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Record:
    """One record written to a RecordingSink."""

    logger: str
    severity: str
    message: str
    error: BaseException | None = None


class RecordingLogger:
    def __init__(self, name: str, sink: RecordingSink):
        self.name = name
        self._sink = sink

    def info(self, message: str) -> None:
        self._sink.append(Record(self.name, "info", message))

    def warning(self, message: str, error: BaseException) -> None:
        self._sink.append(Record(self.name, "warning", message, error))

    def error(self, message: str, error: BaseException) -> None:
        self._sink.append(Record(self.name, "error", message, error))


@dataclass
class RecordingSink:
    """Sink keeping every record in memory, in write order."""

    records: list[Record] = field(default_factory=list)
    resolved: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_logger(self, name: str) -> RecordingLogger:
        with self._lock:
            self.resolved.append(name)
        return RecordingLogger(name, self)

    def append(self, record: Record) -> None:
        with self._lock:
            self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [r.message for r in self.records]

    def starting(self, prefix: str) -> list[Record]:
        return [r for r in self.records if r.message.startswith(prefix)]


class FakeClock:
    """MonotonicClock reporting a fixed elapsed time."""

    def __init__(self, elapsed_ms: int = 5):
        self.elapsed_ms = elapsed_ms
        self.starts = 0

    def start(self) -> int:
        self.starts += 1
        return 0

    def elapsed_millis(self, start: int) -> int:
        return self.elapsed_ms


class FailingSink:
    """Sink whose loggers raise on every write."""

    def __init__(self, error: Exception):
        self.exc = error

    def get_logger(self, name: str) -> FailingSink:
        return self

    def info(self, message: str) -> None:
        raise self.exc

    def warning(self, message: str, error: BaseException) -> None:
        raise self.exc

    def error(self, message: str, error: BaseException) -> None:
        raise self.exc
