"""
Timing for the call envelope.

Design:
- A clock hands out an opaque start mark and turns it into whole elapsed
  milliseconds later on
- The default clock is ``time.perf_counter_ns`` (monotonic, ~1μs overhead)
- Tests substitute a fake clock through the ``MonotonicClock`` protocol
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

NANOS_PER_MILLI = 1_000_000


@runtime_checkable
class MonotonicClock(Protocol):
    """Source of start marks and elapsed milliseconds."""

    def start(self) -> int: ...

    def elapsed_millis(self, start: int) -> int: ...


class PerfCounterClock:
    """Monotonic clock backed by ``time.perf_counter_ns``."""

    __slots__ = ()

    def start(self) -> int:
        return time.perf_counter_ns()

    def elapsed_millis(self, start: int) -> int:
        return max(0, time.perf_counter_ns() - start) // NANOS_PER_MILLI


@dataclass
class TimingSample:
    """Start mark and elapsed time of one intercepted call."""

    step: str
    clock: MonotonicClock = field(default_factory=PerfCounterClock, repr=False)
    started_at: int = field(init=False)
    elapsed_ms: int | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.started_at = self.clock.start()

    def stop(self) -> TimingSample:
        """Record elapsed time; later calls keep the first value."""
        if self.elapsed_ms is None:
            self.elapsed_ms = self.clock.elapsed_millis(self.started_at)
        return self

    @property
    def stopped(self) -> bool:
        return self.elapsed_ms is not None


__all__ = ["MonotonicClock", "PerfCounterClock", "TimingSample"]
