"""Severity classification for failure records.

Every failure is currently critical and logged at error level. Which
exceptions count as non-critical (logged at warning level) is decided in one
place, :meth:`SeverityClassifier.is_non_critical`, so a policy can be added
by subclassing or by passing exception types to the constructor without
touching the interceptor.
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Level a record is written at."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Criticality(str, Enum):
    NON_CRITICAL = "non_critical"
    CRITICAL = "critical"


class SeverityClassifier:
    """Decides whether a raised error is critical.

    Args:
        non_critical: Exception types logged at warning level. Empty by
            default, so every error is critical.
    """

    def __init__(self, non_critical: tuple[type[BaseException], ...] = ()):
        self.non_critical = tuple(non_critical)

    def is_non_critical(self, error: BaseException) -> bool:
        return isinstance(error, self.non_critical) if self.non_critical else False

    def classify(self, error: BaseException) -> Criticality:
        if self.is_non_critical(error):
            return Criticality.NON_CRITICAL
        return Criticality.CRITICAL

    def severity_for(self, error: BaseException) -> Severity:
        if self.classify(error) is Criticality.NON_CRITICAL:
            return Severity.WARNING
        return Severity.ERROR


__all__ = ["Severity", "Criticality", "SeverityClassifier"]
