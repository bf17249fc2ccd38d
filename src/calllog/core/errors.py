"""
Structured error types for calllog.

calllog never defines errors for the calls it observes: whatever an
intercepted method raises reaches the caller untouched. The types here cover
misuse of the library itself (registering something that is not a class,
instrumenting something that is not callable, invalid configuration).

Manifesto:
    - **Single base class:** All calllog errors inherit from CallLogError
    - **Rich context:** Errors carry metadata for logging
    - **Error chaining:** Preserve original exceptions as cause

Architecture:
    ::

        ┌──────────────────────────────────────────────────────┐
        │                    CallLogError                       │
        │            (category, context, cause)                 │
        ├──────────────────────────────────────────────────────┤
        │  RegistrationError   InstrumentationError  ConfigError│
        │  (REGISTRATION)      (INSTRUMENTATION)     (CONFIG)   │
        └──────────────────────────────────────────────────────┘

Examples:
    >>> error = RegistrationError("not a class", context={"value": "42"})
    >>> error.category
    <ErrorCategory.REGISTRATION: 'REGISTRATION'>
    >>> error.to_dict()["context"]
    {'value': '42'}

Tags:
    error-handling, exception-hierarchy, calllog

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categories for calllog's own errors."""

    REGISTRATION = "REGISTRATION"  # Bad category registration
    INSTRUMENTATION = "INSTRUMENTATION"  # Object cannot be wrapped
    CONFIG = "CONFIG"  # Invalid settings
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


class CallLogError(Exception):
    """
    Base exception for all calllog errors.

    Subclasses set ``default_category``; ``context`` holds free-form
    metadata that ends up in ``to_dict()`` for structured logging.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CallLogError:
        """
        Add context to this error (fluent API).

        Usage:
            raise RegistrationError("Unknown category").with_context(value="x")
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class RegistrationError(CallLogError):
    """A type could not be registered in a category."""

    default_category = ErrorCategory.REGISTRATION


class InstrumentationError(CallLogError):
    """An object could not be wrapped with the logging envelope."""

    default_category = ErrorCategory.INSTRUMENTATION


class ConfigError(CallLogError):
    """Invalid logging configuration."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, key: str, value: Any, message: str | None = None):
        super().__init__(
            message or f"Invalid value for {key}: {value!r}",
            context={"key": key, "value": repr(value)},
        )
        self.key = key
        self.value = value


__all__ = [
    "ErrorCategory",
    "CallLogError",
    "RegistrationError",
    "InstrumentationError",
    "ConfigError",
]
