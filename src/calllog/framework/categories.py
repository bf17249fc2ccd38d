"""Category registry deciding which classes get call logging.

A class is watched when it is registered under at least one of the four
categories. Registration is explicit (the stereotype decorators in
:mod:`calllog.framework.stereotypes` call :func:`register`), so matching is a
dictionary lookup rather than introspection.

Tags:
    calllog, framework, registry, categories

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from enum import Enum

from calllog.core.errors import RegistrationError
from calllog.core.logging import get_logger

logger = get_logger(__name__)


class Category(str, Enum):
    """Layers whose calls are logged."""

    CONTROLLER = "controller"
    SERVICE = "service"
    COMPONENT = "component"
    CONFIGURATION = "configuration"


class CategoryRegistry:
    """Registration table from class to the categories it belongs to."""

    def __init__(self) -> None:
        self._members: dict[type, frozenset[Category]] = {}
        self._lock = threading.Lock()

    def register(self, cls: type, *categories: Category) -> frozenset[Category]:
        """Add ``cls`` to each of ``categories`` and return its full membership."""
        if not isinstance(cls, type):
            raise RegistrationError(
                f"Only classes can be registered, got {type(cls).__name__}",
                context={"value": repr(cls)},
            )
        if not categories:
            raise RegistrationError(f"No category given for {cls.__qualname__}")
        for category in categories:
            if not isinstance(category, Category):
                raise RegistrationError(
                    f"Unknown category {category!r} for {cls.__qualname__}",
                    context={"value": repr(category)},
                )

        with self._lock:
            members = self._members.get(cls, frozenset()) | frozenset(categories)
            self._members[cls] = members

        logger.debug(
            "category_registered",
            cls=f"{cls.__module__}.{cls.__qualname__}",
            categories=sorted(c.value for c in members),
        )
        return members

    def categories_of(self, cls: type) -> frozenset[Category]:
        return self._members.get(cls, frozenset())

    def is_watched(self, cls: type) -> bool:
        """True if ``cls`` belongs to any category."""
        members = self.categories_of(cls)
        return any(category in members for category in Category)

    def clear(self) -> None:
        """Clear registry (for testing)."""
        with self._lock:
            self._members.clear()

    def __contains__(self, cls: object) -> bool:
        return isinstance(cls, type) and self.is_watched(cls)

    def __len__(self) -> int:
        return len(self._members)


# Global category registry
_registry = CategoryRegistry()


def get_registry() -> CategoryRegistry:
    return _registry


def register(cls: type, *categories: Category) -> frozenset[Category]:
    return _registry.register(cls, *categories)


def categories_of(cls: type) -> frozenset[Category]:
    return _registry.categories_of(cls)


def is_watched(cls: type) -> bool:
    return _registry.is_watched(cls)


def clear_registry() -> None:
    """Clear the global registry (for testing)."""
    _registry.clear()


__all__ = [
    "Category",
    "CategoryRegistry",
    "get_registry",
    "register",
    "categories_of",
    "is_watched",
    "clear_registry",
]
