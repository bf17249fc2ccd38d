"""Category markers for application classes.

Decorating a class registers it in a category and wraps its public methods
so their calls are logged::

    from calllog import controller, service

    @service
    class OrderService:
        def place(self, order_id, quantity):
            ...

    @controller
    class OrderController:
        def __init__(self, orders: OrderService):
            self.orders = orders

        def post(self, order_id):
            return self.orders.place(order_id, 1)

Stacking markers (``@service`` over ``@component``) adds both categories but
wraps each method once. Objects built elsewhere can be watched through a
proxy with :func:`watch`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from calllog.framework.categories import Category, get_registry
from calllog.framework.interceptor import CallInterceptor, LoggingProxy, instrument_class

C = TypeVar("C", bound=type)


def stereotype(*categories: Category) -> Callable[[C], C]:
    """Class decorator registering the class in ``categories`` and instrumenting it."""

    def decorator(cls: C) -> C:
        get_registry().register(cls, *categories)
        return instrument_class(cls)  # type: ignore[return-value]

    return decorator


def controller(cls: C) -> C:
    """Mark a web-facing controller."""
    return stereotype(Category.CONTROLLER)(cls)


def service(cls: C) -> C:
    """Mark a service object."""
    return stereotype(Category.SERVICE)(cls)


def component(cls: C) -> C:
    """Mark a general component."""
    return stereotype(Category.COMPONENT)(cls)


def configuration(cls: C) -> C:
    """Mark a configuration holder."""
    return stereotype(Category.CONFIGURATION)(cls)


def watch(
    obj: Any,
    *categories: Category,
    interceptor: CallInterceptor | None = None,
) -> LoggingProxy:
    """Register ``type(obj)`` and return a logging proxy around ``obj``.

    Without ``categories`` the object is treated as a component.
    """
    registry = interceptor.registry if interceptor is not None else get_registry()
    registry.register(type(obj), *(categories or (Category.COMPONENT,)))
    return LoggingProxy(obj, interceptor)


__all__ = [
    "stereotype",
    "controller",
    "service",
    "component",
    "configuration",
    "watch",
]
