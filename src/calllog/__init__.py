"""
calllog - method-level call logging for application layers.

Classes marked as controllers, services, components or configuration
holders get a Started/Finished/Failed record with timing for every public
method call, written through structlog.

    from calllog import configure_logging, service

    configure_logging(level="INFO")

    @service
    class OrderService:
        def place(self, order_id, quantity):
            return f"order-{order_id}"

    OrderService().place(42, 3)
    # Started place [order_id=42,quantity=3]
    # Finished place [order_id=42,quantity=3] returned [order-42] in 0 ms
"""

__version__ = "0.1.0"

from calllog.core import (  # noqa: E402
    CallLogError,
    CallLogSettings,
    InstrumentationError,
    LogContext,
    RegistrationError,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)
from calllog.framework import (  # noqa: E402
    CallInterceptor,
    Category,
    LoggingProxy,
    PendingCall,
    SeverityClassifier,
    component,
    configuration,
    controller,
    get_default_interceptor,
    is_watched,
    service,
    set_default_interceptor,
    watch,
)

__all__ = [
    "__version__",
    "CallLogError",
    "RegistrationError",
    "InstrumentationError",
    "CallLogSettings",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "LogContext",
    "Category",
    "CallInterceptor",
    "PendingCall",
    "LoggingProxy",
    "SeverityClassifier",
    "get_default_interceptor",
    "set_default_interceptor",
    "is_watched",
    "controller",
    "service",
    "component",
    "configuration",
    "watch",
]
