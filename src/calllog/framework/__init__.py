"""
calllog framework - the call logging envelope.

This module provides:
- Category registry deciding which classes are watched
- The call interceptor writing Started/Finished/Failed records
- Severity classification of failures
- Sink and logger cache abstractions
- Class decorators and proxies installing the interceptor

Usage:
    from calllog.framework import service

    @service
    class OrderService:
        def place(self, order_id):
            ...
"""

from calllog.framework.categories import (
    Category,
    CategoryRegistry,
    categories_of,
    clear_registry,
    get_registry,
    is_watched,
    register,
)
from calllog.framework.formatting import format_entry, format_exit, format_failure, render_arguments
from calllog.framework.interceptor import (
    CallContext,
    CallInterceptor,
    LoggingProxy,
    PendingCall,
    get_default_interceptor,
    instrument,
    instrument_class,
    is_instrumented,
    set_default_interceptor,
    unwrap,
)
from calllog.framework.severity import Criticality, Severity, SeverityClassifier
from calllog.framework.sinks import LoggerCache, Sink, SinkLogger, StructlogLogger, StructlogSink
from calllog.framework.stereotypes import component, configuration, controller, service, stereotype, watch
from calllog.framework.timing import MonotonicClock, PerfCounterClock, TimingSample

__all__ = [
    # Categories
    "Category",
    "CategoryRegistry",
    "categories_of",
    "clear_registry",
    "get_registry",
    "is_watched",
    "register",
    # Formatting
    "render_arguments",
    "format_entry",
    "format_exit",
    "format_failure",
    # Interception
    "CallContext",
    "PendingCall",
    "CallInterceptor",
    "get_default_interceptor",
    "set_default_interceptor",
    "instrument",
    "instrument_class",
    "is_instrumented",
    "LoggingProxy",
    "unwrap",
    # Severity
    "Severity",
    "Criticality",
    "SeverityClassifier",
    # Sinks
    "Sink",
    "SinkLogger",
    "StructlogSink",
    "StructlogLogger",
    "LoggerCache",
    # Stereotypes
    "stereotype",
    "controller",
    "service",
    "component",
    "configuration",
    "watch",
    # Timing
    "MonotonicClock",
    "PerfCounterClock",
    "TimingSample",
]
