"""
Call interceptor: the before/after envelope around watched calls.

For a call whose declaring class is registered in a category the
interceptor writes, to the logger of the target's concrete class:

- ``Started <name> [<args>]`` at INFO before the call
- ``Finished <name> [<args>] returned [<value>] in <ms> ms`` at INFO after it
- ``Failed <name> [<args>] thrown [<Type> with message <msg>`` at ERROR
  (WARNING for non-critical errors) if it raises, then re-raises the
  original error untouched

Calls on unregistered classes go straight through: no records, no timing.

Design:
- One scoped try block per call, so exactly one terminal record is written
- Return values and errors are passed through by identity
- Per-call state (CallContext, TimingSample) lives on the caller's stack;
  the only shared state is the LoggerCache
- Async functions get the same envelope around the awaited result,
  generator functions around their iteration

Usage:
    # Wrap one function
    OrderService.place = instrument(OrderService.place, OrderService)

    # Or every public method of a class
    instrument_class(OrderService)

    # Or wrap an existing object
    service = LoggingProxy(OrderService())
"""

from __future__ import annotations

import functools
import inspect
import threading
import types
from collections.abc import Callable, Generator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from calllog.core.errors import InstrumentationError
from calllog.core.logging import get_logger
from calllog.framework.categories import CategoryRegistry, get_registry
from calllog.framework.formatting import format_entry, format_exit, format_failure, render_arguments
from calllog.framework.severity import Severity, SeverityClassifier
from calllog.framework.sinks import LoggerCache, Sink, StructlogSink
from calllog.framework.timing import MonotonicClock, PerfCounterClock, TimingSample

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger(__name__)

# Set on every wrapper so a function is never wrapped twice
INSTRUMENTED = "__calllog_instrumented__"


@dataclass(frozen=True)
class CallContext:
    """Identifies one intercepted call."""

    name: str
    declaring_type: type
    parameter_names: tuple[str, ...] | None
    args: tuple[Any, ...]
    target: Any = None

    @property
    def target_type(self) -> type:
        """Concrete class whose logger receives the records."""
        if self.target is None:
            return self.declaring_type
        if isinstance(self.target, type):
            return self.target
        return type(self.target)

    @property
    def rendered_args(self) -> str:
        return render_arguments(self.parameter_names, self.args)


@dataclass(frozen=True)
class PendingCall(CallContext):
    """A call that has not run yet; ``proceed()`` runs it."""

    proceed: Callable[[], Any] = field(kw_only=True, repr=False, compare=False)

    @classmethod
    def from_function(
        cls,
        func: Callable[..., Any],
        declaring_type: type,
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
        *,
        takes_target: bool = False,
        signature: inspect.Signature | None = None,
    ) -> PendingCall:
        """Build a pending call from a function and its actual arguments.

        With ``takes_target`` the first positional argument is the receiver
        (``self`` or ``cls``): it becomes the target and is left out of the
        rendered arguments.
        """
        if signature is None:
            signature = signature_of(func)
        args = tuple(args)
        kwargs = dict(kwargs)
        has_target = takes_target and bool(args)
        names, values = resolve_arguments(signature, args, kwargs, skip_first=has_target)
        return cls(
            name=getattr(func, "__name__", repr(func)),
            declaring_type=declaring_type,
            parameter_names=names,
            args=values,
            target=args[0] if has_target else declaring_type,
            proceed=functools.partial(func, *args, **kwargs),
        )


def signature_of(func: Callable[..., Any]) -> inspect.Signature | None:
    """Signature of ``func``, or None when parameter names are not exposed."""
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def resolve_arguments(
    signature: inspect.Signature | None,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    *,
    skip_first: bool = False,
) -> tuple[tuple[str, ...] | None, tuple[Any, ...]]:
    """Pair actual arguments with parameter names in declaration order.

    ``**kwargs`` collectors are flattened into their keys; ``*args``
    collectors stay one value under their own name. Without a usable
    signature the names are None and the values are positional then keyword.
    """
    bound = None
    if signature is not None:
        try:
            bound = signature.bind(*args, **kwargs)
        except TypeError:
            bound = None

    if bound is None:
        values = list(args) + list(kwargs.values())
        if skip_first:
            values = values[1:]
        return None, tuple(values)

    names: list[str] = []
    values = []
    for name, value in bound.arguments.items():
        kind = signature.parameters[name].kind
        if kind is inspect.Parameter.VAR_KEYWORD:
            names.extend(value.keys())
            values.extend(value.values())
        elif skip_first and not names and kind is inspect.Parameter.VAR_POSITIONAL:
            # Receiver collected into *args: drop it from the tuple only
            skip_first = False
            if len(value) > 1:
                names.append(name)
                values.append(value[1:])
        else:
            names.append(name)
            values.append(value)

    if skip_first:
        names, values = names[1:], values[1:]
    return tuple(names), tuple(values)


class CallInterceptor:
    """Wraps watched calls with entry, exit and failure records.

    Args:
        registry: Category registry gating interception (default: global)
        sink: Destination for records (default: structlog)
        classifier: Chooses warning vs error for failures
        clock: Monotonic clock for elapsed time
    """

    def __init__(
        self,
        registry: CategoryRegistry | None = None,
        sink: Sink | None = None,
        classifier: SeverityClassifier | None = None,
        clock: MonotonicClock | None = None,
    ):
        self.registry = registry if registry is not None else get_registry()
        self.loggers = LoggerCache(sink if sink is not None else StructlogSink())
        self.classifier = classifier if classifier is not None else SeverityClassifier()
        self.clock = clock if clock is not None else PerfCounterClock()

    def is_watched(self, call: CallContext) -> bool:
        return self.registry.is_watched(call.declaring_type)

    def intercept(self, call: PendingCall) -> Any:
        """Run ``call.proceed()`` inside the logging envelope."""
        if not self.is_watched(call):
            return call.proceed()

        log = self.loggers.logger_for(call.target_type)
        log.info(format_entry(call))
        timing = TimingSample(call.name, clock=self.clock)
        try:
            result = call.proceed()
        except Exception as e:
            self.on_failure(call, e)
            raise
        timing.stop()

        log.info(format_exit(call, result, timing.elapsed_ms))
        return result

    async def intercept_async(self, call: PendingCall) -> Any:
        """Same envelope for a call whose ``proceed()`` returns an awaitable."""
        if not self.is_watched(call):
            return await call.proceed()

        log = self.loggers.logger_for(call.target_type)
        log.info(format_entry(call))
        timing = TimingSample(call.name, clock=self.clock)
        try:
            result = await call.proceed()
        except Exception as e:
            self.on_failure(call, e)
            raise
        timing.stop()

        log.info(format_exit(call, result, timing.elapsed_ms))
        return result

    def intercept_generator(self, call: PendingCall) -> Generator[Any, Any, Any]:
        """Same envelope around the iteration of a generator.

        The entry record is written on the first ``next()``; the exit record
        when the generator is exhausted, with its return value. Closing the
        generator early writes no terminal record.
        """
        if not self.is_watched(call):
            return (yield from call.proceed())

        log = self.loggers.logger_for(call.target_type)
        log.info(format_entry(call))
        timing = TimingSample(call.name, clock=self.clock)
        try:
            result = yield from call.proceed()
        except Exception as e:
            self.on_failure(call, e)
            raise
        timing.stop()

        log.info(format_exit(call, result, timing.elapsed_ms))
        return result

    def on_failure(self, call: CallContext, error: BaseException) -> None:
        """Write the failure record for ``error`` raised by ``call``."""
        message = format_failure(call, error)
        log = self.loggers.logger_for(call.target_type)
        if self.classifier.severity_for(error) is Severity.WARNING:
            log.warning(message, error)
        else:
            log.error(message, error)


# Process-wide interceptor used by instrumented functions without their own
_default_interceptor: CallInterceptor | None = None
_default_lock = threading.Lock()


def get_default_interceptor() -> CallInterceptor:
    global _default_interceptor
    if _default_interceptor is None:
        with _default_lock:
            if _default_interceptor is None:
                _default_interceptor = CallInterceptor()
    return _default_interceptor


def set_default_interceptor(interceptor: CallInterceptor | None) -> CallInterceptor | None:
    """Replace the default interceptor and return the previous one.

    Passing None resets it; a fresh one is created on next use.
    """
    global _default_interceptor
    with _default_lock:
        previous = _default_interceptor
        _default_interceptor = interceptor
    return previous


def is_instrumented(func: Any) -> bool:
    return bool(getattr(func, INSTRUMENTED, False))


def instrument(
    func: F,
    declaring_type: type,
    *,
    takes_target: bool = True,
    interceptor: CallInterceptor | None = None,
) -> F:
    """Wrap ``func`` so each call goes through an interceptor.

    Args:
        func: Function defined on ``declaring_type``
        declaring_type: Class whose category membership gates logging
        takes_target: First positional argument is self/cls
        interceptor: Fixed interceptor (default: resolved on every call)
    """
    if is_instrumented(func):
        return func
    if not callable(func):
        raise InstrumentationError(
            f"Cannot instrument non-callable {func!r}",
            context={"declaring_type": declaring_type.__qualname__},
        )

    signature = signature_of(func)

    def pending(args: tuple[Any, ...], kwargs: dict[str, Any]) -> PendingCall:
        return PendingCall.from_function(
            func,
            declaring_type,
            args,
            kwargs,
            takes_target=takes_target,
            signature=signature,
        )

    # Unwatched declaring types call straight through without building a PendingCall
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            active = interceptor or get_default_interceptor()
            if not active.registry.is_watched(declaring_type):
                return await func(*args, **kwargs)
            return await active.intercept_async(pending(args, kwargs))

        wrapper: Callable[..., Any] = async_wrapper
    elif inspect.isgeneratorfunction(func):

        @functools.wraps(func)
        def generator_wrapper(*args: Any, **kwargs: Any) -> Any:
            active = interceptor or get_default_interceptor()
            if not active.registry.is_watched(declaring_type):
                return (yield from func(*args, **kwargs))
            return (yield from active.intercept_generator(pending(args, kwargs)))

        wrapper = generator_wrapper
    else:

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            active = interceptor or get_default_interceptor()
            if not active.registry.is_watched(declaring_type):
                return func(*args, **kwargs)
            return active.intercept(pending(args, kwargs))

        wrapper = sync_wrapper

    setattr(wrapper, INSTRUMENTED, True)
    return wrapper  # type: ignore[return-value]


def instrument_class(cls: type, interceptor: CallInterceptor | None = None) -> type:
    """Wrap the public functions defined on ``cls`` in place.

    Plain, static and class methods (sync or async) are wrapped; names with
    a leading underscore, properties and nested classes are left alone.
    Inherited methods keep the wrapping of the class that defines them.
    """
    if not isinstance(cls, type):
        raise InstrumentationError(f"Expected a class, got {type(cls).__name__}")

    wrapped: list[str] = []
    for attr, value in list(vars(cls).items()):
        if attr.startswith("_"):
            continue
        if isinstance(value, staticmethod):
            if is_instrumented(value.__func__):
                continue
            func = instrument(value.__func__, cls, takes_target=False, interceptor=interceptor)
            setattr(cls, attr, staticmethod(func))
        elif isinstance(value, classmethod):
            if is_instrumented(value.__func__):
                continue
            func = instrument(value.__func__, cls, interceptor=interceptor)
            setattr(cls, attr, classmethod(func))
        elif inspect.isfunction(value):
            if is_instrumented(value):
                continue
            setattr(cls, attr, instrument(value, cls, interceptor=interceptor))
        else:
            continue
        wrapped.append(attr)

    logger.debug(
        "class_instrumented",
        cls=f"{cls.__module__}.{cls.__qualname__}",
        methods=wrapped,
    )
    return cls


class LoggingProxy:
    """Wrapper with the same call interface as ``target``.

    Public methods fetched through the proxy run inside the logging envelope,
    with ``type(target)`` as the declaring type: instance, class and static
    methods alike. Calling the proxy runs the target's ``__call__`` inside
    the same envelope. Other attributes are read and written straight
    through. Methods already wrapped by a stereotype decorator are returned
    as they are.
    """

    __slots__ = ("_target", "_interceptor", "_wrapped")

    def __init__(self, target: Any, interceptor: CallInterceptor | None = None):
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_interceptor", interceptor)
        object.__setattr__(self, "_wrapped", {})

    def _wrapper_for(self, func: Callable[..., Any], *, takes_target: bool = True) -> Callable[..., Any]:
        cache: dict[Any, Callable[..., Any]] = object.__getattribute__(self, "_wrapped")
        wrapper = cache.get(func)
        if wrapper is None:
            wrapper = instrument(
                func,
                type(object.__getattribute__(self, "_target")),
                takes_target=takes_target,
                interceptor=object.__getattribute__(self, "_interceptor"),
            )
            cache[func] = wrapper
        return wrapper

    def __getattr__(self, name: str) -> Any:
        target = object.__getattribute__(self, "_target")
        value = getattr(target, name)
        if name.startswith("_"):
            return value

        if isinstance(value, types.MethodType):
            if is_instrumented(value.__func__):
                return value
            # Bound to the instance, or to its class for a classmethod
            if value.__self__ is target or value.__self__ is type(target):
                return types.MethodType(self._wrapper_for(value.__func__), value.__self__)
            return value

        if inspect.isfunction(value) and not is_instrumented(value):
            static = inspect.getattr_static(type(target), name, None)
            if isinstance(static, staticmethod) and static.__func__ is value:
                return self._wrapper_for(value, takes_target=False)
        return value

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        target = object.__getattribute__(self, "_target")
        func = inspect.getattr_static(type(target), "__call__", None)
        if not inspect.isfunction(func) or is_instrumented(func):
            return target(*args, **kwargs)
        return self._wrapper_for(func)(target, *args, **kwargs)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(object.__getattribute__(self, "_target"), name, value)

    def __delattr__(self, name: str) -> None:
        delattr(object.__getattribute__(self, "_target"), name)

    def __repr__(self) -> str:
        return f"LoggingProxy({object.__getattribute__(self, '_target')!r})"


def unwrap(obj: Any) -> Any:
    """The object behind a LoggingProxy (or ``obj`` itself)."""
    if isinstance(obj, LoggingProxy):
        return object.__getattribute__(obj, "_target")
    return obj


__all__ = [
    "CallContext",
    "PendingCall",
    "CallInterceptor",
    "get_default_interceptor",
    "set_default_interceptor",
    "signature_of",
    "resolve_arguments",
    "instrument",
    "instrument_class",
    "is_instrumented",
    "LoggingProxy",
    "unwrap",
]
