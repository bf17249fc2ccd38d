"""Rendering of entry, exit and failure records.

The shapes are fixed because downstream log searches match on them::

    Started place [order_id=42,quantity=3]
    Finished place [order_id=42,quantity=3] returned [Receipt(42)] in 12 ms
    Failed place [order_id=42,quantity=3] thrown [ValueError with message out of stock

The failure line has no closing bracket.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from calllog.framework.interceptor import CallContext


def render_arguments(parameter_names: Sequence[str] | None, args: Sequence[Any]) -> str:
    """Render ``name=value`` pairs, or bare values when names are unknown."""
    if parameter_names is None:
        return ",".join(str(arg) for arg in args)
    return ",".join(f"{name}={arg}" for name, arg in zip(parameter_names, args))


def error_type_name(error: BaseException) -> str:
    return type(error).__qualname__


def format_entry(ctx: CallContext) -> str:
    return f"Started {ctx.name} [{ctx.rendered_args}]"


def format_exit(ctx: CallContext, result: Any, elapsed_ms: int) -> str:
    return f"Finished {ctx.name} [{ctx.rendered_args}] returned [{result}] in {elapsed_ms} ms"


def format_failure(ctx: CallContext, error: BaseException) -> str:
    return f"Failed {ctx.name} [{ctx.rendered_args}] thrown [{error_type_name(error)} with message {error}"


__all__ = [
    "render_arguments",
    "error_type_name",
    "format_entry",
    "format_exit",
    "format_failure",
]
