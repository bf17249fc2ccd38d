"""Tests for record rendering: argument lists, entry, exit and failure lines."""

from __future__ import annotations

from calllog.framework.formatting import (
    error_type_name,
    format_entry,
    format_exit,
    format_failure,
    render_arguments,
)
from calllog.framework.interceptor import CallContext


class IllegalStateException(Exception):
    pass


class Repo:
    pass


def _ctx(name="save", names=(), args=()) -> CallContext:
    return CallContext(name=name, declaring_type=Repo, parameter_names=names, args=args, target=Repo())


# ── render_arguments ─────────────────────────────────────────


class TestRenderArguments:
    def test_named_pairs(self):
        assert render_arguments(["a", "b"], [1, "x"]) == "a=1,b=x"

    def test_no_arguments(self):
        assert render_arguments([], []) == ""

    def test_no_arguments_without_names(self):
        assert render_arguments(None, []) == ""

    def test_bare_values_without_names(self):
        assert render_arguments(None, [1, "x"]) == "1,x"

    def test_single_argument_has_no_trailing_comma(self):
        assert render_arguments(["a"], [1]) == "a=1"

    def test_none_renders_as_none(self):
        assert render_arguments(["a"], [None]) == "a=None"

    def test_values_use_str(self):
        class Money:
            def __str__(self):
                return "12.50 EUR"

        assert render_arguments(["price"], [Money()]) == "price=12.50 EUR"


# ── records ──────────────────────────────────────────────────


class TestFormatEntry:
    def test_entry(self):
        ctx = _ctx(name="find", names=("a", "b"), args=(1, "x"))
        assert format_entry(ctx) == "Started find [a=1,b=x]"

    def test_entry_without_arguments(self):
        assert format_entry(_ctx(name="ping")) == "Started ping []"

    def test_entry_without_names(self):
        ctx = _ctx(name="find", names=None, args=(1, "x"))
        assert format_entry(ctx) == "Started find [1,x]"


class TestFormatExit:
    def test_exit(self):
        ctx = _ctx(name="find", names=("a",), args=(1,))
        assert format_exit(ctx, "row-1", 12) == "Finished find [a=1] returned [row-1] in 12 ms"

    def test_exit_with_none_result(self):
        assert format_exit(_ctx(name="ping"), None, 0) == "Finished ping [] returned [None] in 0 ms"


class TestFormatFailure:
    def test_failure_shape_has_no_closing_bracket(self):
        error = IllegalStateException("bad state")
        assert format_failure(_ctx(), error) == "Failed save [] thrown [IllegalStateException with message bad state"

    def test_failure_with_arguments(self):
        ctx = _ctx(name="save", names=("id",), args=(3,))
        message = format_failure(ctx, ValueError("nope"))
        assert message == "Failed save [id=3] thrown [ValueError with message nope"

    def test_failure_with_empty_message(self):
        message = format_failure(_ctx(), RuntimeError())
        assert message == "Failed save [] thrown [RuntimeError with message "

    def test_nested_error_class_uses_qualified_name(self):
        class Outer:
            class Inner(Exception):
                pass

        assert error_type_name(Outer.Inner("x")).endswith("Outer.Inner")
