"""
Shared pytest fixtures and configuration for calllog tests.

This module provides:
- Default interceptor isolation between tests
- An in-memory recording sink and a fake clock
- A private category registry and an interceptor wired to all of the above

Usage:
    def test_something(interceptor, sink):
        ...
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Ensure calllog package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from calllog.framework import CallInterceptor, CategoryRegistry, set_default_interceptor
from tests._support import FakeClock, RecordingSink


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.path).relative_to(Path(__file__).parent)

        if "api" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_default_interceptor() -> Generator[None, None, None]:
    """
    Drop the process-wide interceptor before and after each test.

    Tests that install their own default interceptor cannot leak it into
    the next test.
    """
    set_default_interceptor(None)
    yield
    set_default_interceptor(None)


# =============================================================================
# Sink / Interceptor Fixtures
# =============================================================================


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(elapsed_ms=7)


@pytest.fixture
def registry() -> CategoryRegistry:
    """A registry private to one test."""
    return CategoryRegistry()


@pytest.fixture
def interceptor(registry: CategoryRegistry, sink: RecordingSink, clock: FakeClock) -> CallInterceptor:
    return CallInterceptor(registry=registry, sink=sink, clock=clock)


@pytest.fixture
def default_interceptor(sink: RecordingSink, clock: FakeClock) -> CallInterceptor:
    """
    Install an interceptor on the global registry as the process default.

    Classes decorated with @service, @controller, ... inside a test write
    their records to ``sink``.
    """
    installed = CallInterceptor(sink=sink, clock=clock)
    set_default_interceptor(installed)
    return installed
