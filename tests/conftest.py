"""
Main pytest configuration for lazycell tests.

Fixtures for loaders with call counting and a controllable clock.
"""

import os
import threading

import pytest

# Set test environment variables before importing library modules
os.environ["LAZYCELL_ENVIRONMENT"] = "test"
os.environ["LAZYCELL_LOG_LEVEL"] = "DEBUG"

from lazycell.core.config import get_settings


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingLoader:
    """Loader that records every call and returns an incrementing counter."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []
        self._lock = threading.Lock()

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def __call__(self, ctx, *args):
        with self._lock:
            self.calls.append((ctx, args))
            count = len(self.calls)
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        return count


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached settings so tests that patch the environment see fresh values."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_clock():
    """Provide a fake monotonic clock."""
    return FakeClock()


@pytest.fixture
def counting_loader():
    """Provide a loader returning 1, 2, 3, ... on successive calls."""
    return CountingLoader()
