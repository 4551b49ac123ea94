"""Pytest configuration and fixtures for neo-preferences tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from neo_preferences.config.constants import PreferencePriority
from neo_preferences.core.entities import PreferenceMetadata
from neo_preferences.features.audit import InMemoryAuditLogger
from neo_preferences.features.injector import InjectorConfig, PreferenceInjector
from neo_preferences.features.providers import MemoryProvider


BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced millisecond clock for cache tests."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def make_metadata(
    key: str = "theme",
    value=None,
    priority: int = PreferencePriority.NORMAL,
    source: str = "memory",
    offset_seconds: float = 0,
    **extra,
) -> PreferenceMetadata:
    """Build metadata with a timestamp relative to a fixed base time."""
    return PreferenceMetadata(
        key=key,
        value=value,
        priority=priority,
        source=source,
        timestamp=BASE_TIME + timedelta(seconds=offset_seconds),
        **extra,
    )


@pytest.fixture
def clock():
    """Fake clock starting at zero."""
    return FakeClock()


@pytest.fixture
def metadata_factory():
    """Factory for metadata records."""
    return make_metadata


@pytest.fixture
def audit_logger():
    """In-memory audit logger."""
    return InMemoryAuditLogger()


@pytest.fixture
def low_provider():
    """Memory provider at LOW priority."""
    return MemoryProvider(priority=PreferencePriority.LOW, name="low")


@pytest.fixture
def high_provider():
    """Memory provider at HIGH priority."""
    return MemoryProvider(priority=PreferencePriority.HIGH, name="high")


@pytest.fixture
def injector(low_provider, high_provider, audit_logger):
    """Injector over two memory providers with auditing."""
    return PreferenceInjector(
        InjectorConfig(
            providers=[low_provider, high_provider],
            audit_logger=audit_logger,
        )
    )


@pytest.fixture
def cached_injector(low_provider, high_provider, audit_logger):
    """Injector with the LRU cache enabled."""
    return PreferenceInjector(
        InjectorConfig(
            providers=[low_provider, high_provider],
            enable_cache=True,
            audit_logger=audit_logger,
        )
    )


@pytest.fixture
def mock_provider():
    """Provider double with async operations."""
    provider = MagicMock()
    provider.name = "mock"
    provider.priority = PreferencePriority.NORMAL
    provider.initialize = AsyncMock()
    provider.get = AsyncMock(return_value=None)
    provider.get_all = AsyncMock(return_value={})
    provider.set = AsyncMock()
    provider.has = AsyncMock(return_value=False)
    provider.delete = AsyncMock(return_value=False)
    provider.clear = AsyncMock()
    return provider
