"""Mock providers for testing."""

from .cache import BrokenCache, FakeClock, MockCacheProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "BrokenCache",
    "FakeClock",
    "MockCacheProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
