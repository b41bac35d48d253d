"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .ratelimit import MockRateLimitProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockRateLimitProvider",
    "build_test_container",
]
