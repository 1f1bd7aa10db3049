"""Mock providers for testing."""

from .api import MockApiProvider
from .session import MockSessionProvider
from .container import build_test_container

__all__ = [
    "MockApiProvider",
    "MockSessionProvider",
    "build_test_container",
]
