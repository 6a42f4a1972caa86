"""Mock API implementations for demo/development.

Provides a realistic mock of the 17TRACK tracking API.
Used when USE_MOCK_APIS=true in config.
"""

from .client import MockTrackingProvider
from .factory import APIFactory

__all__ = [
    "MockTrackingProvider",
    "APIFactory",
]
