"""Factory for switching between mock and real APIs.

Controlled by USE_MOCK_APIS environment variable.
"""

import structlog

from tracking.provider import TrackingProvider

logger = structlog.get_logger()


class APIFactory:
    """Factory for creating API clients based on configuration."""

    @staticmethod
    def get_tracking_provider(settings=None) -> TrackingProvider:
        """Get tracking provider (mock or real 17TRACK).

        Raises:
            ConfigurationError: real provider selected without an API key.
        """
        if settings is None:
            from config import settings

        if settings.use_mock_apis:
            from .client import MockTrackingProvider

            logger.debug("using_mock_tracking_api")
            return MockTrackingProvider()

        from tracking.provider import Track17Client

        logger.debug("using_track17_api")
        return Track17Client(
            api_key=settings.track17_api_key,
            base_url=settings.track17_base_url,
        )
