"""Tracking lookup pipeline: validate → resolve → normalize → render."""

from datetime import datetime

import structlog

from tracking.errors import ConfigurationError
from tracking.models import CarrierCode, TrackingQuery, TrackingSummary
from tracking.normalizer import ResponseNormalizer
from tracking.render import render_not_found, render_summary
from tracking.resolver import CarrierResolver, NotFound, RegistrationDelayPolicy

logger = structlog.get_logger()

MIN_TRACKING_NUMBER_LENGTH = 8


def is_valid_tracking_number(number: str | None) -> bool:
    return bool(number) and len(number) >= MIN_TRACKING_NUMBER_LENGTH


class TrackingService:
    """One stateless lookup per call; safe to share across requests."""

    def __init__(
        self,
        resolver: CarrierResolver,
        normalizer: ResponseNormalizer,
    ):
        self.resolver = resolver
        self.normalizer = normalizer

    async def lookup(
        self,
        tracking_number: str,
        carrier_hint: CarrierCode | None = None,
    ) -> TrackingSummary | NotFound:
        """Resolve and normalize one tracking number.

        Raises:
            ValueError: tracking number shorter than the minimum length.
        """
        if not is_valid_tracking_number(tracking_number):
            raise ValueError(
                f"tracking number must be at least {MIN_TRACKING_NUMBER_LENGTH} characters"
            )
        query = TrackingQuery(tracking_number=tracking_number, carrier_hint=carrier_hint)
        outcome = await self.resolver.resolve(query)
        if isinstance(outcome, NotFound):
            return outcome
        return self.normalizer.normalize(tracking_number, outcome.record)

    async def report(self, tracking_number: str, now: datetime | None = None) -> str:
        """Lookup rendered as a chat-ready text block."""
        result = await self.lookup(tracking_number)
        if isinstance(result, NotFound):
            return render_not_found(tracking_number)
        return render_summary(result, self.normalizer.display_timezone, now=now)


def build_tracking_service(settings) -> TrackingService:
    """Wire a TrackingService from application settings.

    Raises:
        ConfigurationError: missing credential or unset/invalid resolver options.
    """
    from mock_apis.factory import APIFactory

    provider = APIFactory.get_tracking_provider(settings)

    register_before_query = settings.register_before_query
    if register_before_query is None:
        if not settings.use_mock_apis:
            raise ConfigurationError("REGISTER_BEFORE_QUERY must be set explicitly")
        register_before_query = False

    resolver = CarrierResolver(
        provider,
        fallback_carriers=settings.fallback_carriers,
        register_before_query=register_before_query,
        delay_policy=RegistrationDelayPolicy(
            initial_delay=settings.register_initial_delay,
            hint_delay=settings.register_hint_delay,
            backoff_factor=settings.register_backoff_factor,
            max_delay=settings.register_max_delay,
        ),
    )
    logger.debug(
        "tracking_service_built",
        register_before_query=register_before_query,
        fallback_carriers=[int(c) for c in resolver.fallback_carriers],
        mock=settings.use_mock_apis,
    )
    return TrackingService(resolver, ResponseNormalizer(settings.display_timezone))
