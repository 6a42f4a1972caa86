"""Carrier resolution engine.

Finds the first accepted record for a tracking number:

1. Query with the query's own hint (normally none, i.e. autodetection).
2. On no accepted record, walk the fallback carrier hints in order.
3. Stop at the first accepted record; NotFound when all are exhausted.

Attempts are strictly sequential. Any error raised by the provider only
ends the attempt it happened in. With register_before_query, every query is preceded by its own
register call and a wait from RegistrationDelayPolicy.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable

import structlog

from tracking.errors import ConfigurationError, TransportError
from tracking.models import CarrierCode, TrackingQuery
from tracking.provider import TrackingProvider

logger = structlog.get_logger()

DEFAULT_FALLBACK_CARRIERS = (
    CarrierCode.DHL,
    CarrierCode.DHL_PAKET,
    CarrierCode.DHL_SUPPLY_CHAIN_APAC,
)


@dataclass(frozen=True)
class RegistrationDelayPolicy:
    """Wait between a register call and its paired query.

    The first attempt waits ``initial_delay``. Hinted attempt n (1-based)
    waits ``hint_delay * backoff_factor ** (n - 1)``. No wait ever exceeds
    ``max_delay`` seconds.
    """

    initial_delay: float = 2.0
    hint_delay: float = 1.5
    backoff_factor: float = 1.0
    max_delay: float = 5.0

    def __post_init__(self):
        if min(self.initial_delay, self.hint_delay, self.max_delay) < 0:
            raise ConfigurationError("registration delays must not be negative")
        if self.backoff_factor < 1.0:
            raise ConfigurationError("registration backoff factor must be >= 1.0")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before query ``attempt`` (0 = first attempt)."""
        if attempt == 0:
            delay = self.initial_delay
        else:
            delay = self.hint_delay * self.backoff_factor ** (attempt - 1)
        return min(delay, self.max_delay)


@dataclass(frozen=True)
class Resolved:
    record: dict
    carrier_hint: CarrierCode | None
    attempts: int


@dataclass(frozen=True)
class NotFound:
    attempts: int
    tried: tuple[CarrierCode | None, ...] = field(default_factory=tuple)


ResolutionOutcome = Resolved | NotFound


def parse_carrier_hints(values) -> tuple[CarrierCode, ...]:
    """Validate configured carrier hints against the static enumeration."""
    hints = []
    for value in values:
        try:
            hints.append(CarrierCode(int(value)))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"unknown fallback carrier: {value!r}") from e
    return tuple(hints)


class CarrierResolver:
    """Sequential autodetect-then-fallback lookup against one provider."""

    def __init__(
        self,
        provider: TrackingProvider,
        fallback_carriers=DEFAULT_FALLBACK_CARRIERS,
        register_before_query: bool = False,
        delay_policy: RegistrationDelayPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.provider = provider
        self.fallback_carriers = parse_carrier_hints(fallback_carriers)
        self.register_before_query = register_before_query
        self.delay_policy = delay_policy or RegistrationDelayPolicy()
        self._sleep = sleep

    def attempt_plan(self, query: TrackingQuery) -> list[CarrierCode | None]:
        """Ordered hints to try: the query's own hint first, then fallbacks."""
        plan: list[CarrierCode | None] = [query.carrier_hint]
        plan.extend(hint for hint in self.fallback_carriers if hint != query.carrier_hint)
        return plan

    async def resolve(self, query: TrackingQuery) -> ResolutionOutcome:
        number = query.tracking_number
        plan = self.attempt_plan(query)

        for attempt, hint in enumerate(plan):
            if self.register_before_query:
                await self._register(number, hint)
                await self._sleep(self.delay_policy.delay_for(attempt))

            logger.info(
                "tracking_attempt",
                tracking_number=number,
                carrier=int(hint) if hint is not None else None,
                attempt=attempt + 1,
            )
            try:
                response = await self.provider.get_track_info(number, hint)
                record = response.accepted_record
            except TransportError as e:
                logger.warning(
                    "tracking_query_failed",
                    tracking_number=number,
                    carrier=int(hint) if hint is not None else None,
                    status_code=e.status_code,
                    error=str(e),
                )
                continue
            except Exception as e:
                logger.error(
                    "tracking_query_failed",
                    tracking_number=number,
                    carrier=int(hint) if hint is not None else None,
                    error=str(e),
                )
                continue

            if record is not None:
                logger.info(
                    "tracking_resolved",
                    tracking_number=number,
                    carrier=int(hint) if hint is not None else None,
                    attempts=attempt + 1,
                )
                return Resolved(record=record, carrier_hint=hint, attempts=attempt + 1)

        logger.info("tracking_not_found", tracking_number=number, attempts=len(plan))
        return NotFound(attempts=len(plan), tried=tuple(plan))

    async def _register(self, number: str, hint: CarrierCode | None) -> None:
        try:
            response = await self.provider.register(number, hint)
        except TransportError as e:
            logger.warning(
                "tracking_register_failed",
                tracking_number=number,
                carrier=int(hint) if hint is not None else None,
                error=str(e),
            )
            return
        except Exception as e:
            logger.error(
                "tracking_register_failed",
                tracking_number=number,
                carrier=int(hint) if hint is not None else None,
                error=str(e),
            )
            return
        logger.info(
            "tracking_registered",
            tracking_number=number,
            carrier=int(hint) if hint is not None else None,
            code=getattr(response, "code", None),
        )
