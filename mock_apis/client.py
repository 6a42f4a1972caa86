"""Mock tracking provider for demo/development.

Provides a realistic stand-in for 17TRACK with:
- Async methods with realistic latencies (100-300ms)
- Structured logging
- Canned extended, legacy and empty records from sample_data
"""

import asyncio
import random

import structlog

from tracking.provider import ProviderResponse

from .sample_data import SAMPLE_RECORDS, rejected_response, success_response

logger = structlog.get_logger()


class MockTrackingProvider:
    """Mock 17TRACK API.

    Numbers in ``records`` are returned on autodetection; everything else is
    rejected, so the resolver walks through its fallback carriers.
    """

    def __init__(self, records: dict[str, dict] | None = None, latency: bool = True):
        self.records = SAMPLE_RECORDS if records is None else records
        self.latency = latency
        self.registered: list[tuple[str, int | None]] = []

    async def register(self, number: str, carrier: int | None = None) -> ProviderResponse:
        await self._wait()
        self.registered.append((number, carrier))
        logger.info("mock_track17_register", number=number, carrier=carrier, api="mock")
        return ProviderResponse.model_validate(
            success_response(accepted=[{"number": number, "carrier": carrier or 0}])
        )

    async def get_track_info(self, number: str, carrier: int | None = None) -> ProviderResponse:
        await self._wait()
        record = self.records.get(number)
        logger.info(
            "mock_track17_query",
            number=number,
            carrier=carrier,
            found=record is not None,
            api="mock",
        )
        if record is None:
            return ProviderResponse.model_validate(rejected_response(number))
        return ProviderResponse.model_validate(success_response(accepted=[record]))

    async def _wait(self) -> None:
        if self.latency:
            await asyncio.sleep(random.uniform(0.1, 0.3))
