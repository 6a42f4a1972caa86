"""17TRACK API v2.2 client.

Wraps the two calls the resolver needs:
- POST /register      — ask the provider to start tracking a number
- POST /gettrackinfo  — fetch tracking data for a number

Both accept an optional carrier hint. Any network, HTTP or decoding failure
is raised as TransportError so the resolver can move on to the next attempt.
"""

from typing import Protocol

import httpx
from pydantic import BaseModel, ConfigDict, Field
import structlog

from tracking.errors import ConfigurationError, TransportError

logger = structlog.get_logger()

SUCCESS_CODE = 0


class ProviderData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    accepted: list[dict] = Field(default_factory=list)
    rejected: list[dict] = Field(default_factory=list)


class ProviderResponse(BaseModel):
    """Envelope returned by both provider calls."""

    model_config = ConfigDict(extra="ignore")

    code: int | None = None
    data: ProviderData | None = None

    @property
    def accepted_record(self) -> dict | None:
        """First accepted record, only when the provider reported success."""
        if self.code != SUCCESS_CODE or self.data is None or not self.data.accepted:
            return None
        return self.data.accepted[0]


class TrackingProvider(Protocol):
    """Protocol for tracking lookup providers."""

    async def register(self, number: str, carrier: int | None = None) -> ProviderResponse:
        """Register a number for tracking."""
        ...

    async def get_track_info(self, number: str, carrier: int | None = None) -> ProviderResponse:
        """Fetch tracking data for a number."""
        ...


def _payload(number: str, carrier: int | None) -> list[dict]:
    item: dict = {"number": number}
    if carrier is not None:
        item["carrier"] = int(carrier)
    return [item]


class Track17Client:
    """Async client for the 17TRACK tracking API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.17track.net/track/v2.2",
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ConfigurationError("TRACK17_API_KEY is not configured")
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            headers={
                "17token": api_key,
                "Content-Type": "application/json",
            },
            timeout=30.0,
        )

    async def register(self, number: str, carrier: int | None = None) -> ProviderResponse:
        return await self._post("/register", number, carrier)

    async def get_track_info(self, number: str, carrier: int | None = None) -> ProviderResponse:
        return await self._post("/gettrackinfo", number, carrier)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, number: str, carrier: int | None) -> ProviderResponse:
        try:
            response = await self._client.post(path, json=_payload(number, carrier))
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"17TRACK {path} returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"17TRACK {path} request failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"17TRACK {path} returned invalid JSON") from e

        try:
            parsed = ProviderResponse.model_validate(body)
        except ValueError as e:
            raise TransportError(f"17TRACK {path} returned an unexpected body") from e

        logger.debug(
            "track17_response",
            path=path,
            number=number,
            carrier=carrier,
            code=parsed.code,
            accepted=len(parsed.data.accepted) if parsed.data else 0,
        )
        return parsed
