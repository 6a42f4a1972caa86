"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from main import app
from tracking.errors import TransportError
from tracking.provider import ProviderResponse


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


def accepted(record: dict) -> ProviderResponse:
    return ProviderResponse.model_validate(
        {"code": 0, "data": {"accepted": [record], "rejected": []}}
    )


def rejected() -> ProviderResponse:
    return ProviderResponse.model_validate(
        {"code": 0, "data": {"accepted": [], "rejected": [{"number": "x"}]}}
    )


class ScriptedProvider:
    """Provider double answering per carrier hint and recording every call.

    ``answers`` maps a hint (None for autodetection) to a ProviderResponse or
    an exception to raise. Unlisted hints get a rejected response.
    """

    def __init__(self, answers: dict | None = None, register_error: bool | Exception = False):
        self.answers = answers or {}
        self.register_error = register_error
        self.calls: list[tuple[str, str, int | None]] = []

    async def register(self, number, carrier=None):
        self.calls.append(("register", number, carrier))
        if isinstance(self.register_error, Exception):
            raise self.register_error
        if self.register_error:
            raise TransportError("register unavailable", status_code=503)
        return ProviderResponse(code=0)

    async def get_track_info(self, number, carrier=None):
        self.calls.append(("query", number, carrier))
        answer = self.answers.get(carrier, rejected())
        if isinstance(answer, Exception):
            raise answer
        return answer

    @property
    def queried_hints(self) -> list[int | None]:
        return [carrier for kind, _, carrier in self.calls if kind == "query"]


@pytest.fixture
def provider_factory():
    return ScriptedProvider


@pytest.fixture
def shape_a_record():
    """Legacy record with a single In Transit event."""
    return {
        "number": "5532417763",
        "carrier": 2,
        "track": {
            "z1": [
                {
                    "a": "2025-05-28T14:30:00Z",
                    "c": "Memphis",
                    "z": "Departed facility",
                    "s": "In Transit",
                },
            ],
        },
    }


@pytest.fixture
def shape_b_record():
    """Extended record with two events and a carrier contact."""
    return {
        "number": "5532417763",
        "carrier": 100001,
        "track_info": {
            "latest_status": {"status": "Delivered"},
            "latest_event": {
                "time_iso": "2025-05-29T10:15:00-06:00",
                "location": "CIUDAD DE MEXICO - MEXICO",
                "description": "Delivered - Signed for by: J PEREZ",
            },
            "time_metrics": {
                "estimated_delivery_date": {"from": "2025-05-29T09:00:00-06:00", "to": None},
            },
            "tracking": {
                "providers": [
                    {
                        "provider": {"key": 100001, "name": "DHL Express", "tel": "+52 55 5345 7000"},
                        "events": [
                            {
                                "time_iso": "2025-05-29T10:15:00-06:00",
                                "location": "CIUDAD DE MEXICO - MEXICO",
                                "description": "Delivered - Signed for by: J PEREZ",
                            },
                            {
                                "time_iso": "2025-05-29T07:02:00-06:00",
                                "location": "CIUDAD DE MEXICO - MEXICO",
                                "description": "With delivery courier",
                            },
                        ],
                    },
                ],
            },
        },
    }
