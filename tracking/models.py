"""Tracking data model.

Static carrier/status enumerations, the query and summary records, and the
two raw record shapes the provider is known to return:

- Legacy (Shape A): ``track.z1`` event list with compact single-letter keys.
- Extended (Shape B): ``track_info`` with latest_status / latest_event /
  time_metrics / tracking.providers sections.

The provider never declares which shape it sent, so ``classify_record``
decides structurally and returns one member of the ``LookupShape`` union.
"""

from enum import Enum, IntEnum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from tracking.errors import NormalizationError


# --- Static enumerations ---


class CarrierCode(IntEnum):
    """17TRACK carrier identifiers used as carrier hints."""

    DHL = 2
    DHL_PAKET = 7041
    DHL_SUPPLY_CHAIN_APAC = 100842
    DHL_EXPRESS = 100001
    FEDEX = 100003


CARRIER_NAMES: dict[CarrierCode, str] = {
    CarrierCode.DHL: "DHL",
    CarrierCode.DHL_PAKET: "DHL Paket",
    CarrierCode.DHL_SUPPLY_CHAIN_APAC: "DHL Supply Chain APAC",
    CarrierCode.DHL_EXPRESS: "DHL Express",
    CarrierCode.FEDEX: "FedEx",
}

AUTODETECTED_CARRIER = "Paquetería detectada automáticamente"


class TrackingStatus(str, Enum):
    """Main status codes reported in ``latest_status.status``."""

    IN_TRANSIT = "InTransit"
    DELIVERED = "Delivered"
    PICKED_UP = "PickedUp"
    OUT_FOR_DELIVERY = "OutForDelivery"
    AVAILABLE_FOR_PICKUP = "AvailableForPickup"
    EXCEPTION = "Exception"
    RETURNED = "Returned"


STATUS_DISPLAY: dict[TrackingStatus, str] = {
    TrackingStatus.IN_TRANSIT: "En tránsito",
    TrackingStatus.DELIVERED: "Entregado",
    TrackingStatus.PICKED_UP: "Recogido",
    TrackingStatus.OUT_FOR_DELIVERY: "En reparto",
    TrackingStatus.AVAILABLE_FOR_PICKUP: "Disponible para recoger",
    TrackingStatus.EXCEPTION: "Incidencia",
    TrackingStatus.RETURNED: "Devuelto",
}


def carrier_display_name(carrier: int | None) -> str:
    """Display name for a numeric carrier code."""
    try:
        return CARRIER_NAMES[CarrierCode(carrier)]
    except ValueError:
        return AUTODETECTED_CARRIER


def translate_status(status: str | None) -> str | None:
    """Translate a status code to its display string.

    Unknown codes are returned unchanged.
    """
    if not status:
        return status
    try:
        return STATUS_DISPLAY[TrackingStatus(status)]
    except ValueError:
        return status


# --- Query ---


class TrackingQuery(BaseModel):
    """A single lookup request."""

    model_config = ConfigDict(frozen=True)

    tracking_number: str
    carrier_hint: CarrierCode | None = None


# --- Summary ---


class SummaryState(str, Enum):
    COMPLETE = "complete"
    NO_EVENTS = "no_events"  # carrier resolved, nothing scanned yet
    NO_INFO = "no_info"  # record shape not recognized
    PARTIAL = "partial"  # details could not be parsed


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str
    location: str
    description: str


class TrackingSummary(BaseModel):
    """Canonical, display-ready shipment status."""

    model_config = ConfigDict(frozen=True)

    tracking_number: str
    state: SummaryState = SummaryState.COMPLETE
    carrier_name: str
    status: str | None = None
    location: str | None = None
    last_event_time: str | None = None
    description: str | None = None
    estimated_delivery: str | None = None
    history: tuple[HistoryEntry, ...] = ()
    carrier_contact: str | None = None


# --- Raw record shapes ---


class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LegacyEvent(_RawModel):
    timestamp: str | None = Field(default=None, alias="a")
    location: str | None = Field(default=None, alias="c")
    detail: str | None = Field(default=None, alias="z")
    status: str | None = Field(default=None, alias="s")


class LegacyTrack(_RawModel):
    events: list[LegacyEvent] | None = Field(default=None, alias="z1")


class LegacyShape(_RawModel):
    kind: Literal["legacy"] = "legacy"
    number: str | None = None
    carrier: int | None = None
    track: LegacyTrack

    @property
    def events(self) -> list[LegacyEvent]:
        return self.track.events or []


class ExtendedEvent(_RawModel):
    time_iso: str | None = None
    time_utc: str | None = None
    location: str | None = None
    description: str | None = None

    @property
    def timestamp(self) -> str | None:
        return self.time_iso or self.time_utc


class LatestStatus(_RawModel):
    status: str | None = None
    sub_status: str | None = None


class EstimatedWindow(_RawModel):
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None


class TimeMetrics(_RawModel):
    estimated_delivery_date: EstimatedWindow | None = None


class ProviderInfo(_RawModel):
    key: int | None = None
    name: str | None = None
    tel: str | None = None


class ProviderTrack(_RawModel):
    provider: ProviderInfo | None = None
    events: list[ExtendedEvent] | None = None


class TrackingSection(_RawModel):
    providers: list[ProviderTrack] | None = None


class TrackInfo(_RawModel):
    latest_status: LatestStatus | None = None
    latest_event: ExtendedEvent | None = None
    time_metrics: TimeMetrics | None = None
    tracking: TrackingSection | None = None


class ExtendedShape(_RawModel):
    kind: Literal["extended"] = "extended"
    number: str | None = None
    carrier: int | None = None
    track_info: TrackInfo

    @property
    def primary_provider(self) -> ProviderTrack | None:
        tracking = self.track_info.tracking
        if tracking and tracking.providers:
            return tracking.providers[0]
        return None

    @property
    def events(self) -> list[ExtendedEvent]:
        provider = self.primary_provider
        return (provider.events or []) if provider else []


class UnrecognizedShape(_RawModel):
    kind: Literal["unrecognized"] = "unrecognized"
    number: str | None = None
    carrier: int | None = None


LookupShape = Union[ExtendedShape, LegacyShape, UnrecognizedShape]


def classify_record(record: dict) -> LookupShape:
    """Classify an accepted record by which defining section it carries.

    Extended is tried first, then legacy.

    Raises:
        NormalizationError: record is not a JSON object.
        pydantic.ValidationError: a recognized section has the wrong types.
    """
    if not isinstance(record, dict):
        raise NormalizationError(f"accepted record is {type(record).__name__}, not an object")
    if isinstance(record.get("track_info"), dict):
        return ExtendedShape.model_validate(record)
    if isinstance(record.get("track"), dict):
        return LegacyShape.model_validate(record)
    return UnrecognizedShape.model_validate(record)
