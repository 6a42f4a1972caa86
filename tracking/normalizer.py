"""Response normalizer.

Turns an accepted provider record (legacy or extended shape) into a
TrackingSummary. Never raises: any fault while reading the record degrades
to a PARTIAL summary holding only the tracking number and carrier.
"""

import structlog

from tracking.models import (
    AUTODETECTED_CARRIER,
    ExtendedShape,
    HistoryEntry,
    LegacyShape,
    SummaryState,
    TrackingSummary,
    carrier_display_name,
    classify_record,
    translate_status,
)
from tracking.timefmt import format_timestamp

logger = structlog.get_logger()

HISTORY_LIMIT = 5

UNKNOWN_STATUS = "Desconocido"
UNKNOWN_LOCATION = "Desconocida"

DEFAULT_STATUS = "En tránsito"
DEFAULT_LOCATION = "En tránsito"
DEFAULT_DESCRIPTION = "Información no disponible"
DEFAULT_PROVIDER_NAME = "Paquetería detectada"

HISTORY_NO_DATE = "Fecha N/A"
HISTORY_NO_LOCATION = "Ubicación N/A"
HISTORY_NO_DESCRIPTION = "Sin descripción"


class ResponseNormalizer:
    """Builds TrackingSummary records from raw accepted records."""

    def __init__(
        self,
        display_timezone: str = "America/Mexico_City",
        history_limit: int = HISTORY_LIMIT,
    ):
        self.display_timezone = display_timezone
        self.history_limit = history_limit

    def normalize(self, tracking_number: str, raw: dict) -> TrackingSummary:
        try:
            shape = classify_record(raw)
            if isinstance(shape, ExtendedShape):
                return self._from_extended(tracking_number, shape)
            if isinstance(shape, LegacyShape):
                return self._from_legacy(tracking_number, shape)
            logger.info("tracking_record_unrecognized", tracking_number=tracking_number)
            return self._placeholder(
                tracking_number, carrier_display_name(shape.carrier), SummaryState.NO_INFO
            )
        except Exception as e:
            logger.error(
                "tracking_normalize_failed",
                tracking_number=tracking_number,
                error=str(e),
            )
            return TrackingSummary(
                tracking_number=tracking_number,
                state=SummaryState.PARTIAL,
                carrier_name=_safe_carrier_name(raw),
            )

    # --- Extended shape ---

    def _from_extended(self, tracking_number: str, shape: ExtendedShape) -> TrackingSummary:
        provider = shape.primary_provider
        info = provider.provider if provider else None
        carrier_name = (info.name if info else None) or DEFAULT_PROVIDER_NAME

        events = shape.events
        if not events:
            return self._placeholder(tracking_number, carrier_name, SummaryState.NO_EVENTS)

        track_info = shape.track_info
        latest = track_info.latest_event
        status_code = track_info.latest_status.status if track_info.latest_status else None

        estimated = None
        metrics = track_info.time_metrics
        if metrics and metrics.estimated_delivery_date and metrics.estimated_delivery_date.from_:
            estimated = self._format_time(metrics.estimated_delivery_date.from_)

        history = tuple(
            HistoryEntry(
                timestamp=self._format_time(event.timestamp) if event.timestamp else HISTORY_NO_DATE,
                location=event.location or HISTORY_NO_LOCATION,
                description=event.description or HISTORY_NO_DESCRIPTION,
            )
            for event in events[: self.history_limit]
        )

        return TrackingSummary(
            tracking_number=tracking_number,
            carrier_name=carrier_name,
            status=translate_status(status_code) or DEFAULT_STATUS,
            location=(latest.location if latest else None) or DEFAULT_LOCATION,
            last_event_time=(
                self._format_time(latest.timestamp) if latest and latest.timestamp else None
            ),
            description=(latest.description if latest else None) or DEFAULT_DESCRIPTION,
            estimated_delivery=estimated,
            history=history,
            carrier_contact=(info.tel if info else None) or None,
        )

    # --- Legacy shape ---

    def _from_legacy(self, tracking_number: str, shape: LegacyShape) -> TrackingSummary:
        carrier_name = carrier_display_name(shape.carrier)

        events = shape.events
        if not events:
            return self._placeholder(tracking_number, carrier_name, SummaryState.NO_EVENTS)

        newest = events[0]
        history = tuple(
            HistoryEntry(
                timestamp=self._format_time(event.timestamp) if event.timestamp else HISTORY_NO_DATE,
                location=event.location or HISTORY_NO_LOCATION,
                description=event.detail or HISTORY_NO_DESCRIPTION,
            )
            for event in events[: self.history_limit]
        )

        return TrackingSummary(
            tracking_number=tracking_number,
            carrier_name=carrier_name,
            status=translate_status(newest.status) or DEFAULT_STATUS,
            location=newest.location or DEFAULT_LOCATION,
            last_event_time=self._format_time(newest.timestamp) if newest.timestamp else None,
            description=newest.detail or DEFAULT_DESCRIPTION,
            history=history,
        )

    # --- Helpers ---

    def _placeholder(
        self, tracking_number: str, carrier_name: str, state: SummaryState
    ) -> TrackingSummary:
        return TrackingSummary(
            tracking_number=tracking_number,
            state=state,
            carrier_name=carrier_name,
            status=UNKNOWN_STATUS,
            location=UNKNOWN_LOCATION,
        )

    def _format_time(self, value: str) -> str:
        return format_timestamp(value, self.display_timezone)


def _safe_carrier_name(raw) -> str:
    """Best-effort carrier name from a record that failed to parse."""
    if not isinstance(raw, dict):
        return AUTODETECTED_CARRIER
    carrier = raw.get("carrier")
    if isinstance(carrier, int) and not isinstance(carrier, bool):
        return carrier_display_name(carrier)
    return AUTODETECTED_CARRIER
