"""Unit tests for tracking/normalizer.py — Response Normalizer."""

import pytest

from tracking.models import (
    AUTODETECTED_CARRIER,
    ExtendedShape,
    LegacyShape,
    SummaryState,
    UnrecognizedShape,
    classify_record,
)
from tracking.errors import NormalizationError
from tracking.normalizer import (
    UNKNOWN_LOCATION,
    UNKNOWN_STATUS,
    ResponseNormalizer,
)

NUMBER = "5532417763"


@pytest.fixture
def normalizer():
    return ResponseNormalizer("America/Mexico_City")


# --- Shape detection ---


class TestClassifyRecord:
    def test_extended(self, shape_b_record):
        assert isinstance(classify_record(shape_b_record), ExtendedShape)

    def test_legacy(self, shape_a_record):
        assert isinstance(classify_record(shape_a_record), LegacyShape)

    def test_extended_wins_when_both_present(self, shape_a_record, shape_b_record):
        record = {**shape_a_record, "track_info": shape_b_record["track_info"]}
        assert isinstance(classify_record(record), ExtendedShape)

    def test_null_track_info_is_unrecognized(self):
        assert isinstance(classify_record({"number": NUMBER, "track_info": None}), UnrecognizedShape)

    def test_non_object_rejected(self):
        with pytest.raises(NormalizationError):
            classify_record(["not", "a", "record"])


# --- Legacy shape ---


class TestLegacyShape:
    def test_single_event_round_trip(self, normalizer, shape_a_record):
        summary = normalizer.normalize(NUMBER, shape_a_record)

        assert summary.state == SummaryState.COMPLETE
        assert summary.status == "In Transit"
        assert summary.location == "Memphis"
        assert summary.description == "Departed facility"
        assert summary.carrier_name == "DHL"
        assert summary.last_event_time == "28 de mayo de 2025, 08:30"
        assert len(summary.history) == 1

    def test_known_status_is_translated(self, normalizer, shape_a_record):
        shape_a_record["track"]["z1"][0]["s"] = "OutForDelivery"
        summary = normalizer.normalize(NUMBER, shape_a_record)
        assert summary.status == "En reparto"

    def test_empty_event_list(self, normalizer, shape_a_record):
        shape_a_record["track"]["z1"] = []
        summary = normalizer.normalize(NUMBER, shape_a_record)

        assert summary.state == SummaryState.NO_EVENTS
        assert summary.status == UNKNOWN_STATUS
        assert summary.location == UNKNOWN_LOCATION
        assert summary.carrier_name == "DHL"
        assert summary.history == ()

    def test_missing_event_list(self, normalizer):
        summary = normalizer.normalize(NUMBER, {"carrier": 7041, "track": {}})

        assert summary.state == SummaryState.NO_EVENTS
        assert summary.carrier_name == "DHL Paket"

    def test_unknown_carrier_code(self, normalizer, shape_a_record):
        shape_a_record["carrier"] = 424242
        summary = normalizer.normalize(NUMBER, shape_a_record)
        assert summary.carrier_name == AUTODETECTED_CARRIER


# --- Extended shape ---


class TestExtendedShape:
    def test_full_record(self, normalizer, shape_b_record):
        summary = normalizer.normalize(NUMBER, shape_b_record)

        assert summary.state == SummaryState.COMPLETE
        assert summary.carrier_name == "DHL Express"
        assert summary.carrier_contact == "+52 55 5345 7000"
        assert summary.status == "Entregado"
        assert summary.location == "CIUDAD DE MEXICO - MEXICO"
        assert summary.last_event_time == "29 de mayo de 2025, 10:15"
        assert summary.estimated_delivery == "29 de mayo de 2025, 09:00"
        assert [h.description for h in summary.history] == [
            "Delivered - Signed for by: J PEREZ",
            "With delivery courier",
        ]

    def test_unmapped_status_passes_through(self, normalizer, shape_b_record):
        shape_b_record["track_info"]["latest_status"]["status"] = "InfoReceived"
        summary = normalizer.normalize(NUMBER, shape_b_record)
        assert summary.status == "InfoReceived"

    def test_missing_status_defaults_to_in_transit(self, normalizer, shape_b_record):
        del shape_b_record["track_info"]["latest_status"]
        summary = normalizer.normalize(NUMBER, shape_b_record)
        assert summary.status == "En tránsito"

    def test_no_events(self, normalizer, shape_b_record):
        shape_b_record["track_info"]["tracking"]["providers"][0]["events"] = []
        summary = normalizer.normalize(NUMBER, shape_b_record)

        assert summary.state == SummaryState.NO_EVENTS
        assert summary.carrier_name == "DHL Express"
        assert summary.status == UNKNOWN_STATUS
        assert summary.location == UNKNOWN_LOCATION

    def test_no_providers(self, normalizer):
        summary = normalizer.normalize(NUMBER, {"track_info": {"tracking": {"providers": []}}})

        assert summary.state == SummaryState.NO_EVENTS
        assert summary.carrier_name == "Paquetería detectada"

    def test_history_bounded_and_not_resorted(self, normalizer, shape_b_record):
        events = [
            {"time_iso": f"2025-05-{day:02d}T12:00:00Z", "location": f"HUB {day}", "description": "Scan"}
            for day in range(28, 21, -1)
        ]
        shape_b_record["track_info"]["tracking"]["providers"][0]["events"] = events
        summary = normalizer.normalize(NUMBER, shape_b_record)

        assert len(summary.history) == 5
        assert [h.location for h in summary.history] == [
            "HUB 28", "HUB 27", "HUB 26", "HUB 25", "HUB 24",
        ]

    def test_history_placeholders(self, normalizer, shape_b_record):
        shape_b_record["track_info"]["tracking"]["providers"][0]["events"] = [{}]
        summary = normalizer.normalize(NUMBER, shape_b_record)

        entry = summary.history[0]
        assert entry.timestamp == "Fecha N/A"
        assert entry.location == "Ubicación N/A"
        assert entry.description == "Sin descripción"

    def test_out_of_range_history_timestamp_keeps_summary(self, normalizer, shape_b_record):
        events = shape_b_record["track_info"]["tracking"]["providers"][0]["events"]
        events.append({
            "time_iso": "0001-01-01T00:00:00Z",
            "location": "ORIGIN",
            "description": "Label created",
        })
        summary = normalizer.normalize(NUMBER, shape_b_record)

        assert summary.state == SummaryState.COMPLETE
        assert summary.status == "Entregado"
        assert len(summary.history) == 3
        assert summary.history[-1].timestamp == "0001-01-01T00:00:00Z"

    def test_unparseable_timestamp_passes_through(self, normalizer, shape_b_record):
        shape_b_record["track_info"]["latest_event"]["time_iso"] = "sin fecha"
        summary = normalizer.normalize(NUMBER, shape_b_record)
        assert summary.last_event_time == "sin fecha"


# --- Degradation ---


class TestDegradation:
    def test_unrecognized_record(self, normalizer):
        summary = normalizer.normalize(NUMBER, {"number": NUMBER, "carrier": 2})

        assert summary.state == SummaryState.NO_INFO
        assert summary.carrier_name == "DHL"

    def test_malformed_record_degrades(self, normalizer, shape_b_record):
        shape_b_record["track_info"]["tracking"]["providers"] = "oops"
        summary = normalizer.normalize(NUMBER, shape_b_record)

        assert summary is not None
        assert summary.state == SummaryState.PARTIAL
        assert summary.tracking_number == NUMBER
        assert summary.carrier_name == "DHL Express"
        assert summary.status is None

    def test_non_object_record_degrades(self, normalizer):
        summary = normalizer.normalize(NUMBER, None)

        assert summary.state == SummaryState.PARTIAL
        assert summary.tracking_number == NUMBER
        assert summary.carrier_name == AUTODETECTED_CARRIER

    def test_wrong_field_type_degrades(self, normalizer, shape_a_record):
        shape_a_record["track"]["z1"] = [{"a": {"nested": True}}]
        summary = normalizer.normalize(NUMBER, shape_a_record)

        assert summary.state == SummaryState.PARTIAL
        assert summary.carrier_name == "DHL"
