"""Sample data for the mock tracking provider - mirrors real 17TRACK payloads."""

# Extended (v2.2) record with a full event history
SAMPLE_EXTENDED_RECORD = {
    "number": "5532417763",
    "carrier": 100001,
    "track_info": {
        "latest_status": {"status": "InTransit", "sub_status": "InTransit_Other"},
        "latest_event": {
            "time_iso": "2025-05-28T14:34:00+02:00",
            "location": "LEIPZIG - GERMANY",
            "description": "Shipment has departed from a DHL facility",
        },
        "time_metrics": {
            "estimated_delivery_date": {
                "from": "2025-05-30T09:00:00-06:00",
                "to": "2025-05-30T18:00:00-06:00",
            },
        },
        "tracking": {
            "providers": [
                {
                    "provider": {"key": 100001, "name": "DHL Express", "tel": "+52 55 5345 7000"},
                    "events": [
                        {
                            "time_iso": "2025-05-28T14:34:00+02:00",
                            "location": "LEIPZIG - GERMANY",
                            "description": "Shipment has departed from a DHL facility",
                        },
                        {
                            "time_iso": "2025-05-28T09:12:00+02:00",
                            "location": "LEIPZIG - GERMANY",
                            "description": "Processed at LEIPZIG - GERMANY",
                        },
                        {
                            "time_iso": "2025-05-27T18:40:00+02:00",
                            "location": "BERLIN - GERMANY",
                            "description": "Shipment picked up",
                        },
                    ],
                },
            ],
        },
    },
}

# Legacy record (compact single-letter event keys)
SAMPLE_LEGACY_RECORD = {
    "number": "JD014600006281234567",
    "carrier": 7041,
    "track": {
        "z1": [
            {
                "a": "2025-05-28T14:30:00Z",
                "c": "Bonn",
                "z": "Die Sendung wird zugestellt",
                "s": "OutForDelivery",
            },
            {
                "a": "2025-05-27T20:05:00Z",
                "c": "Köln",
                "z": "Die Sendung wurde im Paketzentrum bearbeitet",
                "s": "InTransit",
            },
        ],
    },
}

# Registered number the provider has no scans for yet
SAMPLE_EMPTY_RECORD = {
    "number": "00000000",
    "carrier": 2,
    "track_info": {
        "latest_status": {"status": "NotFound"},
        "tracking": {"providers": [{"provider": {"name": "DHL"}, "events": []}]},
    },
}

SAMPLE_RECORDS = {
    SAMPLE_EXTENDED_RECORD["number"]: SAMPLE_EXTENDED_RECORD,
    SAMPLE_LEGACY_RECORD["number"]: SAMPLE_LEGACY_RECORD,
    SAMPLE_EMPTY_RECORD["number"]: SAMPLE_EMPTY_RECORD,
}


# API response templates
def success_response(accepted: list[dict] | None = None, rejected: list[dict] | None = None) -> dict:
    """Standard 17TRACK success envelope."""
    return {
        "code": 0,
        "data": {
            "accepted": accepted or [],
            "rejected": rejected or [],
        },
    }


def rejected_response(number: str, message: str = "The tracking number is not registered.") -> dict:
    """Success envelope with the number rejected."""
    return success_response(
        rejected=[{"number": number, "error": {"code": -18019902, "message": message}}],
    )
