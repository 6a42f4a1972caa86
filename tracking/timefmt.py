"""Timestamp display formatting (Spanish, fixed display timezone)."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

MONTHS_ES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def to_display_zone(moment: datetime, tz_name: str) -> datetime:
    # Naive values from the provider are UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(ZoneInfo(tz_name))


def format_long(moment: datetime) -> str:
    """e.g. ``28 de mayo de 2025, 08:30``."""
    month = MONTHS_ES[moment.month - 1]
    return f"{moment.day} de {month} de {moment.year}, {moment:%H:%M}"


def format_short(moment: datetime) -> str:
    """e.g. ``28/05/2025, 08:30``."""
    return f"{moment:%d/%m/%Y, %H:%M}"


def format_timestamp(value: str, tz_name: str) -> str:
    """Render a provider timestamp in the display timezone.

    Strings that cannot be parsed or converted are returned verbatim.
    """
    try:
        moment = date_parser.isoparse(value)
    except (ValueError, OverflowError, TypeError):
        try:
            moment = date_parser.parse(value)
        except (ValueError, OverflowError, TypeError):
            return value
    try:
        return format_long(to_display_zone(moment, tz_name))
    except (ValueError, OverflowError):
        return value
