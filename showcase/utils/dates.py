"""Timestamp parsing and formatting with UTC normalization."""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from typing import Mapping

from dateutil import parser as date_parser
from dateutil import tz

TZ_ALIASES: Mapping[str, tzinfo | None] = {
    "UTC": UTC,
    "GMT": UTC,
    "Z": UTC,
    "CET": tz.gettz("Europe/Berlin"),
    "EST": tz.gettz("America/New_York"),
    "PST": tz.gettz("America/Los_Angeles"),
}


def parse_timestamp(
    value: str | datetime | None, default_tz: tzinfo = UTC, *, strict: bool = False
) -> datetime | None:
    """Parse a timestamp and return a timezone-aware UTC datetime.

    Args:
        value: ISO-8601 string or datetime instance to parse.
        default_tz: Applied when the parsed datetime is naive.
        strict: Accept ISO-8601 only. The lenient fallback fills missing
            fields from the current date, so "12" or "May" would parse.

    Returns:
        A timezone-aware datetime normalized to UTC, or None if parsing fails.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        if not value.strip():
            return None
        try:
            parsed = date_parser.isoparse(value)
        except ValueError:
            if strict:
                return None
            try:
                parsed = date_parser.parse(value, tzinfos=TZ_ALIASES)
            except (ValueError, OverflowError, date_parser.ParserError):
                return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=default_tz)
    return parsed.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC string with a `Z` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def to_naive_utc(value: datetime) -> datetime:
    """Drop tzinfo after converting to UTC (for naive DateTime columns)."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
