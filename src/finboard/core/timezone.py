"""Timezone utilities. All stored timestamps are UTC."""

from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

UTC = pytz.UTC


def now_utc() -> datetime:
    """Return current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to aware UTC. Naive values are assumed to be UTC."""
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def to_storage(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to naive UTC for the database layer."""
    if dt is None:
        return None
    return to_utc(dt).replace(tzinfo=None)


def from_storage(dt: Optional[datetime]) -> Optional[datetime]:
    """Re-attach UTC to a naive datetime read from the database."""
    if dt is None:
        return None
    return to_utc(dt)


def parse_datetime_utc(value: str) -> datetime:
    """
    Parse a datetime string and return it as aware UTC.

    If no timezone is provided in the string, assumes UTC.
    """
    return to_utc(date_parser.parse(value))
