"""Timezone and calendar utilities for US/Eastern market time."""

from datetime import date, datetime, timezone
from typing import Optional

import pytz
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def now_iso() -> str:
    """Return the current US/Eastern time as an ISO-8601 timestamp."""
    return now_eastern().isoformat()


def today_eastern() -> date:
    """Return today's date in US/Eastern timezone."""
    return now_eastern().date()


def months_before(months: int, end: Optional[date] = None) -> date:
    """Return the calendar date ``months`` months before ``end`` (default today)."""
    end = end or today_eastern()
    return end - relativedelta(months=months)


def epoch_millis_to_iso_date(millis: float) -> str:
    """Convert a millisecond epoch timestamp to its UTC ``YYYY-MM-DD`` date."""
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).date().isoformat()


def is_iso_date(value: str) -> bool:
    """Return True if ``value`` parses as an ISO-8601 date."""
    try:
        date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return False
    return True


def month_key(iso_date: str) -> str:
    """Return the ``YYYY-MM`` bucket of an ISO date string."""
    parsed = date_parser.isoparse(iso_date)
    return f"{parsed.year:04d}-{parsed.month:02d}"


def month_label(iso_date: str) -> str:
    """Return a short display label like ``Jan 2025`` for an ISO date string."""
    return date_parser.isoparse(iso_date).strftime("%b %Y")
