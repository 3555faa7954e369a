"""Timestamp helpers.

Ledger timestamps are stored as ISO-8601 UTC strings with millisecond
precision and a trailing ``Z`` (``2026-10-17T14:03:00.123Z``). Day and
month partitioning is done by string prefix on that form, so "today" is
always the UTC calendar date.
"""
from datetime import date, datetime, timezone
from typing import Optional

import pytz

from courtdesk.core.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """Render a moment as the ledger's ISO string."""
    moment = moment or utcnow()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def day_key(value) -> str:
    """ISO date prefix (``YYYY-MM-DD``) for a date, datetime or ISO string."""
    if isinstance(value, str):
        return value[:10]
    if isinstance(value, datetime):
        return iso_timestamp(value)[:10]
    return value.isoformat()


def month_key(timestamp: str) -> str:
    return timestamp[:7]


def club_now() -> datetime:
    """Current wall-clock time in the club's timezone."""
    return utcnow().astimezone(pytz.timezone(settings.CLUB_TIMEZONE))


def to_club_time(moment: datetime) -> datetime:
    club_tz = pytz.timezone(settings.CLUB_TIMEZONE)
    if moment.tzinfo is None:
        return club_tz.localize(moment)
    return moment.astimezone(club_tz)


def utc_today() -> date:
    return utcnow().date()
