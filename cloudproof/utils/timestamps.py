from __future__ import annotations

from datetime import datetime, timezone

from ..constants import AMZ_DATE_FORMAT


def as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC, treating naive datetimes as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_amz_date(value: datetime) -> str:
    """Format ``value`` as ``YYYYMMDDTHHMMSSZ``."""
    return as_utc(value).strftime(AMZ_DATE_FORMAT)
