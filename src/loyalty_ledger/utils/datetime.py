"""Date-time helpers for month bucket calculations."""

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching stored column values."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Normalise an aware or naive timestamp to naive UTC."""

    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def month_bucket(now: datetime | None = None) -> date:
    """Return the first day of the month for the provided timestamp (UTC)."""

    current = as_naive_utc(now) if now else utcnow()
    return date(current.year, current.month, 1)


def previous_month_bucket(bucket: date) -> date:
    """Return the first day of the month preceding the supplied bucket."""

    year = bucket.year
    month = bucket.month - 1
    if month == 0:
        year -= 1
        month = 12
    return date(year, month, 1)


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Floor of the elapsed time in days."""

    return int((as_naive_utc(later) - as_naive_utc(earlier)).total_seconds() // 86400)


def start_of_day(now: datetime | None = None) -> datetime:
    current = as_naive_utc(now) if now else utcnow()
    return current.replace(hour=0, minute=0, second=0, microsecond=0)
