"""UTC datetime utilities."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Calendar date used for past/future checks and the expired-cards query."""
    return utc_now().date()
