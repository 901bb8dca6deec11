"""Date helpers"""

from datetime import datetime, timedelta, timezone

ONE_DAY = timedelta(days=1)


def utcnow() -> datetime:
    """Naive UTC now, matching what the DateTime columns store"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Floor of the elapsed time in days; negative when ``earlier`` is in the future"""
    return (later - earlier) // ONE_DAY
