from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so services can take it as an injectable clock.
    """
    return datetime.now()


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1
