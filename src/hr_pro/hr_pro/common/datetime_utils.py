from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today() -> date:
    return now_local().date()


def iso_date(value: Any) -> Optional[str]:
    """Render DATE/DATETIME columns the way the client expects (YYYY-MM-DD)."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


def age_on(birth_date: Optional[date], on: date) -> Optional[int]:
    if birth_date is None:
        return None
    years = on.year - birth_date.year
    if (on.month, on.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years
