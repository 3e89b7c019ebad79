from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def month_key(d: date) -> str:
    return d.strftime("%Y-%m")


def shift_month(d: date, months: int) -> date:
    """First day of the month `months` away from d (negative goes back)."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def trailing_months(end: date, count: int) -> list[str]:
    """`count` month keys ending at end's month, oldest first."""
    return [month_key(shift_month(end, -offset)) for offset in range(count - 1, -1, -1)]
