"""Calendar helpers for monthly pay periods."""

from __future__ import annotations

import calendar

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def month_range(month: int, year: int) -> tuple[str, str]:
    """Inclusive Poster date range (YYYYMMDD) covering the whole month."""
    last_day = calendar.monthrange(year, month)[1]
    return f"{year:04d}{month:02d}01", f"{year:04d}{month:02d}{last_day:02d}"


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return "Unknown month"
