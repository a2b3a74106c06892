"""Time grid — 15-minute ticks over one non-leap year.

Tick 0 is 00:00–00:15 on day 1.  Every day has the same 96 ticks, so the
hour of day depends only on ``tick mod TICKS_PER_DAY``.
"""

from __future__ import annotations

MINUTES_PER_HOUR = 60
TICK_MINUTES = 15
TICKS_PER_HOUR = MINUTES_PER_HOUR // TICK_MINUTES  # 4
HOURS_PER_DAY = 24
TICKS_PER_DAY = TICKS_PER_HOUR * HOURS_PER_DAY  # 96
DAYS_PER_YEAR = 365
TICKS_PER_YEAR = TICKS_PER_DAY * DAYS_PER_YEAR  # 35,040

TICKS_PER_WEEK = TICKS_PER_DAY * 7  # 672
TICKS_PER_MONTH = TICKS_PER_DAY * 31  # 2,976
"""Chart month = 31 days; the twelfth month is cut short by the end of the year."""


def hour_of_day(tick: int) -> int:
    """Hour (0..23) that ``tick`` falls in."""
    return (tick % TICKS_PER_DAY) // TICKS_PER_HOUR


def ticks_for_hours(hours: float) -> float:
    """Convert a duration in hours to (fractional) ticks."""
    return hours * MINUTES_PER_HOUR / TICK_MINUTES
