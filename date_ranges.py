#!/usr/bin/env python3
"""Date helpers shared by the projectors.

Weekday indexes here follow the Sunday-first convention (0 = Sunday).
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def contains(self, instant: Optional[datetime]) -> bool:
        if instant is None:
            return False
        return self.start <= instant <= self.end


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, datetime.min.time())


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, datetime.max.time().replace(microsecond=999000))


def sunday_weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


def end_of_week(day: date) -> date:
    return day + timedelta(days=6 - sunday_weekday(day))


def current_week_window(now: datetime) -> DateRange:
    """From ``now`` through the coming Saturday, end of day."""
    return DateRange(now, end_of_day(end_of_week(now.date())))


def month_start(day: date) -> date:
    return day.replace(day=1)


def shift_month(day: date, delta_months: int) -> date:
    year = day.year + ((day.month - 1 + delta_months) // 12)
    month = (day.month - 1 + delta_months) % 12 + 1
    return date(year, month, 1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_weekday_offset(year: int, month: int) -> int:
    return sunday_weekday(date(year, month, 1))


__all__ = [
    "DateRange",
    "start_of_day",
    "end_of_day",
    "sunday_weekday",
    "end_of_week",
    "current_week_window",
    "month_start",
    "shift_month",
    "days_in_month",
    "first_weekday_offset",
]
