"""Shared schedules and reference dates for the operating hours tests."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from restaurant_hours.services.business.hours import DayOfWeek, DaySchedule

# calendar week used throughout: Monday 2026-10-19 .. Sunday 2026-10-25
WEEK_START_DAY = 19

_DAY_NUMBER = {
    DayOfWeek.MONDAY: 19,
    DayOfWeek.TUESDAY: 20,
    DayOfWeek.WEDNESDAY: 21,
    DayOfWeek.THURSDAY: 22,
    DayOfWeek.FRIDAY: 23,
    DayOfWeek.SATURDAY: 24,
    DayOfWeek.SUNDAY: 25,
}


def at(day: DayOfWeek, hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 10, _DAY_NUMBER[day], hour, minute)


def week(open_time: str = "09:00", close_time: str = "18:00", closed: Optional[set] = None,
         **overrides: DaySchedule) -> Dict[DayOfWeek, DaySchedule]:
    closed = closed or set()
    hours = {}
    for day in DayOfWeek:
        if day.value in overrides:
            hours[day] = overrides[day.value]
        elif day in closed:
            hours[day] = DaySchedule(open="00:00", close="00:00", closed=True)
        else:
            hours[day] = DaySchedule(open=open_time, close=close_time)
    return hours


def all_closed() -> Dict[DayOfWeek, DaySchedule]:
    return week(closed=set(DayOfWeek))
