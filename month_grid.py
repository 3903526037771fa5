#!/usr/bin/env python3
"""Month grid projection: which events cover which day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import AbstractSet, FrozenSet, Iterable, List, Optional, Tuple

from date_ranges import days_in_month, first_weekday_offset, month_start, start_of_day
from filters import classify
from models import Category, EventId, EventRecord
from state import TabName


@dataclass(frozen=True)
class DayEntry:
    event: EventRecord
    category: Category
    hidden: bool


@dataclass(frozen=True)
class DayCell:
    day: date
    entries: Tuple[DayEntry, ...]
    is_today: bool

    @property
    def has_events(self) -> bool:
        return bool(self.entries)

    @property
    def has_hidden(self) -> bool:
        return any(entry.hidden for entry in self.entries)

    @property
    def categories(self) -> FrozenSet[Category]:
        return frozenset(entry.category for entry in self.entries)

    @property
    def tooltip(self) -> str:
        return "\n".join(entry.event.title for entry in self.entries)


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    leading_blanks: int
    days: Tuple[DayCell, ...]

    def cell(self, day: date) -> Optional[DayCell]:
        if day.year != self.year or day.month != self.month:
            return None
        return self.days[day.day - 1]


@dataclass(frozen=True)
class FocusEvent:
    """Ask the table to show ``event_id`` on ``tab`` and highlight it."""

    event_id: EventId
    tab: TabName


def event_covers_day(event: EventRecord, day: date) -> bool:
    if event.start is None:
        return False
    if event.has_end:
        if event.end is None:
            return False
        return event.start.date() <= day <= event.end.date()
    return event.start.date() == day


def _start_key(event: EventRecord) -> datetime:
    return event.start or datetime.max


def project_month(
    events: Iterable[EventRecord],
    month: date,
    hidden_ids: AbstractSet[EventId],
    *,
    today: Optional[date] = None,
) -> MonthGrid:
    today = today or date.today()
    first = month_start(month)
    year, month_num = first.year, first.month

    ordered = sorted(
        (ev for ev in events if ev.start is not None),
        key=_start_key,
    )

    cells: List[DayCell] = []
    for day_num in range(1, days_in_month(year, month_num) + 1):
        day = date(year, month_num, day_num)
        entries = tuple(
            DayEntry(event=ev, category=classify(ev), hidden=ev.id in hidden_ids)
            for ev in ordered
            if event_covers_day(ev, day)
        )
        cells.append(DayCell(day=day, entries=entries, is_today=day == today))

    return MonthGrid(
        year=year,
        month=month_num,
        leading_blanks=first_weekday_offset(year, month_num),
        days=tuple(cells),
    )


def select_day(cell: DayCell, *, today: Optional[date] = None) -> Optional[FocusEvent]:
    if not cell.entries:
        return None
    first = cell.entries[0].event
    cutoff = start_of_day(today or date.today())
    tab: TabName = "upcoming" if first.start is not None and first.start >= cutoff else "previous"
    return FocusEvent(event_id=first.id, tab=tab)


__all__ = [
    "DayEntry",
    "DayCell",
    "MonthGrid",
    "FocusEvent",
    "event_covers_day",
    "project_month",
    "select_day",
]
