#!/usr/bin/env python3
"""Table projection: upcoming/previous tabs with provenance columns."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import AbstractSet, Iterable, List, Optional, Tuple

from date_ranges import start_of_day
from models import EventId, EventRecord
from state import TabName

NOT_AVAILABLE = "N/A"
FORWARD_PREFIX = "Fwd: "


@dataclass(frozen=True)
class TableRow:
    event: EventRecord
    date_label: str
    hidden: bool
    selected: bool
    source_subject: str
    source_received: str

    @property
    def is_recurring(self) -> bool:
        return self.event.is_recurring


@dataclass(frozen=True)
class EventTable:
    tab: TabName
    rows: Tuple[TableRow, ...]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def empty_message(self) -> Optional[str]:
        return f"No {self.tab} events found." if self.is_empty else None

    @property
    def visible_ids(self) -> List[EventId]:
        return [row.event.id for row in self.rows]

    def index_of(self, event_id: EventId) -> Optional[int]:
        for idx, row in enumerate(self.rows):
            if row.event.id == event_id:
                return idx
        return None


def tab_for(event: EventRecord, today: date) -> Optional[TabName]:
    """Which tab an event lands on, or None when it has no usable start."""
    if event.start is None:
        return None
    return "upcoming" if event.start >= start_of_day(today) else "previous"


def partition(
    events: Iterable[EventRecord],
    tab: TabName,
    *,
    today: date,
) -> List[EventRecord]:
    picked = [ev for ev in events if tab_for(ev, today) == tab]
    # sorted() is stable, reverse=True keeps ties in input order.
    return sorted(picked, key=lambda ev: ev.start, reverse=(tab == "previous"))


def format_row_date(instant: datetime) -> str:
    return f"{instant:%a, %b} {instant.day}"


def format_received(instant: datetime) -> str:
    return f"{instant:%b} {instant.day}, {instant:%I:%M %p}"


def format_source(event: EventRecord) -> Tuple[str, str]:
    subject = event.source_subject or NOT_AVAILABLE
    if subject.startswith(FORWARD_PREFIX):
        subject = subject[len(FORWARD_PREFIX):]
    received = (
        format_received(event.source_received_at)
        if event.source_received_at is not None
        else NOT_AVAILABLE
    )
    return subject, received


def project_table(
    events: Iterable[EventRecord],
    tab: TabName,
    hidden_ids: AbstractSet[EventId],
    selected_ids: AbstractSet[EventId],
    *,
    today: Optional[date] = None,
) -> EventTable:
    today = today or date.today()
    rows: List[TableRow] = []
    for ev in partition(events, tab, today=today):
        subject, received = format_source(ev)
        rows.append(
            TableRow(
                event=ev,
                date_label=format_row_date(ev.start),
                hidden=ev.id in hidden_ids,
                selected=ev.id in selected_ids,
                source_subject=subject,
                source_received=received,
            )
        )
    return EventTable(tab=tab, rows=tuple(rows))


__all__ = [
    "TableRow",
    "EventTable",
    "NOT_AVAILABLE",
    "tab_for",
    "partition",
    "format_source",
    "format_row_date",
    "format_received",
    "project_table",
]
