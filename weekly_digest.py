#!/usr/bin/env python3
"""Weekly digest: what starts between now and Saturday night."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import AbstractSet, Iterable, Optional, Tuple

from date_ranges import DateRange, current_week_window
from models import EventId, EventRecord

EMPTY_MESSAGE = "No upcoming events this week."
NO_NOTES = "No description available."


@dataclass(frozen=True)
class DigestCard:
    event: EventRecord
    date_label: str
    notes: str
    hidden: bool


@dataclass(frozen=True)
class WeeklyDigest:
    window: DateRange
    cards: Tuple[DigestCard, ...]

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def empty_message(self) -> Optional[str]:
        return EMPTY_MESSAGE if self.is_empty else None


def format_card_date(instant: datetime) -> str:
    return f"{instant:%a, %b} {instant.day}"


def project_week(
    events: Iterable[EventRecord],
    hidden_ids: AbstractSet[EventId],
    *,
    now: Optional[datetime] = None,
) -> WeeklyDigest:
    now = now or datetime.now()
    window = current_week_window(now)

    # Start date only; a span that began before now is not in the digest.
    in_window = [ev for ev in events if window.contains(ev.start)]
    in_window.sort(key=lambda ev: ev.start)

    cards = tuple(
        DigestCard(
            event=ev,
            date_label=format_card_date(ev.start),
            notes=ev.notes or NO_NOTES,
            hidden=ev.id in hidden_ids,
        )
        for ev in in_window
    )
    return WeeklyDigest(window=window, cards=cards)


__all__ = [
    "DigestCard",
    "WeeklyDigest",
    "EMPTY_MESSAGE",
    "NO_NOTES",
    "format_card_date",
    "project_week",
]
