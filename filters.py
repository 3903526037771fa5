#!/usr/bin/env python3
"""Filter engine: hidden ids, categories and the year selector."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List, Optional

from models import Category, EventRecord
from state import ALL_YEARS, RECEPTION, FilterState


def classify(event: EventRecord) -> Category:
    """Exactly one category per event, first match wins."""
    title = (event.title or "").lower()
    if "half term" in title:
        return "half_term"
    if "book bag" in title:
        return "book_bag"
    if event.is_recurring:
        return "recurring"
    return "normal"


def _search_text(event: EventRecord) -> str:
    return f"{event.title or ''} {event.notes or ''}".lower()


@lru_cache(maxsize=32)
def year_pattern(year: str) -> "re.Pattern[str]":
    # Loose free-text match: "Year 13 Trip" also matches "3".
    return re.compile(rf"(year|yr|yrs|y)\s*.*{re.escape(year)}", re.IGNORECASE)


def matches_year(event: EventRecord, year: str) -> bool:
    if year == ALL_YEARS:
        return True
    text = _search_text(event)
    if year == RECEPTION:
        return "reception" in text
    return year_pattern(year).search(text) is not None


def filter_events(
    events: Iterable[EventRecord],
    filter_state: FilterState,
    show_hidden: Optional[bool] = None,
) -> List[EventRecord]:
    if show_hidden is None:
        show_hidden = filter_state.show_hidden

    filtered = list(events)

    if not show_hidden:
        filtered = [ev for ev in filtered if ev.id not in filter_state.hidden_ids]

    filtered = [ev for ev in filtered if filter_state.category_enabled(classify(ev))]

    if filter_state.year == ALL_YEARS:
        return filtered
    return [ev for ev in filtered if matches_year(ev, filter_state.year)]


__all__ = ["classify", "matches_year", "year_pattern", "filter_events"]
