#!/usr/bin/env python3
"""App state containers for schoolcal."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Literal, Optional, Sequence, Set

from models import CATEGORIES, Category, EventId, EventRecord

ViewName = Literal["month", "week", "table"]
VIEWS: Sequence[ViewName] = ("month", "week", "table")

TabName = Literal["upcoming", "previous"]
OverlayKind = Literal["none", "help", "error", "message", "password"]

ALL_YEARS = "All"
RECEPTION = "Reception"
YEAR_CHOICES: Sequence[str] = (ALL_YEARS, RECEPTION, "1", "2", "3", "4", "5", "6")


def _default_categories() -> Dict[Category, bool]:
    return {name: True for name in CATEGORIES}


@dataclass
class FilterState:
    categories: Dict[Category, bool] = field(default_factory=_default_categories)
    year: str = ALL_YEARS
    show_hidden: bool = False
    hidden_ids: Set[EventId] = field(default_factory=set)

    def category_enabled(self, category: Category) -> bool:
        return self.categories.get(category, True)

    def toggle_category(self, category: Category) -> bool:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category}")
        enabled = not self.category_enabled(category)
        self.categories[category] = enabled
        return enabled

    def is_hidden(self, event_id: EventId) -> bool:
        return event_id in self.hidden_ids


@dataclass
class AppState:
    view: ViewName = "month"
    overlay: OverlayKind = "password"
    overlay_message: str = ""

    events: List[EventRecord] = field(default_factory=list)
    unlocked: bool = False
    filters: FilterState = field(default_factory=FilterState)

    # Always day 1 of the displayed month.
    current_month: date = field(default_factory=lambda: date.today().replace(day=1))
    month_selected_date: date = field(default_factory=date.today)

    tab: TabName = "upcoming"
    table_index: int = 0
    table_scroll: int = 0
    highlighted_id: Optional[EventId] = None

    week_index: int = 0


__all__ = [
    "AppState",
    "FilterState",
    "ViewName",
    "VIEWS",
    "TabName",
    "OverlayKind",
    "ALL_YEARS",
    "RECEPTION",
    "YEAR_CHOICES",
]
