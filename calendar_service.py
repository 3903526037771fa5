#!/usr/bin/env python3
"""Coordinator tying the event store, filters, projectors and persistence together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from date_ranges import month_start, shift_month
from event_table import EventTable, project_table
from filters import filter_events
from loader import Decryptor, LoadError, load_events
from models import Category, EventId, EventRecord
from month_grid import FocusEvent, MonthGrid, project_month, select_day
from preferences import Preferences
from selection import BulkBar, SelectionController
from state import YEAR_CHOICES, AppState, TabName
from weekly_digest import WeeklyDigest, project_week

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedViews:
    month: MonthGrid
    week: WeeklyDigest
    table: EventTable
    bulk_bar: BulkBar
    all_selected: bool


class CalendarService:
    """Owns the app state; every mutation persists before returning."""

    def __init__(
        self,
        source: str,
        preferences: Preferences,
        *,
        decrypt: Optional[Decryptor] = None,
        state: Optional[AppState] = None,
    ) -> None:
        self._source = source
        self._preferences = preferences
        self._decrypt = decrypt
        self._password: Optional[str] = None
        self.state = state or AppState()

        self._preferences.load()
        self.state.filters = self._preferences.load_filter_state()
        self.selection = SelectionController(
            self.state.filters,
            save_hidden=self._preferences.save_hidden_ids,
        )

    @property
    def source(self) -> str:
        return self._source

    # Session
    def unlock(self, password: str, *, remember: bool = False) -> List[EventRecord]:
        """Load the event store; raises LoadError and stays locked on failure."""
        try:
            events = load_events(self._source, password, decrypt=self._decrypt)
        except LoadError:
            logger.warning(f"Unlock failed for {self._source}")
            raise
        self.state.events = events
        self.state.unlocked = True
        self._password = password
        if remember:
            self._preferences.save_auth(password)
        logger.info(f"Unlocked {len(events)} events")
        return events

    def try_resume(self) -> bool:
        password = self._preferences.load_auth()
        if password is None:
            return False
        try:
            self.unlock(password)
        except LoadError as exc:
            logger.warning(f"Saved session could not be resumed: {exc}")
            self._preferences.clear_auth()
            return False
        return True

    def reload(self) -> List[EventRecord]:
        """Re-read the data file with this session's password.

        On LoadError the events already in memory are kept.
        """
        if self._password is None:
            raise LoadError("Nothing to reload: the calendar is locked")
        events = self.unlock(self._password)
        self.selection.deselect_all()
        self.state.highlighted_id = None
        self.state.table_index = 0
        self.state.table_scroll = 0
        return events

    def logout(self) -> None:
        self._preferences.clear_auth()
        self._password = None
        self.state.events = []
        self.state.unlocked = False
        self.selection.deselect_all()

    # Rendering
    def filtered_events(self) -> List[EventRecord]:
        return filter_events(self.state.events, self.state.filters)

    def render(
        self,
        *,
        now: Optional[datetime] = None,
    ) -> RenderedViews:
        now = now or datetime.now()
        today = now.date()
        filtered = self.filtered_events()
        hidden = self.state.filters.hidden_ids

        table = project_table(
            filtered,
            self.state.tab,
            hidden,
            self.selection.selected,
            today=today,
        )
        return RenderedViews(
            month=project_month(filtered, self.state.current_month, hidden, today=today),
            week=project_week(filtered, hidden, now=now),
            table=table,
            bulk_bar=self.selection.bulk_bar(),
            all_selected=self.selection.all_selected(table.visible_ids),
        )

    def visible_table_ids(self, *, today: Optional[date] = None) -> List[EventId]:
        table = project_table(
            self.filtered_events(),
            self.state.tab,
            self.state.filters.hidden_ids,
            self.selection.selected,
            today=today,
        )
        return table.visible_ids

    # Filter mutations
    def toggle_category(self, category: Category) -> bool:
        enabled = self.state.filters.toggle_category(category)
        self._preferences.save_categories(self.state.filters)
        return enabled

    def set_year(self, year: str) -> None:
        self.state.filters.year = year
        self._preferences.save_year(self.state.filters)

    def cycle_year(self, delta: int = 1) -> str:
        current = self.state.filters.year
        idx = YEAR_CHOICES.index(current) if current in YEAR_CHOICES else 0
        year = YEAR_CHOICES[(idx + delta) % len(YEAR_CHOICES)]
        self.set_year(year)
        return year

    def set_show_hidden(self, show_hidden: bool) -> None:
        self.state.filters.show_hidden = show_hidden
        self._preferences.save_show_hidden(self.state.filters)

    def toggle_show_hidden(self) -> bool:
        self.set_show_hidden(not self.state.filters.show_hidden)
        return self.state.filters.show_hidden

    def reset_hidden(self) -> None:
        self.state.filters.hidden_ids.clear()
        self._preferences.clear_hidden_ids()

    # View state
    def switch_tab(self, tab: TabName) -> None:
        if tab == self.state.tab:
            return
        self.state.tab = tab
        self.state.table_index = 0
        self.state.table_scroll = 0

    def shift_month(self, delta_months: int) -> date:
        self.state.current_month = shift_month(self.state.current_month, delta_months)
        self.state.month_selected_date = self.state.current_month
        return self.state.current_month

    def select_date(self, day: date) -> None:
        """Move the month cursor, paging the grid when it leaves the month."""
        self.state.month_selected_date = day
        self.state.current_month = month_start(day)

    def jump_to_today(self, *, today: Optional[date] = None) -> None:
        today = today or date.today()
        self.state.current_month = month_start(today)
        self.state.month_selected_date = today

    def click_day(self, day: date, *, today: Optional[date] = None) -> Optional[FocusEvent]:
        grid = project_month(
            self.filtered_events(),
            day,
            self.state.filters.hidden_ids,
            today=today,
        )
        cell = grid.cell(day)
        command = select_day(cell, today=today) if cell is not None else None
        if command is not None:
            self.apply_focus(command, today=today)
        return command

    def apply_focus(self, command: FocusEvent, *, today: Optional[date] = None) -> None:
        self.switch_tab(command.tab)
        self.state.highlighted_id = command.event_id
        visible = self.visible_table_ids(today=today)
        if command.event_id in visible:
            self.state.table_index = visible.index(command.event_id)

    # Selection
    def toggle_selected(self, event_id: EventId) -> bool:
        return self.selection.toggle(event_id)

    def select_all_visible(self, *, today: Optional[date] = None) -> None:
        self.selection.select_all(self.visible_table_ids(today=today))

    def deselect_all(self) -> None:
        self.selection.deselect_all()

    def hide_selected(self) -> int:
        return len(self.selection.hide_selected())

    def unhide_selected(self) -> int:
        return len(self.selection.unhide_selected())


__all__ = ["CalendarService", "RenderedViews"]
