#!/usr/bin/env python3
"""Orchestrator for schoolcal."""
from __future__ import annotations

import curses
import logging
from typing import Optional

from calendar_service import CalendarService, RenderedViews
from config import Config, load_config
from help_content import HELP_LINES
from keys import (
    CATEGORY_KEYS,
    KEY_BACKSPACE,
    KEY_CAP_H,
    KEY_CAP_L,
    KEY_CAP_Q,
    KEY_CAP_Y,
    KEY_DESELECT_ALL,
    KEY_ENTER,
    KEY_ESC,
    KEY_H,
    KEY_HELP,
    KEY_HIDE,
    KEY_J,
    KEY_K,
    KEY_L,
    KEY_LOGOUT,
    KEY_PREVIOUS,
    KEY_Q,
    KEY_REFRESH,
    KEY_RESET_HIDDEN,
    KEY_SELECT_ALL,
    KEY_SHOW_HIDDEN,
    KEY_SPACE,
    KEY_TAB,
    KEY_TODAY,
    KEY_UNHIDE,
    KEY_UPCOMING,
    KEY_YEAR,
)
from loader import LoadError, resolve_decryptor
from month_grid import FocusEvent
from preferences import Preferences
from state import VIEWS
from store import KeyValueStore
from ui_base import draw_centered_box, draw_footer, draw_header
from view_month import MonthView
from view_table import TableView
from view_week import WeekView

logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    "normal": "normal",
    "recurring": "recurring",
    "half_term": "half term",
    "book_bag": "book bag",
}


def build_service(config: Config) -> CalendarService:
    decrypt = resolve_decryptor(config.decryptor)
    preferences = Preferences(KeyValueStore(config.state_path))
    return CalendarService(config.data_source, preferences, decrypt=decrypt)


class Orchestrator:
    """Owns the curses lifecycle and maps keys to service calls."""

    def __init__(self, config: Optional[Config] = None, *, data_source: Optional[str] = None) -> None:
        self.config = config or load_config()
        if data_source:
            self.config.data_source = data_source
        self.service = build_service(self.config)
        self.state = self.service.state
        self._password = ""
        self._remember = False

    def run(self) -> int:
        try:
            curses.wrapper(self._curses_main)
        except curses.error as exc:
            logger.error(f"Terminal error: {exc}")
            return 1
        return 0

    def _curses_main(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        curses.curs_set(0)
        stdscr.keypad(True)

        if self.service.try_resume():
            self.state.overlay = "none"

        self._draw(stdscr)
        while True:
            ch = stdscr.getch()
            if ch in (-1, curses.ERR):
                continue
            if self.state.overlay == "password":
                if ch == KEY_ESC:
                    break
                self._handle_password_key(ch)
            else:
                if ch in (KEY_Q, KEY_CAP_Q):
                    break
                self._handle_key(ch)
            self._draw(stdscr)

    # Rendering
    def _draw(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        stdscr.erase()
        h, w = stdscr.getmaxyx()

        if self.state.overlay == "password":
            self._render_password(stdscr)
            stdscr.refresh()
            return

        views = self.service.render()
        draw_header(stdscr, self._header_text())
        draw_footer(stdscr, "q: quit   ?: help   Tab: view   1-4: categories   y: year   s: hidden")

        body_y, body_h = 2, max(0, h - 3)
        self._render_view(stdscr, views, body_y, body_h, w)

        if self.state.overlay == "help":
            draw_centered_box(stdscr, list(HELP_LINES) + ["", "Esc to dismiss"])
        elif self.state.overlay in ("error", "message"):
            draw_centered_box(stdscr, [self.state.overlay_message, "", "Press any key to dismiss"])

        stdscr.refresh()

    def _header_text(self) -> str:
        filters = self.state.filters
        enabled = [
            label for key, label in CATEGORY_LABELS.items() if filters.category_enabled(key)
        ]
        hidden = "shown" if filters.show_hidden else "off"
        return (
            f"schoolcal - {self.state.view}   year: {filters.year}   "
            f"hidden: {hidden} ({len(filters.hidden_ids)})   showing: {', '.join(enabled) or 'nothing'}"
        )

    def _render_view(
        self,
        stdscr: "curses.window",  # type: ignore[name-defined]
        views: RenderedViews,
        y: int,
        h: int,
        w: int,
    ) -> None:
        if self.state.view == "month":
            MonthView(views.month).render(stdscr, y, h, w, self.state.month_selected_date)
        elif self.state.view == "week":
            WeekView(views.week).render(stdscr, y, h, w, self.state.week_index)
        else:
            view = TableView(views.table, views.bulk_bar, views.all_selected)
            self.state.table_scroll = view.render(
                stdscr,
                y,
                h,
                w,
                self.state.table_index,
                self.state.table_scroll,
                highlighted_id=self.state.highlighted_id,
            )

    def _render_password(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        lines = [
            "School events are password protected",
            "",
            f"Password: {'*' * len(self._password)}",
            f"Remember me for 7 days: [{'x' if self._remember else ' '}]  (Tab)",
        ]
        if self.state.overlay_message:
            lines += ["", self.state.overlay_message]
        lines += ["", "Enter to unlock, Esc to quit"]
        draw_centered_box(stdscr, lines)

    # Key handling
    def _handle_password_key(self, ch: int) -> None:
        if ch in KEY_ENTER:
            self._unlock()
        elif ch == KEY_TAB:
            self._remember = not self._remember
        elif ch in KEY_BACKSPACE:
            self._password = self._password[:-1]
        elif 32 <= ch < 127:
            self._password += chr(ch)

    def _unlock(self) -> None:
        try:
            self.service.unlock(self._password, remember=self._remember)
        except LoadError as exc:
            self.state.overlay_message = str(exc)
            self._password = ""
            return
        self._password = ""
        self.state.overlay = "none"
        self.state.overlay_message = ""

    def _handle_key(self, ch: int) -> None:
        if self.state.overlay == "help":
            if ch in (KEY_ESC, KEY_HELP):
                self.state.overlay = "none"
            return
        if self.state.overlay in ("error", "message"):
            self.state.overlay = "none"
            return

        if ch == KEY_HELP:
            self.state.overlay = "help"
            return
        if ch == KEY_TAB:
            idx = VIEWS.index(self.state.view)
            self.state.view = VIEWS[(idx + 1) % len(VIEWS)]
            return
        if ch == KEY_TODAY:
            self.service.jump_to_today()
            return
        if ch in CATEGORY_KEYS:
            self.service.toggle_category(CATEGORY_KEYS[ch])
            return
        if ch == KEY_YEAR:
            self.service.cycle_year(+1)
            return
        if ch == KEY_CAP_Y:
            self.service.cycle_year(-1)
            return
        if ch == KEY_SHOW_HIDDEN:
            self.service.toggle_show_hidden()
            return
        if ch == KEY_HIDE:
            self._bulk("hide")
            return
        if ch == KEY_UNHIDE:
            self._bulk("unhide")
            return
        if ch == KEY_RESET_HIDDEN:
            self.service.reset_hidden()
            self._message("All hidden events restored.")
            return
        if ch == KEY_REFRESH:
            self._reload()
            return
        if ch == KEY_LOGOUT:
            self.service.logout()
            self.state.overlay = "password"
            return

        if self.state.view == "month":
            self._handle_month_keys(ch)
        elif self.state.view == "week":
            self._handle_week_keys(ch)
        else:
            self._handle_table_keys(ch)

    def _bulk(self, action: str) -> None:
        bar = self.service.selection.bulk_bar()
        if action == "hide" and bar.offer_hide:
            count = self.service.hide_selected()
            self._message(f"Hid {count} event{'s' if count != 1 else ''}.")
        elif action == "unhide" and bar.offer_unhide:
            count = self.service.unhide_selected()
            self._message(f"Unhid {count} event{'s' if count != 1 else ''}.")

    def _reload(self) -> None:
        try:
            events = self.service.reload()
        except LoadError as exc:
            self.state.overlay = "error"
            self.state.overlay_message = str(exc)
            return
        self._message(f"Reloaded {len(events)} events.")

    def _message(self, text: str) -> None:
        self.state.overlay = "message"
        self.state.overlay_message = text

    def _handle_month_keys(self, ch: int) -> None:
        selected = self.state.month_selected_date
        moves = {
            KEY_H: MonthView.move_day(selected, -1),
            KEY_L: MonthView.move_day(selected, +1),
            KEY_J: MonthView.move_week(selected, +1),
            KEY_K: MonthView.move_week(selected, -1),
        }
        if ch in moves:
            self.service.select_date(moves[ch])
            return
        if ch in (KEY_CAP_H, KEY_CAP_L):
            self.service.shift_month(-1 if ch == KEY_CAP_H else +1)
            return
        if ch in KEY_ENTER:
            command = self.service.click_day(selected)
            if command is not None:
                self.state.view = "table"

    def _handle_week_keys(self, ch: int) -> None:
        view = WeekView(self.service.render().week)
        if ch == KEY_J:
            self.state.week_index = view.move_selection(self.state.week_index, +1)
        elif ch == KEY_K:
            self.state.week_index = view.move_selection(self.state.week_index, -1)
        elif ch in KEY_ENTER and not view.digest.is_empty:
            card = view.digest.cards[view.move_selection(self.state.week_index, 0)]
            # Digest cards start at or after now, so they live on the upcoming tab.
            self.service.apply_focus(FocusEvent(event_id=card.event.id, tab="upcoming"))
            self.state.view = "table"

    def _handle_table_keys(self, ch: int) -> None:
        views = self.service.render()
        view = TableView(views.table, views.bulk_bar, views.all_selected)
        if ch == KEY_J:
            self.state.table_index = view.move_selection(self.state.table_index, +1)
        elif ch == KEY_K:
            self.state.table_index = view.move_selection(self.state.table_index, -1)
        elif ch == KEY_UPCOMING:
            self.service.switch_tab("upcoming")
        elif ch == KEY_PREVIOUS:
            self.service.switch_tab("previous")
        elif ch == KEY_SPACE:
            row = view.row_at(self.state.table_index)
            if row is not None:
                self.service.toggle_selected(row.event.id)
        elif ch == KEY_SELECT_ALL:
            self.service.select_all_visible()
        elif ch == KEY_DESELECT_ALL:
            self.service.deselect_all()


__all__ = ["Orchestrator", "build_service"]
