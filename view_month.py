#!/usr/bin/env python3
"""Month view rendering and interactions."""

from __future__ import annotations

import calendar
import curses
from datetime import date, timedelta

from month_grid import DayCell, MonthGrid
from ui_base import CATEGORY_MARKERS, color_attr, fit, safe_addnstr

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
_DEFAULT_CELL_W = 9
_MIN_CELL_W = 4
_MAX_DOTS = 4


class MonthView:
    def __init__(self, grid: MonthGrid):
        self.grid = grid

    def render(
        self,
        stdscr: "curses.window",  # type: ignore[name-defined]
        y: int,
        h: int,
        w: int,
        selected_date: date,
    ) -> None:
        if h <= 0 or w <= 0:
            return

        title = f"{calendar.month_name[self.grid.month]} {self.grid.year}"
        safe_addnstr(stdscr, y, 0, title, max(0, w - 1), curses.A_BOLD)

        cell_w = _DEFAULT_CELL_W
        if cell_w * 7 > w:
            cell_w = max(_MIN_CELL_W, w // 7)

        header_y = y + 2
        for idx, name in enumerate(WEEKDAYS):
            safe_addnstr(stdscr, header_y, idx * cell_w, fit(name, cell_w), cell_w, curses.A_DIM)

        row, col = 0, self.grid.leading_blanks
        grid_top = header_y + 1
        for cell in self.grid.days:
            cell_y = grid_top + row
            if cell_y >= y + h - 1:
                break
            self._draw_cell(stdscr, cell_y, col * cell_w, cell_w, cell, selected_date)
            col += 1
            if col == 7:
                col = 0
                row += 1

        details_y = grid_top + row + 2
        cell = self.grid.cell(selected_date)
        if cell is not None:
            self._draw_day_details(stdscr, details_y, y + h - details_y, w, cell)

    def _draw_cell(
        self,
        stdscr: "curses.window",  # type: ignore[name-defined]
        y: int,
        x: int,
        cell_w: int,
        cell: DayCell,
        selected_date: date,
    ) -> None:
        attr = 0
        if cell.is_today:
            attr |= curses.A_BOLD
        if cell.day == selected_date:
            attr |= curses.A_REVERSE
        label = f"{cell.day.day:2d}"
        safe_addnstr(stdscr, y, x, label, cell_w, attr)

        dot_x = x + len(label)
        for entry in cell.entries[:_MAX_DOTS]:
            if dot_x >= x + cell_w - 1:
                break
            dot_attr = color_attr(entry.category)
            if entry.hidden:
                dot_attr |= curses.A_DIM
            safe_addnstr(stdscr, y, dot_x, CATEGORY_MARKERS[entry.category], 1, dot_attr)
            dot_x += 1

    def _draw_day_details(
        self,
        stdscr: "curses.window",  # type: ignore[name-defined]
        y: int,
        h: int,
        w: int,
        cell: DayCell,
    ) -> None:
        if h <= 0:
            return
        heading = f"{cell.day:%A %d %B}"
        safe_addnstr(stdscr, y, 0, heading, max(0, w - 1), curses.A_BOLD)
        if not cell.has_events:
            safe_addnstr(stdscr, y + 1, 0, "No events.", max(0, w - 1), curses.A_DIM)
            return
        for offset, entry in enumerate(cell.entries, start=1):
            if offset >= h:
                break
            attr = curses.A_DIM if entry.hidden else 0
            marker = CATEGORY_MARKERS[entry.category]
            safe_addnstr(stdscr, y + offset, 0, f"{marker} {entry.event.title}", max(0, w - 1), attr)

    @staticmethod
    def move_day(selected_date: date, delta_days: int) -> date:
        return selected_date + timedelta(days=delta_days)

    @staticmethod
    def move_week(selected_date: date, delta_weeks: int) -> date:
        return selected_date + timedelta(days=7 * delta_weeks)


__all__ = ["MonthView", "WEEKDAYS"]
