#!/usr/bin/env python3
"""Table view rendering and interactions."""

from __future__ import annotations

import curses
from typing import List, Sequence

from event_table import EventTable, TableRow
from selection import BulkBar
from ui_base import clamp, fit, safe_addnstr

_HEADERS: Sequence[str] = ("", "date", "event", "source", "notes")
_MIN_WIDTHS: Sequence[int] = (3, 6, 10, 8, 6)
_MAX_WIDTHS: Sequence[int] = (3, 12, 50, 36, 60)
_GAP_WIDTH = 1
_RECURRING_MARK = "↻ "


def _row_cells(row: TableRow) -> List[str]:
    checkbox = "[x]" if row.selected else "[ ]"
    title = (_RECURRING_MARK if row.is_recurring else "") + row.event.title
    source = f"{row.source_subject} ({row.source_received})"
    return [checkbox, row.date_label, title, source, row.event.notes]


def _column_widths(samples: Sequence[Sequence[str]], usable_w: int) -> List[int]:
    widths: List[int] = []
    for idx, header in enumerate(_HEADERS):
        data_len = max((len(row[idx]) for row in samples), default=0)
        widths.append(max(_MIN_WIDTHS[idx], min(_MAX_WIDTHS[idx], max(len(header), data_len))))

    total_width = sum(widths) + (len(widths) - 1) * _GAP_WIDTH
    while total_width > usable_w and any(cur > mn for cur, mn in zip(widths, _MIN_WIDTHS)):
        largest_idx = max(range(len(widths)), key=lambda idx: widths[idx] - _MIN_WIDTHS[idx])
        widths[largest_idx] -= 1
        total_width -= 1

    # Give leftover room to the notes column.
    if total_width < usable_w:
        widths[-1] += usable_w - total_width
    return widths


class TableView:
    def __init__(self, table: EventTable, bulk_bar: BulkBar, all_selected: bool):
        self.table = table
        self.bulk_bar = bulk_bar
        self.all_selected = all_selected

    def render(
        self,
        stdscr: "curses.window",  # type: ignore[name-defined]
        y: int,
        h: int,
        w: int,
        selected_idx: int,
        scroll: int,
        *,
        highlighted_id=None,
    ) -> int:
        usable_w = max(0, w - 1)
        if h <= 2 or usable_w <= 0:
            return scroll

        tabs = "  ".join(
            f"[{name.title()}]" if name == self.table.tab else f" {name.title()} "
            for name in ("upcoming", "previous")
        )
        safe_addnstr(stdscr, y, 0, tabs, usable_w, curses.A_BOLD)

        bar_text = ""
        if self.bulk_bar.visible:
            actions = []
            if self.bulk_bar.offer_hide:
                actions.append("x: hide")
            if self.bulk_bar.offer_unhide:
                actions.append("X: unhide")
            actions.append("A: clear")
            bar_text = f"{self.bulk_bar.label}   " + "   ".join(actions)
        safe_addnstr(stdscr, y + 1, 0, bar_text, usable_w, curses.A_REVERSE if bar_text else 0)

        samples = [_row_cells(row) for row in self.table.rows]
        widths = _column_widths(samples, usable_w)
        starts: List[int] = []
        current_x = 0
        for width in widths:
            starts.append(current_x)
            current_x += width + _GAP_WIDTH

        header_y = y + 2
        headers = list(_HEADERS)
        headers[0] = "[x]" if self.all_selected else "[ ]"
        for idx, header in enumerate(headers):
            safe_addnstr(stdscr, header_y, starts[idx], fit(header, widths[idx]), widths[idx], curses.A_BOLD)

        data_top = header_y + 1
        data_height = y + h - data_top
        if data_height <= 0:
            return scroll

        if self.table.is_empty:
            safe_addnstr(stdscr, data_top, 0, self.table.empty_message or "", usable_w, curses.A_DIM)
            return 0

        total_rows = len(self.table.rows)
        selected_idx = clamp(selected_idx, 0, total_rows - 1)
        scroll = clamp(scroll, 0, total_rows - 1)
        if selected_idx < scroll:
            scroll = selected_idx
        elif selected_idx >= scroll + data_height:
            scroll = selected_idx - data_height + 1

        for offset, row in enumerate(self.table.rows[scroll : scroll + data_height]):
            idx = scroll + offset
            attr = curses.A_DIM if row.hidden else 0
            if row.event.id == highlighted_id:
                attr |= curses.A_BOLD
            if idx == selected_idx:
                attr |= curses.A_REVERSE
            for col_idx, text in enumerate(samples[idx]):
                safe_addnstr(
                    stdscr,
                    data_top + offset,
                    starts[col_idx],
                    fit(text, widths[col_idx]),
                    widths[col_idx],
                    attr,
                )
        return scroll

    def move_selection(self, selected_idx: int, delta: int) -> int:
        if self.table.is_empty:
            return 0
        return clamp(selected_idx + delta, 0, len(self.table.rows) - 1)

    def row_at(self, selected_idx: int) -> TableRow | None:
        if self.table.is_empty:
            return None
        return self.table.rows[clamp(selected_idx, 0, len(self.table.rows) - 1)]


__all__ = ["TableView"]
