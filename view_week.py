#!/usr/bin/env python3
"""Weekly digest rendering."""

from __future__ import annotations

import curses

from ui_base import clamp, safe_addnstr, wrap_text
from weekly_digest import WeeklyDigest

_NOTES_LINES = 2


class WeekView:
    def __init__(self, digest: WeeklyDigest):
        self.digest = digest

    def render(
        self,
        stdscr: "curses.window",  # type: ignore[name-defined]
        y: int,
        h: int,
        w: int,
        selected_idx: int,
    ) -> None:
        usable_w = max(0, w - 1)
        if h <= 0 or usable_w <= 0:
            return

        end = self.digest.window.end
        safe_addnstr(stdscr, y, 0, f"This week (until {end:%a %d %b})", usable_w, curses.A_BOLD)

        if self.digest.is_empty:
            safe_addnstr(stdscr, y + 2, 0, self.digest.empty_message or "", usable_w, curses.A_DIM)
            return

        selected_idx = clamp(selected_idx, 0, len(self.digest.cards) - 1)
        cursor = y + 2
        bottom = y + h
        for idx, card in enumerate(self.digest.cards):
            if cursor >= bottom:
                break
            attr = curses.A_DIM if card.hidden else 0
            title_attr = attr | curses.A_BOLD
            if idx == selected_idx:
                title_attr |= curses.A_REVERSE
            safe_addnstr(stdscr, cursor, 0, f"{card.date_label}  {card.event.title}", usable_w, title_attr)
            cursor += 1
            for line in wrap_text(card.notes, max(1, usable_w - 2))[:_NOTES_LINES]:
                if cursor >= bottom:
                    break
                safe_addnstr(stdscr, cursor, 2, line, usable_w - 2, attr | curses.A_DIM)
                cursor += 1
            cursor += 1

    def move_selection(self, selected_idx: int, delta: int) -> int:
        if self.digest.is_empty:
            return 0
        return clamp(selected_idx + delta, 0, len(self.digest.cards) - 1)


__all__ = ["WeekView"]
