#!/usr/bin/env python3
"""Basic UI helpers for curses rendering."""

from __future__ import annotations

import curses
import textwrap
from typing import Dict, Iterable, List

from models import Category

_COLOR_PAIRS: Dict[str, int] = {}

# (pair number, foreground) per palette entry.
_PALETTE = {
    "box": (1, curses.COLOR_WHITE),
    "half_term": (2, curses.COLOR_MAGENTA),
    "book_bag": (3, curses.COLOR_GREEN),
    "recurring": (4, curses.COLOR_YELLOW),
    "normal": (5, curses.COLOR_CYAN),
}

CATEGORY_MARKERS: Dict[Category, str] = {
    "half_term": "H",
    "book_bag": "B",
    "recurring": "R",
    "normal": "*",
}


def color_attr(name: str) -> int:
    if name in _COLOR_PAIRS:
        return _COLOR_PAIRS[name]
    attr = 0
    if curses.has_colors() and name in _PALETTE:
        pair, fg = _PALETTE[name]
        try:
            curses.init_pair(pair, fg, curses.COLOR_BLACK)
            attr = curses.color_pair(pair)
        except curses.error:
            attr = 0
    _COLOR_PAIRS[name] = attr
    return attr


def safe_addnstr(
    stdscr: "curses.window",  # type: ignore[name-defined]
    y: int,
    x: int,
    text: str,
    width: int,
    attr: int = 0,
) -> None:
    if width <= 0:
        return
    try:
        stdscr.addnstr(y, x, text, width, attr)
    except curses.error:
        pass


def draw_header(stdscr: "curses.window", text: str) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    if w <= 0 or h <= 0:
        return
    safe_addnstr(stdscr, 0, 0, text.ljust(max(1, w - 1)), max(0, w - 1), curses.A_BOLD)


def draw_footer(stdscr: "curses.window", text: str) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    if w <= 0 or h <= 0:
        return
    safe_addnstr(stdscr, h - 1, 0, text.ljust(max(1, w - 1)), max(0, w - 1), curses.A_DIM)


def draw_centered_box(stdscr: "curses.window", lines: Iterable[str]) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    lines_list = list(lines) or [""]
    win_h = min(len(lines_list) + 2, h - 2)
    win_w = min(max(len(line) for line in lines_list) + 4, w - 2)
    if win_h < 3 or win_w < 5:
        return
    win_y = (h - win_h) // 2
    win_x = (w - win_w) // 2
    win = stdscr.derwin(win_h, win_w, win_y, win_x)
    attr = color_attr("box")
    if attr:
        win.bkgd(" ", attr)
        win.attrset(attr)
    win.erase()
    win.border()
    for idx, line in enumerate(lines_list[: win_h - 2], start=1):
        safe_addnstr(win, idx, 2, line[: win_w - 4], win_w - 4, attr)
    win.refresh()


def wrap_text(value: str, width: int) -> List[str]:
    if width <= 0:
        return [""]
    text = "" if value is None else str(value)
    lines: List[str] = []
    for part in text.splitlines() or [text]:
        wrapped = textwrap.wrap(part, width=width, break_long_words=True)
        lines.extend(wrapped or [""])
    return lines or [""]


def fit(text: str, width: int) -> str:
    if width <= 0:
        return ""
    if len(text) <= width:
        return text.ljust(width)
    if width == 1:
        return text[:1]
    return text[: width - 1] + "~"


def clamp(value: int, min_value: int, max_value: int) -> int:
    return max(min_value, min(value, max_value))


__all__ = [
    "CATEGORY_MARKERS",
    "color_attr",
    "safe_addnstr",
    "draw_header",
    "draw_footer",
    "draw_centered_box",
    "wrap_text",
    "fit",
    "clamp",
]
