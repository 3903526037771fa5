"""Help and cheatsheet content for the schoolcal TUI."""

from __future__ import annotations

HELP_LINES: tuple[str, ...] = (
    "Shortcuts",
    "",
    "q            quit",
    "?            toggle this help",
    "Tab          cycle month / week / table",
    "t            jump to today",
    "hjkl         month: move day",
    "j / k        table/week: move row",
    "r            reload the events file",
    "H / L        month: prev/next month",
    "Enter        month: show day's first event in the table",
    "u / p        table: upcoming / previous tab",
    "Space        table: toggle row checkbox",
    "a / A        table: select all visible / clear selection",
    "x / X        hide / unhide selected",
    "s            show or hide hidden events",
    "y / Y        next / previous year filter",
    "1 2 3 4      toggle normal / recurring / half term / book bag",
    "R            reset all hidden events",
    "O            log out and forget saved password",
    "Esc          dismiss overlays",
)

__all__ = ["HELP_LINES"]
