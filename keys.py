#!/usr/bin/env python3
"""Key constants and mappings."""
from __future__ import annotations

from typing import Dict

from models import Category

KEY_Q = ord("q")
KEY_CAP_Q = ord("Q")
KEY_HELP = ord("?")
KEY_TODAY = ord("t")
KEY_ESC = 27
KEY_TAB = 9
KEY_ENTER = (10, 13)
KEY_SPACE = ord(" ")
KEY_BACKSPACE = (8, 127, 263)

KEY_H = ord("h")
KEY_J = ord("j")
KEY_K = ord("k")
KEY_L = ord("l")
KEY_CAP_H = ord("H")
KEY_CAP_L = ord("L")

KEY_UPCOMING = ord("u")
KEY_PREVIOUS = ord("p")
KEY_SELECT_ALL = ord("a")
KEY_DESELECT_ALL = ord("A")
KEY_HIDE = ord("x")
KEY_UNHIDE = ord("X")
KEY_SHOW_HIDDEN = ord("s")
KEY_YEAR = ord("y")
KEY_CAP_Y = ord("Y")
KEY_RESET_HIDDEN = ord("R")
KEY_LOGOUT = ord("O")
KEY_REFRESH = ord("r")

CATEGORY_KEYS: Dict[int, Category] = {
    ord("1"): "normal",
    ord("2"): "recurring",
    ord("3"): "half_term",
    ord("4"): "book_bag",
}


__all__ = [
    "KEY_Q",
    "KEY_CAP_Q",
    "KEY_HELP",
    "KEY_TODAY",
    "KEY_ESC",
    "KEY_TAB",
    "KEY_ENTER",
    "KEY_SPACE",
    "KEY_BACKSPACE",
    "KEY_H",
    "KEY_J",
    "KEY_K",
    "KEY_L",
    "KEY_CAP_H",
    "KEY_CAP_L",
    "KEY_UPCOMING",
    "KEY_PREVIOUS",
    "KEY_SELECT_ALL",
    "KEY_DESELECT_ALL",
    "KEY_HIDE",
    "KEY_UNHIDE",
    "KEY_SHOW_HIDDEN",
    "KEY_YEAR",
    "KEY_CAP_Y",
    "KEY_RESET_HIDDEN",
    "KEY_LOGOUT",
    "KEY_REFRESH",
    "CATEGORY_KEYS",
]
