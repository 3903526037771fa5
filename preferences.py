#!/usr/bin/env python3
"""Namespaced, JSON-valued preferences on top of the key-value store.

Every save is best-effort: a storage failure is logged and the in-memory
state stays authoritative for the rest of the session.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional

from models import CATEGORIES, Category
from state import FilterState
from store import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

KEY_PREFIX = "school-events-"
YEAR_KEY = KEY_PREFIX + "year-filter"
HIDDEN_IDS_KEY = KEY_PREFIX + "hidden-ids"
SHOW_HIDDEN_KEY = KEY_PREFIX + "show-hidden"
FILTERS_KEY = KEY_PREFIX + "filters"
SAVED_AUTH_KEY = KEY_PREFIX + "saved-auth"

AUTH_TTL_MS = 7 * 24 * 60 * 60 * 1000

# Persisted names of the category flags.
_CATEGORY_KEYS: Dict[Category, str] = {
    "normal": "normal",
    "recurring": "recurring",
    "half_term": "halfTerm",
    "book_bag": "bookBag",
}


def _now_ms() -> int:
    return int(time.time() * 1000)


class Preferences:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> None:
        try:
            self._store.load()
        except StorageError as exc:
            logger.warning(f"Ignoring unreadable preferences: {exc}")

    def _read(self, key: str) -> Any:
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring malformed value for {key}")
            return None

    def _write(self, key: str, value: Any) -> None:
        try:
            self._store.set(key, json.dumps(value))
        except StorageError as exc:
            logger.warning(f"Could not persist {key}: {exc}")

    def _remove(self, key: str) -> None:
        try:
            self._store.remove(key)
        except StorageError as exc:
            logger.warning(f"Could not remove {key}: {exc}")

    # Filter state
    def load_filter_state(self) -> FilterState:
        state = FilterState()

        year = self._read(YEAR_KEY)
        if isinstance(year, (str, int)) and not isinstance(year, bool) and str(year).strip():
            state.year = str(year)

        show_hidden = self._read(SHOW_HIDDEN_KEY)
        if isinstance(show_hidden, bool):
            state.show_hidden = show_hidden

        hidden_ids = self._read(HIDDEN_IDS_KEY)
        if isinstance(hidden_ids, list):
            state.hidden_ids = {
                item
                for item in hidden_ids
                if isinstance(item, (str, int)) and not isinstance(item, bool)
            }

        flags = self._read(FILTERS_KEY)
        if isinstance(flags, dict):
            for category in CATEGORIES:
                value = flags.get(_CATEGORY_KEYS[category])
                if isinstance(value, bool):
                    state.categories[category] = value

        return state

    def save_year(self, state: FilterState) -> None:
        self._write(YEAR_KEY, state.year)

    def save_show_hidden(self, state: FilterState) -> None:
        self._write(SHOW_HIDDEN_KEY, state.show_hidden)

    def save_hidden_ids(self, state: FilterState) -> None:
        self._write(HIDDEN_IDS_KEY, sorted(state.hidden_ids, key=str))

    def clear_hidden_ids(self) -> None:
        self._remove(HIDDEN_IDS_KEY)

    def save_categories(self, state: FilterState) -> None:
        payload = {
            _CATEGORY_KEYS[category]: state.category_enabled(category)
            for category in CATEGORIES
        }
        self._write(FILTERS_KEY, payload)

    # Session resumption
    def save_auth(self, password: str, *, now_ms: Optional[int] = None) -> None:
        now_ms = _now_ms() if now_ms is None else now_ms
        self._write(SAVED_AUTH_KEY, {"password": password, "expiry": now_ms + AUTH_TTL_MS})

    def load_auth(self, *, now_ms: Optional[int] = None) -> Optional[str]:
        saved = self._read(SAVED_AUTH_KEY)
        if saved is None:
            return None
        now_ms = _now_ms() if now_ms is None else now_ms
        password = saved.get("password") if isinstance(saved, dict) else None
        expiry = saved.get("expiry") if isinstance(saved, dict) else None
        if (
            not isinstance(password, str)
            or not isinstance(expiry, (int, float))
            or now_ms > expiry
        ):
            logger.info("Discarding expired or malformed saved session")
            self.clear_auth()
            return None
        return password

    def clear_auth(self) -> None:
        self._remove(SAVED_AUTH_KEY)


__all__ = [
    "Preferences",
    "KEY_PREFIX",
    "YEAR_KEY",
    "HIDDEN_IDS_KEY",
    "SHOW_HIDDEN_KEY",
    "FILTERS_KEY",
    "SAVED_AUTH_KEY",
    "AUTH_TTL_MS",
]
