#!/usr/bin/env python3
"""Checkbox selection and the hide/unhide bulk actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Set

from models import EventId
from state import FilterState

logger = logging.getLogger(__name__)

SaveHidden = Callable[[FilterState], None]


@dataclass(frozen=True)
class BulkBar:
    visible: bool
    count: int = 0
    label: str = ""
    offer_hide: bool = False
    offer_unhide: bool = False


def selection_label(count: int) -> str:
    return f"{count} item{'s' if count != 1 else ''} selected"


class SelectionController:
    """Tracks checked rows and commits them into the hidden-id set."""

    def __init__(self, filters: FilterState, save_hidden: Optional[SaveHidden] = None) -> None:
        self._filters = filters
        self._save_hidden = save_hidden
        self._selected: Set[EventId] = set()

    @property
    def selected(self) -> Set[EventId]:
        return set(self._selected)

    def is_selected(self, event_id: EventId) -> bool:
        return event_id in self._selected

    def toggle(self, event_id: EventId) -> bool:
        """Flip one checkbox; returns whether the id is now selected."""
        if event_id in self._selected:
            self._selected.discard(event_id)
            return False
        self._selected.add(event_id)
        return True

    def select_all(self, visible_ids: Iterable[EventId]) -> None:
        self._selected.update(visible_ids)

    def deselect_all(self) -> None:
        self._selected.clear()

    clear = deselect_all

    def all_selected(self, visible_ids: Iterable[EventId]) -> bool:
        visible = list(visible_ids)
        return bool(visible) and all(event_id in self._selected for event_id in visible)

    def hide_selected(self) -> Set[EventId]:
        moved = set(self._selected)
        self._filters.hidden_ids |= moved
        self._commit(f"Hid {len(moved)} events")
        return moved

    def unhide_selected(self) -> Set[EventId]:
        moved = self._selected & self._filters.hidden_ids
        self._filters.hidden_ids -= self._selected
        self._commit(f"Unhid {len(moved)} events")
        return moved

    def _commit(self, message: str) -> None:
        if self._save_hidden is not None:
            self._save_hidden(self._filters)
        logger.info(message)
        self._selected.clear()

    def bulk_bar(self) -> BulkBar:
        count = len(self._selected)
        if count == 0:
            return BulkBar(visible=False)
        hidden_count = sum(1 for event_id in self._selected if self._filters.is_hidden(event_id))
        return BulkBar(
            visible=True,
            count=count,
            label=selection_label(count),
            offer_hide=hidden_count < count,
            offer_unhide=hidden_count > 0,
        )


__all__ = ["BulkBar", "SelectionController", "selection_label"]
