#!/usr/bin/env python3
"""Core models and ingestion helpers for schoolcal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Literal, Optional, Sequence, Union

logger = logging.getLogger(__name__)

EventId = Union[str, int]

Category = Literal["half_term", "book_bag", "recurring", "normal"]
# Classification priority order.
CATEGORIES: Sequence[Category] = (
    "half_term",
    "book_bag",
    "recurring",
    "normal",
)


@dataclass(frozen=True)
class EventRecord:
    id: EventId
    title: str = ""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    has_end: bool = False
    notes: str = ""
    is_recurring: bool = False
    source_subject: Optional[str] = None
    source_received_at: Optional[datetime] = None


class ValidationError(Exception):
    pass


def parse_instant(value: object) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime into a naive local datetime.

    Returns None for anything unparsable; callers treat that as "never matches".
    """
    if value is None:
        return None
    candidate = str(value).strip()
    if not candidate:
        return None
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _coerce_id(raw_id: object) -> EventId:
    if raw_id is None or raw_id == "":
        raise ValidationError("Missing 'id' field")
    if isinstance(raw_id, bool):
        raise ValidationError("'id' must be a string or integer")
    if isinstance(raw_id, (str, int)):
        return raw_id
    raise ValidationError("'id' must be a string or integer")


def _coerce_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _is_recurring(data: dict) -> bool:
    return bool(data.get("isRecurring")) or data.get("recurring") is True


def normalize_event_payload(data: Any) -> EventRecord:
    if not isinstance(data, dict):
        raise ValidationError("Event record must be a JSON object")

    event_id = _coerce_id(data.get("id"))
    raw_end = data.get("endDate")
    subject = data.get("sourceEmailSubject")

    return EventRecord(
        id=event_id,
        title=_coerce_text(data.get("title")),
        start=parse_instant(data.get("startDate")),
        end=parse_instant(raw_end),
        has_end=bool(raw_end),
        notes=_coerce_text(data.get("notes")),
        is_recurring=_is_recurring(data),
        source_subject=str(subject) if subject else None,
        source_received_at=parse_instant(data.get("sourceEmailReceivedAt")),
    )


def events_from_json(payload: Any) -> List[EventRecord]:
    if not isinstance(payload, list):
        raise ValidationError("Event data must be a JSON array")

    events: List[EventRecord] = []
    seen = set()
    for idx, item in enumerate(payload):
        try:
            event = normalize_event_payload(item)
        except ValidationError as exc:
            logger.warning(f"Skipping event record #{idx}: {exc}")
            continue
        if event.id in seen:
            logger.warning(f"Skipping duplicate event id {event.id!r}")
            continue
        seen.add(event.id)
        events.append(event)

    logger.info(f"Loaded {len(events)} events out of {len(payload)} records")
    return events


__all__ = [
    "EventRecord",
    "EventId",
    "Category",
    "CATEGORIES",
    "ValidationError",
    "parse_instant",
    "normalize_event_payload",
    "events_from_json",
]
