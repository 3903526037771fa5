from datetime import datetime

import pytest

from models import (
    ValidationError,
    events_from_json,
    normalize_event_payload,
    parse_instant,
)


def _sample_payload() -> dict:
    return {
        "id": "evt-1",
        "title": "Year 3 Trip to the Museum",
        "startDate": "2024-03-01",
        "endDate": "2024-03-03",
        "notes": "Packed lunch required",
        "isRecurring": False,
        "sourceEmailSubject": "Fwd: Trip letter",
        "sourceEmailReceivedAt": "2024-02-20T08:30:00",
    }


def test_normalize_event_payload_creates_record() -> None:
    event = normalize_event_payload(_sample_payload())

    assert event.id == "evt-1"
    assert event.title == "Year 3 Trip to the Museum"
    assert event.start == datetime(2024, 3, 1)
    assert event.end == datetime(2024, 3, 3)
    assert event.has_end is True
    assert event.notes == "Packed lunch required"
    assert event.is_recurring is False
    assert event.source_subject == "Fwd: Trip letter"
    assert event.source_received_at == datetime(2024, 2, 20, 8, 30)


@pytest.mark.parametrize(
    "flags, expected",
    [
        ({"isRecurring": True}, True),
        ({"recurring": True}, True),
        ({"recurring": "yes"}, False),
        ({"isRecurring": False, "recurring": False}, False),
        ({}, False),
    ],
)
def test_recurrence_spellings_are_normalized(flags: dict, expected: bool) -> None:
    payload = {"id": 1, "title": "Swimming", "startDate": "2024-03-01", **flags}
    assert normalize_event_payload(payload).is_recurring is expected


def test_missing_fields_degrade_to_empty_values() -> None:
    event = normalize_event_payload({"id": 7, "startDate": "not a date"})

    assert event.title == ""
    assert event.notes == ""
    assert event.start is None
    assert event.end is None
    assert event.has_end is False
    assert event.source_subject is None


def test_unparsable_end_date_is_remembered() -> None:
    event = normalize_event_payload({"id": 7, "startDate": "2024-03-01", "endDate": "soon"})

    assert event.has_end is True
    assert event.end is None


def test_normalize_event_payload_requires_an_id() -> None:
    with pytest.raises(ValidationError):
        normalize_event_payload({"title": "No id"})


def test_parse_instant_accepts_utc_suffix() -> None:
    assert parse_instant("2024-03-01T10:00:00Z") is not None
    assert parse_instant("2024-03-01T10:00:00.000Z") is not None
    assert parse_instant("") is None
    assert parse_instant(None) is None


def test_events_from_json_skips_bad_and_duplicate_records() -> None:
    payload = [
        {"id": 1, "title": "First", "startDate": "2024-03-01"},
        {"title": "No id"},
        "not an object",
        {"id": 1, "title": "Duplicate", "startDate": "2024-03-02"},
        {"id": 2, "title": "Second", "startDate": "2024-03-02"},
    ]

    events = events_from_json(payload)

    assert [ev.id for ev in events] == [1, 2]
    assert events[0].title == "First"


def test_events_from_json_rejects_non_arrays() -> None:
    with pytest.raises(ValidationError):
        events_from_json({"id": 1})
