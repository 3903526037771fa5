from datetime import date, datetime

from event_table import NOT_AVAILABLE, format_source, partition, project_table
from models import EventRecord

TODAY = date(2024, 3, 6)


def _event(event_id, start, **kwargs) -> EventRecord:
    return EventRecord(id=event_id, title=f"Event {event_id}", start=start, **kwargs)


def _events() -> list[EventRecord]:
    return [
        _event(1, datetime(2024, 3, 10)),
        _event(2, datetime(2024, 3, 1)),
        _event(3, datetime(2024, 3, 6, 0, 0)),
        _event(4, datetime(2024, 3, 5, 23, 59)),
        _event(5, datetime(2024, 3, 8)),
        _event(6, datetime(2024, 2, 20)),
    ]


def test_partition_is_complete_and_disjoint() -> None:
    events = _events()
    upcoming = partition(events, "upcoming", today=TODAY)
    previous = partition(events, "previous", today=TODAY)

    upcoming_ids = {ev.id for ev in upcoming}
    previous_ids = {ev.id for ev in previous}
    assert upcoming_ids | previous_ids == {ev.id for ev in events}
    assert not upcoming_ids & previous_ids
    assert upcoming_ids == {1, 3, 5}


def test_sort_directions_per_tab() -> None:
    events = _events()
    upcoming = partition(events, "upcoming", today=TODAY)
    previous = partition(events, "previous", today=TODAY)

    assert all(a.start <= b.start for a, b in zip(upcoming, upcoming[1:]))
    assert all(a.start >= b.start for a, b in zip(previous, previous[1:]))
    assert [ev.id for ev in upcoming] == [3, 5, 1]
    assert [ev.id for ev in previous] == [4, 2, 6]


def test_ties_keep_input_order() -> None:
    same = datetime(2024, 3, 8, 9)
    past = datetime(2024, 3, 1, 9)
    events = [_event("b", same), _event("a", same), _event("z", past), _event("y", past)]

    assert [ev.id for ev in partition(events, "upcoming", today=TODAY)] == ["b", "a"]
    assert [ev.id for ev in partition(events, "previous", today=TODAY)] == ["z", "y"]


def test_rows_report_hidden_selected_and_provenance() -> None:
    events = [
        _event(
            1,
            datetime(2024, 3, 8),
            source_subject="Fwd: Spring trip",
            source_received_at=datetime(2024, 3, 4, 9, 15),
            is_recurring=True,
        ),
        _event(2, datetime(2024, 3, 9), source_subject="Newsletter"),
    ]
    table = project_table(events, "upcoming", {2}, {1}, today=TODAY)

    first, second = table.rows
    assert first.selected and not first.hidden
    assert first.is_recurring
    assert first.source_subject == "Spring trip"
    assert first.source_received == "Mar 4, 09:15 AM"
    assert first.date_label == "Fri, Mar 8"
    assert second.hidden and not second.selected
    assert second.source_subject == "Newsletter"
    assert second.source_received == NOT_AVAILABLE
    assert table.visible_ids == [1, 2]
    assert table.index_of(2) == 1
    assert table.index_of(99) is None


def test_missing_provenance_is_marked_not_available() -> None:
    assert format_source(EventRecord(id=1)) == (NOT_AVAILABLE, NOT_AVAILABLE)


def test_empty_tab_is_explicit() -> None:
    table = project_table([_event(1, datetime(2024, 3, 8))], "previous", set(), set(), today=TODAY)

    assert table.is_empty
    assert table.empty_message == "No previous events found."
    assert table.visible_ids == []


def test_undated_events_are_in_neither_tab() -> None:
    events = [EventRecord(id=1, title="Undated")]
    assert partition(events, "upcoming", today=TODAY) == []
    assert partition(events, "previous", today=TODAY) == []
