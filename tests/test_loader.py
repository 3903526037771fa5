import json

import pytest

from loader import ENCRYPTED_PREFIX, LoadError, load_events, parse_events, resolve_decryptor

PLAIN = [
    {"id": 1, "title": "Half Term", "startDate": "2024-02-12"},
    {"id": 2, "title": "Swimming", "startDate": "2024-02-13", "recurring": True},
]


def _fake_decrypt(raw_text: str, password: str):
    if password != "secret":
        raise ValueError("bad tag")
    return raw_text[len(ENCRYPTED_PREFIX):]


def test_plain_json_is_parsed_without_a_decryptor() -> None:
    events = parse_events(json.dumps(PLAIN), "ignored")

    assert [ev.id for ev in events] == [1, 2]
    assert events[1].is_recurring is True


def test_encrypted_payload_goes_through_decryptor() -> None:
    raw = ENCRYPTED_PREFIX + json.dumps(PLAIN)

    events = parse_events(raw, "secret", decrypt=_fake_decrypt)

    assert [ev.title for ev in events] == ["Half Term", "Swimming"]


def test_decryptor_may_return_records_directly() -> None:
    events = parse_events(ENCRYPTED_PREFIX + "blob", "pw", decrypt=lambda raw, pw: PLAIN)
    assert len(events) == 2


def test_wrong_password_is_a_load_error() -> None:
    with pytest.raises(LoadError):
        parse_events(ENCRYPTED_PREFIX + json.dumps(PLAIN), "nope", decrypt=_fake_decrypt)


def test_encrypted_payload_without_decryptor_fails() -> None:
    with pytest.raises(LoadError):
        parse_events(ENCRYPTED_PREFIX + "blob", "secret")


@pytest.mark.parametrize("raw", ["{not json", '{"id": 1}'])
def test_malformed_payloads_are_load_errors(raw: str) -> None:
    with pytest.raises(LoadError):
        parse_events(raw, "pw")


def test_load_events_reads_local_files(tmp_path) -> None:
    path = tmp_path / "events.json"
    path.write_text(json.dumps(PLAIN))

    assert len(load_events(str(path), "pw")) == 2


def test_missing_file_is_a_load_error(tmp_path) -> None:
    with pytest.raises(LoadError):
        load_events(str(tmp_path / "missing.json"), "pw")


def test_resolve_decryptor_imports_callables() -> None:
    assert resolve_decryptor(None) is None
    assert resolve_decryptor("json:loads") is json.loads

    with pytest.raises(LoadError):
        resolve_decryptor("json")
    with pytest.raises(LoadError):
        resolve_decryptor("json:no_such_function")
    with pytest.raises(LoadError):
        resolve_decryptor("no_such_module_xyz:decrypt")


def test_non_utf8_file_is_a_load_error(tmp_path) -> None:
    path = tmp_path / "events.json"
    path.write_bytes(b'[{"id": 1, "title": "\xff\xfe"}]')

    with pytest.raises(LoadError):
        load_events(str(path), "pw")


def test_undecodable_decryptor_output_is_a_load_error() -> None:
    with pytest.raises(LoadError):
        parse_events(ENCRYPTED_PREFIX + "blob", "pw", decrypt=lambda raw, pw: b"\xff[]")
