from preferences import (
    AUTH_TTL_MS,
    FILTERS_KEY,
    SAVED_AUTH_KEY,
    YEAR_KEY,
    Preferences,
)
from state import FilterState
from store import KeyValueStore, StorageError


class _FailingStore(KeyValueStore):
    def set(self, key: str, value: str) -> None:
        raise StorageError("disk full")


def _preferences(tmp_path) -> Preferences:
    prefs = Preferences(KeyValueStore(tmp_path / "state.parquet"))
    prefs.load()
    return prefs


def test_defaults_when_nothing_saved(tmp_path) -> None:
    state = _preferences(tmp_path).load_filter_state()

    assert state.year == "All"
    assert state.show_hidden is False
    assert state.hidden_ids == set()
    assert all(state.categories.values())


def test_filter_state_round_trip(tmp_path) -> None:
    state = FilterState(year="Reception", show_hidden=True, hidden_ids={"a", 3})
    state.toggle_category("book_bag")
    prefs = _preferences(tmp_path)
    prefs.save_year(state)
    prefs.save_show_hidden(state)
    prefs.save_hidden_ids(state)
    prefs.save_categories(state)

    loaded = _preferences(tmp_path).load_filter_state()

    assert loaded.year == "Reception"
    assert loaded.show_hidden is True
    assert loaded.hidden_ids == {"a", 3}
    assert loaded.categories["book_bag"] is False
    assert loaded.categories["half_term"] is True


def test_category_flags_use_persisted_names(tmp_path) -> None:
    store = KeyValueStore(tmp_path / "state.parquet")
    store.set(FILTERS_KEY, '{"normal": true, "recurring": false, "halfTerm": false, "bookBag": true}')
    prefs = Preferences(store)
    prefs.load()

    loaded = prefs.load_filter_state()

    assert loaded.categories == {
        "half_term": False,
        "book_bag": True,
        "recurring": False,
        "normal": True,
    }


def test_malformed_values_fall_back_to_defaults(tmp_path) -> None:
    store = KeyValueStore(tmp_path / "state.parquet")
    store.set(YEAR_KEY, "{not json")
    store.set(FILTERS_KEY, '"not an object"')
    prefs = Preferences(store)
    prefs.load()

    loaded = prefs.load_filter_state()

    assert loaded.year == "All"
    assert all(loaded.categories.values())


def test_save_failures_are_swallowed(tmp_path) -> None:
    prefs = Preferences(_FailingStore(tmp_path / "state.parquet"))
    state = FilterState(hidden_ids={"a"})

    prefs.save_hidden_ids(state)

    assert state.hidden_ids == {"a"}


def test_saved_auth_expires_after_seven_days(tmp_path) -> None:
    prefs = _preferences(tmp_path)
    prefs.save_auth("hunter2", now_ms=1_000)

    assert prefs.load_auth(now_ms=1_000 + AUTH_TTL_MS) == "hunter2"
    assert prefs.load_auth(now_ms=1_001 + AUTH_TTL_MS) is None

    reopened = KeyValueStore(tmp_path / "state.parquet")
    reopened.load()
    assert reopened.get(SAVED_AUTH_KEY) is None


def test_clear_auth_forgets_password(tmp_path) -> None:
    prefs = _preferences(tmp_path)
    prefs.save_auth("hunter2")
    prefs.clear_auth()

    assert prefs.load_auth() is None
