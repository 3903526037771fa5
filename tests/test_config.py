from pathlib import Path

from config import load_config


def test_defaults_follow_xdg_dirs(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))

    config = load_config()

    assert config.data_source == str(tmp_path / "data" / "schoolcal" / "events.json")
    assert config.state_path == tmp_path / "state" / "schoolcal" / "state.parquet"
    assert config.decryptor is None
    assert config.state_path.parent.is_dir()


def test_config_file_tolerates_trailing_commas(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        "{\n"
        '  "data_source": "https://example.org/events.json",\n'
        '  "decryptor": "mydecrypt:decrypt",\n'
        f'  "state_path": "{tmp_path / "s" / "state.parquet"}",\n'
        f'  "log_path": "{tmp_path / "s" / "app.log"}",\n'
        '  "log_level": "debug",\n'
        "}\n"
    )

    config = load_config(path)

    assert config.data_source == "https://example.org/events.json"
    assert config.decryptor == "mydecrypt:decrypt"
    assert config.state_path == tmp_path / "s" / "state.parquet"
    assert config.log_level == "debug"


def test_unreadable_config_falls_back_to_defaults(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    path = tmp_path / "config.json"
    path.write_text("not json at all")

    config = load_config(path)

    assert Path(config.data_source).name == "events.json"
