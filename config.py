#!/usr/bin/env python3
"""Configuration loading and path resolution for schoolcal."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from paths import app_config_dir, app_data_dir, app_state_dir, ensure_dir

logger = logging.getLogger(__name__)


@dataclass
class Config:
    data_source: str
    decryptor: Optional[str]
    state_path: Path
    log_path: Path
    log_level: str = "INFO"


DEFAULT_DATA_FILENAME = "events.json"
DEFAULT_STATE_FILENAME = "state.parquet"
DEFAULT_LOG_FILENAME = "schoolcal.log"
CONFIG_FILENAME = "config.json"


def config_path() -> Path:
    return app_config_dir() / CONFIG_FILENAME


def _read_raw_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    raw_text = path.read_text()
    try:
        raw = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            raw = json.loads(_strip_trailing_commas(raw_text))
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable config at {path}")
            return {}
    if not isinstance(raw, dict):
        logger.warning(f"Ignoring non-object config at {path}")
        return {}
    return raw


def load_config(path: Optional[Path] = None) -> Config:
    """Load config from the XDG path, falling back to defaults.

    Invalid JSON or a missing file falls back to defaults entirely.
    """

    raw = _read_raw_config((path or config_path()).expanduser())

    data_source = str(raw.get("data_source") or (app_data_dir() / DEFAULT_DATA_FILENAME))
    if not data_source.startswith(("http://", "https://")):
        data_source = str(Path(data_source).expanduser())

    state_path = Path(raw.get("state_path") or (app_state_dir() / DEFAULT_STATE_FILENAME)).expanduser()
    log_path = Path(raw.get("log_path") or (app_state_dir() / DEFAULT_LOG_FILENAME)).expanduser()
    decryptor = raw.get("decryptor") or None
    log_level = str(raw.get("log_level") or "INFO")

    ensure_dir(state_path.parent)
    ensure_dir(log_path.parent)

    return Config(
        data_source=data_source,
        decryptor=decryptor,
        state_path=state_path,
        log_path=log_path,
        log_level=log_level,
    )


def _strip_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


__all__ = ["Config", "load_config", "config_path", "CONFIG_FILENAME"]
