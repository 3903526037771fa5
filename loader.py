#!/usr/bin/env python3
"""Fetch the events file and turn it into EventRecords.

Payloads starting with ``v1|`` are encrypted and handed to an injected
decryptor; anything else is read as a plain JSON array.
"""

from __future__ import annotations

import http.client
import importlib
import json
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from models import EventRecord, ValidationError, events_from_json

logger = logging.getLogger(__name__)

ENCRYPTED_PREFIX = "v1|"
FETCH_TIMEOUT_SECONDS = 10

Decryptor = Callable[[str, str], Any]


class LoadError(Exception):
    pass


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def read_source(source: str) -> str:
    if _is_url(source):
        try:
            req = Request(source, headers={"Accept": "application/json, text/plain"})
            with urlopen(req, timeout=FETCH_TIMEOUT_SECONDS) as resp:  # nosec B310
                payload = resp.read()
        except HTTPError as exc:
            raise LoadError(f"Data file not found (Status: {exc.code})") from exc
        except (URLError, OSError, http.client.HTTPException) as exc:
            raise LoadError(f"Could not load events: {exc}") from exc
        return _decode(payload, source)

    path = Path(source).expanduser()
    if not path.exists():
        raise LoadError(f"Data file not found: {path}")
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise LoadError(f"Could not load events: {exc}") from exc
    return _decode(payload, str(path))


def _decode(payload: bytes, source: str) -> str:
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LoadError(f"Data file {source} is not valid UTF-8 text") from exc


def resolve_decryptor(target: Optional[str]) -> Optional[Decryptor]:
    """Import a decryptor given as ``"package.module:function"``."""
    if not target:
        return None
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise LoadError(f"Invalid decryptor '{target}'. Expected module:function")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise LoadError(f"Could not import decryptor module '{module_name}': {exc}") from exc
    func = getattr(module, attr, None)
    if not callable(func):
        raise LoadError(f"Decryptor '{target}' is not callable")
    return func


def parse_events(
    raw_text: str,
    password: str,
    *,
    decrypt: Optional[Decryptor] = None,
) -> List[EventRecord]:
    if raw_text.startswith(ENCRYPTED_PREFIX):
        if decrypt is None:
            raise LoadError("Data file is encrypted but no decryptor is configured")
        try:
            payload = decrypt(raw_text, password)
        except Exception as exc:
            raise LoadError("Could not decrypt events: wrong password or corrupt data") from exc
        if isinstance(payload, (str, bytes)):
            payload = _parse_json(payload)
    else:
        payload = _parse_json(raw_text)

    try:
        return events_from_json(payload)
    except ValidationError as exc:
        raise LoadError(str(exc)) from exc


def _parse_json(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise LoadError(f"Event data is not valid JSON: {exc}") from exc


def load_events(
    source: str,
    password: str,
    *,
    decrypt: Optional[Decryptor] = None,
) -> List[EventRecord]:
    raw_text = read_source(source)
    logger.info(f"Fetched {len(raw_text)} characters from {source}")
    return parse_events(raw_text, password, decrypt=decrypt)


__all__ = [
    "LoadError",
    "Decryptor",
    "ENCRYPTED_PREFIX",
    "read_source",
    "resolve_decryptor",
    "parse_events",
    "load_events",
]
