#!/usr/bin/env python3
"""PyArrow-backed key-value storage for schoolcal preferences."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

import pyarrow as pa
import pyarrow.parquet as pq


_SCHEMA = pa.schema(
    [
        ("key", pa.string()),
        ("value", pa.string()),
    ]
)


class StorageError(Exception):
    pass


def _entries_to_table(entries: Dict[str, str]) -> pa.Table:
    keys = sorted(entries)
    return pa.Table.from_pydict(
        {
            "key": keys,
            "value": [entries[k] for k in keys],
        },
        schema=_SCHEMA,
    )


def _table_to_entries(table: pa.Table) -> Dict[str, str]:
    if table.schema != _SCHEMA:
        raise StorageError("Parquet schema mismatch for state file")
    keys = table.column("key").to_pylist()
    values = table.column("value").to_pylist()
    return {k: v for k, v in zip(keys, values) if k is not None and v is not None}


def load_entries(path: Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    try:
        table = pq.read_table(path)
        return _table_to_entries(table)
    except StorageError:
        raise
    except Exception as exc:
        raise StorageError(f"Failed to read state from {path}: {exc}") from exc


def _write_atomic(path: Path, table: pa.Table) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=str(path.parent), delete=False) as tmp:
        tmp_path = Path(tmp.name)
    try:
        pq.write_table(table, tmp_path)
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            try:
                os.remove(tmp_path)
            except OSError:
                pass


def save_entries(path: Path, entries: Dict[str, str]) -> None:
    try:
        _write_atomic(path, _entries_to_table(entries))
    except Exception as exc:
        raise StorageError(f"Failed to write state to {path}: {exc}") from exc


class KeyValueStore:
    """String key-value store, read once and written through on every change."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._entries: Dict[str, str] = {}

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, str]:
        self._entries = load_entries(self._path)
        return dict(self._entries)

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value
        save_entries(self._path, self._entries)

    def remove(self, key: str) -> None:
        if key not in self._entries:
            return
        del self._entries[key]
        save_entries(self._path, self._entries)


__all__ = [
    "KeyValueStore",
    "StorageError",
    "load_entries",
    "save_entries",
]
