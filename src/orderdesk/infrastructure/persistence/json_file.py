"""Shared plumbing for the JSON-file-backed repositories.

Each repository owns one file holding a JSON list of records.  Writes go
to a temporary sibling file that then replaces the original, so a batch
is either fully on disk or not at all.  Every repository instance that
points at the same file shares one lock, so read-modify-write cycles on
that file never interleave within the process.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Callable
from pathlib import Path

_file_locks: dict[Path, threading.RLock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _file_locks_guard:
        lock = _file_locks.get(path)
        if lock is None:
            lock = _file_locks[path] = threading.RLock()
        return lock


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = _lock_for(file_path.resolve())
        self._ensure_file()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        with self._lock:
            tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
            tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, self._file_path)

    def _upsert_raw(
        self,
        records: list[dict],
        key: str,
        merge: Callable[[dict, dict], dict] | None = None,
    ) -> None:
        """Replace stored records matching on *key*, append the rest.

        When *merge* is given, an existing record is replaced by
        ``merge(stored, new)`` instead of ``new``.
        """
        with self._lock:
            stored = self._load_raw()
            index = {raw[key]: i for i, raw in enumerate(stored)}
            for record in records:
                position = index.get(record[key])
                if position is None:
                    index[record[key]] = len(stored)
                    stored.append(record)
                else:
                    existing = stored[position]
                    stored[position] = merge(existing, record) if merge else record
            self._persist_raw(stored)

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
