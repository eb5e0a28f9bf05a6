"""Process-wide locks keyed by entity id."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class KeyedLocks:
    """Hands out one lock per key while someone holds or waits on it.

    An entry is dropped as soon as its last user leaves ``hold``, so the
    registry only ever contains keys that are currently in use.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, keys: Iterable[str]) -> Iterator[None]:
        """Acquire the locks of *keys* in sorted order, release on exit.

        Sorting gives every caller the same acquisition order, so two
        overlapping sets of keys cannot deadlock.
        """
        ordered = sorted(set(keys))
        entries = self._check_out(ordered)
        try:
            with ExitStack() as stack:
                for entry in entries:
                    stack.enter_context(entry.lock)
                yield
        finally:
            self._check_in(ordered)

    def _check_out(self, keys: list[str]) -> list[_Entry]:
        with self._guard:
            entries = []
            for key in keys:
                entry = self._entries.get(key)
                if entry is None:
                    entry = self._entries[key] = _Entry()
                entry.users += 1
                entries.append(entry)
            return entries

    def _check_in(self, keys: list[str]) -> None:
        with self._guard:
            for key in keys:
                entry = self._entries[key]
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]
