"""Per-resource-key serialization for admissions.

A resource key is ``(resource_type, resource_id)``, e.g. ``("room", "<uuid>")``.
Admissions touching the same key run one at a time; admissions on disjoint
keys run concurrently.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

ResourceKey = tuple[str, str]


def room_key(room_id: str) -> ResourceKey:
    return ("room", room_id)


def lecturer_key(lecturer_id: str) -> ResourceKey:
    return ("lecturer", lecturer_id)


def course_key(course_id: str) -> ResourceKey:
    return ("course", course_id)


def student_key(student_id: str) -> ResourceKey:
    return ("student", student_id)


class KeyedLocks:
    """Registry of one lock per resource key."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[ResourceKey, threading.Lock] = {}

    def _lock_for(self, key: ResourceKey) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, *keys: ResourceKey) -> Iterator[None]:
        """Hold the locks of all given keys for the duration of the block.

        Keys are de-duplicated and acquired in sorted order so that two
        callers holding overlapping key sets cannot deadlock.
        """
        ordered = sorted(set(keys))
        acquired: list[threading.Lock] = []
        try:
            for key in ordered:
                lock = self._lock_for(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
