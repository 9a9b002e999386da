"""Resource calendar - overlap queries over committed class sessions.

Session times are half-open intervals ``[start, end)`` on a single day:
a meeting ending at 12:00 and one starting at 12:00 do not conflict.
Course windows are whole days and compared inclusively.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, time

    from coursehub.catalog import CatalogStore, ClassSession


def intervals_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    """Half-open overlap: start < other_end AND other_start < end."""
    return a_start < b_end and b_start < a_end


def date_ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Inclusive overlap of two whole-day ranges; a shared single day counts."""
    return a_start <= b_end and a_end >= b_start


class ResourceCalendar:
    """Answers whether a room, lecturer or course is free for a time slot."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def find_conflicts(
        self,
        day: date,
        start: time,
        end: time,
        room_id: str | None = None,
        lecturer_id: str | None = None,
        course_id: str | None = None,
    ) -> list[ClassSession]:
        """Return committed sessions on ``day`` for the resource that overlap ``[start, end)``."""
        sessions = self._store.list_sessions(
            room_id=room_id,
            lecturer_id=lecturer_id,
            course_id=course_id,
            day=day,
        )
        return [s for s in sessions if intervals_overlap(s.start_time, s.end_time, start, end)]

    def is_room_free(self, room_id: str, day: date, start: time, end: time) -> bool:
        return not self.find_conflicts(day, start, end, room_id=room_id)

    def is_lecturer_free(self, lecturer_id: str, day: date, start: time, end: time) -> bool:
        return not self.find_conflicts(day, start, end, lecturer_id=lecturer_id)

    def is_course_slot_free(self, course_id: str, day: date, start: time, end: time) -> bool:
        return not self.find_conflicts(day, start, end, course_id=course_id)
