"""Unit tests for the resource calendar and its overlap rules."""

from datetime import date, time

import pytest

from coursehub.catalog import CatalogStore
from coursehub.scheduling import ResourceCalendar, date_ranges_overlap, intervals_overlap


@pytest.mark.unit
class TestIntervalsOverlap:
    """Half-open time-of-day intervals."""

    def test_partial_overlap(self) -> None:
        assert intervals_overlap(time(18), time(20), time(19), time(21))

    def test_containment(self) -> None:
        assert intervals_overlap(time(9), time(17), time(10), time(11))
        assert intervals_overlap(time(10), time(11), time(9), time(17))

    def test_identical_intervals(self) -> None:
        assert intervals_overlap(time(9), time(10), time(9), time(10))

    def test_touching_endpoints_do_not_overlap(self) -> None:
        """A session ending at 12:00 and one starting at 12:00 coexist."""
        assert not intervals_overlap(time(10), time(12), time(12), time(14))
        assert not intervals_overlap(time(12), time(14), time(10), time(12))

    def test_disjoint(self) -> None:
        assert not intervals_overlap(time(8), time(9), time(10), time(11))

    def test_minute_precision(self) -> None:
        assert intervals_overlap(time(10, 0), time(11, 1), time(11, 0), time(12, 0))
        assert not intervals_overlap(time(10, 0), time(10, 59), time(11, 0), time(12, 0))


@pytest.mark.unit
class TestDateRangesOverlap:
    """Inclusive whole-day windows."""

    def test_shared_single_day_overlaps(self) -> None:
        assert date_ranges_overlap(
            date(2024, 1, 1), date(2024, 1, 31), date(2024, 1, 31), date(2024, 2, 28)
        )

    def test_adjacent_days_do_not_overlap(self) -> None:
        assert not date_ranges_overlap(
            date(2024, 1, 1), date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 28)
        )

    def test_containment(self) -> None:
        assert date_ranges_overlap(
            date(2024, 1, 1), date(2024, 12, 31), date(2024, 5, 1), date(2024, 5, 2)
        )


@pytest.mark.unit
class TestResourceCalendar:
    """Overlap queries against committed sessions."""

    def test_free_when_nothing_booked(self, store: CatalogStore, campus) -> None:
        calendar = ResourceCalendar(store)

        assert calendar.is_room_free(campus.room1.id, date(2024, 1, 10), time(18), time(20))
        assert calendar.is_lecturer_free(
            campus.lecturer1.id, date(2024, 1, 10), time(18), time(20)
        )
        assert calendar.is_course_slot_free(
            campus.course.id, date(2024, 1, 10), time(18), time(20)
        )

    def test_booked_resources_are_busy(self, engine, campus) -> None:
        engine.admit_session(campus.session())
        calendar = engine.calendar
        day = date(2024, 1, 10)

        assert not calendar.is_room_free(campus.room1.id, day, time(19), time(21))
        assert not calendar.is_lecturer_free(campus.lecturer1.id, day, time(17), time(19))
        assert not calendar.is_course_slot_free(campus.course.id, day, time(18), time(20))

    def test_other_resources_stay_free(self, engine, campus) -> None:
        engine.admit_session(campus.session())
        calendar = engine.calendar
        day = date(2024, 1, 10)

        assert calendar.is_room_free(campus.room2.id, day, time(18), time(20))
        assert calendar.is_lecturer_free(campus.lecturer2.id, day, time(18), time(20))

    def test_other_days_stay_free(self, engine, campus) -> None:
        engine.admit_session(campus.session())

        assert engine.calendar.is_room_free(
            campus.room1.id, date(2024, 1, 11), time(18), time(20)
        )

    def test_touching_slot_is_free(self, engine, campus) -> None:
        engine.admit_session(campus.session())

        assert engine.calendar.is_room_free(
            campus.room1.id, date(2024, 1, 10), time(20), time(21)
        )

    def test_find_conflicts_returns_clashing_sessions(self, engine, campus) -> None:
        first = engine.admit_session(campus.session(start=time(9), end=time(10)))
        engine.admit_session(campus.session(start=time(11), end=time(12)))

        conflicts = engine.calendar.find_conflicts(
            date(2024, 1, 10), time(9, 30), time(10, 30), room_id=campus.room1.id
        )

        assert [s.id for s in conflicts] == [first.id]
