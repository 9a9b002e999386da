"""Unit tests for enrollment admission and withdrawal."""

from datetime import date

import pytest

from coursehub.catalog import CatalogStore, Enrollment
from coursehub.exceptions import (
    AlreadyEnrolledError,
    CourseFullError,
    CourseNotFoundError,
    EnrollmentNotFoundError,
    StudentNotFoundError,
    StudentScheduleConflictError,
)
from coursehub.scheduling import SchedulingEngine


@pytest.mark.unit
class TestEnroll:
    """Tests for SchedulingEngine.enroll."""

    def test_enroll_creates_enrollment(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        enrollment = engine.enroll(campus.student_a.id, campus.course.id)

        assert enrollment.id is not None
        assert enrollment.student_id == campus.student_a.id
        assert enrollment.course_id == campus.course.id
        assert store.count_enrollments(campus.course.id) == 1

    def test_unknown_student(self, engine: SchedulingEngine, campus) -> None:
        with pytest.raises(StudentNotFoundError):
            engine.enroll("missing", campus.course.id)

    def test_unknown_course(self, engine: SchedulingEngine, campus) -> None:
        with pytest.raises(CourseNotFoundError):
            engine.enroll(campus.student_a.id, "missing")

    def test_already_enrolled(self, engine: SchedulingEngine, store: CatalogStore, campus) -> None:
        engine.enroll(campus.student_a.id, campus.course.id)

        with pytest.raises(AlreadyEnrolledError) as exc_info:
            engine.enroll(campus.student_a.id, campus.course.id)

        assert exc_info.value.kind == "AlreadyEnrolled"
        assert store.count_enrollments(campus.course.id) == 1

    def test_already_enrolled_checked_before_full(
        self, engine: SchedulingEngine, campus
    ) -> None:
        engine.enroll(campus.student_a.id, campus.course.id)
        engine.enroll(campus.student_b.id, campus.course.id)

        with pytest.raises(AlreadyEnrolledError):
            engine.enroll(campus.student_a.id, campus.course.id)

    def test_course_full_at_capacity_plus_one(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        engine.enroll(campus.student_a.id, campus.course.id)
        engine.enroll(campus.student_b.id, campus.course.id)

        with pytest.raises(CourseFullError) as exc_info:
            engine.enroll(campus.student_c.id, campus.course.id)

        assert exc_info.value.kind == "CourseFull"
        assert store.count_enrollments(campus.course.id) == 2

    def test_single_seat_course(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        course = store.create_course("Seminar", date(2025, 1, 1), date(2025, 2, 1), 50, 1)
        engine.enroll(campus.student_a.id, course.id)

        with pytest.raises(CourseFullError):
            engine.enroll(campus.student_b.id, course.id)

    def test_schedule_conflict_on_shared_day(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        """Windows that only share their boundary day still overlap."""
        later = store.create_course("Compilers", date(2024, 3, 1), date(2024, 5, 1), 50, 10)
        engine.enroll(campus.student_a.id, campus.course.id)

        with pytest.raises(StudentScheduleConflictError) as exc_info:
            engine.enroll(campus.student_a.id, later.id)

        assert exc_info.value.kind == "StudentScheduleConflict"

    def test_schedule_conflict_on_contained_window(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        inner = store.create_course("Workshop", date(2024, 2, 1), date(2024, 2, 2), 50, 10)
        engine.enroll(campus.student_a.id, campus.course.id)

        with pytest.raises(StudentScheduleConflictError):
            engine.enroll(campus.student_a.id, inner.id)

    def test_adjacent_windows_do_not_conflict(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        later = store.create_course("Compilers", date(2024, 3, 2), date(2024, 5, 1), 50, 10)
        engine.enroll(campus.student_a.id, campus.course.id)

        enrollment = engine.enroll(campus.student_a.id, later.id)

        assert enrollment.course_id == later.id
        assert [c.id for c in store.list_enrollments_for_student(campus.student_a.id)] == [
            campus.course.id,
            later.id,
        ]

    def test_conflict_leaves_no_enrollment(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        inner = store.create_course("Workshop", date(2024, 2, 1), date(2024, 2, 2), 50, 10)
        engine.enroll(campus.student_a.id, campus.course.id)

        with pytest.raises(StudentScheduleConflictError):
            engine.enroll(campus.student_a.id, inner.id)

        assert store.count_enrollments(inner.id) == 0

    def test_unique_constraint_surfaces_as_already_enrolled(
        self, store: CatalogStore, campus
    ) -> None:
        store.commit_enrollment(
            Enrollment(student_id=campus.student_a.id, course_id=campus.course.id)
        )

        with pytest.raises(AlreadyEnrolledError):
            store.commit_enrollment(
                Enrollment(student_id=campus.student_a.id, course_id=campus.course.id)
            )


@pytest.mark.unit
class TestWithdraw:
    """Tests for SchedulingEngine.withdraw."""

    def test_withdraw_frees_seat(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        engine.enroll(campus.student_a.id, campus.course.id)
        engine.enroll(campus.student_b.id, campus.course.id)

        engine.withdraw(campus.student_a.id, campus.course.id)
        engine.enroll(campus.student_c.id, campus.course.id)

        assert store.count_enrollments(campus.course.id) == 2
        assert store.find_enrollment(campus.student_a.id, campus.course.id) is None

    def test_withdraw_not_enrolled(self, engine: SchedulingEngine, campus) -> None:
        with pytest.raises(EnrollmentNotFoundError) as exc_info:
            engine.withdraw(campus.student_a.id, campus.course.id)

        assert exc_info.value.kind == "NotFound"

    def test_withdraw_unknown_student(self, engine: SchedulingEngine, campus) -> None:
        with pytest.raises(StudentNotFoundError):
            engine.withdraw("missing", campus.course.id)
