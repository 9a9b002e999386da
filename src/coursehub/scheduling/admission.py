"""Admission control for class sessions and enrollments.

Every check is read-only; the commit at the end is the only mutation. The
checks run while the resource keys of the candidate are held, so two
admissions competing for the same room, lecturer, course or student are
decided one after the other against freshly read state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from coursehub.catalog import ClassSession, Enrollment
from coursehub.exceptions import (
    AlreadyEnrolledError,
    CourseFullError,
    CourseHubError,
    CourseSlotConflictError,
    InvalidIntervalError,
    LecturerConflictError,
    OutOfRangeError,
    RoomConflictError,
    StudentScheduleConflictError,
    SyllabusEntryNotFoundError,
)
from coursehub.scheduling.calendar import ResourceCalendar, date_ranges_overlap
from coursehub.scheduling.locks import (
    KeyedLocks,
    course_key,
    lecturer_key,
    room_key,
    student_key,
)

if TYPE_CHECKING:
    from coursehub.catalog import CatalogStore, Course
    from coursehub.scheduling.models import SessionRequest

logger = logging.getLogger(__name__)


class SessionAdmissionValidator:
    """Admits a class session only if it fits the course window and clashes with nothing."""

    def __init__(
        self,
        store: CatalogStore,
        locks: KeyedLocks,
        calendar: ResourceCalendar | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            store: Catalog repository used for reads and the final commit.
            locks: Resource-key locks shared with the other admission paths.
            calendar: Overlap queries; built on ``store`` when omitted.
        """
        self._store = store
        self._locks = locks
        self._calendar = calendar if calendar is not None else ResourceCalendar(store)

    def validate(self, request: SessionRequest) -> Course:
        """Run all admission checks without committing.

        Returns:
            The owning course.

        Raises:
            CourseNotFoundError: Course does not exist.
            RoomNotFoundError: Room does not exist.
            LecturerNotFoundError: Lecturer does not exist.
            SyllabusEntryNotFoundError: Syllabus entry missing or owned by another course.
            OutOfRangeError: Day outside the course window.
            InvalidIntervalError: Start time not before end time.
            RoomConflictError: Room booked for an overlapping time.
            LecturerConflictError: Lecturer teaching at an overlapping time.
            CourseSlotConflictError: Course already meets at an overlapping time.
        """
        course = self._store.find_course(request.course_id)

        if not course.start_date <= request.day <= course.end_date:
            raise OutOfRangeError(
                f"Session day {request.day.isoformat()} is outside course window "
                f"{course.start_date.isoformat()}..{course.end_date.isoformat()}"
            )

        if request.start_time >= request.end_time:
            raise InvalidIntervalError(
                f"Session start {request.start_time.isoformat()} is not before "
                f"end {request.end_time.isoformat()}"
            )

        self._store.find_room(request.room_id)
        self._store.find_lecturer(request.lecturer_id)
        if request.syllabus_id is not None:
            entry = self._store.find_syllabus_entry(request.syllabus_id)
            if entry.course_id != course.id:
                raise SyllabusEntryNotFoundError(
                    f"Syllabus entry '{request.syllabus_id}' does not belong to "
                    f"course '{course.id}'"
                )

        day, start, end = request.day, request.start_time, request.end_time
        if not self._calendar.is_room_free(request.room_id, day, start, end):
            raise RoomConflictError(
                f"Room '{request.room_id}' is booked on {day.isoformat()} "
                f"between {start.isoformat()} and {end.isoformat()}"
            )
        if not self._calendar.is_lecturer_free(request.lecturer_id, day, start, end):
            raise LecturerConflictError(
                f"Lecturer '{request.lecturer_id}' is teaching on {day.isoformat()} "
                f"between {start.isoformat()} and {end.isoformat()}"
            )
        if not self._calendar.is_course_slot_free(course.id, day, start, end):
            raise CourseSlotConflictError(
                f"Course '{course.id}' already meets on {day.isoformat()} "
                f"between {start.isoformat()} and {end.isoformat()}"
            )

        return course

    def admit(self, request: SessionRequest) -> ClassSession:
        """Validate and commit a class session as one unit.

        Returns:
            The committed session.

        Raises:
            CourseHubError: The specific rejection kind, see ``validate``.
        """
        keys = (
            room_key(request.room_id),
            lecturer_key(request.lecturer_id),
            course_key(request.course_id),
        )
        with self._locks.hold(*keys):
            try:
                self.validate(request)
            except CourseHubError as e:
                logger.info("Rejected session for course %s: %s", request.course_id, e.kind)
                raise

            class_session = self._store.commit_session(
                ClassSession(
                    course_id=request.course_id,
                    day=request.day,
                    start_time=request.start_time,
                    end_time=request.end_time,
                    room_id=request.room_id,
                    lecturer_id=request.lecturer_id,
                    syllabus_id=request.syllabus_id,
                )
            )

        logger.info(
            "Admitted session %s for course %s on %s %s-%s",
            class_session.id,
            class_session.course_id,
            class_session.day.isoformat(),
            class_session.start_time.isoformat(),
            class_session.end_time.isoformat(),
        )
        return class_session


class EnrollmentAdmissionValidator:
    """Admits a student into a course if a seat is free and their calendar allows it."""

    def __init__(self, store: CatalogStore, locks: KeyedLocks) -> None:
        self._store = store
        self._locks = locks

    def validate(self, student_id: str, course_id: str) -> Course:
        """Run all enrollment checks without committing.

        Returns:
            The candidate course.

        Raises:
            StudentNotFoundError: Student does not exist.
            CourseNotFoundError: Course does not exist.
            AlreadyEnrolledError: Student already holds a seat in the course.
            CourseFullError: Every seat is taken.
            StudentScheduleConflictError: Student holds a course running at the same time.
        """
        self._store.find_student(student_id)
        course = self._store.find_course(course_id)

        if self._store.find_enrollment(student_id, course_id) is not None:
            raise AlreadyEnrolledError(
                f"Student '{student_id}' is already enrolled in course '{course_id}'"
            )

        enrolled = self._store.count_enrollments(course_id)
        if enrolled >= course.maximum_students:
            raise CourseFullError(
                f"Course '{course_id}' is full ({enrolled}/{course.maximum_students})"
            )

        for existing in self._store.list_enrollments_for_student(student_id):
            if date_ranges_overlap(
                existing.start_date, existing.end_date, course.start_date, course.end_date
            ):
                raise StudentScheduleConflictError(
                    f"Student '{student_id}' is enrolled in course '{existing.id}' "
                    f"running {existing.start_date.isoformat()}..{existing.end_date.isoformat()}"
                )

        return course

    def admit(self, student_id: str, course_id: str) -> Enrollment:
        """Validate and commit an enrollment as one unit.

        Returns:
            The committed enrollment.

        Raises:
            CourseHubError: The specific rejection kind, see ``validate``.
        """
        with self._locks.hold(course_key(course_id), student_key(student_id)):
            try:
                self.validate(student_id, course_id)
            except CourseHubError as e:
                logger.info(
                    "Rejected enrollment of student %s in course %s: %s",
                    student_id,
                    course_id,
                    e.kind,
                )
                raise

            enrollment = self._store.commit_enrollment(
                Enrollment(student_id=student_id, course_id=course_id)
            )

        logger.info("Enrolled student %s in course %s", student_id, course_id)
        return enrollment

    def withdraw(self, student_id: str, course_id: str) -> None:
        """Remove a student from a course, freeing the seat.

        Raises:
            StudentNotFoundError: Student does not exist.
            CourseNotFoundError: Course does not exist.
            EnrollmentNotFoundError: Student is not enrolled in the course.
        """
        with self._locks.hold(course_key(course_id), student_key(student_id)):
            self._store.find_student(student_id)
            self._store.find_course(course_id)
            self._store.delete_enrollment(student_id, course_id)
        logger.info("Withdrew student %s from course %s", student_id, course_id)
