"""SchedulingEngine - Single entry point for admissions and course edits."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from coursehub.exceptions import SessionNotFoundError
from coursehub.scheduling.admission import (
    EnrollmentAdmissionValidator,
    SessionAdmissionValidator,
)
from coursehub.scheduling.calendar import ResourceCalendar
from coursehub.scheduling.guard import CourseMutationGuard
from coursehub.scheduling.lifecycle import CourseLifecycle
from coursehub.scheduling.locks import (
    KeyedLocks,
    course_key,
    lecturer_key,
    room_key,
    student_key,
)

if TYPE_CHECKING:
    from coursehub.catalog import (
        CatalogStore,
        ClassSession,
        Course,
        CourseUpdate,
        Enrollment,
        SyllabusEntry,
    )
    from coursehub.scheduling.models import ReadinessReport, SessionRequest

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """Wires the calendar, validators, lifecycle and guard around one store.

    All components share one ``KeyedLocks`` registry, so a session admission,
    an enrollment, a course edit and a deletion touching the same course,
    room, lecturer or student are serialized.
    """

    def __init__(self, store: CatalogStore, locks: KeyedLocks | None = None) -> None:
        self.store = store
        self.locks = locks if locks is not None else KeyedLocks()
        self.calendar = ResourceCalendar(store)
        self.sessions = SessionAdmissionValidator(store, self.locks, self.calendar)
        self.enrollments = EnrollmentAdmissionValidator(store, self.locks)
        self.lifecycle = CourseLifecycle(store, self.locks)
        self.guard = CourseMutationGuard(store, self.locks)

    def admit_session(self, request: SessionRequest) -> ClassSession:
        return self.sessions.admit(request)

    def enroll(self, student_id: str, course_id: str) -> Enrollment:
        return self.enrollments.admit(student_id, course_id)

    def withdraw(self, student_id: str, course_id: str) -> None:
        self.enrollments.withdraw(student_id, course_id)

    def update_course(self, course_id: str, update: CourseUpdate) -> Course:
        return self.guard.apply(course_id, update)

    def recompute_readiness(self, course_id: str) -> ReadinessReport:
        return self.lifecycle.recompute(course_id)

    def add_syllabus_entry(
        self, course_id: str, title: str, description: str = ""
    ) -> SyllabusEntry:
        with self.locks.hold(course_key(course_id)):
            return self.store.add_syllabus_entry(course_id, title, description)

    def delete_session(self, course_id: str, session_id: str) -> None:
        """Delete a class session of a course.

        Raises:
            SessionNotFoundError: Session missing or owned by another course.
        """
        with self.locks.hold(course_key(course_id)):
            class_session = self.store.find_session(session_id)
            if class_session.course_id != course_id:
                raise SessionNotFoundError(
                    f"Class session '{session_id}' does not belong to course '{course_id}'"
                )
            self.store.delete_session(session_id)
        logger.info("Deleted session %s of course %s", session_id, course_id)

    def delete_course(self, course_id: str) -> None:
        with self.locks.hold(course_key(course_id)):
            self.store.delete_course(course_id)

    def delete_room(self, room_id: str) -> None:
        with self.locks.hold(room_key(room_id)):
            self.store.delete_room(room_id)
        logger.info("Deleted room %s", room_id)

    def delete_lecturer(self, lecturer_id: str) -> None:
        with self.locks.hold(lecturer_key(lecturer_id)):
            self.store.delete_lecturer(lecturer_id)
        logger.info("Deleted lecturer %s", lecturer_id)

    def delete_student(self, student_id: str) -> None:
        with self.locks.hold(student_key(student_id)):
            self.store.delete_student(student_id)
        logger.info("Deleted student %s", student_id)
