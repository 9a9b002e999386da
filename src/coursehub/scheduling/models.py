"""Data models for the scheduling engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time  # noqa: TC003

from coursehub.catalog.models import Course, Readiness  # noqa: TC001


@dataclass(frozen=True)
class SessionRequest:
    """A candidate class session awaiting admission.

    Attributes:
        course_id: Owning course.
        day: Calendar day of the meeting.
        start_time: Start of the meeting (inclusive).
        end_time: End of the meeting (exclusive).
        room_id: Room to book.
        lecturer_id: Lecturer to book.
        syllabus_id: Syllabus entry covered by the meeting, if any.
    """

    course_id: str
    day: date
    start_time: time
    end_time: time
    room_id: str
    lecturer_id: str
    syllabus_id: str | None = None


@dataclass(frozen=True)
class CommitmentCounts:
    """What a course already committed to, measured against a proposed update.

    Attributes:
        enrollments: Students currently enrolled.
        sessions_before_start: Sessions dated before the proposed start date.
        sessions_after_end: Sessions dated after the proposed end date.
        student_courses: Other courses held by the enrolled students, as
            (student_id, course) pairs. Only gathered when the window moves.
    """

    enrollments: int = 0
    sessions_before_start: int = 0
    sessions_after_end: int = 0
    student_courses: tuple[tuple[str, Course], ...] = ()


@dataclass
class ReadinessReport:
    """Result of a readiness evaluation.

    Attributes:
        course_id: The evaluated course.
        readiness: The state stored for the course.
        syllabus_count: Syllabus entries at evaluation time.
        session_count: Class sessions at evaluation time.
        missing: Human-readable names of the missing parts.
    """

    course_id: str
    readiness: Readiness
    syllabus_count: int
    session_count: int
    missing: list[str] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        return self.readiness is Readiness.READY
