"""Error taxonomy shared by the catalog store, the scheduling engine and the API.

Every error carries a ``kind`` naming the rule that rejected the operation.
Callers map kinds to user-facing responses; a rejected operation never leaves
partial state behind.
"""

from __future__ import annotations

from typing import ClassVar


class CourseHubError(Exception):
    """Base exception for coursehub errors."""

    kind: ClassVar[str] = "Error"


# --- Lookup errors ---


class NotFoundError(CourseHubError):
    """Referenced entity does not exist."""

    kind = "NotFound"


class CourseNotFoundError(NotFoundError):
    """Course with given ID does not exist."""


class RoomNotFoundError(NotFoundError):
    """Room with given ID does not exist."""


class LecturerNotFoundError(NotFoundError):
    """Lecturer with given ID does not exist."""


class StudentNotFoundError(NotFoundError):
    """Student with given ID does not exist."""


class SessionNotFoundError(NotFoundError):
    """Class session with given ID does not exist."""


class SyllabusEntryNotFoundError(NotFoundError):
    """Syllabus entry does not exist or belongs to another course."""


class EnrollmentNotFoundError(NotFoundError):
    """Student is not enrolled in the course."""


# --- Session admission ---


class OutOfRangeError(CourseHubError):
    """Session date falls outside the course window."""

    kind = "OutOfRange"


class InvalidIntervalError(CourseHubError):
    """Session start time is not before its end time."""

    kind = "InvalidInterval"


class RoomConflictError(CourseHubError):
    """Room is already booked for an overlapping time."""

    kind = "RoomConflict"


class LecturerConflictError(CourseHubError):
    """Lecturer is already teaching at an overlapping time."""

    kind = "LecturerConflict"


class CourseSlotConflictError(CourseHubError):
    """Course already has a session at an overlapping time."""

    kind = "CourseSlotConflict"


# --- Enrollment admission ---


class CourseFullError(CourseHubError):
    """Course has no free seats."""

    kind = "CourseFull"


class AlreadyEnrolledError(CourseHubError):
    """Student is already enrolled in the course."""

    kind = "AlreadyEnrolled"


class StudentScheduleConflictError(CourseHubError):
    """Student holds a course whose date window overlaps the candidate."""

    kind = "StudentScheduleConflict"


# --- Course mutation ---


class InvalidRangeError(CourseHubError):
    """Course start date is after its end date."""

    kind = "InvalidRange"


class CapacityBelowEnrollmentError(CourseHubError):
    """New maximum is below the number of enrolled students."""

    kind = "CapacityBelowEnrollment"


class SessionsPrecedeNewStartError(CourseHubError):
    """Sessions exist before the proposed start date."""

    kind = "SessionsPrecedeNewStart"


class SessionsFollowNewEndError(CourseHubError):
    """Sessions exist after the proposed end date."""

    kind = "SessionsFollowNewEnd"


# --- Catalog maintenance ---


class RoomExistsError(CourseHubError):
    """Room with the same number already exists."""

    kind = "RoomExists"


class ResourceInUseError(CourseHubError):
    """Room or lecturer is still referenced by class sessions."""

    kind = "ResourceInUse"
