"""Pydantic models for REST API."""

from datetime import date, datetime, time
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

COURSE_NAME_PATTERN = r"^[a-zA-Z0-9 ]+$"
PERSON_NAME_PATTERN = r"^[a-zA-Z ]+$"
PHONE_PATTERN = r"^\+?[\d\s()\-]{6,20}$"
EMAIL_PATTERN = r"^[\w.+\-]+@[\w\-]+(\.[\w\-]+)*\.\w{2,}$"


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None
    kind: str | None = None


# Course models


class CourseCreate(BaseModel):
    """Request model for creating a course."""

    name: str = Field(..., min_length=1, max_length=255, pattern=COURSE_NAME_PATTERN)
    start_date: date
    end_date: date
    minimum_pass_score: int = Field(..., ge=0, le=100)
    maximum_students: int = Field(..., ge=1)


class CourseUpdateRequest(BaseModel):
    """Request model for updating a course (partial update)."""

    name: str | None = Field(
        default=None, min_length=1, max_length=255, pattern=COURSE_NAME_PATTERN
    )
    start_date: date | None = None
    end_date: date | None = None
    minimum_pass_score: int | None = Field(default=None, ge=0, le=100)
    maximum_students: int | None = Field(default=None, ge=1)


class CourseResponse(BaseModel):
    """Response model for a course."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    start_date: date
    end_date: date
    minimum_pass_score: int
    maximum_students: int
    readiness: str
    ready: bool
    created_at: datetime
    updated_at: datetime


def course_to_response(course: Any) -> CourseResponse:
    """Convert a Course model to CourseResponse."""
    return CourseResponse.model_validate(course)


# Session models


class SessionCreate(BaseModel):
    """Request model for scheduling a class session of a course."""

    day: date
    start_time: time
    end_time: time
    room_id: str = Field(..., min_length=1, max_length=36)
    lecturer_id: str = Field(..., min_length=1, max_length=36)
    syllabus_id: str | None = Field(default=None, min_length=1, max_length=36)


class SessionResponse(BaseModel):
    """Response model for a class session."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    day: date
    start_time: time
    end_time: time
    room_id: str
    lecturer_id: str
    syllabus_id: str | None


def session_to_response(class_session: Any) -> SessionResponse:
    """Convert a ClassSession model to SessionResponse."""
    return SessionResponse.model_validate(class_session)


class ScheduledSessionResponse(SessionResponse):
    """Response model for a schedule line: a session plus its course name."""

    course_name: str


def scheduled_session_to_response(scheduled: Any) -> ScheduledSessionResponse:
    """Convert a ScheduledSession to ScheduledSessionResponse."""
    base = session_to_response(scheduled.session)
    return ScheduledSessionResponse(**base.model_dump(), course_name=scheduled.course_name)


# Syllabus models


class SyllabusEntryCreate(BaseModel):
    """Request model for adding a syllabus entry."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="")


class SyllabusEntryResponse(BaseModel):
    """Response model for a syllabus entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    title: str
    description: str


def syllabus_entry_to_response(entry: Any) -> SyllabusEntryResponse:
    """Convert a SyllabusEntry model to SyllabusEntryResponse."""
    return SyllabusEntryResponse.model_validate(entry)


class CourseDetailsResponse(BaseModel):
    """Response model for a course with its sessions and syllabus."""

    course: CourseResponse
    sessions: list[SessionResponse]
    syllabus: list[SyllabusEntryResponse]


def course_details_to_response(details: Any) -> CourseDetailsResponse:
    """Convert CourseDetails to CourseDetailsResponse."""
    return CourseDetailsResponse(
        course=course_to_response(details.course),
        sessions=[session_to_response(s) for s in details.sessions],
        syllabus=[syllabus_entry_to_response(e) for e in details.syllabus_entries],
    )


class ReadinessResponse(BaseModel):
    """Response model for a readiness evaluation."""

    course_id: str
    readiness: str
    ready: bool
    syllabus_count: int
    session_count: int
    missing: list[str]


def readiness_to_response(report: Any) -> ReadinessResponse:
    """Convert a ReadinessReport to ReadinessResponse."""
    return ReadinessResponse(
        course_id=report.course_id,
        readiness=report.readiness.value,
        ready=report.ready,
        syllabus_count=report.syllabus_count,
        session_count=report.session_count,
        missing=list(report.missing),
    )


# Room models


class RoomCreate(BaseModel):
    """Request model for creating a room."""

    room_number: int = Field(..., ge=1)


class RoomResponse(BaseModel):
    """Response model for a room."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    room_number: int


def room_to_response(room: Any) -> RoomResponse:
    """Convert a Room model to RoomResponse."""
    return RoomResponse.model_validate(room)


# Lecturer and student models


class PersonCreate(BaseModel):
    """Request model for creating a lecturer or a student."""

    name: str = Field(..., min_length=1, max_length=255, pattern=PERSON_NAME_PATTERN)
    phone_number: str = Field(..., pattern=PHONE_PATTERN)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)


class PersonResponse(BaseModel):
    """Response model for a lecturer or a student."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    phone_number: str
    email: str


def person_to_response(person: Any) -> PersonResponse:
    """Convert a Lecturer or Student model to PersonResponse."""
    return PersonResponse.model_validate(person)


# Enrollment models


class EnrollmentCreate(BaseModel):
    """Request model for enrolling a student in a course."""

    course_id: str = Field(..., min_length=1, max_length=36)


class EnrollmentResponse(BaseModel):
    """Response model for an enrollment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    course_id: str
    created_at: datetime


def enrollment_to_response(enrollment: Any) -> EnrollmentResponse:
    """Convert an Enrollment model to EnrollmentResponse."""
    return EnrollmentResponse.model_validate(enrollment)
