"""Student endpoints: registry, enrollment and schedules."""

from datetime import date

from fastapi import APIRouter, Query, status

from coursehub.api.dependencies import CatalogStoreDep, EngineDep
from coursehub.api.models import (
    APIResponse,
    CourseResponse,
    EnrollmentCreate,
    EnrollmentResponse,
    PersonCreate,
    PersonResponse,
    ScheduledSessionResponse,
    course_to_response,
    enrollment_to_response,
    person_to_response,
    scheduled_session_to_response,
)
from coursehub.exceptions import InvalidRangeError

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=APIResponse[list[PersonResponse]])
def list_students(store: CatalogStoreDep) -> APIResponse[list[PersonResponse]]:
    """List all students."""
    return APIResponse(data=[person_to_response(s) for s in store.list_students()])


@router.post(
    "",
    response_model=APIResponse[PersonResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_student(student: PersonCreate, store: CatalogStoreDep) -> APIResponse[PersonResponse]:
    """Register a new student."""
    created = store.create_student(
        name=student.name, phone_number=student.phone_number, email=student.email
    )
    return APIResponse(data=person_to_response(created))


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: str, engine: EngineDep) -> None:
    """Delete a student and their enrollments."""
    engine.delete_student(student_id)


@router.post(
    "/{student_id}/enrollments",
    response_model=APIResponse[EnrollmentResponse],
    status_code=status.HTTP_201_CREATED,
)
def enroll_student(
    student_id: str, enrollment: EnrollmentCreate, engine: EngineDep
) -> APIResponse[EnrollmentResponse]:
    """Enroll a student in a course if a seat is free and their schedule allows it."""
    created = engine.enroll(student_id, enrollment.course_id)
    return APIResponse(data=enrollment_to_response(created))


@router.delete(
    "/{student_id}/enrollments/{course_id}", status_code=status.HTTP_204_NO_CONTENT
)
def withdraw_student(student_id: str, course_id: str, engine: EngineDep) -> None:
    """Withdraw a student from a course."""
    engine.withdraw(student_id, course_id)


@router.get("/{student_id}/current_courses", response_model=APIResponse[list[CourseResponse]])
def list_current_courses(
    student_id: str,
    store: CatalogStoreDep,
    on: date | None = Query(default=None, description="Reference day (default: today)"),
) -> APIResponse[list[CourseResponse]]:
    """List the student's courses running on the reference day."""
    today = on if on is not None else date.today()
    courses = store.list_student_current_courses(student_id, today)
    return APIResponse(data=[course_to_response(c) for c in courses])


@router.get("/{student_id}/courses", response_model=APIResponse[list[CourseResponse]])
def list_course_history(
    student_id: str, store: CatalogStoreDep
) -> APIResponse[list[CourseResponse]]:
    """List every course the student is enrolled in, past and present."""
    store.find_student(student_id)
    courses = store.list_enrollments_for_student(student_id)
    return APIResponse(data=[course_to_response(c) for c in courses])


@router.get(
    "/{student_id}/schedule",
    response_model=APIResponse[list[ScheduledSessionResponse]],
)
def get_schedule(
    student_id: str,
    store: CatalogStoreDep,
    start: date = Query(..., description="First day, inclusive"),
    end: date = Query(..., description="Last day, inclusive"),
) -> APIResponse[list[ScheduledSessionResponse]]:
    """List the sessions of the student's courses between two days."""
    if start > end:
        raise InvalidRangeError(f"Start {start.isoformat()} is after end {end.isoformat()}")
    schedule = store.list_student_schedule(student_id, start, end)
    return APIResponse(data=[scheduled_session_to_response(s) for s in schedule])
