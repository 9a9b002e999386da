"""Lecturer endpoints: registry, teaching load and schedules."""

from datetime import date

from fastapi import APIRouter, Query, status

from coursehub.api.dependencies import CatalogStoreDep, EngineDep
from coursehub.api.models import (
    APIResponse,
    CourseResponse,
    PersonCreate,
    PersonResponse,
    ScheduledSessionResponse,
    course_to_response,
    person_to_response,
    scheduled_session_to_response,
)
from coursehub.exceptions import InvalidRangeError

router = APIRouter(prefix="/lecturers", tags=["lecturers"])


@router.get("", response_model=APIResponse[list[PersonResponse]])
def list_lecturers(store: CatalogStoreDep) -> APIResponse[list[PersonResponse]]:
    """List all lecturers."""
    return APIResponse(data=[person_to_response(lec) for lec in store.list_lecturers()])


@router.post(
    "",
    response_model=APIResponse[PersonResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_lecturer(
    lecturer: PersonCreate, store: CatalogStoreDep
) -> APIResponse[PersonResponse]:
    """Register a new lecturer."""
    created = store.create_lecturer(
        name=lecturer.name, phone_number=lecturer.phone_number, email=lecturer.email
    )
    return APIResponse(data=person_to_response(created))


@router.delete("/{lecturer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lecturer(lecturer_id: str, engine: EngineDep) -> None:
    """Delete a lecturer who teaches no sessions."""
    engine.delete_lecturer(lecturer_id)


@router.get("/{lecturer_id}/current_courses", response_model=APIResponse[list[CourseResponse]])
def list_current_courses(
    lecturer_id: str,
    store: CatalogStoreDep,
    on: date | None = Query(default=None, description="Reference day (default: today)"),
) -> APIResponse[list[CourseResponse]]:
    """List running courses the lecturer teaches in."""
    today = on if on is not None else date.today()
    courses = store.list_lecturer_current_courses(lecturer_id, today)
    return APIResponse(data=[course_to_response(c) for c in courses])


@router.get("/{lecturer_id}/courses", response_model=APIResponse[list[CourseResponse]])
def list_courses(
    lecturer_id: str,
    store: CatalogStoreDep,
    start: date = Query(..., description="First day, inclusive"),
    end: date = Query(..., description="Last day, inclusive"),
) -> APIResponse[list[CourseResponse]]:
    """List courses the lecturer teaches in between two days."""
    if start > end:
        raise InvalidRangeError(f"Start {start.isoformat()} is after end {end.isoformat()}")
    courses = store.list_lecturer_courses(lecturer_id, start, end)
    return APIResponse(data=[course_to_response(c) for c in courses])


@router.get(
    "/{lecturer_id}/schedule",
    response_model=APIResponse[list[ScheduledSessionResponse]],
)
def get_schedule(
    lecturer_id: str,
    store: CatalogStoreDep,
    start: date = Query(..., description="First day, inclusive"),
    end: date = Query(..., description="Last day, inclusive"),
) -> APIResponse[list[ScheduledSessionResponse]]:
    """List the lecturer's sessions between two days."""
    if start > end:
        raise InvalidRangeError(f"Start {start.isoformat()} is after end {end.isoformat()}")
    schedule = store.list_lecturer_schedule(lecturer_id, start, end)
    return APIResponse(data=[scheduled_session_to_response(s) for s in schedule])
