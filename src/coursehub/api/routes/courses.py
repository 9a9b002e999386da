"""Course endpoints: authoring, sessions, syllabus and readiness."""

from fastapi import APIRouter, status

from coursehub.api.dependencies import CatalogStoreDep, EngineDep
from coursehub.api.models import (
    APIResponse,
    CourseCreate,
    CourseDetailsResponse,
    CourseResponse,
    CourseUpdateRequest,
    ReadinessResponse,
    SessionCreate,
    SessionResponse,
    SyllabusEntryCreate,
    SyllabusEntryResponse,
    course_details_to_response,
    course_to_response,
    readiness_to_response,
    session_to_response,
    syllabus_entry_to_response,
)
from coursehub.catalog import CourseUpdate
from coursehub.scheduling import SessionRequest

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=APIResponse[list[CourseResponse]])
def list_courses(store: CatalogStoreDep) -> APIResponse[list[CourseResponse]]:
    """List all courses."""
    return APIResponse(data=[course_to_response(c) for c in store.list_courses()])


@router.post(
    "",
    response_model=APIResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_course(course: CourseCreate, store: CatalogStoreDep) -> APIResponse[CourseResponse]:
    """Create a new course."""
    created = store.create_course(
        name=course.name,
        start_date=course.start_date,
        end_date=course.end_date,
        minimum_pass_score=course.minimum_pass_score,
        maximum_students=course.maximum_students,
    )
    return APIResponse(data=course_to_response(created))


@router.get("/{course_id}", response_model=APIResponse[CourseDetailsResponse])
def get_course(course_id: str, store: CatalogStoreDep) -> APIResponse[CourseDetailsResponse]:
    """Get a course with its sessions and syllabus."""
    return APIResponse(data=course_details_to_response(store.get_course_details(course_id)))


@router.patch("/{course_id}", response_model=APIResponse[CourseResponse])
def update_course(
    course_id: str, course: CourseUpdateRequest, engine: EngineDep
) -> APIResponse[CourseResponse]:
    """Update a course (partial update), guarded against existing commitments."""
    update = CourseUpdate(
        name=course.name,
        start_date=course.start_date,
        end_date=course.end_date,
        minimum_pass_score=course.minimum_pass_score,
        maximum_students=course.maximum_students,
    )
    return APIResponse(data=course_to_response(engine.update_course(course_id, update)))


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(course_id: str, engine: EngineDep) -> None:
    """Delete a course with its sessions, syllabus and enrollments."""
    engine.delete_course(course_id)


@router.post(
    "/{course_id}/syllabus",
    response_model=APIResponse[SyllabusEntryResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_syllabus_entry(
    course_id: str, entry: SyllabusEntryCreate, engine: EngineDep
) -> APIResponse[SyllabusEntryResponse]:
    """Add a syllabus entry to a course."""
    created = engine.add_syllabus_entry(course_id, entry.title, entry.description)
    return APIResponse(data=syllabus_entry_to_response(created))


@router.post(
    "/{course_id}/sessions",
    response_model=APIResponse[SessionResponse],
    status_code=status.HTTP_201_CREATED,
)
def schedule_session(
    course_id: str, session: SessionCreate, engine: EngineDep
) -> APIResponse[SessionResponse]:
    """Schedule a class session, rejecting clashes with rooms, lecturers and the course."""
    admitted = engine.admit_session(
        SessionRequest(
            course_id=course_id,
            day=session.day,
            start_time=session.start_time,
            end_time=session.end_time,
            room_id=session.room_id,
            lecturer_id=session.lecturer_id,
            syllabus_id=session.syllabus_id,
        )
    )
    return APIResponse(data=session_to_response(admitted))


@router.delete("/{course_id}/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(course_id: str, session_id: str, engine: EngineDep) -> None:
    """Delete a class session of a course."""
    engine.delete_session(course_id, session_id)


@router.put("/{course_id}/readiness", response_model=APIResponse[ReadinessResponse])
def recompute_readiness(course_id: str, engine: EngineDep) -> APIResponse[ReadinessResponse]:
    """Re-evaluate whether the course has the syllabus and sessions it needs to run."""
    return APIResponse(data=readiness_to_response(engine.recompute_readiness(course_id)))
