"""Catalog - Persistent storage for courses, sessions, enrollments and resources."""

from coursehub.catalog.models import (
    ClassSession,
    Course,
    CourseDetails,
    CourseUpdate,
    Enrollment,
    Lecturer,
    Readiness,
    Room,
    ScheduledSession,
    Student,
    SyllabusEntry,
)
from coursehub.catalog.store import CatalogStore

__all__ = [
    "CatalogStore",
    "ClassSession",
    "Course",
    "CourseDetails",
    "CourseUpdate",
    "Enrollment",
    "Lecturer",
    "Readiness",
    "Room",
    "ScheduledSession",
    "Student",
    "SyllabusEntry",
]
