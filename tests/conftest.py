"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, time

import pytest

from coursehub.catalog import CatalogStore, Course, Lecturer, Room, Student
from coursehub.scheduling import SchedulingEngine, SessionRequest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture
def store() -> Iterator[CatalogStore]:
    """Create an in-memory CatalogStore for testing."""
    s = CatalogStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def engine(store: CatalogStore) -> SchedulingEngine:
    """Create a SchedulingEngine over the in-memory store."""
    return SchedulingEngine(store)


@dataclass
class Campus:
    """A small seeded catalog: one course, two rooms, two lecturers, three students."""

    course: Course
    room1: Room
    room2: Room
    lecturer1: Lecturer
    lecturer2: Lecturer
    student_a: Student
    student_b: Student
    student_c: Student

    def session(
        self,
        day: date = date(2024, 1, 10),
        start: time = time(18, 0),
        end: time = time(20, 0),
        room: Room | None = None,
        lecturer: Lecturer | None = None,
        course: Course | None = None,
        syllabus_id: str | None = None,
    ) -> SessionRequest:
        """Build a session request with sensible defaults."""
        return SessionRequest(
            course_id=(course or self.course).id,
            day=day,
            start_time=start,
            end_time=end,
            room_id=(room or self.room1).id,
            lecturer_id=(lecturer or self.lecturer1).id,
            syllabus_id=syllabus_id,
        )


@pytest.fixture
def campus(store: CatalogStore) -> Campus:
    """Seed a course running 2024-01-01..2024-03-01 with two seats."""
    return Campus(
        course=store.create_course(
            name="Algorithms",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 3, 1),
            minimum_pass_score=60,
            maximum_students=2,
        ),
        room1=store.create_room(101),
        room2=store.create_room(102),
        lecturer1=store.create_lecturer("Ada Lovelace", "+44 20 7946 0000", "ada@example.com"),
        lecturer2=store.create_lecturer("Alan Turing", "+44 20 7946 0001", "alan@example.com"),
        student_a=store.create_student("Student A", "050 1234567", "a@example.com"),
        student_b=store.create_student("Student B", "050 1234568", "b@example.com"),
        student_c=store.create_student("Student C", "050 1234569", "c@example.com"),
    )
