"""SQLAlchemy models for the catalog store."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class Readiness(StrEnum):
    """Course readiness state.

    DRAFT until readiness is first evaluated, then READY or NOT_READY
    depending on the syllabus and session counts at evaluation time.
    """

    DRAFT = "draft"
    READY = "ready"
    NOT_READY = "not-ready"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Course(Base):
    """Course model - root of the session/syllabus/enrollment cluster."""

    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    minimum_pass_score: Mapped[int] = mapped_column(Integer, nullable=False)
    maximum_students: Mapped[int] = mapped_column(Integer, nullable=False)
    readiness: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    sessions: Mapped[list[ClassSession]] = relationship(
        "ClassSession", back_populates="course", cascade="all, delete-orphan"
    )
    syllabus_entries: Mapped[list[SyllabusEntry]] = relationship(
        "SyllabusEntry", back_populates="course", cascade="all, delete-orphan"
    )
    enrollments: Mapped[list[Enrollment]] = relationship(
        "Enrollment", back_populates="course", cascade="all, delete-orphan"
    )

    def __init__(
        self,
        name: str,
        start_date: date,
        end_date: date,
        minimum_pass_score: int,
        maximum_students: int,
        id: str | None = None,
        readiness: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.name = name
        self.start_date = start_date
        self.end_date = end_date
        self.minimum_pass_score = minimum_pass_score
        self.maximum_students = maximum_students
        self.readiness = readiness if readiness is not None else Readiness.DRAFT.value

    @property
    def course_readiness(self) -> Readiness:
        """Get readiness as Readiness enum."""
        return Readiness(self.readiness)

    @property
    def ready(self) -> bool:
        """True once the last evaluation found both syllabus and sessions."""
        return self.readiness == Readiness.READY.value

    def __repr__(self) -> str:
        return (
            f"<Course(id={self.id!r}, name={self.name!r}, "
            f"start_date={self.start_date!r}, end_date={self.end_date!r})>"
        )


class Room(Base):
    """Room model."""

    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    room_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    def __init__(self, room_number: int, id: str | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.room_number = room_number

    def __repr__(self) -> str:
        return f"<Room(id={self.id!r}, room_number={self.room_number!r})>"


class Lecturer(Base):
    """Lecturer model."""

    __tablename__ = "lecturers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    def __init__(
        self, name: str, phone_number: str, email: str, id: str | None = None, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.name = name
        self.phone_number = phone_number
        self.email = email

    def __repr__(self) -> str:
        return f"<Lecturer(id={self.id!r}, name={self.name!r})>"


class Student(Base):
    """Student model."""

    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    enrollments: Mapped[list[Enrollment]] = relationship(
        "Enrollment", back_populates="student", cascade="all, delete-orphan"
    )

    def __init__(
        self, name: str, phone_number: str, email: str, id: str | None = None, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.name = name
        self.phone_number = phone_number
        self.email = email

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, name={self.name!r})>"


class SyllabusEntry(Base):
    """Syllabus entry model - one topic of a course."""

    __tablename__ = "syllabus_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    course: Mapped[Course] = relationship("Course", back_populates="syllabus_entries")

    def __init__(
        self,
        course_id: str,
        title: str,
        description: str = "",
        id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.course_id = course_id
        self.title = title
        self.description = description

    def __repr__(self) -> str:
        return f"<SyllabusEntry(id={self.id!r}, title={self.title!r})>"


class ClassSession(Base):
    """Class session model - one scheduled meeting of a course."""

    __tablename__ = "class_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    room_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("rooms.id"), nullable=False, index=True
    )
    lecturer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("lecturers.id"), nullable=False, index=True
    )
    syllabus_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("syllabus_entries.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    course: Mapped[Course] = relationship("Course", back_populates="sessions")

    def __init__(
        self,
        course_id: str,
        day: date,
        start_time: time,
        end_time: time,
        room_id: str,
        lecturer_id: str,
        syllabus_id: str | None = None,
        id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.course_id = course_id
        self.day = day
        self.start_time = start_time
        self.end_time = end_time
        self.room_id = room_id
        self.lecturer_id = lecturer_id
        self.syllabus_id = syllabus_id

    def __repr__(self) -> str:
        return (
            f"<ClassSession(id={self.id!r}, day={self.day!r}, "
            f"start_time={self.start_time!r}, end_time={self.end_time!r})>"
        )


class Enrollment(Base):
    """Enrollment model - a student's seat in a course."""

    __tablename__ = "enrollments"
    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_enrollment"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # Relationships
    course: Mapped[Course] = relationship("Course", back_populates="enrollments")
    student: Mapped[Student] = relationship("Student", back_populates="enrollments")

    def __init__(
        self, student_id: str, course_id: str, id: str | None = None, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.student_id = student_id
        self.course_id = course_id

    def __repr__(self) -> str:
        return (
            f"<Enrollment(id={self.id!r}, student_id={self.student_id!r}, "
            f"course_id={self.course_id!r})>"
        )


@dataclass
class ScheduledSession:
    """A class session joined with the name of its course."""

    session: ClassSession
    course_name: str


@dataclass
class CourseDetails:
    """A course together with its sessions and syllabus."""

    course: Course
    sessions: list[ClassSession] = field(default_factory=list)
    syllabus_entries: list[SyllabusEntry] = field(default_factory=list)


@dataclass
class CourseUpdate:
    """Partial course update. Fields left as None are not touched."""

    name: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    minimum_pass_score: int | None = None
    maximum_students: int | None = None

    def supplied(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        values = {
            "name": self.name,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "minimum_pass_score": self.minimum_pass_score,
            "maximum_students": self.maximum_students,
        }
        return {key: value for key, value in values.items() if value is not None}

    def is_empty(self) -> bool:
        """True if no field was provided."""
        return not self.supplied()

    def changes_window(self) -> bool:
        """True if the start or end date is being moved."""
        return self.start_date is not None or self.end_date is not None
