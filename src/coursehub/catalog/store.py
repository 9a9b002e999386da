"""CatalogStore - Repository for courses, sessions, enrollments and resources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from coursehub.catalog.database import Database
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
from coursehub.exceptions import (
    AlreadyEnrolledError,
    CourseNotFoundError,
    EnrollmentNotFoundError,
    InvalidRangeError,
    LecturerNotFoundError,
    NotFoundError,
    ResourceInUseError,
    RoomExistsError,
    RoomNotFoundError,
    SessionNotFoundError,
    StudentNotFoundError,
    SyllabusEntryNotFoundError,
)

if TYPE_CHECKING:
    from datetime import date

    from sqlalchemy import Select
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class CatalogStore:
    """Main API for catalog persistence.

    Each method runs in its own database session. Returned objects are
    detached; relationships are not loaded on them.
    """

    def __init__(self, db_path: str = "coursehub.db") -> None:
        """Initialize the store with a SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    @property
    def database(self) -> Database:
        """The underlying database connection manager."""
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Lookups ---

    def find_course(self, course_id: str) -> Course:
        """Get course by ID.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            return self._get_course(session, course_id)
        finally:
            session.close()

    def find_room(self, room_id: str) -> Room:
        """Get room by ID.

        Raises:
            RoomNotFoundError: If room doesn't exist
        """
        session = self._db.get_session()
        try:
            room = session.get(Room, room_id)
            if room is None:
                raise RoomNotFoundError(f"Room with id '{room_id}' not found")
            return room
        finally:
            session.close()

    def find_lecturer(self, lecturer_id: str) -> Lecturer:
        """Get lecturer by ID.

        Raises:
            LecturerNotFoundError: If lecturer doesn't exist
        """
        session = self._db.get_session()
        try:
            lecturer = session.get(Lecturer, lecturer_id)
            if lecturer is None:
                raise LecturerNotFoundError(f"Lecturer with id '{lecturer_id}' not found")
            return lecturer
        finally:
            session.close()

    def find_student(self, student_id: str) -> Student:
        """Get student by ID.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            return self._get_student(session, student_id)
        finally:
            session.close()

    def find_syllabus_entry(self, syllabus_id: str) -> SyllabusEntry:
        """Get syllabus entry by ID.

        Raises:
            SyllabusEntryNotFoundError: If the entry doesn't exist
        """
        session = self._db.get_session()
        try:
            entry = session.get(SyllabusEntry, syllabus_id)
            if entry is None:
                raise SyllabusEntryNotFoundError(
                    f"Syllabus entry with id '{syllabus_id}' not found"
                )
            return entry
        finally:
            session.close()

    def find_session(self, session_id: str) -> ClassSession:
        """Get class session by ID.

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        session = self._db.get_session()
        try:
            class_session = session.get(ClassSession, session_id)
            if class_session is None:
                raise SessionNotFoundError(f"Class session with id '{session_id}' not found")
            return class_session
        finally:
            session.close()

    def find_enrollment(self, student_id: str, course_id: str) -> Enrollment | None:
        """Get the enrollment of a student in a course, if any."""
        session = self._db.get_session()
        try:
            stmt = select(Enrollment).where(
                Enrollment.student_id == student_id,
                Enrollment.course_id == course_id,
            )
            return session.execute(stmt).scalar_one_or_none()
        finally:
            session.close()

    # --- Session queries ---

    def list_sessions(
        self,
        room_id: str | None = None,
        lecturer_id: str | None = None,
        course_id: str | None = None,
        day: date | None = None,
    ) -> list[ClassSession]:
        """List class sessions with optional filters.

        Args:
            room_id: Filter by room (optional)
            lecturer_id: Filter by lecturer (optional)
            course_id: Filter by course (optional)
            day: Filter by calendar day (optional)

        Returns:
            List of sessions, ordered by day and start time
        """
        session = self._db.get_session()
        try:
            stmt = select(ClassSession)

            if room_id is not None:
                stmt = stmt.where(ClassSession.room_id == room_id)
            if lecturer_id is not None:
                stmt = stmt.where(ClassSession.lecturer_id == lecturer_id)
            if course_id is not None:
                stmt = stmt.where(ClassSession.course_id == course_id)
            if day is not None:
                stmt = stmt.where(ClassSession.day == day)

            stmt = stmt.order_by(ClassSession.day, ClassSession.start_time)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def count_sessions(self, course_id: str) -> int:
        """Count all sessions of a course."""
        return self._count(
            select(func.count(ClassSession.id)).where(ClassSession.course_id == course_id)
        )

    def count_sessions_before(self, course_id: str, day: date) -> int:
        """Count sessions of a course dated strictly before the given day."""
        return self._count(
            select(func.count(ClassSession.id)).where(
                ClassSession.course_id == course_id,
                ClassSession.day < day,
            )
        )

    def count_sessions_after(self, course_id: str, day: date) -> int:
        """Count sessions of a course dated strictly after the given day."""
        return self._count(
            select(func.count(ClassSession.id)).where(
                ClassSession.course_id == course_id,
                ClassSession.day > day,
            )
        )

    def count_syllabus_entries(self, course_id: str) -> int:
        """Count syllabus entries of a course."""
        return self._count(
            select(func.count(SyllabusEntry.id)).where(SyllabusEntry.course_id == course_id)
        )

    # --- Enrollment queries ---

    def count_enrollments(self, course_id: str) -> int:
        """Count students enrolled in a course."""
        return self._count(
            select(func.count(Enrollment.id)).where(Enrollment.course_id == course_id)
        )

    def list_enrollments_for_student(self, student_id: str) -> list[Course]:
        """List the courses a student is enrolled in, ordered by start date."""
        session = self._db.get_session()
        try:
            stmt = (
                select(Course)
                .join(Enrollment, Enrollment.course_id == Course.id)
                .where(Enrollment.student_id == student_id)
                .order_by(Course.start_date, Course.name)
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def list_course_student_ids(self, course_id: str) -> list[str]:
        """List the ids of the students enrolled in a course."""
        session = self._db.get_session()
        try:
            stmt = (
                select(Enrollment.student_id)
                .where(Enrollment.course_id == course_id)
                .order_by(Enrollment.student_id)
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    # --- Commits ---

    def commit_session(self, class_session: ClassSession) -> ClassSession:
        """Persist a new class session.

        Args:
            class_session: The admitted session

        Returns:
            The stored session

        Raises:
            NotFoundError: If a referenced course, room, lecturer or syllabus
                entry was deleted before the commit
        """
        session = self._db.get_session()
        try:
            session.add(class_session)
            session.commit()
            session.refresh(class_session)
            return class_session
        except IntegrityError as e:
            session.rollback()
            if "FOREIGN KEY constraint failed" in str(e):
                raise self._missing_session_reference(session, class_session) from e
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def commit_enrollment(self, enrollment: Enrollment) -> Enrollment:
        """Persist a new enrollment.

        Raises:
            AlreadyEnrolledError: If the (student, course) pair already exists
            NotFoundError: If the student or the course was deleted before the commit
        """
        session = self._db.get_session()
        try:
            session.add(enrollment)
            session.commit()
            session.refresh(enrollment)
            return enrollment
        except IntegrityError as e:
            session.rollback()
            if "UNIQUE constraint failed" in str(e) or "uq_enrollment" in str(e):
                raise AlreadyEnrolledError(
                    f"Student '{enrollment.student_id}' is already enrolled "
                    f"in course '{enrollment.course_id}'"
                ) from e
            if "FOREIGN KEY constraint failed" in str(e):
                if session.get(Course, enrollment.course_id) is None:
                    raise CourseNotFoundError(
                        f"Course with id '{enrollment.course_id}' not found"
                    ) from e
                raise StudentNotFoundError(
                    f"Student with id '{enrollment.student_id}' not found"
                ) from e
            raise
        finally:
            session.close()

    def update_course_fields(self, course_id: str, update: CourseUpdate) -> Course:
        """Apply the supplied fields of a partial update.

        Args:
            course_id: The course's unique ID
            update: Fields to change; None fields are left untouched

        Returns:
            The updated Course object

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = self._get_course(session, course_id)
            for name, value in update.supplied().items():
                setattr(course, name, value)
            session.commit()
            session.refresh(course)
            return course
        finally:
            session.close()

    def set_readiness(self, course_id: str, readiness: Readiness) -> Course:
        """Store the evaluated readiness of a course.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = self._get_course(session, course_id)
            course.readiness = readiness.value
            session.commit()
            session.refresh(course)
            return course
        finally:
            session.close()

    # --- Course authoring ---

    def create_course(
        self,
        name: str,
        start_date: date,
        end_date: date,
        minimum_pass_score: int,
        maximum_students: int,
    ) -> Course:
        """Create a new course in the draft state.

        Raises:
            InvalidRangeError: If start_date is after end_date
        """
        if start_date > end_date:
            raise InvalidRangeError(
                f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
            )

        session = self._db.get_session()
        try:
            course = Course(
                name=name,
                start_date=start_date,
                end_date=end_date,
                minimum_pass_score=minimum_pass_score,
                maximum_students=maximum_students,
            )
            session.add(course)
            session.commit()
            session.refresh(course)
            logger.info("Created course %s (%s)", course.id, course.name)
            return course
        finally:
            session.close()

    def list_courses(self) -> list[Course]:
        """List all courses, ordered by start date."""
        session = self._db.get_session()
        try:
            stmt = select(Course).order_by(Course.start_date, Course.name)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def get_course_details(self, course_id: str) -> CourseDetails:
        """Get a course with its sessions and syllabus entries.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = self._get_course(session, course_id)
            sessions = session.execute(
                select(ClassSession)
                .where(ClassSession.course_id == course_id)
                .order_by(ClassSession.day, ClassSession.start_time)
            ).scalars()
            entries = session.execute(
                select(SyllabusEntry)
                .where(SyllabusEntry.course_id == course_id)
                .order_by(SyllabusEntry.title)
            ).scalars()
            return CourseDetails(
                course=course,
                sessions=list(sessions.all()),
                syllabus_entries=list(entries.all()),
            )
        finally:
            session.close()

    def delete_course(self, course_id: str) -> None:
        """Delete a course with its sessions, syllabus entries and enrollments.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = self._get_course(session, course_id)
            session.delete(course)
            session.commit()
            logger.info("Deleted course %s", course_id)
        finally:
            session.close()

    def add_syllabus_entry(
        self, course_id: str, title: str, description: str = ""
    ) -> SyllabusEntry:
        """Add a syllabus entry to a course.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            self._get_course(session, course_id)
            entry = SyllabusEntry(course_id=course_id, title=title, description=description)
            session.add(entry)
            session.commit()
            session.refresh(entry)
            return entry
        finally:
            session.close()

    def delete_session(self, session_id: str) -> None:
        """Delete a class session.

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        session = self._db.get_session()
        try:
            class_session = session.get(ClassSession, session_id)
            if class_session is None:
                raise SessionNotFoundError(f"Class session with id '{session_id}' not found")
            session.delete(class_session)
            session.commit()
        finally:
            session.close()

    # --- Rooms, lecturers and students ---

    def create_room(self, room_number: int) -> Room:
        """Create a new room.

        Raises:
            RoomExistsError: If a room with the same number already exists
        """
        session = self._db.get_session()
        try:
            room = Room(room_number=room_number)
            session.add(room)
            session.commit()
            session.refresh(room)
            return room
        except IntegrityError as e:
            session.rollback()
            if "UNIQUE constraint failed" in str(e) or "rooms.room_number" in str(e):
                raise RoomExistsError(f"Room number {room_number} already exists") from e
            raise
        finally:
            session.close()

    def list_rooms(self) -> list[Room]:
        """List all rooms, ordered by number."""
        session = self._db.get_session()
        try:
            return list(session.execute(select(Room).order_by(Room.room_number)).scalars().all())
        finally:
            session.close()

    def delete_room(self, room_id: str) -> None:
        """Delete a room. Fails if sessions are booked in it.

        Raises:
            RoomNotFoundError: If room doesn't exist
            ResourceInUseError: If class sessions reference the room
        """
        session = self._db.get_session()
        try:
            room = session.get(Room, room_id)
            if room is None:
                raise RoomNotFoundError(f"Room with id '{room_id}' not found")

            stmt = select(func.count(ClassSession.id)).where(ClassSession.room_id == room_id)
            if session.execute(stmt).scalar_one() > 0:
                raise ResourceInUseError(f"Room '{room_id}' has scheduled class sessions")

            session.delete(room)
            session.commit()
        finally:
            session.close()

    def create_lecturer(self, name: str, phone_number: str, email: str) -> Lecturer:
        """Create a new lecturer."""
        session = self._db.get_session()
        try:
            lecturer = Lecturer(name=name, phone_number=phone_number, email=email)
            session.add(lecturer)
            session.commit()
            session.refresh(lecturer)
            return lecturer
        finally:
            session.close()

    def list_lecturers(self) -> list[Lecturer]:
        """List all lecturers, ordered by name."""
        session = self._db.get_session()
        try:
            return list(session.execute(select(Lecturer).order_by(Lecturer.name)).scalars().all())
        finally:
            session.close()

    def delete_lecturer(self, lecturer_id: str) -> None:
        """Delete a lecturer. Fails if the lecturer teaches any session.

        Raises:
            LecturerNotFoundError: If lecturer doesn't exist
            ResourceInUseError: If class sessions reference the lecturer
        """
        session = self._db.get_session()
        try:
            lecturer = session.get(Lecturer, lecturer_id)
            if lecturer is None:
                raise LecturerNotFoundError(f"Lecturer with id '{lecturer_id}' not found")

            stmt = select(func.count(ClassSession.id)).where(
                ClassSession.lecturer_id == lecturer_id
            )
            if session.execute(stmt).scalar_one() > 0:
                raise ResourceInUseError(f"Lecturer '{lecturer_id}' has scheduled class sessions")

            session.delete(lecturer)
            session.commit()
        finally:
            session.close()

    def create_student(self, name: str, phone_number: str, email: str) -> Student:
        """Create a new student."""
        session = self._db.get_session()
        try:
            student = Student(name=name, phone_number=phone_number, email=email)
            session.add(student)
            session.commit()
            session.refresh(student)
            return student
        finally:
            session.close()

    def list_students(self) -> list[Student]:
        """List all students, ordered by name."""
        session = self._db.get_session()
        try:
            return list(session.execute(select(Student).order_by(Student.name)).scalars().all())
        finally:
            session.close()

    def delete_student(self, student_id: str) -> None:
        """Delete a student together with their enrollments.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            student = self._get_student(session, student_id)
            session.delete(student)
            session.commit()
        finally:
            session.close()

    def delete_enrollment(self, student_id: str, course_id: str) -> None:
        """Remove a student from a course.

        Raises:
            EnrollmentNotFoundError: If the student is not enrolled in the course
        """
        session = self._db.get_session()
        try:
            stmt = select(Enrollment).where(
                Enrollment.student_id == student_id,
                Enrollment.course_id == course_id,
            )
            enrollment = session.execute(stmt).scalar_one_or_none()
            if enrollment is None:
                raise EnrollmentNotFoundError(
                    f"Student '{student_id}' is not enrolled in course '{course_id}'"
                )
            session.delete(enrollment)
            session.commit()
        finally:
            session.close()

    # --- Schedules ---

    def list_student_current_courses(self, student_id: str, today: date) -> list[Course]:
        """List the student's courses running on the given day.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            self._get_student(session, student_id)
            stmt = (
                select(Course)
                .join(Enrollment, Enrollment.course_id == Course.id)
                .where(
                    Enrollment.student_id == student_id,
                    Course.start_date <= today,
                    Course.end_date >= today,
                )
                .order_by(Course.start_date, Course.name)
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def list_student_schedule(
        self, student_id: str, from_day: date, to_day: date
    ) -> list[ScheduledSession]:
        """List sessions of the student's courses between two days, inclusive.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            self._get_student(session, student_id)
            stmt = (
                select(ClassSession, Course.name)
                .join(Course, Course.id == ClassSession.course_id)
                .join(Enrollment, Enrollment.course_id == Course.id)
                .where(
                    Enrollment.student_id == student_id,
                    ClassSession.day >= from_day,
                    ClassSession.day <= to_day,
                )
                .order_by(ClassSession.day, ClassSession.start_time)
            )
            return [
                ScheduledSession(session=row[0], course_name=row[1])
                for row in session.execute(stmt).all()
            ]
        finally:
            session.close()

    def list_lecturer_current_courses(self, lecturer_id: str, today: date) -> list[Course]:
        """List running courses in which the lecturer teaches at least one session.

        Raises:
            LecturerNotFoundError: If lecturer doesn't exist
        """
        session = self._db.get_session()
        try:
            self._get_lecturer(session, lecturer_id)
            stmt = (
                select(Course)
                .join(ClassSession, ClassSession.course_id == Course.id)
                .where(
                    ClassSession.lecturer_id == lecturer_id,
                    Course.start_date <= today,
                    Course.end_date >= today,
                )
                .distinct()
                .order_by(Course.start_date, Course.name)
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def list_lecturer_courses(self, lecturer_id: str, from_day: date, to_day: date) -> list[Course]:
        """List courses in which the lecturer teaches between two days, inclusive.

        Raises:
            LecturerNotFoundError: If lecturer doesn't exist
        """
        session = self._db.get_session()
        try:
            self._get_lecturer(session, lecturer_id)
            stmt = (
                select(Course)
                .join(ClassSession, ClassSession.course_id == Course.id)
                .where(
                    ClassSession.lecturer_id == lecturer_id,
                    ClassSession.day >= from_day,
                    ClassSession.day <= to_day,
                )
                .distinct()
                .order_by(Course.start_date, Course.name)
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def list_lecturer_schedule(
        self, lecturer_id: str, from_day: date, to_day: date
    ) -> list[ScheduledSession]:
        """List the lecturer's sessions between two days, inclusive.

        Raises:
            LecturerNotFoundError: If lecturer doesn't exist
        """
        session = self._db.get_session()
        try:
            self._get_lecturer(session, lecturer_id)
            stmt = (
                select(ClassSession, Course.name)
                .join(Course, Course.id == ClassSession.course_id)
                .where(
                    ClassSession.lecturer_id == lecturer_id,
                    ClassSession.day >= from_day,
                    ClassSession.day <= to_day,
                )
                .order_by(ClassSession.day, ClassSession.start_time)
            )
            return [
                ScheduledSession(session=row[0], course_name=row[1])
                for row in session.execute(stmt).all()
            ]
        finally:
            session.close()

    # --- Helpers ---

    def _count(self, stmt: Select[tuple[int]]) -> int:
        session = self._db.get_session()
        try:
            return int(session.execute(stmt).scalar_one())
        finally:
            session.close()

    @staticmethod
    def _get_course(session: Session, course_id: str) -> Course:
        course = session.get(Course, course_id)
        if course is None:
            raise CourseNotFoundError(f"Course with id '{course_id}' not found")
        return course

    @staticmethod
    def _get_student(session: Session, student_id: str) -> Student:
        student = session.get(Student, student_id)
        if student is None:
            raise StudentNotFoundError(f"Student with id '{student_id}' not found")
        return student

    @staticmethod
    def _get_lecturer(session: Session, lecturer_id: str) -> Lecturer:
        lecturer = session.get(Lecturer, lecturer_id)
        if lecturer is None:
            raise LecturerNotFoundError(f"Lecturer with id '{lecturer_id}' not found")
        return lecturer

    @staticmethod
    def _missing_session_reference(session: Session, class_session: ClassSession) -> NotFoundError:
        if session.get(Course, class_session.course_id) is None:
            return CourseNotFoundError(f"Course with id '{class_session.course_id}' not found")
        if session.get(Room, class_session.room_id) is None:
            return RoomNotFoundError(f"Room with id '{class_session.room_id}' not found")
        if session.get(Lecturer, class_session.lecturer_id) is None:
            return LecturerNotFoundError(
                f"Lecturer with id '{class_session.lecturer_id}' not found"
            )
        return SyllabusEntryNotFoundError(
            f"Syllabus entry with id '{class_session.syllabus_id}' not found"
        )
