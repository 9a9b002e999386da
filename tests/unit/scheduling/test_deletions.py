"""Unit tests for deletions routed through the scheduling engine."""

import threading
from datetime import date

import pytest

from coursehub.catalog import CatalogStore, ClassSession, Enrollment
from coursehub.exceptions import (
    CourseNotFoundError,
    LecturerNotFoundError,
    ResourceInUseError,
    RoomNotFoundError,
    SessionNotFoundError,
    StudentNotFoundError,
)
from coursehub.scheduling import SchedulingEngine
from coursehub.scheduling.locks import course_key, room_key


@pytest.mark.unit
class TestEngineDeletes:
    """Deletes behave like the store's but run under resource keys."""

    def test_delete_course(self, engine: SchedulingEngine, store: CatalogStore, campus) -> None:
        engine.admit_session(campus.session())

        engine.delete_course(campus.course.id)

        with pytest.raises(CourseNotFoundError):
            store.find_course(campus.course.id)
        assert store.list_sessions() == []

    def test_delete_session(self, engine: SchedulingEngine, store: CatalogStore, campus) -> None:
        admitted = engine.admit_session(campus.session())

        engine.delete_session(campus.course.id, admitted.id)

        assert store.count_sessions(campus.course.id) == 0

    def test_delete_session_of_other_course(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        admitted = engine.admit_session(campus.session())
        other = store.create_course("Databases", date(2024, 1, 1), date(2024, 3, 1), 50, 10)

        with pytest.raises(SessionNotFoundError):
            engine.delete_session(other.id, admitted.id)

        assert store.count_sessions(campus.course.id) == 1

    def test_delete_room_in_use(self, engine: SchedulingEngine, campus) -> None:
        engine.admit_session(campus.session())

        with pytest.raises(ResourceInUseError):
            engine.delete_room(campus.room1.id)

        engine.delete_room(campus.room2.id)

    def test_delete_lecturer_and_student(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        engine.enroll(campus.student_a.id, campus.course.id)

        engine.delete_lecturer(campus.lecturer2.id)
        engine.delete_student(campus.student_a.id)

        with pytest.raises(LecturerNotFoundError):
            store.find_lecturer(campus.lecturer2.id)
        assert store.count_enrollments(campus.course.id) == 0

    def test_add_syllabus_entry(
        self, engine: SchedulingEngine, store: CatalogStore, campus
    ) -> None:
        entry = engine.add_syllabus_entry(campus.course.id, "Sorting", "Merge sort")

        assert store.find_syllabus_entry(entry.id).description == "Merge sort"

    @pytest.mark.parametrize(
        ("delete", "key"),
        [
            (lambda engine, campus: engine.delete_course(campus.course.id), "course"),
            (lambda engine, campus: engine.delete_room(campus.room2.id), "room"),
        ],
    )
    def test_delete_waits_for_held_key(
        self, engine: SchedulingEngine, campus, delete, key: str
    ) -> None:
        held = course_key(campus.course.id) if key == "course" else room_key(campus.room2.id)
        done = threading.Event()

        def run() -> None:
            delete(engine, campus)
            done.set()

        with engine.locks.hold(held):
            t = threading.Thread(target=run)
            t.start()
            assert not done.wait(timeout=0.2)

        t.join(timeout=5)
        assert done.is_set()


@pytest.mark.unit
class TestLostRaceToDeletion:
    """A record deleted just before the commit surfaces as NotFound."""

    def test_course_deleted_before_enrollment_commit(
        self,
        engine: SchedulingEngine,
        store: CatalogStore,
        campus,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        commit = store.commit_enrollment

        def delete_then_commit(enrollment: Enrollment) -> Enrollment:
            store.delete_course(campus.course.id)
            return commit(enrollment)

        monkeypatch.setattr(store, "commit_enrollment", delete_then_commit)

        with pytest.raises(CourseNotFoundError) as exc_info:
            engine.enroll(campus.student_a.id, campus.course.id)

        assert exc_info.value.kind == "NotFound"

    def test_student_deleted_before_enrollment_commit(
        self,
        engine: SchedulingEngine,
        store: CatalogStore,
        campus,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        commit = store.commit_enrollment

        def delete_then_commit(enrollment: Enrollment) -> Enrollment:
            store.delete_student(campus.student_a.id)
            return commit(enrollment)

        monkeypatch.setattr(store, "commit_enrollment", delete_then_commit)

        with pytest.raises(StudentNotFoundError):
            engine.enroll(campus.student_a.id, campus.course.id)

    def test_room_deleted_before_session_commit(
        self,
        engine: SchedulingEngine,
        store: CatalogStore,
        campus,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        commit = store.commit_session

        def delete_then_commit(class_session: ClassSession) -> ClassSession:
            store.delete_room(campus.room1.id)
            return commit(class_session)

        monkeypatch.setattr(store, "commit_session", delete_then_commit)

        with pytest.raises(RoomNotFoundError):
            engine.admit_session(campus.session())

        assert store.list_sessions() == []

    def test_course_deleted_before_session_commit(
        self,
        engine: SchedulingEngine,
        store: CatalogStore,
        campus,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        commit = store.commit_session

        def delete_then_commit(class_session: ClassSession) -> ClassSession:
            store.delete_course(campus.course.id)
            return commit(class_session)

        monkeypatch.setattr(store, "commit_session", delete_then_commit)

        with pytest.raises(CourseNotFoundError):
            engine.admit_session(campus.session())
