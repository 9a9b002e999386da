"""Course mutation guard - keeps course edits consistent with existing commitments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from coursehub.exceptions import (
    CapacityBelowEnrollmentError,
    CourseHubError,
    InvalidRangeError,
    SessionsFollowNewEndError,
    SessionsPrecedeNewStartError,
    StudentScheduleConflictError,
)
from coursehub.scheduling.calendar import date_ranges_overlap
from coursehub.scheduling.locks import KeyedLocks, course_key, student_key
from coursehub.scheduling.models import CommitmentCounts

if TYPE_CHECKING:
    from coursehub.catalog import CatalogStore, Course, CourseUpdate

logger = logging.getLogger(__name__)


class CourseMutationGuard:
    """Validates and applies partial course updates.

    Rules, first failure wins:
        1. The new window must not start after it ends.
        2. The new maximum must not be below the current enrollment.
        3. No session may precede a new start date.
        4. No session may follow a new end date.
        5. No enrolled student may hold another course overlapping the new window.
    """

    def __init__(self, store: CatalogStore, locks: KeyedLocks) -> None:
        self._store = store
        self._locks = locks

    @staticmethod
    def check(course: Course, update: CourseUpdate, counts: CommitmentCounts) -> None:
        """Check an update against the course and its commitments.

        Args:
            course: The course as currently stored.
            update: The proposed partial update.
            counts: Commitments measured against the proposed dates.

        Raises:
            InvalidRangeError: Start date after end date.
            CapacityBelowEnrollmentError: Maximum below current enrollment.
            SessionsPrecedeNewStartError: Sessions before the new start date.
            SessionsFollowNewEndError: Sessions after the new end date.
            StudentScheduleConflictError: An enrolled student holds an overlapping course.
        """
        start = update.start_date if update.start_date is not None else course.start_date
        end = update.end_date if update.end_date is not None else course.end_date
        if start > end:
            raise InvalidRangeError(
                f"Start date {start.isoformat()} is after end date {end.isoformat()}"
            )

        if update.maximum_students is not None and update.maximum_students < counts.enrollments:
            raise CapacityBelowEnrollmentError(
                f"Maximum students {update.maximum_students} is below "
                f"{counts.enrollments} enrolled students"
            )

        if update.start_date is not None and counts.sessions_before_start > 0:
            raise SessionsPrecedeNewStartError(
                f"{counts.sessions_before_start} sessions are scheduled before "
                f"{update.start_date.isoformat()}"
            )

        if update.end_date is not None and counts.sessions_after_end > 0:
            raise SessionsFollowNewEndError(
                f"{counts.sessions_after_end} sessions are scheduled after "
                f"{update.end_date.isoformat()}"
            )

        if update.changes_window():
            for student_id, other in counts.student_courses:
                if date_ranges_overlap(start, end, other.start_date, other.end_date):
                    raise StudentScheduleConflictError(
                        f"Student '{student_id}' is enrolled in course '{other.id}' "
                        f"running {other.start_date.isoformat()}..{other.end_date.isoformat()}"
                    )

    def measure(
        self, course_id: str, update: CourseUpdate, student_ids: list[str] | None = None
    ) -> CommitmentCounts:
        """Count the course's commitments relevant to the proposed update.

        Args:
            course_id: The course being edited.
            update: The proposed partial update.
            student_ids: Enrolled students whose other courses are compared
                against a moved window.
        """
        student_courses: list[tuple[str, Course]] = []
        if update.changes_window():
            for student_id in student_ids or []:
                student_courses.extend(
                    (student_id, other)
                    for other in self._store.list_enrollments_for_student(student_id)
                    if other.id != course_id
                )

        return CommitmentCounts(
            enrollments=self._store.count_enrollments(course_id),
            sessions_before_start=(
                self._store.count_sessions_before(course_id, update.start_date)
                if update.start_date is not None
                else 0
            ),
            sessions_after_end=(
                self._store.count_sessions_after(course_id, update.end_date)
                if update.end_date is not None
                else 0
            ),
            student_courses=tuple(student_courses),
        )

    def apply(self, course_id: str, update: CourseUpdate) -> Course:
        """Validate and commit a partial update. Only supplied fields change.

        A moved window is compared with the other courses of every enrolled
        student, so those students' keys are held along with the course key.
        The student set is read once before locking and again inside; if an
        enrollment slipped in between, the keys are re-acquired.

        Returns:
            The updated course.

        Raises:
            CourseNotFoundError: If course doesn't exist
            CourseHubError: The specific rule that rejected the update, see ``check``.
        """
        while True:
            locked = self._enrolled(course_id, update)
            keys = [course_key(course_id), *(student_key(s) for s in locked)]
            with self._locks.hold(*keys):
                course = self._store.find_course(course_id)
                if update.is_empty():
                    return course

                student_ids = self._enrolled(course_id, update)
                if not set(student_ids) <= set(locked):
                    continue

                try:
                    self.check(course, update, self.measure(course_id, update, student_ids))
                except CourseHubError as e:
                    logger.info("Rejected update of course %s: %s", course_id, e.kind)
                    raise

                updated = self._store.update_course_fields(course_id, update)
                break

        logger.info("Updated course %s: %s", course_id, ", ".join(sorted(update.supplied())))
        return updated

    def _enrolled(self, course_id: str, update: CourseUpdate) -> list[str]:
        if not update.changes_window():
            return []
        return self._store.list_course_student_ids(course_id)
