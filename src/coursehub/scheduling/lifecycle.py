"""Course lifecycle - readiness derived from syllabus and session counts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from coursehub.catalog import Readiness
from coursehub.scheduling.locks import KeyedLocks, course_key
from coursehub.scheduling.models import ReadinessReport

if TYPE_CHECKING:
    from coursehub.catalog import CatalogStore

logger = logging.getLogger(__name__)

MISSING_SYLLABUS = "syllabus"
MISSING_SESSIONS = "class sessions"


def evaluate_readiness(syllabus_count: int, session_count: int) -> Readiness:
    """A course is ready once it has at least one syllabus entry and one session."""
    if syllabus_count >= 1 and session_count >= 1:
        return Readiness.READY
    return Readiness.NOT_READY


class CourseLifecycle:
    """Recomputes and stores course readiness on request.

    Readiness is never maintained incrementally: each recomputation reads
    the current counts, so it cannot drift from the data it describes.
    """

    def __init__(self, store: CatalogStore, locks: KeyedLocks) -> None:
        self._store = store
        self._locks = locks

    def recompute(self, course_id: str) -> ReadinessReport:
        """Evaluate the course's readiness and store the result.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        with self._locks.hold(course_key(course_id)):
            self._store.find_course(course_id)
            syllabus_count = self._store.count_syllabus_entries(course_id)
            session_count = self._store.count_sessions(course_id)
            readiness = evaluate_readiness(syllabus_count, session_count)
            self._store.set_readiness(course_id, readiness)

        missing = []
        if syllabus_count < 1:
            missing.append(MISSING_SYLLABUS)
        if session_count < 1:
            missing.append(MISSING_SESSIONS)

        logger.info("Course %s readiness: %s", course_id, readiness.value)
        return ReadinessReport(
            course_id=course_id,
            readiness=readiness,
            syllabus_count=syllabus_count,
            session_count=session_count,
            missing=missing,
        )
