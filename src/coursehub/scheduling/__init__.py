"""Scheduling - Admission control, readiness and guarded course edits."""

from coursehub.scheduling.admission import (
    EnrollmentAdmissionValidator,
    SessionAdmissionValidator,
)
from coursehub.scheduling.calendar import (
    ResourceCalendar,
    date_ranges_overlap,
    intervals_overlap,
)
from coursehub.scheduling.engine import SchedulingEngine
from coursehub.scheduling.guard import CourseMutationGuard
from coursehub.scheduling.lifecycle import CourseLifecycle, evaluate_readiness
from coursehub.scheduling.locks import KeyedLocks
from coursehub.scheduling.models import CommitmentCounts, ReadinessReport, SessionRequest

__all__ = [
    "CommitmentCounts",
    "CourseLifecycle",
    "CourseMutationGuard",
    "EnrollmentAdmissionValidator",
    "KeyedLocks",
    "ReadinessReport",
    "ResourceCalendar",
    "SchedulingEngine",
    "SessionAdmissionValidator",
    "SessionRequest",
    "date_ranges_overlap",
    "evaluate_readiness",
    "intervals_overlap",
]
