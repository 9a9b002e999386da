"""Unit tests for error kind to HTTP status mapping."""

import pytest
from fastapi import status

from coursehub.api.app import status_for_kind
from coursehub.exceptions import (
    AlreadyEnrolledError,
    CapacityBelowEnrollmentError,
    CourseFullError,
    CourseNotFoundError,
    CourseSlotConflictError,
    InvalidIntervalError,
    InvalidRangeError,
    LecturerConflictError,
    OutOfRangeError,
    ResourceInUseError,
    RoomConflictError,
    RoomExistsError,
    SessionsFollowNewEndError,
    SessionsPrecedeNewStartError,
    StudentScheduleConflictError,
)


@pytest.mark.unit
class TestStatusForKind:
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (CourseNotFoundError, status.HTTP_404_NOT_FOUND),
            (OutOfRangeError, status.HTTP_400_BAD_REQUEST),
            (InvalidIntervalError, status.HTTP_400_BAD_REQUEST),
            (InvalidRangeError, status.HTTP_400_BAD_REQUEST),
            (RoomConflictError, status.HTTP_409_CONFLICT),
            (LecturerConflictError, status.HTTP_409_CONFLICT),
            (CourseSlotConflictError, status.HTTP_409_CONFLICT),
            (CourseFullError, status.HTTP_409_CONFLICT),
            (AlreadyEnrolledError, status.HTTP_409_CONFLICT),
            (StudentScheduleConflictError, status.HTTP_409_CONFLICT),
            (CapacityBelowEnrollmentError, status.HTTP_409_CONFLICT),
            (SessionsPrecedeNewStartError, status.HTTP_409_CONFLICT),
            (SessionsFollowNewEndError, status.HTTP_409_CONFLICT),
            (RoomExistsError, status.HTTP_409_CONFLICT),
            (ResourceInUseError, status.HTTP_409_CONFLICT),
        ],
    )
    def test_mapping(self, error, expected: int) -> None:
        assert status_for_kind(error.kind) == expected
