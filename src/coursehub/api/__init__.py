"""REST API for coursehub."""

from coursehub.api.app import app, create_app
from coursehub.api.models import (
    APIResponse,
    CourseCreate,
    CourseResponse,
    CourseUpdateRequest,
)

__all__ = [
    "APIResponse",
    "CourseCreate",
    "CourseResponse",
    "CourseUpdateRequest",
    "app",
    "create_app",
]
