"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coursehub import __version__
from coursehub.api.dependencies import close_catalog_store, init_catalog_store
from coursehub.api.models import APIResponse
from coursehub.api.routes import courses, lecturers, rooms, students
from coursehub.exceptions import CourseHubError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

# Error kinds that describe a malformed request rather than a clash with stored state
_BAD_REQUEST_KINDS = frozenset({"OutOfRange", "InvalidInterval", "InvalidRange"})


def status_for_kind(kind: str) -> int:
    """Map an error kind to an HTTP status code."""
    if kind == "NotFound":
        return status.HTTP_404_NOT_FOUND
    if kind in _BAD_REQUEST_KINDS:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_409_CONFLICT


async def coursehub_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Render a CourseHubError as an APIResponse carrying its kind."""
    kind = exc.kind if isinstance(exc, CourseHubError) else "Error"
    return JSONResponse(
        status_code=status_for_kind(kind),
        content=APIResponse[None](data=None, error=str(exc), kind=kind).model_dump(),
    )


def include_routers(app: FastAPI) -> None:
    """Mount all resource routers under /api/v1."""
    app.include_router(courses.router, prefix="/api/v1")
    app.include_router(students.router, prefix="/api/v1")
    app.include_router(lecturers.router, prefix="/api/v1")
    app.include_router(rooms.router, prefix="/api/v1")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    db_path = app.state.db_path if hasattr(app.state, "db_path") else "coursehub.db"
    init_catalog_store(db_path)
    logger.info("Catalog store opened at %s", db_path)
    yield
    close_catalog_store()


def create_app(db_path: str = "coursehub.db") -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="coursehub API",
        description="REST API for course scheduling and enrollment",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.db_path = db_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CourseHubError, coursehub_error_handler)
    include_routers(app)

    return app


# Default app instance
app = create_app()
