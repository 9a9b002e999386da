"""Fixtures for route tests: routers mounted on a bare app over an in-memory store."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from coursehub.api.app import coursehub_error_handler, include_routers
from coursehub.api.dependencies import get_catalog_store, get_engine
from coursehub.catalog import CatalogStore
from coursehub.exceptions import CourseHubError
from coursehub.scheduling import SchedulingEngine


@pytest.fixture
def app(store: CatalogStore, engine: SchedulingEngine) -> FastAPI:
    """Create a test FastAPI app with overridden dependencies."""
    app = FastAPI()

    def override_get_catalog_store():
        yield store

    def override_get_engine():
        yield engine

    app.dependency_overrides[get_catalog_store] = override_get_catalog_store
    app.dependency_overrides[get_engine] = override_get_engine
    app.add_exception_handler(CourseHubError, coursehub_error_handler)
    include_routers(app)

    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
