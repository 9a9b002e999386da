"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from coursehub.catalog import CatalogStore
from coursehub.scheduling import SchedulingEngine

# Global CatalogStore instance (initialized on app startup)
_catalog_store: CatalogStore | None = None

# Global SchedulingEngine instance, bound to the store above
_engine: SchedulingEngine | None = None


def init_catalog_store(db_path: str = "coursehub.db") -> CatalogStore:
    """Initialize the global CatalogStore and its SchedulingEngine."""
    global _catalog_store, _engine  # noqa: PLW0603
    if _catalog_store is not None:
        _catalog_store.close()
    _catalog_store = CatalogStore(db_path)
    _engine = SchedulingEngine(_catalog_store)
    return _catalog_store


def close_catalog_store() -> None:
    """Close the global CatalogStore instance."""
    global _catalog_store, _engine  # noqa: PLW0603
    if _catalog_store is not None:
        _catalog_store.close()
    _catalog_store = None
    _engine = None


def get_catalog_store() -> Generator[CatalogStore, None, None]:
    """Dependency that provides the CatalogStore instance."""
    if _catalog_store is None:
        raise RuntimeError("CatalogStore not initialized. Call init_catalog_store() first.")
    yield _catalog_store


def get_engine() -> Generator[SchedulingEngine, None, None]:
    """Dependency that provides the SchedulingEngine instance."""
    if _engine is None:
        raise RuntimeError("SchedulingEngine not initialized. Call init_catalog_store() first.")
    yield _engine


# Type aliases for dependency injection
CatalogStoreDep = Annotated[CatalogStore, Depends(get_catalog_store)]
EngineDep = Annotated[SchedulingEngine, Depends(get_engine)]
