"""CLI entry point for coursehub."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import uvicorn

from coursehub.catalog.database import Database
from coursehub.config import ConfigError, Settings, find_config, load_settings
from coursehub.logging import setup_logging


def _load(config_path: Path | None) -> Settings:
    if config_path is None:
        config_path = find_config()
    try:
        return load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="coursehub")
def main() -> None:
    """coursehub - course scheduling and enrollment service."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to coursehub.yaml (auto-detected if not specified)",
)
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", type=int, default=None, help="Port (default: from config)")
@click.option("--db", "db_path", default=None, help="SQLite database path (default: from config)")
def serve(
    config_path: Path | None, host: str | None, port: int | None, db_path: str | None
) -> None:
    """Run the REST API server."""
    from coursehub.api.app import create_app  # noqa: PLC0415

    settings = _load(config_path)
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if db_path is not None:
        settings.db_path = db_path

    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    app = create_app(settings.db_path)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


@main.command("init-db")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to coursehub.yaml (auto-detected if not specified)",
)
@click.option("--db", "db_path", default=None, help="SQLite database path (default: from config)")
def init_db(config_path: Path | None, db_path: str | None) -> None:
    """Create the catalog tables if they don't exist."""
    settings = _load(config_path)
    if db_path is not None:
        settings.db_path = db_path

    db = Database(settings.db_path)
    try:
        db.create_tables()
    finally:
        db.close()
    click.echo(f"Initialized database at {settings.db_path}")


if __name__ == "__main__":
    main()
