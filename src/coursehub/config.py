"""Configuration loading for coursehub deployments."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE_NAME = "coursehub.yaml"

# Environment variables take precedence over the YAML file
ENV_PREFIX = "COURSEHUB_"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class Settings:
    """Runtime settings for the API server and the catalog database."""

    db_path: str = "coursehub.db"
    log_dir: str = "logs"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from a dictionary.

        Args:
            data: Mapping loaded from YAML. Unknown keys are rejected.

        Returns:
            Parsed settings object.

        Raises:
            ConfigError: If a key is unknown or a value has the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

        settings = cls(**data)
        settings._coerce()
        return settings

    def apply_env(self, environ: dict[str, str] | None = None) -> Settings:
        """Override fields from COURSEHUB_* environment variables."""
        env = os.environ if environ is None else environ
        for f in fields(self):
            value = env.get(f"{ENV_PREFIX}{f.name.upper()}")
            if value is not None:
                setattr(self, f.name, value)
        self._coerce()
        return self

    def _coerce(self) -> None:
        try:
            self.port = int(self.port)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid port: {self.port!r}") from e
        self.db_path = str(self.db_path)
        self.log_dir = str(self.log_dir)
        self.log_level = str(self.log_level).upper()


def load_settings(config_path: Path | str | None = None, use_env: bool = True) -> Settings:
    """Load settings from a YAML file, then apply environment overrides.

    Args:
        config_path: Path to coursehub.yaml. When None, defaults are used.
        use_env: Whether COURSEHUB_* environment variables override the file.

    Returns:
        Parsed settings.

    Raises:
        ConfigError: If the file doesn't exist or is invalid.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Configuration must be a YAML mapping, got {type(loaded).__name__}"
            )
        data = loaded

    settings = Settings.from_dict(data)
    if use_env:
        settings.apply_env()
    return settings


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find coursehub.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to the config file, or None if there is none.
    """
    current = Path.cwd() if start_path is None else Path(start_path)
    current = current.resolve()

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    return None
