"""
Configuration Management.

Loads settings from config/settings/*.yaml, located from the .project_root
marker. Each file is validated against its Pydantic schema on load.

Settings (YAML):
    application.yaml   - App identity, shortener server address, timeouts
    logging.yaml       - Logging configuration
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from shortener.core.config_schema import ApplicationSchema, LoggingSchema
from shortener.core.exceptions import ConfigurationError


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def load_validated_config(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Missing keys, wrong types, or unknown fields raise ConfigurationError
    immediately instead of causing cryptic KeyErrors later.
    """

    def __init__(self) -> None:
        self._application = load_validated_config(ApplicationSchema, "application.yaml")
        self._logging = load_validated_config(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_server_base_url() -> tuple[str, float]:
    """
    Get the shortener service base URL and request timeout.

    Returns:
        Tuple of (base_url, timeout_seconds).
    """
    app = get_app_config().application
    server = app.server
    base_url = f"{server.scheme}://{server.host}:{server.port}"
    timeout = float(app.timeouts.request)
    return base_url, timeout
