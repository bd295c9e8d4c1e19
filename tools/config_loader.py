"""Config file loading.

Reads report defaults from YAML or JSON. The default location is
``~/.spacehogs/config.yaml``; it is only consulted when it exists.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from schemas.config import Settings

logger = structlog.get_logger(__name__)


class ConfigError(RuntimeError):
    """Raised when a config file cannot be read, parsed or validated."""


def default_config_path() -> Path:
    """Return the default config path, ``~/.spacehogs/config.yaml``."""
    return Path.home() / ".spacehogs" / "config.yaml"


def load_settings(path: Path) -> Settings:
    """Load settings from YAML or JSON.

    Behavior:
    - If the file extension is ``.json`` (or the content looks like JSON), parse as JSON.
    - Otherwise, parse as YAML using ``yaml.safe_load``.
    - An empty file yields the defaults.

    Raises:
        ConfigError: If the file is unreadable, malformed, not a mapping at
            top level, or fails validation.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    looks_json = text.lstrip().startswith("{")
    try:
        if path.suffix.lower() == ".json" or looks_json:
            data = json.loads(text) if text.strip() else {}
        else:
            data = yaml.safe_load(text) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Malformed config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must be a mapping at top-level")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    logger.debug("config_loaded", path=str(path))
    return settings


def resolve_settings(path: Path | None) -> Settings:
    """Load ``path`` if given, else the default file if present, else defaults."""
    if path is not None:
        return load_settings(path)
    default = default_config_path()
    if default.is_file():
        return load_settings(default)
    return Settings()


__all__ = ["ConfigError", "default_config_path", "load_settings", "resolve_settings"]
