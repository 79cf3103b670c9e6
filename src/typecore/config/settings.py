"""
typecore Settings

This module defines the runtime settings of the local data core and the loader
that reads them from an optional YAML file plus ``TYPECORE_*`` environment
variables.

Environment Variables:
    TYPECORE_CONFIG_PATH: Path to a YAML settings file
    TYPECORE_STORAGE_BACKEND: memory | sqlite | json
    TYPECORE_SQLITE_PATH: SQLite database path
    TYPECORE_JSON_PATH: JSON storage file path
    TYPECORE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from typecore.exceptions import ConfigurationError
from typecore.storage.backends.backend_type import BackendType
from typecore.storage.local_store import STORAGE_KEY, STORAGE_VERSION

logger = logging.getLogger(__name__)


_ENV_OVERRIDES = {
    "TYPECORE_STORAGE_BACKEND": ("storage", "backend"),
    "TYPECORE_SQLITE_PATH": ("storage", "sqlite_path"),
    "TYPECORE_JSON_PATH": ("storage", "json_path"),
    "TYPECORE_LOG_LEVEL": ("log_level",),
}


class StorageSettings(BaseModel):
    """Where and how the snapshot is persisted."""

    backend: BackendType = BackendType.JSON
    sqlite_path: str = str(Path.home() / ".typecore" / "typecore.sqlite3")
    json_path: str = str(Path.home() / ".typecore" / "local_storage.json")
    key: str = STORAGE_KEY
    version: int = Field(default=STORAGE_VERSION, ge=1)


class TypeCoreSettings(BaseModel):
    """Top-level settings."""

    storage: StorageSettings = Field(default_factory=StorageSettings)
    max_custom_themes: int = Field(default=20, ge=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


def _apply_env_overrides(data: Dict[str, Any], environ: Dict[str, str]) -> Dict[str, Any]:
    for env_name, path in _ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if not value:
            continue
        target = data
        for part in path[:-1]:
            if not isinstance(target.get(part), dict):
                target[part] = {}
            target = target[part]
        target[path[-1]] = value
        logger.debug("Applied %s from environment", env_name)
    return data


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> TypeCoreSettings:
    """
    Load settings from YAML and the environment.

    Args:
        path: Optional YAML file; defaults to ``TYPECORE_CONFIG_PATH`` when set
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated settings; built-in defaults when no file is configured

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    environ = dict(os.environ if environ is None else environ)
    config_path = path or environ.get("TYPECORE_CONFIG_PATH")
    data: Dict[str, Any] = {}

    if config_path:
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_file}", str(config_file))
        try:
            with open(config_file, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse configuration file: {e}", str(config_file)) from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError("Configuration root must be a mapping", str(config_file))
        data = loaded
        logger.debug("Loaded configuration from %s", config_file)

    data = _apply_env_overrides(data, environ)

    try:
        return TypeCoreSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", str(config_path) if config_path else None) from e


__all__ = ["STORAGE_KEY", "STORAGE_VERSION", "StorageSettings", "TypeCoreSettings", "load_settings"]
