"""
Config loader: samp.json / samp.yaml discovery, decoding, and SAMP_* environment overrides.

- samp.json takes precedence over samp.yaml in the same directory.
- Decoding is Pydantic validation of the parsed document; unknown keys are ignored.
- load_from_environment() is the usual entry point: load from directory, then apply env overrides.
- Nothing is cached: every call reads the file again and returns a fresh ServerConfig.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Mapping

import structlog
import yaml
from pydantic import ValidationError

from samp_runtime.config.environment import apply_environment_overrides
from samp_runtime.config.errors import ConfigNotFoundError, ConfigParseError, ConfigReadError
from samp_runtime.config.schemas import ServerConfig

logger = structlog.get_logger(__name__)

SETTINGS_JSON = "samp.json"
SETTINGS_YAML = "samp.yaml"


def default_config_dir() -> Path:
    """Directory to load from when none is given; CONFIG_DIR env or the current directory."""
    return Path(os.environ.get("CONFIG_DIR", ".")).resolve()


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(path, str(e)) from e


def _validate(path: Path, data: Any) -> ServerConfig:
    """Validate a parsed document; None (empty file) means every setting is absent."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(path, f"top-level value must be a mapping, got: {type(data).__name__}")
    try:
        return ServerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(path, str(e)) from e


def load_from_json(path: str | Path) -> ServerConfig:
    """
    Read and decode a samp.json file.

    Raises:
        ConfigReadError: If the file cannot be read.
        ConfigParseError: If it is not valid JSON or does not match ServerConfig.
    """
    path = Path(path)
    text = _read_text(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(path, str(e)) from e
    return _validate(path, data)


def load_from_yaml(path: str | Path) -> ServerConfig:
    """
    Read and decode a samp.yaml file.

    Raises:
        ConfigReadError: If the file cannot be read.
        ConfigParseError: If it is not valid YAML or does not match ServerConfig.
    """
    path = Path(path)
    text = _read_text(path)
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(path, str(e)) from e
    return _validate(path, data)


_FORMATS: tuple[tuple[str, str, Callable[[Path], ServerConfig]], ...] = (
    (SETTINGS_JSON, "json", load_from_json),
    (SETTINGS_YAML, "yaml", load_from_yaml),
)


def load_from_directory(directory: str | Path) -> ServerConfig:
    """
    Load settings from samp.json, or samp.yaml when there is no samp.json.

    Args:
        directory: Server directory to search.

    Returns:
        ServerConfig with only the settings present in the file; its directory is set.

    Raises:
        ConfigNotFoundError: If neither file exists.
        ConfigReadError / ConfigParseError: If the chosen file cannot be read or decoded.
    """
    base = Path(directory)
    for filename, fmt, load in _FORMATS:
        path = base / filename
        if not path.exists():
            continue
        config = load(path)
        config.set_directory(str(directory))
        logger.debug("config_loaded", path=str(path), format=fmt)
        return config
    raise ConfigNotFoundError(directory)


def load_from_environment(directory: str | Path, environ: Mapping[str, str] | None = None) -> ServerConfig:
    """Load settings from directory, then override them from SAMP_* environment variables."""
    config = load_from_directory(directory)
    apply_environment_overrides(config, environ)
    return config
