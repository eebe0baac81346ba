"""Server configuration loading and SAMP_* environment overrides."""

from samp_runtime.config.environment import apply_environment_overrides
from samp_runtime.config.errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigReadError,
    UnsupportedFieldTypeError,
)
from samp_runtime.config.loader import load_from_directory, load_from_environment
from samp_runtime.config.schemas import Plugin, ServerConfig

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigReadError",
    "Plugin",
    "ServerConfig",
    "UnsupportedFieldTypeError",
    "apply_environment_overrides",
    "load_from_directory",
    "load_from_environment",
]
