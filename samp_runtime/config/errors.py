"""Exceptions raised while locating, reading, and decoding server settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """Base for structural config failures (file discovery, read, decode).

    Attributes:
        path: The directory or file involved.
        context: Extra details for logging.
    """

    def __init__(self, message: str, *, path: str | Path | None = None, context: dict[str, Any] | None = None) -> None:
        self.path = str(path) if path is not None else None
        self.context = context or {}
        if self.path is not None:
            self.context.setdefault("path", self.path)
        super().__init__(message)


class ConfigNotFoundError(ConfigError, FileNotFoundError):
    """Directory contains neither samp.json nor samp.yaml."""

    def __init__(self, directory: str | Path) -> None:
        super().__init__(
            f"directory does not contain a samp.json or samp.yaml file: {directory}",
            path=directory,
        )


class ConfigReadError(ConfigError):
    """Settings file exists but could not be read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.reason = reason
        super().__init__(f"failed to read {Path(path).name} ({path}): {reason}", path=path)


class ConfigParseError(ConfigError, ValueError):
    """Settings file could not be decoded into a ServerConfig."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.reason = reason
        super().__init__(f"failed to parse {Path(path).name} ({path}): {reason}", path=path)


class UnsupportedFieldTypeError(TypeError):
    """A config model declares a field type the environment overlay cannot handle.

    This is a defect in the model definition, not a user error, and is kept out of the
    ConfigError hierarchy so that handlers for load failures never swallow it.
    """

    def __init__(self, model: str, field: str, annotation: Any) -> None:
        self.model = model
        self.field = field
        self.annotation = annotation
        super().__init__(f"unknown kind {annotation!r} for field {model}.{field}")
