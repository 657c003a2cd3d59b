"""Configuration exceptions: settings files, values and project paths."""

from pathlib import Path
from typing import Any

from .base import CodeMeasureError


class ConfigurationError(CodeMeasureError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a config file, node dump or project directory is missing."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when a setting has a bad value, type or name.

    `key` is the setting name, dotted for nested tables
    (e.g. "distributions.file_bottom_limits"), or the environment variable.
    """

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
