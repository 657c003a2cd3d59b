"""Configuration loading and management for codemeasure.

Configuration sources are merged in priority order:
    1. Defaults (defined in MeasureSettings)
    2. Global config (~/.codemeasure.toml)
    3. Project config (./codemeasure.toml)
    4. Explicit config file
    5. Environment variables (CODEMEASURE_* prefix)
    6. Keyword overrides

Example:
    >>> settings = load_config(defines=("DEBUG=1",), workers=2)
    >>> settings.workers
    2
    >>> settings.distributions.file_bottom_limits
    (0, 5, 10, 20, 30, 60, 90)

A project file looks like:

    defines = ["NDEBUG", "VERSION=3"]
    include_directories = ["include", "third_party/include"]
    workers = 4

    [distributions]
    function_bottom_limits = [1, 2, 4, 6, 8, 10, 12, 20, 30]
    file_bottom_limits = [0, 5, 10, 20, 30, 60, 90]
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, Tuple, get_type_hints

from .distribution import (
    FILES_DISTRIB_BOTTOM_LIMITS,
    FUNCTIONS_DISTRIB_BOTTOM_LIMITS,
    validate_boundaries,
)
from .exceptions import InvalidBoundariesError, InvalidConfigError, InvalidPathError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "CODEMEASURE_"

# Default worker count: CPU count, capped at 8
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass(frozen=True)
class DistributionConfig:
    """Bucket lower bounds for the two complexity distributions.

    Attributes:
        function_bottom_limits: Buckets for function complexity within a file.
        file_bottom_limits:     Buckets for file complexity across the project.
    """

    function_bottom_limits: Tuple[float, ...] = FUNCTIONS_DISTRIB_BOTTOM_LIMITS
    file_bottom_limits: Tuple[float, ...] = FILES_DISTRIB_BOTTOM_LIMITS

    def __post_init__(self) -> None:
        for name in ("function_bottom_limits", "file_bottom_limits"):
            value = getattr(self, name)
            try:
                object.__setattr__(self, name, validate_boundaries(value))
            except InvalidBoundariesError as e:
                raise InvalidConfigError(f"distributions.{name}", list(value), e.reason)


@dataclass(frozen=True)
class MeasureSettings:
    """Settings for one measurement pass.

    Attributes:
        Scanner pass-through:
            defines:             Preprocessor macro definitions ("NAME" or "NAME=VALUE")
            include_directories: Include search paths, relative to the base directory
                                 or absolute

        Performance tuning:
            workers:            Parallel aggregation workers (None = auto-detect)
            parallel_threshold: Passes with fewer files run sequentially

        Output control:
            verbosity: Logging verbosity level
            log_file:  Optional file to append logs to, in addition to stderr

        Distributions:
            distributions: Bucket bounds for the complexity distributions
    """

    defines: Tuple[str, ...] = ()
    include_directories: Tuple[str, ...] = ()

    workers: Optional[int] = None
    parallel_threshold: int = 10

    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    distributions: DistributionConfig = field(default_factory=DistributionConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "defines", _as_str_tuple("defines", self.defines))
        object.__setattr__(
            self,
            "include_directories",
            _as_str_tuple("include_directories", self.include_directories),
        )

        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.parallel_threshold < 1:
            raise InvalidConfigError(
                "parallel_threshold", self.parallel_threshold, "must be at least 1"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise InvalidConfigError("log_file", self.log_file, "expected a file path string")

    @property
    def effective_workers(self) -> int:
        """Worker count with auto-detection applied."""
        return self.workers or _DEFAULT_WORKERS


def _as_str_tuple(key: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        raise InvalidConfigError(key, value, "expected a list of strings")
    items = tuple(value)
    for item in items:
        if not isinstance(item, str):
            raise InvalidConfigError(key, item, "expected a string")
    return items


def load_config(config_file: Optional[Path] = None, **overrides) -> MeasureSettings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (e.g. from an embedding application)

    Returns:
        Validated MeasureSettings instance

    Raises:
        InvalidPathError: If an explicit config file does not exist
        InvalidConfigError: If a config file or value is invalid
    """
    merged: dict = {}

    global_config = Path.home() / ".codemeasure.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "codemeasure.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidPathError(config_file, "config file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    # [distributions] table
    distributions = merged.pop("distributions", None)
    if distributions is not None:
        if isinstance(distributions, dict):
            try:
                merged["distributions"] = DistributionConfig(
                    **{k: tuple(v) for k, v in distributions.items()}
                )
            except TypeError as e:
                raise InvalidConfigError("distributions", distributions, str(e))
        elif isinstance(distributions, DistributionConfig):
            merged["distributions"] = distributions
        else:
            raise InvalidConfigError("distributions", distributions, "expected a table")

    try:
        return MeasureSettings(**merged)
    except TypeError as e:
        # Unknown field in config
        raise InvalidConfigError("settings", sorted(merged), str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load settings from CODEMEASURE_* environment variables.

    Supported environment variables:
        CODEMEASURE_DEFINES: comma-separated list
        CODEMEASURE_INCLUDE_DIRECTORIES: comma-separated list
        CODEMEASURE_WORKERS: int
        CODEMEASURE_PARALLEL_THRESHOLD: int
        CODEMEASURE_VERBOSITY: quiet/normal/verbose
        CODEMEASURE_LOG_FILE: path

    Returns:
        Dict of field_name -> parsed_value for any CODEMEASURE_* vars found.
    """
    type_hints = get_type_hints(MeasureSettings)

    result: dict[str, Any] = {}

    for field_name in MeasureSettings.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns:
        Parsed value or None if the field cannot be set from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Tuple[str, ...]: comma-separated
    if origin is tuple:
        return tuple(item.strip() for item in value.split(",") if item.strip())

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    # Nested tables (distributions) are TOML-only
    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        InvalidConfigError: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise InvalidConfigError(str(path), "<file>", str(e))
