"""Exception hierarchy for codemeasure."""

from .analysis import (
    AnalysisError,
    MalformedIndexError,
    MalformedNodeError,
    MissingMetricError,
)
from .base import CodeMeasureError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)
from .distribution import (
    DistributionError,
    FinalizedDistributionError,
    InvalidBoundariesError,
)

__all__ = [
    "CodeMeasureError",
    "AnalysisError",
    "MalformedIndexError",
    "MalformedNodeError",
    "MissingMetricError",
    "DistributionError",
    "InvalidBoundariesError",
    "FinalizedDistributionError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
