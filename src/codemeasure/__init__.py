"""
codemeasure - per-file size and complexity measures from an AST scan

Takes the metric-bearing nodes produced by a source scanner, indexes them,
and produces per-file measures together with function and file complexity
distributions, ready for a persistence sink.
"""

__version__ = "0.1.0"

from .aggregator import MeasureAggregator
from .api import measure
from .config import DistributionConfig, MeasureSettings, load_config
from .distribution import (
    FILES_DISTRIB_BOTTOM_LIMITS,
    FUNCTIONS_DISTRIB_BOTTOM_LIMITS,
    RangeDistribution,
    RangeDistributionBuilder,
)
from .index import NodeId, NodeIndex, NodeKind, SourceNode
from .metrics import Measure, Metric, PersistenceMode
from .models import MeasureRecord
from .scanner import MetricSource, Project, ScannerConfiguration, StaticMetricSource
from .sensor import MeasureSensor
from .sink import InMemoryMeasureSink, MeasureSink

__all__ = [
    "measure",  # Main entry point
    "MeasureSensor",
    "MeasureAggregator",
    "MeasureRecord",
    "MeasureSettings",
    "DistributionConfig",
    "load_config",
    "NodeId",
    "NodeIndex",
    "NodeKind",
    "SourceNode",
    "Metric",
    "Measure",
    "PersistenceMode",
    "RangeDistribution",
    "RangeDistributionBuilder",
    "FUNCTIONS_DISTRIB_BOTTOM_LIMITS",
    "FILES_DISTRIB_BOTTOM_LIMITS",
    "MetricSource",
    "StaticMetricSource",
    "Project",
    "ScannerConfiguration",
    "MeasureSink",
    "InMemoryMeasureSink",
]
