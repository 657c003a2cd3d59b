"""Metric and measure vocabularies.

Two enums, one per side of the aggregation:

    Metric   what the scanner attaches to each SourceNode (input side)
    Measure  what the persistence sink receives per file (output side)

FILE_MEASURES maps the scalar metrics copied off every file node onto the
measure they are saved under. The two distribution measures have no scalar
counterpart; they are built by the aggregator.

Usage:
    from codemeasure.metrics import FILE_MEASURES, Measure, Metric

    for metric, measure in FILE_MEASURES.items():
        value = node.get(metric)
"""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Metric(Enum):
    """Metrics computed by the scanner for each node.

    The string value is the name used in node dumps.
    """

    FILES = "files"
    LINES = "lines"
    LINES_OF_CODE = "lines_of_code"
    STATEMENTS = "statements"
    FUNCTIONS = "functions"
    CLASSES = "classes"
    COMPLEXITY = "complexity"
    COMMENT_LINES = "comment_lines"
    COMMENT_BLANK_LINES = "comment_blank_lines"

    @classmethod
    def parse(cls, name: str) -> "Metric":
        """Resolve a metric from its dump name, accepting camelCase spellings."""
        if name.isupper():
            return cls(name.lower())
        normalized = "".join("_" + c.lower() if c.isupper() else c for c in name).lstrip("_")
        return cls(normalized)


class Measure(Enum):
    """Measures saved for each file."""

    FILES = "files"
    LINES = "lines"
    NCLOC = "ncloc"
    STATEMENTS = "statements"
    FUNCTIONS = "functions"
    CLASSES = "classes"
    COMPLEXITY = "complexity"
    COMMENT_BLANK_LINES = "comment_blank_lines"
    COMMENT_LINES = "comment_lines"
    FUNCTION_COMPLEXITY_DISTRIBUTION = "function_complexity_distribution"
    FILE_COMPLEXITY_DISTRIBUTION = "file_complexity_distribution"


class PersistenceMode(Enum):
    """Where a saved measure ends up.

    MEMORY measures are only rolled up by the sink and never stored per file.
    """

    FULL = "full"
    DATABASE = "database"
    MEMORY = "memory"


FILE_MEASURES: Dict[Metric, Measure] = {
    Metric.FILES: Measure.FILES,
    Metric.LINES: Measure.LINES,
    Metric.LINES_OF_CODE: Measure.NCLOC,
    Metric.STATEMENTS: Measure.STATEMENTS,
    Metric.FUNCTIONS: Measure.FUNCTIONS,
    Metric.CLASSES: Measure.CLASSES,
    Metric.COMPLEXITY: Measure.COMPLEXITY,
    Metric.COMMENT_BLANK_LINES: Measure.COMMENT_BLANK_LINES,
    Metric.COMMENT_LINES: Measure.COMMENT_LINES,
}
