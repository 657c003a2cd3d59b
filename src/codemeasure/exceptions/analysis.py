"""Analysis-related exceptions: index integrity and missing metrics.

All of these abort the aggregation pass. None of them is recoverable per
file, because a pass that skipped a file would report inconsistent totals.
"""

from typing import Optional

from .base import CodeMeasureError


class AnalysisError(CodeMeasureError):
    """Base class for analysis-related errors."""
    pass


class MalformedNodeError(AnalysisError):
    """Raised when a node description cannot be turned into a SourceNode."""

    def __init__(self, reason: str, node_key: Optional[str] = None):
        details = {"reason": reason}
        if node_key is not None:
            details["node"] = node_key

        super().__init__("Malformed source node", details=details)
        self.reason = reason
        self.node_key = node_key


class MalformedIndexError(AnalysisError):
    """Raised when the node collection violates the index invariants."""

    def __init__(self, node_key: str, reason: str):
        super().__init__(
            f"Malformed node index at {node_key}",
            details={"node": node_key, "reason": reason},
        )
        self.node_key = node_key
        self.reason = reason


class MissingMetricError(AnalysisError):
    """Raised when a node lacks a metric the aggregation requires."""

    def __init__(self, node_key: str, metric: str):
        super().__init__(
            f"Missing metric '{metric}' on {node_key}",
            details={"node": node_key, "metric": metric},
        )
        self.node_key = node_key
        self.metric = metric
