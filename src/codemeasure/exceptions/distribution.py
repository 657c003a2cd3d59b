"""Range distribution exceptions: bad boundaries and reuse after build."""

from typing import Sequence

from .base import CodeMeasureError


class DistributionError(CodeMeasureError):
    """Base class for range distribution errors."""

    pass


class InvalidBoundariesError(DistributionError):
    """Raised when bucket boundaries are empty or not strictly increasing."""

    def __init__(self, boundaries: Sequence[float], reason: str):
        super().__init__(
            f"Invalid distribution boundaries: {list(boundaries)}",
            details={"reason": reason},
        )
        self.boundaries = tuple(boundaries)
        self.reason = reason


class FinalizedDistributionError(DistributionError):
    """Raised when a value is added to an already built distribution."""

    def __init__(self, metric: str):
        super().__init__(
            f"Distribution '{metric}' is already built",
            details={"metric": metric},
        )
        self.metric = metric
