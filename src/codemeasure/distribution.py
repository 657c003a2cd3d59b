"""Range distributions: fixed-boundary histograms over metric values.

A distribution is declared by an ordered list of bucket lower bounds. Bucket
i holds the values v with bounds[i] <= v < bounds[i+1]; the last bucket is
open-ended.

Distributions are accumulated with a RangeDistributionBuilder and then
frozen with build(). A built distribution is immutable and can be merged
with others that share its bounds, which is how per-file distributions are
rolled up into project totals.

Serialized form is the usual "bound=count" list joined by semicolons:

    >>> builder = RangeDistributionBuilder(Measure.FILE_COMPLEXITY_DISTRIBUTION, [0, 5, 10])
    >>> builder.add(7)
    >>> builder.build().to_data()
    '0=0;5=1;10=0'
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from .exceptions import FinalizedDistributionError, InvalidBoundariesError
from .logging_config import get_logger
from .metrics import Measure, PersistenceMode

logger = get_logger(__name__)

FUNCTIONS_DISTRIB_BOTTOM_LIMITS: Tuple[float, ...] = (1, 2, 4, 6, 8, 10, 12, 20, 30)
FILES_DISTRIB_BOTTOM_LIMITS: Tuple[float, ...] = (0, 5, 10, 20, 30, 60, 90)


def validate_boundaries(boundaries: Sequence[float]) -> Tuple[float, ...]:
    """Check that boundaries are non-empty, finite and strictly increasing.

    Returns:
        The boundaries as a tuple.

    Raises:
        InvalidBoundariesError: If any of the checks fail.
    """
    bounds = tuple(boundaries)
    if not bounds:
        raise InvalidBoundariesError(bounds, "at least one boundary is required")
    for b in bounds:
        if isinstance(b, bool) or not isinstance(b, numbers.Real) or not math.isfinite(b):
            raise InvalidBoundariesError(bounds, f"boundary {b!r} is not a finite number")
    for lower, upper in zip(bounds, bounds[1:]):
        if upper <= lower:
            raise InvalidBoundariesError(
                bounds, f"boundaries must be strictly increasing ({lower} >= {upper})"
            )
    return bounds


def _format_bound(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class RangeDistribution:
    """A finalized range distribution.

    Attributes:
        metric:           Measure the distribution is saved under.
        boundaries:       Bucket lower bounds, strictly increasing.
        counts:           Number of values per bucket, same length as boundaries.
        persistence_mode: Distributions are rolled up by the sink, not stored per file.
    """

    metric: Measure
    boundaries: Tuple[float, ...]
    counts: Tuple[int, ...]
    persistence_mode: PersistenceMode = PersistenceMode.MEMORY

    def __post_init__(self) -> None:
        object.__setattr__(self, "boundaries", validate_boundaries(self.boundaries))
        counts = tuple(self.counts)
        for c in counts:
            if isinstance(c, bool) or not isinstance(c, numbers.Integral):
                raise ValueError(f"count {c!r} is not an integer")
        object.__setattr__(self, "counts", tuple(int(c) for c in counts))
        if len(self.counts) != len(self.boundaries):
            raise ValueError(
                f"{len(self.counts)} counts given for {len(self.boundaries)} boundaries"
            )
        if any(c < 0 for c in self.counts):
            raise ValueError("counts must be non-negative")

    @property
    def total(self) -> int:
        """Number of values in the distribution."""
        return sum(self.counts)

    def items(self) -> Iterator[Tuple[float, int]]:
        """(lower bound, count) pairs in bucket order."""
        return zip(self.boundaries, self.counts)

    def count_at(self, boundary: float) -> int:
        """Count of the bucket starting at `boundary`."""
        try:
            return self.counts[self.boundaries.index(boundary)]
        except ValueError:
            raise KeyError(boundary) from None

    def merge(self, other: RangeDistribution) -> RangeDistribution:
        """Bucket-wise sum with another distribution over the same bounds.

        Raises:
            InvalidBoundariesError: If the two distributions have different bounds.
        """
        if other.boundaries != self.boundaries:
            raise InvalidBoundariesError(
                other.boundaries, f"cannot merge with bounds {list(self.boundaries)}"
            )
        counts = np.add(self.counts, other.counts)
        return RangeDistribution(
            self.metric,
            self.boundaries,
            tuple(int(c) for c in counts),
            self.persistence_mode,
        )

    def __add__(self, other: object) -> RangeDistribution:
        if not isinstance(other, RangeDistribution):
            return NotImplemented
        return self.merge(other)

    def to_data(self) -> str:
        return ";".join(f"{_format_bound(b)}={c}" for b, c in self.items())

    @classmethod
    def parse(cls, metric: Measure, data: str) -> RangeDistribution:
        """Read a distribution back from its "bound=count;..." form."""
        boundaries = []
        counts = []
        for pair in data.split(";"):
            bound, sep, count = pair.partition("=")
            if not sep:
                raise ValueError(f"malformed distribution entry {pair!r}")
            boundaries.append(float(bound))
            counts.append(int(count))
        return cls(metric, tuple(boundaries), tuple(counts))

    @classmethod
    def empty(cls, metric: Measure, boundaries: Sequence[float]) -> RangeDistribution:
        bounds = validate_boundaries(boundaries)
        return cls(metric, bounds, (0,) * len(bounds))


class RangeDistributionBuilder:
    """Accumulates values into a range distribution.

    Values below the first boundary are clamped into bucket 0 so that the
    total count always equals the number of values added. Each clamp is
    logged and counted in `clamped`.

    Example:
        >>> builder = RangeDistributionBuilder(
        ...     Measure.FUNCTION_COMPLEXITY_DISTRIBUTION, FUNCTIONS_DISTRIB_BOTTOM_LIMITS
        ... )
        >>> builder.add(1)
        >>> builder.add(5)
        >>> builder.build().counts
        (1, 0, 1, 0, 0, 0, 0, 0, 0)
    """

    def __init__(self, metric: Measure, boundaries: Sequence[float]) -> None:
        self.metric = metric
        self.boundaries = validate_boundaries(boundaries)
        self.clamped = 0
        self._bounds = np.asarray(self.boundaries, dtype=np.float64)
        self._counts = np.zeros(len(self.boundaries), dtype=np.int64)
        self._built: RangeDistribution | None = None

    @property
    def is_built(self) -> bool:
        return self._built is not None

    def add(self, value: float, count: int = 1) -> None:
        """Record `count` occurrences of `value`.

        Raises:
            FinalizedDistributionError: If build() was already called.
            ValueError: If value is not finite or count is not a non-negative integer.
        """
        if self._built is not None:
            raise FinalizedDistributionError(self.metric.value)
        if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 0:
            raise ValueError(f"count must be a non-negative integer, got {count!r}")
        if not math.isfinite(value):
            raise ValueError(f"cannot add non-finite value {value!r} to {self.metric.value}")

        index = int(np.searchsorted(self._bounds, value, side="right")) - 1
        if index < 0:
            logger.warning(
                f"{self.metric.value}: value {value} is below the lowest bound "
                f"{_format_bound(self.boundaries[0])}, counted in the first bucket"
            )
            self.clamped += count
            index = 0
        self._counts[index] += count

    def add_all(self, values: Iterable[float]) -> None:
        for value in values:
            self.add(value)

    def build(self) -> RangeDistribution:
        """Freeze the accumulated counts. Calling it again returns the same result."""
        if self._built is None:
            self._built = RangeDistribution(
                self.metric,
                self.boundaries,
                tuple(int(c) for c in self._counts),
            )
        return self._built
