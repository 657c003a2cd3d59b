"""Measure sinks: where finished records go.

The real persistence layer belongs to the host. InMemoryMeasureSink keeps
records in a dict and offers the project-level roll-ups a host would
otherwise compute itself.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Protocol, runtime_checkable

from .distribution import RangeDistribution
from .logging_config import get_logger
from .metrics import Measure
from .models import MeasureRecord

logger = get_logger(__name__)


@runtime_checkable
class MeasureSink(Protocol):
    """Receives finished measure records."""

    def save(self, record: MeasureRecord) -> None:
        ...


class InMemoryMeasureSink:
    """Keeps every saved record, keyed by file key."""

    def __init__(self) -> None:
        self._records: Dict[str, MeasureRecord] = {}

    def save(self, record: MeasureRecord) -> None:
        if record.key in self._records:
            logger.warning(f"Replacing measures already saved for {record.key}")
        self._records[record.key] = record

    @property
    def records(self) -> List[MeasureRecord]:
        return list(self._records.values())

    def keys(self) -> List[str]:
        return list(self._records)

    def __getitem__(self, key: str) -> MeasureRecord:
        return self._records[key]

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[MeasureRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def project_totals(self) -> Dict[Measure, float]:
        """Scalar measures summed over every saved file."""
        totals: Dict[Measure, float] = {}
        for record in self._records.values():
            for measure, value in record.measures.items():
                totals[measure] = totals.get(measure, 0.0) + value
        return totals

    def project_distribution(self, measure: Measure) -> Optional[RangeDistribution]:
        """One of the two distributions merged over every saved file.

        Returns None when nothing has been saved.

        Raises:
            KeyError: If `measure` is not a distribution measure.
        """
        merged: Optional[RangeDistribution] = None
        for record in self._records.values():
            dist = record.distributions[measure]
            merged = dist if merged is None else merged + dist
        return merged

    def project_file_complexity(self) -> Optional[RangeDistribution]:
        return self.project_distribution(Measure.FILE_COMPLEXITY_DISTRIBUTION)

    def project_function_complexity(self) -> Optional[RangeDistribution]:
        return self.project_distribution(Measure.FUNCTION_COMPLEXITY_DISTRIBUTION)
