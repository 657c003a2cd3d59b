"""Output model: one MeasureRecord per scanned file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .distribution import RangeDistribution
from .metrics import Measure


@dataclass(frozen=True)
class MeasureRecord:
    """Everything saved for a single file.

    Attributes:
        key:      Key of the file node (its path as the scanner reported it).
        measures: Scalar measures copied from the file node.
        function_complexity_distribution: Complexity of the functions in the file.
        file_complexity_distribution:     The file's own complexity, for project roll-up.
    """

    key: str
    measures: Mapping[Measure, float]
    function_complexity_distribution: RangeDistribution
    file_complexity_distribution: RangeDistribution

    def __post_init__(self) -> None:
        object.__setattr__(self, "measures", MappingProxyType(dict(self.measures)))

    def __getitem__(self, measure: Measure) -> Union[float, RangeDistribution]:
        if measure is Measure.FUNCTION_COMPLEXITY_DISTRIBUTION:
            return self.function_complexity_distribution
        if measure is Measure.FILE_COMPLEXITY_DISTRIBUTION:
            return self.file_complexity_distribution
        return self.measures[measure]

    @property
    def distributions(self) -> Dict[Measure, RangeDistribution]:
        return {
            Measure.FUNCTION_COMPLEXITY_DISTRIBUTION: self.function_complexity_distribution,
            Measure.FILE_COMPLEXITY_DISTRIBUTION: self.file_complexity_distribution,
        }

    def resource_path(self, base_dir: Optional[Union[str, Path]] = None) -> str:
        """The file key relative to `base_dir`, or the key itself if outside it."""
        if base_dir is None:
            return self.key
        try:
            return Path(self.key).relative_to(Path(base_dir)).as_posix()
        except ValueError:
            return self.key

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form: measure name -> value or serialized distribution."""
        data: Dict[str, Any] = {"key": self.key}
        data["measures"] = {measure.value: value for measure, value in self.measures.items()}
        data["distributions"] = {
            measure.value: dist.to_data() for measure, dist in self.distributions.items()
        }
        return data
