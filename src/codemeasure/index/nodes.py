"""Source node model.

Nodes are the structural elements produced by the scanner. They form a
shallow hierarchy:

    File
        ├── Function
        └── Class

Each node has a unique NodeId (kind + key) and an optional parent NodeId.
Parent links are plain identifiers resolved through the NodeIndex, so a
node never holds a reference to the node that contains it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..exceptions import MalformedNodeError, MissingMetricError
from ..metrics import Metric


class NodeKind(Enum):
    """The kinds of node the scanner reports."""

    FILE = "file"
    FUNCTION = "function"
    CLASS = "class"


@dataclass(frozen=True)
class NodeId:
    """Unique identifier for any node.

    Key conventions:
        FILE      - absolute path         e.g. /work/project/src/main.cpp
        FUNCTION  - file:line:name        e.g. /work/project/src/main.cpp:12:main
        CLASS     - file:line:name        e.g. /work/project/src/widget.h:8:Widget
    """

    kind: NodeKind
    key: str

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.key}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeId:
        if not isinstance(data, Mapping):
            raise MalformedNodeError(f"node reference must be an object, got {data!r}")
        try:
            return cls(NodeKind(data["kind"]), str(data["key"]))
        except KeyError as e:
            raise MalformedNodeError(f"node reference lacks {e}")
        except (TypeError, ValueError):
            raise MalformedNodeError(f"unknown node kind {data.get('kind')!r}")

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "key": self.key}


@dataclass(frozen=True)
class SourceNode:
    """A scanned structural element with its precomputed metrics.

    Attributes:
        id:      unique NodeId (kind + key)
        metrics: metric -> value, as computed by the scanner
        parent:  NodeId of the enclosing node (None for files)
    """

    id: NodeId
    metrics: Mapping[Metric, float] = field(default_factory=dict, compare=False)
    parent: Optional[NodeId] = None

    def __post_init__(self) -> None:
        for metric, value in self.metrics.items():
            if not isinstance(metric, Metric):
                raise MalformedNodeError(f"metric {metric!r} is not a Metric", self.id.key)
            if not math.isfinite(value) or value < 0:
                raise MalformedNodeError(
                    f"metric {metric.value} has invalid value {value!r}", self.id.key
                )
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

    @property
    def kind(self) -> NodeKind:
        """Shortcut to self.id.kind."""
        return self.id.kind

    @property
    def key(self) -> str:
        """Shortcut to self.id.key."""
        return self.id.key

    def has(self, metric: Metric) -> bool:
        return metric in self.metrics

    def get(self, metric: Metric) -> float:
        """Return the value of a metric.

        Raises:
            MissingMetricError: If the scanner did not compute this metric.
        """
        try:
            return self.metrics[metric]
        except KeyError:
            raise MissingMetricError(str(self.id), metric.value) from None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SourceNode:
        """Build a node from its dump form.

        Example:
            >>> SourceNode.from_dict({
            ...     "kind": "function",
            ...     "key": "src/a.c:3:main",
            ...     "parent": {"kind": "file", "key": "src/a.c"},
            ...     "metrics": {"complexity": 2},
            ... }).get(Metric.COMPLEXITY)
            2.0
        """
        node_id = NodeId.from_dict(data)

        metrics_data = data.get("metrics")
        if metrics_data is None:
            metrics_data = {}
        if not isinstance(metrics_data, Mapping):
            raise MalformedNodeError(
                f"metrics must be an object, got {type(metrics_data).__name__}", node_id.key
            )

        metrics: dict[Metric, float] = {}
        for name, value in metrics_data.items():
            try:
                metric = Metric.parse(name)
            except (AttributeError, ValueError):
                raise MalformedNodeError(f"unknown metric {name!r}", node_id.key)
            try:
                metrics[metric] = float(value)
            except (TypeError, ValueError):
                raise MalformedNodeError(
                    f"metric {name} has non-numeric value {value!r}", node_id.key
                )

        parent_data = data.get("parent")
        parent = None
        if parent_data is not None:
            if not isinstance(parent_data, Mapping):
                raise MalformedNodeError(
                    f"parent must be an object, got {type(parent_data).__name__}", node_id.key
                )
            parent = NodeId.from_dict(parent_data)
        return cls(node_id, metrics, parent)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = self.id.to_dict()
        if self.parent is not None:
            data["parent"] = self.parent.to_dict()
        data["metrics"] = {metric.value: value for metric, value in self.metrics.items()}
        return data
