"""Source node model and the read-only index built over a scan."""

from .node_index import NodeIndex
from .nodes import NodeId, NodeKind, SourceNode

__all__ = [
    "NodeId",
    "NodeIndex",
    "NodeKind",
    "SourceNode",
]
