"""NodeIndex: read-only lookup tables over a scanned node collection.

The index is built once per analysis pass from the flat node list the
scanner returns. Two groupings are computed up front so that neither query
shape ever rescans the collection:

    - by kind:            NodeKind -> nodes of that kind
    - by (parent, kind):  (parent NodeId, NodeKind) -> children of that kind

Usage:
    from codemeasure.index import NodeIndex, NodeKind

    index = NodeIndex.build(nodes)
    for file_node in index.by_type(NodeKind.FILE):
        functions = index.by_parent_and_type(file_node, NodeKind.FUNCTION)
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple, Union

from ..exceptions import MalformedIndexError
from ..logging_config import get_logger
from .nodes import NodeId, NodeKind, SourceNode

logger = get_logger(__name__)

# Allowed parent kinds per child kind. Kinds not listed here may hang
# off any node present in the index.
_PARENT_KINDS: Dict[NodeKind, FrozenSet[NodeKind]] = {
    NodeKind.FILE: frozenset(),
    NodeKind.FUNCTION: frozenset({NodeKind.FILE}),
}

_EMPTY: FrozenSet[SourceNode] = frozenset()


class NodeIndex:
    """Immutable snapshot of the nodes produced by one scan.

    Do not construct directly; use NodeIndex.build().
    """

    __slots__ = ("_nodes", "_by_kind", "_by_parent_kind")

    def __init__(
        self,
        nodes: Dict[NodeId, SourceNode],
        by_kind: Dict[NodeKind, FrozenSet[SourceNode]],
        by_parent_kind: Dict[Tuple[NodeId, NodeKind], FrozenSet[SourceNode]],
    ) -> None:
        self._nodes = nodes
        self._by_kind = by_kind
        self._by_parent_kind = by_parent_kind

    @classmethod
    def build(cls, nodes: Iterable[SourceNode]) -> NodeIndex:
        """Group a flat node collection into lookup tables.

        Args:
            nodes: Every node produced by the scanner, in any order.

        Returns:
            The populated index.

        Raises:
            MalformedIndexError: If two nodes share an id, a node names a
                parent that is not in the collection, or a node's parent has
                a kind it cannot be nested in.
        """
        by_id: Dict[NodeId, SourceNode] = {}
        for node in nodes:
            if node.id in by_id:
                raise MalformedIndexError(str(node.id), "duplicate node id")
            by_id[node.id] = node

        by_kind: Dict[NodeKind, set[SourceNode]] = {}
        by_parent_kind: Dict[Tuple[NodeId, NodeKind], set[SourceNode]] = {}

        for node in by_id.values():
            by_kind.setdefault(node.kind, set()).add(node)
            _check_parent(node, by_id)
            if node.parent is not None:
                by_parent_kind.setdefault((node.parent, node.kind), set()).add(node)

        index = cls(
            by_id,
            {kind: frozenset(group) for kind, group in by_kind.items()},
            {key: frozenset(group) for key, group in by_parent_kind.items()},
        )
        summary = ", ".join(f"{kind.value}={len(group)}" for kind, group in by_kind.items())
        logger.debug(f"Built node index: {len(by_id)} nodes ({summary or 'empty'})")
        return index

    def by_type(self, kind: NodeKind) -> FrozenSet[SourceNode]:
        """All nodes of the given kind."""
        return self._by_kind.get(kind, _EMPTY)

    def by_parent_and_type(
        self, parent: Union[SourceNode, NodeId], kind: NodeKind
    ) -> FrozenSet[SourceNode]:
        """Children of `parent` that have the given kind.

        Args:
            parent: The enclosing node, or its id.
            kind:   Kind of child to return.
        """
        parent_id = parent.id if isinstance(parent, SourceNode) else parent
        return self._by_parent_kind.get((parent_id, kind), _EMPTY)

    def files(self) -> FrozenSet[SourceNode]:
        return self.by_type(NodeKind.FILE)

    def functions(self, parent: Union[SourceNode, NodeId, None] = None) -> FrozenSet[SourceNode]:
        """Function nodes, either all of them or those inside `parent`."""
        if parent is None:
            return self.by_type(NodeKind.FUNCTION)
        return self.by_parent_and_type(parent, NodeKind.FUNCTION)

    def get(self, node_id: NodeId) -> Optional[SourceNode]:
        return self._nodes.get(node_id)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, SourceNode):
            return self._nodes.get(item.id) == item
        return item in self._nodes

    def __iter__(self) -> Iterator[SourceNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"NodeIndex(nodes={len(self._nodes)})"


def _check_parent(node: SourceNode, by_id: Dict[NodeId, SourceNode]) -> None:
    """Validate a node's parent link against the collected nodes."""
    allowed = _PARENT_KINDS.get(node.kind)

    if node.parent is None:
        if allowed:
            raise MalformedIndexError(
                str(node.id), f"{node.kind.value} node has no parent"
            )
        return

    if node.parent not in by_id:
        raise MalformedIndexError(
            str(node.id), f"parent {node.parent} is not in the index"
        )
    if allowed is not None and node.parent.kind not in allowed:
        raise MalformedIndexError(
            str(node.id),
            f"{node.kind.value} node cannot be nested in a {node.parent.kind.value} node",
        )
