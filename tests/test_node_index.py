"""Tests for NodeIndex construction and queries."""

import pytest
from conftest import make_file, make_function

from codemeasure.exceptions import MalformedIndexError
from codemeasure.index import NodeId, NodeIndex, NodeKind, SourceNode
from codemeasure.metrics import Metric


class TestBuild:
    """Tests for NodeIndex.build() validation."""

    def test_empty_collection(self):
        index = NodeIndex.build([])
        assert len(index) == 0
        assert index.by_type(NodeKind.FILE) == frozenset()

    def test_missing_parent_raises(self):
        orphan = SourceNode(
            NodeId(NodeKind.FUNCTION, "/gone.c:main"),
            {Metric.COMPLEXITY: 1},
            parent=NodeId(NodeKind.FILE, "/gone.c"),
        )
        with pytest.raises(MalformedIndexError) as exc_info:
            NodeIndex.build([make_file("/here.c"), orphan])
        assert "not in the index" in exc_info.value.reason
        assert "/gone.c:main" in exc_info.value.node_key

    def test_function_without_parent_raises(self):
        loose = SourceNode(NodeId(NodeKind.FUNCTION, "main"), {Metric.COMPLEXITY: 1})
        with pytest.raises(MalformedIndexError, match="Malformed node index"):
            NodeIndex.build([loose])

    def test_function_inside_function_raises(self):
        file_node = make_file("/a.c")
        outer = make_function(file_node, "outer", 1)
        inner = SourceNode(
            NodeId(NodeKind.FUNCTION, "/a.c:inner"), {Metric.COMPLEXITY: 1}, parent=outer.id
        )
        with pytest.raises(MalformedIndexError, match="cannot be nested"):
            NodeIndex.build([file_node, outer, inner])

    def test_file_with_parent_raises(self):
        outer = make_file("/a.c")
        nested = SourceNode(NodeId(NodeKind.FILE, "/b.c"), {}, parent=outer.id)
        with pytest.raises(MalformedIndexError):
            NodeIndex.build([outer, nested])

    def test_duplicate_id_raises(self):
        with pytest.raises(MalformedIndexError, match="duplicate"):
            NodeIndex.build([make_file("/a.c"), make_file("/a.c", complexity=9)])

    def test_order_independent(self, project_nodes):
        forward = NodeIndex.build(project_nodes)
        backward = NodeIndex.build(list(reversed(project_nodes)))
        assert forward.by_type(NodeKind.FUNCTION) == backward.by_type(NodeKind.FUNCTION)

    def test_class_nodes_accepted(self):
        file_node = make_file("/w.h")
        widget = SourceNode(NodeId(NodeKind.CLASS, "/w.h:Widget"), {}, parent=file_node.id)
        index = NodeIndex.build([file_node, widget])
        assert index.by_parent_and_type(file_node, NodeKind.CLASS) == {widget}


class TestQueries:
    """Tests for by_type() and by_parent_and_type()."""

    def test_by_type_counts(self, project_nodes):
        index = NodeIndex.build(project_nodes)
        assert len(index.by_type(NodeKind.FILE)) == 3
        assert len(index.by_type(NodeKind.FUNCTION)) == 0 + 2 + 4

    def test_by_type_unknown_kind_empty(self, project_nodes):
        index = NodeIndex.build(project_nodes)
        assert index.by_type(NodeKind.CLASS) == frozenset()

    def test_by_parent_counts_per_file(self, project_nodes):
        index = NodeIndex.build(project_nodes)
        sizes = {
            f.key: len(index.by_parent_and_type(f, NodeKind.FUNCTION))
            for f in index.by_type(NodeKind.FILE)
        }
        assert sizes == {
            "/project/src/file0.cpp": 0,
            "/project/src/file1.cpp": 2,
            "/project/src/file2.cpp": 4,
        }

    def test_children_disjoint_and_complete(self, project_nodes):
        index = NodeIndex.build(project_nodes)
        seen = set()
        for file_node in index.files():
            children = index.functions(file_node)
            assert seen.isdisjoint(children)
            assert all(child.parent == file_node.id for child in children)
            seen |= children
        assert seen == index.functions()

    def test_query_by_parent_id(self, two_function_file):
        index = NodeIndex.build(two_function_file)
        file_node = two_function_file[0]
        assert index.by_parent_and_type(file_node.id, NodeKind.FUNCTION) == index.by_parent_and_type(
            file_node, NodeKind.FUNCTION
        )

    def test_query_unknown_parent_empty(self, project_nodes):
        index = NodeIndex.build(project_nodes)
        stranger = NodeId(NodeKind.FILE, "/elsewhere.c")
        assert index.by_parent_and_type(stranger, NodeKind.FUNCTION) == frozenset()

    def test_results_are_immutable(self, project_nodes):
        index = NodeIndex.build(project_nodes)
        assert isinstance(index.by_type(NodeKind.FILE), frozenset)

    def test_get_and_contains(self, two_function_file):
        index = NodeIndex.build(two_function_file)
        file_node = two_function_file[0]
        assert index.get(file_node.id) is file_node
        assert file_node in index
        assert file_node.id in index
        assert make_file("/other.c") not in index
        assert index.get(NodeId(NodeKind.FILE, "/other.c")) is None

    def test_iterates_every_node(self, project_nodes):
        index = NodeIndex.build(project_nodes)
        assert set(index) == set(project_nodes)
