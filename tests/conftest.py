"""Shared test fixtures for codemeasure tests."""

import logging

import pytest

from codemeasure.index import NodeId, NodeKind, SourceNode
from codemeasure.metrics import Metric


def make_file(key: str, complexity: float = 0, **overrides) -> SourceNode:
    """A file node carrying every metric the aggregator reads."""
    metrics = {
        Metric.FILES: 1,
        Metric.LINES: 100,
        Metric.LINES_OF_CODE: 80,
        Metric.STATEMENTS: 40,
        Metric.FUNCTIONS: 0,
        Metric.CLASSES: 0,
        Metric.COMPLEXITY: complexity,
        Metric.COMMENT_LINES: 10,
        Metric.COMMENT_BLANK_LINES: 2,
    }
    for name, value in overrides.items():
        metrics[Metric(name)] = value
    return SourceNode(NodeId(NodeKind.FILE, key), metrics)


def make_function(parent: SourceNode, name: str, complexity: float) -> SourceNode:
    """A function node inside `parent`."""
    return SourceNode(
        NodeId(NodeKind.FUNCTION, f"{parent.key}:{name}"),
        {Metric.COMPLEXITY: complexity},
        parent=parent.id,
    )


@pytest.fixture
def simple_file():
    """One file, complexity 3, no functions."""
    return make_file("/project/src/simple.c", complexity=3)


@pytest.fixture
def two_function_file():
    """One file with functions of complexity 1 and 5."""
    file_node = make_file("/project/src/two.c", complexity=6, functions=2)
    return [
        file_node,
        make_function(file_node, "a", 1),
        make_function(file_node, "b", 5),
    ]


@pytest.fixture
def project_nodes():
    """Three files with 0, 2 and 4 functions."""
    nodes = []
    for i, n_functions in enumerate([0, 2, 4]):
        file_node = make_file(
            f"/project/src/file{i}.cpp", complexity=n_functions * 3, functions=n_functions
        )
        nodes.append(file_node)
        for j in range(n_functions):
            nodes.append(make_function(file_node, f"f{j}", j + 1))
    return nodes


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers and level installed by setup_logging() during a test."""
    yield
    logger = logging.getLogger("codemeasure")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
