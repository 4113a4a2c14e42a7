"""Pytest fixtures for core tests."""

import pytest


@pytest.fixture
def nested_graph():
    """Graph of {"a": 1, "b": {"c": 2}}.

    Ids: 1 Object, 2 "a: 1", 3 "b", 4 Object, 5 "c: 2".
    """
    from tests.core.graph_test_helpers import NESTED_OBJECT, graph_of

    return graph_of(NESTED_OBJECT)


@pytest.fixture
def array_graph():
    """Graph of [10, [true, null], "x"].

    Ids: 1 Array, 2 "0: 10", 3 "1", 4 Array, 5 "0: true", 6 "1: null", 7 "2: x".
    """
    from tests.core.graph_test_helpers import MIXED_ARRAY, graph_of

    return graph_of(MIXED_ARRAY)


@pytest.fixture
def builder():
    """Fresh GraphBuilder instance."""
    from jsonflow.graph.builder import GraphBuilder

    return GraphBuilder()


@pytest.fixture
def manager(nested_graph):
    """Drag manager over the nested graph's live positions (reject overlaps)."""
    from jsonflow.graph.drag import DragSessionManager

    return DragSessionManager(nested_graph.relations, nested_graph.position_store())
