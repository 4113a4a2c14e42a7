"""Tests for GraphEdge and RelationIndex."""

import pytest

from jsonflow.graph import GraphEdge, RelationIndex
from jsonflow.graph.relations import edge_id


def _index(*pairs):
    index = RelationIndex()
    for parent, child in pairs:
        index.add(parent, child)
    return index


class TestGraphEdge:
    """Tests for GraphEdge."""

    def test_edge_id_format(self):
        assert edge_id("1", "2") == "e1-2"
        assert edge_id("10", "11") == "e10-11"

    def test_between_derives_id(self):
        edge = GraphEdge.between("3", "4")
        assert edge == GraphEdge(id="e3-4", source="3", target="4")

    def test_edges_are_hashable(self):
        edges = {GraphEdge.between("1", "2"), GraphEdge.between("1", "2")}
        assert len(edges) == 1

    def test_str(self):
        assert str(GraphEdge.between("1", "2")) == "1 --> 2"


class TestRelationIndex:
    """Tests for RelationIndex."""

    def test_empty_index(self):
        index = RelationIndex()
        assert len(index) == 0
        assert index.as_dict() == {}
        assert index.children_of("1") == ()

    def test_children_keep_insertion_order(self):
        index = _index(("1", "3"), ("1", "2"))
        assert index.children_of("1") == ("3", "2")

    def test_parent_lookup(self):
        index = _index(("1", "2"), ("2", "3"))
        assert index.parent_of("3") == "2"
        assert index.parent_of("1") is None
        assert index.parent_of("missing") is None

    def test_second_parent_is_rejected(self):
        index = _index(("1", "2"))
        with pytest.raises(ValueError, match="already has parent 1"):
            index.add("3", "2")

    def test_self_child_is_rejected(self):
        with pytest.raises(ValueError):
            RelationIndex().add("1", "1")

    def test_leaves_have_no_entry(self):
        index = _index(("1", "2"))
        assert "1" in index
        assert "2" not in index
        assert index.has_children("1")
        assert not index.has_children("2")

    def test_descendants_breadth_first(self):
        # 1 -> (2, 3), 2 -> 4, 3 -> 5, 4 -> 6
        index = _index(("1", "2"), ("1", "3"), ("2", "4"), ("3", "5"), ("4", "6"))
        assert list(index.iter_descendants("1")) == ["2", "3", "4", "5", "6"]
        assert list(index.iter_descendants("2")) == ["4", "6"]
        assert list(index.iter_descendants("6")) == []

    def test_subtree_includes_the_node(self):
        index = _index(("1", "2"), ("2", "3"))
        assert index.subtree("2") == ["2", "3"]
        assert index.subtree("9") == ["9"]

    def test_iter_pairs(self):
        index = _index(("1", "2"), ("1", "3"), ("3", "4"))
        assert list(index.iter_pairs()) == [("1", "2"), ("1", "3"), ("3", "4")]

    def test_as_dict_is_a_copy(self):
        index = _index(("1", "2"))
        copy = index.as_dict()
        copy["1"].append("99")
        assert index.children_of("1") == ("2",)

    def test_equality(self):
        assert _index(("1", "2")) == _index(("1", "2"))
        assert _index(("1", "2")) != _index(("1", "3"))


class TestRelationsMatchEdges:
    """The relation index and the edge list describe the same tree."""

    def test_every_edge_is_a_relation(self, nested_graph, array_graph):
        for graph in (nested_graph, array_graph):
            pairs = {(e.source, e.target) for e in graph.iter_edges()}
            assert pairs == set(graph.relations.iter_pairs())

    def test_each_non_root_node_has_one_parent(self, array_graph):
        targets = [e.target for e in array_graph.iter_edges()]
        assert len(targets) == len(set(targets))
        assert "1" not in targets
