"""Tests for GraphNode, Position and NodeKind."""

import pytest

from jsonflow.graph import GraphNode, NodeKind, Position


class TestNodeKind:
    """Tests for NodeKind enum."""

    def test_all_node_kinds_exist(self):
        expected = {
            "OBJECT": "object",
            "ARRAY": "array",
            "ENTRY": "entry",
            "VALUE": "value",
        }
        for name, value in expected.items():
            kind = getattr(NodeKind, name)
            assert kind.value == value, f"NodeKind.{name} should have value '{value}'"

    def test_only_objects_and_arrays_are_containers(self):
        assert NodeKind.OBJECT.is_container
        assert NodeKind.ARRAY.is_container
        assert not NodeKind.ENTRY.is_container
        assert not NodeKind.VALUE.is_container


class TestPosition:
    """Tests for Position arithmetic and coercion."""

    def test_add_and_subtract(self):
        a = Position(10, 20)
        b = Position(3, -4)
        assert a + b == Position(13, 16)
        assert a - b == Position(7, 24)

    def test_is_immutable(self):
        p = Position(1, 2)
        with pytest.raises(AttributeError):
            p.x = 5  # type: ignore[misc]

    def test_arithmetic_with_non_position_is_unsupported(self):
        with pytest.raises(TypeError):
            Position(1, 2) + (1, 2)  # type: ignore[operator]

    def test_as_dict(self):
        assert Position(1.5, -2).as_dict() == {"x": 1.5, "y": -2}

    @pytest.mark.parametrize(
        "raw",
        [{"x": 4, "y": 5}, (4, 5), [4, 5], {"x": "4", "y": "5.0"}],
    )
    def test_from_any_accepts_common_shapes(self, raw):
        assert Position.from_any(raw) == Position(4.0, 5.0)

    def test_from_any_returns_positions_unchanged(self):
        p = Position(1, 1)
        assert Position.from_any(p) is p

    @pytest.mark.parametrize("raw", [None, {"x": 1}, "123", (1, 2, 3), {"x": "a", "y": 1}])
    def test_from_any_rejects_garbage(self, raw):
        with pytest.raises(ValueError):
            Position.from_any(raw)

    @pytest.mark.parametrize(
        "raw",
        [
            {"x": float("nan"), "y": 0},
            {"x": 0, "y": float("inf")},
            ("-inf", 1),
            ["Infinity", "NaN"],
        ],
    )
    def test_from_any_rejects_non_finite(self, raw):
        with pytest.raises(ValueError, match="must be finite"):
            Position.from_any(raw)

    def test_str(self):
        assert str(Position(125, 160.5)) == "(125, 160.5)"


class TestGraphNode:
    """Tests for GraphNode dataclass."""

    def test_create_minimal(self):
        node = GraphNode(id="1", label="Object", position=Position(0, 0))
        assert node.kind == NodeKind.VALUE
        assert node.depth == 0
        assert node.draggable is True

    def test_move_to_replaces_position(self):
        node = GraphNode(id="1", label="x", position=Position(0, 0))
        node.move_to(Position(5, 6))
        assert node.position == Position(5, 6)

    def test_is_container_follows_kind(self):
        node = GraphNode(id="1", label="Array", position=Position(), kind=NodeKind.ARRAY)
        assert node.is_container
