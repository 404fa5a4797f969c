import pytest

from excalidraw_mermaid.direction import estimate_direction, normalize_direction, resolve_direction
from excalidraw_mermaid.exceptions import InvalidDirectionError
from excalidraw_mermaid.models import Direction, Edge, Node, ShapeKind


def _node(node_id, x, y, width=100, height=50):
    return Node(id=node_id, label=node_id, shape=ShapeKind.RECTANGLE,
                x=x, y=y, width=width, height=height)


def test_no_edges_defaults_to_top_down():
    nodes = {"a": _node("a", 0, 0), "b": _node("b", 500, 0)}
    assert estimate_direction(nodes, []) == Direction.TOP_DOWN


def test_horizontal_layout_is_left_right():
    nodes = {"a": _node("a", 0, 0), "b": _node("b", 300, 0), "c": _node("c", 600, 10)}
    edges = [Edge(id="e1", source="a", target="b"), Edge(id="e2", source="b", target="c")]
    assert estimate_direction(nodes, edges) == Direction.LEFT_RIGHT


def test_vertical_layout_is_top_down():
    nodes = {"a": _node("a", 0, 0), "b": _node("b", 0, 300)}
    edges = [Edge(id="e1", source="a", target="b")]
    assert estimate_direction(nodes, edges) == Direction.TOP_DOWN


def test_tied_votes_resolve_to_top_down():
    nodes = {"a": _node("a", 0, 0), "b": _node("b", 300, 0), "c": _node("c", 0, 300)}
    edges = [Edge(id="h", source="a", target="b"), Edge(id="v", source="a", target="c")]
    assert estimate_direction(nodes, edges) == Direction.TOP_DOWN


def test_diagonal_edge_counts_as_vertical():
    nodes = {"a": _node("a", 0, 0), "b": _node("b", 200, 200)}
    edges = [Edge(id="e", source="a", target="b")]
    assert estimate_direction(nodes, edges) == Direction.TOP_DOWN


def test_centres_use_node_extent():
    # Top-left corners are level but the centres are far apart vertically
    nodes = {"a": _node("a", 0, 0, width=10, height=10),
             "b": _node("b", 50, 0, width=10, height=400)}
    edges = [Edge(id="e", source="a", target="b")]
    assert estimate_direction(nodes, edges) == Direction.TOP_DOWN


def test_edges_with_missing_nodes_are_ignored():
    nodes = {"a": _node("a", 0, 0), "b": _node("b", 300, 0)}
    edges = [
        Edge(id="h", source="a", target="b"),
        Edge(id="ghost1", source="a", target="missing"),
        Edge(id="ghost2", source="missing", target="b"),
    ]
    assert estimate_direction(nodes, edges) == Direction.LEFT_RIGHT


@pytest.mark.parametrize("value, expected", [
    ("TD", Direction.TOP_DOWN),
    ("td", Direction.TOP_DOWN),
    ("TB", Direction.TOP_DOWN),
    ("LR", Direction.LEFT_RIGHT),
    ("bt", Direction.BOTTOM_UP),
    ("RL", Direction.RIGHT_LEFT),
    (Direction.LEFT_RIGHT, Direction.LEFT_RIGHT),
])
def test_normalize_direction_accepts_known_values(value, expected):
    assert normalize_direction(value) == expected


@pytest.mark.parametrize("value", ["XY", "", "up", None, 3])
def test_normalize_direction_rejects_unknown_values(value):
    with pytest.raises(InvalidDirectionError):
        normalize_direction(value)


def test_invalid_direction_error_is_value_error():
    with pytest.raises(ValueError):
        normalize_direction("sideways")


def test_resolve_direction_prefers_override():
    assert resolve_direction(None, Direction.LEFT_RIGHT) == Direction.LEFT_RIGHT
    assert resolve_direction("BT", Direction.LEFT_RIGHT) == Direction.BOTTOM_UP


def test_resolve_direction_accepts_token_for_inferred_direction():
    assert resolve_direction(None, "LR") == Direction.LEFT_RIGHT
    assert resolve_direction("", "tb") == Direction.TOP_DOWN
