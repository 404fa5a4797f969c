import pytest

from excalidraw_mermaid.node_id_manager import (
    NodeIdManager, assign_ids, sanitize_subgraph_id, short_id
)


@pytest.mark.parametrize("index, expected", [
    (0, "A"),
    (1, "B"),
    (25, "Z"),
    (26, "AA"),
    (27, "AB"),
    (51, "AZ"),
    (52, "BA"),
    (701, "ZZ"),
    (702, "AAA"),
])
def test_short_id(index, expected):
    assert short_id(index) == expected


def test_short_id_is_injective_over_a_range():
    ids = [short_id(i) for i in range(2000)]
    assert len(set(ids)) == len(ids)
    assert all(value.isalpha() and value.isupper() for value in ids)


def test_short_id_rejects_negative_index():
    with pytest.raises(ValueError):
        short_id(-1)


def test_assign_ids_is_sequential():
    id_map = assign_ids(["long_id_1", "long_id_2", "long_id_3"])
    assert id_map == {"long_id_1": "A", "long_id_2": "B", "long_id_3": "C"}


def test_manager_lookups():
    manager = NodeIdManager(["x", "y"])
    assert manager.get_node_id("y") == "B"
    assert manager.get_node_id("missing") is None
    assert manager.register("x") == "A"
    assert manager.register("z") == "C"
    assert manager.as_dict() == {"x": "A", "y": "B", "z": "C"}


def test_sanitize_subgraph_id():
    assert sanitize_subgraph_id("backend-frame") == "backend_frame"
    assert sanitize_subgraph_id("a b.c") == "a_b_c"
    assert sanitize_subgraph_id("x" * 30) == "x" * 20
