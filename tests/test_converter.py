import re

import pytest

from conftest import fixture_path, load_fixture

from excalidraw_mermaid.converter import convert, convert_file, load_document
from excalidraw_mermaid.exceptions import DocumentReadError, InvalidDirectionError, JSONParseError
from excalidraw_mermaid.models import ConversionOptions


def _edge_lines(mermaid):
    return [line for line in mermaid.splitlines() if re.search(r"(-->|---|-\.->|-\.-|==>|===)", line)]


def test_simple_flow_produces_valid_mermaid(simple_flow):
    result = convert(simple_flow)
    assert result.node_count == 3
    assert result.edge_count == 2
    assert result.direction == "LR"
    assert type(result.direction) is str
    assert result.output is None
    assert result.mermaid == (
        "graph LR\n"
        "    A[Start]\n"
        "    B[Process]\n"
        "    C[End]\n"
        "    A --> B\n"
        "    B --> C\n"
    )
    assert sum(line.count("-->") for line in _edge_lines(result.mermaid)) == 2


def test_decision_flow_has_diamond_and_labels(decision_flow):
    result = convert(decision_flow)
    assert result.node_count == 4
    assert result.edge_count == 3
    assert result.direction == "TD"
    assert re.search(r"\{Valid\?\}", result.mermaid)
    assert "    B -->|Yes| C\n" in result.mermaid
    assert "    B -.->|No| D\n" in result.mermaid


def test_all_shapes_fixture(all_shapes):
    result = convert(all_shapes)
    assert result.node_count == 4
    assert result.edge_count == 3
    assert re.search(r"\w+\[Rectangle\]", result.mermaid)
    assert re.search(r"\w+\(Rounded\)", result.mermaid)
    assert re.search(r"\w+\{Choice\}", result.mermaid)
    assert re.search(r"\w+\(\(End\)\)", result.mermaid)
    assert "A --> B" in result.mermaid
    assert "B -.-> C" in result.mermaid
    assert "C ==> D" in result.mermaid
    # The arrow bound to a deleted rectangle never shows up
    assert "removed" not in result.mermaid


def test_grouped_fixture(grouped):
    result = convert(grouped)
    assert result.node_count == 3
    assert result.mermaid == (
        "graph LR\n"
        "    subgraph backend_frame[Backend Services]\n"
        "        B(API)\n"
        '        C["DB: Main"]\n'
        "    end\n"
        "    A((Client))\n"
        "    A --> B\n"
        "    B ---|reads| C\n"
    )


def test_empty_document():
    result = convert(load_fixture("empty.excalidraw"))
    assert result.node_count == 0
    assert result.edge_count == 0
    assert result.direction == "TD"
    assert result.mermaid == "graph TD\n"


def test_malformed_document_never_raises():
    result = convert({"elements": [None, 3, {"type": "rectangle", "x": "a"}, {}]})
    assert result.node_count == 1
    assert result.mermaid == "graph TD\n    A[A]\n"


def test_direction_override(simple_flow):
    result = convert(simple_flow, {"direction": "TD"})
    assert result.direction == "TD"
    assert result.mermaid.startswith("graph TD\n")

    result = convert(simple_flow, ConversionOptions(direction="tb"))
    assert result.direction == "TD"


def test_bt_and_rl_are_accepted_as_overrides(simple_flow):
    assert convert(simple_flow, {"direction": "BT"}).mermaid.startswith("graph BT\n")
    assert convert(simple_flow, {"direction": "RL"}).direction == "RL"


def test_invalid_direction_raises(simple_flow):
    with pytest.raises(InvalidDirectionError):
        convert(simple_flow, {"direction": "XY"})


def test_output_file_matches_result(simple_flow, tmp_path):
    out_path = tmp_path / "diagram.md"
    result = convert(simple_flow, {"output": str(out_path)})

    assert out_path.read_bytes() == result.mermaid.encode("utf-8")
    assert result.output == str(out_path.resolve())


def test_json_dict_uses_camel_case(simple_flow, tmp_path):
    assert set(convert(simple_flow).to_json_dict()) == {"mermaid", "nodeCount", "edgeCount", "direction"}

    data = convert(simple_flow, {"output": tmp_path / "out.md"}).to_json_dict()
    assert data["nodeCount"] == 3
    assert data["edgeCount"] == 2
    assert data["direction"] == "LR"
    assert data["output"].endswith("out.md")


def test_convert_file_reads_fixture():
    result = convert_file(fixture_path("simple-flow.excalidraw"))
    assert result.node_count == 3
    assert "Start" in result.mermaid


def test_load_document_missing_file(tmp_path):
    with pytest.raises(DocumentReadError) as exc_info:
        load_document(tmp_path / "nope.excalidraw")
    assert "not found" in exc_info.value.message


def test_load_document_invalid_json(tmp_path):
    bad = tmp_path / "bad.excalidraw"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(JSONParseError) as exc_info:
        load_document(bad)
    assert exc_info.value.context["line_number"] == 1
    assert "Context:" in str(exc_info.value)


def test_concurrent_conversions_are_independent(simple_flow, decision_flow):
    first = convert(simple_flow).mermaid
    convert(decision_flow)
    assert convert(simple_flow).mermaid == first
