"""Mermaid flowchart generation from extracted graphs.

This module turns a Graph into ``graph <DIR>`` Mermaid syntax: subgraphs for
groups, then ungrouped nodes, then edges.

Classes:
    MermaidGenerator: Renders a Graph to Mermaid text

Functions:
    render: Convenience wrapper around MermaidGenerator
    quote_label: Escape a label for Mermaid
    render_node: Render one node declaration
    render_connector: Map an edge style to Mermaid connector syntax
"""

import re
from typing import Any, List, Optional, Set

import structlog

from .direction import resolve_direction
from .models import Graph, Node, Edge, Group, ShapeKind, EdgeStyle
from .node_id_manager import NodeIdManager, sanitize_subgraph_id

logger = structlog.get_logger(__name__)

# Characters that force a label into double quotes
NEEDS_QUOTES = re.compile(r'[:"{}|\[\]<>()#&]')

QUOTE_ESCAPE = "#quot;"
LINE_BREAK = "<br>"

INDENT = "    "
SUBGRAPH_INDENT = INDENT * 2

SHAPE_BRACKETS = {
    ShapeKind.RECTANGLE: ("[", "]"),
    ShapeKind.ROUNDED: ("(", ")"),
    ShapeKind.DIAMOND: ("{", "}"),
    ShapeKind.CIRCLE: ("((", "))"),
    ShapeKind.SUBROUTINE: ("[[", "]]"),
}

CONNECTORS = {
    EdgeStyle.ARROW: "-->",
    EdgeStyle.LINE: "---",
    EdgeStyle.DOTTED: "-.->",
    EdgeStyle.DOTTED_LINE: "-.-",
    EdgeStyle.THICK: "==>",
    EdgeStyle.THICK_LINE: "===",
}

DEFAULT_CONNECTOR = CONNECTORS[EdgeStyle.ARROW]


def quote_label(text: Optional[str]) -> str:
    """Quote a label if it contains characters Mermaid treats as syntax.

    Empty text becomes ``""``. Newlines always become ``<br>``; when quoting
    is needed, embedded double quotes become ``#quot;``. Applying this twice
    quotes twice.
    """
    if not text:
        return '""'
    # Decide on the raw text, before <br> is introduced
    needs_quotes = NEEDS_QUOTES.search(text) is not None
    cleaned = text.replace("\n", LINE_BREAK)
    if needs_quotes:
        return '"' + cleaned.replace('"', QUOTE_ESCAPE) + '"'
    return cleaned


def render_node(node_id: str, node: Node) -> str:
    """Render a node declaration, falling back to the short ID as its label."""
    label = quote_label(node.label or node_id)
    try:
        shape = ShapeKind(node.shape)
    except ValueError:
        shape = ShapeKind.RECTANGLE
    opening, closing = SHAPE_BRACKETS[shape]
    return f"{node_id}{opening}{label}{closing}"


def render_connector(style: Any) -> str:
    """Get the Mermaid connector for an edge style; unknown styles draw ``-->``."""
    try:
        return CONNECTORS.get(EdgeStyle(style), DEFAULT_CONNECTOR)
    except ValueError:
        return DEFAULT_CONNECTOR


class MermaidGenerator:
    """Renders an extracted Graph as a Mermaid flowchart.

    Short IDs and the set of already-rendered nodes live only for the
    duration of one ``generate`` call.

    Example:
        >>> generator = MermaidGenerator()
        >>> print(generator.generate(graph))
        graph LR
            A[Start]
            B[End]
            A --> B
    """

    def generate(self, graph: Graph, direction: Optional[Any] = None) -> str:
        """Generate Mermaid flowchart syntax from a graph.

        Args:
            graph: Graph produced by the extractor
            direction: Optional override for the graph's inferred direction

        Returns:
            Mermaid text terminated by a single newline

        Raises:
            InvalidDirectionError: If the override is not a known direction
        """
        effective = resolve_direction(direction, graph.direction)
        lines = [f"graph {effective.value}"]

        id_manager = NodeIdManager(graph.nodes.keys())

        grouped_nodes: Set[str] = set()
        for group in graph.groups.values():
            grouped_nodes.update(group.members)

        # A node claimed by several groups is drawn in the first one only
        rendered_nodes: Set[str] = set()
        for group in graph.groups.values():
            lines.extend(self._generate_subgraph(group, graph, id_manager, rendered_nodes))

        for node_id, node in graph.nodes.items():
            if node_id in grouped_nodes:
                continue
            lines.append(f"{INDENT}{render_node(id_manager.get_node_id(node_id), node)}")

        for edge in graph.edges:
            edge_line = self._generate_edge(edge, id_manager)
            if edge_line:
                lines.append(f"{INDENT}{edge_line}")

        return "\n".join(lines) + "\n"

    def _generate_subgraph(self, group: Group, graph: Graph, id_manager: NodeIdManager,
                           rendered_nodes: Set[str]) -> List[str]:
        subgraph_id = sanitize_subgraph_id(group.id)
        if group.label:
            lines = [f"{INDENT}subgraph {subgraph_id}[{quote_label(group.label)}]"]
        else:
            lines = [f"{INDENT}subgraph {subgraph_id}"]

        for member_id in group.members:
            if member_id in rendered_nodes:
                continue
            node = graph.nodes.get(member_id)
            if node is None:
                continue
            lines.append(f"{SUBGRAPH_INDENT}{render_node(id_manager.get_node_id(member_id), node)}")
            rendered_nodes.add(member_id)

        lines.append(f"{INDENT}end")
        return lines

    def _generate_edge(self, edge: Edge, id_manager: NodeIdManager) -> Optional[str]:
        source_id = id_manager.get_node_id(edge.source)
        target_id = id_manager.get_node_id(edge.target)
        if not source_id or not target_id:
            logger.debug("Skipping edge with unknown endpoint", edge_id=edge.id,
                         source=edge.source, target=edge.target)
            return None

        connector = render_connector(edge.style)
        if edge.label:
            return f"{source_id} {connector}|{quote_label(edge.label)}| {target_id}"
        return f"{source_id} {connector} {target_id}"


def render(graph: Graph, direction: Optional[Any] = None) -> str:
    """Render a graph to Mermaid text, optionally forcing the direction."""
    return MermaidGenerator().generate(graph, direction)
