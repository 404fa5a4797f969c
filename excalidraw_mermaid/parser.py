"""
Graph extraction from Excalidraw JSON documents.
"""

from typing import Any, Dict, List, Mapping

import structlog

from .classifier import classify_shape, classify_edge_style
from .direction import estimate_direction
from .factory import ElementFactory
from .models import Element, Node, Edge, Group, Graph

logger = structlog.get_logger(__name__)

# Element kinds that become flowchart nodes
NODE_TYPES = {"rectangle", "ellipse", "diamond"}

# Element kinds that become flowchart edges
EDGE_TYPES = {"arrow", "line"}


class GraphExtractor:
    """
    Builds a flowchart graph out of an Excalidraw document.

    Extraction runs in a fixed order: deleted elements are dropped, bound text
    is collected per container, then nodes, edges, groups and finally the
    flow direction are derived. Malformed input never raises; whatever cannot
    be interpreted is left out of the graph.

    Example:
        >>> extractor = GraphExtractor()
        >>> graph = extractor.extract({"elements": [...]})
        >>> print(f"Found {len(graph.nodes)} nodes and {len(graph.edges)} edges")

    Attributes:
        element_factory (ElementFactory): Factory for creating elements from JSON
    """

    def __init__(self, element_factory: ElementFactory = None):
        self.element_factory = element_factory or ElementFactory()

    def extract(self, document: Any) -> Graph:
        """
        Extract nodes, edges, groups and direction from a parsed document.

        Args:
            document: Parsed Excalidraw JSON. Anything without an
                ``elements`` list is treated as an empty drawing.

        Returns:
            Graph: The extracted graph
        """
        elements_data = document.get("elements") if isinstance(document, Mapping) else None
        elements = [
            element for element in self.element_factory.create_elements(elements_data)
            if not element.is_deleted
        ]

        labels = self._collect_bound_text(elements)
        nodes = self._extract_nodes(elements, labels)
        edges = self._extract_edges(elements, nodes, labels)
        groups = self._extract_groups(elements, nodes)
        direction = estimate_direction(nodes, edges)

        logger.debug("Extracted graph",
                     elements=len(elements),
                     nodes=len(nodes),
                     edges=len(edges),
                     groups=len(groups),
                     direction=direction.value)

        return Graph(nodes=nodes, edges=edges, groups=groups, direction=direction)

    def _collect_bound_text(self, elements: List[Element]) -> Dict[str, str]:
        """Map container element IDs to the text displayed inside them."""
        labels = {}
        for element in elements:
            if element.type == "text" and element.container_id:
                labels[element.container_id] = element.text or element.original_text or ""
        return labels

    def _extract_nodes(self, elements: List[Element], labels: Dict[str, str]) -> Dict[str, Node]:
        nodes = {}
        for element in elements:
            if element.type not in NODE_TYPES:
                continue

            label = labels.get(element.id, "")

            # Dashed rectangles without text are background frames, not nodes
            if element.type == "rectangle" and element.stroke_style == "dashed" and not label:
                logger.debug("Skipping decorative container", element_id=element.id)
                continue

            nodes[element.id] = Node(
                id=element.id,
                label=label,
                shape=classify_shape(element),
                x=element.x,
                y=element.y,
                width=element.width,
                height=element.height,
                group_ids=element.group_ids,
                stroke_style=element.stroke_style,
                stroke_color=element.stroke_color,
                background_color=element.background_color,
            )
        return nodes

    def _extract_edges(self, elements: List[Element], nodes: Dict[str, Node],
                       labels: Dict[str, str]) -> List[Edge]:
        edges = []
        for element in elements:
            if element.type not in EDGE_TYPES:
                continue

            start_id = element.start_binding
            end_id = element.end_binding

            # Only edges connecting two known nodes are kept
            if not start_id or not end_id:
                logger.debug("Dropping unbound edge", element_id=element.id,
                             start=start_id, end=end_id)
                continue
            if start_id not in nodes or end_id not in nodes:
                logger.debug("Dropping edge to unknown node", element_id=element.id,
                             start=start_id, end=end_id)
                continue

            edges.append(Edge(
                id=element.id,
                source=start_id,
                target=end_id,
                label=labels.get(element.id, ""),
                style=classify_edge_style(element),
            ))
        return edges

    def _extract_groups(self, elements: List[Element], nodes: Dict[str, Node]) -> Dict[str, Group]:
        """Collect frame groups first, then clusters sharing a group ID.

        A frame and a group ID with the same key resolve to the frame.
        """
        groups = {}

        for frame in (element for element in elements if element.type == "frame"):
            members = tuple(
                node_id for node_id, node in nodes.items()
                if frame.contains_point(*node.center)
            )
            if members:
                groups[frame.id] = Group(id=frame.id, label=frame.name, members=members)

        clusters: Dict[str, List[str]] = {}
        for node_id, node in nodes.items():
            for group_id in node.group_ids:
                clusters.setdefault(group_id, []).append(node_id)

        for group_id, members in clusters.items():
            if len(members) < 2:
                continue
            if group_id in groups:
                logger.debug("Group ID collides with frame", group_id=group_id)
                continue
            groups[group_id] = Group(id=group_id, label="", members=tuple(members))

        return groups


def extract(document: Any) -> Graph:
    """Extract a flowchart graph from a parsed Excalidraw document."""
    return GraphExtractor().extract(document)
