"""
Data models for Excalidraw elements and the extracted flowchart graph.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Any, Dict, List, Union

from pydantic import BaseModel, Field


class ShapeKind(str, Enum):
    """Node shapes that the Mermaid renderer knows how to draw."""
    RECTANGLE = "rectangle"
    ROUNDED = "rounded"
    DIAMOND = "diamond"
    CIRCLE = "circle"
    SUBROUTINE = "subroutine"


class EdgeStyle(str, Enum):
    """Connector styles, split by line weight/dash and arrowhead presence."""
    ARROW = "arrow"
    LINE = "line"
    DOTTED = "dotted"
    DOTTED_LINE = "dotted-line"
    THICK = "thick"
    THICK_LINE = "thick-line"


class Direction(str, Enum):
    """Flowchart layout directions."""
    TOP_DOWN = "TD"
    LEFT_RIGHT = "LR"
    BOTTOM_UP = "BT"
    RIGHT_LEFT = "RL"


@dataclass(frozen=True)
class Element:
    """
    One raw Excalidraw primitive, read permissively from the document.

    Only the attributes the converter looks at are kept. Every field has a
    safe default so that partially filled elements never fail to load.

    Attributes:
        id (str): Unique identifier for the element
        type (str): Element kind (rectangle, ellipse, diamond, arrow, line, text, frame, ...)
        x (float): X coordinate of the element's top-left corner
        y (float): Y coordinate of the element's top-left corner
        width (float): Width of the element in pixels
        height (float): Height of the element in pixels
        stroke_style (str): Style of the border line (default: "solid")
        stroke_width (float): Width of the border in pixels (default: 1)
        stroke_color (Optional[str]): Border colour, carried through to nodes
        background_color (Optional[str]): Fill colour, carried through to nodes
        roundness (Any): Roundness marker; rounded rectangles carry a mapping
        group_ids (Tuple[str, ...]): Group IDs this element belongs to
        is_deleted (bool): Whether the element was deleted in the editor
        text (str): Rendered text (text elements only)
        original_text (str): Unwrapped source text (text elements only)
        container_id (Optional[str]): Element a text element is bound to
        start_binding (Optional[str]): Element the start of an arrow/line is bound to
        end_binding (Optional[str]): Element the end of an arrow/line is bound to
        end_arrowhead (Optional[str]): Arrowhead at the end of an arrow/line
        name (str): Display name (frames only)
    """
    id: str
    type: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    stroke_style: str = "solid"
    stroke_width: float = 1
    stroke_color: Optional[str] = None
    background_color: Optional[str] = None
    roundness: Any = None
    group_ids: Tuple[str, ...] = ()
    is_deleted: bool = False
    text: str = ""
    original_text: str = ""
    container_id: Optional[str] = None
    start_binding: Optional[str] = None
    end_binding: Optional[str] = None
    end_arrowhead: Optional[str] = None
    name: str = ""

    def contains_point(self, px: float, py: float) -> bool:
        """Check whether a point lies inside the bounding box (edges included)."""
        return (self.x <= px <= self.x + self.width
                and self.y <= py <= self.y + self.height)


@dataclass(frozen=True)
class Node:
    """
    A flowchart vertex built from one rectangle, ellipse or diamond.

    Position and size are kept so direction inference and frame containment
    can work on the graph alone.
    """
    id: str
    label: str
    shape: ShapeKind
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    group_ids: Tuple[str, ...] = ()
    stroke_style: str = "solid"
    stroke_color: Optional[str] = None
    background_color: Optional[str] = None

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class Edge:
    """A connection between two extracted nodes."""
    id: str
    source: str
    target: str
    label: str = ""
    style: EdgeStyle = EdgeStyle.ARROW


@dataclass(frozen=True)
class Group:
    """A cluster of nodes rendered as a Mermaid subgraph.

    Attributes:
        id (str): Frame element ID or shared group ID
        label (str): Frame name; empty for group-id clusters
        members (Tuple[str, ...]): Node IDs in discovery order, never empty
    """
    id: str
    label: str
    members: Tuple[str, ...]


@dataclass
class Graph:
    """
    The complete structure extracted from one Excalidraw document.

    ``nodes`` keeps document order, which drives both render order and
    short ID assignment.

    Example:
        >>> graph = extract(document)
        >>> print(f"Diagram has {len(graph.nodes)} nodes, "
        ...       f"{len(graph.edges)} edges, "
        ...       f"{len(graph.groups)} groups")
    """
    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    groups: Dict[str, Group] = field(default_factory=dict)
    direction: Direction = Direction.TOP_DOWN


@dataclass
class ConversionOptions:
    """Options accepted by ``convert``.

    Attributes:
        direction: Forced direction (TD, LR, BT, RL or the TB alias); inferred when None
        output: File to write the Mermaid text to; nothing is written when None
    """
    direction: Optional[str] = None
    output: Optional[Union[str, Path]] = None


class ConversionResult(BaseModel):
    """Result of converting one document."""
    mermaid: str = Field(..., description="Rendered Mermaid flowchart text")
    node_count: int = Field(..., alias="nodeCount", description="Number of extracted nodes")
    edge_count: int = Field(..., alias="edgeCount", description="Number of extracted edges")
    direction: str = Field(..., description="Direction token used in the header line (TD, LR, BT, RL)")
    output: Optional[str] = Field(None, description="Absolute path of the written output file")

    class Config:
        populate_by_name = True

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialise with camelCase keys, omitting ``output`` when nothing was written."""
        return self.model_dump(by_alias=True, exclude_none=True)
