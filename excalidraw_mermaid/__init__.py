"""
Excalidraw to Mermaid - convert Excalidraw diagrams into Mermaid flowcharts.

This package extracts a graph (nodes, edges, groups and flow direction) from
an Excalidraw JSON document and renders it as ``graph TD``/``graph LR``
Mermaid syntax.

Example:
    >>> from excalidraw_mermaid import convert
    >>> result = convert(excalidraw_json)
    >>> print(result.mermaid)
"""

from typing import List

__version__: str = "0.1.0"

from .models import (
    Element, Node, Edge, Group, Graph, ShapeKind, EdgeStyle, Direction,
    ConversionOptions, ConversionResult
)
from .exceptions import (
    ExcalidrawMermaidError, JSONParseError, DocumentReadError, OutputWriteError,
    InvalidDirectionError
)
from .factory import ElementFactory
from .classifier import classify_shape, classify_edge_style
from .direction import estimate_direction, normalize_direction
from .parser import GraphExtractor, extract
from .node_id_manager import NodeIdManager, short_id, assign_ids
from .mermaid_generator import MermaidGenerator, render, quote_label, render_node, render_connector
from .converter import convert, convert_file, load_document
from .core.logging import setup_logging

__all__: List[str] = [
    # Entry points
    "convert",
    "convert_file",
    "load_document",
    "extract",
    "render",

    # Pipeline classes
    "ElementFactory",
    "GraphExtractor",
    "MermaidGenerator",
    "NodeIdManager",

    # Helpers
    "classify_shape",
    "classify_edge_style",
    "estimate_direction",
    "normalize_direction",
    "short_id",
    "assign_ids",
    "quote_label",
    "render_node",
    "render_connector",
    "setup_logging",

    # Data models
    "Element",
    "Node",
    "Edge",
    "Group",
    "Graph",
    "ShapeKind",
    "EdgeStyle",
    "Direction",
    "ConversionOptions",
    "ConversionResult",

    # Exceptions
    "ExcalidrawMermaidError",
    "JSONParseError",
    "DocumentReadError",
    "OutputWriteError",
    "InvalidDirectionError",
]
