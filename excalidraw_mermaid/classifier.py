"""Shape and connector classification for Excalidraw elements.

Both functions are total: every element maps to some kind, with plain
rectangles and plain arrows as the fallback.
"""

from .models import Element, ShapeKind, EdgeStyle

# Arrowhead value Excalidraw writes for "no arrowhead"
NO_ARROWHEAD = "none"

# Stroke width at which a connector is drawn thick
THICK_STROKE_WIDTH = 4

DASHED_STROKES = {"dashed", "dotted"}


def has_roundness(element: Element) -> bool:
    """Check whether an element carries a roundness marker.

    Excalidraw stores ``{"type": 3}`` for rounded corners and ``null`` for
    sharp ones; older exports may use a bare number.
    """
    roundness = element.roundness
    if isinstance(roundness, dict):
        return bool(roundness.get("type"))
    return bool(roundness)


def classify_shape(element: Element) -> ShapeKind:
    """Map a node element to the Mermaid shape it should render as.

    A rounded rectangle stays rounded even when dashed, so ``subroutine`` only
    applies to sharp-cornered dashed rectangles.
    """
    if element.type == "diamond":
        return ShapeKind.DIAMOND
    if element.type == "ellipse":
        return ShapeKind.CIRCLE
    if element.type == "rectangle":
        if has_roundness(element):
            return ShapeKind.ROUNDED
        if element.stroke_style == "dashed":
            return ShapeKind.SUBROUTINE
        return ShapeKind.RECTANGLE
    # Unknown kinds render as plain boxes
    return ShapeKind.RECTANGLE


def classify_edge_style(element: Element) -> EdgeStyle:
    """Map an arrow or line element to a connector style.

    Thickness takes priority over dashing; each is then split on whether the
    end has an arrowhead.
    """
    has_head = element.end_arrowhead is not None and element.end_arrowhead != NO_ARROWHEAD
    is_dashed = element.stroke_style in DASHED_STROKES
    is_thick = (element.stroke_width or 1) >= THICK_STROKE_WIDTH

    if is_thick:
        return EdgeStyle.THICK if has_head else EdgeStyle.THICK_LINE
    if is_dashed:
        return EdgeStyle.DOTTED if has_head else EdgeStyle.DOTTED_LINE
    return EdgeStyle.ARROW if has_head else EdgeStyle.LINE
