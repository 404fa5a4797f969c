"""Flow direction inference and direction override handling."""

from typing import Any, Mapping, Optional, Sequence

import structlog

from .exceptions import InvalidDirectionError
from .models import Direction, Edge, Node

logger = structlog.get_logger(__name__)

# Accepted spellings for a direction override
DIRECTION_ALIASES = {
    "TD": Direction.TOP_DOWN,
    "TB": Direction.TOP_DOWN,
    "LR": Direction.LEFT_RIGHT,
    "BT": Direction.BOTTOM_UP,
    "RL": Direction.RIGHT_LEFT,
}


def estimate_direction(nodes: Mapping[str, Node], edges: Sequence[Edge]) -> Direction:
    """Detect whether the diagram flows left-to-right or top-to-bottom.

    Each edge votes for the axis along which its endpoints' centres are
    further apart. Left-to-right needs a strict majority; everything else,
    including a diagram with no edges, is top-down.

    Args:
        nodes: Extracted nodes keyed by element ID
        edges: Extracted edges

    Returns:
        Direction.LEFT_RIGHT or Direction.TOP_DOWN
    """
    if not edges:
        return Direction.TOP_DOWN

    horizontal_votes = 0
    vertical_votes = 0

    for edge in edges:
        source = nodes.get(edge.source)
        target = nodes.get(edge.target)
        if source is None or target is None:
            continue

        source_x, source_y = source.center
        target_x, target_y = target.center
        dx = abs(target_x - source_x)
        dy = abs(target_y - source_y)

        if dx > dy:
            horizontal_votes += 1
        else:
            vertical_votes += 1

    direction = Direction.LEFT_RIGHT if horizontal_votes > vertical_votes else Direction.TOP_DOWN
    logger.debug("Estimated flow direction",
                 horizontal_votes=horizontal_votes,
                 vertical_votes=vertical_votes,
                 direction=direction.value)
    return direction


def normalize_direction(value: Any) -> Direction:
    """Turn a user-supplied direction into a Direction.

    Matching is case-insensitive and ``TB`` is an alias for ``TD``.

    Raises:
        InvalidDirectionError: If the value is not a known direction
    """
    if isinstance(value, Direction):
        return value
    if isinstance(value, str):
        direction = DIRECTION_ALIASES.get(value.strip().upper())
        if direction is not None:
            return direction
    raise InvalidDirectionError(
        "Direction must be TD, LR, BT, or RL",
        value=value
    )


def resolve_direction(override: Optional[Any], inferred: Any) -> Direction:
    """Pick the override when one is given, otherwise the inferred direction.

    Both may be a Direction or a direction token such as ``"LR"``.
    """
    if override is None or override == "":
        return normalize_direction(inferred)
    return normalize_direction(override)
