"""Node ID management for Mermaid diagrams.

Excalidraw element IDs are long random strings, so every node gets a short
letter code (A, B, ... Z, AA, AB, ...) in document order instead.
"""

import re
from typing import Dict, Iterable, Optional

# Longest subgraph ID kept after sanitizing a group ID
MAX_SUBGRAPH_ID_LENGTH = 20


def short_id(index: int) -> str:
    """Generate a short alphabetic ID from an index.

    This is bijective base-26 numbering: 0 -> A, 25 -> Z, 26 -> AA,
    27 -> AB, 52 -> BA.

    Raises:
        ValueError: If index is negative
    """
    if index < 0:
        raise ValueError("Index must be non-negative")

    result = ""
    n = index
    while True:
        result = chr(ord("A") + n % 26) + result
        n = n // 26 - 1
        if n < 0:
            return result


def sanitize_subgraph_id(group_id: str) -> str:
    """Sanitize a group or frame ID for use as a Mermaid subgraph ID."""
    return re.sub(r"[^a-zA-Z0-9_]", "_", group_id)[:MAX_SUBGRAPH_ID_LENGTH]


class NodeIdManager:
    """Maps element IDs to short Mermaid node IDs for a single render.

    A fresh manager is created for every render, so the same graph always
    gets the same IDs.

    Example:
        >>> manager = NodeIdManager(["long_id_1", "long_id_2"])
        >>> manager.get_node_id("long_id_2")
        'B'
    """

    def __init__(self, element_ids: Iterable[str] = ()):
        """Initialize the manager, assigning IDs in iteration order."""
        self._element_to_id: Dict[str, str] = {}
        for element_id in element_ids:
            self.register(element_id)

    def register(self, element_id: str) -> str:
        """Assign the next short ID to an element, or return its existing one."""
        if element_id in self._element_to_id:
            return self._element_to_id[element_id]
        mermaid_id = short_id(len(self._element_to_id))
        self._element_to_id[element_id] = mermaid_id
        return mermaid_id

    def get_node_id(self, element_id: str) -> Optional[str]:
        """Get the short ID for an element, or None if it was never assigned."""
        return self._element_to_id.get(element_id)

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of the element ID -> short ID mapping."""
        return dict(self._element_to_id)


def assign_ids(element_ids: Iterable[str]) -> Dict[str, str]:
    """Assign sequential short IDs to element IDs in iteration order."""
    return NodeIdManager(element_ids).as_dict()
