"""
Element factory for creating Excalidraw elements from JSON data.
"""

from typing import Dict, Any, List, Optional, Tuple

import structlog

from .models import Element

logger = structlog.get_logger(__name__)


class ElementFactory:
    """
    Factory class for creating Excalidraw elements from JSON data.

    The factory reads only the fields the converter uses and never rejects an
    element: missing, null or wrongly-typed values fall back to defaults
    (zero geometry, ``solid`` stroke, width 1, empty text, no bindings).

    Example:
        >>> factory = ElementFactory()
        >>> element = factory.create_element({
        ...     "id": "rect1",
        ...     "type": "rectangle",
        ...     "x": 100, "y": 200,
        ...     "width": 150, "height": 100
        ... })
        >>> element.type
        'rectangle'
    """

    def create_elements(self, elements_data: Any) -> List[Element]:
        """Create elements from a document's ``elements`` value.

        Anything other than a list yields no elements. Entries that are not
        JSON objects are skipped.
        """
        if not isinstance(elements_data, list):
            if elements_data is not None:
                logger.debug("Ignoring non-list elements value",
                             value_type=type(elements_data).__name__)
            return []

        elements = []
        for index, element_data in enumerate(elements_data):
            if not isinstance(element_data, dict):
                logger.debug("Skipping non-object element", index=index,
                             value_type=type(element_data).__name__)
                continue
            elements.append(self.create_element(element_data))
        return elements

    def create_element(self, data: Dict[str, Any]) -> Element:
        """Create an element instance from one JSON object.

        Args:
            data: Element data dictionary as exported by Excalidraw

        Returns:
            Element: Immutable element with defaults filled in
        """
        element_type = self._extract_field(data, 'type', str, default='')

        return Element(
            id=self._extract_id(data.get('id')),
            type=element_type,
            x=self._extract_field(data, 'x', (int, float), default=0.0),
            y=self._extract_field(data, 'y', (int, float), default=0.0),
            width=self._extract_field(data, 'width', (int, float), default=0.0),
            height=self._extract_field(data, 'height', (int, float), default=0.0),
            stroke_style=self._extract_field(data, 'strokeStyle', str, default='solid'),
            stroke_width=self._extract_field(data, 'strokeWidth', (int, float), default=1),
            stroke_color=self._extract_field(data, 'strokeColor', str, default=None),
            background_color=self._extract_field(data, 'backgroundColor', str, default=None),
            roundness=data.get('roundness'),
            group_ids=self._extract_group_ids(data.get('groupIds')),
            is_deleted=bool(data.get('isDeleted', False)),
            text=self._extract_field(data, 'text', str, default=''),
            original_text=self._extract_field(data, 'originalText', str, default=''),
            container_id=self._extract_reference(data.get('containerId')),
            start_binding=self._extract_binding(data.get('startBinding')),
            end_binding=self._extract_binding(data.get('endBinding')),
            end_arrowhead=self._extract_field(data, 'endArrowhead', str, default=None),
            name=self._extract_field(data, 'name', str, default=''),
        )

    def _extract_field(self, data: Dict[str, Any], field_name: str,
                       expected_type, default: Any = None) -> Any:
        """Extract a field, returning the default when absent or mistyped.

        Booleans are rejected for numeric fields since ``bool`` is an ``int``.
        """
        value = data.get(field_name)
        if value is None or isinstance(value, bool):
            return default
        if not isinstance(value, expected_type):
            return default
        return value

    def _extract_id(self, value: Any) -> str:
        if value is None:
            return ''
        return str(value)

    def _extract_reference(self, value: Any) -> Optional[str]:
        """Normalise an element reference; empty references become None."""
        if value is None or value == '':
            return None
        return str(value)

    def _extract_binding(self, binding: Any) -> Optional[str]:
        """Pull the bound element ID out of a ``startBinding``/``endBinding``."""
        if not isinstance(binding, dict):
            return None
        return self._extract_reference(binding.get('elementId'))

    def _extract_group_ids(self, group_ids: Any) -> Tuple[str, ...]:
        if not isinstance(group_ids, list):
            return ()
        return tuple(str(gid) for gid in group_ids if gid is not None and gid != '')
