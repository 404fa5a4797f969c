"""
Custom exceptions for the Excalidraw to Mermaid converter.

The conversion core is total over its input, so these are only raised at the
edges: reading a document, writing the output, and validating a direction.
"""
from typing import Optional, Dict, Any


class ExcalidrawMermaidError(Exception):
    """Base exception for all converter errors.

    Provides context preservation and descriptive error messages.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Initialize the exception with message and optional context.

        Args:
            message: Descriptive error message
            context: Optional dictionary containing error context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class JSONParseError(ExcalidrawMermaidError):
    """Raised when a document is not valid JSON.

    The converter never sees a document in this case, so the error surfaces
    at whichever boundary did the reading.
    """

    def __init__(self, message: str, json_content: Optional[str] = None,
                 line_number: Optional[int] = None, path: Optional[str] = None):
        """Initialize JSON parse error.

        Args:
            message: Descriptive error message
            json_content: The problematic JSON content (truncated if too long)
            line_number: Line number where parsing failed (if available)
            path: File the content was read from (if any)
        """
        context = {}
        if path is not None:
            context["path"] = path
        if json_content is not None:
            # Truncate long JSON content for readability
            truncated_content = json_content[:200] + "..." if len(json_content) > 200 else json_content
            context["json_content"] = truncated_content
        if line_number is not None:
            context["line_number"] = line_number

        super().__init__(message, context)


class DocumentReadError(ExcalidrawMermaidError):
    """Raised when an input document cannot be read from disk."""

    def __init__(self, message: str, path: Optional[str] = None):
        context = {}
        if path is not None:
            context["path"] = path
        super().__init__(message, context)


class OutputWriteError(ExcalidrawMermaidError):
    """Raised when the rendered Mermaid text cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        context = {}
        if path is not None:
            context["path"] = path
        super().__init__(message, context)


class InvalidDirectionError(ExcalidrawMermaidError, ValueError):
    """Raised when a direction override is not one of TD, LR, BT, RL (or TB)."""

    def __init__(self, message: str, value: Any = ...):
        """Initialize direction error.

        Args:
            message: Descriptive error message
            value: The rejected value (use ... as sentinel for not provided)
        """
        context = {}
        if value is not ...:  # Use ellipsis as sentinel value
            context["value"] = value
        super().__init__(message, context)
