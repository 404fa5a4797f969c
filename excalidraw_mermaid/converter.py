"""
High-level conversion API: Excalidraw document in, Mermaid result out.
"""

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import structlog

from .core.config import settings
from .direction import normalize_direction, resolve_direction
from .exceptions import JSONParseError, DocumentReadError, OutputWriteError
from .mermaid_generator import render
from .models import ConversionOptions, ConversionResult
from .parser import extract

logger = structlog.get_logger(__name__)

OptionsLike = Optional[Union[ConversionOptions, Mapping[str, Any]]]


def _coerce_options(options: OptionsLike) -> ConversionOptions:
    if options is None:
        return ConversionOptions()
    if isinstance(options, ConversionOptions):
        return options
    return ConversionOptions(
        direction=options.get("direction"),
        output=options.get("output"),
    )


def convert(document: Any, options: OptionsLike = None) -> ConversionResult:
    """
    Convert a parsed Excalidraw document to a Mermaid flowchart.

    Args:
        document: Parsed Excalidraw JSON (usually a dict with an ``elements`` list)
        options: ConversionOptions or a mapping with ``direction`` and ``output``

    Returns:
        ConversionResult: Mermaid text plus node/edge counts and the direction used

    Raises:
        InvalidDirectionError: If the direction override is not recognised
        OutputWriteError: If the output file cannot be written

    Example:
        >>> result = convert(document, {"direction": "LR"})
        >>> print(result.mermaid)
    """
    options = _coerce_options(options)
    # Validate the override before doing any work
    override = normalize_direction(options.direction) if options.direction else None

    graph = extract(document)
    mermaid = render(graph, override)
    direction = resolve_direction(override, graph.direction)

    output_path = None
    if options.output:
        output_path = Path(options.output).resolve()
        write_output(mermaid, output_path)

    logger.info("Converted document",
                nodes=len(graph.nodes),
                edges=len(graph.edges),
                groups=len(graph.groups),
                direction=direction.value,
                output=str(output_path) if output_path else None)

    return ConversionResult(
        mermaid=mermaid,
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        direction=direction.value,
        output=str(output_path) if output_path else None,
    )


def load_document(path: Union[str, Path]) -> Any:
    """Read and parse an Excalidraw file.

    Raises:
        DocumentReadError: If the file is missing or unreadable
        JSONParseError: If the file is not valid JSON
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding=settings.encoding)
    except FileNotFoundError:
        raise DocumentReadError(f"File not found: {path}", path=str(path))
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(f"Failed to read '{path}': {e}", path=str(path)) from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise JSONParseError(
            f"Invalid JSON in '{path}': {e}",
            json_content=raw,
            line_number=getattr(e, 'lineno', None),
            path=str(path)
        ) from e


def convert_file(path: Union[str, Path], options: OptionsLike = None) -> ConversionResult:
    """Convert an Excalidraw file on disk; see ``convert`` for the options."""
    return convert(load_document(path), options)


def write_output(content: str, output_path: Union[str, Path]) -> None:
    """Write the Mermaid text exactly as rendered."""
    output_path = Path(output_path)
    try:
        # newline="" keeps "\n" line endings on every platform
        with open(output_path, 'w', encoding=settings.encoding, newline='') as f:
            f.write(content)
    except OSError as e:
        raise OutputWriteError(f"Error writing to '{output_path}': {e}", path=str(output_path)) from e
