#!/usr/bin/env python3
"""
Command-line interface for the Excalidraw to Mermaid converter.

This module provides a simple CLI for converting Excalidraw JSON files
into Mermaid flowcharts from the command line.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from . import __version__
from .converter import convert_file
from .core.logging import setup_logging
from .direction import normalize_direction
from .exceptions import ExcalidrawMermaidError, InvalidDirectionError
from .models import ConversionOptions


class UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _direction_arg(value: str) -> str:
    try:
        return normalize_direction(value).value
    except InvalidDirectionError:
        raise argparse.ArgumentTypeError("--direction must be TD, LR, BT, or RL")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = UsageErrorParser(
        prog="excalidraw-to-mermaid",
        description="Convert Excalidraw diagrams to Mermaid flowchart syntax",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  excalidraw-to-mermaid diagram.excalidraw
  excalidraw-to-mermaid diagram.excalidraw -o output.md
  excalidraw-to-mermaid diagram.excalidraw --direction LR
  excalidraw-to-mermaid diagram.excalidraw --json
        """
    )

    parser.add_argument(
        "input_file",
        type=Path,
        help="Path to .excalidraw file"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Write output to file (default: stdout)"
    )

    parser.add_argument(
        "-d", "--direction",
        type=_direction_arg,
        help="Force direction: TD, LR, BT, RL (default: auto-detect)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON with metadata"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=__version__
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    input_path = args.input_file.resolve()
    if not input_path.is_file():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    options = ConversionOptions(direction=args.direction, output=args.output)

    try:
        result = convert_file(input_path, options)
    except ExcalidrawMermaidError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if args.verbose and e.context:
            print(f"Context: {e.context}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_json_dict(), indent=2, ensure_ascii=False))
    elif args.output:
        print(f"Converted {result.node_count} nodes, {result.edge_count} edges → {args.output}")
    else:
        sys.stdout.write(result.mermaid)

    return 0


if __name__ == "__main__":
    sys.exit(main())
