"""Extract command argument parser for routemacro CLI."""

import argparse
from pathlib import Path
from typing import Any


def add_extract_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add extract command subparser to the main parser."""
    extract_parser = subparsers.add_parser(
        "extract",
        help="Show the literal route name, path and alias of a component",
    )
    extract_parser.add_argument(
        "file",
        type=Path,
        help="Path to the .vue component",
    )
    extract_parser.add_argument(
        "--id",
        type=str,
        default=None,
        help="Document id used in messages (default: file path)",
    )
    extract_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    return extract_parser
