"""Transform command argument parser for routemacro CLI."""

import argparse
from pathlib import Path
from typing import Any


def add_transform_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add transform command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured transform subparser
    """
    transform_parser = subparsers.add_parser(
        "transform",
        help="Isolate or strip the route macro of a component",
        description=(
            "Rewrite a Vue component: isolate mode exports only the macro "
            "argument, strip mode removes the macro call."
        ),
    )
    transform_parser.add_argument(
        "file",
        type=Path,
        help="Path to the .vue component",
    )
    transform_parser.add_argument(
        "--id",
        type=str,
        default=None,
        help="Document id used for mode detection and messages (default: file path)",
    )
    transform_parser.add_argument(
        "--mode",
        choices=["isolate", "strip"],
        default=None,
        help="Output mode (default: derived from the document id)",
    )
    transform_parser.add_argument(
        "--sourcemap",
        type=Path,
        default=None,
        help="Write the source map of the output to this file",
    )
    return transform_parser
