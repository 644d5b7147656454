"""Main argument parser for routemacro CLI."""

import argparse
from typing import Any

from routemacro import __version__


def create_main_parser() -> argparse.ArgumentParser:
    """Create the top-level argument parser with global options."""
    parser = argparse.ArgumentParser(
        prog="routemacro",
        description="Extract or strip definePage() route macros in Vue components",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"routemacro {__version__}",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Write logs to this file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for the log file",
    )
    parser.add_argument(
        "--macro-name",
        type=str,
        default=None,
        help="Callee name recognised as the route macro (default: definePage)",
    )
    return parser


def setup_subparsers(parser: argparse.ArgumentParser) -> Any:
    """Attach the command subparsers to the main parser."""
    from .extract_parser import add_extract_subparser
    from .transform_parser import add_transform_subparser

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    add_transform_subparser(subparsers)
    add_extract_subparser(subparsers)
    return subparsers
