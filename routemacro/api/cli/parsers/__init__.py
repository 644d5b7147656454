"""Argument parser utilities for routemacro CLI commands."""

from .extract_parser import add_extract_subparser
from .main_parser import create_main_parser, setup_subparsers
from .transform_parser import add_transform_subparser

__all__ = [
    "add_extract_subparser",
    "add_transform_subparser",
    "create_main_parser",
    "setup_subparsers",
]
