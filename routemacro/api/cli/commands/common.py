"""Helpers shared by routemacro CLI commands."""

import argparse
import sys

from routemacro.core.models import SourceDocument

from ..utils.rich_output import RichOutputFormatter


def read_document(
    args: argparse.Namespace, formatter: RichOutputFormatter
) -> SourceDocument:
    """Read the component named on the command line, exiting on I/O errors."""
    path = args.file
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        formatter.error(f"Cannot read {path}: {e}")
        sys.exit(1)
    return SourceDocument(id=args.id or str(path), text=text)
