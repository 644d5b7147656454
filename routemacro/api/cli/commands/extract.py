"""Extract command module - reports literal route fields of a component."""

from __future__ import annotations

import argparse
import sys

from routemacro.core.config.transform_config import TransformConfig
from routemacro.core.exceptions import RouteMacroError
from routemacro.transform import extract_route_info

from ..utils.rich_output import RichOutputFormatter, json_dumps, write_stdout
from .common import read_document


def extract_command(args: argparse.Namespace, config: TransformConfig) -> None:
    """Execute the extract command.

    Args:
        args: Parsed command-line arguments
        config: Validated transform configuration
    """
    formatter = RichOutputFormatter(verbose=getattr(args, "verbose", False))
    document = read_document(args, formatter)

    try:
        info = extract_route_info(document, config=config)
    except RouteMacroError as e:
        formatter.error(str(e))
        sys.exit(1)

    if info is None:
        if args.json:
            write_stdout("null\n")
        else:
            formatter.info(f"No {config.macro_name}() call in {document.id}")
        return

    for warning in info.warnings:
        formatter.warning(warning)

    if args.json:
        write_stdout(json_dumps(info.as_dict()) + "\n")
    else:
        formatter.route_info(document.id, info.as_dict())
