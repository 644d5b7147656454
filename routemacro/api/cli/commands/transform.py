"""Transform command module - isolates or strips the route macro of a component."""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from routemacro.core.config.transform_config import TransformConfig
from routemacro.core.exceptions import RouteMacroError
from routemacro.core.models import SourceDocument, TransformMode
from routemacro.transform import transform

from ..utils.rich_output import RichOutputFormatter, write_stdout
from .common import read_document


def transform_command(args: argparse.Namespace, config: TransformConfig) -> None:
    """Execute the transform command.

    Writes the rewritten component to stdout, or the untouched input when the
    component has no macro call.

    Args:
        args: Parsed command-line arguments
        config: Validated transform configuration
    """
    formatter = RichOutputFormatter(verbose=getattr(args, "verbose", False))
    document: SourceDocument = read_document(args, formatter)
    mode = TransformMode(args.mode) if args.mode else None

    try:
        result = transform(document, mode=mode, config=config)
    except RouteMacroError as e:
        formatter.error(str(e))
        logger.debug(f"Transform failed for {document.id}: {type(e).__name__}")
        sys.exit(1)

    if result is None:
        formatter.verbose_info(f"No {config.macro_name}() call in {document.id}")
        write_stdout(document.text)
        return

    formatter.verbose_info(f"Applied {result.mode.value} transform to {document.id}")
    write_stdout(result.code)

    if args.sourcemap is not None:
        if result.map is None:
            formatter.warning("Source maps are disabled; nothing written")
            return
        args.sourcemap.write_text(result.map.to_json(), encoding="utf-8")
        formatter.verbose_info(f"Wrote source map to {args.sourcemap}")
