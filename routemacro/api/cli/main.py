"""routemacro command line entry point."""

import argparse
import sys

from loguru import logger
from pydantic import ValidationError

from routemacro.core.config.logging_config import LoggingConfig
from routemacro.core.config.transform_config import TransformConfig

from .parsers import create_main_parser, setup_subparsers


def setup_logging(verbose: bool = False, config: LoggingConfig | None = None) -> None:
    """Configure loguru sinks for the CLI.

    Args:
        verbose: Log debug output to stderr
        config: Logging configuration (console level and optional file sink)
    """
    config = config or LoggingConfig()
    logger.remove()

    console_level = "DEBUG" if verbose else config.console_level
    logger.add(
        sys.stderr,
        level=console_level,
        format="<level>{level: <8}</level> | {message}",
    )

    if config.file.enabled:
        logger.add(
            config.file.path,
            level=config.file.level,
            rotation=config.file.rotation,
            retention=config.file.retention,
            format=config.file.format,
        )


def build_transform_config(args: argparse.Namespace) -> TransformConfig:
    """Build the transform configuration from environment and CLI overrides."""
    overrides = {}
    if getattr(args, "macro_name", None):
        overrides["macro_name"] = args.macro_name
    return TransformConfig(**overrides)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the selected command."""
    parser = create_main_parser()
    setup_subparsers(parser)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        logging_config = LoggingConfig.from_cli_args(args)
        config = build_transform_config(args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(getattr(args, "verbose", False), logging_config)

    if args.command == "transform":
        from .commands.transform import transform_command

        transform_command(args, config)
    elif args.command == "extract":
        from .commands.extract import extract_command

        extract_command(args, config)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
