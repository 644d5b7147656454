"""Rich-based output formatting utilities for routemacro CLI commands.

Status messages go to stderr so that transformed code written to stdout can
be piped into other tools.
"""

import json
import os
import sys
from typing import Any

import rich.box
from rich.console import Console
from rich.markup import escape
from rich.table import Table


# Constants for fallback message prefixes
class MessagePrefixes:
    """Constants for consistent message prefixes in fallback mode."""

    INFO = "[INFO]"
    WARN = "[WARN]"
    ERROR = "[ERROR]"
    DEBUG = "[DEBUG]"


class RichOutputFormatter:
    """Terminal output formatter using Rich library."""

    def __init__(self, verbose: bool = False):
        """Initialize Rich output formatter.

        Args:
            verbose: Whether to enable verbose output
        """
        self.verbose = verbose
        self._terminal_compatible = self._check_terminal_compatibility()
        self.console = Console(stderr=True) if self._terminal_compatible else None

    def _check_terminal_compatibility(self) -> bool:
        """Check if stderr supports Rich formatting."""
        if os.environ.get("ROUTEMACRO_NO_RICH"):
            return False

        try:
            if not sys.stderr.isatty():
                return False
            term = os.environ.get("TERM", "")
            if term in ["dumb", "unknown"]:
                return False
            return True
        except Exception:
            return False

    def _safe_print(self, message: str, plain: str, fallback_prefix: str = "") -> None:
        """Print with Rich, or plain text on stderr when Rich is unavailable."""
        if self._terminal_compatible and self.console is not None:
            try:
                self.console.print(message)
                return
            except Exception:
                # Rich failed, fall through to plain print
                pass

        if fallback_prefix:
            print(f"{fallback_prefix} {plain}", file=sys.stderr)
        else:
            print(plain, file=sys.stderr)

    def info(self, message: str) -> None:
        """Print an info message."""
        self._safe_print(f"[blue][INFO][/blue] {escape(message)}", message, MessagePrefixes.INFO)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._safe_print(
            f"[yellow][WARN][/yellow] {escape(message)}", message, MessagePrefixes.WARN
        )

    def error(self, message: str) -> None:
        """Print an error message."""
        self._safe_print(
            f"[red][ERROR][/red] {escape(message)}", message, MessagePrefixes.ERROR
        )

    def verbose_info(self, message: str) -> None:
        """Print a verbose info message if verbose mode is enabled."""
        if self.verbose:
            self._safe_print(
                f"[cyan][DEBUG][/cyan] {escape(message)}", message, MessagePrefixes.DEBUG
            )

    def route_info(self, title: str, fields: dict[str, Any]) -> None:
        """Print extracted route fields to stdout as a key/value table."""
        rows = [
            (key, ", ".join(value) if isinstance(value, list) else str(value))
            for key, value in fields.items()
        ]
        if self._terminal_compatible:
            table = Table(title=title, show_header=False, box=rich.box.ROUNDED)
            table.add_column("Field", style="cyan", no_wrap=True)
            table.add_column("Value", style="white")
            for key, value in rows:
                table.add_row(key, escape(value))
            if not rows:
                table.add_row("(none)", "")
            Console().print(table)
        else:
            print(title)
            for key, value in rows:
                print(f"  {key}: {value}")


def write_stdout(text: str) -> None:
    """Write raw text to stdout without any markup processing."""
    sys.stdout.write(text)
    sys.stdout.flush()


def json_dumps(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)
