"""Command implementations for the routemacro CLI."""
