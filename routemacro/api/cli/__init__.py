"""Command line interface for routemacro."""
