"""Utilities shared by routemacro CLI commands."""
