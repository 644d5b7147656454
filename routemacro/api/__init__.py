"""API layer for routemacro."""
