"""Core models, configuration and exceptions for routemacro."""
