"""Configuration models for routemacro."""

from .logging_config import FileLoggingConfig, LoggingConfig
from .transform_config import TransformConfig

__all__ = [
    "FileLoggingConfig",
    "LoggingConfig",
    "TransformConfig",
]
