"""routemacro: compile-time handling of the definePage() route macro in Vue SFCs."""

from routemacro.core.config.transform_config import TransformConfig
from routemacro.core.exceptions import (
    DuplicateMacroError,
    MacroShapeError,
    RouteMacroError,
    ScopeLeakError,
    SFCParseError,
)
from routemacro.core.models import (
    RouteInfo,
    SourceDocument,
    SourceMap,
    TransformMode,
    TransformResult,
)
from routemacro.transform import apply_transform, extract_route_info, transform

__version__ = "0.1.0"

__all__ = [
    "DuplicateMacroError",
    "MacroShapeError",
    "RouteInfo",
    "RouteMacroError",
    "ScopeLeakError",
    "SFCParseError",
    "SourceDocument",
    "SourceMap",
    "TransformConfig",
    "TransformMode",
    "TransformResult",
    "apply_transform",
    "extract_route_info",
    "transform",
]
