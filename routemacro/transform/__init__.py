"""Route macro transform: discovery, scope validation and splicing."""

from .define_page import apply_transform, extract_route_info, transform
from .locator import find_macro_calls, locate_macro
from .scope import check_scope_reference, collect_top_level_bindings

__all__ = [
    "apply_transform",
    "check_scope_reference",
    "collect_top_level_bindings",
    "extract_route_info",
    "find_macro_calls",
    "locate_macro",
    "transform",
]
