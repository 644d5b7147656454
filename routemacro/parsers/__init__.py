"""Component and script parsing on top of tree-sitter."""

from .sfc_parser import parse_sfc

__all__ = ["parse_sfc"]
