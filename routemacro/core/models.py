"""Data models shared by the parser and the transform.

Everything here is derived fresh for each transform call and is never
mutated after construction.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

# Names bound at the top level of a script block
BindingSet = frozenset[str]


@dataclass(frozen=True)
class SourceDocument:
    """A component document identified by a path-like id."""

    id: str
    text: str


@dataclass(frozen=True)
class ScriptBlock:
    """A <script> or <script setup> block of a component document.

    ``start_byte``/``end_byte`` delimit the block content in document byte
    coordinates. Node ranges in ``root`` are relative to the block content,
    so ``start_byte`` must be added before splicing the document.
    """

    attrs: str
    lang: str
    setup: bool
    content: str
    start_byte: int
    end_byte: int
    root: TSNode = field(repr=False, compare=False)

    @property
    def statements(self) -> list[TSNode]:
        """Top-level statements of the block, comments excluded."""
        return [
            child for child in self.root.named_children if child.type != "comment"
        ]


@dataclass(frozen=True)
class SFCDescriptor:
    """Script blocks found in a component document."""

    document: SourceDocument
    script: ScriptBlock | None = None
    script_setup: ScriptBlock | None = None


@dataclass(frozen=True)
class MacroCall:
    """A located macro call inside a setup script block.

    ``statement`` is the expression statement wrapping ``call`` (or the call
    itself when it is not wrapped). ``argument`` is the sole call argument
    with parentheses unwrapped, or None when the call has no argument.
    """

    block: ScriptBlock
    statement: TSNode = field(repr=False)
    call: TSNode = field(repr=False)
    arguments: tuple[TSNode, ...] = field(repr=False)

    @property
    def argument(self) -> TSNode | None:
        if not self.arguments:
            return None
        node = self.arguments[0]
        while node.type == "parenthesized_expression":
            inner = [c for c in node.named_children if c.type != "comment"]
            if len(inner) != 1:
                break
            node = inner[0]
        return node

    @property
    def start_byte(self) -> int:
        """Absolute start of the call statement in the document."""
        return self.block.start_byte + self.statement.start_byte

    @property
    def end_byte(self) -> int:
        """Absolute end of the call, including an explicit trailing semicolon."""
        end = self.call.end_byte
        if self.statement.type == "expression_statement" and self.statement.children:
            last = self.statement.children[-1]
            if last.type == ";":
                end = last.end_byte
        return self.block.start_byte + end


@dataclass(frozen=True)
class RouteInfo:
    """Literal route fields read from the macro argument.

    Fields that are absent or not literal stay ``None``. ``warnings`` holds
    the literal-shape warnings raised while reading the argument.
    """

    name: str | None = None
    path: str | None = None
    alias: tuple[str, ...] | None = None
    warnings: tuple[str, ...] = field(default=(), compare=False)

    def as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.name is not None:
            result["name"] = self.name
        if self.path is not None:
            result["path"] = self.path
        if self.alias is not None:
            result["alias"] = list(self.alias)
        return result


class TransformMode(Enum):
    """Output flavour of the transform."""

    ISOLATE = "isolate"
    STRIP = "strip"

    @classmethod
    def from_id(cls, document_id: str, marker: str) -> TransformMode:
        """Derive the mode from the build pipeline's document id.

        Ids requesting the page info carry the marker (for example
        ``/src/pages/users.vue?definePage&vue``).
        """
        return cls.ISOLATE if marker in document_id else cls.STRIP


@dataclass(frozen=True)
class SourceMap:
    """Version 3 source map of a transformed document."""

    mappings: str
    sources: tuple[str, ...]
    sources_content: tuple[str | None, ...] = ()
    names: tuple[str, ...] = ()
    file: str | None = None
    version: int = 3

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"version": self.version}
        if self.file is not None:
            data["file"] = self.file
        data["sources"] = list(self.sources)
        if self.sources_content:
            data["sourcesContent"] = list(self.sources_content)
        data["names"] = list(self.names)
        data["mappings"] = self.mappings
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.to_json().encode("utf-8")).decode("ascii")
        return f"data:application/json;charset=utf-8;base64,{encoded}"


@dataclass(frozen=True)
class TransformResult:
    """Rewritten document text and its optional source map."""

    code: str
    map: SourceMap | None = None
    mode: TransformMode = TransformMode.STRIP
