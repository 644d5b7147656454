"""Script block extraction for Vue single-file components.

The component is split with a tag scanner (the same approach the Vue and
Svelte section extractors use) and each script block is parsed with the
tree-sitter grammar matching its ``lang`` attribute. All block ranges are
reported as byte offsets into the UTF-8 encoded document so that node ranges
from tree-sitter can be spliced into the document directly.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from loguru import logger
from tree_sitter_language_pack import get_parser

from routemacro.core.exceptions import SFCParseError
from routemacro.core.models import ScriptBlock, SFCDescriptor, SourceDocument

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

# Map script lang attribute values to tree-sitter grammar names
SCRIPT_LANG_TO_GRAMMAR = {
    "js": "javascript",
    "javascript": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "typescript": "typescript",
    "tsx": "tsx",
}

DEFAULT_SCRIPT_LANG = "js"

_TAG_ATTRS = r"""((?:[^>"']|"[^"]*"|'[^']*')*)"""

# Top-level elements that matter: comments, script blocks and templates to skip
_TOP_LEVEL_PATTERN = re.compile(rf"<!--|<(script|template)\b{_TAG_ATTRS}>", re.IGNORECASE)
_TEMPLATE_TAG_PATTERN = re.compile(rf"<!--|<(/?)template\b{_TAG_ATTRS}>", re.IGNORECASE)
_SCRIPT_CLOSE_PATTERN = re.compile(r"</script\s*>", re.IGNORECASE)
_COMMENT_END = "-->"
_SETUP_ATTR_PATTERN = re.compile(r"(?:^|\s)setup(?=\s|=|/|$)")
_LANG_ATTR_PATTERN = re.compile(r"""(?:^|\s)lang\s*=\s*["']?([\w-]+)""")


def is_script_setup(attrs: str) -> bool:
    """Check whether script tag attributes mark a <script setup> block."""
    return bool(_SETUP_ATTR_PATTERN.search(attrs))


def get_script_lang(attrs: str) -> str:
    """Return the ``lang`` attribute of a script tag (``js`` when absent)."""
    match = _LANG_ATTR_PATTERN.search(attrs)
    return match.group(1).lower() if match else DEFAULT_SCRIPT_LANG


def _is_self_closing(attrs: str) -> bool:
    return attrs.rstrip().endswith("/")


def _skip_comment(content: str, pos: int) -> int:
    """Return the position after the comment whose body starts at ``pos``."""
    end = content.find(_COMMENT_END, pos)
    return len(content) if end == -1 else end + len(_COMMENT_END)


def _skip_template(content: str, pos: int) -> int:
    """Return the position after the ``</template>`` closing the element open at ``pos``.

    Nested ``<template>`` elements are balanced; an unclosed template runs to
    the end of the document.
    """
    depth = 1
    while True:
        match = _TEMPLATE_TAG_PATTERN.search(content, pos)
        if match is None:
            return len(content)
        if match.group(1) is None:
            pos = _skip_comment(content, match.end())
            continue
        pos = match.end()
        if match.group(1) == "/":
            depth -= 1
            if depth == 0:
                return pos
        elif not _is_self_closing(match.group(2)):
            depth += 1


def extract_script_sections(content: str) -> list[tuple[str, int, int]]:
    """Find top-level script blocks in component source.

    The document is scanned in order. HTML comments between blocks and the
    contents of ``<template>`` elements are skipped, and script contents are
    never searched for tags.

    Args:
        content: Full component source

    Returns:
        List of (attrs, content_start, content_end) tuples with character
        offsets of each block's content

    Raises:
        SFCParseError: If a script tag is never closed
    """
    sections: list[tuple[str, int, int]] = []
    pos = 0
    while True:
        match = _TOP_LEVEL_PATTERN.search(content, pos)
        if match is None:
            break

        tag = match.group(1)
        if tag is None:
            pos = _skip_comment(content, match.end())
            continue

        attrs = match.group(2)
        if tag.lower() == "template":
            pos = match.end() if _is_self_closing(attrs) else _skip_template(content, match.end())
            continue

        if _is_self_closing(attrs):
            # Self-closing tag has no content
            sections.append((attrs.rstrip()[:-1], match.end(), match.end()))
            pos = match.end()
            continue

        close_match = _SCRIPT_CLOSE_PATTERN.search(content, match.end())
        if close_match is None:
            line = content.count("\n", 0, match.start()) + 1
            raise SFCParseError(f"Element is missing end tag: <script> at line {line}")

        sections.append((attrs, match.end(), close_match.start()))
        pos = close_match.end()

    return sections


def parse_script(content: str, lang: str) -> TSNode:
    """Parse script content with the grammar matching ``lang``.

    Returns:
        The root ``program`` node of the syntax tree
    """
    grammar = SCRIPT_LANG_TO_GRAMMAR.get(lang, "javascript")
    parser = get_parser(grammar)
    tree = parser.parse(content.encode("utf-8"))
    return tree.root_node


def _first_error(node: TSNode) -> TSNode | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return node


def parse_sfc(text: str, document_id: str) -> SFCDescriptor:
    """Split a component document into its script blocks and parse them.

    Args:
        text: Full component source
        document_id: Logical id of the document, used in error messages

    Returns:
        SFCDescriptor with the plain and setup script blocks (either may be None)

    Raises:
        SFCParseError: If the document has duplicate or unterminated script
            blocks, or a script block contains syntax errors
    """
    document = SourceDocument(id=document_id, text=text)

    try:
        sections = extract_script_sections(text)
    except SFCParseError as e:
        raise SFCParseError(str(e), document_id) from e

    script: ScriptBlock | None = None
    script_setup: ScriptBlock | None = None

    for attrs, start, end in sections:
        setup = is_script_setup(attrs)
        if setup and script_setup is not None:
            raise SFCParseError(
                "Single file component can contain only one <script setup> element",
                document_id,
            )
        if not setup and script is not None:
            raise SFCParseError(
                "Single file component can contain only one <script> element",
                document_id,
            )

        lang = get_script_lang(attrs)
        content = text[start:end]
        root = parse_script(content, lang)

        error = _first_error(root)
        if error is not None:
            line = text.count("\n", 0, start) + error.start_point[0] + 1
            kind = "<script setup>" if setup else "<script>"
            raise SFCParseError(f"Syntax error in {kind} at line {line}", document_id)

        start_byte = len(text[:start].encode("utf-8"))
        block = ScriptBlock(
            attrs=attrs.strip(),
            lang=lang,
            setup=setup,
            content=content,
            start_byte=start_byte,
            end_byte=start_byte + len(content.encode("utf-8")),
            root=root,
        )
        if setup:
            script_setup = block
        else:
            script = block

    logger.debug(
        f"Parsed {document_id}: script={script is not None}, "
        f"script_setup={script_setup is not None}"
    )
    return SFCDescriptor(document=document, script=script, script_setup=script_setup)
