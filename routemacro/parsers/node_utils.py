"""Tree-sitter node helpers for JavaScript and TypeScript syntax trees.

These cover the small amount of node classification the transform needs:
matching macro calls, reading string literals and listing the names bound
by declaration patterns.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

# Function-like nodes that open a new scope for their parameters
FUNCTION_NODE_TYPES: set[str] = {
    "function",
    "function_expression",
    "function_declaration",
    "generator_function",
    "generator_function_declaration",
    "arrow_function",
    "method_definition",
}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_LINE_CONTINUATION = re.compile(r"^\\(\r\n|[\n\r\u2028\u2029])$")


def get_node_text(node: TSNode) -> str:
    """Return the source text of a node."""
    return node.text.decode("utf-8") if node.text is not None else ""


def named_children(node: TSNode) -> list[TSNode]:
    """Named children of a node without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def unwrap_expression_statement(node: TSNode) -> TSNode:
    """Return the expression of an expression statement, or the node itself."""
    if node.type == "expression_statement":
        children = named_children(node)
        if len(children) == 1:
            return children[0]
    return node


def is_call_of(node: TSNode | None, name: str) -> bool:
    """Check whether ``node`` is a call whose callee is the identifier ``name``.

    Optional calls (``name?.()``) and tagged templates do not count.
    """
    if node is None or node.type != "call_expression":
        return False
    if any(child.type == "optional_chain" for child in node.children):
        return False
    args = node.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        return False
    callee = node.child_by_field_name("function")
    return (
        callee is not None
        and callee.type == "identifier"
        and get_node_text(callee) == name
    )


def call_arguments(node: TSNode) -> list[TSNode]:
    """Return the argument expressions of a call node in source order."""
    args = node.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        # Tagged template calls have a template string instead of arguments
        return []
    return named_children(args)


def is_string_literal(node: TSNode | None) -> bool:
    return node is not None and node.type == "string"


def string_literal_value(node: TSNode) -> str:
    """Decode the value of a string literal node, escape sequences included."""
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "escape_sequence":
            parts.append(_decode_escape(get_node_text(child)))
        elif child.type == "string_fragment":
            parts.append(get_node_text(child))
    return "".join(parts)


def _decode_escape(text: str) -> str:
    if _LINE_CONTINUATION.match(text):
        return ""
    body = text[1:]
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.startswith("x") and len(body) == 3:
        return chr(int(body[1:], 16))
    if body.startswith("u{") and body.endswith("}"):
        return chr(int(body[2:-1], 16))
    if body.startswith("u") and len(body) == 5:
        return chr(int(body[1:], 16))
    if body and body[0] in "1234567" and all(c in "01234567" for c in body):
        # Legacy octal escape
        return chr(int(body, 8))
    return body


def pattern_names(node: TSNode | None) -> list[str]:
    """List the names bound by a declaration or parameter pattern.

    Handles plain identifiers, object and array destructuring, defaults,
    rest elements and TypeScript parameter wrappers. Default values are not
    searched for bindings.
    """
    if node is None:
        return []

    node_type = node.type
    if node_type in ("identifier", "shorthand_property_identifier_pattern"):
        return [get_node_text(node)]

    if node_type in ("object_pattern", "array_pattern", "formal_parameters"):
        names: list[str] = []
        for child in named_children(node):
            names.extend(pattern_names(child))
        return names

    if node_type == "pair_pattern":
        return pattern_names(node.child_by_field_name("value"))

    if node_type in ("assignment_pattern", "object_assignment_pattern"):
        return pattern_names(node.child_by_field_name("left"))

    if node_type == "rest_pattern":
        names = []
        for child in named_children(node):
            names.extend(pattern_names(child))
        return names

    if node_type in ("required_parameter", "optional_parameter"):
        return pattern_names(node.child_by_field_name("pattern"))

    return []


def pattern_defaults(node: TSNode | None) -> list[TSNode]:
    """Collect default-value expressions nested in a pattern."""
    if node is None:
        return []

    defaults: list[TSNode] = []
    node_type = node.type
    if node_type in ("assignment_pattern", "object_assignment_pattern"):
        right = node.child_by_field_name("right")
        if right is not None:
            defaults.append(right)
        defaults.extend(pattern_defaults(node.child_by_field_name("left")))
    elif node_type in ("required_parameter", "optional_parameter"):
        value = node.child_by_field_name("value")
        if value is not None:
            defaults.append(value)
        defaults.extend(pattern_defaults(node.child_by_field_name("pattern")))
    elif node_type == "pair_pattern":
        key = node.child_by_field_name("key")
        if key is not None and key.type == "computed_property_name":
            defaults.append(key)
        defaults.extend(pattern_defaults(node.child_by_field_name("value")))
    elif node_type in ("object_pattern", "array_pattern", "formal_parameters", "rest_pattern"):
        for child in named_children(node):
            defaults.extend(pattern_defaults(child))
    return defaults


def function_parameters(node: TSNode) -> TSNode | None:
    """Return the parameter list (or single parameter) of a function-like node."""
    params = node.child_by_field_name("parameters")
    if params is None:
        # Single unparenthesized arrow parameter: ``x => x``
        params = node.child_by_field_name("parameter")
    return params
