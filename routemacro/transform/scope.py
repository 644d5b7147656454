"""Top-level binding collection and scope-leak validation.

Only one nesting level matters here: the question is whether the macro
argument references something that disappears once the rest of the setup
script is discarded. Names introduced inside nested blocks are never
collected.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from routemacro.core.exceptions import ScopeLeakError
from routemacro.core.models import BindingSet
from routemacro.parsers.node_utils import (
    FUNCTION_NODE_TYPES,
    function_parameters,
    get_node_text,
    named_children,
    pattern_defaults,
    pattern_names,
)

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

# Bodies whose declarations are block scoped; collection never enters them
BLOCK_BODY_TYPES: set[str] = {"statement_block", "class_body", "switch_body"}

NAMED_DECLARATION_TYPES: set[str] = {
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "enum_declaration",
    "internal_module",
    "module",
}

REFERENCE_NODE_TYPES: set[str] = {"identifier", "shorthand_property_identifier"}

# TypeScript type positions; types are erased so names there are not references
TYPE_NODE_TYPES: set[str] = {
    "type_annotation",
    "type_arguments",
    "type_parameters",
    "type_query",
    "type_predicate_annotation",
    "asserts_annotation",
    "omitting_type_annotation",
    "opting_type_annotation",
}

# Expressions followed by a type: ``x as T``, ``x satisfies T``
TYPED_EXPRESSION_TYPES: set[str] = {"as_expression", "satisfies_expression"}


def collect_top_level_bindings(statements: Iterable[TSNode]) -> BindingSet:
    """Collect the names bound by a sequence of top-level statements.

    Covers variable declarations (including destructuring), function and
    class declarations, TypeScript enums and namespaces, imports and
    exported declarations. ``let``/``const`` only count directly in the
    statement list; ``var`` counts anywhere outside nested blocks.

    Args:
        statements: Top-level statement nodes of a script block

    Returns:
        Frozen set of bound identifier names
    """
    names: set[str] = set()
    for statement in statements:
        _collect(statement, names, top_level=True)
    return frozenset(names)


def _collect(node: TSNode, names: set[str], top_level: bool) -> None:
    node_type = node.type

    if node_type in BLOCK_BODY_TYPES:
        return

    if node_type == "import_statement":
        names.update(_import_names(node))
        return

    if node_type == "lexical_declaration" or node_type == "variable_declaration":
        if node_type == "variable_declaration" or top_level:
            for declarator in named_children(node):
                if declarator.type == "variable_declarator":
                    names.update(pattern_names(declarator.child_by_field_name("name")))
        # Initializers may still hold ``var`` declarations in nested constructs
        for declarator in named_children(node):
            value = declarator.child_by_field_name("value")
            if value is not None:
                _collect(value, names, top_level=False)
        return

    if node_type in NAMED_DECLARATION_TYPES:
        name = node.child_by_field_name("name")
        if name is not None and name.type in ("identifier", "type_identifier"):
            names.add(get_node_text(name))
        # Bodies are blocks; nothing else at this level can bind
        return

    if node_type == "ambient_declaration":
        for child in named_children(node):
            _collect(child, names, top_level=top_level)
        return

    if node_type == "export_statement":
        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            _collect(declaration, names, top_level=top_level)
        return

    for child in named_children(node):
        _collect(child, names, top_level=False)


def _import_names(node: TSNode) -> list[str]:
    """Names bound by an import statement, type-only imports excluded."""
    if _is_type_only(node):
        return []

    names: list[str] = []
    for clause in named_children(node):
        if clause.type != "import_clause":
            continue
        for part in named_children(clause):
            if part.type == "identifier":
                names.append(get_node_text(part))
            elif part.type == "namespace_import":
                names.extend(
                    get_node_text(c) for c in named_children(part) if c.type == "identifier"
                )
            elif part.type == "named_imports":
                for specifier in named_children(part):
                    if specifier.type != "import_specifier" or _is_type_only(specifier):
                        continue
                    local = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
                    if local is not None and local.type == "identifier":
                        names.append(get_node_text(local))
    return names


def _is_type_only(node: TSNode) -> bool:
    # ``import type { X }`` and ``import { type X }``
    for child in node.children:
        if child.is_named:
            return False
        if child.type == "type":
            return True
    return False


def collect_import_bindings(statements: Iterable[TSNode]) -> dict[str, TSNode]:
    """Map each name bound by a top-level import to its import statement."""
    imports: dict[str, TSNode] = {}
    for statement in statements:
        if statement.type == "import_statement":
            for name in _import_names(statement):
                imports[name] = statement
    return imports


def iter_free_references(node: TSNode) -> Iterator[TSNode]:
    """Yield identifier references in ``node`` not bound inside ``node`` itself.

    Names rebound inside the expression (function parameters, named function
    expressions, catch parameters, loop heads and block declarations) are not
    free. Property keys, member properties and TypeScript type positions are
    not references.
    """
    yield from _walk_references(node, frozenset())


def check_scope_reference(
    node: TSNode,
    bindings: BindingSet,
    macro_name: str,
    document_id: str | None = None,
) -> None:
    """Fail if ``node`` references a name bound at the setup script's top level.

    Raises:
        ScopeLeakError: For the first leaking identifier in source order
    """
    if not bindings:
        return
    for reference in iter_free_references(node):
        name = get_node_text(reference)
        if name in bindings:
            raise ScopeLeakError(
                f"{macro_name}() in <script setup> cannot reference locally "
                f"declared variables ({name}) because it will be hoisted "
                f"outside of the setup() function.",
                identifier=name,
                document_id=document_id,
            )


def _walk_references(node: TSNode, shadowed: frozenset[str]) -> Iterator[TSNode]:
    node_type = node.type

    if node_type in REFERENCE_NODE_TYPES:
        if get_node_text(node) not in shadowed:
            yield node
        return

    if node_type in TYPE_NODE_TYPES:
        return

    if node_type in TYPED_EXPRESSION_TYPES:
        children = named_children(node)
        if children:
            yield from _walk_references(children[0], shadowed)
        return

    if node_type in FUNCTION_NODE_TYPES or node_type in ("class", "class_declaration"):
        local = set(shadowed)
        name = node.child_by_field_name("name")
        if name is not None and name.type in ("identifier", "type_identifier"):
            local.add(get_node_text(name))
        params = function_parameters(node)
        local.update(pattern_names(params))
        inner = frozenset(local)
        for default in pattern_defaults(params):
            yield from _walk_references(default, inner)
        for child in named_children(node):
            if child == params or (child == name and name.type != "computed_property_name"):
                continue
            yield from _walk_references(child, inner)
        return

    if node_type == "statement_block":
        inner = shadowed | collect_top_level_bindings(named_children(node))
        for child in named_children(node):
            yield from _walk_references(child, inner)
        return

    if node_type == "catch_clause":
        param = node.child_by_field_name("parameter")
        inner = shadowed | frozenset(pattern_names(param))
        for default in pattern_defaults(param):
            yield from _walk_references(default, inner)
        body = node.child_by_field_name("body")
        if body is not None:
            yield from _walk_references(body, inner)
        return

    if node_type in ("for_in_statement", "for_statement"):
        inner = shadowed | _loop_head_names(node)
        for child in named_children(node):
            yield from _walk_references(child, inner)
        return

    if node_type == "variable_declarator":
        # Declared names are bindings, only defaults and the initializer refer
        for default in pattern_defaults(node.child_by_field_name("name")):
            yield from _walk_references(default, shadowed)
        value = node.child_by_field_name("value")
        if value is not None:
            yield from _walk_references(value, shadowed)
        return

    for child in named_children(node):
        yield from _walk_references(child, shadowed)


def _loop_head_names(node: TSNode) -> frozenset[str]:
    if node.type == "for_in_statement":
        left = node.child_by_field_name("left")
        kind = node.child_by_field_name("kind")
        if kind is not None:
            return frozenset(pattern_names(left))
        return frozenset()
    initializer = node.child_by_field_name("initializer")
    if initializer is not None and initializer.type in ("lexical_declaration", "variable_declaration"):
        names: list[str] = []
        for declarator in named_children(initializer):
            if declarator.type == "variable_declarator":
                names.extend(pattern_names(declarator.child_by_field_name("name")))
        return frozenset(names)
    return frozenset()
