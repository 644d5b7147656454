"""The ``definePage()`` route macro transform.

A component's ``<script setup>`` may call the route macro once with an
object describing its route. The build runs each component twice:

- isolate mode keeps only the macro argument, exported as a standalone
  module for the route table generator
- strip mode erases the macro call so it has no runtime cost in the
  component

``extract_route_info`` reads the literal ``name``/``path``/``alias`` fields of
the argument without rewriting anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from routemacro.core.config.transform_config import TransformConfig
from routemacro.core.exceptions import MacroShapeError
from routemacro.core.models import (
    MacroCall,
    RouteInfo,
    SFCDescriptor,
    SourceDocument,
    TransformMode,
    TransformResult,
)
from routemacro.parsers.node_utils import (
    get_node_text,
    is_string_literal,
    named_children,
    string_literal_value,
)
from routemacro.parsers.sfc_parser import parse_sfc

from .edit_list import EditList
from .locator import locate_macro
from .scope import (
    check_scope_reference,
    collect_import_bindings,
    collect_top_level_bindings,
    iter_free_references,
)

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

ROUTE_INFO_FIELDS = ("name", "path", "alias")


def _locate(
    document: SourceDocument, config: TransformConfig
) -> tuple[SFCDescriptor, MacroCall] | None:
    """Parse the document and locate its macro call, if any."""
    # Skip parsing entirely when the macro name never appears
    if config.macro_name not in document.text:
        return None

    sfc = parse_sfc(document.text, document.id)
    if sfc.script_setup is None:
        return None

    call = locate_macro(sfc.script_setup, config.macro_name, document.id)
    if call is None:
        return None
    return sfc, call


def transform(
    document: SourceDocument,
    mode: TransformMode | None = None,
    config: TransformConfig | None = None,
) -> TransformResult | None:
    """Rewrite a component document for the requested compilation target.

    Args:
        document: Component document to transform
        mode: Output flavour; derived from the document id when omitted
        config: Transform settings (defaults apply when omitted)

    Returns:
        The rewritten text and source map, or None when the document has no
        setup script or no macro call and should be used unchanged

    Raises:
        SFCParseError: If the document cannot be parsed
        DuplicateMacroError: If the setup script calls the macro more than once
        ScopeLeakError: If, in isolate mode, the argument references a
            binding of the setup script
        MacroShapeError: If, in isolate mode, the call does not have exactly
            one argument
    """
    config = config or TransformConfig()

    located = _locate(document, config)
    if located is None:
        return None
    sfc, call = located

    if mode is None:
        mode = TransformMode.from_id(document.id, config.effective_isolate_marker)
    logger.debug(f"Transforming {document.id} in {mode.value} mode")

    edits = EditList(document.text)

    if mode is TransformMode.ISOLATE:
        argument = _single_argument(call, config, document.id)

        # Imports are hoisted out of setup(), so only other bindings can leak
        setup_imports = collect_import_bindings(call.block.statements)
        bindings = collect_top_level_bindings(call.block.statements) - frozenset(setup_imports)
        check_scope_reference(argument, bindings, config.macro_name, document.id)

        offset = call.block.start_byte
        start, end = offset + argument.start_byte, offset + argument.end_byte
        kept = sorted(_referenced_imports(sfc, argument) | {(start, end)})

        # Remove everything except the route record and the imports it uses
        pos = 0
        for kept_start, kept_end in kept:
            edits.remove(pos, kept_start)
            pos = kept_end
        edits.remove(pos, len(edits))
        for _, kept_end in kept[:-1]:
            edits.insert(kept_end, "\n")
        edits.insert(start, config.export_prefix)
    else:
        edits.remove(call.start_byte, call.end_byte)

    return _build_result(edits, document, mode, config)


def apply_transform(
    document: SourceDocument,
    mode: TransformMode | None = None,
    config: TransformConfig | None = None,
) -> str:
    """Return the transformed text, or the untouched text when nothing applies."""
    result = transform(document, mode, config)
    return document.text if result is None else result.code


def _single_argument(call: MacroCall, config: TransformConfig, document_id: str) -> TSNode:
    argument = call.argument
    if len(call.arguments) != 1 or argument is None or argument.type == "spread_element":
        raise MacroShapeError(
            f"{config.macro_name}() expects exactly one argument", document_id
        )
    return argument


def _referenced_imports(sfc: SFCDescriptor, argument: TSNode) -> set[tuple[int, int]]:
    """Absolute ranges of the import statements whose bindings ``argument`` uses."""
    imports: dict[str, tuple[int, int]] = {}
    for block in (sfc.script, sfc.script_setup):
        if block is None:
            continue
        for name, statement in collect_import_bindings(block.statements).items():
            imports[name] = (
                block.start_byte + statement.start_byte,
                block.start_byte + statement.end_byte,
            )

    return {
        imports[get_node_text(reference)]
        for reference in iter_free_references(argument)
        if get_node_text(reference) in imports
    }


def _build_result(
    edits: EditList,
    document: SourceDocument,
    mode: TransformMode,
    config: TransformConfig,
) -> TransformResult:
    source_map = None
    if config.sourcemap and edits.has_changed():
        source_map = edits.generate_map(
            source=document.id, include_content=True, hires=config.sourcemap_hires
        )
    return TransformResult(code=edits.to_string(), map=source_map, mode=mode)


def extract_route_info(
    document: SourceDocument, config: TransformConfig | None = None
) -> RouteInfo | None:
    """Read the literal route fields of a document's macro argument.

    Only direct properties with plain identifier keys are considered. A
    ``name`` or ``path`` that is not a string literal, or an ``alias`` that is
    neither a string literal nor an array, is skipped with a warning.

    Returns:
        RouteInfo with the fields found, or None when there is no macro call

    Raises:
        SFCParseError: If the document cannot be parsed
        DuplicateMacroError: If the setup script calls the macro more than once
        MacroShapeError: If the macro argument is not an object literal
    """
    config = config or TransformConfig()

    located = _locate(document, config)
    if located is None:
        return None
    _, call = located

    record = call.argument
    if len(call.arguments) != 1 or record is None or record.type != "object":
        raise MacroShapeError(
            f"{config.macro_name}() expects an object expression as its only argument",
            document.id,
        )

    fields: dict[str, object] = {}
    warnings: list[str] = []

    def warn(message: str) -> None:
        message = f"{message} Found in \"{document.id}\"."
        logger.warning(message)
        warnings.append(message)

    for key, value in _object_properties(record):
        if key == "name" or key == "path":
            if is_string_literal(value):
                fields[key] = string_literal_value(value)
            else:
                warn(f"route {key} must be a string literal.")
        elif key == "alias":
            alias = _extract_alias(value)
            if alias is None:
                warn("route alias must be a string literal or an array of string literals.")
            else:
                fields["alias"] = alias

    return RouteInfo(
        name=fields.get("name"),  # type: ignore[arg-type]
        path=fields.get("path"),  # type: ignore[arg-type]
        alias=fields.get("alias"),  # type: ignore[arg-type]
        warnings=tuple(warnings),
    )


def _object_properties(node: TSNode) -> list[tuple[str, TSNode]]:
    """(key, value) pairs of an object literal's route fields in source order.

    Shorthand properties are reported with the identifier as their value.
    """
    properties: list[tuple[str, TSNode]] = []
    for child in named_children(node):
        if child.type == "pair":
            key = child.child_by_field_name("key")
            value = child.child_by_field_name("value")
            if key is None or value is None or key.type != "property_identifier":
                continue
            name = get_node_text(key)
        elif child.type == "shorthand_property_identifier":
            name, value = get_node_text(child), child
        else:
            continue
        if name in ROUTE_INFO_FIELDS:
            properties.append((name, value))
    return properties


def _extract_alias(value: TSNode) -> tuple[str, ...] | None:
    if is_string_literal(value):
        return (string_literal_value(value),)
    if value.type == "array":
        # Non-string elements are dropped
        return tuple(
            string_literal_value(element)
            for element in named_children(value)
            if is_string_literal(element)
        )
    return None
