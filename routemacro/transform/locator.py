"""Macro call discovery in a setup script body."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from routemacro.core.exceptions import DuplicateMacroError
from routemacro.core.models import MacroCall, ScriptBlock
from routemacro.parsers.node_utils import (
    call_arguments,
    is_call_of,
    unwrap_expression_statement,
)

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode


def find_macro_calls(
    statements: Iterable[TSNode], macro_name: str
) -> list[tuple[TSNode, TSNode]]:
    """Find top-level calls of ``macro_name`` in source order.

    A statement matches when it is a call of the macro or an expression
    statement wrapping one.

    Returns:
        List of (statement, call) node pairs
    """
    matches: list[tuple[TSNode, TSNode]] = []
    for statement in statements:
        expression = unwrap_expression_statement(statement)
        if is_call_of(expression, macro_name):
            matches.append((statement, expression))
    return matches


def locate_macro(
    block: ScriptBlock, macro_name: str, document_id: str | None = None
) -> MacroCall | None:
    """Return the single macro call of a setup script block.

    Returns:
        The located call, or None when the block does not call the macro

    Raises:
        DuplicateMacroError: If the macro is called more than once
    """
    matches = find_macro_calls(block.statements, macro_name)

    if not matches:
        return None
    if len(matches) > 1:
        raise DuplicateMacroError(f"duplicate {macro_name}() call", document_id)

    statement, call = matches[0]
    return MacroCall(
        block=block,
        statement=statement,
        call=call,
        arguments=tuple(call_arguments(call)),
    )
