"""Exceptions raised by the route macro transform.

All errors carry the id of the document being processed so that a build
pipeline running over many files can report which one failed. Warnings
(non-literal route fields) are not exceptions; they are logged and attached
to the extracted route info instead.
"""


class RouteMacroError(Exception):
    """Base exception for route macro processing errors."""

    def __init__(self, message: str, document_id: str | None = None):
        self.document_id = document_id
        if document_id:
            message = f"[{document_id}]: {message}"
        super().__init__(message)


class SFCParseError(RouteMacroError):
    """Raised when a component document cannot be split or parsed.

    This occurs when:
    - A <script> block is never closed
    - The document declares more than one <script> or <script setup> block
    - The setup script contains syntax errors
    """

    pass


class DuplicateMacroError(RouteMacroError):
    """Raised when a setup script calls the route macro more than once."""

    pass


class ScopeLeakError(RouteMacroError):
    """Raised when the macro argument references a setup-local binding.

    Isolate mode discards the rest of the setup script, so such a reference
    would be unresolved in the generated module.
    """

    def __init__(self, message: str, identifier: str, document_id: str | None = None):
        self.identifier = identifier
        super().__init__(message, document_id)


class MacroShapeError(RouteMacroError):
    """Raised when the macro argument is missing or is not an object literal."""

    pass
