"""
Diagnostic generation for the slang LSP.

This module runs the front end over a document and converts the
scanner and parser diagnostics into LSP diagnostic messages.
"""

from typing import Optional

from lsprotocol import types

from slang.compiler import FrontEndResult, parse_source
from slang.utils.diagnostics import Diagnostic as FrontEndDiagnostic
from slang.utils.diagnostics import DiagnosticLevel

SEVERITY_MAP = {
    DiagnosticLevel.ERROR: types.DiagnosticSeverity.Error,
}


class DiagnosticProvider:
    """
    Generates LSP diagnostics from slang source code.

    The whole front end runs once per call to ``get_diagnostics``; the
    pipeline result stays available in ``result`` afterwards.
    """

    def __init__(self, source: str, uri: str) -> None:
        """
        Initialize the diagnostic provider.

        Args:
            source: The slang source code to analyze
            uri: The document URI, used as the filename in diagnostics
        """
        self.source = source
        self.uri = uri
        self.result: Optional[FrontEndResult] = None
        self._diagnostics: list[types.Diagnostic] = []

    def get_diagnostics(self) -> list[types.Diagnostic]:
        """
        Get all diagnostics for the document.

        Returns:
            List of LSP diagnostic objects, in report order
        """
        self._diagnostics = []
        self.result = parse_source(self.source, self.uri)

        for diag in self.result.diagnostics:
            self._add_front_end_diagnostic(diag)

        return self._diagnostics

    def _add_front_end_diagnostic(self, diag: FrontEndDiagnostic) -> None:
        """
        Add a front-end diagnostic as an LSP diagnostic.

        Positions are 0-indexed in LSP; the range covers the offending lexeme.
        """
        severity = SEVERITY_MAP.get(diag.level, types.DiagnosticSeverity.Error)

        if diag.span is not None:
            line = max(0, diag.span.line - 1)
            character = max(0, diag.span.start_col - 1)
            end_character = character + diag.span.length
        else:
            line = max(0, diag.line - 1)
            character = 0
            end_character = 1

        message_parts = [diag.message]
        for help_msg in diag.helps:
            message_parts.append(f"help: {help_msg}")

        diagnostic = types.Diagnostic(
            range=types.Range(
                start=types.Position(line=line, character=character),
                end=types.Position(line=line, character=end_character),
            ),
            message="\n".join(message_parts),
            severity=severity,
            source="slang",
            code=diag.code,
        )

        self._diagnostics.append(diagnostic)


def get_diagnostics_for_document(source: str, uri: str) -> list[types.Diagnostic]:
    """
    Convenience function to get diagnostics for a document.

    Args:
        source: The slang source code
        uri: The document URI

    Returns:
        List of LSP diagnostics
    """
    provider = DiagnosticProvider(source, uri)
    return provider.get_diagnostics()
