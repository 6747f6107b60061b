"""
slang Language Server.

Publishes scanner and parser diagnostics for open documents and shows the
parenthesized rendering of a document's expression on hover.
"""

from slang.lsp.analyzer import DocumentAnalyzer
from slang.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document

__all__ = ["DocumentAnalyzer", "DiagnosticProvider", "get_diagnostics_for_document"]
