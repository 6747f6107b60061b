"""
Document analysis for the slang LSP.

A ``DocumentAnalyzer`` holds the front-end result for one open document
and answers position-based queries against it.
"""

from typing import Optional

from lsprotocol import types

from slang.compiler.ast_nodes import Expr
from slang.compiler.tokens import Token, TokenType
from slang.lsp.diagnostics import DiagnosticProvider


class DocumentAnalyzer:
    """
    Analyzes a slang document for LSP features.

    Usage:
        analyzer = DocumentAnalyzer("(1 + 2) * 3", "file:///a.slsf")
        analyzer.analyze()
        analyzer.get_hover(0, 0)
    """

    def __init__(self, source: str, uri: str) -> None:
        self.source = source
        self.uri = uri

        self.tokens: list[Token] = []
        self.expression: Optional[Expr] = None
        self.rendered: Optional[str] = None
        self.diagnostics: list[types.Diagnostic] = []

    def analyze(self) -> None:
        """Scan and parse the document, collecting diagnostics."""
        provider = DiagnosticProvider(self.source, self.uri)
        self.diagnostics = provider.get_diagnostics()

        result = provider.result
        self.tokens = result.tokens
        self.expression = result.expression if result.ok else None
        self.rendered = result.rendered if result.ok else None

    def token_at(self, line: int, character: int) -> Optional[Token]:
        """
        Find the token covering a position.

        Args:
            line: 0-indexed line number
            character: 0-indexed character position
        """
        for token in self.tokens:
            if token.type == TokenType.EOF:
                break
            start = token.column - 1
            if token.line - 1 == line and start <= character < start + len(token.lexeme):
                return token
        return None

    def get_hover(self, line: int, character: int) -> Optional[types.Hover]:
        """
        Get hover information at a position.

        Any position of a document that parses shows the parenthesized
        rendering of its expression. The range is the token under the
        cursor when there is one.

        Args:
            line: 0-indexed line number
            character: 0-indexed character position

        Returns:
            Hover information or None
        """
        if self.rendered is None:
            return None

        hover_range = None
        token = self.token_at(line, character)
        if token is not None:
            start = types.Position(line=token.line - 1, character=token.column - 1)
            end = types.Position(
                line=token.line - 1, character=token.column - 1 + len(token.lexeme)
            )
            hover_range = types.Range(start=start, end=end)

        return types.Hover(
            contents=types.MarkupContent(
                kind=types.MarkupKind.Markdown,
                value=f"```\n{self.rendered}\n```",
            ),
            range=hover_range,
        )
