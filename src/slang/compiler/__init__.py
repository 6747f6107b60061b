"""
slang Compiler Package.

This package contains the front-end components:
- Scanner: Tokenizes source text, collecting every lexical error
- Parser: Produces an expression tree from tokens
- AST: Node definitions and the visitor base class
- AstPrinter: Parenthesized prefix rendering of trees

The helpers below run the whole pipeline (text -> tokens -> tree -> string)
with one diagnostic sink shared by every stage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from slang.compiler.ast_nodes import Binary, Expr, ExprVisitor, Grouping, Literal, Unary
from slang.compiler.ast_printer import AstPrinter, print_ast
from slang.compiler.parser import MAX_NESTING_DEPTH, Parser
from slang.compiler.scanner import Scanner, scan_all
from slang.compiler.tokens import KEYWORDS, LiteralValue, Token, TokenType, format_literal
from slang.utils.diagnostics import Diagnostic, DiagnosticReporter
from slang.utils.errors import ParseError, SlangError

logger = logging.getLogger("slang.compiler")


@dataclass
class FrontEndResult:
    """
    Everything one run of the front end produced.

    Attributes:
        source: The source text
        tokens: Scanner output, always terminated by EOF
        reporter: The diagnostic sink shared by scanner and parser
        expression: The parsed tree, None when scanning or parsing failed
        errors: Lexical errors in source order, then the parse error if any
    """

    source: str
    tokens: list[Token]
    reporter: DiagnosticReporter
    expression: Optional[Expr] = None
    errors: list[SlangError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.expression is not None and not self.errors

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.reporter.diagnostics

    @property
    def rendered(self) -> Optional[str]:
        """Parenthesized rendering of the tree, None without a tree."""
        if self.expression is None:
            return None
        return print_ast(self.expression)


def scan_source(source: str, filename: str = "<input>") -> FrontEndResult:
    """
    Tokenize source code without parsing it.

    Args:
        source: Source text
        filename: Name used in diagnostics

    Returns:
        A FrontEndResult carrying the tokens and any lexical errors
    """
    reporter = DiagnosticReporter(source, filename)
    scanner = Scanner(source, filename, reporter)
    tokens = scanner.scan_tokens()
    logger.debug(f"Scanned {len(tokens)} tokens from {filename}")
    return FrontEndResult(source, tokens, reporter, errors=list(scanner.errors))


def parse_source(
    source: str,
    filename: str = "<input>",
    max_depth: int = MAX_NESTING_DEPTH,
    allow_trailing: bool = False,
) -> FrontEndResult:
    """
    Scan and parse source code.

    A token stream with lexical errors is never parsed: the result then has
    no expression and lists the lexical errors.

    Args:
        source: Source text
        filename: Name used in diagnostics
        max_depth: Parser nesting limit
        allow_trailing: Accept tokens after the expression

    Returns:
        A FrontEndResult with the tree on success
    """
    result = scan_source(source, filename)
    if result.errors:
        logger.info(f"Not parsing {filename}: {len(result.errors)} lexical error(s)")
        return result

    parser = Parser(result.tokens, result.reporter, max_depth, allow_trailing)
    try:
        result.expression = parser.parse()
    except ParseError as e:
        result.errors.append(e)
    return result


def render_source(source: str, filename: str = "<input>") -> str:
    """
    Scan, parse and render source code in one call.

    Raises:
        SlangError: the first lexical or parse error
    """
    result = parse_source(source, filename)
    if not result.ok:
        raise result.errors[0]
    return result.rendered


__all__ = [
    # Pipeline
    "FrontEndResult",
    "scan_source",
    "parse_source",
    "render_source",
    # Components
    "Scanner",
    "scan_all",
    "Parser",
    "MAX_NESTING_DEPTH",
    "AstPrinter",
    "print_ast",
    # Tree
    "Expr",
    "ExprVisitor",
    "Binary",
    "Grouping",
    "Literal",
    "Unary",
    # Tokens
    "Token",
    "TokenType",
    "KEYWORDS",
    "LiteralValue",
    "format_literal",
]
