"""
Diagnostics for the slang front end.

Every lexical and parse error is funnelled through a ``DiagnosticReporter``,
the diagnostic sink of the pipeline. The reporter keeps structured
``Diagnostic`` records, logs the classic one-line form on the ``slang``
logger and can render a Rust-like view with source context:

    [line 1] Error at the end: Expect ')' after expression.

    error[E0202]: Expect ')' after expression.
      --> example.slsf:1:7
       |
     1 | (1 + 2
       |       ^
       |
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from slang.utils.errors import ParseError, ScanError

logger = logging.getLogger("slang")


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Centralized catalog of error codes for slang diagnostics.

    All front-end errors are syntax errors and live in the E02xx range.
    """

    E0201 = "E0201"  # unexpected token
    E0202 = "E0202"  # unclosed delimiter
    E0204 = "E0204"  # invalid expression
    E0206 = "E0206"  # unterminated string
    E0207 = "E0207"  # invalid number
    E0208 = "E0208"  # unexpected character
    E0209 = "E0209"  # unterminated comment
    E0210 = "E0210"  # expression too deeply nested
    E0211 = "E0211"  # trailing input


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0201: "unexpected token",
    ErrorCode.E0202: "unclosed delimiter",
    ErrorCode.E0204: "invalid expression",
    ErrorCode.E0206: "unterminated string",
    ErrorCode.E0207: "invalid number",
    ErrorCode.E0208: "unexpected character",
    ErrorCode.E0209: "unterminated comment",
    ErrorCode.E0210: "expression too deeply nested",
    ErrorCode.E0211: "trailing input",
}


# =============================================================================
# Diagnostic Types
# =============================================================================


class DiagnosticLevel(Enum):
    """
    Severity level of a diagnostic message.

    Every scanner and parser problem is fatal to the tree, so errors are the
    only level the front end reports.
    """

    ERROR = "error"

    def color_code(self) -> str:
        """Get ANSI color code for this level."""
        colors = {
            DiagnosticLevel.ERROR: "\033[91m",  # Red
        }
        return colors.get(self, "")


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """
    A span of source code on a single line.

    Attributes:
        line: 1-indexed line number
        start_col: 1-indexed starting column
        end_col: 1-indexed ending column (exclusive)
        filename: Optional filename for display
    """

    line: int
    start_col: int
    end_col: int
    filename: str = "<input>"

    @classmethod
    def from_location(
        cls, line: int, col: int, length: int = 1, filename: str = "<input>"
    ) -> "SourceSpan":
        """Create a span from a single location with a given length."""
        return cls(line=line, start_col=col, end_col=col + max(1, length), filename=filename)

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.start_col}"

    @property
    def length(self) -> int:
        return max(1, self.end_col - self.start_col)


def split_source_lines(source: str) -> list[str]:
    """Split source into lines the way the scanner counts them (on "\\n" only)."""
    return [line.rstrip("\r") for line in source.split("\n")]


def format_error_line(line: int, where: str, message: str) -> str:
    """Format the one-line form ``[line N] Error<where>: <message>``."""
    return f"[line {line}] Error{where}: {message}"


@dataclass
class Diagnostic:
    """
    A single front-end error with enough context to display it.

    Attributes:
        code: Error code (e.g., "E0208")
        message: The main diagnostic message
        line: 1-indexed line the error is reported at
        where: Context suffix, e.g. `` at ')'`` or `` at the end``
        span: Optional source span for rich rendering and editors
        level: Severity level
        helps: Help messages shown below the source excerpt
    """

    code: str
    message: str
    line: int
    where: str = ""
    span: Optional[SourceSpan] = None
    level: DiagnosticLevel = DiagnosticLevel.ERROR
    helps: list[str] = field(default_factory=list)

    def to_simple_message(self) -> str:
        """Get the classic one-line form of this diagnostic."""
        return format_error_line(self.line, self.where, self.message)

    def render(self, source_code: Union[str, list[str]], use_color: bool = True) -> str:
        """
        Render this diagnostic with its source excerpt.

        Args:
            source_code: The source code for context, or its lines as
                returned by ``split_source_lines``
            use_color: Whether to use ANSI color codes

        Returns:
            A formatted multi-line string representation
        """
        lines: list[str] = []
        if isinstance(source_code, str):
            source_lines = split_source_lines(source_code)
        else:
            source_lines = source_code

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        blue = "\033[94m" if use_color else ""
        level_color = self.level.color_code() if use_color else ""

        if self.code in ERROR_DESCRIPTIONS:
            header = f"{level_color}{bold}{self.level.value}[{self.code}]{reset}: {bold}{self.message}{reset}"
        else:
            header = f"{level_color}{bold}{self.level.value}{reset}: {bold}{self.message}{reset}"
        lines.append(header)

        if self.span is not None:
            lines.append(f"  {blue}-->{reset} {self.span}")

            if 1 <= self.span.line <= len(source_lines):
                source_line = source_lines[self.span.line - 1]
                lines.append(f"   {blue}|{reset}")
                lines.append(f"{blue}{self.span.line:3} |{reset} {source_line}")
                padding = " " * (self.span.start_col - 1)
                underline = "^" * self.span.length
                lines.append(f"   {blue}|{reset} {padding}{level_color}{underline}{reset}")
                lines.append(f"   {blue}|{reset}")

        for help_msg in self.helps:
            green = "\033[92m" if use_color else ""
            lines.append(f"   {blue}={reset} {green}help:{reset} {help_msg}")

        return "\n".join(lines)


# =============================================================================
# Diagnostic Reporter
# =============================================================================


class DiagnosticReporter:
    """
    Collects, logs and renders diagnostics for a source text.

    The scanner and the parser report every error here as soon as it is
    found. Each diagnostic is logged on the ``slang`` logger in its one-line
    form and kept for later inspection.

    Usage:
        reporter = DiagnosticReporter(source, "example.slsf")
        tokens, had_error = scan_all(source, reporter=reporter)
        print(reporter.render_all(use_color=False))
    """

    def __init__(self, source: str = "", filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.diagnostics: list[Diagnostic] = []

    def report(
        self,
        line: int,
        where: str,
        message: str,
        code: str = ErrorCode.E0201,
        span: Optional[SourceSpan] = None,
    ) -> Diagnostic:
        """Record an error reported at ``line`` and log it."""
        diagnostic = Diagnostic(code=code, message=message, line=line, where=where, span=span)
        self.add_diagnostic(diagnostic)
        return diagnostic

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        logger.error(diagnostic.to_simple_message())

    def report_scan_error(self, error: ScanError) -> Diagnostic:
        """Record a lexical error. Scanner errors carry no ``where`` context."""
        span = None
        if error.location is not None:
            span = SourceSpan.from_location(
                error.location.line, error.location.column, 1, self.filename
            )
        return self.report(error.line, "", error.message, error.code or ErrorCode.E0208, span)

    def report_parse_error(self, error: ParseError) -> Diagnostic:
        """Record a parse error with the offending token as context."""
        token = error.token
        if error.at_end:
            where = " at the end"
        else:
            where = f" at '{token.lexeme}'"
        span = SourceSpan.from_location(
            token.line, token.column, len(token.lexeme), self.filename
        )
        diagnostic = Diagnostic(
            code=error.code or ErrorCode.E0201,
            message=error.message,
            line=token.line,
            where=where,
            span=span,
        )
        if error.code == ErrorCode.E0202:
            diagnostic.helps.append("add matching closing ')'")
        self.add_diagnostic(diagnostic)
        return diagnostic

    def has_errors(self) -> bool:
        """Check if any error diagnostics have been reported."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.diagnostics)

    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.level == DiagnosticLevel.ERROR)

    def messages(self) -> list[str]:
        """One-line forms of all diagnostics, in report order."""
        return [d.to_simple_message() for d in self.diagnostics]

    def render_all(self, use_color: bool = True) -> str:
        """Render all diagnostics as a single string."""
        source_lines = split_source_lines(self.source)
        return "\n\n".join(d.render(source_lines, use_color) for d in self.diagnostics)

    def discard(self, diagnostics: list[Diagnostic]) -> None:
        """Remove previously reported diagnostics, matched by identity."""
        dropped = {id(d) for d in diagnostics}
        self.diagnostics[:] = [d for d in self.diagnostics if id(d) not in dropped]

    def clear(self) -> None:
        self.diagnostics.clear()


__all__ = [
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "Diagnostic",
    "DiagnosticReporter",
    "format_error_line",
    "split_source_lines",
    "logger",
]
