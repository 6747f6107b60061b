"""
Error types and source location tracking for the slang front end.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from slang.compiler.tokens import Token


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
        offset: 0-indexed character offset from start of source
        filename: Optional filename for error reporting
    """

    line: int
    column: int = 1
    offset: int = 0
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


class SlangError(Exception):
    """Base exception for all slang front-end errors."""

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> None:
        self.message = message
        self.location = location
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location is None:
            return self.message

        text = f"[{self.location}] {self.message}"
        if self.source_line:
            # Caret under the offending column
            padding = " " * (4 + self.location.column - 1)
            text += f"\n    {self.source_line}\n{padding}^"
        return text

    @property
    def line(self) -> int:
        """Line number of the error, 0 when unknown."""
        return self.location.line if self.location else 0


class ScanError(SlangError):
    """Raised when the scanner encounters an invalid character or literal."""

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        code: str = "",
    ) -> None:
        self.code = code
        super().__init__(message, location, source_line)


class ParseError(SlangError):
    """
    Raised when the parser encounters a syntax error.

    Attributes:
        token: The token at which parsing failed
        code: Error code from the diagnostics catalog
    """

    def __init__(
        self,
        message: str,
        token: "Token",
        code: str = "",
        source_line: Optional[str] = None,
    ) -> None:
        self.token = token
        self.code = code
        super().__init__(message, token.location, source_line)

    @property
    def at_end(self) -> bool:
        """True when parsing ran into the end of input."""
        return self.token.is_eof
