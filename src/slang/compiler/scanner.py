"""
slang Scanner (Lexer).

Transforms source text into a list of tokens in a single left-to-right pass.
Lexical errors never stop the scan: each one is recorded, reported to the
diagnostic sink, and scanning resumes at the next character so that one pass
yields every reachable diagnostic.
"""

from typing import Iterator, Optional

from slang.compiler.tokens import (
    EQUAL_SUFFIX_TOKENS,
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    Token,
    TokenType,
    make_eof,
)
from slang.utils.diagnostics import (
    Diagnostic,
    DiagnosticReporter,
    ErrorCode,
    split_source_lines,
)
from slang.utils.errors import ScanError, SourceLocation


class Scanner:
    """
    Scanner for slang source code.

    The scanner supports:
    - Single and double character operators (maximal munch)
    - Number literals with an optional fractional part
    - Double-quoted string literals, possibly spanning lines
    - Identifiers and reserved keywords
    - Comments (// single line, /* multi-line */)

    Usage:
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()
        if scanner.had_error: ...
    """

    def __init__(
        self,
        source: str,
        filename: Optional[str] = None,
        reporter: Optional[DiagnosticReporter] = None,
    ) -> None:
        """
        Initialize the scanner with source code.

        Args:
            source: The source code to tokenize
            filename: Optional filename for error reporting
            reporter: Diagnostic sink; a private one is created when omitted
        """
        self.source = source
        self.filename = filename
        self._lines = split_source_lines(source)
        self.reporter = reporter if reporter is not None else DiagnosticReporter(
            source, filename or "<input>"
        )
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.errors: list[ScanError] = []
        self._reported: list[Diagnostic] = []

        # Start of the token being scanned
        self._start = 0
        self._start_line = 1
        self._start_column = 1

    @property
    def had_error(self) -> bool:
        """True once any lexical error has been recorded."""
        return bool(self.errors)

    @property
    def _current_char(self) -> Optional[str]:
        """Return the current character or None if at end."""
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    @property
    def _peek_char(self) -> Optional[str]:
        """Return the next character without consuming it."""
        peek_pos = self.pos + 1
        if peek_pos >= len(self.source):
            return None
        return self.source[peek_pos]

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume the current character only if it equals ``expected``."""
        if self._current_char != expected:
            return False
        self._advance()
        return True

    def _start_location(self) -> SourceLocation:
        return SourceLocation(
            line=self._start_line,
            column=self._start_column,
            offset=self._start,
            filename=self.filename,
        )

    def _line_text(self, line: int) -> str:
        """Extract a line of source for error messages."""
        if 1 <= line <= len(self._lines):
            return self._lines[line - 1]
        return ""

    def _error(self, message: str, code: str) -> ScanError:
        """Create a scan error located at the start of the current token."""
        return ScanError(
            message,
            self._start_location(),
            self._line_text(self._start_line),
            code=code,
        )

    def _record(self, error: ScanError) -> None:
        self.errors.append(error)
        self._reported.append(self.reporter.report_scan_error(error))

    def _add_token(self, token_type: TokenType, literal=None) -> None:
        lexeme = self.source[self._start:self.pos]
        self.tokens.append(
            Token(token_type, lexeme, literal, self._start_line, self._start_column)
        )

    def _skip_line_comment(self) -> None:
        """Skip the rest of a // comment; the newline is left in place."""
        while self._current_char is not None and self._current_char != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """
        Skip a /* ... */ comment whose opening has been consumed.

        Comments do not nest: the first */ closes the comment.
        """
        while not self._is_at_end():
            if self._current_char == "*" and self._peek_char == "/":
                self._advance()  # *
                self._advance()  # /
                return
            self._advance()

        raise self._error(
            f"Unterminated block comment starting on line {self._start_line}.",
            ErrorCode.E0209,
        )

    def _read_string(self) -> None:
        """Read a string literal whose opening quote has been consumed."""
        while self._current_char is not None and self._current_char != '"':
            self._advance()

        if self._is_at_end():
            raise self._error("Unterminated string.", ErrorCode.E0206)

        self._advance()  # closing quote
        value = self.source[self._start + 1:self.pos - 1]
        self._add_token(TokenType.STRING, value)

    def _read_number(self) -> None:
        """
        Read a number literal whose first digit has been consumed.

        A '.' belongs to the number only when a digit follows it, so ``3.``
        scans as the number 3 followed by a DOT token.
        """
        while self._current_char is not None and self._current_char.isdigit():
            self._advance()

        if self._current_char == "." and self._peek_char is not None and self._peek_char.isdigit():
            self._advance()  # .
            while self._current_char is not None and self._current_char.isdigit():
                self._advance()

        text = self.source[self._start:self.pos]
        try:
            value = float(text)
        except ValueError:
            self._record(self._error("Failed to parse number.", ErrorCode.E0207))
            value = float("nan")
        self._add_token(TokenType.NUMBER, value)

    def _read_identifier_or_keyword(self) -> None:
        """
        Read an identifier or keyword.

        Identifiers start with a letter or underscore and contain
        letters, digits, and underscores.
        """
        while self._current_char is not None and (
            self._current_char.isalnum() or self._current_char == "_"
        ):
            self._advance()

        text = self.source[self._start:self.pos]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _scan_token(self) -> None:
        """Scan one lexeme starting at the current position."""
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])
        elif char in EQUAL_SUFFIX_TOKENS:
            single, double = EQUAL_SUFFIX_TOKENS[char]
            self._add_token(double if self._match("=") else single)
        elif char == "/":
            if self._match("/"):
                self._skip_line_comment()
            elif self._match("*"):
                self._skip_block_comment()
            else:
                self._add_token(TokenType.SLASH)
        elif char in " \r\t\n":
            pass
        elif char == '"':
            self._read_string()
        elif char.isdigit():
            self._read_number()
        elif char.isalpha() or char == "_":
            self._read_identifier_or_keyword()
        else:
            raise self._error("Unexpected character.", ErrorCode.E0208)

    def scan_tokens(self) -> list[Token]:
        """
        Tokenize the entire source code.

        Returns:
            A list of all tokens terminated by exactly one EOF token.
        """
        self.tokens = []
        self.errors = []
        # Rescanning replaces this scanner's earlier diagnostics in the sink
        self.reporter.discard(self._reported)
        self._reported = []
        self.pos = 0
        self.line = 1
        self.column = 1

        while not self._is_at_end():
            self._start = self.pos
            self._start_line = self.line
            self._start_column = self.column
            try:
                self._scan_token()
            except ScanError as error:
                self._record(error)

        self.tokens.append(make_eof(self.line, self.column))
        return self.tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens (scans if necessary)."""
        if not self.tokens:
            self.scan_tokens()
        return iter(self.tokens)


def scan_all(
    source: str,
    filename: Optional[str] = None,
    reporter: Optional[DiagnosticReporter] = None,
) -> tuple[list[Token], bool]:
    """
    Convenience function to tokenize source code.

    Args:
        source: Source code
        filename: Optional filename for error reporting
        reporter: Optional diagnostic sink

    Returns:
        The token list and whether any lexical error occurred
    """
    scanner = Scanner(source, filename, reporter)
    tokens = scanner.scan_tokens()
    return tokens, scanner.had_error
