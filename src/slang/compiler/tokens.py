"""
Token definitions for the slang scanner.

This module defines all token types recognized by the language: punctuation
and operators, literals, reserved keywords and the end-of-input marker.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import Union

from slang.utils.errors import SourceLocation

# Decoded literal payloads. ``None`` stands for nil.
LiteralValue = Union[float, str, bool, None]


def format_literal(value: LiteralValue) -> str:
    """
    Return the canonical text form of a literal value.

    Integral numbers drop their fractional part (``123``), other finite
    numbers use the shortest round-tripping digits written in plain decimal
    notation (``45.67``, ``0.0000001``).
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value.is_integer():
            return str(int(value))
        text = repr(value)
        if "e" in text:
            # Small magnitudes: same digits, written out without an exponent
            text = format(Decimal(text), "f")
        return text
    return str(value)


class TokenType(Enum):
    """Enumeration of all token types."""

    # Single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    BOX = auto()
    ELSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    SELF = auto()
    TRUE = auto()
    FALSE = auto()
    AND = auto()
    LET = auto()
    WHILE = auto()
    NIL = auto()

    # End of input
    EOF = auto()


# Reserved words
KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "box": TokenType.BOX,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "let": TokenType.LET,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "self": TokenType.SELF,
    "super": TokenType.SUPER,
    "true": TokenType.TRUE,
    "while": TokenType.WHILE,
}

# Characters that always form a token on their own
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# Operators that become a two-character token when followed by '='
EQUAL_SUFFIX_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

# Keywords that begin a statement; the parser resynchronizes before them
STATEMENT_KEYWORDS: frozenset[TokenType] = frozenset(
    {
        TokenType.BOX,
        TokenType.FUN,
        TokenType.LET,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """
    Represents a single token from the source code.

    Attributes:
        type: The type of this token
        lexeme: The exact source text of the token (empty for EOF)
        literal: The decoded value for NUMBER and STRING tokens
        line: 1-indexed line where the token begins
        column: 1-indexed column where the token begins
    """

    type: TokenType
    lexeme: str
    literal: LiteralValue = None
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        if self.literal is not None:
            return f"Token({self.type.name}, {self.lexeme!r}, {self.literal!r}, line {self.line})"
        return f"Token({self.type.name}, {self.lexeme!r}, line {self.line})"

    def __str__(self) -> str:
        return f"{self.type.name} {self.lexeme} {format_literal(self.literal)}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Token):
            return (
                self.type == other.type
                and self.lexeme == other.lexeme
                and self.literal == other.literal
            )
        if isinstance(other, TokenType):
            return self.type == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.type, self.lexeme))

    @property
    def is_eof(self) -> bool:
        return self.type == TokenType.EOF

    @property
    def is_literal(self) -> bool:
        """Check if this token carries a decoded literal value."""
        return self.type in {TokenType.NUMBER, TokenType.STRING}

    @property
    def is_keyword(self) -> bool:
        return self.type in KEYWORDS.values()

    @property
    def location(self) -> SourceLocation:
        """The token's position as a SourceLocation."""
        return SourceLocation(line=self.line, column=self.column)


def make_eof(line: int = 1, column: int = 1) -> Token:
    """Create the end-of-input token."""
    return Token(TokenType.EOF, "", None, line, column)
