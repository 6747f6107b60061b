"""
Unit tests for the slang Scanner.
"""

import logging
import math

import pytest

from slang.compiler.scanner import Scanner, scan_all
from slang.compiler.tokens import KEYWORDS, Token, TokenType
from slang.utils.diagnostics import DiagnosticReporter, ErrorCode


def token_types(tokens: list[Token]) -> list[TokenType]:
    return [t.type for t in tokens]


class TestScannerBasics:
    """Basic scanner functionality tests."""

    def test_empty_source(self, tokenize):
        """Empty source yields only EOF."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].lexeme == ""
        assert tokens[0].line == 1

    def test_whitespace_only(self, tokenize):
        tokens = tokenize("  \t\r\n  ")
        assert token_types(tokens) == [TokenType.EOF]
        assert tokens[0].line == 2

    def test_let_statement(self, tokenize):
        """A small statement scans into the expected token sequence."""
        tokens = tokenize('let x = "smth";')
        assert token_types(tokens) == [
            TokenType.LET,
            TokenType.IDENTIFIER,
            TokenType.EQUAL,
            TokenType.STRING,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]
        assert tokens[1].lexeme == "x"
        assert tokens[3].lexeme == '"smth"'
        assert tokens[3].literal == "smth"

    def test_exactly_one_eof(self, tokenize):
        tokens = tokenize("1 + 2")
        assert sum(1 for t in tokens if t.is_eof) == 1
        assert tokens[-1].is_eof

    def test_single_character_tokens(self, tokenize):
        tokens = tokenize("(){},.-+;*")
        assert token_types(tokens) == [
            TokenType.LEFT_PAREN,
            TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACE,
            TokenType.RIGHT_BRACE,
            TokenType.COMMA,
            TokenType.DOT,
            TokenType.MINUS,
            TokenType.PLUS,
            TokenType.SEMICOLON,
            TokenType.STAR,
            TokenType.EOF,
        ]

    def test_iterating_scanner_scans_on_demand(self):
        scanner = Scanner("1 + 2")
        assert [t.type for t in scanner] == [
            TokenType.NUMBER,
            TokenType.PLUS,
            TokenType.NUMBER,
            TokenType.EOF,
        ]


class TestScannerOperators:
    """Tests for one and two character operators."""

    def test_less_equal_is_one_token(self, tokenize):
        tokens = tokenize("<=")
        assert token_types(tokens) == [TokenType.LESS_EQUAL, TokenType.EOF]
        assert tokens[0].lexeme == "<="

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("!", TokenType.BANG),
            ("!=", TokenType.BANG_EQUAL),
            ("=", TokenType.EQUAL),
            ("==", TokenType.EQUAL_EQUAL),
            ("<", TokenType.LESS),
            ("<=", TokenType.LESS_EQUAL),
            (">", TokenType.GREATER),
            (">=", TokenType.GREATER_EQUAL),
            ("/", TokenType.SLASH),
        ],
    )
    def test_operator(self, tokenize, source, expected):
        assert token_types(tokenize(source)) == [expected, TokenType.EOF]

    def test_maximal_munch(self, tokenize):
        """The longest operator wins, the rest starts a new token."""
        tokens = tokenize("<== !==")
        assert token_types(tokens) == [
            TokenType.LESS_EQUAL,
            TokenType.EQUAL,
            TokenType.BANG_EQUAL,
            TokenType.EQUAL,
            TokenType.EOF,
        ]

    def test_separated_operators(self, tokenize):
        tokens = tokenize("< =")
        assert token_types(tokens) == [TokenType.LESS, TokenType.EQUAL, TokenType.EOF]


class TestScannerComments:
    """Tests for line and block comments."""

    def test_line_comment_yields_no_tokens(self, tokenize):
        tokens = tokenize("// nothing to see here")
        assert token_types(tokens) == [TokenType.EOF]

    def test_line_comment_ends_at_newline(self, tokenize):
        tokens = tokenize("1 // one\n+ 2")
        assert token_types(tokens) == [
            TokenType.NUMBER,
            TokenType.PLUS,
            TokenType.NUMBER,
            TokenType.EOF,
        ]
        assert tokens[1].line == 2

    def test_block_comment_yields_no_tokens(self, tokenize):
        tokens = tokenize("1 /* a\nmulti-line\ncomment */ + 2")
        assert token_types(tokens) == [
            TokenType.NUMBER,
            TokenType.PLUS,
            TokenType.NUMBER,
            TokenType.EOF,
        ]
        assert tokens[1].line == 3

    def test_block_comments_do_not_nest(self, tokenize):
        """The first */ closes the comment."""
        tokens = tokenize("/* a /* b */ 1 */")
        assert token_types(tokens) == [
            TokenType.NUMBER,
            TokenType.STAR,
            TokenType.SLASH,
            TokenType.EOF,
        ]

    def test_unterminated_block_comment_reported_at_opening_line(self, scanner_factory):
        scanner = scanner_factory("1\n/* never\nclosed\n")
        tokens = scanner.scan_tokens()

        assert token_types(tokens) == [TokenType.NUMBER, TokenType.EOF]
        assert scanner.had_error
        assert len(scanner.errors) == 1
        error = scanner.errors[0]
        assert error.line == 2
        assert error.code == ErrorCode.E0209
        assert scanner.reporter.messages() == [
            "[line 2] Error: Unterminated block comment starting on line 2."
        ]


class TestScannerNumbers:
    """Tests for number literals."""

    def test_integer(self, tokenize):
        token = tokenize("123")[0]
        assert token.type == TokenType.NUMBER
        assert token.lexeme == "123"
        assert token.literal == 123.0
        assert isinstance(token.literal, float)

    def test_decimal(self, tokenize):
        token = tokenize("45.67")[0]
        assert token.lexeme == "45.67"
        assert token.literal == 45.67

    def test_trailing_dot_is_separate_token(self, tokenize):
        tokens = tokenize("3.")
        assert token_types(tokens) == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]
        assert tokens[0].literal == 3.0
        assert tokens[0].lexeme == "3"

    def test_leading_dot_is_separate_token(self, tokenize):
        tokens = tokenize(".5")
        assert token_types(tokens) == [TokenType.DOT, TokenType.NUMBER, TokenType.EOF]

    def test_method_call_on_number(self, tokenize):
        tokens = tokenize("1.5.floor")
        assert token_types(tokens) == [
            TokenType.NUMBER,
            TokenType.DOT,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_unparseable_digit_gives_nan_and_error(self, scanner_factory):
        """Characters that count as digits but do not parse produce NaN."""
        scanner = scanner_factory("²")
        tokens = scanner.scan_tokens()

        assert token_types(tokens) == [TokenType.NUMBER, TokenType.EOF]
        assert math.isnan(tokens[0].literal)
        assert scanner.had_error
        assert scanner.errors[0].code == ErrorCode.E0207
        assert scanner.reporter.messages() == ["[line 1] Error: Failed to parse number."]


class TestScannerStrings:
    """Tests for string literals."""

    def test_string_literal(self, tokenize):
        token = tokenize('"hello world"')[0]
        assert token.type == TokenType.STRING
        assert token.literal == "hello world"

    def test_empty_string(self, tokenize):
        token = tokenize('""')[0]
        assert token.literal == ""
        assert token.lexeme == '""'

    def test_multiline_string(self, tokenize):
        tokens = tokenize('"a\nb" 1')
        assert tokens[0].literal == "a\nb"
        assert tokens[0].line == 1
        assert tokens[1].line == 2

    def test_no_escape_sequences(self, tokenize):
        token = tokenize(r'"a\nb"')[0]
        assert token.literal == "a\\nb"

    def test_unterminated_string(self, scanner_factory):
        scanner = scanner_factory('1\n"abc\ndef')
        tokens = scanner.scan_tokens()

        assert token_types(tokens) == [TokenType.NUMBER, TokenType.EOF]
        assert scanner.errors[0].code == ErrorCode.E0206
        assert scanner.errors[0].line == 2
        assert scanner.reporter.messages() == ["[line 2] Error: Unterminated string."]


class TestScannerIdentifiers:
    """Tests for identifiers and keywords."""

    @pytest.mark.parametrize("word", sorted(KEYWORDS))
    def test_keywords(self, tokenize, word):
        token = tokenize(word)[0]
        assert token.type == KEYWORDS[word]
        assert token.is_keyword

    @pytest.mark.parametrize("word", ["x", "_private", "camelCase", "snake_case_1", "lets", "nil_"])
    def test_identifiers(self, tokenize, word):
        token = tokenize(word)[0]
        assert token.type == TokenType.IDENTIFIER
        assert token.lexeme == word
        assert token.literal is None

    def test_keywords_are_case_sensitive(self, tokenize):
        assert tokenize("Let")[0].type == TokenType.IDENTIFIER

    def test_identifier_followed_by_digits(self, tokenize):
        tokens = tokenize("x1 1x")
        assert token_types(tokens) == [
            TokenType.IDENTIFIER,
            TokenType.NUMBER,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]


class TestScannerPositions:
    """Tests for line and column tracking."""

    def test_line_numbers(self, tokenize):
        tokens = tokenize("1\n2\n\n3")
        assert [t.line for t in tokens[:-1]] == [1, 2, 4]

    def test_columns(self, tokenize):
        tokens = tokenize("  foo +\n bar")
        assert (tokens[0].line, tokens[0].column) == (1, 3)
        assert (tokens[1].line, tokens[1].column) == (1, 7)
        assert (tokens[2].line, tokens[2].column) == (2, 2)

    def test_eof_position(self, tokenize):
        eof = tokenize("ab\ncd")[-1]
        assert eof.line == 2
        assert eof.column == 3


class TestScannerErrors:
    """Tests for lexical error collection."""

    def test_unexpected_character(self, scanner_factory):
        scanner = scanner_factory("1 @ 2")
        tokens = scanner.scan_tokens()

        assert token_types(tokens) == [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF]
        assert scanner.errors[0].code == ErrorCode.E0208
        assert scanner.errors[0].location.column == 3
        assert scanner.reporter.messages() == ["[line 1] Error: Unexpected character."]

    def test_all_errors_collected_in_one_pass(self, scanner_factory):
        scanner = scanner_factory('@\n1 # 2\n"open')
        tokens = scanner.scan_tokens()

        assert token_types(tokens) == [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF]
        assert [e.line for e in scanner.errors] == [1, 2, 3]
        assert scanner.reporter.messages() == [
            "[line 1] Error: Unexpected character.",
            "[line 2] Error: Unexpected character.",
            "[line 3] Error: Unterminated string.",
        ]

    def test_errors_are_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="slang"):
            scan_all("$")
        assert "[line 1] Error: Unexpected character." in caplog.messages

    def test_error_message_shows_source_line(self, scanner_factory):
        scanner = scanner_factory("1 + $")
        scanner.scan_tokens()
        text = str(scanner.errors[0])
        assert "test.slsf:1:5" in text
        assert "1 + $" in text

    def test_rescan_resets_state(self, scanner_factory):
        scanner = scanner_factory("$ 1")
        scanner.scan_tokens()
        tokens = scanner.scan_tokens()
        assert len(scanner.errors) == 1
        assert scanner.reporter.error_count() == 1
        assert token_types(tokens) == [TokenType.NUMBER, TokenType.EOF]

    def test_rescan_keeps_other_diagnostics(self):
        reporter = DiagnosticReporter("$")
        reporter.report(9, " at 'x'", "Reported elsewhere.")
        scanner = Scanner("$", reporter=reporter)
        scanner.scan_tokens()
        scanner.scan_tokens()
        assert reporter.messages() == [
            "[line 9] Error at 'x': Reported elsewhere.",
            "[line 1] Error: Unexpected character.",
        ]

    def test_source_line_ignores_other_line_breaks(self, scanner_factory):
        """Only newlines end lines; form feeds and the like stay in the line."""
        scanner = scanner_factory('"a\x0cb\x85c"\n$ 1')
        tokens = scanner.scan_tokens()

        assert tokens[0].literal == "a\x0cb\x85c"
        error = scanner.errors[0]
        assert error.line == 2
        assert error.source_line == "$ 1"

    def test_source_line_without_carriage_return(self, scanner_factory):
        scanner = scanner_factory("1\r\n2 $\r\n")
        scanner.scan_tokens()
        assert scanner.errors[0].source_line == "2 $"

    def test_many_errors(self, scanner_factory):
        count = 5000
        scanner = scanner_factory("1\n" + "@" * count + "\n2")
        tokens = scanner.scan_tokens()

        assert token_types(tokens) == [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF]
        assert len(scanner.errors) == count
        assert scanner.reporter.error_count() == count
        assert scanner.errors[-1].location.column == count
        assert all(e.line == 2 for e in scanner.errors)


class TestScanAll:
    """Tests for the scan_all convenience function."""

    def test_success(self):
        tokens, had_error = scan_all("1 + 2")
        assert not had_error
        assert len(tokens) == 4

    def test_error_flag(self):
        tokens, had_error = scan_all("1 ^ 2")
        assert had_error
        assert token_types(tokens) == [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF]

    def test_shared_reporter(self):
        reporter = DiagnosticReporter("?", "shared.slsf")
        scan_all("?", "shared.slsf", reporter)
        assert reporter.error_count() == 1
        assert reporter.diagnostics[0].span.filename == "shared.slsf"
