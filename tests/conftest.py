"""
Pytest configuration and shared fixtures for slang tests.
"""

import pytest

from slang.compiler import FrontEndResult, parse_source
from slang.compiler.ast_nodes import Expr
from slang.compiler.ast_printer import print_ast
from slang.compiler.parser import Parser
from slang.compiler.scanner import Scanner
from slang.compiler.tokens import Token
from slang.utils.diagnostics import DiagnosticReporter


@pytest.fixture
def reporter_factory():
    """Factory fixture for creating diagnostic sinks."""

    def _create_reporter(source: str = "", filename: str = "test.slsf") -> DiagnosticReporter:
        return DiagnosticReporter(source, filename)

    return _create_reporter


@pytest.fixture
def scanner_factory(reporter_factory):
    """Factory fixture for creating scanners."""

    def _create_scanner(source: str, filename: str = "test.slsf") -> Scanner:
        return Scanner(source, filename, reporter_factory(source, filename))

    return _create_scanner


@pytest.fixture
def parser_factory(scanner_factory):
    """Factory fixture for creating parsers from source."""

    def _create_parser(source: str, **options) -> Parser:
        scanner = scanner_factory(source)
        tokens = scanner.scan_tokens()
        assert not scanner.had_error, scanner.reporter.messages()
        return Parser(tokens, scanner.reporter, **options)

    return _create_parser


@pytest.fixture
def tokenize(scanner_factory):
    """Fixture to tokenize source code."""

    def _tokenize(source: str) -> list[Token]:
        return scanner_factory(source).scan_tokens()

    return _tokenize


@pytest.fixture
def parse(parser_factory):
    """Fixture to parse source code into an expression tree."""

    def _parse(source: str, **options) -> Expr:
        return parser_factory(source, **options).parse()

    return _parse


@pytest.fixture
def render(parse):
    """Fixture to parse source code and print its tree."""

    def _render(source: str) -> str:
        return print_ast(parse(source))

    return _render


@pytest.fixture
def front_end():
    """Fixture running the whole pipeline and returning its result."""

    def _run(source: str, **options) -> FrontEndResult:
        return parse_source(source, "test.slsf", **options)

    return _run
