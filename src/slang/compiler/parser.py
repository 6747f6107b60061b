"""
slang Parser.

A recursive descent parser that transforms a token list into an expression
tree. Each precedence level is one method; binary levels fold their operands
iteratively so chains come out left-associative:

    expression -> equality
    equality   -> comparison ( ( "!=" | "==" ) comparison )*
    comparison -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       -> factor ( ( "-" | "+" ) factor )*
    factor     -> unary ( ( "/" | "*" ) unary )*
    unary      -> ( "!" | "-" ) unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil"
                | "(" expression ")"
"""

from typing import Callable, Optional

from slang.compiler.ast_nodes import Binary, Expr, Grouping, Literal, Unary
from slang.compiler.tokens import STATEMENT_KEYWORDS, Token, TokenType
from slang.utils.diagnostics import DiagnosticReporter, ErrorCode
from slang.utils.errors import ParseError

# Unary and grouping nesting allowed before parsing gives up. Each level costs
# several Python frames in the parser and the printer. Binary chains are
# folded in loops by both and have no limit.
MAX_NESTING_DEPTH = 64


class Parser:
    """
    Recursive descent parser for slang expressions.

    Usage:
        parser = Parser(tokens)
        expr = parser.parse()
    """

    def __init__(
        self,
        tokens: list[Token],
        reporter: Optional[DiagnosticReporter] = None,
        max_depth: int = MAX_NESTING_DEPTH,
        allow_trailing: bool = False,
    ) -> None:
        """
        Initialize the parser.

        Args:
            tokens: Token list from the scanner, terminated by EOF
            reporter: Diagnostic sink; a private one is created when omitted
            max_depth: Maximum unary/grouping nesting depth
            allow_trailing: Accept tokens left over after the expression
        """
        if not tokens or not tokens[-1].is_eof:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self.pos = 0
        self.reporter = reporter if reporter is not None else DiagnosticReporter()
        self.max_depth = max_depth
        self.allow_trailing = allow_trailing
        self._depth = 0

    @property
    def _current(self) -> Token:
        """Get the current token."""
        return self.tokens[self.pos]

    @property
    def _previous(self) -> Token:
        """Get the most recently consumed token."""
        return self.tokens[self.pos - 1] if self.pos > 0 else self.tokens[0]

    def _is_at_end(self) -> bool:
        return self._current.type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        """Check the current token's kind; payloads are never compared."""
        if self._is_at_end():
            return False
        return self._current.type == token_type

    def _advance(self) -> Token:
        """Consume and return the current token."""
        if not self._is_at_end():
            self.pos += 1
        return self._previous

    def _match(self, *types: TokenType) -> bool:
        """Consume current token if it matches one of the given types."""
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, message: str, code: str = ErrorCode.E0201) -> Token:
        """Consume current token if it matches, else raise error."""
        if self._check(token_type):
            return self._advance()
        raise self._error(self._current, message, code)

    def _error(self, token: Token, message: str, code: str = ErrorCode.E0201) -> ParseError:
        """Create a parse error and report it to the diagnostic sink."""
        error = ParseError(message, token, code)
        self.reporter.report_parse_error(error)
        return error

    def synchronize(self) -> None:
        """
        Recover from a parse error by advancing to the next statement.

        Discards tokens until just past a semicolon or until the next token
        starts a statement.
        """
        self._advance()
        while not self._is_at_end():
            if self._previous.type == TokenType.SEMICOLON:
                return
            if self._current.type in STATEMENT_KEYWORDS:
                return
            self._advance()

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def parse(self) -> Expr:
        """
        Parse exactly one expression.

        Returns:
            The root of the expression tree.

        Raises:
            ParseError: on the first syntax error, after reporting it.
        """
        expr = self.parse_expression()
        if not self.allow_trailing and not self._is_at_end():
            raise self._error(self._current, "Expect end of expression.", ErrorCode.E0211)
        return expr

    def parse_expression(self) -> Expr:
        """Parse one expression at the cursor without checking what follows."""
        return self._expression()

    # -------------------------------------------------------------------------
    # Grammar rules
    # -------------------------------------------------------------------------

    def _expression(self) -> Expr:
        return self._equality()

    def _binary_level(self, operand: Callable[[], Expr], *operators: TokenType) -> Expr:
        """Parse ``operand (operator operand)*`` as a left-leaning chain."""
        expr = operand()
        while self._match(*operators):
            operator = self._previous
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def _equality(self) -> Expr:
        return self._binary_level(self._comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _comparison(self) -> Expr:
        return self._binary_level(
            self._term,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def _term(self) -> Expr:
        return self._binary_level(self._factor, TokenType.MINUS, TokenType.PLUS)

    def _factor(self) -> Expr:
        return self._binary_level(self._unary, TokenType.SLASH, TokenType.STAR)

    def _unary(self) -> Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous
            self._enter()
            try:
                right = self._unary()
            finally:
                self._depth -= 1
            return Unary(operator, right)
        return self._primary()

    def _primary(self) -> Expr:
        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous.literal)

        if self._match(TokenType.LEFT_PAREN):
            self._enter()
            try:
                expr = self._expression()
            finally:
                self._depth -= 1
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.", ErrorCode.E0202)
            return Grouping(expr)

        raise self._error(self._current, "Expect expression.", ErrorCode.E0204)

    def _enter(self) -> None:
        """Count one more nesting level, failing past the configured limit."""
        if self._depth >= self.max_depth:
            raise self._error(self._current, "Expression too deeply nested.", ErrorCode.E0210)
        self._depth += 1


def parse(tokens: list[Token], reporter: Optional[DiagnosticReporter] = None) -> Expr:
    """
    Convenience function to parse a token list.

    Args:
        tokens: Token list from the scanner
        reporter: Optional diagnostic sink

    Returns:
        The expression tree
    """
    return Parser(tokens, reporter).parse()
