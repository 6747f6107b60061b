"""
Parenthesized prefix rendering of expression trees.

    -123 * (45.67)   ->   (* (- 123) (group 45.67))
"""

from slang.compiler.ast_nodes import Binary, Expr, ExprVisitor, Grouping, Literal, Unary
from slang.compiler.tokens import format_literal


class AstPrinter(ExprVisitor[str]):
    """Renders a tree as a fully parenthesized prefix expression."""

    def print(self, expr: Expr) -> str:
        return self.visit(expr)

    def visit_binary_expr(self, expr: Binary) -> str:
        """
        Render a binary chain.

        The parser builds ``a + b + c`` as a left-leaning spine of unbounded
        length, so the spine is walked in a loop; only right operands and
        the innermost left operand go through ``visit``.
        """
        spine: list[Binary] = []
        node: Expr = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        parts = [f"({binary.operator.lexeme} " for binary in spine]
        parts.append(self.visit(node))
        for binary in reversed(spine):
            parts.append(f" {self.visit(binary.right)})")
        return "".join(parts)

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return self._parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr: Literal) -> str:
        return format_literal(expr.value)

    def visit_unary_expr(self, expr: Unary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def _parenthesize(self, name: str, *exprs: Expr) -> str:
        parts = [name]
        for expr in exprs:
            parts.append(self.visit(expr))
        return "(" + " ".join(parts) + ")"


def print_ast(expr: Expr) -> str:
    """Convenience function to render a tree."""
    return AstPrinter().print(expr)
