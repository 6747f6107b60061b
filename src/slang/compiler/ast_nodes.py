"""
Abstract Syntax Tree (AST) node definitions for slang expressions.

The tree has a closed set of four node kinds. Each node is immutable and
owns its children exclusively; a fully built tree is finite and acyclic.
Operations over the tree are written as ``ExprVisitor`` subclasses.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from slang.compiler.tokens import LiteralValue, Token

R = TypeVar("R")


class Expr(ABC):
    """Base class for all expression nodes."""

    @abstractmethod
    def accept(self, visitor: "ExprVisitor[R]") -> R:
        """Accept a visitor for tree traversal."""
        pass


class ExprVisitor(ABC, Generic[R]):
    """
    Visitor pattern base class for expression trees.

    Every node kind has one abstract capability, so a visitor that forgets a
    case cannot be instantiated. Implement this to add new tree operations
    (printers, evaluators, analyzers) without touching the node classes.
    """

    def visit(self, expr: Expr) -> R:
        """Dispatch to the appropriate visit method."""
        return expr.accept(self)

    @abstractmethod
    def visit_binary_expr(self, expr: "Binary") -> R:
        pass

    @abstractmethod
    def visit_grouping_expr(self, expr: "Grouping") -> R:
        pass

    @abstractmethod
    def visit_literal_expr(self, expr: "Literal") -> R:
        pass

    @abstractmethod
    def visit_unary_expr(self, expr: "Unary") -> R:
        pass


@dataclass(frozen=True, slots=True)
class Binary(Expr):
    """
    A binary operation.

    Example:
        1 + 2, a == b
    """

    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_binary_expr(self)


@dataclass(frozen=True, slots=True)
class Grouping(Expr):
    """A parenthesized expression."""

    expression: Expr

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_grouping_expr(self)


@dataclass(frozen=True, slots=True)
class Literal(Expr):
    """A number, string, boolean or nil literal."""

    value: LiteralValue

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_literal_expr(self)


@dataclass(frozen=True, slots=True)
class Unary(Expr):
    """
    A prefix operation.

    Example:
        -x, !done
    """

    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_unary_expr(self)
