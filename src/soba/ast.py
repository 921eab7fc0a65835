from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .spans import Position, Span


class BinaryOp(str, Enum):
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    LOGICAL_AND = "&&"
    LOGICAL_OR = "||"
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="

    def __str__(self) -> str:
        return self.value


class UnaryOp(str, Enum):
    PLUS = "+"
    MINUS = "-"
    LOGICAL_NOT = "!"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Node:
    span: Span


@dataclass(frozen=True, slots=True)
class Int(Node):
    value: int


@dataclass(frozen=True, slots=True)
class Float(Node):
    value: float


@dataclass(frozen=True, slots=True)
class Bool(Node):
    value: bool


@dataclass(frozen=True, slots=True)
class InfixExpr(Node):
    """Binary operation; span covers both operands."""

    left: Expr
    op: BinaryOp
    right: Expr


@dataclass(frozen=True, slots=True)
class Grouped(Node):
    """Parenthesized expression; span includes the parentheses."""

    inner: Expr


@dataclass(frozen=True, slots=True)
class UnaryExpr(Node):
    op: UnaryOp
    operand: Expr


Expr = Union[Int, Float, Bool, InfixExpr, Grouped, UnaryExpr]


@dataclass(frozen=True, slots=True)
class ExprStatement(Node):
    expr: Expr


# Only expression statements exist today.
Statement = ExprStatement


@dataclass(frozen=True, slots=True)
class Program(Node):
    statements: tuple[Statement, ...] = ()

    @classmethod
    def of(cls, statements: list[Statement] | tuple[Statement, ...]) -> Program:
        stmts = tuple(statements)
        if not stmts:
            return cls.empty()
        return cls(span=stmts[0].span.merge(stmts[-1].span), statements=stmts)

    @classmethod
    def empty(cls) -> Program:
        return cls(span=Span.single(Position.start()))
