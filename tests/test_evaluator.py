from __future__ import annotations

import pytest

from soba import ast as A
from soba.errors import DivisionByZero, EvalTypeError, Overflow, StackOverflow
from soba.evaluator import eval_expr, eval_program
from soba.spans import Position, Span
from soba.value import I32_MIN, Bool, Float, Int


SP = Span.single(Position.start())


def lit(v: int) -> A.Int:
    return A.Int(span=SP, value=v)


def infix(left: A.Expr, op: A.BinaryOp, right: A.Expr) -> A.InfixExpr:
    return A.InfixExpr(span=left.span.merge(right.span), left=left, op=op, right=right)


def test_literals() -> None:
    assert eval_expr(lit(42)) == Int(42)
    assert eval_expr(A.Float(span=SP, value=3.14)) == Float(3.14)
    assert eval_expr(A.Bool(span=SP, value=True)) == Bool(True)


def test_addition_is_float() -> None:
    assert eval_expr(infix(lit(2), A.BinaryOp.PLUS, lit(3))) == Float(5.0)


def test_grouped_and_unary() -> None:
    e = A.UnaryExpr(span=SP, op=A.UnaryOp.MINUS, operand=A.Grouped(span=SP, inner=lit(5)))
    assert eval_expr(e) == Int(-5)


@pytest.mark.parametrize(
    "op, expected",
    [
        (A.BinaryOp.PLUS, Float(9.0)),
        (A.BinaryOp.MINUS, Float(3.0)),
        (A.BinaryOp.MULTIPLY, Float(18.0)),
        (A.BinaryOp.DIVIDE, Float(2.0)),
        (A.BinaryOp.EQUAL, Bool(False)),
        (A.BinaryOp.NOT_EQUAL, Bool(True)),
        (A.BinaryOp.LESS, Bool(False)),
        (A.BinaryOp.GREATER, Bool(True)),
        (A.BinaryOp.LESS_EQUAL, Bool(False)),
        (A.BinaryOp.GREATER_EQUAL, Bool(True)),
    ],
)
def test_every_binary_operator(op: A.BinaryOp, expected: object) -> None:
    assert eval_expr(infix(lit(6), op, lit(3))) == expected


@pytest.mark.parametrize(
    "op, expected",
    [
        (A.UnaryOp.PLUS, Int(4)),
        (A.UnaryOp.MINUS, Int(-4)),
        (A.UnaryOp.LOGICAL_NOT, Bool(False)),
    ],
)
def test_every_unary_operator(op: A.UnaryOp, expected: object) -> None:
    assert eval_expr(A.UnaryExpr(span=SP, op=op, operand=lit(4))) == expected


def test_overflow_on_negating_min_int() -> None:
    with pytest.raises(Overflow):
        eval_expr(A.UnaryExpr(span=SP, op=A.UnaryOp.MINUS, operand=lit(I32_MIN)))


def test_errors_carry_node_span() -> None:
    sp = Span(Position(0, 1, 1), Position(5, 1, 6))
    e = A.InfixExpr(span=sp, left=lit(1), op=A.BinaryOp.DIVIDE, right=lit(0))
    with pytest.raises(DivisionByZero) as exc:
        eval_expr(e)
    assert exc.value.span == sp
    assert str(exc.value).startswith("1:1: division by zero")


class _Exploding(A.Node):
    pass


def test_short_circuit_skips_right_operand() -> None:
    # The right operand is not an evaluable node; touching it would raise TypeError.
    boom = _Exploding(span=SP)
    f = A.Bool(span=SP, value=False)
    t = A.Bool(span=SP, value=True)
    assert eval_expr(infix(f, A.BinaryOp.LOGICAL_AND, boom)) == Bool(False)
    assert eval_expr(infix(t, A.BinaryOp.LOGICAL_OR, boom)) == Bool(True)
    assert eval_expr(infix(lit(0), A.BinaryOp.LOGICAL_AND, boom)) == Bool(False)
    with pytest.raises(TypeError):
        eval_expr(infix(t, A.BinaryOp.LOGICAL_AND, boom))


def test_logical_results_are_bools() -> None:
    assert eval_expr(infix(lit(1), A.BinaryOp.LOGICAL_AND, lit(2))) == Bool(True)
    assert eval_expr(infix(lit(0), A.BinaryOp.LOGICAL_OR, lit(0))) == Bool(False)


def test_comparison_type_error() -> None:
    t = A.Bool(span=SP, value=True)
    with pytest.raises(EvalTypeError):
        eval_expr(infix(t, A.BinaryOp.LESS, lit(1)))


def test_program_returns_last_value() -> None:
    stmts = [
        A.ExprStatement(span=SP, expr=infix(lit(1), A.BinaryOp.PLUS, lit(2))),
        A.ExprStatement(span=SP, expr=lit(10)),
    ]
    assert eval_program(A.Program.of(stmts)) == Int(10)


def test_program_stops_at_first_error() -> None:
    stmts = [
        A.ExprStatement(span=SP, expr=infix(lit(1), A.BinaryOp.DIVIDE, lit(0))),
        A.ExprStatement(span=SP, expr=lit(10)),
    ]
    with pytest.raises(DivisionByZero):
        eval_program(A.Program.of(stmts))


def test_empty_program_is_zero() -> None:
    assert eval_program(A.Program.empty()) == Int(0)


def _left_chain(n: int) -> A.Expr:
    e: A.Expr = lit(1)
    for _ in range(n):
        e = infix(e, A.BinaryOp.PLUS, lit(1))
    return e


def test_depth_limit_raises_stack_overflow() -> None:
    assert eval_expr(_left_chain(100)) == Float(101.0)
    with pytest.raises(StackOverflow) as e:
        eval_expr(_left_chain(100), max_depth=50)
    assert e.value.limit == 50
    with pytest.raises(StackOverflow):
        eval_expr(_left_chain(5000))
