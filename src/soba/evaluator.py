from __future__ import annotations

import logging
from collections.abc import Callable

from . import ast as A
from .errors import EvalError, StackOverflow
from .value import Bool, Float, Int, Value


logger = logging.getLogger(__name__)

DEFAULT_MAX_EVAL_DEPTH = 500

_BINARY: dict[A.BinaryOp, Callable[[Value, Value], Value]] = {
    A.BinaryOp.PLUS: Value.add,
    A.BinaryOp.MINUS: Value.subtract,
    A.BinaryOp.MULTIPLY: Value.multiply,
    A.BinaryOp.DIVIDE: Value.divide,
    A.BinaryOp.EQUAL: Value.equal_to,
    A.BinaryOp.NOT_EQUAL: Value.not_equal_to,
    A.BinaryOp.LESS: Value.less_than,
    A.BinaryOp.GREATER: Value.greater_than,
    A.BinaryOp.LESS_EQUAL: Value.less_equal,
    A.BinaryOp.GREATER_EQUAL: Value.greater_equal,
}


def eval_expr(expr: A.Expr, *, max_depth: int = DEFAULT_MAX_EVAL_DEPTH) -> Value:
    return _eval(expr, 1, max_depth)


def eval_statement(stmt: A.Statement, *, max_depth: int = DEFAULT_MAX_EVAL_DEPTH) -> Value:
    return _eval(stmt.expr, 1, max_depth)


def eval_program(program: A.Program, *, max_depth: int = DEFAULT_MAX_EVAL_DEPTH) -> Value:
    """Evaluate statements in order; the result is the last statement's value."""
    last: Value = Int(0)
    for stmt in program.statements:
        last = eval_statement(stmt, max_depth=max_depth)
    return last


def _eval(expr: A.Expr, depth: int, limit: int) -> Value:
    # One Python frame per tree level: operands recurse here directly.
    if depth > limit:
        logger.debug("evaluation depth limit %d exceeded", limit)
        raise StackOverflow(span=expr.span, limit=limit)

    if isinstance(expr, A.Int):
        return Int(expr.value)
    if isinstance(expr, A.Float):
        return Float(expr.value)
    if isinstance(expr, A.Bool):
        return Bool(expr.value)
    if isinstance(expr, A.Grouped):
        return _eval(expr.inner, depth + 1, limit)

    if isinstance(expr, A.UnaryExpr):
        operand = _eval(expr.operand, depth + 1, limit)
        try:
            if expr.op is A.UnaryOp.MINUS:
                return operand.negate()
            if expr.op is A.UnaryOp.PLUS:
                return operand.positive()
            return operand.logical_not()
        except EvalError as exc:
            _locate(exc, expr)
            raise

    if isinstance(expr, A.InfixExpr):
        left = _eval(expr.left, depth + 1, limit)
        if expr.op is A.BinaryOp.LOGICAL_AND:
            if not left.is_truthy():
                return Bool(False)
            return left.logical_and(_eval(expr.right, depth + 1, limit))
        if expr.op is A.BinaryOp.LOGICAL_OR:
            if left.is_truthy():
                return Bool(True)
            return left.logical_or(_eval(expr.right, depth + 1, limit))

        right = _eval(expr.right, depth + 1, limit)
        try:
            return _BINARY[expr.op](left, right)
        except EvalError as exc:
            _locate(exc, expr)
            raise

    raise TypeError(f"not an expression node: {type(expr).__name__}")


def _locate(exc: EvalError, expr: A.Expr) -> None:
    if exc.span is None:
        exc.span = expr.span
