from __future__ import annotations

import math
from decimal import Decimal

from . import ast as A
from .errors import InvalidNumber


def format_program(program: A.Program) -> str:
    # Canonical layout; spans are not preserved by formatting.
    return "; ".join(format_expr(stmt.expr) for stmt in program.statements)


def format_expr(expr: A.Expr) -> str:
    """Render ``expr`` as canonical source.

    Walks the tree with an explicit stack, so left-deep chains of any length
    format without growing the Python call stack. Pieces are pushed in reverse
    and popped in output order; plain strings are emitted as-is.
    """
    out: list[str] = []
    stack: list[A.Expr | str] = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        elif isinstance(item, A.Int):
            out.append(str(item.value))
        elif isinstance(item, A.Float):
            out.append(_format_float(item))
        elif isinstance(item, A.Bool):
            out.append("true" if item.value else "false")
        elif isinstance(item, A.Grouped):
            stack.extend((")", item.inner, "("))
        elif isinstance(item, A.UnaryExpr):
            stack.extend((item.operand, str(item.op)))
        elif isinstance(item, A.InfixExpr):
            stack.extend((item.right, f" {item.op} ", item.left))
        else:
            raise TypeError(f"not an expression node: {type(item).__name__}")
    return "".join(out)


def _format_float(node: A.Float) -> str:
    v = node.value
    if not math.isfinite(v):
        # The lexer never produces these; only hand-built trees can hold one.
        raise InvalidNumber(
            span=node.span,
            text=repr(v),
            hint="float literals have no spelling for inf or nan",
        )
    text = format(Decimal(repr(v)), "f")
    if "." not in text:
        text += ".0"
    return text
