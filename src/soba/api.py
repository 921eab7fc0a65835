from __future__ import annotations

import logging

from . import ast as A
from .evaluator import eval_expr, eval_program
from .lexer import Tokenizer
from .parser import DEFAULT_MAX_DEPTH, Parser
from .value import Value


logger = logging.getLogger(__name__)


def parse_expression(src: str, *, max_depth: int | None = None) -> A.Expr:
    """Parse ``src`` as exactly one expression."""
    return _parser(src, max_depth).parse()


def parse_source(src: str, *, max_depth: int | None = None) -> A.Program:
    """Parse ``src`` as a ``;``-separated sequence of expression statements."""
    return _parser(src, max_depth).parse_program()


def evaluate_expression(src: str, *, max_depth: int | None = None) -> Value:
    expr = parse_expression(src, max_depth=max_depth)
    return eval_expr(expr)


def evaluate_program(src: str, *, max_depth: int | None = None) -> Value:
    """Evaluate every statement in order and return the last value.

    Empty or all-whitespace input evaluates to ``Int(0)``.
    """
    program = parse_source(src, max_depth=max_depth)
    logger.debug("evaluating %d statement(s)", len(program.statements))
    return eval_program(program)


def _parser(src: str, max_depth: int | None) -> Parser:
    return Parser(Tokenizer(src), max_depth=DEFAULT_MAX_DEPTH if max_depth is None else max_depth)
