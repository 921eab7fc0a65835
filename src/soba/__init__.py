from __future__ import annotations

from .api import evaluate_expression, evaluate_program, parse_expression, parse_source
from .errors import EvalError, LexError, ParseError, SobaError
from .format import format_expr, format_program
from .value import Bool, Float, Int, Value

__all__ = [
    "Bool",
    "EvalError",
    "Float",
    "Int",
    "LexError",
    "ParseError",
    "SobaError",
    "Value",
    "evaluate_expression",
    "evaluate_program",
    "format_expr",
    "format_program",
    "parse_expression",
    "parse_source",
]
