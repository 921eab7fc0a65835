from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import TextIO

from . import ast as A
from .api import evaluate_expression, evaluate_program, parse_expression, parse_source
from .errors import NestingTooDeep, SobaError
from .parser import DEFAULT_MAX_DEPTH
from .spans import Position, Span


logger = logging.getLogger(__name__)

BANNER = "This is the Soba programming language!"
PROMPT = ">> "

# json.dumps and _to_jsonable both recurse once or twice per tree level.
_JSON_MAX_DEPTH = 400


def _to_jsonable(obj):
    if isinstance(obj, Span):
        return [_to_jsonable(obj.start), _to_jsonable(obj.end)]
    if isinstance(obj, Position):
        return {"offset": obj.offset, "line": obj.line, "column": obj.column}
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj):
        out = {"node": type(obj).__name__}
        out.update({f.name: _to_jsonable(getattr(obj, f.name)) for f in fields(obj)})
        return out
    if isinstance(obj, (tuple, list)):
        return [_to_jsonable(x) for x in obj]
    return obj


def _tree_depth(tree: A.Program | A.Expr) -> int:
    deepest = 0
    stack: list[tuple[object, int]] = [(tree, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(node, A.Program):
            stack.extend((stmt.expr, depth + 1) for stmt in node.statements)
        elif isinstance(node, A.Grouped):
            stack.append((node.inner, depth + 1))
        elif isinstance(node, A.UnaryExpr):
            stack.append((node.operand, depth + 1))
        elif isinstance(node, A.InfixExpr):
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
    return deepest


def _default_max_depth() -> int:
    raw = os.environ.get("SOBA_MAX_DEPTH")
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring non-integer SOBA_MAX_DEPTH=%r", raw)
        return DEFAULT_MAX_DEPTH


def _report(err: SobaError, out: TextIO) -> None:
    print(f"{err.category}: {err}", file=out)


def _run_one(src: str, *, expression: bool, as_json: bool, max_depth: int) -> str:
    if as_json:
        if expression:
            tree = parse_expression(src, max_depth=max_depth)
        else:
            tree = parse_source(src, max_depth=max_depth)
        if _tree_depth(tree) > _JSON_MAX_DEPTH:
            raise NestingTooDeep(
                span=tree.span,
                limit=_JSON_MAX_DEPTH,
                hint="too deep to print as JSON; evaluate it without --json",
            )
        return json.dumps(_to_jsonable(tree), indent=2)
    if expression:
        return str(evaluate_expression(src, max_depth=max_depth))
    return str(evaluate_program(src, max_depth=max_depth))


def repl(*, stdin: TextIO, stdout: TextIO, expression: bool, as_json: bool, max_depth: int) -> None:
    """Read lines until ``exit`` or end of input, printing each result or error."""
    print(BANNER, file=stdout)
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        if line.strip() == "exit":
            break
        if not line.strip():
            continue
        try:
            print(_run_one(line, expression=expression, as_json=as_json, max_depth=max_depth), file=stdout)
        except SobaError as err:
            _report(err, stdout)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="soba", description="Evaluate Soba arithmetic/boolean expressions")
    ap.add_argument("-e", "--eval", dest="source", help="Evaluate SOURCE instead of starting the prompt")
    ap.add_argument(
        "--expression",
        action="store_true",
        help="Treat input as a single expression rather than ';'-separated statements",
    )
    ap.add_argument("--json", action="store_true", help="Print the parsed AST as JSON instead of evaluating")
    ap.add_argument(
        "--max-depth",
        type=int,
        default=_default_max_depth(),
        help=f"Maximum expression nesting (default: $SOBA_MAX_DEPTH or {DEFAULT_MAX_DEPTH})",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.source is None:
        try:
            repl(
                stdin=sys.stdin,
                stdout=sys.stdout,
                expression=args.expression,
                as_json=args.json,
                max_depth=args.max_depth,
            )
        except KeyboardInterrupt:
            print(file=sys.stdout)
        return 0

    try:
        out = _run_one(args.source, expression=args.expression, as_json=args.json, max_depth=args.max_depth)
    except SobaError as err:
        _report(err, sys.stderr)
        return 1
    print(out)
    return 0
