from __future__ import annotations

import logging

from . import ast as A
from .errors import (
    InvalidExpression,
    LexError,
    MismatchedParentheses,
    NestingTooDeep,
    ParseError,
    UnexpectedEof,
    UnexpectedToken,
)
from .lexer import TokenSource
from .precedence import Precedence
from .spans import Position, Span
from .tokens import Token, TokenKind


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200

_BINARY: dict[TokenKind, A.BinaryOp] = {
    TokenKind.PLUS: A.BinaryOp.PLUS,
    TokenKind.MINUS: A.BinaryOp.MINUS,
    TokenKind.ASTERISK: A.BinaryOp.MULTIPLY,
    TokenKind.SLASH: A.BinaryOp.DIVIDE,
    TokenKind.AND_AND: A.BinaryOp.LOGICAL_AND,
    TokenKind.OR_OR: A.BinaryOp.LOGICAL_OR,
    TokenKind.EQUAL: A.BinaryOp.EQUAL,
    TokenKind.NOT_EQUAL: A.BinaryOp.NOT_EQUAL,
    TokenKind.LESS: A.BinaryOp.LESS,
    TokenKind.GREATER: A.BinaryOp.GREATER,
    TokenKind.LESS_EQUAL: A.BinaryOp.LESS_EQUAL,
    TokenKind.GREATER_EQUAL: A.BinaryOp.GREATER_EQUAL,
}

_UNARY: dict[TokenKind, A.UnaryOp] = {
    TokenKind.PLUS: A.UnaryOp.PLUS,
    TokenKind.MINUS: A.UnaryOp.MINUS,
    TokenKind.BANG: A.UnaryOp.LOGICAL_NOT,
}


class Parser:
    """Pratt (precedence-climbing) parser over any ``TokenSource``.

    ``current`` is the token being examined, ``peek`` the one after it; both
    are ``None`` past the end of input. Building a parser pulls the first two
    tokens, so a lexical error at the very start surfaces from the constructor.
    """

    def __init__(self, source: TokenSource, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._source = source
        self._max_depth = max_depth
        self._depth = 0
        self._end = Position.start()
        self.current: Token | None = self._pull()
        self.peek: Token | None = self._pull()

    def _pull(self) -> Token | None:
        try:
            tok = self._source.next_token()
        except LexError as exc:
            raise UnexpectedToken(span=exc.span, description=exc.describe(), hint=exc.hint) from exc
        if tok is not None:
            self._end = tok.span.end
        return tok

    def _advance(self) -> None:
        self.current = self.peek
        self.peek = self._pull()

    def _eof(self) -> UnexpectedEof:
        return UnexpectedEof(span=Span.single(self._end))

    # Entry points

    def parse(self) -> A.Expr:
        """Parse exactly one expression spanning the whole input."""
        expr = self.parse_expression(Precedence.LOWEST)
        if self.peek is not None:
            raise self._trailing(self.peek)
        self._advance()
        return expr

    def parse_program(self) -> A.Program:
        statements: list[A.Statement] = []
        while self.current is not None:
            expr = self.parse_expression(Precedence.LOWEST)
            statements.append(A.ExprStatement(span=expr.span, expr=expr))
            if self.peek is not None and self.peek.kind is TokenKind.SEMICOLON:
                self._advance()  # onto ';'
                self._advance()  # past it
                continue
            if self.peek is not None:
                raise self._trailing(self.peek)
            self._advance()
        logger.debug("parsed program with %d statement(s)", len(statements))
        return A.Program.of(statements)

    def _trailing(self, tok: Token) -> ParseError:
        if tok.kind is TokenKind.RPAREN:
            return MismatchedParentheses(span=tok.span, hint="remove the unmatched ')'")
        return InvalidExpression(
            span=tok.span,
            hint=f"unexpected {tok.lexeme!r} after a complete expression; separate statements with ';'",
        )

    # Pratt core

    def parse_expression(self, precedence: Precedence) -> A.Expr:
        self._depth += 1
        try:
            if self._depth > self._max_depth:
                logger.debug("nesting limit %d exceeded", self._max_depth)
                span = self.current.span if self.current is not None else Span.single(self._end)
                raise NestingTooDeep(span=span, limit=self._max_depth)

            left = self._parse_prefix()
            while self.peek is not None and precedence < Precedence.from_token(self.peek.kind):
                self._advance()
                left = self._parse_infix(left)
            return left
        finally:
            self._depth -= 1

    def _parse_prefix(self) -> A.Expr:
        tok = self.current
        if tok is None:
            raise self._eof()

        if tok.kind is TokenKind.INT:
            return A.Int(span=tok.span, value=int(tok.value))
        if tok.kind is TokenKind.FLOAT:
            return A.Float(span=tok.span, value=float(tok.value))
        if tok.kind is TokenKind.TRUE:
            return A.Bool(span=tok.span, value=True)
        if tok.kind is TokenKind.FALSE:
            return A.Bool(span=tok.span, value=False)
        if tok.kind is TokenKind.LPAREN:
            return self._parse_grouped(tok)
        if tok.kind in _UNARY:
            return self._parse_unary(tok)
        raise UnexpectedToken(span=tok.span, description=tok.lexeme)

    def _parse_infix(self, left: A.Expr) -> A.Expr:
        tok = self.current
        if tok is None:
            raise self._eof()
        op = _BINARY.get(tok.kind)
        if op is None:
            raise UnexpectedToken(span=tok.span, description=tok.lexeme)

        precedence = Precedence.from_token(tok.kind)
        self._advance()
        right = self.parse_expression(precedence)
        return A.InfixExpr(span=left.span.merge(right.span), left=left, op=op, right=right)

    def _parse_grouped(self, lparen: Token) -> A.Expr:
        self._advance()  # consume '('
        inner = self.parse_expression(Precedence.LOWEST)
        if self.peek is None or self.peek.kind is not TokenKind.RPAREN:
            raise MismatchedParentheses(
                span=lparen.span.merge(inner.span),
                hint="add a closing ')'",
            )
        self._advance()  # onto ')'
        return A.Grouped(span=lparen.span.merge(self.current.span), inner=inner)

    def _parse_unary(self, tok: Token) -> A.Expr:
        op = _UNARY[tok.kind]
        self._advance()
        operand = self.parse_expression(Precedence.UNARY)
        return A.UnaryExpr(span=tok.span.merge(operand.span), op=op, operand=operand)
