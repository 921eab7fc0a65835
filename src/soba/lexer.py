from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Protocol

from .errors import InvalidNumber, UnexpectedCharacter
from .spans import Position, Span
from .tokens import Token, TokenKind


_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

_DIGITS = frozenset("0123456789")
_IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_IDENT_CONT = _IDENT_START | _DIGITS

_KEYWORDS = {
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}

_SINGLE = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ";": TokenKind.SEMICOLON,
}

# first char -> (second char, two-char kind, one-char kind or None if the pair is required)
_PAIRED = {
    "&": ("&", TokenKind.AND_AND, None),
    "|": ("|", TokenKind.OR_OR, None),
    "=": ("=", TokenKind.EQUAL, None),
    "!": ("=", TokenKind.NOT_EQUAL, TokenKind.BANG),
    "<": ("=", TokenKind.LESS_EQUAL, TokenKind.LESS),
    ">": ("=", TokenKind.GREATER_EQUAL, TokenKind.GREATER),
}


class TokenSource(Protocol):
    """Anything the parser can pull tokens from.

    ``next_token`` returns ``None`` once the input is exhausted and keeps
    returning ``None`` afterwards. Lexical problems are raised as ``LexError``.
    """

    def next_token(self) -> Token | None: ...


class _Cursor:
    __slots__ = ("src", "i", "pos")

    def __init__(self, src: str) -> None:
        self.src = src
        self.i = 0
        self.pos = Position.start()

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self) -> str:
        if self.eof():
            return ""
        return self.src[self.i]

    def advance(self) -> str:
        if self.eof():
            return ""
        ch = self.src[self.i]
        self.i += 1
        self.pos = self.pos.advance(ch)
        return ch


class Tokenizer:
    """Lazy, single-pass tokenizer over a source string.

    The scan position only moves forward; to tokenize the same text again,
    build a new ``Tokenizer``.
    """

    def __init__(self, src: str) -> None:
        self._cur = _Cursor(src)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        tok = self.next_token()
        if tok is None:
            raise StopIteration
        return tok

    def next_token(self) -> Token | None:
        cur = self._cur
        while not cur.eof() and cur.peek().isspace():
            cur.advance()

        if cur.eof():
            return None

        ch = cur.peek()
        if ch in _DIGITS or ch == ".":
            return self._read_number()
        if ch in _IDENT_START:
            return self._read_identifier()

        start = cur.pos
        kind = _SINGLE.get(ch)
        if kind is not None:
            cur.advance()
            return Token(kind, ch, Span(start, cur.pos))

        paired = _PAIRED.get(ch)
        if paired is not None:
            second, double, single = paired
            cur.advance()
            if cur.peek() == second:
                cur.advance()
                return Token(double, ch + second, Span(start, cur.pos))
            if single is None:
                raise UnexpectedCharacter(
                    span=Span(start, cur.pos),
                    char=ch,
                    hint=f"did you mean '{ch}{second}'?",
                )
            return Token(single, ch, Span(start, cur.pos))

        cur.advance()
        raise UnexpectedCharacter(span=Span(start, cur.pos), char=ch)

    def _read_number(self) -> Token:
        cur = self._cur
        start = cur.pos
        buf: list[str] = []
        has_dot = False

        if cur.peek() == ".":
            has_dot = True
            buf.append(cur.advance())

        while not cur.eof():
            c = cur.peek()
            if c in _DIGITS:
                buf.append(cur.advance())
            elif c == "." and not has_dot:
                has_dot = True
                buf.append(cur.advance())
            else:
                # A second '.' ends the literal and starts the next token.
                break

        lexeme = "".join(buf)
        span = Span(start, cur.pos)
        if has_dot:
            try:
                value: int | float = float(lexeme)
            except ValueError:
                raise InvalidNumber(span=span, text=lexeme) from None
            if not math.isfinite(value):
                raise InvalidNumber(
                    span=span,
                    text=lexeme,
                    hint="float literals must be finite 64-bit values",
                )
            return Token(TokenKind.FLOAT, lexeme, span, value)

        try:
            value = int(lexeme)
        except ValueError:
            # Past the interpreter's int-string digit limit.
            value = _I32_MAX + 1
        if not _I32_MIN <= value <= _I32_MAX:
            raise InvalidNumber(
                span=span,
                text=lexeme,
                hint="integers must fit in 32 bits; add '.0' for a float",
            )
        return Token(TokenKind.INT, lexeme, span, value)

    def _read_identifier(self) -> Token:
        cur = self._cur
        start = cur.pos
        buf: list[str] = []
        while not cur.eof() and cur.peek() in _IDENT_CONT:
            buf.append(cur.advance())

        lexeme = "".join(buf)
        span = Span(start, cur.pos)
        kind = _KEYWORDS.get(lexeme)
        if kind is None:
            raise UnexpectedCharacter(
                span=span,
                char=lexeme[0],
                hint="only the keywords 'true' and 'false' are supported",
            )
        return Token(kind, lexeme, span)


def tokenize(src: str) -> list[Token]:
    return list(Tokenizer(src))
