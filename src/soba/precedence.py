from __future__ import annotations

from enum import IntEnum

from .tokens import TokenKind


class Precedence(IntEnum):
    """Binding power, lowest to highest."""

    LOWEST = 0
    LOGICAL_OR = 1  # ||
    LOGICAL_AND = 2  # &&
    COMPARISON = 3  # == != < > <= >=
    SUM = 4  # + -
    PRODUCT = 5  # * /
    UNARY = 6  # -x +x !x
    GROUP = 7  # ()

    @classmethod
    def from_token(cls, kind: TokenKind | None) -> Precedence:
        """Infix precedence of a token kind; ``None`` means end of input."""
        if kind is None:
            return cls.LOWEST
        return _INFIX.get(kind, cls.LOWEST)


_INFIX: dict[TokenKind, Precedence] = {
    TokenKind.OR_OR: Precedence.LOGICAL_OR,
    TokenKind.AND_AND: Precedence.LOGICAL_AND,
    TokenKind.EQUAL: Precedence.COMPARISON,
    TokenKind.NOT_EQUAL: Precedence.COMPARISON,
    TokenKind.LESS: Precedence.COMPARISON,
    TokenKind.GREATER: Precedence.COMPARISON,
    TokenKind.LESS_EQUAL: Precedence.COMPARISON,
    TokenKind.GREATER_EQUAL: Precedence.COMPARISON,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.GROUP,
}
