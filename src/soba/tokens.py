from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span


class TokenKind(str, Enum):
    # Literals
    INT = "INT"
    FLOAT = "FLOAT"
    TRUE = "true"
    FALSE = "false"

    # Arithmetic
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"

    # Logical
    BANG = "!"
    AND_AND = "&&"
    OR_OR = "||"

    # Comparison
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="

    # Delimiters
    LPAREN = "("
    RPAREN = ")"
    SEMICOLON = ";"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span
    value: int | float | None = None  # parsed value of INT/FLOAT literals

    def __str__(self) -> str:
        return self.lexeme

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, {self.span.format()})"
