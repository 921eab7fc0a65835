from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .spans import Span


@dataclass(slots=True)
class SobaError(Exception):
    """Root of every error the tokenizer, parser and evaluator raise."""

    span: Span | None = None
    hint: str | None = None

    category: ClassVar[str] = "error"

    def describe(self) -> str:
        return self.category

    def __str__(self) -> str:
        base = self.describe()
        if self.span is not None:
            base = f"{self.span.format()}: {base}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


# Lexing


@dataclass(slots=True)
class LexError(SobaError):
    category: ClassVar[str] = "lex error"


@dataclass(slots=True)
class InvalidNumber(LexError):
    text: str = ""

    def describe(self) -> str:
        return f"invalid number: {self.text}"


@dataclass(slots=True)
class UnexpectedCharacter(LexError):
    char: str = ""

    def describe(self) -> str:
        return f"unexpected character: '{self.char}'"


@dataclass(slots=True)
class UnterminatedString(LexError):
    # Reserved: the grammar has no string literals yet.
    def describe(self) -> str:
        return "unterminated string"


# Parsing


@dataclass(slots=True)
class ParseError(SobaError):
    category: ClassVar[str] = "parse error"


@dataclass(slots=True)
class UnexpectedToken(ParseError):
    description: str = ""

    def describe(self) -> str:
        return f"unexpected token: {self.description}"


@dataclass(slots=True)
class UnexpectedEof(ParseError):
    def describe(self) -> str:
        return "unexpected end of input"


@dataclass(slots=True)
class MismatchedParentheses(ParseError):
    def describe(self) -> str:
        return "mismatched parentheses"


@dataclass(slots=True)
class InvalidExpression(ParseError):
    def describe(self) -> str:
        return "invalid expression"


@dataclass(slots=True)
class NestingTooDeep(ParseError):
    limit: int = 0

    def describe(self) -> str:
        return f"expression nested deeper than {self.limit} levels"


# Evaluation


@dataclass(slots=True)
class EvalError(SobaError):
    category: ClassVar[str] = "evaluation error"


@dataclass(slots=True)
class DivisionByZero(EvalError):
    def describe(self) -> str:
        return "division by zero"


@dataclass(slots=True)
class Overflow(EvalError):
    def describe(self) -> str:
        return "arithmetic overflow"


@dataclass(slots=True)
class EvalTypeError(EvalError):
    message: str = ""

    def describe(self) -> str:
        return f"type error: {self.message}"


@dataclass(slots=True)
class StackOverflow(EvalError):
    limit: int = 0

    def describe(self) -> str:
        return f"stack overflow: evaluation deeper than {self.limit} levels"
