from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar

from .errors import DivisionByZero, EvalTypeError, Overflow


I32_MIN = -(2**31)
I32_MAX = 2**31 - 1

# Fixed tolerance for numeric equality; kept exactly as-is for reproducibility.
EPSILON = sys.float_info.epsilon


class Value(ABC):
    """Runtime value: ``Int`` (32-bit), ``Float`` (64-bit) or ``Bool``.

    Arithmetic always widens both operands to float and yields a ``Float``.
    """

    __slots__ = ()

    type_name: ClassVar[str]

    @staticmethod
    def from_python(v: int | float | bool) -> Value:
        if isinstance(v, bool):
            return Bool(v)
        if isinstance(v, int):
            return Int(v)
        if isinstance(v, float):
            return Float(v)
        raise TypeError(f"no Value for {type(v).__name__}")

    @abstractmethod
    def as_f64(self) -> float:
        ...

    @abstractmethod
    def as_int(self) -> int | None:
        ...

    @abstractmethod
    def is_truthy(self) -> bool:
        ...

    # Arithmetic

    def add(self, other: Value) -> Value:
        return Float(self.as_f64() + other.as_f64())

    def subtract(self, other: Value) -> Value:
        return Float(self.as_f64() - other.as_f64())

    def multiply(self, other: Value) -> Value:
        return Float(self.as_f64() * other.as_f64())

    def divide(self, other: Value) -> Value:
        divisor = other.as_f64()
        if divisor == 0.0:
            raise DivisionByZero()
        return Float(self.as_f64() / divisor)

    # Unary

    @abstractmethod
    def negate(self) -> Value:
        ...

    def positive(self) -> Value:
        return self

    def logical_not(self) -> Value:
        return Bool(not self.is_truthy())

    # Logical (both operands already evaluated; short-circuiting is the evaluator's job)

    def logical_and(self, other: Value) -> Value:
        if not self.is_truthy():
            return Bool(False)
        return Bool(other.is_truthy())

    def logical_or(self, other: Value) -> Value:
        if self.is_truthy():
            return Bool(True)
        return Bool(other.is_truthy())

    # Comparison

    def equal_to(self, other: Value) -> Value:
        if isinstance(self, Int) and isinstance(other, Int):
            return Bool(self.value == other.value)
        if isinstance(self, Bool) or isinstance(other, Bool):
            return Bool(type(self) is type(other) and self.value == other.value)
        return Bool(abs(self.as_f64() - other.as_f64()) < EPSILON)

    def not_equal_to(self, other: Value) -> Value:
        return Bool(not self.equal_to(other).value)

    def less_than(self, other: Value) -> Value:
        a, b = _ordered(self, other)
        return Bool(a < b)

    def greater_than(self, other: Value) -> Value:
        a, b = _ordered(self, other)
        return Bool(a > b)

    def less_equal(self, other: Value) -> Value:
        a, b = _ordered(self, other)
        return Bool(a <= b)

    def greater_equal(self, other: Value) -> Value:
        a, b = _ordered(self, other)
        return Bool(a >= b)


def _ordered(a: Value, b: Value) -> tuple[int | float, int | float]:
    if isinstance(a, Bool) or isinstance(b, Bool):
        raise EvalTypeError(message=f"cannot order {a.type_name} and {b.type_name}")
    if isinstance(a, Int) and isinstance(b, Int):
        return a.value, b.value
    return a.as_f64(), b.as_f64()


@dataclass(frozen=True, slots=True)
class Int(Value):
    value: int

    type_name: ClassVar[str] = "int"

    def __post_init__(self) -> None:
        if not I32_MIN <= self.value <= I32_MAX:
            raise ValueError(f"{self.value} does not fit in 32 bits")

    def as_f64(self) -> float:
        return float(self.value)

    def as_int(self) -> int | None:
        return self.value

    def is_truthy(self) -> bool:
        return self.value != 0

    def negate(self) -> Value:
        if self.value == I32_MIN:
            raise Overflow()
        return Int(-self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Float(Value):
    value: float

    type_name: ClassVar[str] = "float"

    def as_f64(self) -> float:
        return self.value

    def as_int(self) -> int | None:
        if _integral_i32(self.value):
            return int(self.value)
        return None

    def is_truthy(self) -> bool:
        return self.value != 0.0

    def negate(self) -> Value:
        return Float(-self.value)

    def __str__(self) -> str:
        f = self.value
        if _integral_i32(f):
            return str(int(f))
        if math.isnan(f):
            return "NaN"
        if math.isinf(f):
            return "inf" if f > 0 else "-inf"
        # Shortest round-tripping digits, always positional (no exponent).
        text = format(Decimal(repr(f)), "f")
        return text[:-2] if text.endswith(".0") else text


@dataclass(frozen=True, slots=True)
class Bool(Value):
    value: bool

    type_name: ClassVar[str] = "bool"

    def as_f64(self) -> float:
        return 1.0 if self.value else 0.0

    def as_int(self) -> int | None:
        return 1 if self.value else 0

    def is_truthy(self) -> bool:
        return self.value

    def negate(self) -> Value:
        raise EvalTypeError(message="cannot negate a bool")

    def __str__(self) -> str:
        return "true" if self.value else "false"


def _integral_i32(f: float) -> bool:
    return math.isfinite(f) and f == int(f) and I32_MIN <= f <= I32_MAX
