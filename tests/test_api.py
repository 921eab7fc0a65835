from __future__ import annotations

import pytest

from soba import (
    Bool,
    Float,
    Int,
    ParseError,
    SobaError,
    evaluate_expression,
    evaluate_program,
    parse_source,
)
from soba.errors import (
    DivisionByZero,
    EvalTypeError,
    InvalidNumber,
    MismatchedParentheses,
    NestingTooDeep,
    UnexpectedEof,
    UnexpectedToken,
)


def test_precedence_result() -> None:
    assert evaluate_expression("1 + 2 * 3") == Float(7.0)
    assert evaluate_expression("(1 + 2) * 3") == Float(9.0)
    assert evaluate_expression("10 - 4 - 3") == Float(3.0)
    assert evaluate_expression("2 + 8 / 4") == Float(4.0)


def test_literals_keep_their_type() -> None:
    assert evaluate_expression("42") == Int(42)
    assert evaluate_expression("-10") == Int(-10)
    assert evaluate_expression("+5") == Int(5)
    assert evaluate_expression(".5") == Float(0.5)
    assert evaluate_expression("true") == Bool(True)


def test_division_by_zero() -> None:
    with pytest.raises(DivisionByZero) as e:
        evaluate_expression("7 / 0")
    assert e.value.span is not None and e.value.span.start.offset == 0
    with pytest.raises(DivisionByZero):
        evaluate_expression("1 / (2 - 2.0)")


def test_min_int_literal_cannot_be_written() -> None:
    # 2147483648 is lexed before negation applies, so it is out of range.
    with pytest.raises(UnexpectedToken) as e:
        evaluate_expression("-2147483648")
    assert isinstance(e.value.__cause__, InvalidNumber)


def test_short_circuit() -> None:
    assert evaluate_expression("false && (1/0 > 0)") == Bool(False)
    assert evaluate_expression("true || (1/0 > 0)") == Bool(True)
    with pytest.raises(DivisionByZero):
        evaluate_expression("true && (1/0 > 0)")


def test_equality_and_ordering() -> None:
    assert evaluate_expression("5 == 5.0") == Bool(True)
    assert evaluate_expression("1 == true") == Bool(False)
    assert evaluate_expression("1 != 2") == Bool(True)
    assert evaluate_expression("1 + 1 >= 2") == Bool(True)
    assert evaluate_expression("!(3 < 2) && 1 <= 1.5") == Bool(True)
    with pytest.raises(EvalTypeError):
        evaluate_expression("true < false")


def test_unary_minus_on_bool_is_type_error() -> None:
    with pytest.raises(EvalTypeError) as e:
        evaluate_expression("-true")
    assert "negate" in str(e.value)


def test_program_sequencing() -> None:
    assert evaluate_program("1 + 2; 3 * 4; 10") == Int(10)
    assert evaluate_program("1 + 2; 3 * 4; 10;") == Int(10)
    assert evaluate_program("2 + 3;") == Float(5.0)
    assert evaluate_program("2 + 3; 4 * 5; (10 - 2) / 2") == Float(4.0)


def test_empty_program() -> None:
    assert evaluate_program("") == Int(0)
    assert evaluate_program(" \n\t ") == Int(0)
    assert parse_source("").statements == ()


def test_malformed_input() -> None:
    with pytest.raises(MismatchedParentheses):
        evaluate_expression("(1 + 2")
    with pytest.raises(UnexpectedEof):
        evaluate_expression("+")
    with pytest.raises(ParseError):
        evaluate_expression("1; 2")


def test_error_hierarchy_and_message() -> None:
    with pytest.raises(SobaError) as e:
        evaluate_program("1 +\n  $")
    assert e.value.category == "parse error"
    assert str(e.value) == "2:3: unexpected token: unexpected character: '$'"


def test_error_hint_is_rendered() -> None:
    with pytest.raises(UnexpectedToken) as e:
        evaluate_expression("1 & 2")
    assert "hint: did you mean '&&'?" in str(e.value)


def test_max_depth_is_configurable() -> None:
    src = "-" * 30 + "1"
    assert evaluate_expression(src) == Int(1)
    with pytest.raises(NestingTooDeep):
        evaluate_expression(src, max_depth=10)
    with pytest.raises(NestingTooDeep):
        evaluate_program(src, max_depth=10)
