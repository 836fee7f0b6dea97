"""Tests for the totx evaluator and the source pipeline.

Covers:
- Arithmetic, comparison, equality, truthiness
- String concatenation and type errors
- Division by zero, overflow, nesting depth
- run_source / run_script
"""

from __future__ import annotations

import pytest

from totx.core.config import InterpreterConfig
from totx.core.errors import (
    DivisionByZeroError,
    EvaluationDepthError,
    EvaluationError,
    InvalidOperatorError,
    LexError,
    NumericOverflowError,
    ParseError,
    ParseErrors,
    TypeMismatchError,
)
from totx.core.expression_lang import Interpreter, evaluate, parse, run_script, run_source, scan
from totx.core.ir import (
    INT64_MAX,
    INT64_MIN,
    BinaryExpr,
    GroupingExpr,
    Literal,
    LiteralExpr,
    Token,
    TokenKind,
    UnaryExpr,
)


def ev(source: str) -> Literal:
    return evaluate(parse(scan(source)))


class TestArithmetic:
    def test_addition(self) -> None:
        assert ev("5 + 5") == Literal.number(10)
        assert repr(ev("5 + 5")) == "Number(10)"

    def test_grouping_and_division(self) -> None:
        assert ev("(10 + 2) / 2") == Literal.number(6)

    def test_precedence(self) -> None:
        assert ev("1 + 2 * 3") == Literal.number(7)

    def test_left_associative_subtraction(self) -> None:
        assert ev("10 - 4 - 3") == Literal.number(3)

    def test_integer_division(self) -> None:
        assert ev("7 / 2") == Literal.number(3)

    def test_division_truncates_toward_zero(self) -> None:
        assert ev("-7 / 2") == Literal.number(-3)
        assert ev("7 / -2") == Literal.number(-3)
        assert ev("-7 / -2") == Literal.number(3)

    def test_unary_minus_negates(self) -> None:
        assert ev("-5") == Literal.number(-5)
        assert ev("--5") == Literal.number(5)
        assert ev("-(2 - 7)") == Literal.number(5)

    def test_unary_minus_requires_number(self) -> None:
        with pytest.raises(TypeMismatchError, match="Operand must be a number"):
            ev('-"a"')

    def test_numbers_only(self) -> None:
        with pytest.raises(TypeMismatchError, match="Operands must be numbers"):
            ev('"a" * 2')
        with pytest.raises(TypeMismatchError):
            ev("true - 1")


class TestStrings:
    def test_concatenation(self) -> None:
        assert ev('"con" + "cat"') == Literal.string("concat")

    def test_empty_concatenation(self) -> None:
        assert ev('"" + ""') == Literal.string("")

    def test_mixed_plus_is_an_error(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            ev('"test" + 1')
        assert str(exc_info.value) == (
            "[Line - 1 ] Error  at '+' : Operands must be two numbers or two strings."
        )

    def test_bool_plus_is_an_error(self) -> None:
        with pytest.raises(TypeMismatchError):
            ev("true + true")


class TestComparison:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("1 < 2", True),
            ("2 < 1", False),
            ("2 <= 2", True),
            ("3 > 2", True),
            ("2 >= 3", False),
        ],
    )
    def test_numbers(self, source: str, expected: bool) -> None:
        assert ev(source) == Literal.boolean(expected)

    def test_strings_are_not_ordered(self) -> None:
        with pytest.raises(TypeMismatchError):
            ev('"a" < "b"')

    def test_chained_comparison_is_a_type_error(self) -> None:
        # (1 < 2) < 3 compares a Bool with a Number
        with pytest.raises(TypeMismatchError):
            ev("1 < 2 < 3")


class TestEquality:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("1 == 1", True),
            ("1 != 1", False),
            ('"a" == "a"', True),
            ('"a" == "b"', False),
            ("null == null", True),
            ("true == true", True),
            ("true != false", True),
            ("1 == true", False),
            ("0 == false", False),
            ('1 == "1"', False),
            ("null == false", False),
        ],
    )
    def test_equality(self, source: str, expected: bool) -> None:
        assert ev(source) == Literal.boolean(expected)


class TestTruthiness:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("!true", False),
            ("!false", True),
            ("!null", True),
            ("!0", False),
            ('!""', False),
            ("!!1", True),
        ],
    )
    def test_bang(self, source: str, expected: bool) -> None:
        assert ev(source) == Literal.boolean(expected)


class TestComma:
    def test_returns_right_operand(self) -> None:
        assert ev("1, 2") == Literal.number(2)

    def test_evaluates_both_sides(self) -> None:
        with pytest.raises(DivisionByZeroError):
            ev("1 / 0, 2")


class TestRuntimeErrors:
    def test_division_by_zero_after_successful_parse(self) -> None:
        expr = parse(scan("0 / 0"))
        with pytest.raises(DivisionByZeroError) as exc_info:
            evaluate(expr)
        assert str(exc_info.value) == "[Line - 1 ] Error  at '/' : Division by zero."

    def test_overflow(self) -> None:
        with pytest.raises(NumericOverflowError):
            ev(f"{INT64_MAX} + 1")

    def test_overflow_on_multiplication(self) -> None:
        with pytest.raises(NumericOverflowError):
            ev(f"{INT64_MAX} * 2")

    def test_min_value_reachable(self) -> None:
        assert ev(f"-{INT64_MAX} - 1") == Literal.number(INT64_MIN)

    def test_negating_min_value_overflows(self) -> None:
        with pytest.raises(NumericOverflowError):
            ev(f"-(-{INT64_MAX} - 1)")

    def test_min_value_divided_by_minus_one_overflows(self) -> None:
        with pytest.raises(NumericOverflowError):
            ev(f"(-{INT64_MAX} - 1) / -1")

    def test_error_line(self) -> None:
        with pytest.raises(EvaluationError) as exc_info:
            ev("1 +\n\n true")
        assert exc_info.value.line == 1

    def test_right_operand_evaluated_first(self) -> None:
        # Both sides fail; the right-hand error is the one reported.
        with pytest.raises(TypeMismatchError):
            ev("(1 / 0) + (-true)")


class TestInterpreterInternals:
    def test_invalid_unary_operator(self) -> None:
        expr = UnaryExpr(
            operator=Token(kind=TokenKind.PLUS, lexeme="+"),
            operand=LiteralExpr(value=Literal.number(1)),
        )
        with pytest.raises(InvalidOperatorError):
            Interpreter().evaluate(expr)

    def test_invalid_binary_operator(self) -> None:
        one = LiteralExpr(value=Literal.number(1))
        expr = BinaryExpr(operator=Token(kind=TokenKind.DOT, lexeme="."), left=one, right=one)
        with pytest.raises(InvalidOperatorError, match="Invalid operator"):
            Interpreter().evaluate(expr)

    def test_depth_limit(self) -> None:
        expr = LiteralExpr(value=Literal.number(1))
        for _ in range(20):
            expr = GroupingExpr(inner=expr)
        with pytest.raises(EvaluationDepthError):
            Interpreter(max_depth=10).evaluate(expr)

    def test_depth_resets_after_error(self) -> None:
        interpreter = Interpreter()
        with pytest.raises(DivisionByZeroError):
            interpreter.evaluate(parse(scan("1 / 0")))
        assert interpreter.evaluate(parse(scan("1 + 1"))) == Literal.number(2)

    def test_long_left_chain(self) -> None:
        source = " + ".join(["1"] * 1500)
        assert ev(source) == Literal.number(1500)

    def test_flat_chain_is_not_nesting(self) -> None:
        source = " - ".join(["1"] * 300)
        assert Interpreter(max_depth=4).evaluate(parse(scan(source))) == Literal.number(-298)

    def test_chain_error_reports_failing_operator(self) -> None:
        with pytest.raises(DivisionByZeroError) as exc_info:
            ev("1 +\n2 -\n3 / 0 * 4")
        assert exc_info.value.line == 3

    def test_chain_right_operands_first(self) -> None:
        # The outermost right operand fails before the inner division is reached.
        with pytest.raises(TypeMismatchError):
            ev("1 / 0 + 2 + (-true)")

    def test_right_nested_tree_counts_depth(self) -> None:
        one = LiteralExpr(value=Literal.number(1))
        expr = one
        for _ in range(20):
            expr = BinaryExpr(operator=Token(kind=TokenKind.PLUS, lexeme="+"), left=one, right=expr)
        assert Interpreter().evaluate(expr) == Literal.number(21)
        with pytest.raises(EvaluationDepthError):
            Interpreter(max_depth=10).evaluate(expr)


class TestRunSource:
    def test_value(self) -> None:
        assert run_source("(10 + 2) / 2") == Literal.number(6)

    def test_lex_error(self) -> None:
        with pytest.raises(LexError):
            run_source('"open')

    def test_parse_error(self) -> None:
        with pytest.raises(ParseError):
            run_source("(1")

    def test_runtime_error(self) -> None:
        with pytest.raises(DivisionByZeroError):
            run_source("0 / 0")

    def test_config_disables_comma(self) -> None:
        assert run_source("1, 2") == Literal.number(2)
        with pytest.raises(ParseError):
            run_source("1, 2", InterpreterConfig(comma_operator=False))

    def test_config_depth(self) -> None:
        with pytest.raises(ParseError, match="nesting too deep"):
            run_source("((((1))))", InterpreterConfig(max_depth=3))

    def test_long_chain(self) -> None:
        assert run_source(" + ".join(["1"] * 300)) == Literal.number(300)


class TestRunScript:
    def test_values_in_order(self) -> None:
        assert run_script("1 + 2; \"a\" + \"b\"; !true;") == [
            Literal.number(3),
            Literal.string("ab"),
            Literal.boolean(False),
        ]

    def test_syntax_errors_prevent_evaluation(self) -> None:
        # The division by zero is never reached.
        with pytest.raises(ParseErrors):
            run_script("1 / 0; 2 +;")

    def test_first_runtime_error_stops(self) -> None:
        with pytest.raises(DivisionByZeroError):
            run_script("1; 1 / 0; 2;")

    def test_empty(self) -> None:
        assert run_script("// nothing here\n") == []
