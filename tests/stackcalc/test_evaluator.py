"""
Tests for expression evaluation from source text.
"""

import logging
from fractions import Fraction

import pytest

from stackcalc import (
    ArgumentOutOfRangeError,
    ClosingBracketMismatchError,
    DivisionByZeroError,
    EmptyExpressionError,
    ExpressionLimits,
    FunctionNoArgsError,
    InsufficientOpsError,
    InvalidOpError,
    LimitExceededError,
    NegativeIntegerError,
    TokenizerError,
    TooManyOpsError,
    calculate,
    evaluate,
    evaluate_tokens,
    tokenize,
)


class TestScenarios:
    """End-to-end evaluation of whole expressions."""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("2+3*2+5", 13),
            ("2+3*(2+5)+1", 24),
            ("2+sqr(5)-sqr(4;2)", 11),
            ("5+2**2**3+1", 262),
            ("3!+(3+2)!", 126),
            ("2-3-1", -2),
            ("gcd(12;18;30)", 6),
            ("iif(0;10;20)", 20),
            ("iif(1;10;20)", 10),
            ("fib(10)", 55),
            ("-3!", -6),
            ("(-2)**2", 4),
            ("2*(3+4", 14),
            ("(1 < 2) && (2 < 3)", 1),
            ("0x10 | 1", 17),
        ],
    )
    def test_evaluates(self, expression, expected):
        assert calculate(expression) == expected

    def test_exact_rational_result(self):
        assert calculate("10/4") == Fraction(5, 2)
        assert calculate("1/3 + 1/6") == Fraction(1, 2)

    def test_complex_result(self):
        assert calculate("sqrt(-4)") == 2j
        assert calculate("(1+2i)*(1-2i)") == 5.0

    def test_float_result(self):
        assert calculate("sin(0) + 0.5") == 0.5

    @pytest.mark.parametrize(
        "open_form, closed_form",
        [
            ("2*(3+4", "2*(3+4)"),
            ("sqr(5", "sqr(5)"),
            ("gcd(12;18;30", "gcd(12;18;30)"),
            ("2+sqr(4;2", "2+sqr(4;2)"),
            ("iif(0;10;sqr(3", "iif(0;10;sqr(3))"),
            ("1+sqrt(sqr(2+2", "1+sqrt(sqr(2+2))"),
        ],
    )
    def test_trailing_brackets_may_be_omitted(self, open_form, closed_form):
        assert calculate(open_form) == calculate(closed_form)


class TestErrors:
    """Tests for typed failures."""

    def test_trailing_operator(self):
        with pytest.raises(TooManyOpsError):
            calculate("2+")

    def test_unmatched_bracket(self):
        with pytest.raises(ClosingBracketMismatchError) as exc_info:
            calculate("2)")
        assert exc_info.value.position == 1
        assert exc_info.value.expression == "2)"

    def test_unknown_function_reports_position(self):
        with pytest.raises(InvalidOpError) as exc_info:
            calculate("2 + foo(1)")
        assert exc_info.value.position == 4

    def test_reduction_errors_carry_expression(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            calculate("1/0")
        assert exc_info.value.expression == "1/0"
        assert exc_info.value.position is None

    def test_missing_operator(self):
        with pytest.raises(InsufficientOpsError):
            calculate("(1)(2)")

    def test_empty_expression(self):
        with pytest.raises(EmptyExpressionError):
            calculate("   ")

    def test_empty_call(self):
        with pytest.raises(FunctionNoArgsError):
            calculate("sqr()")

    def test_fib_domain(self):
        with pytest.raises(NegativeIntegerError):
            calculate("fib(-1)")
        with pytest.raises(ArgumentOutOfRangeError):
            calculate("fib(100001)")

    def test_tokenizer_error(self):
        with pytest.raises(TokenizerError):
            calculate("2 $ 3")

    def test_token_limit(self):
        with pytest.raises(LimitExceededError, match="max_tokens"):
            calculate("1+1+1", ExpressionLimits(max_tokens=4))

    def test_bracket_depth_limit(self):
        with pytest.raises(LimitExceededError, match="max_bracket_depth"):
            calculate("((1))", ExpressionLimits(max_bracket_depth=1))

    def test_power_exponent_limit(self):
        with pytest.raises(ArgumentOutOfRangeError, match=r"\*\*"):
            calculate("2**2**40")

    def test_shift_count_limit(self):
        with pytest.raises(ArgumentOutOfRangeError, match="<<"):
            calculate("1 << 100000000000000000000")

    def test_error_context_formatting(self):
        with pytest.raises(InvalidOpError) as exc_info:
            calculate("1+nope(2)")
        assert exc_info.value.format_with_context() == (
            "Invalid operator: 'nope'\n  1+nope(2)\n    ^"
        )


class TestEvaluate:
    """Tests for evaluate() results."""

    def test_success(self):
        result = evaluate("2+2")
        assert result.success
        assert result.value == 4
        assert result.error is None
        assert result.failure is None

    def test_failure(self):
        result = evaluate("1/0")
        assert not result.success
        assert result.value is None
        assert result.error == "/: division by zero"
        assert isinstance(result.failure, DivisionByZeroError)

    def test_oversized_operations_fail_with_typed_errors(self):
        for expression in ("2**2**40", "1 << 100000000000000000000", "3 << 10 ** 6"):
            result = evaluate(expression)
            assert not result.success
            assert isinstance(result.failure, ArgumentOutOfRangeError)

    def test_failure_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="stackcalc.evaluator"):
            evaluate("2+")
        assert "expression_evaluation_failed" in caplog.messages

    def test_evaluate_tokens(self):
        assert evaluate_tokens(tokenize("2*(3+4)")) == 14
