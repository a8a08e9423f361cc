"""
Tests for built-in functions.
"""

import math
from fractions import Fraction

import pytest

from stackcalc import (
    BUILTIN_FUNCTIONS,
    DEFAULT_EXPRESSION_LIMITS,
    FUNCTION_NAMES,
    ArgumentOutOfRangeError,
    BuiltinContext,
    ExpressionLimits,
    FunctionNoArgsError,
    FunctionNotEnoughArgsError,
    FunctionUnfinishedError,
    InvalidOpError,
    LimitExceededError,
    NegativeIntegerError,
    OnlyIntegerError,
    call_builtin,
)


def call(name, *args, limits=None):
    """Calls a built-in with all given arguments on a fresh stack."""
    stack = list(args)
    context = BuiltinContext(limits or DEFAULT_EXPRESSION_LIMITS)
    call_builtin(name, len(args), stack, context)
    assert len(stack) == 1
    return stack[0]


class TestRegistry:
    """Tests for the function registry."""

    def test_every_recognized_name_has_a_handler(self):
        assert set(BUILTIN_FUNCTIONS) == set(FUNCTION_NAMES)

    def test_unknown_function(self):
        with pytest.raises(InvalidOpError):
            call("nope", 1)

    def test_only_declared_arguments_are_consumed(self):
        stack = [100, 4]
        call_builtin("sqr", 1, stack, BuiltinContext(DEFAULT_EXPRESSION_LIMITS))
        assert stack == [100, 16]


class TestSingleArgument:
    """Tests for single-argument functions."""

    def test_sqr_and_sqrt(self):
        assert call("sqr", 5) == 25
        assert call("sqrt", 16) == 4
        assert call("sqrt", -4) == 2j

    def test_rounding(self):
        assert call("round", Fraction(5, 2)) == 3
        assert call("floor", Fraction(-1, 2)) == -1
        assert call("ceil", 1.2) == 2.0
        assert call("trunc", -1.7) == -1.0

    def test_complex_parts(self):
        assert call("re", complex(3, 4)) == 3.0
        assert call("im", complex(3, 4)) == 4.0
        assert call("norm", complex(3, 4)) == 5.0
        assert call("conj", complex(3, 4)) == complex(3, -4)

    def test_extra_arguments_use_the_first(self):
        # Long-standing behavior, kept for compatibility; not a stable contract.
        assert call("sqr", 4, 2) == 16
        assert call("abs", -3, 7, 9) == 3

    def test_no_arguments(self):
        with pytest.raises(FunctionNoArgsError, match="sqrt: no arguments"):
            call("sqrt")

    def test_unfinished_call(self):
        stack = [4]
        with pytest.raises(FunctionUnfinishedError, match="unfinished"):
            call_builtin("sqr", 2, stack, BuiltinContext(DEFAULT_EXPRESSION_LIMITS))


class TestMultiArgument:
    """Tests for iif, gcd and lcm."""

    def test_iif(self):
        assert call("iif", 0, 10, 20) == 20
        assert call("iif", 1, 10, 20) == 10
        assert call("iif", Fraction(1, 2), 10, 20) == 10

    def test_iif_ignores_extra_arguments(self):
        assert call("iif", 1, 10, 20, 30) == 10

    def test_iif_needs_three_arguments(self):
        with pytest.raises(FunctionNotEnoughArgsError, match="at least 3"):
            call("iif", 1, 10)

    def test_gcd_and_lcm(self):
        assert call("gcd", 12, 18, 30) == 6
        assert call("lcm", 4, 6) == 12
        assert call("lcm", 2, 3, 4) == 12

    def test_gcd_needs_two_arguments(self):
        with pytest.raises(FunctionNotEnoughArgsError):
            call("gcd", 12)

    def test_gcd_rejects_non_integers(self):
        with pytest.raises(OnlyIntegerError):
            call("gcd", 2.5, 5)

    def test_argument_count_limit(self):
        limits = ExpressionLimits(max_function_args=2)
        with pytest.raises(LimitExceededError, match="max_function_args"):
            call("gcd", 1, 2, 3, limits=limits)


class TestAngleConversion:
    """Tests for deg and rad."""

    def test_deg(self):
        assert call("deg", math.pi) == pytest.approx(180.0)

    def test_rad(self):
        assert call("rad", 180) == pytest.approx(math.pi)


class TestFib:
    """Tests for fib."""

    def test_small_values(self):
        assert call("fib", 0) == 0
        assert call("fib", 1) == 1
        assert call("fib", 10) == 55

    def test_negative_argument(self):
        with pytest.raises(NegativeIntegerError, match="negative integer"):
            call("fib", -1)

    def test_non_integer_argument(self):
        with pytest.raises(OnlyIntegerError):
            call("fib", 2.0)

    def test_argument_above_limit(self):
        with pytest.raises(ArgumentOutOfRangeError):
            call("fib", 100_001)

    def test_configured_limit(self):
        limits = ExpressionLimits(max_fib_argument=10)
        assert call("fib", 10, limits=limits) == 55
        with pytest.raises(ArgumentOutOfRangeError, match=r"\[0..10\]"):
            call("fib", 11, limits=limits)
