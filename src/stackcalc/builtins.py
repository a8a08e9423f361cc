"""
Built-in functions for the calculation engine.

All built-in functions are pure and deterministic. A function receives the
arguments it was called with, in the order they were supplied.

Argument handling semantics:
- Single-argument functions called with several arguments consume all of
  them but compute with the first one only: sqr(4; 2) = sqr(4) = 16.
  This mirrors long-standing behavior and is not a guaranteed contract.
- iif uses the first three arguments as condition, then-value and
  else-value; any further arguments are discarded.
- gcd and lcm fold over every argument.
"""

import math
from typing import Callable, Dict, List, Mapping, Sequence

from . import values
from .errors import (
    ArgumentOutOfRangeError,
    FunctionNoArgsError,
    FunctionNotEnoughArgsError,
    FunctionUnfinishedError,
    InvalidOpError,
    NegativeIntegerError,
    OnlyIntegerError,
)
from .limits import ExpressionLimits, check_function_arg_count
from .values import Value, ValueKind, kind_of


class BuiltinContext:
    """Context passed to built-in functions."""

    def __init__(self, limits: ExpressionLimits):
        self.limits = limits


# Signature of a built-in function.
BuiltinFunction = Callable[[Sequence[Value], BuiltinContext], Value]

# Function registry for built-in functions.
FunctionRegistry = Dict[str, BuiltinFunction]

# Functions that need more than one argument.
MINIMUM_ARGUMENTS: Mapping[str, int] = {
    "iif": 3,
    "gcd": 2,
    "lcm": 2,
}


def _single(fn: Callable[[Value], Value]) -> BuiltinFunction:
    """Wraps a one-argument value operation as a built-in."""

    def builtin(args: Sequence[Value], ctx: BuiltinContext) -> Value:
        return fn(args[0])

    builtin.__name__ = f"_{fn.__name__}"
    return builtin


# ============================================================
# Multi-argument Helpers
# ============================================================


def _iif(args: Sequence[Value], ctx: BuiltinContext) -> Value:
    """iif(cond; a; b) - Returns a when cond is non-zero, otherwise b."""
    condition, when_true, when_false = args[0], args[1], args[2]
    return when_false if values.is_zero(condition) else when_true


def _fold(
    args: Sequence[Value], fn: Callable[[Value, Value], Value]
) -> Value:
    """Folds pairwise from the last argument to the first."""
    result = args[-1]
    for value in reversed(args[:-1]):
        result = fn(result, value)
    return result


def _gcd(args: Sequence[Value], ctx: BuiltinContext) -> Value:
    """gcd(a; b; ...) - Greatest common divisor of integers."""
    return _fold(args, values.gcd)


def _lcm(args: Sequence[Value], ctx: BuiltinContext) -> Value:
    """lcm(a; b; ...) - Least common multiple of integers."""
    return _fold(args, values.lcm)


# ============================================================
# Angle Conversion
# ============================================================


def _deg(args: Sequence[Value], ctx: BuiltinContext) -> Value:
    """deg(x) - Converts radians to degrees."""
    return values.to_float(args[0]) * 180.0 / math.pi


def _rad(args: Sequence[Value], ctx: BuiltinContext) -> Value:
    """rad(x) - Converts degrees to radians."""
    return values.to_float(args[0]) * math.pi / 180.0


# ============================================================
# Sequences
# ============================================================


def _fib(args: Sequence[Value], ctx: BuiltinContext) -> Value:
    """
    fib(n) -> integer

    Returns the n-th Fibonacci number, fib(0) = 0, fib(1) = 1.
    n must be an integer in [0, max_fib_argument]. Computed iteratively.
    """
    n = args[0]
    if kind_of(n) != ValueKind.INTEGER:
        raise OnlyIntegerError("fib")
    if n < 0:
        raise NegativeIntegerError("fib")
    limit = ctx.limits.max_fib_argument
    if n > limit:
        raise ArgumentOutOfRangeError("fib", str(n), f"[0..{limit}]")

    previous, current = 0, 1
    for _ in range(n):
        previous, current = current, previous + current
    return previous


# ============================================================
# Registry
# ============================================================

# Registry of all built-in functions.
BUILTIN_FUNCTIONS: FunctionRegistry = {
    # Powers and roots
    "sqr": _single(values.sqr),
    "sqrt": _single(values.sqrt),
    "cbrt": _single(values.cbrt),
    "exp": _single(values.exp),
    "ln": _single(values.ln),
    # Magnitude and rounding
    "abs": _single(values.absolute),
    "signum": _single(values.signum),
    "round": _single(values.round_),
    "ceil": _single(values.ceil),
    "trunc": _single(values.trunc),
    "floor": _single(values.floor),
    "ratio": _single(values.ratio),
    "fract": _single(values.fract),
    # Trigonometry
    "sin": _single(values.sin),
    "cos": _single(values.cos),
    "tan": _single(values.tan),
    "asin": _single(values.asin),
    "acos": _single(values.acos),
    "atan": _single(values.atan),
    "sinh": _single(values.sinh),
    "cosh": _single(values.cosh),
    "tanh": _single(values.tanh),
    "asinh": _single(values.asinh),
    "acosh": _single(values.acosh),
    "atanh": _single(values.atanh),
    # Complex parts
    "norm": _single(values.norm),
    "conj": _single(values.conj),
    "im": _single(values.im),
    "re": _single(values.re),
    # Multi-argument helpers
    "iif": _iif,
    "gcd": _gcd,
    "lcm": _lcm,
    # Angle conversion
    "deg": _deg,
    "rad": _rad,
    # Sequences
    "fib": _fib,
}


def _check_arguments(name: str, arity: int, available: int) -> None:
    minimum = MINIMUM_ARGUMENTS.get(name, 1)
    if minimum > 1:
        if arity < minimum or available < arity:
            raise FunctionNotEnoughArgsError(name, minimum)
        return
    if arity == 0:
        raise FunctionNoArgsError(name)
    if available < arity:
        raise FunctionUnfinishedError(name)


def call_builtin(
    name: str,
    arity: int,
    stack: List[Value],
    context: BuiltinContext,
) -> None:
    """
    Calls a built-in function on the operand stack.

    Pops ``arity`` values from the stack and pushes the function result.

    Raises:
        InvalidOpError: If the function doesn't exist
        FunctionNoArgsError: If a single-argument function got no arguments
        FunctionUnfinishedError: If the stack holds fewer values than declared
        FunctionNotEnoughArgsError: If a multi-argument function got too few
        DomainError: If the function rejects its argument
    """
    fn = BUILTIN_FUNCTIONS.get(name)
    if fn is None:
        raise InvalidOpError(name)

    check_function_arg_count(arity, context.limits)
    _check_arguments(name, arity, len(stack))

    args = stack[len(stack) - arity :]
    del stack[len(stack) - arity :]
    stack.append(fn(args, context))

