"""
Resource limits for tokenizing and evaluating expressions.

These limits protect against resource exhaustion from pathological
token streams and from arguments that would make a single value
operation run for too long.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class ExpressionLimits:
    """Expression limits configuration."""

    # Maximum expression string length in characters
    max_expression_length: int = 4096

    # Maximum number of tokens pushed into one engine
    max_tokens: int = 100_000

    # Maximum nesting of open brackets
    max_bracket_depth: int = 10_000

    # Maximum number of arguments in one function call
    max_function_args: int = 1024

    # Largest accepted factorial argument
    max_factorial_argument: int = 100_000

    # Largest accepted fib argument
    max_fib_argument: int = 100_000

    # Largest integer exponent magnitude of an exact power
    max_power_exponent: int = 100_000

    # Largest accepted left shift count
    max_shift_count: int = 100_000


# Default expression limits.
DEFAULT_EXPRESSION_LIMITS = ExpressionLimits()


def check_expression_length(
    expression: str, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if len(expression) > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length", limits.max_expression_length, len(expression)
        )


def check_token_count(count: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates the number of tokens pushed so far."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_tokens:
        raise LimitExceededError("max_tokens", limits.max_tokens, count)


def check_bracket_depth(depth: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates bracket nesting depth while tokens are pushed."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if depth > limits.max_bracket_depth:
        raise LimitExceededError("max_bracket_depth", limits.max_bracket_depth, depth)


def check_function_arg_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates function argument count."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_function_args:
        raise LimitExceededError("max_function_args", limits.max_function_args, count)
