"""
Token types consumed by the engine.

Tokens live in two places: the pending queue (operators, functions and
open brackets waiting for their place in evaluation order) and the output
sequence (the finished postfix expression).
"""

from dataclasses import dataclass
from typing import Dict, Literal, Tuple, Union

from .values import Value

# ============================================================
# Operator Symbols
# ============================================================

# Postfix factorial. The front end maps a trailing "!" to this symbol.
FACTORIAL = "!!!"

# Prefix negation. The front end maps a "-" in operand position to this symbol.
UNARY_MINUS = "---"

# Priority of the immediate class: applied to the preceding value right away.
PRI_IMMEDIATE = 99

# Priority reserved for "not an operator".
PRI_INVALID = 0

# symbol -> (priority, right-associative)
OPERATOR_PRIORITIES: Dict[str, Tuple[int, bool]] = {
    FACTORIAL: (PRI_IMMEDIATE, False),
    UNARY_MINUS: (20, True),
    "~": (20, True),
    "!": (20, True),
    "**": (17, True),
    "<<": (15, False),
    ">>": (15, False),
    "*": (12, False),
    "/": (12, False),
    "//": (12, False),
    "%": (12, False),
    "+": (8, False),
    "-": (8, False),
    "&": (7, False),
    "^": (7, False),
    "|": (5, False),
    "&&": (4, False),
    "||": (3, False),
    "==": (2, False),
    "!=": (2, False),
    "<": (2, False),
    ">": (2, False),
    "<=": (2, False),
    ">=": (2, False),
}

# Operators that take a single operand.
UNARY_OPERATORS = frozenset({UNARY_MINUS, "~", "!", FACTORIAL})

# Names recognized by push_function_name.
FUNCTION_NAMES: Tuple[str, ...] = (
    "sqr", "sqrt", "cbrt", "exp", "ln", "abs", "signum",
    "round", "ceil", "trunc", "floor", "ratio",
    "sin", "cos", "tan", "asin", "acos", "atan",
    "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
    "norm", "conj", "im", "re", "fract",
    "iif", "gcd", "lcm", "deg", "rad", "fib",
)


def operator_priority(symbol: str) -> Tuple[int, bool]:
    """Returns (priority, right-associative); priority 0 means unknown."""
    return OPERATOR_PRIORITIES.get(symbol, (PRI_INVALID, False))


def is_function_name(name: str) -> bool:
    return name in FUNCTION_NAMES


# ============================================================
# Token Types
# ============================================================


@dataclass(frozen=True)
class Operand:
    """A literal value, ready for the output sequence."""

    value: Value

    @property
    def type(self) -> Literal["Operand"]:
        return "Operand"


@dataclass(frozen=True)
class Operator:
    """An operator with its priority resolved at push time."""

    symbol: str
    priority: int
    right_associative: bool = False

    @property
    def type(self) -> Literal["Operator"]:
        return "Operator"

    @property
    def operand_count(self) -> int:
        return 1 if self.symbol in UNARY_OPERATORS else 2


@dataclass(frozen=True)
class OpenBracket:
    """Group boundary. Never evaluated."""

    output_mark: int = 0
    """Output length when the group (or its latest argument) started."""

    @property
    def type(self) -> Literal["OpenBracket"]:
        return "OpenBracket"


@dataclass
class Function:
    """A pending function call; arity grows while its arguments are pushed."""

    name: str
    arity: int = 0

    @property
    def type(self) -> Literal["Function"]:
        return "Function"


# Union type for all tokens
Entry = Union[Operand, Operator, OpenBracket, Function]
