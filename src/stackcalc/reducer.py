"""
Postfix reducer.

Replays a finished output sequence against a fresh operand stack and
produces the single resulting value.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, cast

from . import values
from .builtins import BuiltinContext, call_builtin
from .errors import (
    EmptyExpressionError,
    InsufficientOpsError,
    InvalidOpError,
    TooManyOpsError,
    UnreachableError,
)
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .tokens import FACTORIAL, UNARY_MINUS, Entry, Function, Operand, Operator
from .values import Value, get_type_name

logger = logging.getLogger("stackcalc.reducer")

UnaryHandler = Callable[[Value], Value]
BinaryHandler = Callable[[Value, Value], Value]

UNARY_HANDLERS: Dict[str, UnaryHandler] = {
    UNARY_MINUS: values.negate,
    "!": values.logical_not,
    "~": values.bit_not,
}

BINARY_HANDLERS: Dict[str, BinaryHandler] = {
    "+": values.add,
    "-": values.subtract,
    "*": values.multiply,
    "/": values.divide,
    "//": values.div_int,
    "%": values.remainder,
    "**": values.power,
    "<<": values.shift_left,
    ">>": values.shift_right,
    "&": values.bit_and,
    "|": values.bit_or,
    "^": values.bit_xor,
    "&&": values.logical_and,
    "||": values.logical_or,
    "==": values.eq,
    "!=": values.neq,
    "<": values.less,
    "<=": values.less_eq,
    ">": values.greater,
    ">=": values.greater_eq,
}


class Reducer:
    """Reduces a postfix sequence with an operand stack."""

    def __init__(self, limits: Optional[ExpressionLimits] = None):
        self._limits = limits or DEFAULT_EXPRESSION_LIMITS
        self._context = BuiltinContext(limits=self._limits)
        self._values: List[Value] = []

    def reduce(self, output: Sequence[Entry]) -> Value:
        if not output:
            raise EmptyExpressionError()

        self._values = []
        for entry in output:
            entry_type = entry.type
            if entry_type == "Operand":
                self._values.append(cast(Operand, entry).value)
            elif entry_type == "Operator":
                self._apply_operator(cast(Operator, entry))
            elif entry_type == "Function":
                function = cast(Function, entry)
                call_builtin(function.name, function.arity, self._values, self._context)
            else:
                raise UnreachableError(f"{entry_type} in the output sequence")

        if len(self._values) != 1:
            raise InsufficientOpsError(len(self._values))

        result = self._values.pop()
        logger.debug(
            "expression_reduced",
            extra={"output_length": len(output), "result_type": get_type_name(result)},
        )
        return result

    def _apply_operator(self, operator: Operator) -> None:
        symbol = operator.symbol
        if len(self._values) < operator.operand_count:
            raise TooManyOpsError(symbol)

        if operator.operand_count == 1:
            value = self._values.pop()
            self._values.append(self._apply_unary(symbol, value))
            return

        handler = BINARY_HANDLERS.get(symbol)
        if handler is None:
            raise InvalidOpError(symbol)
        right = self._values.pop()
        left = self._values.pop()
        if symbol == "**":
            result = values.power(
                left, right, max_exponent=self._limits.max_power_exponent
            )
        elif symbol == "<<":
            result = values.shift_left(
                left, right, max_count=self._limits.max_shift_count
            )
        else:
            result = handler(left, right)
        self._values.append(result)

    def _apply_unary(self, symbol: str, value: Value) -> Value:
        if symbol == FACTORIAL:
            return values.factorial(
                value, max_argument=self._limits.max_factorial_argument
            )
        handler = UNARY_HANDLERS.get(symbol)
        if handler is None:
            raise InvalidOpError(symbol)
        return handler(value)


def reduce_output(
    output: Sequence[Entry], limits: Optional[ExpressionLimits] = None
) -> Value:
    """
    Reduces a finished postfix sequence to one value.

    Raises:
        EmptyExpressionError: If the sequence is empty
        TooManyOpsError: If an operator finds too few operands
        InsufficientOpsError: If more or fewer than one value remains
        BuiltinError: If a function call is malformed
        DomainError: If a value operation rejects its input
    """
    return Reducer(limits).reduce(output)
