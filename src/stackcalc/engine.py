"""
Token-ordering engine.

Converts an infix token stream into postfix (evaluation) order with the
shunting-yard algorithm, then hands the finished output sequence to the
reducer.

An engine is a single evaluation session with two phases:

1. Accumulating: push_* calls mutate the pending queue and the output.
2. Reducing: one call to calculate() drains the queue and reduces the
   output to a value (or raises a typed error).

Once calculate() has been called the session is closed and every further
call raises SessionClosedError. Use one engine per evaluation.
"""

import logging
from typing import List, Optional, cast

from .errors import (
    ClosingBracketMismatchError,
    EmptyValueError,
    InvalidOpError,
    SessionClosedError,
    UnreachableError,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_bracket_depth,
    check_token_count,
)
from .reducer import reduce_output
from .tokens import (
    PRI_IMMEDIATE,
    PRI_INVALID,
    Entry,
    Function,
    OpenBracket,
    Operand,
    Operator,
    is_function_name,
    operator_priority,
)
from .values import Value, kind_of, normalize

logger = logging.getLogger("stackcalc.engine")

OPEN_BRACKET = "("
CLOSE_BRACKET = ")"
ARGUMENT_SEPARATOR = ";"


class Engine:
    """Shunting-yard engine for one evaluation."""

    def __init__(self, limits: Optional[ExpressionLimits] = None):
        self._limits = limits or DEFAULT_EXPRESSION_LIMITS
        self.queue: List[Entry] = []
        self.output: List[Entry] = []
        self.result: Optional[Value] = None
        self._token_count = 0
        self._bracket_depth = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        """True once calculate() has been called."""
        return self._closed

    # ============================================================
    # Public push operations
    # ============================================================

    def push(self, symbol: str, value: Optional[Value] = None) -> None:
        """
        Pushes one token identified by its symbol.

        An empty symbol pushes ``value`` as an operand. Function names,
        brackets and the argument separator ";" are recognized; anything
        else is treated as an operator.
        """
        if not symbol:
            self.push_operand(value)
        elif is_function_name(symbol):
            self.push_function_name(symbol)
        elif symbol == OPEN_BRACKET:
            self.push_open_bracket()
        elif symbol == CLOSE_BRACKET:
            self.push_close_bracket()
        elif symbol == ARGUMENT_SEPARATOR:
            self.push_argument_separator()
        else:
            self.push_operator(symbol)

    def push_operand(self, value: Optional[Value]) -> None:
        self._accept_token()
        if value is None:
            raise EmptyValueError()
        kind_of(value)
        self.output.append(Operand(normalize(value)))

    def push_function_name(self, name: str) -> None:
        self._accept_token()
        if not is_function_name(name):
            raise InvalidOpError(name)
        self.queue.append(Function(name))

    def push_open_bracket(self) -> None:
        self._accept_token()
        self._bracket_depth += 1
        check_bracket_depth(self._bracket_depth, self._limits)
        self.queue.append(OpenBracket(output_mark=len(self.output)))

    def push_close_bracket(self) -> None:
        self._accept_token()
        self._pop_until_bracket(keep_bracket=False)

    def push_argument_separator(self) -> None:
        self._accept_token()
        self._pop_until_bracket(keep_bracket=True)

    def push_operator(self, symbol: str) -> None:
        self._accept_token()
        priority, right_associative = operator_priority(symbol)
        if priority == PRI_INVALID:
            raise InvalidOpError(symbol)

        if priority == PRI_IMMEDIATE:
            # Functions directly below bind tighter than the postfix operator.
            self._pop_functions()
            self.output.append(Operator(symbol, priority))
            return

        self._pop_while_priority(priority)
        self.queue.append(Operator(symbol, priority, right_associative))

    def increase_function_arity(self) -> None:
        """Counts one more argument for the function at the top of the queue."""
        self._ensure_open()
        self._bump_function_arity()

    # ============================================================
    # Reduction
    # ============================================================

    def drain(self) -> None:
        """
        Moves every queued entry to the output.

        Open brackets left in the queue are closed as if their closing
        bracket had been pushed, so trailing closing brackets may be omitted.
        """
        while self.queue:
            entry = self.queue.pop()
            if entry.type == "OpenBracket":
                self._close_group(cast(OpenBracket, entry))
                continue
            if entry.type in ("Operator", "Function"):
                self.output.append(entry)
                continue
            raise UnreachableError(f"{entry.type} in the operator queue")

        logger.debug("engine_drained", extra={"output_length": len(self.output)})

    def calculate(self) -> Value:
        """Drains the queue and reduces the output to a single value."""
        self._ensure_open()
        self._closed = True
        self.drain()
        self.result = reduce_output(self.output, self._limits)
        return self.result

    # ============================================================
    # Queue helpers
    # ============================================================

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError()

    def _accept_token(self) -> None:
        self._ensure_open()
        self._token_count += 1
        check_token_count(self._token_count, self._limits)

    def _pop_while_priority(self, priority: int) -> None:
        """
        Moves entries to the output while the queue top binds at least as
        tightly as an incoming operator of the given priority.

        A queued operator B leaves before incoming A iff priority(B) > priority(A),
        or the priorities are equal and B is left-associative. Pending function
        calls are complete at this point and always leave. An open bracket stops.
        """
        while self.queue:
            entry = self.queue[-1]
            if entry.type == "OpenBracket":
                return
            if entry.type == "Operator":
                top = cast(Operator, entry)
                if top.priority < priority:
                    return
                if top.priority == priority and top.right_associative:
                    return
            elif entry.type != "Function":
                raise UnreachableError(f"{entry.type} in the operator queue")
            self.output.append(self.queue.pop())

    def _pop_functions(self) -> None:
        while self.queue and self.queue[-1].type == "Function":
            self.output.append(self.queue.pop())

    def _bump_function_arity(self) -> None:
        if self.queue and self.queue[-1].type == "Function":
            cast(Function, self.queue[-1]).arity += 1

    def _pop_until_bracket(self, keep_bracket: bool) -> None:
        """
        Moves entries to the output up to the innermost open bracket.

        With keep_bracket the group stays open for the next argument and the
        enclosing function gets one more argument. Otherwise the bracket is
        consumed and the function's last argument is counted if anything was
        output since the group or its last separator started.
        """
        while self.queue:
            entry = self.queue.pop()
            if entry.type != "OpenBracket":
                self.output.append(entry)
                continue

            if keep_bracket:
                self._bump_function_arity()
                self.queue.append(OpenBracket(output_mark=len(self.output)))
                return

            self._close_group(cast(OpenBracket, entry))
            return

        raise ClosingBracketMismatchError()

    def _close_group(self, bracket: OpenBracket) -> None:
        """Counts the last argument of the enclosing function, if any was output."""
        self._bracket_depth -= 1
        if len(self.output) > bracket.output_mark:
            self._bump_function_arity()
        if self.queue and self.queue[-1].type == "Function":
            function = cast(Function, self.queue[-1])
            logger.debug(
                "function_arity_finalized",
                extra={"function": function.name, "arity": function.arity},
            )
