"""
Error types for the calculation engine.

All engine errors extend ExpressionError so a caller can handle every
failure of an evaluation with a single except clause, while still being
able to branch on the concrete class.
"""

from typing import Optional


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class TokenizerError(ExpressionError):
    """
    Error thrown during tokenization (lexical analysis).
    """

    pass


class UnreachableError(ExpressionError):
    """
    Internal invariant violation. Indicates a defect, not a user error.
    """

    def __init__(self, detail: str = "internal invariant violated"):
        super().__init__(f"Unreachable: {detail}")
        self.detail = detail


class SessionClosedError(ExpressionError):
    """
    Error thrown when an engine is used after its reduction has started.
    """

    def __init__(self) -> None:
        super().__init__("Evaluation session is closed: create a new engine")


# ============================================================
# Structural errors
# ============================================================


class ParseError(ExpressionError):
    """
    Error thrown when the token stream is structurally invalid.
    """

    pass


class InvalidOpError(ParseError):
    """Unrecognized operator or function symbol."""

    def __init__(
        self,
        symbol: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(f"Invalid operator: '{symbol}'", position, expression)
        self.symbol = symbol


class ClosingBracketMismatchError(ParseError):
    """Closing bracket or argument separator without an open bracket."""

    def __init__(
        self, position: Optional[int] = None, expression: Optional[str] = None
    ):
        super().__init__("Closing bracket mismatch", position, expression)


class EmptyValueError(ParseError):
    """Operand push without a value."""

    def __init__(
        self, position: Optional[int] = None, expression: Optional[str] = None
    ):
        super().__init__("Empty value", position, expression)


class EmptyExpressionError(ParseError):
    """Nothing to evaluate."""

    def __init__(self, expression: Optional[str] = None):
        super().__init__("Empty expression", None, expression)


# ============================================================
# Stack and arity errors
# ============================================================


class EvaluationError(ExpressionError):
    """
    Error thrown during reduction of the postfix sequence.
    """

    pass


class TooManyOpsError(EvaluationError):
    """An operator needs more operands than the stack holds."""

    def __init__(self, operator: str):
        super().__init__(f"Too many operators: not enough operands for '{operator}'")
        self.operator = operator


class InsufficientOpsError(EvaluationError):
    """Reduction finished with a value count other than one."""

    def __init__(self, count: int):
        super().__init__(
            f"Insufficient operators: {count} value(s) left after evaluation"
        )
        self.count = count


class BuiltinError(EvaluationError):
    """
    Error thrown when a built-in function encounters an error.
    """

    def __init__(
        self,
        function_name: str,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        full_message = f"{function_name}: {message}"
        super().__init__(full_message, position, expression)
        self.function_name = function_name


class FunctionNoArgsError(BuiltinError):
    """Function called without arguments."""

    def __init__(self, function_name: str):
        super().__init__(function_name, "no arguments")


class FunctionUnfinishedError(BuiltinError):
    """Function declared more arguments than the stack holds."""

    def __init__(self, function_name: str):
        super().__init__(function_name, "function is unfinished")


class FunctionNotEnoughArgsError(BuiltinError):
    """Multi-argument function called with too few arguments."""

    def __init__(self, function_name: str, minimum: int):
        super().__init__(
            function_name, f"requires at least {minimum} argument(s)"
        )
        self.minimum = minimum


# ============================================================
# Domain errors (raised by value operations)
# ============================================================


class DomainError(EvaluationError):
    """
    Error thrown when a value operation receives an input outside its domain.
    """

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class DivisionByZeroError(DomainError):
    def __init__(self, operation: str = "/"):
        super().__init__(operation, "division by zero")


class OnlyIntegerError(DomainError):
    def __init__(self, operation: str):
        super().__init__(operation, "only integers are supported")


class NegativeIntegerError(DomainError):
    def __init__(self, operation: str):
        super().__init__(operation, "not valid for negative integer")


class NotForComplexError(DomainError):
    def __init__(self, operation: str):
        super().__init__(operation, "not valid for complex numbers")


class ArgumentOutOfRangeError(DomainError):
    def __init__(self, operation: str, value: str, accepted: str):
        super().__init__(
            operation, f"argument {value} is out of range {accepted}"
        )
        self.value = value
        self.accepted = accepted


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
