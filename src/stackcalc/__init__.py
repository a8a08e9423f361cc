"""
Stack-based calculation engine.

This package turns an infix token stream into postfix order with the
shunting-yard algorithm and reduces it over integers, exact rationals,
floats and complex numbers.
"""

# Builtins
from .builtins import (
    BUILTIN_FUNCTIONS,
    MINIMUM_ARGUMENTS,
    BuiltinContext,
    BuiltinFunction,
    FunctionRegistry,
    call_builtin,
)

# Configuration
from .config import (
    ENV_VAR_CONFIG,
    ENV_VAR_LOG_LEVEL,
    CalculatorConfig,
    config_from_env,
    load_config,
)

# Engine
from .engine import ARGUMENT_SEPARATOR, CLOSE_BRACKET, OPEN_BRACKET, Engine
from .errors import (
    ArgumentOutOfRangeError,
    BuiltinError,
    ClosingBracketMismatchError,
    DivisionByZeroError,
    DomainError,
    EmptyExpressionError,
    EmptyValueError,
    EvaluationError,
    ExpressionError,
    FunctionNoArgsError,
    FunctionNotEnoughArgsError,
    FunctionUnfinishedError,
    InsufficientOpsError,
    InvalidOpError,
    LimitExceededError,
    NegativeIntegerError,
    NotForComplexError,
    OnlyIntegerError,
    ParseError,
    SessionClosedError,
    TokenizerError,
    TooManyOpsError,
    UnreachableError,
)

# Evaluator
from .evaluator import (
    EvaluationResult,
    calculate,
    evaluate,
    evaluate_tokens,
    push_token,
)

# Limits
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_bracket_depth,
    check_expression_length,
    check_function_arg_count,
    check_token_count,
)
from .reducer import Reducer, reduce_output

# Tokenizer
from .tokenizer import Token, Tokenizer, TokenType, tokenize

# Tokens
from .tokens import (
    FACTORIAL,
    FUNCTION_NAMES,
    OPERATOR_PRIORITIES,
    PRI_IMMEDIATE,
    PRI_INVALID,
    UNARY_MINUS,
    Entry,
    Function,
    OpenBracket,
    Operand,
    Operator,
    is_function_name,
    operator_priority,
)

# Values
from .values import Value, ValueKind, format_value, kind_of, normalize, promote

__all__ = [
    # Builtins
    "BUILTIN_FUNCTIONS",
    "MINIMUM_ARGUMENTS",
    "BuiltinContext",
    "BuiltinFunction",
    "FunctionRegistry",
    "call_builtin",
    # Configuration
    "ENV_VAR_CONFIG",
    "ENV_VAR_LOG_LEVEL",
    "CalculatorConfig",
    "config_from_env",
    "load_config",
    # Engine
    "ARGUMENT_SEPARATOR",
    "CLOSE_BRACKET",
    "OPEN_BRACKET",
    "Engine",
    # Errors
    "ArgumentOutOfRangeError",
    "BuiltinError",
    "ClosingBracketMismatchError",
    "DivisionByZeroError",
    "DomainError",
    "EmptyExpressionError",
    "EmptyValueError",
    "EvaluationError",
    "ExpressionError",
    "FunctionNoArgsError",
    "FunctionNotEnoughArgsError",
    "FunctionUnfinishedError",
    "InsufficientOpsError",
    "InvalidOpError",
    "LimitExceededError",
    "NegativeIntegerError",
    "NotForComplexError",
    "OnlyIntegerError",
    "ParseError",
    "SessionClosedError",
    "TokenizerError",
    "TooManyOpsError",
    "UnreachableError",
    # Evaluator
    "EvaluationResult",
    "calculate",
    "evaluate",
    "evaluate_tokens",
    "push_token",
    # Limits
    "DEFAULT_EXPRESSION_LIMITS",
    "ExpressionLimits",
    "check_bracket_depth",
    "check_expression_length",
    "check_function_arg_count",
    "check_token_count",
    # Reducer
    "Reducer",
    "reduce_output",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # Tokens
    "FACTORIAL",
    "FUNCTION_NAMES",
    "OPERATOR_PRIORITIES",
    "PRI_IMMEDIATE",
    "PRI_INVALID",
    "UNARY_MINUS",
    "Entry",
    "Function",
    "OpenBracket",
    "Operand",
    "Operator",
    "is_function_name",
    "operator_priority",
    # Values
    "Value",
    "ValueKind",
    "format_value",
    "kind_of",
    "normalize",
    "promote",
]
