"""
Expression evaluator.

Drives an Engine from an expression string: tokenizes the source, pushes
every token in order and reduces the result.

Error handling semantics:
- calculate() raises the typed ExpressionError of the first failure.
- evaluate() never raises for expression failures; it reports them in an
  EvaluationResult instead.
- Errors raised while pushing a token carry that token's position.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .engine import Engine
from .errors import ExpressionError
from .limits import ExpressionLimits
from .tokenizer import Token, TokenType, tokenize
from .values import Value

logger = logging.getLogger("stackcalc.evaluator")


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: Optional[Value]
    """The evaluated value, None on failure."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[str] = None
    """Error message if evaluation failed."""

    failure: Optional[ExpressionError] = None
    """The typed error if evaluation failed."""


def push_token(engine: Engine, token: Token) -> None:
    """Pushes a single tokenizer token into the engine."""
    if token.type == TokenType.NUMBER:
        engine.push_operand(token.number)
    elif token.type == TokenType.IDENTIFIER:
        engine.push_function_name(token.value)
    elif token.type == TokenType.OPERATOR:
        engine.push_operator(token.value)
    elif token.type == TokenType.LPAREN:
        engine.push_open_bracket()
    elif token.type == TokenType.RPAREN:
        engine.push_close_bracket()
    elif token.type == TokenType.SEPARATOR:
        engine.push_argument_separator()


def evaluate_tokens(
    tokens: Sequence[Token],
    limits: Optional[ExpressionLimits] = None,
    source: Optional[str] = None,
) -> Value:
    """
    Pushes tokens into a fresh engine and reduces them.

    Args:
        tokens: Tokens produced by the tokenizer
        limits: Optional expression limits
        source: Source expression for error reporting

    Returns:
        The resulting value

    Raises:
        ExpressionError: If any push or the reduction fails
    """
    engine = Engine(limits)
    for token in tokens:
        if token.type == TokenType.EOF:
            break
        try:
            push_token(engine, token)
        except ExpressionError as error:
            _attach_context(error, token.position, source)
            raise

    try:
        return engine.calculate()
    except ExpressionError as error:
        _attach_context(error, None, source)
        raise


def _attach_context(
    error: ExpressionError, position: Optional[int], source: Optional[str]
) -> None:
    if error.position is None:
        error.position = position
    if error.expression is None:
        error.expression = source


def calculate(source: str, limits: Optional[ExpressionLimits] = None) -> Value:
    """
    Evaluates an expression string and returns its value.

    Raises:
        TokenizerError: If the expression contains invalid characters
        ExpressionError: If the expression cannot be evaluated
    """
    tokens = tokenize(source, limits)
    return evaluate_tokens(tokens, limits, source)


def evaluate(
    source: str, limits: Optional[ExpressionLimits] = None
) -> EvaluationResult:
    """
    Evaluates an expression string and returns the result.

    Args:
        source: The expression to evaluate
        limits: Optional expression limits

    Returns:
        The evaluation result with value and success status
    """
    try:
        value = calculate(source, limits)
        return EvaluationResult(value=value, success=True)
    except ExpressionError as error:
        logger.debug(
            "expression_evaluation_failed",
            extra={
                "expression": source,
                "error_type": type(error).__name__,
                "error": error.message,
            },
        )
        return EvaluationResult(
            value=None, success=False, error=error.message, failure=error
        )
