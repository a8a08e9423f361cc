"""
Tokenizer (lexer) for calculator expressions.

Converts expression strings into a stream of tokens that can be pushed
into an Engine. Operator tokens already carry the engine's symbol: a "-"
in operand position becomes UNARY_MINUS and a "!" after an operand
becomes FACTORIAL.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import TokenizerError
from .limits import ExpressionLimits, check_expression_length
from .tokens import FACTORIAL, UNARY_MINUS
from .values import Value


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    OPERATOR = "OPERATOR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    SEPARATOR = "SEPARATOR"
    EOF = "EOF"


@dataclass
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: str
    position: int
    number: Optional[Value] = None


# Operators, longest first so that "**" wins over "*".
OPERATOR_SYMBOLS = (
    "**", "//", "<<", ">>", "<=", ">=", "==", "!=", "&&", "||",
    "+", "-", "*", "/", "%", "&", "|", "^", "<", ">", "!", "~",
)


def _is_digit(ch: str) -> bool:
    """Checks if a character is a digit."""
    return "0" <= ch <= "9"


def _is_identifier_start(ch: str) -> bool:
    """Checks if a character can start an identifier."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_identifier_part(ch: str) -> bool:
    """Checks if a character can continue an identifier."""
    return _is_identifier_start(ch) or _is_digit(ch)


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r")


class Tokenizer:
    """Tokenizer for expression strings."""

    def __init__(self, source: str, limits: Optional[ExpressionLimits] = None):
        self._source = source
        self._limits = limits
        self._position = 0
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenizes the source expression and returns all tokens."""
        check_expression_length(self._source, self._limits)

        while not self._is_at_end():
            self._scan_token()

        self._tokens.append(Token(TokenType.EOF, "", self._position))
        return self._tokens

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self._position]

    def _peek_next(self) -> str:
        if self._position + 1 >= len(self._source):
            return "\0"
        return self._source[self._position + 1]

    def _advance(self) -> str:
        ch = self._source[self._position]
        self._position += 1
        return ch

    def _add_token(
        self,
        token_type: TokenType,
        value: str,
        position: int,
        number: Optional[Value] = None,
    ) -> None:
        self._tokens.append(Token(token_type, value, position, number))

    def _expects_operand(self) -> bool:
        """True when the next token starts an operand rather than follows one."""
        if not self._tokens:
            return True
        last = self._tokens[-1]
        if last.type in (TokenType.NUMBER, TokenType.RPAREN):
            return False
        if last.type == TokenType.OPERATOR and last.value == FACTORIAL:
            return False
        return True

    def _scan_token(self) -> None:
        start_position = self._position
        ch = self._peek()

        # Skip whitespace
        if _is_whitespace(ch):
            self._advance()
            return

        if ch == "(":
            self._advance()
            self._add_token(TokenType.LPAREN, ch, start_position)
            return

        if ch == ")":
            self._advance()
            self._add_token(TokenType.RPAREN, ch, start_position)
            return

        if ch == ";":
            self._advance()
            self._add_token(TokenType.SEPARATOR, ch, start_position)
            return

        # Number literals
        if _is_digit(ch) or (ch == "." and _is_digit(self._peek_next())):
            self._scan_number(start_position)
            return

        # Function names
        if _is_identifier_start(ch):
            self._scan_identifier(start_position)
            return

        for symbol in OPERATOR_SYMBOLS:
            if self._source.startswith(symbol, self._position):
                self._position += len(symbol)
                self._add_operator(symbol, start_position)
                return

        raise TokenizerError(
            f"Unexpected character: '{ch}'", start_position, self._source
        )

    def _add_operator(self, symbol: str, start_position: int) -> None:
        if self._expects_operand():
            if symbol == "+":
                # Unary plus is a no-op
                return
            if symbol == "-":
                symbol = UNARY_MINUS
            elif symbol not in ("!", "~"):
                raise TokenizerError(
                    f"Expected an operand before '{symbol}'",
                    start_position,
                    self._source,
                )
        elif symbol == "!":
            symbol = FACTORIAL
        elif symbol == "~":
            raise TokenizerError(
                "Unexpected '~' after an operand", start_position, self._source
            )
        self._add_token(TokenType.OPERATOR, symbol, start_position)

    def _scan_number(self, start_position: int) -> None:
        value = ""

        # Prefixed integers: 0x, 0o, 0b
        if self._peek() == "0" and self._peek_next() in ("x", "X", "o", "O", "b", "B"):
            value += self._advance()
            value += self._advance()
            while _is_identifier_part(self._peek()):
                value += self._advance()
            try:
                number: Value = int(value, 0)
            except ValueError:
                raise TokenizerError(
                    f"Invalid number: {value}", start_position, self._source
                )
            self._add_token(TokenType.NUMBER, value, start_position, number)
            return

        is_float = False

        # Integer part
        while _is_digit(self._peek()):
            value += self._advance()

        # Fractional part
        if self._peek() == "." and _is_digit(self._peek_next()):
            is_float = True
            value += self._advance()  # consume '.'
            while _is_digit(self._peek()):
                value += self._advance()

        # Exponent part
        if self._peek() in ("e", "E"):
            is_float = True
            value += self._advance()
            if self._peek() in ("+", "-"):
                value += self._advance()
            if not _is_digit(self._peek()):
                raise TokenizerError(
                    "Invalid number: expected exponent digits",
                    start_position,
                    self._source,
                )
            while _is_digit(self._peek()):
                value += self._advance()

        number = float(value) if is_float else int(value)

        # Imaginary suffix
        if self._peek() in ("i", "j") and not _is_identifier_part(self._peek_next()):
            value += self._advance()
            number = complex(0, float(number))

        if _is_identifier_part(self._peek()):
            raise TokenizerError(
                f"Invalid number: unexpected '{self._peek()}'",
                self._position,
                self._source,
            )

        self._add_token(TokenType.NUMBER, value, start_position, number)

    def _scan_identifier(self, start_position: int) -> None:
        value = ""

        while _is_identifier_part(self._peek()):
            value += self._advance()

        self._add_token(TokenType.IDENTIFIER, value.lower(), start_position)


def tokenize(source: str, limits: Optional[ExpressionLimits] = None) -> List[Token]:
    """
    Tokenizes an expression string into tokens.

    Args:
        source: The expression string to tokenize
        limits: Optional expression limits

    Returns:
        List of tokens

    Raises:
        TokenizerError: If the expression contains invalid tokens
        LimitExceededError: If the expression is too long
    """
    tokenizer = Tokenizer(source, limits)
    return tokenizer.tokenize()
