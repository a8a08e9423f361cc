"""
Numeric values for the calculation engine.

A value is a plain Python number of one of four kinds, ordered by rank:

- exact integer (``int``)
- exact rational (``fractions.Fraction``)
- float (``float``)
- complex (``complex``)

Every binary operation first promotes both operands to the higher kind
with ``promote`` and every result is passed through ``normalize``, so a
rational with denominator 1 becomes an integer and a complex with a zero
imaginary part becomes a float.

Python arithmetic failures (ZeroDivisionError, OverflowError, ValueError)
never leave this module: they are translated to DomainError subclasses.
"""

import cmath
import functools
import math
from enum import IntEnum
from fractions import Fraction
from typing import Any, Callable, Optional, Tuple, Union

from .errors import (
    ArgumentOutOfRangeError,
    DivisionByZeroError,
    DomainError,
    NegativeIntegerError,
    NotForComplexError,
    OnlyIntegerError,
)

# Runtime value type of the engine.
Value = Union[int, Fraction, float, complex]


class ValueKind(IntEnum):
    """Value kinds, ordered by promotion rank."""

    INTEGER = 0
    RATIONAL = 1
    FLOAT = 2
    COMPLEX = 3


def kind_of(value: Value) -> ValueKind:
    """Returns the kind of a value."""
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, Fraction):
        return ValueKind.RATIONAL
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, complex):
        return ValueKind.COMPLEX
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def get_type_name(value: Value) -> str:
    """Gets the type name of a value for error messages."""
    return kind_of(value).name.lower()


def normalize(value: Value) -> Value:
    """Collapses a value to the lowest kind that represents it exactly."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Fraction) and value.denominator == 1:
        return value.numerator
    if isinstance(value, complex) and value.imag == 0:
        return value.real
    return value


def _convert(value: Value, kind: ValueKind) -> Value:
    if kind == ValueKind.RATIONAL:
        return Fraction(value)
    if kind == ValueKind.FLOAT:
        return float(value)
    if kind == ValueKind.COMPLEX:
        if isinstance(value, Fraction):
            return complex(float(value))
        return complex(value)
    return value


def promote(a: Value, b: Value) -> Tuple[Value, Value]:
    """Converts both operands to the higher-ranked kind of the two."""
    kind = max(kind_of(a), kind_of(b))
    return _convert(a, kind), _convert(b, kind)


def _guarded(operation: str) -> Callable:
    """Normalizes the result and maps Python arithmetic errors to DomainError."""

    def decorator(fn: Callable[..., Value]) -> Callable[..., Value]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Value:
            try:
                return normalize(fn(*args, **kwargs))
            except ZeroDivisionError as error:
                raise DivisionByZeroError(operation) from error
            except OverflowError as error:
                raise DomainError(operation, "result is too large") from error
            except ValueError as error:
                raise DomainError(operation, str(error)) from error

        return wrapper

    return decorator


def is_zero(value: Value) -> bool:
    return value == 0


def _is_complex(value: Value) -> bool:
    return kind_of(value) == ValueKind.COMPLEX


def _require_real(operation: str, *values: Value) -> None:
    if any(_is_complex(v) for v in values):
        raise NotForComplexError(operation)


def _require_integer(operation: str, *values: Value) -> None:
    if any(kind_of(v) != ValueKind.INTEGER for v in values):
        raise OnlyIntegerError(operation)


def to_float(value: Value) -> float:
    """Returns the raw floating representation of a real value."""
    _require_real("float", value)
    try:
        return float(value)
    except OverflowError as error:
        raise DomainError("float", "value is too large") from error


def _real_text(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_value(value: Value) -> str:
    """Formats a value for display: 5/2, 2.5, 1+2i."""
    kind = kind_of(value)
    if kind == ValueKind.RATIONAL:
        return f"{value.numerator}/{value.denominator}"
    if kind == ValueKind.COMPLEX:
        sign = "-" if value.imag < 0 else "+"
        return f"{_real_text(value.real)}{sign}{_real_text(abs(value.imag))}i"
    return str(value)


# ============================================================
# Arithmetic
# ============================================================


@_guarded("+")
def add(a: Value, b: Value) -> Value:
    a, b = promote(a, b)
    return a + b


@_guarded("-")
def subtract(a: Value, b: Value) -> Value:
    a, b = promote(a, b)
    return a - b


@_guarded("*")
def multiply(a: Value, b: Value) -> Value:
    a, b = promote(a, b)
    return a * b


@_guarded("/")
def divide(a: Value, b: Value) -> Value:
    """Division; integer by integer gives an exact rational."""
    if is_zero(b):
        raise DivisionByZeroError("/")
    a, b = promote(a, b)
    if isinstance(a, int):
        return Fraction(a, b)
    return a / b


@_guarded("//")
def div_int(a: Value, b: Value) -> Value:
    _require_real("//", a, b)
    if is_zero(b):
        raise DivisionByZeroError("//")
    a, b = promote(a, b)
    return a // b


@_guarded("%")
def remainder(a: Value, b: Value) -> Value:
    _require_real("%", a, b)
    if is_zero(b):
        raise DivisionByZeroError("%")
    a, b = promote(a, b)
    return a % b


@_guarded("**")
def power(
    base: Value, exponent: Value, max_exponent: Optional[int] = None
) -> Value:
    """
    Exponentiation.

    Integer to a negative integer power gives an exact rational. A negative
    real base with a fractional exponent gives the principal complex root.
    Exact powers of a base other than 0, 1 and -1 accept integer exponents
    up to max_exponent in magnitude.
    """
    if is_zero(base) and not _is_complex(exponent) and exponent < 0:
        raise DivisionByZeroError("**")
    if (
        max_exponent is not None
        and kind_of(base) in (ValueKind.INTEGER, ValueKind.RATIONAL)
        and kind_of(exponent) == ValueKind.INTEGER
        and abs(base) != 1
        and not is_zero(base)
        and abs(exponent) > max_exponent
    ):
        raise ArgumentOutOfRangeError(
            "**", str(exponent), f"[-{max_exponent}..{max_exponent}]"
        )
    base, exponent = promote(base, exponent)
    if isinstance(base, int) and exponent < 0:
        return Fraction(1, base ** -exponent)
    return base ** exponent


@_guarded("---")
def negate(value: Value) -> Value:
    return -value


@_guarded("factorial")
def factorial(value: Value, max_argument: Optional[int] = None) -> Value:
    _require_integer("factorial", value)
    if value < 0:
        raise NegativeIntegerError("factorial")
    if max_argument is not None and value > max_argument:
        raise ArgumentOutOfRangeError(
            "factorial", str(value), f"[0..{max_argument}]"
        )
    return math.factorial(value)


# ============================================================
# Comparison and logic
# ============================================================


@_guarded("==")
def eq(a: Value, b: Value) -> int:
    a, b = promote(a, b)
    return int(a == b)


def neq(a: Value, b: Value) -> int:
    return 1 - eq(a, b)


@_guarded("<")
def less(a: Value, b: Value) -> int:
    _require_real("<", a, b)
    a, b = promote(a, b)
    return int(a < b)


@_guarded("<=")
def less_eq(a: Value, b: Value) -> int:
    _require_real("<=", a, b)
    a, b = promote(a, b)
    return int(a <= b)


@_guarded(">")
def greater(a: Value, b: Value) -> int:
    _require_real(">", a, b)
    a, b = promote(a, b)
    return int(a > b)


@_guarded(">=")
def greater_eq(a: Value, b: Value) -> int:
    _require_real(">=", a, b)
    a, b = promote(a, b)
    return int(a >= b)


def logical_not(value: Value) -> int:
    return int(is_zero(value))


def logical_and(a: Value, b: Value) -> int:
    return int(not is_zero(a) and not is_zero(b))


def logical_or(a: Value, b: Value) -> int:
    return int(not is_zero(a) or not is_zero(b))


# ============================================================
# Bitwise
# ============================================================


@_guarded("&")
def bit_and(a: Value, b: Value) -> int:
    _require_integer("&", a, b)
    return a & b


@_guarded("|")
def bit_or(a: Value, b: Value) -> int:
    _require_integer("|", a, b)
    return a | b


@_guarded("^")
def bit_xor(a: Value, b: Value) -> int:
    _require_integer("^", a, b)
    return a ^ b


@_guarded("~")
def bit_not(value: Value) -> int:
    _require_integer("~", value)
    return ~value


@_guarded("<<")
def shift_left(a: Value, b: Value, max_count: Optional[int] = None) -> int:
    _require_integer("<<", a, b)
    if b < 0:
        raise DomainError("<<", "negative shift count")
    if max_count is not None and a != 0 and b > max_count:
        raise ArgumentOutOfRangeError("<<", str(b), f"[0..{max_count}]")
    return a << b


@_guarded(">>")
def shift_right(a: Value, b: Value) -> int:
    _require_integer(">>", a, b)
    if b < 0:
        raise DomainError(">>", "negative shift count")
    return a >> b


@_guarded("gcd")
def gcd(a: Value, b: Value) -> int:
    _require_integer("gcd", a, b)
    return math.gcd(a, b)


@_guarded("lcm")
def lcm(a: Value, b: Value) -> int:
    _require_integer("lcm", a, b)
    return math.lcm(a, b)


# ============================================================
# Roots and powers
# ============================================================


def _integer_root(value: int, degree: int) -> int:
    """Floor of the degree-th root of a non-negative integer (Newton)."""
    if value < 2:
        return value
    x = 1 << ((value.bit_length() + degree - 1) // degree)
    while True:
        y = ((degree - 1) * x + value // x ** (degree - 1)) // degree
        if y >= x:
            return x
        x = y


def _exact_root(value: Value, degree: int) -> Optional[Value]:
    """Returns the exact root of a non-negative int or Fraction, or None."""
    if isinstance(value, Fraction):
        numerator = _exact_root(value.numerator, degree)
        denominator = _exact_root(value.denominator, degree)
        if numerator is None or denominator is None:
            return None
        return Fraction(numerator, denominator)
    if isinstance(value, int):
        root = _integer_root(value, degree)
        return root if root**degree == value else None
    return None


@_guarded("sqrt")
def sqrt(value: Value) -> Value:
    if _is_complex(value):
        return cmath.sqrt(value)
    if value < 0:
        return complex(0, to_float(sqrt(-value)))
    exact = _exact_root(value, 2)
    if exact is not None:
        return exact
    return math.sqrt(value)


@_guarded("cbrt")
def cbrt(value: Value) -> Value:
    if _is_complex(value):
        return value ** (1 / 3)
    if value < 0:
        return -cbrt(-value)
    exact = _exact_root(value, 3)
    if exact is not None:
        return exact
    return float(value) ** (1 / 3)


@_guarded("sqr")
def sqr(value: Value) -> Value:
    return value * value


# ============================================================
# Transcendental functions
# ============================================================


def _transcendental(
    name: str,
    real_fn: Callable[[float], float],
    complex_fn: Callable[[complex], complex],
    real_domain: Optional[Callable[[float], bool]] = None,
) -> Callable[[Value], Value]:
    """Builds a function that stays real inside real_domain and goes complex outside."""

    @_guarded(name)
    def apply(value: Value) -> Value:
        if not _is_complex(value):
            x = float(value)
            if real_domain is None or real_domain(x):
                return real_fn(x)
        return complex_fn(complex(value))

    apply.__name__ = name
    return apply


sin = _transcendental("sin", math.sin, cmath.sin)
cos = _transcendental("cos", math.cos, cmath.cos)
tan = _transcendental("tan", math.tan, cmath.tan)
asin = _transcendental("asin", math.asin, cmath.asin, lambda x: -1 <= x <= 1)
acos = _transcendental("acos", math.acos, cmath.acos, lambda x: -1 <= x <= 1)
atan = _transcendental("atan", math.atan, cmath.atan)
sinh = _transcendental("sinh", math.sinh, cmath.sinh)
cosh = _transcendental("cosh", math.cosh, cmath.cosh)
tanh = _transcendental("tanh", math.tanh, cmath.tanh)
asinh = _transcendental("asinh", math.asinh, cmath.asinh)
acosh = _transcendental("acosh", math.acosh, cmath.acosh, lambda x: x >= 1)
atanh = _transcendental("atanh", math.atanh, cmath.atanh, lambda x: -1 < x < 1)
exp = _transcendental("exp", math.exp, cmath.exp)
ln = _transcendental("ln", math.log, cmath.log, lambda x: x > 0)


# ============================================================
# Magnitude and parts
# ============================================================


@_guarded("abs")
def absolute(value: Value) -> Value:
    return abs(value)


@_guarded("norm")
def norm(value: Value) -> Value:
    return abs(value)


@_guarded("signum")
def signum(value: Value) -> Value:
    if _is_complex(value):
        return value / abs(value) if value else 0
    sign = int(value > 0) - int(value < 0)
    return float(sign) if isinstance(value, float) else sign


@_guarded("re")
def re(value: Value) -> Value:
    return value.real if _is_complex(value) else value


@_guarded("im")
def im(value: Value) -> Value:
    return value.imag if _is_complex(value) else 0


@_guarded("conj")
def conj(value: Value) -> Value:
    return value.conjugate() if _is_complex(value) else value


@_guarded("fract")
def fract(value: Value) -> Value:
    _require_real("fract", value)
    return value - math.trunc(value)


@_guarded("ratio")
def ratio(value: Value) -> Value:
    """Converts a float to the exact rational of its shortest decimal form."""
    _require_real("ratio", value)
    if isinstance(value, float):
        return Fraction(repr(value))
    return value


# ============================================================
# Rounding
# ============================================================


def _round_half_away(value: Union[Fraction, float]) -> int:
    exact = Fraction(value)
    rounded = math.floor(abs(exact) + Fraction(1, 2))
    return -rounded if exact < 0 else rounded


def _rounding(
    name: str, real_fn: Callable[[Union[Fraction, float]], int]
) -> Callable[[Value], Value]:
    """Rational input rounds to an integer, float input stays float."""

    @_guarded(name)
    def apply(value: Value) -> Value:
        kind = kind_of(value)
        if kind == ValueKind.INTEGER:
            return value
        if kind == ValueKind.COMPLEX:
            return complex(float(apply(value.real)), float(apply(value.imag)))
        rounded = real_fn(value)
        return float(rounded) if kind == ValueKind.FLOAT else rounded

    apply.__name__ = name
    return apply


round_ = _rounding("round", _round_half_away)
ceil = _rounding("ceil", math.ceil)
floor = _rounding("floor", math.floor)
trunc = _rounding("trunc", math.trunc)
