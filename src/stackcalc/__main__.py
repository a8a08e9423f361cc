"""
Command-line front end.

Usage:
    python -m stackcalc "2+3*(2+5)+1" "sqrt(-4)"
    echo "5+2**2**3+1" | python -m stackcalc

Each argument (or each non-empty stdin line) is evaluated on its own and
the formatted result is printed. Failures are reported on stderr and make
the exit status 1.
"""

import logging
import sys
from typing import List, Optional, TextIO, cast

from .config import config_from_env
from .evaluator import evaluate
from .values import Value, format_value


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Main entry point for the calculator command line."""
    argv = sys.argv[1:] if argv is None else argv
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        config = config_from_env()
    except (OSError, ValueError) as error:
        print(f"error: invalid configuration: {error}", file=stderr)
        return 2

    _configure_logging(config.log_level)
    limits = config.to_limits()

    expressions = argv if argv else [line.strip() for line in stdin]
    exit_code = 0
    for expression in expressions:
        if not expression:
            continue
        result = evaluate(expression, limits)
        if result.success:
            print(format_value(cast(Value, result.value)), file=stdout)
            continue

        failure = result.failure
        message = failure.format_with_context() if failure else result.error
        print(f"error: {message}", file=stderr)
        exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
