"""
Calculator configuration.

Configuration can be given as a mapping (camelCase or snake_case keys) or
as a YAML/JSON file. The environment variables STACKCALC_CONFIG and
STACKCALC_LOG_LEVEL select a config file and override its log level.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits

logger = logging.getLogger("stackcalc.config")

ENV_VAR_CONFIG = "STACKCALC_CONFIG"
ENV_VAR_LOG_LEVEL = "STACKCALC_LOG_LEVEL"

_DEFAULTS = DEFAULT_EXPRESSION_LIMITS


class CalculatorConfig(BaseModel):
    """Configuration for expression evaluation."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    max_expression_length: int = Field(
        default=_DEFAULTS.max_expression_length, ge=1, alias="maxExpressionLength"
    )
    max_tokens: int = Field(default=_DEFAULTS.max_tokens, ge=1, alias="maxTokens")
    max_bracket_depth: int = Field(
        default=_DEFAULTS.max_bracket_depth, ge=1, alias="maxBracketDepth"
    )
    max_function_args: int = Field(
        default=_DEFAULTS.max_function_args, ge=1, alias="maxFunctionArgs"
    )
    max_factorial_argument: int = Field(
        default=_DEFAULTS.max_factorial_argument, ge=0, alias="maxFactorialArgument"
    )
    max_fib_argument: int = Field(
        default=_DEFAULTS.max_fib_argument, ge=0, alias="maxFibArgument"
    )
    max_power_exponent: int = Field(
        default=_DEFAULTS.max_power_exponent, ge=0, alias="maxPowerExponent"
    )
    max_shift_count: int = Field(
        default=_DEFAULTS.max_shift_count, ge=0, alias="maxShiftCount"
    )

    # Level name for the command-line front end (debug, info, warning, ...)
    log_level: str = Field(default="warning", alias="logLevel")

    def to_limits(self) -> ExpressionLimits:
        return ExpressionLimits(
            max_expression_length=self.max_expression_length,
            max_tokens=self.max_tokens,
            max_bracket_depth=self.max_bracket_depth,
            max_function_args=self.max_function_args,
            max_factorial_argument=self.max_factorial_argument,
            max_fib_argument=self.max_fib_argument,
            max_power_exponent=self.max_power_exponent,
            max_shift_count=self.max_shift_count,
        )


def _parse_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML (or JSON) config file as a plain object."""
    content = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(content or "")
    except yaml.YAMLError as error:
        raise ValueError(f"Invalid config file {path}: {error}") from error
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config file {path} must contain an object")
    return parsed


def load_config(
    source: Union[CalculatorConfig, Mapping[str, Any], str, os.PathLike, None] = None,
) -> CalculatorConfig:
    """
    Loads a calculator configuration.

    Args:
        source: None for defaults, a mapping, an existing config or a path
            to a YAML/JSON file

    Returns:
        The validated configuration

    Raises:
        ValueError: If the content is not a valid configuration
        OSError: If the config file cannot be read
    """
    if source is None:
        return CalculatorConfig()
    if isinstance(source, CalculatorConfig):
        return source

    origin = "mapping"
    if isinstance(source, Mapping):
        candidate = dict(source)
    else:
        path = Path(source)
        candidate = _parse_config_file(path)
        origin = str(path)

    # pydantic's ValidationError is a ValueError
    config = CalculatorConfig.model_validate(candidate)
    logger.debug(
        "config_loaded",
        extra={"origin": origin, "log_level": config.log_level},
    )
    return config


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> CalculatorConfig:
    """Builds the configuration selected by the environment."""
    env = os.environ if environ is None else environ

    config = load_config(env.get(ENV_VAR_CONFIG) or None)
    log_level = env.get(ENV_VAR_LOG_LEVEL)
    if log_level:
        config = config.model_copy(update={"log_level": log_level})
    return config
