"""
Core infrastructure for apaprint.

This module provides shared abstractions and utilities used by the
formatters (number formatting, ANOVA printing).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    options: Package-wide formatting defaults
"""

from apaprint.core.result import Result
from apaprint.core.exceptions import (
    ApaPrintError,
    ValidationError,
    DimensionError,
    ConfigurationError,
    UnsupportedEffectSizeError,
    MissingFactorError,
)
from apaprint.core.options import (
    PrintOptions,
    get_options,
    set_options,
    option_context,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "ApaPrintError",
    "ValidationError",
    "DimensionError",
    "ConfigurationError",
    "UnsupportedEffectSizeError",
    "MissingFactorError",
    # Options
    "PrintOptions",
    "get_options",
    "set_options",
    "option_context",
]
