"""
Package-wide formatting options.

Keyword arguments of the formatters default to None and fall back to the
values held here. Options are replaced wholesale, never mutated in place.

Usage:
    >>> from apaprint.core.options import option_context
    >>> with option_context(mse=False):
    ...     print_anova(table)
"""

from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterator

from apaprint.core.exceptions import ValidationError


@dataclass(frozen=True)
class PrintOptions:
    """Defaults consulted by the formatters."""
    mse: bool = True         # report MSE in ANOVA statistics
    es_digits: int = 2       # decimals for effect sizes
    p_digits: int = 3        # decimals for p values
    na_string: str = ""      # rendering of missing values


_current = PrintOptions()


def get_options() -> PrintOptions:
    """Return the options currently in effect."""
    return _current


def set_options(**kwargs: Any) -> PrintOptions:
    """
    Replace one or more options.

    Returns:
        The options in effect before the call, for restoring later

    Raises:
        ValidationError: If an option name is unknown or a value has the
            wrong type
    """
    global _current
    _check_options(kwargs)
    previous = _current
    _current = replace(_current, **kwargs)
    return previous


@contextmanager
def option_context(**kwargs: Any) -> Iterator[PrintOptions]:
    """Temporarily set options for the duration of a with-block."""
    global _current
    previous = set_options(**kwargs)
    try:
        yield _current
    finally:
        _current = previous


_OPTION_TYPES: dict[str, type] = {
    'mse': bool,
    'es_digits': int,
    'p_digits': int,
    'na_string': str,
}


def _check_options(kwargs: dict[str, Any]) -> None:
    for name, value in kwargs.items():
        if name not in _OPTION_TYPES:
            raise ValidationError(
                f"unknown option {name!r}, expected one of {sorted(_OPTION_TYPES)}"
            )
        expected = _OPTION_TYPES[name]
        # bool is a subclass of int
        if expected is int:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name}: expected int, got {value!r}")
            if value < 0:
                raise ValidationError(f"{name}: must be non-negative, got {value}")
        elif not isinstance(value, expected):
            raise ValidationError(
                f"{name}: expected {expected.__name__}, got {type(value).__name__}"
            )
