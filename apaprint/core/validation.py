"""
Input validation utilities for apaprint.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence, Sized
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from apaprint.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    None entries are read as missing values (NaN) before conversion.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    if isinstance(array, (list, tuple)):
        array = [np.nan if v is None else v for v in array]

    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_1d(array: NDArray[Any], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_consistent_length(
    *arrays: Sized,
    names: tuple[str, ...]
) -> None:
    """
    Verify all columns have the same length.

    Args:
        *arrays: Columns to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If columns have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [len(arr) for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_min_rows(array: Sized, min_rows: int, name: str) -> None:
    """
    Verify a column has at least the minimum number of rows.

    Raises:
        ValidationError: If the column has fewer than min_rows entries
    """
    n = len(array)
    if n < min_rows:
        raise ValidationError(
            f"{name}: requires at least {min_rows} rows, got {n}"
        )


def check_finite(
    array: NDArray[np.floating[Any]],
    name: str,
    *,
    allow: NDArray[np.bool_] | None = None,
) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages
        allow: Boolean mask of positions where non-finite values are permitted

    Raises:
        ValidationError: If array contains non-finite values
    """
    bad = ~np.isfinite(array)
    if allow is not None:
        bad &= ~allow
    if np.any(bad):
        n_nan = int(np.sum(np.isnan(array) & bad))
        n_inf = int(np.sum(np.isinf(array) & bad))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_nonnegative(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify all finite entries are >= 0.

    Raises:
        ValidationError: If any finite entry is negative
    """
    finite = array[np.isfinite(array)]
    if np.any(finite < 0):
        raise ValidationError(
            f"{name}: must be non-negative, got minimum {float(np.min(finite))}"
        )


def check_unit_interval(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify all finite entries lie in [0, 1].

    Raises:
        ValidationError: If any finite entry falls outside [0, 1]
    """
    finite = array[np.isfinite(array)]
    outside = finite[(finite < 0) | (finite > 1)]
    if outside.size > 0:
        raise ValidationError(
            f"{name}: must lie in [0, 1], got {outside.tolist()}"
        )


def check_bool(value: Any, name: str) -> None:
    """
    Verify value is a single boolean flag.

    numpy booleans are accepted; integers are not.

    Raises:
        ValidationError: If value is not a bool
    """
    if not isinstance(value, (bool, np.bool_)):
        raise ValidationError(
            f"{name}: expected a single bool, got {type(value).__name__} {value!r}"
        )


def check_str_sequence(value: Any, name: str) -> tuple[str, ...]:
    """
    Validate a string or a sequence of strings.

    A bare string is treated as a sequence of one.

    Returns:
        Tuple of strings

    Raises:
        ValidationError: If value is not a str or contains non-str items
    """
    if isinstance(value, str):
        return (value,)

    if not isinstance(value, Sequence) and not isinstance(value, np.ndarray):
        raise ValidationError(
            f"{name}: expected str or sequence of str, got {type(value).__name__}"
        )

    items = tuple(value)
    bad = [v for v in items if not isinstance(v, (str, np.str_))]
    if bad:
        raise ValidationError(
            f"{name}: expected only strings, got {bad!r}"
        )
    return tuple(str(v) for v in items)
