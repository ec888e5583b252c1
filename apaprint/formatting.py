"""
Number formatting following APA conventions.

Public API:
    printnum(x, digits, ...) -> str | list[str]   # rounded, zero-padded numbers
    printp(p, digits, ...) -> str | list[str]     # p values ("< .001", ".035")
    printdf(x, digits) -> str | list[str]         # degrees of freedom ("1", "17.5")
    in_paren(x) -> str                            # "(" -> "[" for use inside parentheses

Rounding is half away from zero on the shortest decimal representation of
the input, so 0.125 rounds to 0.13 rather than to 0.12.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any

import numpy as np

from apaprint.core.exceptions import ValidationError
from apaprint.core.options import get_options
from apaprint.core.validation import check_array, check_unit_interval


def printnum(
    x: Any,
    digits: int = 2,
    *,
    gt1: bool = True,
    zero: bool = True,
    na_string: str | None = None,
    big_mark: str = ",",
) -> str | list[str]:
    """
    Round and format numbers for reporting.

    Args:
        x: Scalar or 1D array-like of numbers
        digits: Number of decimal places; values are padded with trailing zeros
        gt1: If False, the quantity cannot exceed 1 and the leading zero is
            dropped (".20" instead of "0.20")
        zero: If False, values that round to zero are reported as an upper
            bound ("< .01") instead of "0.00"
        na_string: Rendering of NaN. Defaults to the ``na_string`` option.
        big_mark: Thousands separator

    Returns:
        str for scalar input, list of str otherwise

    Examples:
        >>> printnum(1234.5678)
        '1,234.57'
        >>> printnum(0.2, gt1=False)
        '.20'
        >>> printnum(0.001, zero=False)
        '< 0.01'
    """
    _check_digits(digits)
    if na_string is None:
        na_string = get_options().na_string

    def fmt(value: float) -> str:
        return _format_number(value, digits, gt1, zero, na_string, big_mark)

    return _apply(x, fmt, "x")


def printp(
    p: Any,
    digits: int | None = None,
    *,
    na_string: str | None = None,
    add_equals: bool = False,
) -> str | list[str]:
    """
    Format p values.

    Values below the smallest value representable at ``digits`` render as
    ``< .001``; values that would round to 1 render as ``> .999``. All other
    values are rounded without a leading zero.

    Args:
        p: Scalar or 1D array-like of p values in [0, 1]
        digits: Decimal places. Defaults to the ``p_digits`` option.
        na_string: Rendering of NaN. Defaults to the ``na_string`` option.
        add_equals: Prefix "= " to values that carry no comparison sign,
            for use after "p " in running text.

    Raises:
        ValidationError: If a p value lies outside [0, 1]
    """
    options = get_options()
    if digits is None:
        digits = options.p_digits
    _check_digits(digits)
    if digits < 1:
        raise ValidationError(f"digits: p values need at least 1 digit, got {digits}")
    if na_string is None:
        na_string = options.na_string

    check_unit_interval(np.atleast_1d(check_array(p, "p")), "p")

    threshold = Decimal(1).scaleb(-digits)

    def fmt(value: float) -> str:
        if np.isnan(value):
            return na_string
        rounded = _round(value, digits)
        if Decimal(repr(float(value))) < threshold:
            out = "< " + _format_number(float(threshold), digits, False, True, na_string, "")
        elif rounded >= 1:
            out = "> " + _format_number(float(1 - threshold), digits, False, True, na_string, "")
        else:
            out = _format_number(value, digits, False, True, na_string, "")
        if add_equals:
            out = add_equals_sign(out)
        return out

    return _apply(p, fmt, "p")


def printdf(x: Any, digits: int = 2) -> str | list[str]:
    """
    Format degrees of freedom.

    Rounds to ``digits`` decimals but, unlike printnum(), drops trailing
    zeros so integral df print as integers and corrected df keep only the
    decimals they need.

    Examples:
        >>> printdf([1, 20.0, 17.456])
        ['1', '20', '17.46']
    """
    _check_digits(digits)

    def fmt(value: float) -> str:
        if np.isnan(value):
            return get_options().na_string
        rounded = _round(value, digits)
        if rounded == rounded.to_integral_value():
            return f"{rounded.to_integral_value():f}"
        return f"{rounded.normalize():f}"

    return _apply(x, fmt, "x")


def in_paren(x: str) -> str:
    """
    Prepare a string for reporting inside parentheses.

    APA style uses brackets for parentheses nested in parentheses, so
    "$F(1, 20) = 5.00$" becomes "$F[1, 20] = 5.00$".
    """
    if not isinstance(x, str):
        raise ValidationError(f"x: expected str, got {type(x).__name__}")
    return x.replace("(", "[").replace(")", "]")


def add_equals_sign(x: str) -> str:
    """Prefix "= " unless the string already starts with a comparison sign."""
    if x == "" or x.lstrip().startswith(("<", ">", "=")):
        return x
    return "= " + x


# =====================================================================
# Helpers
# =====================================================================


def _check_digits(digits: Any) -> None:
    if isinstance(digits, bool) or not isinstance(digits, (int, np.integer)):
        raise ValidationError(f"digits: expected int, got {digits!r}")
    if digits < 0:
        raise ValidationError(f"digits: must be non-negative, got {digits}")


def _round(value: float, digits: int) -> Decimal:
    """Round half away from zero using the shortest decimal representation."""
    quantum = Decimal(1).scaleb(-digits)
    exact = Decimal(repr(float(value)))
    # quantize() fails once the result needs more digits than the context holds
    with localcontext() as ctx:
        ctx.prec = max(exact.adjusted(), 0) + digits + 2
        return exact.quantize(quantum, rounding=ROUND_HALF_UP)


def _format_number(
    value: float,
    digits: int,
    gt1: bool,
    zero: bool,
    na_string: str,
    big_mark: str,
) -> str:
    if np.isnan(value):
        return na_string
    if np.isinf(value):
        return "\\infty" if value > 0 else "-\\infty"

    rounded = _round(value, digits)
    if rounded == 0:
        if not zero and value != 0:
            smallest = float(Decimal(1).scaleb(-digits))
            return "< " + _format_number(smallest, digits, gt1, True, na_string, big_mark)
        rounded = abs(rounded)

    out = f"{rounded:,.{digits}f}"
    if big_mark != ",":
        out = out.replace(",", big_mark)

    if not gt1 and abs(rounded) < 1:
        out = out.replace("0.", ".", 1)

    return out


def _apply(x: Any, fmt, name: str) -> str | list[str]:
    """Apply a scalar formatter to a scalar or a 1D array-like."""
    arr = check_array(x, name)
    if arr.ndim == 0:
        return fmt(float(arr))
    if arr.ndim != 1:
        raise ValidationError(f"{name}: expected scalar or 1D input, got {arr.ndim}D")
    return [fmt(float(v)) for v in arr]
