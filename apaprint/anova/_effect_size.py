"""
Effect sizes for ANOVA terms.

All three measures are ratios of sums of squares taken from an already
computed variance table:

    eta^2      SS_term / (sum of all SS_term + pooled SS_error)
    eta^2_p    SS_term / (SS_term + SS_error of that term)
    eta^2_G    SS_term / (SS_term + pooled SS_error + SS_obs - SS_obs,term)

The pooled SS_error is the sum of the distinct error sums of squares, i.e.
one contribution per error stratum. For generalized eta-squared, SS_obs is
the total SS of all terms involving an observed (measured rather than
manipulated) factor, and SS_obs,term is the term's own SS if it involves
one (Olejnik & Algina, 2003; Bakeman, 2005).

A zero denominator yields NaN.
"""

import warnings
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from apaprint.core.exceptions import MissingFactorError, UnsupportedEffectSizeError
from apaprint.anova._terms import sanitize_terms, term_factors
from apaprint.anova.design import VarianceTable


# Report order: partial, generalized, classic
SUPPORTED_EFFECT_SIZES = ('pes', 'ges', 'es')

EFFECT_SIZE_NAMES = {
    'pes': 'partial eta-squared',
    'ges': 'generalized eta-squared',
    'es': 'eta-squared',
}


def check_effect_sizes(es: Sequence[str]) -> tuple[str, ...]:
    """
    Validate requested effect-size codes and put them in report order.

    Raises:
        UnsupportedEffectSizeError: If any code is not supported
    """
    requested = tuple(es)
    unsupported = [code for code in requested if code not in SUPPORTED_EFFECT_SIZES]
    if unsupported:
        raise UnsupportedEffectSizeError(
            f"Requested effect size measure(s) currently not supported: "
            f"{', '.join(requested)}. Supported: {', '.join(SUPPORTED_EFFECT_SIZES)}",
            requested=requested,
            supported=SUPPORTED_EFFECT_SIZES,
        )
    return tuple(code for code in SUPPORTED_EFFECT_SIZES if code in requested)


def eta_squared(
    sumsq: NDArray[np.floating[Any]],
    sumsq_err: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Classic eta-squared: share of the total variance."""
    total = np.nansum(sumsq) + _pooled_error(sumsq_err)
    return _ratio(sumsq, np.full_like(sumsq, total))


def partial_eta_squared(
    sumsq: NDArray[np.floating[Any]],
    sumsq_err: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Partial eta-squared: share of term plus its own error variance."""
    return _ratio(sumsq, sumsq + sumsq_err)


def generalized_eta_squared(
    terms: Sequence[str],
    sumsq: NDArray[np.floating[Any]],
    sumsq_err: NDArray[np.floating[Any]],
    observed: Sequence[str] | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Generalized eta-squared.

    Args:
        terms: Term names, one per row ("A", "A:B", ...)
        sumsq: Term sums of squares
        sumsq_err: Error sums of squares each term is tested against
        observed: Names of observed (non-manipulated) factors

    Raises:
        MissingFactorError: If an observed factor occurs in no term
    """
    obs = observed_mask(terms, observed or ())
    obs_total = float(np.nansum(sumsq[obs]))
    obs_term = np.where(obs, sumsq, 0.0)
    return _ratio(sumsq, sumsq + _pooled_error(sumsq_err) + obs_total - obs_term)


def observed_mask(terms: Sequence[str], observed: Sequence[str]) -> NDArray[np.bool_]:
    """
    Flag terms that involve at least one observed factor.

    A term involves a factor when the factor is one of its ":"-separated
    components; names are compared in sanitized form.

    Raises:
        MissingFactorError: If an observed factor occurs in no term
    """
    components = [set(sanitize_terms(term_factors(t))) for t in terms]
    mask = np.zeros(len(terms), dtype=bool)
    for name in observed:
        key = sanitize_terms([name])[0]
        hits = np.array([key in c for c in components], dtype=bool)
        if not hits.any():
            raise MissingFactorError(
                f"Observed variable not in data: {name}",
                missing=name,
                terms=tuple(terms),
            )
        mask |= hits
    return mask


def compute_effect_sizes(
    table: VarianceTable,
    es: Sequence[str],
    observed: Sequence[str] | None = None,
) -> tuple[dict[str, NDArray[np.floating[Any]]], tuple[str, ...]]:
    """
    Compute the requested effect sizes for every row of a variance table.

    Dummy aovlist_residuals rows take part in the pooled error SS; their
    own values are NaN and meaningless.

    Returns:
        ({code: values}, warnings) with one value per table row

    Raises:
        UnsupportedEffectSizeError: If a code is not supported
        MissingFactorError: If an observed factor occurs in no term
    """
    codes = check_effect_sizes(es)
    values: dict[str, NDArray[np.floating[Any]]] = {}

    for code in codes:
        if code == 'pes':
            values[code] = partial_eta_squared(table.sumsq, table.sumsq_err)
        elif code == 'ges':
            values[code] = generalized_eta_squared(
                table.term, table.sumsq, table.sumsq_err, observed,
            )
        else:
            values[code] = eta_squared(table.sumsq, table.sumsq_err)

    notes: list[str] = []
    real_rows = ~table.dummy_mask
    for code, vals in values.items():
        degenerate = real_rows & np.isnan(vals)
        if degenerate.any():
            bad_terms = [t for t, d in zip(table.term, degenerate) if d]
            msg = (
                f"{EFFECT_SIZE_NAMES[code]}: zero denominator for "
                f"{', '.join(bad_terms)}; reported as missing"
            )
            warnings.warn(msg, RuntimeWarning, stacklevel=3)
            notes.append(msg)

    return values, tuple(notes)


# =====================================================================
# Helpers
# =====================================================================


def _pooled_error(sumsq_err: NDArray[np.floating[Any]]) -> float:
    """Sum of the distinct error sums of squares (one per error stratum)."""
    finite = sumsq_err[np.isfinite(sumsq_err)]
    return float(np.sum(np.unique(finite)))


def _ratio(
    num: NDArray[np.floating[Any]],
    den: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    with np.errstate(divide='ignore', invalid='ignore'):
        out = num / den
    return np.where(den == 0, np.nan, out)
