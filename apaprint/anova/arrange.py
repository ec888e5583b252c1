"""
Arranging upstream ANOVA output into variance tables.

ANOVA routines usually report one row per term plus a "Residuals" row.
print_anova() needs the error SS and df next to every term instead, so
these helpers copy each stratum's residuals onto its terms.

Rows can be mappings or objects exposing term, df, sum_sq, f_value and
p_value (e.g. frozen AnovaTableRow dataclasses). sumsq, statistic and p.value
are accepted as alternative spellings.
"""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

import numpy as np
from scipy import stats as sp_stats

from apaprint.core.exceptions import ValidationError
from apaprint.core.validation import check_array
from apaprint.anova._common import DUMMY_TERM
from apaprint.anova.design import VarianceTable


_FIELD_ALIASES = {
    'term': ('term',),
    'df': ('df',),
    'sum_sq': ('sum_sq', 'sumsq'),
    'f_value': ('f_value', 'statistic'),
    'p_value': ('p_value', 'p.value'),
}


def arrange_anova(
    rows: Sequence[Any],
    *,
    residual_term: str = "Residuals",
    correction: str | None = None,
) -> VarianceTable:
    """
    Arrange a single-stratum ANOVA table.

    Every term is tested against the one residual row. Missing F values
    are computed from the mean squares, missing p values from the F
    distribution.

    Args:
        rows: ANOVA rows including exactly one residual row
        residual_term: Term name of the residual row
        correction: Recorded on the result as the df correction

    Returns:
        VarianceTable without the residual row

    Examples:
        >>> table = arrange_anova([
        ...     {'term': 'dose', 'df': 2, 'sum_sq': 30.0},
        ...     {'term': 'Residuals', 'df': 27, 'sum_sq': 90.0},
        ... ])
        >>> table.sumsq_err
        array([90.])
    """
    columns = _empty_columns()
    _add_stratum(columns, rows, residual_term, stratum=None)
    return VarianceTable.from_columns(columns, correction=correction)


def arrange_anova_strata(
    strata: Mapping[str, Sequence[Any]],
    *,
    residual_term: str = "Residuals",
    correction: str | None = None,
) -> VarianceTable:
    """
    Arrange a multi-stratum ANOVA (e.g. an "Error(subject/condition)" model).

    Each term is tested against the residuals of its own stratum. A stratum
    that has residuals but no tested term (typically the between-subjects
    stratum of a purely within-subjects design) is kept as an
    aovlist_residuals row so its error SS enters generalized eta-squared.

    Args:
        strata: {stratum name: rows}, each stratum with one residual row
        residual_term: Term name of the residual rows

    Returns:
        VarianceTable
    """
    if not isinstance(strata, Mapping) or not strata:
        raise ValidationError("strata: expected a non-empty mapping of stratum -> rows")

    columns = _empty_columns()
    for name, rows in strata.items():
        _add_stratum(columns, rows, residual_term, stratum=name)
    return VarianceTable.from_columns(columns, correction=correction)


def correct_sphericity(
    table: VarianceTable,
    epsilon: float | Mapping[str, float],
    *,
    method: str = "GG",
) -> VarianceTable:
    """
    Apply a sphericity correction to degrees of freedom and p values.

    Both df of each corrected term are multiplied by epsilon and the p value
    is recomputed from the F distribution with the corrected df.

    Args:
        table: Variance table to correct
        epsilon: One epsilon for all terms, or {term: epsilon}; terms not
            listed are left uncorrected
        method: Name of the correction ("GG", "HF", ...), shown as superscript
            on the df column headers

    Returns:
        New VarianceTable with correction=method

    Raises:
        ValidationError: If epsilon is outside (0, 1] or names unknown terms
    """
    if not isinstance(method, str) or not method:
        raise ValidationError(f"method: expected non-empty str, got {method!r}")

    if isinstance(epsilon, Mapping):
        unknown = [t for t in epsilon if t not in table.term]
        if unknown:
            raise ValidationError(
                f"epsilon: terms {unknown} not in table; available {list(table.term)}"
            )
        eps = np.array([epsilon.get(t, 1.0) for t in table.term], dtype=np.float64)
    else:
        eps_arr = check_array(epsilon, "epsilon")
        if eps_arr.ndim != 0:
            raise ValidationError(
                f"epsilon: expected a scalar or a mapping, got shape {eps_arr.shape}"
            )
        eps = np.full(table.n_rows, float(eps_arr))

    if np.any(~np.isfinite(eps)) or np.any(eps <= 0) or np.any(eps > 1):
        raise ValidationError(f"epsilon: must lie in (0, 1], got {eps.tolist()}")

    eps = np.where(table.dummy_mask, 1.0, eps)
    df = table.df * eps
    df_res = table.df_res * eps
    p_value = np.where(
        table.dummy_mask,
        np.nan,
        sp_stats.f.sf(table.statistic, df, df_res),
    )

    return replace(table, df=df, df_res=df_res, p_value=p_value, correction=method)


# =====================================================================
# Helpers
# =====================================================================


def _empty_columns() -> dict[str, list[Any]]:
    return {
        'term': [], 'sumsq': [], 'sumsq_err': [], 'df': [],
        'df_res': [], 'statistic': [], 'p.value': [],
    }


def _add_stratum(
    columns: dict[str, list[Any]],
    rows: Sequence[Any],
    residual_term: str,
    stratum: str | None,
) -> None:
    where = f"stratum {stratum!r}" if stratum is not None else "rows"
    parsed = [_parse_row(row, where) for row in rows]

    residuals = [r for r in parsed if r['term'] == residual_term]
    if len(residuals) != 1:
        raise ValidationError(
            f"{where}: expected exactly one {residual_term!r} row, got {len(residuals)}"
        )
    res = residuals[0]
    if res['sum_sq'] is None or res['df'] is None:
        raise ValidationError(f"{where}: residual row needs df and sum_sq")

    terms = [r for r in parsed if r['term'] != residual_term]
    if not terms:
        if stratum is None:
            raise ValidationError(f"{where}: no terms besides {residual_term!r}")
        _append(columns, DUMMY_TERM, np.nan, res['sum_sq'], np.nan, res['df'], np.nan, np.nan)
        return

    for row in terms:
        if row['sum_sq'] is None or row['df'] is None:
            raise ValidationError(f"{where}: term {row['term']!r} needs df and sum_sq")

        f_value = row['f_value']
        if f_value is None:
            ms_err = res['sum_sq'] / res['df'] if res['df'] > 0 else np.nan
            f_value = (row['sum_sq'] / row['df']) / ms_err if row['df'] > 0 else np.nan

        p_value = row['p_value']
        if p_value is None:
            p_value = float(sp_stats.f.sf(f_value, row['df'], res['df']))

        _append(
            columns, row['term'], row['sum_sq'], res['sum_sq'],
            row['df'], res['df'], f_value, p_value,
        )


def _append(
    columns: dict[str, list[Any]],
    term: str,
    sumsq: float,
    sumsq_err: float,
    df: float,
    df_res: float,
    statistic: float,
    p_value: float,
) -> None:
    columns['term'].append(term)
    columns['sumsq'].append(sumsq)
    columns['sumsq_err'].append(sumsq_err)
    columns['df'].append(df)
    columns['df_res'].append(df_res)
    columns['statistic'].append(statistic)
    columns['p.value'].append(p_value)


def _parse_row(row: Any, where: str) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, aliases in _FIELD_ALIASES.items():
        out[name] = None
        for alias in aliases:
            value = row.get(alias) if isinstance(row, Mapping) else getattr(row, alias, None)
            if value is not None:
                out[name] = value
                break

    if not isinstance(out['term'], str):
        raise ValidationError(f"{where}: every row needs a str term, got {out['term']!r}")

    for name in ('df', 'sum_sq', 'f_value', 'p_value'):
        value = out[name]
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
            raise ValidationError(
                f"{where}: {name} of {out['term']!r} must be numeric, got {value!r}"
            )
        out[name] = float(value)
        # NaN counts as not reported
        if np.isnan(out[name]):
            out[name] = None

    return out
