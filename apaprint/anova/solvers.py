"""
ANOVA printing.

Public API:
    print_anova(x, ...) -> AnovaPrintSolution
"""

import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import numpy as np

from apaprint.core.exceptions import ValidationError
from apaprint.core.options import get_options
from apaprint.core.result import Result
from apaprint.core.validation import check_bool, check_str_sequence
from apaprint.formatting import add_equals_sign, in_paren as to_brackets
from apaprint.formatting import printdf, printnum, printp
from apaprint.anova._common import AnovaPrintParams, DUMMY_TERM, INTERCEPT_TERM
from apaprint.anova._effect_size import check_effect_sizes, compute_effect_sizes
from apaprint.anova._table import assemble_table
from apaprint.anova._terms import prettify_terms, sanitize_terms, sort_effects
from apaprint.anova.design import VarianceTable
from apaprint.anova.solution import AnovaPrintSolution


_ES_SYMBOLS = {
    'pes': "\\eta^2_p",
    'ges': "\\eta^2_G",
    'es': "\\eta^2",
}


def print_anova(
    x: VarianceTable | Mapping[str, Any],
    *,
    intercept: bool = False,
    observed: str | list[str] | tuple[str, ...] | None = None,
    es: str | list[str] | tuple[str, ...] | None = "ges",
    mse: bool | None = None,
    in_paren: bool = False,
) -> AnovaPrintSolution:
    """
    Format an ANOVA table for APA-style reporting.

    Args:
        x: VarianceTable, or columns accepted by VarianceTable.from_columns()
        intercept: Report the "(Intercept)" row
        observed: Names of observed (measured, not manipulated) factors.
            Only used for generalized eta-squared.
        es: Effect sizes to report: "ges" (generalized eta-squared), "pes"
            (partial eta-squared), "es" (eta-squared), several of them, or None
        mse: Report the mean squared error. Defaults to the ``mse`` option.
        in_paren: The statistic will be reported inside parentheses; round
            parentheses are replaced by brackets

    Returns:
        AnovaPrintSolution with statistic, estimate and full_result strings
        per term and the presentation table

    Raises:
        UnsupportedEffectSizeError: If es names an unsupported measure
        MissingFactorError: If an observed factor occurs in no term
        ValidationError: For any other malformed argument

    Examples:
        >>> table = VarianceTable.from_columns({
        ...     'term': ['A'], 'sumsq': [10.0], 'sumsq_err': [40.0],
        ...     'df': [1], 'df_res': [20], 'statistic': [5.0], 'p.value': [0.035],
        ... })
        >>> res = print_anova(table, es="pes")
        >>> res.statistic["A"]
        '$F(1, 20) = 5.00$, $\\\\mathit{MSE} = 2.00$, $p = .035$'
        >>> res.estimate["A"]
        '$\\\\eta^2_p = .20$'
    """
    t0 = time.perf_counter()
    options = get_options()

    table = x if isinstance(x, VarianceTable) else VarianceTable.from_columns(x)

    check_bool(intercept, "intercept")
    check_bool(in_paren, "in_paren")
    observed_names = check_str_sequence(observed, "observed") if observed is not None else ()
    if es is None:
        es_codes: tuple[str, ...] = ()
    else:
        es_codes = check_effect_sizes(check_str_sequence(es, "es"))
    if mse is None:
        mse = options.mse
    check_bool(mse, "mse")

    # Effect sizes use every row, including intercept and dummy rows
    es_values, notes = compute_effect_sizes(table, es_codes, observed_names)

    keep = ~table.dummy_mask
    if not intercept:
        keep &= np.array([t != INTERCEPT_TERM for t in table.term], dtype=bool)
    dropped = tuple(t for t, k in zip(table.term, keep) if not k and t != DUMMY_TERM)
    kept = table.select(keep)
    es_values = {code: vals[keep] for code, vals in es_values.items()}

    # Nothing left (e.g. intercept-only model): all mappings and the table are empty
    terms = sanitize_terms(kept.term)
    if len(set(terms)) != len(terms):
        raise ValidationError(f"term: duplicate term names {list(kept.term)}")

    # Rounding and padding
    cells: dict[str, list[str]] = {
        'statistic': _as_list(printnum(kept.statistic, digits=2)),
        'df': _as_list(printdf(kept.df)),
        'df_res': _as_list(printdf(kept.df_res)),
        'p.value': _as_list(printp(kept.p_value)),
    }
    if mse:
        with np.errstate(divide='ignore', invalid='ignore'):
            mse_values = np.where(kept.df_res > 0, kept.sumsq_err / kept.df_res, np.nan)
        cells['mse'] = _as_list(printnum(mse_values, digits=2))
    for code in es_codes:
        cells[code] = _as_list(printnum(
            es_values[code], digits=options.es_digits, gt1=False, zero=False,
        ))

    # Strings
    statistic: dict[str, str] = {}
    estimate: dict[str, str] = {}
    full_result: dict[str, str] = {}
    for i, term in enumerate(terms):
        stat = f"$F({cells['df'][i]}, {cells['df_res'][i]}) = {cells['statistic'][i]}$"
        if mse:
            stat += f", $\\mathit{{MSE}} = {cells['mse'][i]}$"
        stat += f", $p {add_equals_sign(cells['p.value'][i])}$"
        if in_paren:
            stat = to_brackets(stat)
        statistic[term] = stat

        if es_codes:
            estimate[term] = ", ".join(
                f"${_ES_SYMBOLS[code]} {add_equals_sign(cells[code][i])}$"
                for code in es_codes
            )
            full_result[term] = f"{stat}, {estimate[term]}"
        else:
            full_result[term] = stat

    apa_table = assemble_table(
        prettify_terms(kept.term),
        terms,
        cells,
        es=es_codes,
        mse=mse,
        correction=kept.correction,
        order=sort_effects(kept.term),
    )

    elapsed = time.perf_counter() - t0

    params = AnovaPrintParams(
        statistic=MappingProxyType(statistic),
        estimate=MappingProxyType(estimate),
        full_result=MappingProxyType(full_result),
        table=apa_table,
        effect_sizes=MappingProxyType({
            code: MappingProxyType(dict(zip(terms, (float(v) for v in vals))))
            for code, vals in es_values.items()
        }),
        terms=kept.term,
        es=es_codes,
    )

    result = Result(
        params=params,
        info={
            'es': es_codes,
            'observed': observed_names,
            'mse': mse,
            'intercept': intercept,
            'in_paren': in_paren,
            'correction': kept.correction,
            'dropped_terms': dropped,
        },
        timing={'total_seconds': elapsed},
        warnings=notes,
    )

    return AnovaPrintSolution(_result=result)


def _as_list(value: str | list[str]) -> list[str]:
    return [value] if isinstance(value, str) else value
