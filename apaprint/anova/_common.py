"""
Common data types for ANOVA printing.

Contains the frozen parameter payload that goes inside the Result[P]
envelope. The payload is a pure data container: no methods, no computation.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from apaprint.anova._table import ApaTable


# Row name used to carry the error SS of a stratum without tested terms.
# It only feeds the pooled error SS of generalized eta-squared.
DUMMY_TERM = "aovlist_residuals"

INTERCEPT_TERM = "(Intercept)"


@dataclass(frozen=True)
class AnovaPrintParams:
    """
    Parameter payload for print_anova().

    All string mappings are keyed by sanitized term name and follow the
    row order of the input table.
    """
    statistic: Mapping[str, str]                    # term -> "$F(1, 20) = 5.00$, ..."
    estimate: Mapping[str, str]                     # term -> "$\eta^2_p = .20$"
    full_result: Mapping[str, str]                  # term -> statistic, estimate
    table: ApaTable
    effect_sizes: Mapping[str, Mapping[str, float]]  # es code -> {term: unrounded value}
    terms: tuple[str, ...]                          # retained terms, input spelling
    es: tuple[str, ...]                             # requested codes, report order
