"""
APA-style reporting of ANOVA results.

Public API:
    print_anova(x, ...) -> AnovaPrintSolution          # strings + table
    VarianceTable.from_columns(columns) -> VarianceTable
    arrange_anova(rows, ...) -> VarianceTable           # single stratum
    arrange_anova_strata(strata, ...) -> VarianceTable  # Error() strata
    correct_sphericity(table, epsilon, ...) -> VarianceTable
"""

from apaprint.anova.solvers import print_anova
from apaprint.anova.solution import AnovaPrintSolution
from apaprint.anova.design import VarianceTable
from apaprint.anova.arrange import (
    arrange_anova,
    arrange_anova_strata,
    correct_sphericity,
)
from apaprint.anova._effect_size import (
    SUPPORTED_EFFECT_SIZES,
    eta_squared,
    partial_eta_squared,
    generalized_eta_squared,
)
from apaprint.anova._table import ApaTable
from apaprint.anova._terms import sanitize_terms, prettify_terms, sort_effects

__all__ = [
    "print_anova",
    "AnovaPrintSolution",
    "VarianceTable",
    "ApaTable",
    "arrange_anova",
    "arrange_anova_strata",
    "correct_sphericity",
    "SUPPORTED_EFFECT_SIZES",
    "eta_squared",
    "partial_eta_squared",
    "generalized_eta_squared",
    "sanitize_terms",
    "prettify_terms",
    "sort_effects",
]
