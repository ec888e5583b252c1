"""
apaprint: APA-style reporting of statistical results.

Turns already computed statistics into the strings and tables an APA
manuscript needs, e.g. "$F(1, 20) = 5.00$, $p = .035$, $\\eta^2_G = .20$".

Submodules:
    anova: ANOVA tables and effect sizes
    formatting: printnum, printp and friends
    core: results, options, exceptions
"""

__version__ = "0.1.0"

from apaprint import anova
from apaprint import formatting
from apaprint.anova import print_anova, VarianceTable
from apaprint.formatting import printnum, printp
from apaprint.core.options import get_options, set_options, option_context

__all__ = [
    "__version__",
    "anova",
    "formatting",
    "print_anova",
    "VarianceTable",
    "printnum",
    "printp",
    "get_options",
    "set_options",
    "option_context",
]
