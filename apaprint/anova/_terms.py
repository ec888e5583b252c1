"""
Term names: sanitizing, prettifying and ordering model terms.

Model terms arrive in model-formula spelling ("(Intercept)", "dose",
"dose:sex"). They are keyed by a sanitized identifier and displayed with
a prettified label.
"""

import re
from collections.abc import Sequence


def sanitize_terms(terms: Sequence[str]) -> list[str]:
    """
    Turn term names into identifiers.

    Parentheses are removed, every other non-word character becomes "_".

    Examples:
        >>> sanitize_terms(["(Intercept)", "A:B", "dose level"])
        ['Intercept', 'A_B', 'dose_level']
    """
    out = []
    for term in terms:
        term = re.sub(r"[()]", "", term)
        out.append(re.sub(r"\W", "_", term))
    return out


def prettify_terms(terms: Sequence[str]) -> list[str]:
    """
    Turn term names into table labels.

    Parentheses and backticks are removed, underscores and dots become
    spaces, each factor name is capitalized and interactions are joined
    with a LaTeX times sign.

    Examples:
        >>> prettify_terms(["(Intercept)", "dose_level:sex"])
        ['Intercept', 'Dose level $\\\\times$ Sex']
    """
    out = []
    for term in terms:
        term = re.sub(r"[()`]", "", term)
        term = re.sub(r"[_.]", " ", term)
        factors = [f[:1].upper() + f[1:] for f in term.split(":")]
        out.append(" $\\times$ ".join(factors))
    return out


def term_factors(term: str) -> tuple[str, ...]:
    """Factor names making up a term ("A:B" -> ("A", "B"))."""
    return tuple(f.strip() for f in term.split(":"))


def interaction_order(term: str) -> int:
    """Number of factors in a term; 0 for the intercept."""
    if re.sub(r"[()]", "", term) == "Intercept":
        return 0
    return len(term_factors(term))


def sort_effects(terms: Sequence[str]) -> list[int]:
    """
    Order rows for presentation.

    Intercept first, then main effects, two-way interactions and so on.
    Terms of equal order keep their input order.

    Returns:
        Row indices in presentation order
    """
    return sorted(range(len(terms)), key=lambda i: interaction_order(terms[i]))
