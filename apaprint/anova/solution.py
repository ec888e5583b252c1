"""
User-facing ANOVA printing result.

Wraps a Result[AnovaPrintParams] and provides convenient accessors to the
formatted strings and the presentation table.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from apaprint.core.result import Result
from apaprint.anova._common import AnovaPrintParams
from apaprint.anova._table import ApaTable


@dataclass
class AnovaPrintSolution:
    """
    User-facing result of print_anova().

    The string mappings are keyed by sanitized term name:

        >>> res = print_anova(table, es="pes")
        >>> res.statistic["dose_sex"]
        '$F(2, 54) = 3.41$, $\\\\mathit{MSE} = 1.25$, $p = .040$'
    """
    _result: Result[AnovaPrintParams]

    @property
    def statistic(self) -> Mapping[str, str]:
        """Test statistic, df, MSE and p value per term."""
        return self._result.params.statistic

    @property
    def estimate(self) -> Mapping[str, str]:
        """Effect-size estimates per term; empty if none were requested."""
        return self._result.params.estimate

    @property
    def full_result(self) -> Mapping[str, str]:
        """statistic and estimate joined per term."""
        return self._result.params.full_result

    @property
    def table(self) -> ApaTable:
        return self._result.params.table

    @property
    def effect_sizes(self) -> Mapping[str, Mapping[str, float]]:
        """Unrounded effect sizes: {code: {term: value}}."""
        return self._result.params.effect_sizes

    @property
    def terms(self) -> tuple[str, ...]:
        return self._result.params.terms

    @property
    def es(self) -> tuple[str, ...]:
        return self._result.params.es

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text overview of the formatted results."""
        lines = [
            "APA-formatted ANOVA",
            "=" * 72,
        ]
        for term, text in self.full_result.items():
            lines.append(f"{term}: {text}")
        lines.append("")
        lines.append(self.table.to_markdown())
        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            for w in self.warnings:
                lines.append(f"  {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"AnovaPrintSolution(terms={list(self.statistic)}, "
            f"es={list(self.es)})"
        )
