"""
ANOVA variance table.

Wraps a validated, pre-computed ANOVA table: one row per model term with
its sum of squares, the error sum of squares it is tested against, both
degrees of freedom, the F statistic and its p value.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

import numpy as np
from numpy.typing import NDArray

from apaprint.core.exceptions import ValidationError
from apaprint.core.validation import (
    check_array,
    check_1d,
    check_consistent_length,
    check_finite,
    check_min_rows,
    check_nonnegative,
    check_str_sequence,
    check_unit_interval,
)
from apaprint.anova._common import DUMMY_TERM


REQUIRED_COLUMNS = ('term', 'sumsq', 'sumsq_err', 'df', 'df_res', 'statistic', 'p.value')

_COLUMN_ALIASES = {'p.value': ('p.value', 'p_value')}


@dataclass(frozen=True)
class VarianceTable:
    """
    Validated ANOVA variance table.

    Created via from_columns(), not directly.
    """
    term: tuple[str, ...]
    sumsq: NDArray[np.floating[Any]]
    sumsq_err: NDArray[np.floating[Any]]
    df: NDArray[np.floating[Any]]
    df_res: NDArray[np.floating[Any]]
    statistic: NDArray[np.floating[Any]]
    p_value: NDArray[np.floating[Any]]
    correction: str | None = None     # sphericity correction of df, e.g. 'GG'

    @property
    def n_rows(self) -> int:
        return len(self.term)

    @property
    def dummy_mask(self) -> NDArray[np.bool_]:
        """True for rows that only carry a stratum's error SS."""
        return np.array([t == DUMMY_TERM for t in self.term], dtype=bool)

    def select(self, mask: NDArray[np.bool_]) -> 'VarianceTable':
        """Return a new table with the rows where mask is True."""
        mask = np.asarray(mask, dtype=bool)
        return replace(
            self,
            term=tuple(t for t, keep in zip(self.term, mask) if keep),
            sumsq=self.sumsq[mask],
            sumsq_err=self.sumsq_err[mask],
            df=self.df[mask],
            df_res=self.df_res[mask],
            statistic=self.statistic[mask],
            p_value=self.p_value[mask],
        )

    def drop_terms(self, *terms: str) -> 'VarianceTable':
        """Return a new table without the named terms."""
        return self.select(np.array([t not in terms for t in self.term], dtype=bool))

    def to_columns(self) -> dict[str, Any]:
        """Inverse of from_columns()."""
        return {
            'term': list(self.term),
            'sumsq': self.sumsq.copy(),
            'sumsq_err': self.sumsq_err.copy(),
            'df': self.df.copy(),
            'df_res': self.df_res.copy(),
            'statistic': self.statistic.copy(),
            'p.value': self.p_value.copy(),
        }

    @staticmethod
    def from_columns(
        columns: Mapping[str, Any],
        *,
        correction: str | None = None,
    ) -> 'VarianceTable':
        """
        Create a variance table from named columns.

        Args:
            columns: Mapping (dict, pandas DataFrame, ...) with the columns
                term, sumsq, sumsq_err, df, df_res, statistic and p.value
                (p_value is accepted for p.value)
            correction: Name of the sphericity correction applied to the
                degrees of freedom, or None

        Returns:
            VarianceTable

        Raises:
            ValidationError: If a column is missing, non-numeric, negative,
                or contains missing values outside aovlist_residuals rows
            DimensionError: If columns have inconsistent lengths
        """
        if not isinstance(columns, Mapping) and not hasattr(columns, 'columns'):
            raise ValidationError(
                f"x: expected a mapping of columns, got {type(columns).__name__}"
            )

        resolved = {name: _resolve_column(columns, name) for name in REQUIRED_COLUMNS}
        missing = [name for name, key in resolved.items() if key is None]
        if missing:
            raise ValidationError(
                f"x: missing required column(s) {missing}; "
                f"expected {list(REQUIRED_COLUMNS)}"
            )

        term = check_str_sequence(list(columns[resolved['term']]), "term")
        check_min_rows(term, 1, "term")

        numeric: dict[str, NDArray[np.floating[Any]]] = {}
        for name in REQUIRED_COLUMNS[1:]:
            arr = check_array(list(columns[resolved[name]]), name)
            check_1d(arr, name)
            numeric[name] = arr

        check_consistent_length(
            term, *numeric.values(), names=REQUIRED_COLUMNS,
        )

        dummy = np.array([t == DUMMY_TERM for t in term], dtype=bool)
        for name, arr in numeric.items():
            allow = None if name == 'sumsq_err' else dummy
            check_finite(arr, name, allow=allow)

        for name in ('sumsq', 'sumsq_err', 'df', 'df_res', 'statistic'):
            check_nonnegative(numeric[name], name)
        check_unit_interval(numeric['p.value'], "p.value")

        if correction is not None and not isinstance(correction, str):
            raise ValidationError(
                f"correction: expected str or None, got {type(correction).__name__}"
            )

        return VarianceTable(
            term=term,
            sumsq=numeric['sumsq'],
            sumsq_err=numeric['sumsq_err'],
            df=numeric['df'],
            df_res=numeric['df_res'],
            statistic=numeric['statistic'],
            p_value=numeric['p.value'],
            correction=correction,
        )


def _resolve_column(columns: Mapping[str, Any], name: str) -> str | None:
    for key in _COLUMN_ALIASES.get(name, (name,)):
        if key in columns:
            return key
    return None
