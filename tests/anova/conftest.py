"""
Shared fixtures for ANOVA printing tests.

Variance tables are hand-made so that every effect size has a closed
form: the 2x3 between-subjects table has SS 30, 12, 6 tested against a
residual SS of 108 on 54 df (MSE = 2).
"""

import numpy as np
import pytest

from apaprint.anova import VarianceTable


@pytest.fixture
def single_term_columns():
    """One term, SS 10 against error SS 40 on (1, 20) df."""
    return {
        'term': ['A'],
        'sumsq': [10.0],
        'sumsq_err': [40.0],
        'df': [1],
        'df_res': [20],
        'statistic': [5.0],
        'p.value': [0.035],
    }


@pytest.fixture
def twoway_columns():
    """2x3 between-subjects design with an intercept row."""
    return {
        'term': ['(Intercept)', 'dose', 'sex', 'dose:sex'],
        'sumsq': [1000.0, 30.0, 12.0, 6.0],
        'sumsq_err': [108.0, 108.0, 108.0, 108.0],
        'df': [1, 1, 2, 2],
        'df_res': [54, 54, 54, 54],
        'statistic': [500.0, 15.0, 3.0, 1.5],
        'p.value': [0.0, 0.0003, 0.058, 0.232],
    }


@pytest.fixture
def twoway_table(twoway_columns):
    return VarianceTable.from_columns(twoway_columns)


@pytest.fixture
def within_columns():
    """
    One within-subjects factor (3 levels, 10 subjects).

    The subject stratum has no tested term and survives only as an
    aovlist_residuals row (error SS 50).
    """
    return {
        'term': ['aovlist_residuals', 'cond'],
        'sumsq': [np.nan, 20.0],
        'sumsq_err': [50.0, 36.0],
        'df': [np.nan, 2],
        'df_res': [9, 18],
        'statistic': [np.nan, 5.0],
        'p.value': [np.nan, (1 + 10 / 18) ** -9],
    }


@pytest.fixture
def within_table(within_columns):
    return VarianceTable.from_columns(within_columns)
