"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from apaprint.core.options import PrintOptions, get_options, set_options


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(autouse=True)
def default_options():
    """Every test starts from the default options."""
    previous = get_options()
    defaults = PrintOptions()
    set_options(
        mse=defaults.mse,
        es_digits=defaults.es_digits,
        p_digits=defaults.p_digits,
        na_string=defaults.na_string,
    )
    yield
    set_options(
        mse=previous.mse,
        es_digits=previous.es_digits,
        p_digits=previous.p_digits,
        na_string=previous.na_string,
    )
