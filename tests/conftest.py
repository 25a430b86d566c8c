'''
Pytest configuration and fixtures for the scoregas test suite.

Provides seeded random number generators, short fixed series, simulated data
from the score-driven models and hypothesis strategies for in-domain
parameter values.
'''

from typing import Callable

import numpy as np
import pandas as pd
import pytest
from hypothesis import strategies as st

from scoregas.core.config import reset_config
from scoregas.models.gas import BetaGenTEGARCH, BetaTEGARCH


# ---- Configuration ----

@pytest.fixture(autouse=True)
def default_config():
    """Restore the default configuration after every test."""
    yield
    reset_config()


# ---- Basic Data Fixtures ----

@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def short_series() -> np.ndarray:
    """Five observations used by the filtering scenarios."""
    return np.array([1.0, -0.5, 2.0, 0.3, -1.2])


@pytest.fixture
def dated_series(short_series: np.ndarray) -> pd.Series:
    """The short series indexed by business days."""
    index = pd.date_range("2024-01-01", periods=len(short_series), freq="B")
    return pd.Series(short_series, index=index, name="returns")


@pytest.fixture
def beta_t_data() -> np.ndarray:
    """Series simulated from a Beta-t-EGARCH model."""
    model = BetaTEGARCH([0.0, 0.9, 0.1, 8.0])
    series, _ = model.simulate(500, burn=200, random_state=7)
    return series


@pytest.fixture
def gen_t_data() -> np.ndarray:
    """Series simulated from a Beta-generalized-t-EGARCH model."""
    model = BetaGenTEGARCH([0.0, 0.9, 0.1, 8.0, 1.5])
    series, _ = model.simulate(500, burn=200, random_state=11)
    return series


# ---- Hypothesis Strategies ----

@st.composite
def beta_t_param_strategy(draw: Callable) -> np.ndarray:
    """Strategy for in-domain Beta-t-EGARCH parameters."""
    omega = draw(st.floats(min_value=-2.0, max_value=2.0))
    phi = draw(st.floats(min_value=-0.99, max_value=0.99))
    kappa = draw(st.floats(min_value=1e-3, max_value=2.0))
    nu = draw(st.floats(min_value=2.01, max_value=200.0))
    return np.array([omega, phi, kappa, nu])


@st.composite
def gen_t_param_strategy(draw: Callable) -> np.ndarray:
    """Strategy for in-domain Beta-generalized-t-EGARCH parameters."""
    base = draw(beta_t_param_strategy())
    upsilon = draw(st.floats(min_value=0.2, max_value=10.0))
    return np.append(base, upsilon)
