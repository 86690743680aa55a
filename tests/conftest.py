import os
import sys

import numpy as np
import pytest

# Ensure the project root is on sys.path so tests can import `mtp_analysis`
# when running directly from the repository without installing the package.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def five_p_values() -> np.ndarray:
    """Evenly spaced p-values 0.01, ..., 0.05 used across the worked examples."""
    return np.array([0.01, 0.02, 0.03, 0.04, 0.05])


@pytest.fixture
def mixture_p_values() -> np.ndarray:
    """200 simulated p-values, 150 true nulls, reproducible."""
    from mtp_analysis.generators import simulate_p_values

    sim = simulate_p_values(m=200, m0=150, s1=0.2, s2=8.0, random_seed=2024)
    return sim["p_value"].to_numpy()
