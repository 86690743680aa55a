"""Simulate p-values from a two-component mixture.

Exports:
- simulate_p_values(m, m0, s1, s2, random_seed=None) -> pd.DataFrame

True nulls get Beta(1, 1) (uniform) p-values and alternatives get
Beta(s1, s2) p-values; with ``s1 < 1 < s2`` the alternatives concentrate
near zero. Used to build scenarios for the procedures and their tests.
"""

from __future__ import annotations

from numbers import Integral, Real
from typing import Optional

import numpy as np
import pandas as pd
from scipy.stats import beta

from mtp_analysis.exceptions import InvalidArgumentError


def _validate_mixture_params(m, m0, s1, s2) -> None:
    if isinstance(m, bool) or not isinstance(m, Integral) or m < 1:
        raise InvalidArgumentError(f"m must be a positive integer; got {m!r}.")
    if isinstance(m0, bool) or not isinstance(m0, Integral) or not 0 <= m0 <= m:
        raise InvalidArgumentError(
            f"m0 must be an integer with 0 <= m0 <= m (m={m}); got {m0!r}."
        )
    for name, value in (("s1", s1), ("s2", s2)):
        if (
            isinstance(value, bool)
            or not isinstance(value, Real)
            or not np.isfinite(value)
            or value <= 0
        ):
            raise InvalidArgumentError(
                f"{name} must be a finite positive number; got {value!r}."
            )


def simulate_p_values(
    m: int,
    m0: int,
    s1: float,
    s2: float,
    random_seed: Optional[int] = None,
) -> pd.DataFrame:
    """Simulate ``m`` p-values of which the first ``m0`` are true nulls.

    Parameters
    ----------
    m
        Total number of hypotheses
    m0
        Number of true null hypotheses (0 <= m0 <= m)
    s1, s2
        Shape parameters of the Beta distribution of the alternative p-values
    random_seed
        Seed for ``np.random.default_rng``; None draws fresh entropy

    Returns
    -------
    pd.DataFrame
        Columns ``hypothesis`` (0 = true null, 1 = alternative) and
        ``p_value``, one row per hypothesis

    Examples
    --------
    >>> sim = simulate_p_values(m=1000, m0=900, s1=0.1, s2=10, random_seed=123)
    >>> sim.shape
    (1000, 2)
    """
    _validate_mixture_params(m, m0, s1, s2)
    rng = np.random.default_rng(random_seed)

    hypothesis = np.repeat([0, 1], [m0, m - m0])
    p_value = np.empty(m, dtype=float)
    p_value[:m0] = beta.rvs(1.0, 1.0, size=m0, random_state=rng)
    p_value[m0:] = beta.rvs(s1, s2, size=m - m0, random_state=rng)

    return pd.DataFrame({"hypothesis": hypothesis, "p_value": p_value})
