"""Storey's estimators of the number and proportion of true null hypotheses.

The estimates feed the adaptive procedures, which replace the number of
tested hypotheses ``m`` by the estimated number of true nulls to gain power.

References
----------
Storey, J. D. (2002). A direct approach to false discovery rates.
Journal of the Royal Statistical Society Series B, 64(3), 479-498.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np
import pandas as pd

from mtp_analysis import config
from mtp_analysis.core_utils.validation import (
    check_lambda,
    check_lambdas,
    check_p_values,
)

logger = logging.getLogger(__name__)


def _storey_estimate(p_values: np.ndarray, lambda_: float) -> float:
    m = p_values.size
    n_above = int(np.count_nonzero(p_values > lambda_))
    if lambda_ >= 1.0:
        # (n_above + 1) / 0 is unbounded, so the cap applies.
        return float(m)
    return float(min((n_above + 1) / (1.0 - lambda_), m))


def m0(p_values, lambda_=config.DEFAULT_LAMBDA) -> float | pd.Series:
    """Estimate the number of true null hypotheses.

    Parameters
    ----------
    p_values : array-like
        Observed p-values, finite and in [0, 1]
    lambda_ : float or sequence of float, default=0.5
        Tuning parameter(s) in [0, 1]

    Returns
    -------
    float or pd.Series
        ``min((#{p > lambda} + 1) / (1 - lambda), m)`` for a scalar
        ``lambda_``. For a sequence, a Series with one estimate per value,
        indexed by the lambda values themselves.

    Notes
    -----
    Lambda values in a sweep should be unique. Duplicates are not rejected;
    they produce repeated index labels carrying identical estimates.

    Examples
    --------
    >>> import numpy as np
    >>> m0(np.linspace(0.01, 0.1, 10), lambda_=0.5)
    2.0
    """
    p_values = check_p_values(p_values)

    if isinstance(lambda_, Iterable) and not isinstance(lambda_, (str, bytes)):
        lambdas = check_lambdas(lambda_)
        estimates = pd.Series(
            [_storey_estimate(p_values, lam) for lam in lambdas],
            index=pd.Index(lambdas, name="lambda"),
            dtype=float,
            name="m0",
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Storey m0 sweep over %d lambda values (m=%d): %s",
                lambdas.size,
                p_values.size,
                estimates.to_dict(),
            )
        return estimates

    lambda_ = check_lambda(lambda_)
    estimate = _storey_estimate(p_values, lambda_)
    logger.debug(
        "Storey m0 estimate %.4f at lambda=%.3f (m=%d)", estimate, lambda_, p_values.size
    )
    return estimate


# The number of nulls is written d0 when the number of hypotheses is d.
d0 = m0


def pi0(p_values, lambda_=config.DEFAULT_LAMBDA) -> float | pd.Series:
    """Estimate the proportion of true null hypotheses, ``m0 / m``."""
    estimate = m0(p_values, lambda_=lambda_)
    m = len(np.asarray(p_values))
    if isinstance(estimate, pd.Series):
        return estimate.div(m).rename("pi0")
    return estimate / m


__all__ = ["m0", "d0", "pi0"]
