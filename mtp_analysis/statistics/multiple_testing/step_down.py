"""Step-down (Holm family) procedures.

P-values are processed from the most significant upwards and each adjusted
value is the running maximum of the scaled p-values seen so far:

    adj_p_(1) = min(a_1 p_(1), 1)
    adj_p_(j) = min(max(a_j p_(j), adj_p_(j-1)), 1),  j = 2, ..., m

so a less significant hypothesis is never adjusted below a more significant
one. Exact ties are ranked in input order.

References
----------
Holm, S. (1979). A simple sequentially rejective multiple test procedure.
Scandinavian Journal of Statistics, 6(2), 65-70.
Lehmann, E. L., & Romano, J. P. (2005). Generalizations of the familywise
error rate. The Annals of Statistics, 33(3), 1138-1154.
"""

from __future__ import annotations

import numpy as np

from mtp_analysis import config
from mtp_analysis.core_utils.validation import (
    check_c_value,
    check_d,
    check_k,
    check_p_values,
)

from .base import (
    StepDirection,
    frx_factors,
    generalized_holm_factors,
    stepwise_output,
)
from .output import resolve_output_mode


def fwer_holm(
    p_values,
    k: int = config.DEFAULT_K,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FWER(k) with the generalized Holm step-down procedure.

    Factors by ascending rank are ``a_j = (m - max(j - k - 1, 0)) / (k + 1)``.
    Valid under any dependence between p-values.

    Parameters
    ----------
    p_values : array-like
        Observed p-values, finite and in [0, 1]
    k : int, default=0
        Number of false rejections tolerated; controls P(V >= k + 1)
    c_value : float, optional
        Critical value in [0, 1]; required for ``"c_values"`` and ``"decisions"``
    output : {"p_values", "c_values", "decisions", "factors"}
        View to return

    Returns
    -------
    np.ndarray
        Requested view, aligned to the input

    Examples
    --------
    >>> fwer_holm([0.01, 0.02, 0.03, 0.04, 0.05], output="factors")
    array([5., 4., 3., 2., 1.])
    """
    p_values = check_p_values(p_values)
    k = check_k(k, p_values.size)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    return stepwise_output(
        p_values, generalized_holm_factors(k), StepDirection.DOWN, mode, c_value
    )


def frx_holm(
    p_values,
    d: float = config.DEFAULT_D,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FRX(d) with the modified Holm step-down procedure.

    FRX(d) is the probability that the proportion of false rejections
    among all rejections exceeds ``d``. Factors by ascending rank are
    ``a_j = (m - j + floor(d j) + 1) / (floor(d j) + 1)``; ``d = 0`` gives
    Holm's procedure.

    Parameters
    ----------
    d : float, default=0
        Tolerated proportion of false rejections, in [0, 1)

    See :func:`fwer_holm` for the other parameters.
    """
    p_values = check_p_values(p_values)
    d = check_d(d)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    return stepwise_output(
        p_values, frx_factors(d), StepDirection.DOWN, mode, c_value
    )


__all__ = ["fwer_holm", "frx_holm"]
