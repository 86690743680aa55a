"""Step-up (Hochberg / Benjamini-Hochberg family) procedures.

P-values are processed from the least significant downwards and each
adjusted value is the running minimum of the scaled p-values seen so far:

    adj_p_(m) = min(a_m p_(m), 1)
    adj_p_(j) = min(a_j p_(j), adj_p_(j+1)),  j = m - 1, ..., 1

For FWER(k) and FRX(d) the factors are the same as those of the step-down
procedures in :mod:`.step_down`; only the direction of the running extremum
differs, which makes the step-up versions reject at least as many
hypotheses. Unlike their step-down counterparts they rely on independence
(or positive dependence) of the p-values.

References
----------
Benjamini, Y., & Hochberg, Y. (1995). Controlling the false discovery rate:
a practical and powerful approach to multiple testing. Journal of the Royal
Statistical Society Series B, 57(1), 289-300.
Hochberg, Y. (1988). A sharper Bonferroni procedure for multiple tests of
significance. Biometrika, 75(4), 800-802.
Storey, J. D., Taylor, J. E., & Siegmund, D. (2004). Strong control,
conservative point estimation and simultaneous conservative consistency of
false discovery rates. Journal of the Royal Statistical Society Series B,
66(1), 187-205.
"""

from __future__ import annotations

import numpy as np

from mtp_analysis import config
from mtp_analysis.core_utils.validation import (
    check_c_value,
    check_d,
    check_k,
    check_lambda,
    check_p_values,
)

from .base import (
    StepDirection,
    frx_factors,
    generalized_holm_factors,
    rate_factors,
    stepwise_output,
)
from .null_proportion import m0
from .output import resolve_output_mode


def fwer_hoch(
    p_values,
    k: int = config.DEFAULT_K,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FWER(k) with the generalized Hochberg step-up procedure.

    Uses the generalized Holm factors
    ``a_j = (m - max(j - k - 1, 0)) / (k + 1)``.

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
    """
    p_values = check_p_values(p_values)
    k = check_k(k, p_values.size)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    return stepwise_output(
        p_values, generalized_holm_factors(k), StepDirection.UP, mode, c_value
    )


def frx_hoch(
    p_values,
    d: float = config.DEFAULT_D,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FRX(d) with the modified Hochberg step-up procedure.

    Uses ``a_j = (m - j + floor(d j) + 1) / (floor(d j) + 1)``.
    See :func:`fwer_hoch` for the other parameters.
    """
    p_values = check_p_values(p_values)
    d = check_d(d)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    return stepwise_output(p_values, frx_factors(d), StepDirection.UP, mode, c_value)


def frr_bh(
    p_values,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FRR (the false discovery rate) with Benjamini-Hochberg.

    Uses ``a_j = m / j``.

    Examples
    --------
    >>> frr_bh([0.01, 0.04, 0.03, 0.2], c_value=0.06, output="decisions")
    array([1, 1, 1, 0])
    """
    p_values = check_p_values(p_values)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    return stepwise_output(
        p_values, rate_factors(float(p_values.size)), StepDirection.UP, mode, c_value
    )


def frr_bh_a(
    p_values,
    lambda_: float = config.DEFAULT_LAMBDA,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FRR with the adaptive Benjamini-Hochberg procedure.

    Uses ``a_j = m0(p, lambda_) / j`` where ``m0`` is Storey's estimate of
    the number of true nulls (see :func:`.null_proportion.m0`).
    """
    p_values = check_p_values(p_values)
    lambda_ = check_lambda(lambda_)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    estimate = m0(p_values, lambda_=lambda_)
    return stepwise_output(
        p_values, rate_factors(estimate), StepDirection.UP, mode, c_value
    )


__all__ = ["fwer_hoch", "frx_hoch", "frr_bh", "frr_bh_a"]
