"""Single-step (Bonferroni family) procedures.

A single-step procedure multiplies every p-value by a factor that does not
depend on its rank, so no sorting is needed:

    adj_p_j = min(a_j * p_j, upper)

with ``upper = 1`` for FWER(k) and ``upper = m`` for PFER, whose adjusted
values live on the expected-number-of-false-rejections scale. The adjusted
critical value of each hypothesis is ``c_value / a_j``.

References
----------
Lehmann, E. L., & Romano, J. P. (2005). Generalizations of the familywise
error rate. The Annals of Statistics, 33(3), 1138-1154.
Romano, J. P., & Wolf, M. (2010). Balanced control of generalized error
rates. The Annals of Statistics, 38(1), 598-633.
"""

from __future__ import annotations

import logging

import numpy as np

from mtp_analysis import config
from mtp_analysis.core_utils.validation import (
    check_c_value,
    check_k,
    check_lambda,
    check_p_values,
    check_weights,
)

from .base import single_step_output
from .null_proportion import m0
from .output import resolve_output_mode

logger = logging.getLogger(__name__)


def fwer_bon(
    p_values,
    k: int = config.DEFAULT_K,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FWER(k) with the generalized Bonferroni procedure.

    Uses the single factor ``a = m / (k + 1)``. With ``k = 0`` this is the
    classical Bonferroni correction ``min(m * p, 1)``. Valid under any
    dependence between p-values.

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
        Adjusted p-values, adjusted critical values, 0/1 decisions or
        adjustment factors, aligned to the input

    Examples
    --------
    >>> fwer_bon([0.01, 0.02, 0.03, 0.04, 0.05])
    array([0.05, 0.1 , 0.15, 0.2 , 0.25])
    """
    p_values = check_p_values(p_values)
    m = p_values.size
    k = check_k(k, m)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    return single_step_output(p_values, m / (k + 1), mode, c_value)


def fwer_bon_a(
    p_values,
    k: int = config.DEFAULT_K,
    lambda_: float = config.DEFAULT_LAMBDA,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FWER(k) with the adaptive generalized Bonferroni procedure.

    Replaces ``m`` by Storey's estimate of the number of true nulls:
    ``a = m0(p, lambda_) / (k + 1)``. See :func:`fwer_bon` for the other
    parameters.
    """
    p_values = check_p_values(p_values)
    m = p_values.size
    k = check_k(k, m)
    lambda_ = check_lambda(lambda_)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    a = m0(p_values, lambda_=lambda_) / (k + 1)
    return single_step_output(p_values, a, mode, c_value)


def fwer_bon_w(
    p_values,
    k: int = config.DEFAULT_K,
    weights=None,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control FWER(k) with the weighted generalized Bonferroni procedure.

    Each hypothesis receives its own factor ``a_j = 1 / (w_j (k + 1))``
    (Romano & Wolf, 2010, Theorem 6.1). Uniform weights ``1 / m`` recover
    :func:`fwer_bon`.

    Parameters
    ----------
    weights : array-like
        Non-negative weights, one per hypothesis, summing to 1. A zero
        weight gives an infinite factor: the hypothesis gets adjusted
        p-value 1 and critical value 0, and it is never rejected.

    See :func:`fwer_bon` for the other parameters.
    """
    p_values = check_p_values(p_values)
    m = p_values.size
    k = check_k(k, m)
    weights = check_weights(weights, m)
    c_value = check_c_value(c_value)
    mode = resolve_output_mode(output, c_value)

    n_zero = int(np.count_nonzero(weights == 0))
    if n_zero:
        logger.warning(
            "%d of %d hypotheses have zero weight; their adjusted p-values are 1.",
            n_zero,
            m,
        )

    with np.errstate(divide="ignore"):
        factors = 1.0 / (weights * (k + 1))
    return single_step_output(p_values, factors, mode, c_value)


def pfer_bon(
    p_values,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control PFER, the expected number of false rejections, with Bonferroni.

    Uses ``a = m``; adjusted values are clamped to ``m`` rather than 1, and
    ``c_value`` (the tolerated expected number of false rejections) may be
    any number in [0, m].
    """
    p_values = check_p_values(p_values)
    m = p_values.size
    c_value = check_c_value(c_value, upper=m)
    mode = resolve_output_mode(output, c_value)

    return single_step_output(p_values, float(m), mode, c_value, upper=m)


def pfer_bon_a(
    p_values,
    lambda_: float = config.DEFAULT_LAMBDA,
    c_value: float | None = None,
    output: str = config.DEFAULT_OUTPUT,
) -> np.ndarray:
    """Control PFER with the adaptive Bonferroni procedure, ``a = m0(p, lambda_)``.

    See :func:`pfer_bon` for the scale of the outputs.
    """
    p_values = check_p_values(p_values)
    m = p_values.size
    lambda_ = check_lambda(lambda_)
    c_value = check_c_value(c_value, upper=m)
    mode = resolve_output_mode(output, c_value)

    a = m0(p_values, lambda_=lambda_)
    return single_step_output(p_values, a, mode, c_value, upper=m)


__all__ = ["fwer_bon", "fwer_bon_a", "fwer_bon_w", "pfer_bon", "pfer_bon_a"]
