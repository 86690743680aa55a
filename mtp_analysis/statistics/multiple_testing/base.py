"""Shared adjustment engine for single-step and stepwise procedures.

Every stepwise procedure follows the same recipe:

1. rank the p-values in ascending order (stable, so exact ties keep their
   original relative order),
2. compute the adjustment factor ``a_j`` of each rank ``j = 1, ..., m``,
3. multiply and enforce monotonicity with a running extremum,
4. clamp and restore the original hypothesis order.

Step-down procedures take the running maximum from the smallest p-value
upwards; step-up procedures take the running minimum from the largest
p-value downwards. Named procedures only supply the factor rule and the
direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np

from .output import (
    OutputMode,
    align_critical_values,
    project_output,
    stepwise_critical_values,
)

FactorFunction = Callable[[np.ndarray, int], np.ndarray]


class StepDirection(Enum):
    """Direction in which monotonicity is propagated over the ranks."""

    DOWN = "step_down"
    UP = "step_up"


@dataclass
class StepwiseResult:
    """Adjusted p-values and factors, both in original hypothesis order.

    Attributes
    ----------
    adjusted : np.ndarray
        Adjusted p-values after monotonicity enforcement and clamping
    factors : np.ndarray
        Adjustment factor applied to each hypothesis
    order : np.ndarray
        Stable ascending sort permutation of the raw p-values
    """

    adjusted: np.ndarray
    factors: np.ndarray
    order: np.ndarray


def generalized_holm_factors(k: int) -> FactorFunction:
    """FWER(k) factors ``a_j = (m - max(j - k - 1, 0)) / (k + 1)``.

    Lehmann & Romano (2005), Theorem 2.2. Shared by the generalized Holm
    (step-down) and generalized Hochberg (step-up) procedures.
    """

    def factors(ranks: np.ndarray, m: int) -> np.ndarray:
        return (m - np.maximum(ranks - k - 1, 0)) / (k + 1)

    return factors


def frx_factors(d: float) -> FactorFunction:
    """FRX(d) factors ``a_j = (m - j + floor(d j) + 1) / (floor(d j) + 1)``.

    Lehmann & Romano (2005), Theorem 3.1.
    """

    def factors(ranks: np.ndarray, m: int) -> np.ndarray:
        dj = np.floor(d * ranks)
        return (m - ranks + dj + 1) / (dj + 1)

    return factors


def rate_factors(numerator: float) -> FactorFunction:
    """Benjamini-Hochberg type factors ``a_j = numerator / j``.

    ``numerator`` is ``m`` for the plain procedure and an estimate of the
    number of true nulls for the adaptive one.
    """

    def factors(ranks: np.ndarray, m: int) -> np.ndarray:
        return numerator / ranks

    return factors


def rank_order(p_values: np.ndarray) -> np.ndarray:
    """Stable ascending sort permutation; exact ties keep input order."""
    return np.argsort(p_values, kind="stable")


def stepwise_adjust(
    p_values: np.ndarray,
    factor_fn: FactorFunction,
    direction: StepDirection,
    upper: float = 1.0,
) -> StepwiseResult:
    """Adjust p-values with rank-dependent factors and a running extremum.

    Parameters
    ----------
    p_values
        Validated p-values in original order
    factor_fn
        Called as ``factor_fn(ranks, m)`` with ``ranks = 1, ..., m``; returns
        the factor of each ascending rank
    direction
        ``StepDirection.DOWN`` for a running maximum over ascending ranks,
        ``StepDirection.UP`` for a running minimum from the largest rank down
    upper
        Clamp applied to the adjusted values

    Returns
    -------
    StepwiseResult
        Adjusted values and factors mapped back to the input order

    Examples
    --------
    >>> import numpy as np
    >>> p = np.array([0.03, 0.01, 0.02])
    >>> res = stepwise_adjust(p, lambda j, m: (m - j + 1.0), StepDirection.DOWN)
    >>> res.adjusted
    array([0.04, 0.03, 0.04])
    """
    m = p_values.size
    order = rank_order(p_values)
    inverse = np.empty_like(order)
    inverse[order] = np.arange(m)

    ranks = np.arange(1, m + 1)
    sorted_factors = np.asarray(factor_fn(ranks, m), dtype=float)
    scaled = sorted_factors * p_values[order]

    if direction is StepDirection.DOWN:
        monotone = np.maximum.accumulate(scaled)
    else:
        monotone = np.minimum.accumulate(scaled[::-1])[::-1]

    adjusted_sorted = np.minimum(monotone, upper)
    return StepwiseResult(
        adjusted=adjusted_sorted[inverse],
        factors=sorted_factors[inverse],
        order=order,
    )


def single_step_adjust(
    p_values: np.ndarray, factors: np.ndarray | float, upper: float = 1.0
) -> tuple[np.ndarray, np.ndarray]:
    """Apply rank-free factors; returns ``(adjusted, factors)`` of length m.

    A factor of ``inf`` (a zero-weight hypothesis) maps to the clamp value,
    whatever its p-value.
    """
    factors = np.broadcast_to(np.asarray(factors, dtype=float), p_values.shape).copy()
    with np.errstate(invalid="ignore"):
        scaled = factors * p_values
    scaled[np.isinf(factors)] = upper
    return np.minimum(scaled, upper), factors


def single_step_rejections(
    p_values: np.ndarray, factors: np.ndarray, c_value: float
) -> np.ndarray:
    """Reject where the unclamped product ``a_j * p_j`` is at most ``c_value``.

    The decision matches ``p_j <= c_value / a_j`` also when ``c_value``
    reaches the clamp value. A factor of ``inf`` is never rejected.
    """
    with np.errstate(invalid="ignore"):
        scaled = factors * p_values
    return np.isfinite(factors) & (scaled <= c_value)


def stepwise_output(
    p_values: np.ndarray,
    factor_fn: FactorFunction,
    direction: StepDirection,
    mode: OutputMode,
    c_value: float | None,
) -> np.ndarray:
    """Run a stepwise adjustment and render the requested view."""
    result = stepwise_adjust(p_values, factor_fn, direction)
    rejected = critical_values = None
    if mode is OutputMode.DECISIONS:
        rejected = result.adjusted <= c_value
    elif mode is OutputMode.C_VALUES:
        critical_values = stepwise_critical_values(
            c_value, p_values, result.adjusted, result.factors
        )
    return project_output(
        mode, result.adjusted, result.factors, rejected, critical_values
    )


def single_step_output(
    p_values: np.ndarray,
    factors,
    mode: OutputMode,
    c_value: float | None,
    upper: float = 1.0,
) -> np.ndarray:
    """Run a single-step adjustment and render the requested view.

    The adjusted critical value of hypothesis j is ``c_value / a_j``.
    """
    adjusted, factors = single_step_adjust(p_values, factors, upper=upper)
    rejected = critical_values = None
    if mode.requires_c_value:
        rejected = single_step_rejections(p_values, factors, c_value)
    if mode is OutputMode.C_VALUES:
        with np.errstate(divide="ignore"):
            critical_values = align_critical_values(
                c_value / factors, p_values, rejected
            )
    return project_output(mode, adjusted, factors, rejected, critical_values)


__all__ = [
    "FactorFunction",
    "StepDirection",
    "StepwiseResult",
    "generalized_holm_factors",
    "frx_factors",
    "rate_factors",
    "rank_order",
    "stepwise_adjust",
    "single_step_adjust",
    "single_step_rejections",
    "stepwise_output",
    "single_step_output",
]
