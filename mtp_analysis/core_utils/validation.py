"""Argument checks shared by every multiple testing procedure.

Each helper validates one argument and returns it converted to the type the
numeric code expects. Nothing is clamped or repaired: any violation raises
:class:`~mtp_analysis.exceptions.InvalidArgumentError` before computation.
"""

from __future__ import annotations

from numbers import Integral, Real

import numpy as np

from mtp_analysis import config
from mtp_analysis.exceptions import InvalidArgumentError


def _as_float_vector(values, name: str) -> np.ndarray:
    try:
        array = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} must be numeric; got {values!r}.") from exc

    if array.ndim != 1:
        raise InvalidArgumentError(
            f"{name} must be one-dimensional; got shape {array.shape}."
        )
    return array


def _preview(values: np.ndarray, mask: np.ndarray) -> str:
    offending = np.flatnonzero(mask)
    return ", ".join(f"[{i}]={values[i]!r}" for i in offending[:5])


def check_p_values(p_values, name: str = "p_values") -> np.ndarray:
    """Validate a vector of p-values.

    Parameters
    ----------
    p_values
        One-dimensional array-like of p-values
    name
        Argument name used in error messages

    Returns
    -------
    np.ndarray
        A new float64 array; the caller's object is left untouched

    Raises
    ------
    InvalidArgumentError
        If the vector is empty, not one-dimensional, contains non-finite
        values or values outside [0, 1]
    """
    array = _as_float_vector(p_values, name).copy()

    if array.size == 0:
        raise InvalidArgumentError(f"{name} must contain at least one value.")

    non_finite = ~np.isfinite(array)
    if non_finite.any():
        raise InvalidArgumentError(
            f"{name} must be finite; offending entries: {_preview(array, non_finite)}."
        )

    out_of_range = (array < 0.0) | (array > 1.0)
    if out_of_range.any():
        raise InvalidArgumentError(
            f"{name} must lie in [0, 1]; offending entries: "
            f"{_preview(array, out_of_range)}."
        )

    return array


def check_k(k, m: int) -> int:
    """Validate the exceedance count of an FWER(k) procedure (0 <= k < m)."""
    if isinstance(k, bool) or not isinstance(k, Real):
        raise InvalidArgumentError(f"k must be an integer; got {k!r}.")
    if not isinstance(k, Integral):
        if not np.isfinite(k) or not float(k).is_integer():
            raise InvalidArgumentError(f"k must be an integer; got {k!r}.")
    k = int(k)
    if k < 0 or k >= m:
        raise InvalidArgumentError(
            f"k must satisfy 0 <= k < m (m={m}); got k={k}."
        )
    return k


def check_d(d) -> float:
    """Validate the exceedance proportion of an FRX(d) procedure (0 <= d < 1)."""
    if isinstance(d, bool) or not isinstance(d, Real) or not np.isfinite(d):
        raise InvalidArgumentError(f"d must be a finite number; got {d!r}.")
    if not 0.0 <= d < 1.0:
        raise InvalidArgumentError(f"d must satisfy 0 <= d < 1; got d={d}.")
    return float(d)


def check_lambda(lambda_) -> float:
    """Validate a single tuning parameter for Storey's estimator."""
    if isinstance(lambda_, bool) or not isinstance(lambda_, Real):
        raise InvalidArgumentError(
            f"lambda_ must be a single number in [0, 1]; got {lambda_!r}."
        )
    if not np.isfinite(lambda_) or not 0.0 <= lambda_ <= 1.0:
        raise InvalidArgumentError(f"lambda_ must lie in [0, 1]; got {lambda_!r}.")
    return float(lambda_)


def check_lambdas(lambdas) -> np.ndarray:
    """Validate a vector of tuning parameters for a sensitivity sweep."""
    array = _as_float_vector(lambdas, "lambda_")
    if array.size == 0:
        raise InvalidArgumentError("lambda_ must contain at least one value.")

    invalid = ~np.isfinite(array) | (array < 0.0) | (array > 1.0)
    if invalid.any():
        raise InvalidArgumentError(
            f"lambda_ must lie in [0, 1]; offending entries: {_preview(array, invalid)}."
        )
    return array


def check_weights(weights, m: int) -> np.ndarray:
    """Validate hypothesis weights for the weighted Bonferroni procedure.

    Weights must be finite, non-negative, one per hypothesis and sum to one
    within ``config.WEIGHT_SUM_TOLERANCE``.
    """
    if weights is None:
        raise InvalidArgumentError("weights are required for the weighted procedure.")

    array = _as_float_vector(weights, "weights").copy()
    if array.size != m:
        raise InvalidArgumentError(
            f"weights must have one entry per p-value (m={m}); got {array.size}."
        )

    invalid = ~np.isfinite(array) | (array < 0.0)
    if invalid.any():
        raise InvalidArgumentError(
            f"weights must be finite and non-negative; offending entries: "
            f"{_preview(array, invalid)}."
        )

    total = float(np.sum(array))
    if abs(total - 1.0) >= config.WEIGHT_SUM_TOLERANCE:
        raise InvalidArgumentError(f"weights must sum to 1; got sum={total!r}.")

    return array


def check_c_value(c_value, upper: float = 1.0) -> float | None:
    """Validate an optional critical value lying in [0, upper].

    ``upper`` is 1 for rate and probability criteria and ``m`` for PFER,
    whose critical value is an expected number of false rejections.
    """
    if c_value is None:
        return None
    if isinstance(c_value, bool) or not isinstance(c_value, Real):
        raise InvalidArgumentError(f"c_value must be a number; got {c_value!r}.")
    if not np.isfinite(c_value) or not 0.0 <= c_value <= upper:
        raise InvalidArgumentError(
            f"c_value must lie in [0, {upper:g}]; got {c_value!r}."
        )
    return float(c_value)


__all__ = [
    "check_p_values",
    "check_k",
    "check_d",
    "check_lambda",
    "check_lambdas",
    "check_weights",
    "check_c_value",
]
