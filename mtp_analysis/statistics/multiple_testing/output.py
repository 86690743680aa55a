"""Output views shared by all procedures.

Every procedure computes adjusted p-values and adjustment factors internally
and then renders one of four views of them. The view is resolved into an
:class:`OutputMode` once, at the start of the call, so an unknown view or a
missing critical value is reported before any numeric work.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from mtp_analysis.exceptions import (
    MissingRequiredValueError,
    UnrecognizedOutputModeError,
)


class OutputMode(str, Enum):
    """Views a procedure can return."""

    P_VALUES = "p_values"
    C_VALUES = "c_values"
    DECISIONS = "decisions"
    FACTORS = "factors"

    @property
    def requires_c_value(self) -> bool:
        return self in (OutputMode.C_VALUES, OutputMode.DECISIONS)


def resolve_output_mode(output, c_value: float | None = None) -> OutputMode:
    """Turn ``output`` into an :class:`OutputMode` and check its requirements.

    Parameters
    ----------
    output : str or OutputMode
        One of ``"p_values"``, ``"c_values"``, ``"decisions"``, ``"factors"``
    c_value : float, optional
        Critical value; required for ``"c_values"`` and ``"decisions"``

    Raises
    ------
    UnrecognizedOutputModeError
        If ``output`` is not a supported view
    MissingRequiredValueError
        If the view needs ``c_value`` and none was given
    """
    try:
        mode = OutputMode(output)
    except (TypeError, ValueError):
        supported = ", ".join(repr(m.value) for m in OutputMode)
        raise UnrecognizedOutputModeError(
            f"Unknown output mode: {output!r}. Supported modes: {supported}"
        ) from None

    if mode.requires_c_value and c_value is None:
        raise MissingRequiredValueError(
            f"output={mode.value!r} requires a critical value (c_value)."
        )
    return mode


def align_critical_values(
    critical_values: np.ndarray,
    p_values: np.ndarray,
    rejected: np.ndarray,
) -> np.ndarray:
    """Snap critical values so that ``p_j <= critical_j`` iff ``rejected[j]``.

    The ratios behind the critical values are rounded in floating point and
    can land one ulp on the wrong side of ``p_j`` when ``c_value`` equals an
    adjusted p-value. Rejected hypotheses get at least ``p_j``; retained ones
    get the largest float strictly below ``p_j`` at most.
    """
    return np.where(
        rejected,
        np.maximum(critical_values, p_values),
        np.minimum(critical_values, np.nextafter(p_values, -np.inf)),
    )


def stepwise_critical_values(
    c_value: float,
    p_values: np.ndarray,
    adjusted: np.ndarray,
    factors: np.ndarray,
) -> np.ndarray:
    """Critical value each raw p-value must not exceed under a stepwise procedure.

    This is ``c_value * p_j / adj_p_j``. Where the adjusted p-value is zero the
    raw p-value is zero as well and ``c_value / a_j`` is used instead. The
    result agrees with the decision ``adj_p_j <= c_value``.
    """
    fallback = np.divide(
        c_value,
        factors,
        out=np.full_like(factors, np.inf, dtype=float),
        where=factors > 0,
    )
    critical_values = np.divide(
        c_value * p_values,
        adjusted,
        out=fallback,
        where=adjusted > 0,
    )
    return align_critical_values(critical_values, p_values, adjusted <= c_value)


def project_output(
    mode: OutputMode,
    adjusted: np.ndarray,
    factors: np.ndarray,
    rejected: np.ndarray | None = None,
    critical_values: np.ndarray | None = None,
) -> np.ndarray:
    """Render the requested view.

    Parameters
    ----------
    mode
        Resolved output mode
    adjusted
        Adjusted p-values in original hypothesis order
    factors
        Adjustment factors in original hypothesis order
    rejected
        Boolean rejection mask in original order; required for
        ``OutputMode.DECISIONS``
    critical_values
        Adjusted critical values in original order; required for
        ``OutputMode.C_VALUES``

    Returns
    -------
    np.ndarray
        Float array, or an int array of 0/1 for ``OutputMode.DECISIONS``
    """
    if mode is OutputMode.P_VALUES:
        return adjusted
    if mode is OutputMode.FACTORS:
        return factors
    if mode is OutputMode.DECISIONS:
        if rejected is None:
            raise ValueError("rejected must be computed for output='decisions'")
        return rejected.astype(int)
    if critical_values is None:
        raise ValueError("critical_values must be computed for output='c_values'")
    return critical_values


__all__ = [
    "OutputMode",
    "resolve_output_mode",
    "align_critical_values",
    "stepwise_critical_values",
    "project_output",
]
