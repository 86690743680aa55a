"""Dispatcher for multiple testing procedures.

This module provides a unified interface for selecting and applying a
procedure by name. ``PROCEDURES`` is exported directly so callers can list
the available procedures or look up their criterion and method.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from mtp_analysis import config

from .single_step import fwer_bon, fwer_bon_a, fwer_bon_w, pfer_bon, pfer_bon_a
from .step_down import frx_holm, fwer_holm
from .step_up import frr_bh, frr_bh_a, frx_hoch, fwer_hoch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcedureSpec:
    """Registry entry for one procedure.

    Attributes
    ----------
    name : str
        Human readable name
    criterion : str
        Controlled error criterion: "FWER(k)", "FRX(d)", "PFER" or "FRR"
    method : str
        "single_step", "step_down" or "step_up"
    adaptive : bool
        Whether the procedure plugs in Storey's estimate of the number of nulls
    func : Callable
        The procedure itself
    """

    name: str
    criterion: str
    method: str
    adaptive: bool
    func: Callable[..., np.ndarray]


PROCEDURES: dict[str, ProcedureSpec] = {
    "fwer_bon": ProcedureSpec(
        name="Generalized Bonferroni",
        criterion="FWER(k)",
        method="single_step",
        adaptive=False,
        func=fwer_bon,
    ),
    "fwer_bon_a": ProcedureSpec(
        name="Adaptive generalized Bonferroni",
        criterion="FWER(k)",
        method="single_step",
        adaptive=True,
        func=fwer_bon_a,
    ),
    "fwer_bon_w": ProcedureSpec(
        name="Weighted generalized Bonferroni",
        criterion="FWER(k)",
        method="single_step",
        adaptive=False,
        func=fwer_bon_w,
    ),
    "pfer_bon": ProcedureSpec(
        name="Bonferroni",
        criterion="PFER",
        method="single_step",
        adaptive=False,
        func=pfer_bon,
    ),
    "pfer_bon_a": ProcedureSpec(
        name="Adaptive Bonferroni",
        criterion="PFER",
        method="single_step",
        adaptive=True,
        func=pfer_bon_a,
    ),
    "fwer_holm": ProcedureSpec(
        name="Generalized Holm",
        criterion="FWER(k)",
        method="step_down",
        adaptive=False,
        func=fwer_holm,
    ),
    "frx_holm": ProcedureSpec(
        name="Modified Holm",
        criterion="FRX(d)",
        method="step_down",
        adaptive=False,
        func=frx_holm,
    ),
    "fwer_hoch": ProcedureSpec(
        name="Generalized Hochberg",
        criterion="FWER(k)",
        method="step_up",
        adaptive=False,
        func=fwer_hoch,
    ),
    "frx_hoch": ProcedureSpec(
        name="Modified Hochberg",
        criterion="FRX(d)",
        method="step_up",
        adaptive=False,
        func=frx_hoch,
    ),
    "frr_bh": ProcedureSpec(
        name="Benjamini-Hochberg",
        criterion="FRR",
        method="step_up",
        adaptive=False,
        func=frr_bh,
    ),
    "frr_bh_a": ProcedureSpec(
        name="Adaptive Benjamini-Hochberg",
        criterion="FRR",
        method="step_up",
        adaptive=True,
        func=frr_bh_a,
    ),
}


def apply_multiple_testing_procedure(
    p_values,
    method: str = config.DEFAULT_METHOD,
    **kwargs,
) -> np.ndarray:
    """Apply a multiple testing procedure selected by name.

    This is the main entry point when the procedure is chosen at run time,
    e.g. from a configuration file.

    Parameters
    ----------
    p_values : array-like
        Observed p-values, finite and in [0, 1]
    method : str, default="frr_bh"
        Key of :data:`PROCEDURES`
    **kwargs
        Forwarded to the procedure (``k``, ``d``, ``lambda_``, ``weights``,
        ``c_value``, ``output``)

    Returns
    -------
    np.ndarray
        The procedure's output, aligned to the input

    Raises
    ------
    ValueError
        If ``method`` is not a registered procedure. Argument errors raised
        by the procedure itself propagate unchanged.

    Examples
    --------
    >>> apply_multiple_testing_procedure(
    ...     [0.01, 0.02, 0.03, 0.04, 0.05], method="fwer_holm", output="factors"
    ... )
    array([5., 4., 3., 2., 1.])
    """
    spec = PROCEDURES.get(method)
    if spec is None:
        supported = ", ".join(repr(name) for name in PROCEDURES)
        raise ValueError(
            f"Unknown multiple testing procedure: {method!r}. "
            f"Supported procedures: {supported}"
        )

    logger.debug(
        "Applying %s (%s, %s) to %d p-values",
        spec.name,
        spec.criterion,
        spec.method,
        np.size(p_values),
    )
    return spec.func(p_values, **kwargs)


__all__ = ["ProcedureSpec", "PROCEDURES", "apply_multiple_testing_procedure"]
