"""Multiple testing procedures for simultaneous hypothesis tests.

This package adjusts p-values to control generalized Type I error rates
(FWER(k), FRX(d), PFER and FRR) with single-step, step-down and step-up
procedures, optionally adaptive or weighted.

Modules
-------
base
    Shared sort / factor / running-extremum / unsort engine
null_proportion
    Storey's estimators of the number and proportion of true nulls
output
    Output views (adjusted p-values, critical values, decisions, factors)
single_step
    Bonferroni family (FWER(k), PFER; plain, adaptive, weighted)
step_down
    Holm family (FWER(k), FRX(d))
step_up
    Hochberg and Benjamini-Hochberg family (FWER(k), FRX(d), FRR)
dispatcher
    Unified interface for selecting a procedure by name
"""

from .base import StepDirection, StepwiseResult, stepwise_adjust
from .null_proportion import d0, m0, pi0
from .output import OutputMode
from .single_step import fwer_bon, fwer_bon_a, fwer_bon_w, pfer_bon, pfer_bon_a
from .step_down import frx_holm, fwer_holm
from .step_up import frr_bh, frr_bh_a, frx_hoch, fwer_hoch
from .dispatcher import PROCEDURES, ProcedureSpec, apply_multiple_testing_procedure

__all__ = [
    # Engine
    "StepDirection",
    "StepwiseResult",
    "stepwise_adjust",
    "OutputMode",
    # Null proportion estimation
    "m0",
    "d0",
    "pi0",
    # Single-step
    "fwer_bon",
    "fwer_bon_a",
    "fwer_bon_w",
    "pfer_bon",
    "pfer_bon_a",
    # Step-down
    "fwer_holm",
    "frx_holm",
    # Step-up
    "fwer_hoch",
    "frx_hoch",
    "frr_bh",
    "frr_bh_a",
    # Dispatcher
    "ProcedureSpec",
    "PROCEDURES",
    "apply_multiple_testing_procedure",
]
