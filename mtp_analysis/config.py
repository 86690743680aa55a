"""
Central configuration for the multiple testing procedures library.
"""

# --- Criterion Parameters ---

# Default exceedance count k for FWER(k) procedures.
# k = 0 controls the classical familywise error rate P(V >= 1).
DEFAULT_K: int = 0

# Default exceedance proportion d for FRX(d) procedures.
# d = 0 makes FRX(d) coincide with the classical FWER.
DEFAULT_D: float = 0.0

# --- Null Proportion Estimation ---

# Default tuning parameter lambda for Storey's estimator of the number of
# true null hypotheses. Larger values give a less biased but noisier estimate.
DEFAULT_LAMBDA: float = 0.5

# --- Weighted Procedures ---

# Absolute tolerance when checking that hypothesis weights sum to one.
WEIGHT_SUM_TOLERANCE: float = 1e-9

# --- Output ---

# Default output view returned by every procedure.
# Options: 'p_values', 'c_values', 'decisions', 'factors'
DEFAULT_OUTPUT: str = "p_values"

# Default procedure used by the dispatcher.
DEFAULT_METHOD: str = "frr_bh"
