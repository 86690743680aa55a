from .multiple_testing import (
    OutputMode,
    PROCEDURES,
    apply_multiple_testing_procedure,
    d0,
    frr_bh,
    frr_bh_a,
    frx_hoch,
    frx_holm,
    fwer_bon,
    fwer_bon_a,
    fwer_bon_w,
    fwer_hoch,
    fwer_holm,
    m0,
    pfer_bon,
    pfer_bon_a,
    pi0,
)

__all__ = [
    "OutputMode",
    "PROCEDURES",
    "apply_multiple_testing_procedure",
    # Null proportion estimation
    "m0",
    "d0",
    "pi0",
    # FWER(k)
    "fwer_bon",
    "fwer_bon_a",
    "fwer_bon_w",
    "fwer_holm",
    "fwer_hoch",
    # FRX(d)
    "frx_holm",
    "frx_hoch",
    # PFER
    "pfer_bon",
    "pfer_bon_a",
    # FRR
    "frr_bh",
    "frr_bh_a",
]
