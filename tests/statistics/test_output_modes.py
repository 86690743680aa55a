"""Contract tests shared by every registered procedure.

Covers:
1. Decision equivalence: adjusted p-value <= c_value iff p <= critical value
2. Output range and shape for every view
3. Output-mode errors (missing critical value, unknown mode)
"""

from __future__ import annotations

import numpy as np
import pytest

from mtp_analysis.exceptions import (
    MissingRequiredValueError,
    UnrecognizedOutputModeError,
)
from mtp_analysis.generators import simulate_p_values
from mtp_analysis.statistics.multiple_testing import PROCEDURES, OutputMode
from mtp_analysis.statistics.multiple_testing.output import (
    align_critical_values,
    resolve_output_mode,
    stepwise_critical_values,
)

ALL_PROCEDURES = sorted(PROCEDURES)
PFER_PROCEDURES = {"pfer_bon", "pfer_bon_a"}
STEPWISE_PROCEDURES = sorted(
    name for name, spec in PROCEDURES.items() if spec.method != "single_step"
)


def _run(method: str, p_values: np.ndarray, **kwargs) -> np.ndarray:
    """Call a registered procedure, supplying weights where required."""
    if method == "fwer_bon_w":
        rng = np.random.default_rng(7)
        weights = rng.uniform(0.5, 1.5, size=p_values.size)
        kwargs.setdefault("weights", weights / weights.sum())
    return PROCEDURES[method].func(p_values, **kwargs)


def _upper(method: str, m: int) -> float:
    return float(m) if method in PFER_PROCEDURES else 1.0


def _c_values_for(method: str, m: int) -> tuple[float, ...]:
    if method in PFER_PROCEDURES:
        return (0.5, 1.0, 3.0, float(m))
    return (0.01, 0.05, 0.2, 1.0)


# =============================================================================
# Decision equivalence
# =============================================================================


class TestDecisionEquivalence:
    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    def test_adjusted_p_and_critical_value_rules_agree(
        self, method: str, mixture_p_values: np.ndarray
    ) -> None:
        p = mixture_p_values
        upper = _upper(method, p.size)
        adjusted = _run(method, p)
        for c_value in _c_values_for(method, p.size):
            critical = _run(method, p, c_value=c_value, output="c_values")
            decisions = _run(method, p, c_value=c_value, output="decisions")

            np.testing.assert_array_equal(decisions, (p <= critical).astype(int))
            if c_value < upper:
                np.testing.assert_array_equal(
                    decisions, (adjusted <= c_value).astype(int)
                )

    @pytest.mark.parametrize("method", ["fwer_bon", "fwer_bon_a", "fwer_bon_w"])
    def test_single_step_at_clamp_value_uses_critical_value_rule(
        self, method: str, mixture_p_values: np.ndarray
    ) -> None:
        p = mixture_p_values
        c_value = _upper(method, p.size)
        factors = _run(method, p, output="factors")
        decisions = _run(method, p, c_value=c_value, output="decisions")
        np.testing.assert_array_equal(decisions, (factors * p <= c_value).astype(int))
        assert 0 < decisions.sum() < p.size

    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    @pytest.mark.parametrize("seed", range(5))
    def test_c_value_equal_to_an_adjusted_p_value(self, method: str, seed: int) -> None:
        p = simulate_p_values(m=40, m0=25, s1=0.3, s2=5.0, random_seed=seed)[
            "p_value"
        ].to_numpy()
        adjusted = _run(method, p)
        for c_value in np.unique(adjusted):
            critical = _run(method, p, c_value=c_value, output="c_values")
            decisions = _run(method, p, c_value=c_value, output="decisions")
            np.testing.assert_array_equal(decisions, (p <= critical).astype(int))
            if method in STEPWISE_PROCEDURES:
                np.testing.assert_array_equal(
                    decisions, (adjusted <= c_value).astype(int)
                )

    def test_rounding_below_p_is_snapped_for_rejected(self) -> None:
        p = np.array([0.19614743996024775, 0.3])
        # c * p / adj rounded one ulp below p for the first hypothesis
        critical = np.array([0.19614743996024772, 0.35])
        aligned = align_critical_values(critical, p, np.array([True, False]))
        assert aligned[0] == p[0]
        assert aligned[1] < p[1]
        np.testing.assert_array_equal(p <= aligned, [True, False])

    def test_stepwise_critical_values_follow_adjusted_rule(self) -> None:
        p = np.array([0.19614743996024775])
        adjusted = np.array([0.4851909744316351])
        critical = stepwise_critical_values(
            0.4851909744316351, p, adjusted, np.array([2.5])
        )
        assert p[0] <= critical[0]

    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    def test_decisions_are_zero_one_integers(
        self, method: str, mixture_p_values: np.ndarray
    ) -> None:
        c_value = _c_values_for(method, mixture_p_values.size)[1]
        decisions = _run(method, mixture_p_values, c_value=c_value, output="decisions")
        assert decisions.dtype.kind == "i"
        assert set(np.unique(decisions)) <= {0, 1}


# =============================================================================
# Ranges and shapes
# =============================================================================


class TestOutputRanges:
    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    def test_views_align_with_input(self, method: str, mixture_p_values) -> None:
        m = mixture_p_values.size
        for output in ("p_values", "factors"):
            assert _run(method, mixture_p_values, output=output).shape == (m,)
        assert _run(
            method, mixture_p_values, c_value=0.05, output="c_values"
        ).shape == (m,)

    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    def test_adjusted_and_factors_in_range(self, method: str, mixture_p_values) -> None:
        m = mixture_p_values.size
        upper = m if method in PFER_PROCEDURES else 1.0
        adjusted = _run(method, mixture_p_values)
        factors = _run(method, mixture_p_values, output="factors")
        assert np.all((adjusted >= 0) & (adjusted <= upper))
        assert np.all(factors >= 0)

    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    def test_adjusted_never_below_raw(self, method: str, mixture_p_values) -> None:
        # Every factor is at least one for these procedures with k = 0, d = 0
        # except the adaptive ones, where m0 may be small
        if PROCEDURES[method].adaptive:
            pytest.skip("adaptive factors can be below one")
        adjusted = _run(method, mixture_p_values)
        assert np.all(adjusted >= mixture_p_values - 1e-15)

    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    def test_enum_and_string_modes_agree(self, method: str, mixture_p_values) -> None:
        np.testing.assert_array_equal(
            _run(method, mixture_p_values, output=OutputMode.FACTORS),
            _run(method, mixture_p_values, output="factors"),
        )


# =============================================================================
# Output-mode errors
# =============================================================================


class TestOutputModeErrors:
    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    @pytest.mark.parametrize("output", ["decisions", "c_values"])
    def test_missing_c_value(self, method: str, output: str, five_p_values) -> None:
        with pytest.raises(MissingRequiredValueError, match="c_value"):
            _run(method, five_p_values, output=output)

    @pytest.mark.parametrize("method", ALL_PROCEDURES)
    def test_unknown_output_mode(self, method: str, five_p_values) -> None:
        with pytest.raises(UnrecognizedOutputModeError, match="adjusted"):
            _run(method, five_p_values, output="adjusted")

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            resolve_output_mode("p")
        with pytest.raises(ValueError):
            resolve_output_mode("decisions")

    def test_resolve_returns_enum(self) -> None:
        assert resolve_output_mode("factors") is OutputMode.FACTORS
        assert resolve_output_mode(OutputMode.DECISIONS, 0.05) is OutputMode.DECISIONS
