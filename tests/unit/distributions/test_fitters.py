from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import special, stats

from pysatl_extra.distributions.fitters import (
    SUMMATION_MAX_TERMS,
    cdf_by_summation,
    check_probability,
    integer_quantile,
    root_quantile,
)
from pysatl_extra.exceptions import NumericalComputationError


def _poisson_pmf(k):
    return stats.poisson.pmf(k, 3.0)


def _poisson_cdf(k):
    return stats.poisson.cdf(k, 3.0)


class TestCheckProbability:
    def test_valid_probabilities_pass_through(self) -> None:
        probs = check_probability([0.0, 0.5, 1.0])
        assert probs.dtype == np.float64
        np.testing.assert_array_equal(probs, [0.0, 0.5, 1.0])

    @pytest.mark.parametrize("p", [-0.01, 1.01, math.nan, [0.5, 2.0]])
    def test_invalid_probabilities_raise(self, p) -> None:
        with pytest.raises(ValueError, match=r"\[0, 1\]"):
            check_probability(p)


class TestRootQuantile:
    def test_inverts_logistic_cdf(self) -> None:
        p = np.array([0.1, 0.5, 0.9])
        x = root_quantile(special.expit, p, (-50.0, 50.0), (-math.inf, math.inf))
        np.testing.assert_allclose(x, special.logit(p), atol=1e-11)

    def test_edges_for_zero_and_one(self) -> None:
        x = root_quantile(special.expit, [0.0, 1.0], (-50.0, 50.0), (-math.inf, 7.0))
        np.testing.assert_array_equal(x, [-math.inf, 7.0])

    def test_keeps_shape(self) -> None:
        p = np.full((2, 3), 0.5)
        assert root_quantile(special.expit, p, (-1.0, 1.0), (-math.inf, math.inf)).shape == (2, 3)

    def test_bracket_without_root_raises(self) -> None:
        with pytest.raises(NumericalComputationError, match="does not contain the root"):
            root_quantile(special.expit, 0.999, (-1.0, 1.0), (-math.inf, math.inf))


class TestIntegerQuantile:
    def test_matches_poisson_ppf(self) -> None:
        p = np.array([0.01, 0.2, 0.5, 0.8, 0.99, 0.999999])
        quantiles = integer_quantile(_poisson_cdf, p, 0)
        np.testing.assert_array_equal(quantiles, stats.poisson.ppf(p, 3.0))

    def test_probability_equal_to_cdf_value(self) -> None:
        def cdf(k):
            k = np.floor(np.asarray(k, dtype=np.float64))
            return np.clip(k / 10.0, 0.0, 1.0)

        # F(4) = 0.4 exactly, so 0.4 maps to 4
        assert integer_quantile(cdf, 0.4, 1, 10) == 4.0
        assert integer_quantile(cdf, 0.41, 1, 10) == 5.0

    def test_endpoints(self) -> None:
        quantiles = integer_quantile(_poisson_cdf, [0.0, 1.0], 0)
        np.testing.assert_array_equal(quantiles, [0.0, math.inf])
        assert integer_quantile(_poisson_cdf, 1.0, 0, 12) == 12.0

    def test_pointwise_bisection_matches_table(self) -> None:
        def cdf(k):
            return stats.geom.cdf(k, 1e-4)

        p = np.array([0.3, 0.9])
        tabulated = integer_quantile(cdf, p, 1)
        bisected = integer_quantile(cdf, p, 1, table_limit=10)
        np.testing.assert_array_equal(tabulated, bisected)
        np.testing.assert_array_equal(bisected, stats.geom.ppf(p, 1e-4))

    def test_flat_cdf_below_one_raises(self) -> None:
        def deficient_cdf(k):
            return np.minimum(np.asarray(k, dtype=np.float64), 0.0) + 0.5

        with pytest.raises(NumericalComputationError, match="stopped increasing"):
            integer_quantile(deficient_cdf, 0.9, 0, max_doublings=8)

    def test_unreachable_probability_raises(self) -> None:
        def slow_cdf(k):
            return 0.5 - 1.0 / (np.asarray(k, dtype=np.float64) + 2.0)

        with pytest.raises(NumericalComputationError, match="doublings"):
            integer_quantile(slow_cdf, 0.9, 0, max_doublings=8)

    def test_saturated_cdf_clamps_probability(self) -> None:
        # Later terms fall below half an ulp of the running sum, so it stalls under 1
        def pmf(k):
            return np.where(np.asarray(k) == 1, 1.0 - 1e-12, 1e-20)

        def cdf(k):
            return cdf_by_summation(pmf, k, 1)

        level = float(cdf(1.0))
        assert float(cdf(5000.0)) == level
        quantile = integer_quantile(cdf, [0.5, 1.0 - 1e-14], 1)
        np.testing.assert_array_equal(quantile, [1.0, 1.0])


class TestCdfSummation:
    def test_summation_length_is_capped(self) -> None:
        with pytest.raises(NumericalComputationError, match="limit"):
            cdf_by_summation(_poisson_pmf, float(SUMMATION_MAX_TERMS), 0)

    def test_partial_sums_match_poisson_cdf(self) -> None:
        x = np.array([-1.0, 0.0, 2.5, 7.0, np.inf])
        expected = stats.poisson.cdf(x, 3.0)
        np.testing.assert_allclose(cdf_by_summation(_poisson_pmf, x, 0), expected, rtol=1e-13)

    def test_scalar_and_vector_agree(self) -> None:
        ks = np.arange(0.0, 15.0)
        vector = cdf_by_summation(_poisson_pmf, ks, 0)
        scalars = [float(cdf_by_summation(_poisson_pmf, k, 0)) for k in ks]
        np.testing.assert_array_equal(vector, scalars)

    def test_upper_bound_gives_one(self) -> None:
        def pmf(k):
            return np.full(np.shape(k), 0.25)

        cdf = cdf_by_summation(pmf, [1.0, 2.0, 4.0, 9.0], 1, 4)
        np.testing.assert_array_equal(cdf, [0.25, 0.5, 1.0, 1.0])
