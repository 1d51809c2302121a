"""
Tests for Benktander Type II Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy import integrate, stats

from pysatl_extra.exceptions import ParameterConstraintError
from pysatl_extra.types import FamilyName

from ..base import BaseDistributionTest


class TestBenktanderType2Family(BaseDistributionTest):
    """Test suite for Benktander Type II distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.bk_family = self.family(FamilyName.BENKTANDER_TYPE2)
        self.dist = self.bk_family(a=1.5, b=0.5)

    def test_defaults(self):
        assert self.bk_family().params == (1.0, 1.0)

    def _closed_cdf(self, x):
        return 1.0 - x ** (0.5 - 1.0) * np.exp(3.0 * (1.0 - x**0.5))

    def _raw_moment(self, k):
        value, _ = integrate.quad(lambda t: t**k * self.dist.pdf(t), 1.0, np.inf, limit=200)
        return value

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"a": 0.0}, "a > 0"),
            ({"a": 1.0, "b": 1.5}, "0 < b <= 1"),
            ({"a": 1.0, "b": 0.0}, "0 < b <= 1"),
        ],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.bk_family(**kwargs)

    def test_cdf(self):
        x = np.array([1.0, 1.2, 2.0, 5.0, 20.0])
        self.assert_arrays_almost_equal(self.dist.cdf(x), self._closed_cdf(x))
        assert self.dist.cdf(0.3) == 0.0

    def test_pdf_is_derivative_of_cdf(self):
        x = np.array([1.2, 2.0, 5.0])
        h = 1e-6
        numeric = (self.dist.cdf(x + h) - self.dist.cdf(x - h)) / (2 * h)
        np.testing.assert_allclose(self.dist.pdf(x), numeric, rtol=1e-6)
        assert self.dist.pdf(0.5) == 0.0

    def test_ppf_through_lambert_w(self):
        p = np.array(self.QUANTILE_LEVELS)
        np.testing.assert_allclose(self._closed_cdf(self.dist.ppf(p)), p, atol=1e-12)
        assert self.dist.ppf(0.0) == pytest.approx(1.0, abs=1e-12)
        assert self.dist.ppf(1.0) == math.inf

    def test_ppf_far_tail_is_finite(self):
        dist = self.bk_family(a=1.0, b=0.99)
        p = 1.0 - 2.0**-52
        x = dist.ppf(p)
        assert math.isfinite(x)
        assert dist.cdf(x) == pytest.approx(p, abs=1e-15)

    def test_exponential_case(self):
        dist = self.bk_family(a=2.0)
        reference = stats.expon(loc=1.0, scale=0.5)
        x = np.array([1.0, 1.5, 3.0])
        self.assert_arrays_almost_equal(dist.pdf(x), reference.pdf(x))
        self.assert_arrays_almost_equal(dist.cdf(x), reference.cdf(x))
        p = np.array(self.QUANTILE_LEVELS)
        self.assert_arrays_almost_equal(dist.ppf(p), reference.ppf(p))
        assert dist.var() == pytest.approx(0.25, rel=1e-10)

    def test_moments_match_integration(self):
        m1, m2, m3 = (self._raw_moment(k) for k in (1, 2, 3))
        var = m2 - m1**2
        assert self.dist.mean() == pytest.approx(1.0 + 1.0 / 1.5, rel=1e-12)
        assert self.dist.mean() == pytest.approx(m1, rel=1e-7)
        assert self.dist.var() == pytest.approx(var, rel=1e-6)
        skew = (m3 - 3 * m1 * m2 + 2 * m1**3) / var**1.5
        assert self.dist.skewness() == pytest.approx(skew, rel=1e-5)

    def test_mode(self):
        assert self.dist.mode() == 1.0

    def test_sampling(self, rng):
        sample = self.dist.sample(500, rng).values
        assert np.all(sample >= 1.0)
        assert stats.kstest(sample, self._closed_cdf).pvalue > 1e-3
