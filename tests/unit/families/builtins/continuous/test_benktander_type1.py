"""
Tests for Benktander Type I Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest
from scipy import integrate

from pysatl_extra.exceptions import NumericalComputationError, ParameterConstraintError
from pysatl_extra.types import FamilyName

from ..base import BaseDistributionTest


class TestBenktanderType1Family(BaseDistributionTest):
    """Test suite for Benktander Type I distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.bk_family = self.family(FamilyName.BENKTANDER_TYPE1)
        self.dist = self.bk_family(a=2.0, b=1.0)

    def _raw_moment(self, k):
        value, _ = integrate.quad(lambda t: t**k * self.dist.pdf(t), 1.0, np.inf, limit=200)
        return value

    def test_defaults(self):
        assert self.bk_family().params == (1.0, 1.0)

    def test_b_defaults_to_upper_bound(self):
        dist = self.bk_family(a=2.0)
        assert dist.parameters.parameters == {"a": 2.0, "b": 3.0}

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"a": -1.0, "b": 0.1}, "a > 0"),
            ({"a": 1.0, "b": 1.5}, "0 < b <= a"),
            ({"a": 1.0, "b": 0.0}, "0 < b <= a"),
        ],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.bk_family(**kwargs)

    def test_density_integrates_to_one(self):
        total, _ = integrate.quad(self.dist.pdf, 1.0, np.inf)
        assert total == pytest.approx(1.0, abs=1e-8)

    def test_pdf_is_derivative_of_cdf(self):
        x = np.array([1.1, 1.5, 2.0, 5.0])
        h = 1e-6
        numeric = (self.dist.cdf(x + h) - self.dist.cdf(x - h)) / (2 * h)
        np.testing.assert_allclose(self.dist.pdf(x), numeric, rtol=1e-6)
        np.testing.assert_allclose(self.dist.logpdf(x), np.log(self.dist.pdf(x)), rtol=1e-12)

    def test_outside_support(self):
        assert self.dist.pdf(0.5) == 0.0
        assert self.dist.cdf(0.5) == 0.0
        assert np.isneginf(self.dist.logpdf(0.5))

    def test_ppf_inverts_cdf(self):
        p = np.array(self.QUANTILE_LEVELS)
        np.testing.assert_allclose(self.dist.cdf(self.dist.ppf(p)), p, atol=1e-9)
        assert self.dist.ppf(0.0) == 1.0
        assert self.dist.ppf(1.0) == np.inf

    def test_ppf_bracket_failure(self):
        heavy = self.bk_family(a=0.01, b=1e-6)
        with pytest.raises(NumericalComputationError):
            heavy.ppf(1.0 - 1e-10)

    def test_mean_and_variance(self):
        m1, m2 = self._raw_moment(1), self._raw_moment(2)
        assert self.dist.mean() == pytest.approx(1.5, rel=1e-12)
        assert self.dist.mean() == pytest.approx(m1, rel=1e-7)
        assert self.dist.var() == pytest.approx(m2 - m1**2, rel=1e-6)

    def test_skewness(self):
        m1, m2, m3 = (self._raw_moment(k) for k in (1, 2, 3))
        var = m2 - m1**2
        expected = (m3 - 3 * m1 * m2 + 2 * m1**3) / var**1.5
        assert self.dist.skewness() == pytest.approx(expected, rel=1e-5)
