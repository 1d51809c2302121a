"""
Tests for Burr Type XII Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy import stats

from pysatl_extra.exceptions import ParameterConstraintError
from pysatl_extra.types import FamilyName

from ..base import BaseDistributionTest


class TestBurrFamily(BaseDistributionTest):
    """Test suite for Burr Type XII distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.burr_family = self.family(FamilyName.BURR)
        self.dist = self.burr_family(c=2.0, k=3.0, lambda_=1.5)
        self.reference = stats.burr12(2.0, 3.0, scale=1.5)

    @pytest.mark.parametrize(
        "kwargs, message",
        [({"c": 0.0}, "c > 0"), ({"k": -1.0}, "k > 0"), ({"lambda_": 0.0}, "lambda_ > 0")],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.burr_family(**kwargs)

    def test_pdf_and_cdf(self):
        x = np.array([-1.0, 0.0, 0.3, 1.0, 1.5, 4.0, 50.0])
        self.assert_arrays_almost_equal(self.dist.pdf(x), self.reference.pdf(x))
        self.assert_arrays_almost_equal(self.dist.cdf(x), self.reference.cdf(x))

    def test_ppf(self):
        p = np.array(self.QUANTILE_LEVELS)
        np.testing.assert_allclose(self.dist.ppf(p), self.reference.ppf(p), rtol=1e-10)
        assert self.dist.ppf(0.0) == 0.0
        assert self.dist.ppf(1.0) == math.inf

    def test_moments(self):
        mean, var, skew, kurt = self.reference.stats(moments="mvsk")
        assert self.dist.mean() == pytest.approx(float(mean), rel=1e-10)
        assert self.dist.var() == pytest.approx(float(var), rel=1e-10)
        assert self.dist.skewness() == pytest.approx(float(skew), rel=1e-7)
        assert self.dist.kurtosis(excess=True) == pytest.approx(float(kurt), rel=1e-6)

    def test_undefined_moments_are_nan(self):
        dist = self.burr_family(c=1.0, k=2.0)
        assert dist.mean() == pytest.approx(1.0, rel=1e-12)
        assert math.isnan(dist.var())
        assert math.isnan(dist.skewness())
        assert math.isnan(dist.kurtosis())

    def test_median_and_mode(self):
        assert self.dist.median() == pytest.approx(float(self.reference.median()), rel=1e-12)
        expected_mode = 1.5 * (1.0 / 7.0) ** 0.5
        assert self.dist.mode() == pytest.approx(expected_mode, rel=1e-12)
        assert self.burr_family(c=0.5).mode() == 0.0

    def test_sampling(self, rng):
        sample = self.dist.sample(1000, rng).values
        assert np.all(sample > 0.0)
        assert stats.kstest(sample, self.reference.cdf).pvalue > 1e-3
