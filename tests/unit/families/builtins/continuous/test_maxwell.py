"""
Tests for Maxwell Distribution Family
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


class TestMaxwellFamily(BaseDistributionTest):
    """Test suite for Maxwell distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.maxwell_family = self.family(FamilyName.MAXWELL)
        self.dist = self.maxwell_family(a=1.7)
        self.reference = stats.maxwell(scale=1.7)

    def test_parametrization_constraints(self):
        with pytest.raises(ParameterConstraintError, match="a > 0"):
            self.maxwell_family(a=-0.1)

    def test_pdf_and_cdf(self):
        x = np.array([-1.0, 0.0, 0.5, 1.7, 3.0, 8.0])
        self.assert_arrays_almost_equal(self.dist.pdf(x), self.reference.pdf(x))
        self.assert_arrays_almost_equal(self.dist.cdf(x), self.reference.cdf(x))

    def test_ppf(self):
        p = np.array(self.QUANTILE_LEVELS)
        np.testing.assert_allclose(self.dist.ppf(p), self.reference.ppf(p), rtol=1e-10)
        assert self.dist.ppf(0.0) == 0.0
        assert self.dist.ppf(1.0) == math.inf

    def test_moments(self):
        mean, var, skew, kurt = self.reference.stats(moments="mvsk")
        assert self.dist.mean() == pytest.approx(float(mean), rel=1e-12)
        assert self.dist.var() == pytest.approx(float(var), rel=1e-12)
        assert self.dist.skewness() == pytest.approx(float(skew), rel=1e-10)
        assert self.dist.kurtosis(excess=True) == pytest.approx(float(kurt), rel=1e-10)
        assert self.dist.kurtosis() == pytest.approx(float(kurt) + 3.0, rel=1e-10)

    def test_mode_and_entropy(self):
        assert self.dist.mode() == pytest.approx(1.7 * math.sqrt(2.0), rel=1e-12)
        assert self.dist.entropy() == pytest.approx(float(self.reference.entropy()), rel=1e-10)

    def test_sampling(self, rng):
        sample = self.dist.sample(1000, rng).values
        assert np.all(sample >= 0.0)
        assert stats.kstest(sample, self.reference.cdf).pvalue > 1e-3
