"""
Tests for ARGUS Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest
from scipy import stats

from pysatl_extra.exceptions import ParameterConstraintError
from pysatl_extra.types import FamilyName

from ..base import BaseDistributionTest


class TestArgusFamily(BaseDistributionTest):
    """Test suite for ARGUS distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.argus_family = self.family(FamilyName.ARGUS)
        self.dist = self.argus_family(chi=1.5, c=2.0)
        self.reference = stats.argus(1.5, scale=2.0)

    @pytest.mark.parametrize(
        "kwargs, message",
        [({"chi": 0.0}, "chi > 0"), ({"chi": 1.0, "c": -2.0}, "c > 0")],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.argus_family(**kwargs)

    def test_support_is_closed_interval(self):
        assert self.dist.support.bounds == (0.0, 2.0)
        assert self.dist.in_support(2.0) is True
        assert self.dist.in_support(2.1) is False

    def test_pdf(self):
        x = np.array([-0.5, 0.0, 0.3, 1.0, 1.7, 1.99, 2.0, 3.0])
        self.assert_arrays_almost_equal(self.dist.pdf(x), self.reference.pdf(x))

    def test_cdf(self):
        x = np.array([-0.5, 0.0, 0.3, 1.0, 1.7, 1.99, 2.0, 3.0])
        self.assert_arrays_almost_equal(self.dist.cdf(x), self.reference.cdf(x))

    def test_ppf_by_root_finding(self):
        p = np.array(self.QUANTILE_LEVELS)
        np.testing.assert_allclose(self.dist.ppf(p), self.reference.ppf(p), rtol=1e-8)
        assert self.dist.ppf(0.0) == 0.0
        assert self.dist.ppf(1.0) == 2.0

    def test_moments(self):
        mean, var, skew, kurt = self.reference.stats(moments="mvsk")
        assert self.dist.mean() == pytest.approx(float(mean), rel=1e-8)
        assert self.dist.var() == pytest.approx(float(var), rel=1e-8)
        assert self.dist.skewness() == pytest.approx(float(skew), rel=1e-6)
        assert self.dist.kurtosis(excess=True) == pytest.approx(float(kurt), rel=1e-6)

    def test_mode_maximizes_density(self):
        mode = self.dist.mode()
        grid = np.linspace(0.01, 1.99, 199)
        assert self.dist.pdf(mode) >= np.max(self.dist.pdf(grid)) - 1e-12

    def test_sampling_uses_inverse_transform(self, rng):
        sample = self.dist.sample(300, rng).values
        assert np.all((sample >= 0.0) & (sample <= 2.0))
        assert stats.kstest(sample, self.reference.cdf).pvalue > 1e-3
