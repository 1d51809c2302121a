"""
Tests for Gompertz Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy import integrate, stats

from pysatl_extra.exceptions import ParameterConstraintError
from pysatl_extra.types import CharacteristicName, FamilyName

from ..base import BaseDistributionTest


class TestGompertzFamily(BaseDistributionTest):
    """Test suite for Gompertz distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.gompertz_family = self.family(FamilyName.GOMPERTZ)
        self.dist = self.gompertz_family(eta=0.5, b=2.0)
        self.reference = stats.gompertz(0.5, scale=0.5)

    def test_defaults(self):
        assert self.gompertz_family().params == (1.0, 1.0)

    @pytest.mark.parametrize(
        "kwargs, message",
        [({"eta": 0.0}, "eta > 0"), ({"eta": 1.0, "b": -1.0}, "b > 0")],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.gompertz_family(**kwargs)

    def test_pdf_and_cdf(self):
        x = np.array([-1.0, 0.0, 0.2, 0.5, 1.0, 2.0])
        self.assert_arrays_almost_equal(self.dist.pdf(x), self.reference.pdf(x))
        self.assert_arrays_almost_equal(self.dist.cdf(x), self.reference.cdf(x))

    def test_ppf(self):
        p = np.array(self.QUANTILE_LEVELS)
        np.testing.assert_allclose(self.dist.ppf(p), self.reference.ppf(p), rtol=1e-10)
        assert self.dist.ppf(0.0) == 0.0
        assert self.dist.ppf(1.0) == math.inf

    def test_moments(self):
        mean, var, skew, kurt = self.reference.stats(moments="mvsk")
        assert self.dist.mean() == pytest.approx(float(mean), rel=1e-9)
        assert self.dist.var() == pytest.approx(float(var), rel=1e-7)
        assert self.dist.skewness() == pytest.approx(float(skew), rel=1e-5)
        assert self.dist.kurtosis(excess=True) == pytest.approx(float(kurt), rel=1e-5)

    def test_median_and_mode(self):
        assert self.dist.median() == pytest.approx(float(self.reference.median()), rel=1e-12)
        assert self.dist.mode() == pytest.approx(math.log(2.0) / 2.0, rel=1e-12)
        assert self.gompertz_family(eta=2.0).mode() == 0.0

    def test_mgf(self):
        assert CharacteristicName.MGF in self.dist.analytical_computations
        for t in (-3.0, -1.0, 0.5, 1.5):
            expected, _ = integrate.quad(lambda x: math.exp(t * x) * self.dist.pdf(x), 0.0, 20.0)
            assert self.dist.mgf(t) == pytest.approx(expected, rel=1e-8)
        assert self.dist.mgf(0.0) == pytest.approx(1.0, rel=1e-12)

    def test_sampling(self, rng):
        sample = self.dist.sample(1000, rng).values
        assert np.all(sample >= 0.0)
        assert stats.kstest(sample, self.reference.cdf).pvalue > 1e-3
