"""
Tests for Birnbaum-Saunders Distribution Family
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


class TestBirnbaumSaundersFamily(BaseDistributionTest):
    """Test suite for Birnbaum-Saunders distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.bs_family = self.family(FamilyName.BIRNBAUM_SAUNDERS)
        self.dist = self.bs_family(mu=1.0, alpha=0.5, beta=2.0)
        self.reference = stats.fatiguelife(0.5, loc=1.0, scale=2.0)

    def test_defaults(self):
        assert self.bs_family().params == (0.0, 1.0, 1.0)

    @pytest.mark.parametrize(
        "kwargs, message",
        [({"alpha": 0.0}, "alpha > 0"), ({"beta": -2.0}, "beta > 0")],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.bs_family(**kwargs)

    def test_support_is_shifted_by_location(self):
        assert self.dist.support.bounds == (1.0, math.inf)
        assert self.dist.in_support(1.0) is False

    def test_pdf_and_cdf(self):
        x = np.array([0.0, 1.0, 1.5, 2.0, 3.0, 6.0, 20.0])
        self.assert_arrays_almost_equal(self.dist.pdf(x), self.reference.pdf(x))
        self.assert_arrays_almost_equal(self.dist.cdf(x), self.reference.cdf(x))
        inside = x > 1.0
        np.testing.assert_allclose(
            self.dist.logpdf(x[inside]), self.reference.logpdf(x[inside]), rtol=1e-10
        )

    def test_ppf(self):
        p = np.array(self.QUANTILE_LEVELS)
        np.testing.assert_allclose(self.dist.ppf(p), self.reference.ppf(p), rtol=1e-10)
        assert self.dist.ppf(0.0) == 1.0
        assert self.dist.ppf(1.0) == math.inf

    def test_moments(self):
        mean, var, skew, kurt = self.reference.stats(moments="mvsk")
        assert self.dist.mean() == pytest.approx(float(mean), rel=1e-12)
        assert self.dist.var() == pytest.approx(float(var), rel=1e-12)
        assert self.dist.skewness() == pytest.approx(float(skew), rel=1e-10)
        assert self.dist.kurtosis(excess=True) == pytest.approx(float(kurt), rel=1e-10)
        assert self.dist.median() == pytest.approx(3.0, rel=1e-12)

    def test_sampling(self, rng):
        sample = self.dist.sample(2000, rng).values
        assert np.all(sample > 1.0)
        self.assert_sample_matches(sample, self.dist.mean(), self.dist.std())
        assert stats.kstest(sample, self.reference.cdf).pvalue > 1e-3
