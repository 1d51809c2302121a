"""
Tests for Alpha Distribution Family

This module tests the functionality of the Alpha distribution family,
including parametrization, characteristics, support and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy import stats

from pysatl_extra.distributions.support import ContinuousSupport
from pysatl_extra.exceptions import ParameterConstraintError
from pysatl_extra.types import CharacteristicName, FamilyName, UnivariateContinuous

from ..base import BaseDistributionTest


class TestAlphaFamily(BaseDistributionTest):
    """Test suite for Alpha distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.alpha_family = self.family(FamilyName.ALPHA)
        self.dist = self.alpha_family(2.0, 1.5)
        self.reference = stats.alpha(2.0, scale=1.5)

    def test_family_properties(self):
        assert self.alpha_family.name == FamilyName.ALPHA
        assert self.alpha_family.parameters_class.__family__ is self.alpha_family
        assert self.alpha_family.distribution_type == UnivariateContinuous

    def test_distribution_creation(self):
        assert self.dist.family_name == FamilyName.ALPHA
        assert self.dist.distribution_type == UnivariateContinuous
        assert self.dist.parameters.parameters == {"alpha": 2.0, "beta": 1.5}
        assert self.dist.params == (2.0, 1.5)

    def test_defaults(self):
        dist = self.alpha_family()
        assert dist.params == (1.0, 1.0)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"alpha": -1.0}, "alpha > 0"),
            ({"alpha": 1.0, "beta": 0.0}, "beta > 0"),
        ],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.alpha_family(**kwargs)

    def test_check_args_opt_out(self):
        dist = self.alpha_family(alpha=-1.0, check_args=False)
        assert dist.params == (-1.0, 1.0)

    def test_support(self):
        support = self.dist.support
        assert isinstance(support, ContinuousSupport)
        assert support.left == 0.0
        assert support.left_closed is False
        assert self.dist.in_support(0.0) is False
        assert self.dist.in_support(0.1) is True

    def test_pdf_and_logpdf(self):
        x = np.array([-1.0, 0.0, 0.1, 0.5, 1.0, 2.0, 10.0])
        self.assert_arrays_almost_equal(self.dist.pdf(x), self.reference.pdf(x))
        inside = x > 0
        self.assert_arrays_almost_equal(
            self.dist.logpdf(x[inside]), self.reference.logpdf(x[inside])
        )
        assert np.all(np.isneginf(self.dist.logpdf(x[~inside])))

    def test_cdf(self):
        x = np.array([-1.0, 0.0, 0.1, 0.5, 1.0, 2.0, 10.0, 1e6])
        self.assert_arrays_almost_equal(self.dist.cdf(x), self.reference.cdf(x))

    def test_ppf(self):
        p = np.array(self.QUANTILE_LEVELS)
        np.testing.assert_allclose(self.dist.ppf(p), self.reference.ppf(p), rtol=1e-9)
        assert self.dist.ppf(0.0) == 0.0
        assert self.dist.ppf(1.0) == math.inf

    def test_ppf_rejects_invalid_probability(self):
        with pytest.raises(ValueError):
            self.dist.ppf(1.5)

    def test_moments(self):
        assert self.dist.mean() == math.inf
        assert self.dist.var() == math.inf
        assert math.isnan(self.dist.skewness())
        assert math.isnan(self.dist.kurtosis())

    def test_mode(self):
        expected = 1.5 * (math.sqrt(4.0 + 8.0) - 2.0) / 4.0
        assert abs(self.dist.mode() - expected) < self.CALCULATION_PRECISION

    def test_median_is_derived_from_ppf(self):
        assert self.dist.median() == pytest.approx(self.reference.median(), rel=1e-9)

    def test_analytical_computations_availability(self):
        expected_chars = {
            CharacteristicName.PDF,
            CharacteristicName.LOGPDF,
            CharacteristicName.CDF,
            CharacteristicName.PPF,
            CharacteristicName.MEAN,
            CharacteristicName.VAR,
            CharacteristicName.SKEW,
            CharacteristicName.KURT,
            CharacteristicName.MODE,
        }
        assert set(self.dist.analytical_computations) == expected_chars

    def test_sampling(self, rng):
        sample = self.dist.sample(2000, rng)
        assert sample.shape == (2000, 1)
        assert np.all(sample.values > 0)
        assert stats.kstest(sample.values, self.reference.cdf).pvalue > 1e-3
