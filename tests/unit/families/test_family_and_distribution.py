from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_extra.exceptions import CharacteristicNotDefinedError, ParameterConstraintError
from pysatl_extra.families import ParametricFamilyDistribution, ParametricFamilyRegister
from pysatl_extra.types import CharacteristicName, Kind
from tests.unit.families.test_basic import TestBaseFamily


class TestFamilyConstruction(TestBaseFamily):
    def test_characteristics_are_bound_to_parameters(self) -> None:
        fam = self.make_default_family()
        computations = fam._build_analytical_computations(fam.parameters_class(rate=4.0))
        assert set(computations) == {self.PDF, self.CDF, self.PPF, self.MEAN}
        assert computations[self.MEAN](None) == pytest.approx(0.25)
        assert computations[self.CDF](0.0) == 0.0

    def test_keyword_positional_and_default_arguments(self) -> None:
        fam = self.make_default_family()
        assert fam(rate=2.0).params == (2.0,)
        assert fam(2.0).params == (2.0,)
        assert fam().params == (1.0,)

    @pytest.mark.parametrize(
        "args, kwargs",
        [((1.0, 2.0), {}), ((), {"rate": 1.0, "shape": 2.0}), ((1.0,), {"rate": 1.0})],
        ids=["too_many_positional", "unknown_keyword", "duplicate"],
    )
    def test_bad_arguments_raise_type_error(self, args, kwargs) -> None:
        fam = self.make_default_family()
        with pytest.raises(TypeError):
            fam(*args, **kwargs)

    def test_check_args_opt_out(self) -> None:
        fam = self.make_default_family()
        with pytest.raises(ParameterConstraintError, match="rate > 0"):
            fam(rate=-1.0)
        distr = fam(rate=-1.0, check_args=False)
        assert distr.params == (-1.0,)

    def test_distribution_metadata(self) -> None:
        fam = self.make_default_family()
        distr = fam(rate=2.0)
        assert isinstance(distr, ParametricFamilyDistribution)
        assert distr.family_name == "TestExponential"
        assert fam.distribution_type is distr.distribution_type
        assert distr.distribution_type.kind == Kind.CONTINUOUS
        assert distr.support.bounds == (0.0, math.inf)
        assert distr.in_support(-1.0) is False

    def test_distributions_compare_by_parameters(self) -> None:
        fam = self.make_default_family()
        assert fam(rate=2.0) == fam(2.0)
        assert fam(rate=2.0) != fam(rate=3.0)


class TestDistributionEvaluation(TestBaseFamily):
    def setup_method(self) -> None:
        self.family_obj = self.make_default_family()
        ParametricFamilyRegister.register(self.family_obj)
        self.distr = self.family_obj(rate=2.0)

    def test_scalars_are_unwrapped(self) -> None:
        value = self.distr.cdf(0.5)
        assert isinstance(value, float)
        assert value == pytest.approx(1.0 - math.exp(-1.0), rel=1e-15)

    def test_arrays_keep_shape(self) -> None:
        x = np.array([[0.0, 1.0], [2.0, -1.0]])
        assert self.distr.pdf(x).shape == (2, 2)

    def test_derived_characteristics(self) -> None:
        assert self.distr.logpdf(1.0) == pytest.approx(math.log(2.0) - 2.0, rel=1e-12)
        assert self.distr.median() == pytest.approx(math.log(2.0) / 2.0, rel=1e-12)

    def test_quantile_alias(self) -> None:
        assert self.distr.quantile(0.5) == self.distr.ppf(0.5)

    def test_missing_moment_raises(self) -> None:
        with pytest.raises(CharacteristicNotDefinedError):
            self.distr.var()

    def test_query_method_is_cached_per_instance(self) -> None:
        cdf = self.distr.query_method(CharacteristicName.CDF)
        assert self.distr.query_method(CharacteristicName.CDF) is cdf
        median = self.distr.query_method(CharacteristicName.MEDIAN)
        assert self.distr.query_method(CharacteristicName.MEDIAN) is median
        assert self.family_obj(rate=2.0).query_method(CharacteristicName.CDF) is not cdf

    def test_query_method_with_options_is_not_cached(self) -> None:
        cached = self.distr.query_method(CharacteristicName.MEDIAN)
        fresh = self.distr.query_method(CharacteristicName.MEDIAN, x_tol=1e-6)
        assert fresh is not cached
        assert self.distr.query_method(CharacteristicName.MEDIAN) is cached

    def test_analytical_computations_are_built_once(self) -> None:
        computations = self.distr.analytical_computations
        assert self.distr.analytical_computations is computations
        assert set(computations) == {self.PDF, self.CDF, self.PPF, self.MEAN}
        assert computations[self.MEAN](None) == pytest.approx(0.5)

    def test_sampling(self, rng) -> None:
        sample = self.distr.sample(4000, rng)
        assert sample.shape == (4000, 1)
        assert np.all(sample.values >= 0.0)
        assert float(np.mean(sample.values)) == pytest.approx(0.5, abs=6 * 0.5 / math.sqrt(4000))
        assert isinstance(self.distr.sample_one(rng), float)
