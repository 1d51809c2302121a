from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_extra.distributions.computation import ComputationMethod
from pysatl_extra.distributions.registry import (
    DEFAULT_COMPUTATION_KEY,
    CharacteristicGraph,
    CharacteristicRegistry,
    characteristic_registry,
    reset_characteristic_registry,
)
from pysatl_extra.types import (
    CharacteristicName,
    UnivariateContinuous,
    UnivariateDiscrete,
)
from tests.unit.distributions.test_basic import DistributionTestBase

CN = CharacteristicName


def _noop_fitter(*_args, **_kwargs):
    return None


class TestCharacteristicGraph:
    def test_add_conversion_creates_nodes(self) -> None:
        graph = CharacteristicGraph(distribution_type=UnivariateContinuous)
        graph.add_conversion(ComputationMethod(CN.CDF, [CN.PDF], _noop_fitter))
        assert graph.nodes() == frozenset({CN.PDF, CN.CDF})
        assert graph.successors(CN.PDF) == frozenset({CN.CDF})
        assert graph.successors(CN.CDF) == frozenset()

    def test_non_unary_method_is_rejected(self) -> None:
        graph = CharacteristicGraph(distribution_type=UnivariateContinuous)
        with pytest.raises(ValueError):
            graph.add_conversion(ComputationMethod(CN.CDF, [CN.PDF, CN.PPF], _noop_fitter))

    def test_default_method_is_preferred(self) -> None:
        graph = CharacteristicGraph(distribution_type=UnivariateContinuous)
        custom = ComputationMethod(CN.CDF, [CN.PDF], _noop_fitter)
        default = ComputationMethod(CN.CDF, [CN.PDF], _noop_fitter)
        graph.add_conversion(custom, name="custom")
        graph.add_conversion(default, name=DEFAULT_COMPUTATION_KEY)
        assert graph.find_path(CN.PDF, CN.CDF)[0] is default

    def test_find_path_trivial_and_unreachable(self) -> None:
        graph = CharacteristicGraph(distribution_type=UnivariateContinuous)
        graph.add_conversion(ComputationMethod(CN.CDF, [CN.PDF], _noop_fitter))
        assert graph.find_path(CN.PDF, CN.PDF) == []
        assert graph.find_path(CN.CDF, CN.PDF) is None

    def test_find_shortest_path_picks_closest_source(self) -> None:
        graph = characteristic_registry().get(UnivariateContinuous)
        path = graph.find_shortest_path([CN.PDF, CN.CDF], CN.MEDIAN)
        assert [method.target for method in path] == [CN.PPF, CN.MEDIAN]


class TestCharacteristicRegistry(DistributionTestBase):
    def test_registry_is_singleton(self) -> None:
        assert CharacteristicRegistry() is CharacteristicRegistry()
        assert characteristic_registry() is CharacteristicRegistry()

    def test_continuous_conversions(self) -> None:
        graph = characteristic_registry().get(UnivariateContinuous)
        assert [m.target for m in graph.find_path(CN.PDF, CN.PPF)] == [CN.CDF, CN.PPF]
        assert [m.target for m in graph.find_path(CN.PDF, CN.LOGPDF)] == [CN.LOGPDF]
        assert [m.target for m in graph.find_path(CN.VAR, CN.STD)] == [CN.STD]
        assert graph.find_path(CN.PPF, CN.CDF) is None
        assert CN.PMF not in graph.nodes()

    def test_discrete_conversions(self) -> None:
        graph = characteristic_registry().get(UnivariateDiscrete)
        assert [m.target for m in graph.find_path(CN.PMF, CN.PPF)] == [CN.CDF, CN.PPF]
        assert [m.target for m in graph.find_path(CN.PMF, CN.LOGPMF)] == [CN.LOGPMF]
        assert [m.target for m in graph.find_path(CN.PMF, CN.MEDIAN)] == [
            CN.CDF,
            CN.PPF,
            CN.MEDIAN,
        ]
        assert CN.PDF not in graph.nodes()

    def test_moments_have_no_conversions(self) -> None:
        graph = characteristic_registry().get(UnivariateContinuous)
        for target in (CN.MEAN, CN.SKEW, CN.KURT, CN.MODE):
            assert graph.find_shortest_path([CN.PDF, CN.CDF, CN.PPF], target) is None

    def test_reset_builds_fresh_registry(self) -> None:
        before = characteristic_registry()
        reset_characteristic_registry()
        after = characteristic_registry()
        assert before is not after
        assert CN.CDF in after.get(UnivariateDiscrete).nodes()
