"""
Tests for Distribution Families Configuration

This module tests the configuration and registration of distribution families
in the global ParametricFamilyRegister.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_extra.families.builtins import configure_lomax_family
from pysatl_extra.families.configuration import (
    configure_families_register,
    reset_families_register,
)
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.types import FamilyName, Kind, UnivariateContinuous, UnivariateDiscrete

CONTINUOUS_FAMILIES = {
    FamilyName.ALPHA,
    FamilyName.ARGUS,
    FamilyName.BENINI,
    FamilyName.BENKTANDER_TYPE1,
    FamilyName.BENKTANDER_TYPE2,
    FamilyName.BHATTACHARJEE,
    FamilyName.BIRNBAUM_SAUNDERS,
    FamilyName.BRADFORD,
    FamilyName.BURR,
    FamilyName.CRYSTAL_BALL,
    FamilyName.DAGUM,
    FamilyName.GOMPERTZ,
    FamilyName.LOMAX,
    FamilyName.MAXWELL,
    FamilyName.NAKAGAMI,
    FamilyName.PERT,
}


class TestConfiguration:
    """Test suite for configuration functionality."""

    def setup_method(self):
        """Setup before each test method."""
        self.registry = configure_families_register()

    def test_configure_families_register_returns_registry(self):
        assert isinstance(self.registry, ParametricFamilyRegister)

    def test_configure_families_register_is_cached(self):
        assert configure_families_register() is self.registry

    def test_all_families_registered(self):
        registered = set(ParametricFamilyRegister.list_registered_families())
        assert registered == set(FamilyName)
        assert len(registered) == 30

    @pytest.mark.parametrize("name", sorted(FamilyName))
    def test_family_kind(self, name):
        family = self.registry.get(name)
        expected = UnivariateContinuous if name in CONTINUOUS_FAMILIES else UnivariateDiscrete
        assert family.distribution_type == expected
        assert family.name == name
        assert family.parameters_class.__family__ is family

    def test_discrete_count(self):
        discrete = set(FamilyName) - CONTINUOUS_FAMILIES
        assert len(discrete) == 14
        for name in discrete:
            assert self.registry.get(name).distribution_type.kind == Kind.DISCRETE

    def test_reset_families_register(self):
        registry1 = configure_families_register()
        reset_families_register()
        registry2 = configure_families_register()
        assert registry1 is not registry2
        assert ParametricFamilyRegister.contains(FamilyName.ZIPF)

    def test_configure_function_is_idempotent(self):
        lomax = self.registry.get(FamilyName.LOMAX)
        configure_lomax_family()
        assert self.registry.get(FamilyName.LOMAX) is lomax

    def test_registry_singleton_pattern(self):
        assert ParametricFamilyRegister() is ParametricFamilyRegister()

    def test_unknown_family(self):
        assert not ParametricFamilyRegister.contains("Gaussian")
        with pytest.raises(ValueError, match="No family"):
            self.registry.get("Gaussian")

    def test_duplicate_registration(self):
        with pytest.raises(ValueError, match="already found"):
            ParametricFamilyRegister.register(self.registry.get(FamilyName.ZETA))

