"""
Parametric Families module for working with statistical distribution families.

This package defines parametric families, their parametrizations and
constraints, the global family register and the sampling strategies shared by
the builtin families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .configuration import configure_families_register, reset_families_register
from .distribution import ParametricFamilyDistribution
from .parametric_family import ParametricFamily
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import ParametricFamilyRegister
from .sampling import (
    CompoundSamplingStrategy,
    RejectionSamplingStrategy,
    TransformSamplingStrategy,
    ZeroInflatedSamplingStrategy,
)

__all__ = [
    "ParametricFamilyRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "ParametricFamily",
    "ParametricFamilyDistribution",
    "constraint",
    "parametrization",
    "configure_families_register",
    "reset_families_register",
    "TransformSamplingStrategy",
    "CompoundSamplingStrategy",
    "RejectionSamplingStrategy",
    "ZeroInflatedSamplingStrategy",
]
