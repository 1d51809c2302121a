"""
Built-in discrete distribution families.

This module contains implementations of discrete parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_extra.families.builtins.discrete.beta_neg_binomial import (
    configure_beta_neg_binomial_family,
)
from pysatl_extra.families.builtins.discrete.borel import configure_borel_family
from pysatl_extra.families.builtins.discrete.conway import configure_conway_family
from pysatl_extra.families.builtins.discrete.delaporte import configure_delaporte_family
from pysatl_extra.families.builtins.discrete.flory_schulz import configure_flory_schulz_family
from pysatl_extra.families.builtins.discrete.gauss_kuzmin import configure_gauss_kuzmin_family
from pysatl_extra.families.builtins.discrete.logarithmic import configure_logarithmic_family
from pysatl_extra.families.builtins.discrete.rademacher import configure_rademacher_family
from pysatl_extra.families.builtins.discrete.yule import configure_yule_family
from pysatl_extra.families.builtins.discrete.zero_inflated import (
    configure_zero_inflated_binomial_family,
    configure_zero_inflated_negative_binomial_family,
    configure_zero_inflated_poisson_family,
)
from pysatl_extra.families.builtins.discrete.zeta import configure_zeta_family
from pysatl_extra.families.builtins.discrete.zipf import configure_zipf_family

__all__ = [
    "configure_beta_neg_binomial_family",
    "configure_borel_family",
    "configure_conway_family",
    "configure_delaporte_family",
    "configure_flory_schulz_family",
    "configure_gauss_kuzmin_family",
    "configure_logarithmic_family",
    "configure_rademacher_family",
    "configure_yule_family",
    "configure_zero_inflated_binomial_family",
    "configure_zero_inflated_negative_binomial_family",
    "configure_zero_inflated_poisson_family",
    "configure_zeta_family",
    "configure_zipf_family",
]
