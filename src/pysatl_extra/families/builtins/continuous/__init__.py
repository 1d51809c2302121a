"""
Built-in continuous distribution families.

This module contains implementations of continuous parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_extra.families.builtins.continuous.alpha import configure_alpha_family
from pysatl_extra.families.builtins.continuous.argus import configure_argus_family
from pysatl_extra.families.builtins.continuous.benini import configure_benini_family
from pysatl_extra.families.builtins.continuous.benktander_type1 import (
    configure_benktander_type1_family,
)
from pysatl_extra.families.builtins.continuous.benktander_type2 import (
    configure_benktander_type2_family,
)
from pysatl_extra.families.builtins.continuous.bhattacharjee import (
    configure_bhattacharjee_family,
)
from pysatl_extra.families.builtins.continuous.birnbaum_saunders import (
    configure_birnbaum_saunders_family,
)
from pysatl_extra.families.builtins.continuous.bradford import configure_bradford_family
from pysatl_extra.families.builtins.continuous.burr import configure_burr_family
from pysatl_extra.families.builtins.continuous.crystal_ball import configure_crystal_ball_family
from pysatl_extra.families.builtins.continuous.dagum import configure_dagum_family
from pysatl_extra.families.builtins.continuous.gompertz import configure_gompertz_family
from pysatl_extra.families.builtins.continuous.lomax import configure_lomax_family
from pysatl_extra.families.builtins.continuous.maxwell import configure_maxwell_family
from pysatl_extra.families.builtins.continuous.nakagami import configure_nakagami_family
from pysatl_extra.families.builtins.continuous.pert import configure_pert_family

__all__ = [
    "configure_alpha_family",
    "configure_argus_family",
    "configure_benini_family",
    "configure_benktander_type1_family",
    "configure_benktander_type2_family",
    "configure_bhattacharjee_family",
    "configure_birnbaum_saunders_family",
    "configure_bradford_family",
    "configure_burr_family",
    "configure_crystal_ball_family",
    "configure_dagum_family",
    "configure_gompertz_family",
    "configure_lomax_family",
    "configure_maxwell_family",
    "configure_nakagami_family",
    "configure_pert_family",
]
