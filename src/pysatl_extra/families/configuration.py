"""
Distribution Families Configuration
====================================

This module registers every builtin family of PySATL Extra in the global
:class:`~pysatl_extra.families.registry.ParametricFamilyRegister`:

- 16 continuous families (Alpha, Argus, ..., PERT);
- 14 discrete families (BetaNegBinomial, Borel, ..., Zipf).

Notes
-----
- Configuration is lazy and idempotent; the register is built on first use.
- :func:`reset_families_register` drops the cached register (used by tests).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from functools import lru_cache

from pysatl_extra.families import builtins
from pysatl_extra.families.registry import ParametricFamilyRegister

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    for name in builtins.__all__:
        getattr(builtins, name)()
    logger.debug(
        "Configured %d builtin families", len(ParametricFamilyRegister.list_registered_families())
    )
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
