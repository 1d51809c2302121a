"""
PySATL Extra
============

Additional univariate distribution families for PySATL: 16 continuous and
14 discrete parametric families built on the characteristic computation
graph and the parametric family register.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .distributions import *
from .distributions import __all__ as _distr_all
from .exceptions import *
from .exceptions import __all__ as _exceptions_all
from .families import *
from .families import __all__ as _family_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-extra")
__all__ = [
    "__version__",
    *_distr_all,
    *_exceptions_all,
    *_family_all,
    *_types_all,
]

del _distr_all
del _exceptions_all
del _family_all
del _types_all
