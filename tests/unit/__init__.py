"""
PySATL Extra
============

Unit tests: supports, fitters, characteristic graph, parametric families and
the builtin distribution families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
