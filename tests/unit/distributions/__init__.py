"""
Tests of the distributions subpackage: supports, numerical fitters, the
characteristic graph and the computation strategy.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
