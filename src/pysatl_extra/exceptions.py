"""
Exceptions raised by PySATL Extra.

Every error is a subclass of a built-in exception, so callers that only
catch ``ValueError`` / ``RuntimeError`` / ``NotImplementedError`` keep working.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class ParameterConstraintError(ValueError):
    """Raised when parameter values violate a parametrization constraint."""

    def __init__(self, description: str, values: dict[str, object]) -> None:
        self.description = description
        self.values = values
        rendered = ", ".join(f"{name}={value!r}" for name, value in values.items())
        super().__init__(f'Constraint "{description}" does not hold for ({rendered})')


class CharacteristicNotDefinedError(NotImplementedError):
    """Raised when a characteristic is neither analytical nor derivable."""


class NumericalComputationError(RuntimeError):
    """Raised when a numerical routine (root bracketing, search) fails."""


__all__ = [
    "ParameterConstraintError",
    "CharacteristicNotDefinedError",
    "NumericalComputationError",
]
