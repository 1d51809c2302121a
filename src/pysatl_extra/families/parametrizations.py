"""
Parameterization classes and specifications for distribution families.

This module provides the core abstractions for declaring the parameters of a
distribution family as a frozen dataclass with validated constraints.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

from pysatl_extra.exceptions import ParameterConstraintError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from pysatl_extra.families.parametric_family import ParametricFamily


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable predicate, e.g. ``"alpha > 0"``.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Abstract base class for distribution parametrizations.

    Concrete parametrizations are frozen dataclasses; field order is the
    documented parameter order and field defaults are the documented
    defaults of trailing parameters.
    """

    # Set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary (in declaration order)."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    @property
    def values(self) -> tuple[Any, ...]:
        """Get parameters as a tuple (in declaration order)."""
        return tuple(getattr(self, f.name) for f in fields(self))  # type: ignore[arg-type]

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        ParameterConstraintError
            If any constraint is not satisfied. The error names the
            predicate and the offending parameter values.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise ParameterConstraintError(constraint.description, self.parameters)


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Notes
    -----
    The decorated function must be a predicate returning bool.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return bool(func(*args, **kwargs))

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def is_integer(value: Any) -> bool:
    """Return True for integral numbers (``3`` or ``3.0``), False otherwise."""
    try:
        return float(value).is_integer()
    except (TypeError, ValueError):
        return False


def parametrization(
    *,
    family: ParametricFamily,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator attaching a class to a family as its parameters.

    Parameters
    ----------
    family : ParametricFamily
        Family that takes these parameters.

    Notes
    -----
    Automatically converts the class to a frozen slotted dataclass if it is
    not one already, then collects methods marked with @constraint.
    """

    def _collect_constraints(
        cls: type[Parametrization],
    ) -> list[ParametrizationConstraint]:
        """Collect constraint methods from the class."""
        constraints: list[ParametrizationConstraint] = []
        for attr_name, attr in cls.__dict__.items():
            if isinstance(attr, staticmethod | classmethod):
                if getattr(attr.__func__, "__is_constraint", False):
                    raise TypeError(f"@constraint '{attr_name}' must be an instance method")
                continue

            func = attr if callable(attr) and isfunction(attr) else None
            if func is not None and getattr(func, "__is_constraint", False):
                desc = getattr(func, "__constraint_description", func.__name__)
                constraints.append(ParametrizationConstraint(description=desc, check=func))
        return constraints

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__family__ = family
        cls._constraints = _collect_constraints(cls)

        family.register_parameters(cls)
        return cls

    return decorator
