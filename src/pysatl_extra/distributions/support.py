"""
Supports of univariate distributions.

Continuous supports are intervals with configurable closure; discrete
supports are integer lattices (optionally bounded) or explicit point tables.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from math import inf
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_extra.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    @property
    def bounds(self) -> tuple[float, float]: ...


class ContinuousSupport(Interval1D, Support):
    """Interval support of a continuous distribution."""

    @property
    def bounds(self) -> tuple[float, float]:
        """Infimum and supremum of the support."""
        return self.left, self.right


@runtime_checkable
class DiscreteSupport(Support, Protocol):
    def iter_points(self) -> Iterator[Number]: ...

    def first(self) -> Number | None: ...

    def last(self) -> Number | None: ...


class ExplicitTableDiscreteSupport(DiscreteSupport):
    """Finite support given by an explicit table of points."""

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Number], assume_sorted: bool = False) -> None:
        arr = np.array(points)

        if arr.size == 0:
            raise ValueError("Points must be non-empty")

        if not assume_sorted:
            arr.sort()

        unique_mask = np.empty(arr.size, dtype=bool)
        unique_mask[0] = True
        unique_mask[1:] = arr[1:] != arr[:-1]

        self._points = arr[unique_mask]

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x)
        idx = np.searchsorted(self._points, arr, side="left")

        size = self._points.size
        in_bounds = idx < size

        idx_clipped = np.minimum(idx, size - 1)
        result = in_bounds & (self._points[idx_clipped] == arr)

        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def iter_points(self) -> Iterator[Number]:
        return iter(self._points)

    def first(self) -> Number:
        return cast(Number, self._points[0])

    def last(self) -> Number:
        return cast(Number, self._points[-1])

    @property
    def bounds(self) -> tuple[float, float]:
        return float(self._points[0]), float(self._points[-1])

    @property
    def points(self) -> NumericArray:
        return cast(NumericArray, self._points.copy())

    __iter__ = iter_points


@dataclass(frozen=True, slots=True)
class IntegerLatticeDiscreteSupport(DiscreteSupport):
    """
    Integers ``k ≡ residue (mod modulus)`` within ``[min_k, max_k]``.

    Parameters
    ----------
    residue : int, default 0
    modulus : int, default 1
    min_k, max_k : int or None
        Inclusive bounds; ``None`` means unbounded on that side.
    """

    residue: int = 0
    modulus: int = 1
    min_k: int | None = None
    max_k: int | None = None

    def __post_init__(self) -> None:
        if self.modulus <= 0:
            raise ValueError("modulus must be a positive integer.")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        finite = np.isfinite(xf)
        v = np.floor(np.where(finite, xf, 0.0))
        mask = finite & (xf == v)

        if self.min_k is not None:
            mask &= v >= self.min_k
        if self.max_k is not None:
            mask &= v <= self.max_k

        mask &= np.mod(v - self.residue, self.modulus) == 0

        if np.ndim(xf) == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def iter_points(self) -> Iterator[int]:
        first = self.first()
        if first is None:
            raise RuntimeError(
                "Cannot iterate points of a left-unbounded IntegerLatticeDiscreteSupport."
            )

        def _gen() -> Iterator[int]:
            current = first
            while self.max_k is None or current <= self.max_k:
                yield current
                current += self.modulus

        return _gen()

    def first(self) -> int | None:
        if self.min_k is None:
            return None
        first = self.min_k
        offset = (first - self.residue) % self.modulus
        if offset != 0:
            first = first + (self.modulus - offset)
        if self.max_k is not None and first > self.max_k:
            return None
        return first

    def last(self) -> int | None:
        if self.max_k is None:
            return None
        last = self.max_k - (self.max_k - self.residue) % self.modulus
        if self.min_k is not None and last < self.min_k:
            return None
        return last

    @property
    def bounds(self) -> tuple[float, float]:
        first = self.first()
        last = self.last()
        return (
            -inf if first is None else float(first),
            inf if last is None else float(last),
        )

    @property
    def is_left_bounded(self) -> bool:
        return self.min_k is not None

    @property
    def is_right_bounded(self) -> bool:
        return self.max_k is not None

    __iter__ = iter_points


__all__ = [
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "ExplicitTableDiscreteSupport",
    "IntegerLatticeDiscreteSupport",
]
