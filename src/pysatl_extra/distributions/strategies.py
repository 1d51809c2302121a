"""
Computation and Sampling Strategies
===================================

This module defines the pluggable strategy interfaces and default implementations:

- :class:`ComputationStrategy` — resolves characteristic methods.
- :class:`DefaultComputationStrategy` — returns analytical methods and walks
  the characteristic graph on demand.
- :class:`SamplingStrategy` — draws samples from a distribution.
- :class:`DefaultSamplingUnivariateStrategy` — inverse-transform sampling:
  draws ``(n, 1)`` samples by applying ``ppf`` to i.i.d. uniform variates.

Notes
-----
- Strategies are stateless; sampling consumes the caller's generator only.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import threading
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_extra.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
)
from pysatl_extra.exceptions import CharacteristicNotDefinedError
from pysatl_extra.types import (
    CharacteristicName,
    GenericCharacteristicName,
)

from .registry import characteristic_registry
from .sampling import ArraySample, Sample

if TYPE_CHECKING:
    from .distribution import Distribution

type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]

logger = logging.getLogger(__name__)


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If the distribution provides an analytical implementation, return it.
    2. Else:
       a) get the graph for the distribution type,
       b) find the shortest path from any analytical characteristic to the
          target,
       c) fit the edges along the path (each fitter resolves its own source
          through the distribution, so intermediate steps are fitted lazily).

    Raises
    ------
    CharacteristicNotDefinedError
        If no conversion path exists.
    RuntimeError
        If a cycle is detected during resolution.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _resolving(self) -> dict[int, set[GenericCharacteristicName]]:
        resolving = getattr(self._local, "resolving", None)
        if resolving is None:
            resolving = {}
            self._local.resolving = resolving
        return resolving

    def _push_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        seen = self._resolving().setdefault(id(distr), set())
        if state in seen:
            raise RuntimeError(
                f"Cycle detected while resolving '{state}'. "
                "Provide at least one analytical base characteristic in the distribution."
            )
        seen.add(state)

    def _pop_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        resolving = self._resolving()
        seen = resolving.get(id(distr))
        if seen is not None:
            seen.discard(state)
            if not seen:
                resolving.pop(id(distr), None)

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]:
        """
        Resolve an analytical or fitted method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name to resolve.
        distr : Distribution
            The distribution providing the analytical base and type.
        **options
            Passed to the fitter(s) when conversions are required.

        Returns
        -------
        Method
            Analytical or fitted callable implementing ``state``.
        """
        analytical = distr.analytical_computations
        if state in analytical:
            return analytical[state]

        graph = characteristic_registry().get(distr.distribution_type)
        path = graph.find_shortest_path(analytical, state)
        if not path:
            raise CharacteristicNotDefinedError(
                f"Characteristic '{state}' is not implemented for this distribution "
                f"and cannot be derived from {sorted(analytical)}."
            )

        self._push_guard(distr, state)
        try:
            chain = [path[0].sources[0], *(method.target for method in path)]
            logger.debug("Resolving '%s' via %s", state, " -> ".join(chain))
            return path[-1].fit(distr, **options)
        finally:
            self._pop_guard(distr, state)


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`Sample`)."""

    def sample(
        self, n: int, distr: "Distribution", rng: np.random.Generator, **options: Any
    ) -> Sample: ...


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """
    Default univariate sampler using inverse transform sampling.

    The strategy resolves the distribution's ``ppf`` and applies it to i.i.d.
    uniforms ``U ~ U(0, 1)`` drawn from the caller's generator.

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, 1)``.
    """

    def sample(
        self, n: int, distr: "Distribution", rng: np.random.Generator, **options: Any
    ) -> ArraySample:
        ppf = distr.query_method(CharacteristicName.PPF, **options)
        u = rng.random(n)
        return ArraySample.from_draws(ppf(u))
