"""
Parameter-aware sampling strategies
===================================

Sampling strategies used by the builtin families when inverse transform
sampling is not the natural choice:

- :class:`TransformSamplingStrategy` — deterministic map of base variates;
- :class:`CompoundSamplingStrategy` — latent variate, then a conditional draw;
- :class:`RejectionSamplingStrategy` — proposal plus log-acceptance test;
- :class:`ZeroInflatedSamplingStrategy` — uniform gate between a point mass at
  zero and a base count distribution.

All of them read the base parametrization of the distribution and consume
entropy only from the generator passed to :meth:`sample`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from pysatl_extra.distributions.sampling import ArraySample
from pysatl_extra.distributions.strategies import SamplingStrategy

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_extra.distributions.distribution import Distribution
    from pysatl_extra.families.parametrizations import Parametrization
    from pysatl_extra.types import NumericArray

    type Draw = Callable[[Any, np.random.Generator, int], NumericArray]
    type Conditional = Callable[[Any, NumericArray, np.random.Generator], NumericArray]
    type Propose = Callable[[Any, np.random.Generator], float]
    type LogAcceptance = Callable[[Any, float], float]

logger = logging.getLogger(__name__)


class ParametricSamplingStrategy(SamplingStrategy, ABC):
    """Base class for strategies that sample from the distribution parameters."""

    def sample(
        self, n: int, distr: Distribution, rng: np.random.Generator, **options: Any
    ) -> ArraySample:
        if n < 0:
            raise ValueError(f"Sample size must be non-negative, got {n}")
        parameters: Parametrization = getattr(distr, "parameters")
        return ArraySample.from_draws(self._draw(parameters, rng, n))

    @abstractmethod
    def _draw(self, parameters: Any, rng: np.random.Generator, n: int) -> NumericArray: ...


class TransformSamplingStrategy(ParametricSamplingStrategy):
    """
    Sampling by transformation.

    Parameters
    ----------
    transform : Callable[[Parametrization, Generator, int], NumericArray]
        Draws ``n`` base variates from the generator and maps them to the
        target distribution.
    """

    def __init__(self, transform: Draw) -> None:
        self._transform = transform

    def _draw(self, parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        return self._transform(parameters, rng, n)


class CompoundSamplingStrategy(ParametricSamplingStrategy):
    """
    Sampling of compound distributions.

    All latent values are drawn first, then the conditional variates, so the
    order in which the generator is consumed is fixed.

    Parameters
    ----------
    latent : Callable[[Parametrization, Generator, int], NumericArray]
        Draws ``n`` latent values.
    conditional : Callable[[Parametrization, NumericArray, Generator], NumericArray]
        Draws one variate per latent value.
    """

    def __init__(self, latent: Draw, conditional: Conditional) -> None:
        self._latent = latent
        self._conditional = conditional

    def _draw(self, parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        theta = self._latent(parameters, rng, n)
        return self._conditional(parameters, theta, rng)


class RejectionSamplingStrategy(ParametricSamplingStrategy):
    """
    Rejection sampling.

    Each variate is proposed until ``log(U) < log_acceptance(candidate)`` with
    ``U ~ U(0, 1)``. The loop has no iteration cap.

    Parameters
    ----------
    propose : Callable[[Parametrization, Generator], float]
        Draws one candidate from the envelope.
    log_acceptance : Callable[[Parametrization, float], float]
        Log of the target-to-envelope ratio at the candidate (at most 0).
    """

    def __init__(self, propose: Propose, log_acceptance: LogAcceptance) -> None:
        self._propose = propose
        self._log_acceptance = log_acceptance

    def _draw(self, parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        out = np.empty(n, dtype=np.float64)
        proposals = 0
        for i in range(n):
            while True:
                proposals += 1
                candidate = self._propose(parameters, rng)
                if np.log(rng.random()) < self._log_acceptance(parameters, candidate):
                    out[i] = candidate
                    break
        if n:
            logger.debug(
                "Rejection sampling accepted %d of %d proposals (rate %.3f)",
                n,
                proposals,
                n / proposals,
            )
        return out


class ZeroInflatedSamplingStrategy(ParametricSamplingStrategy):
    """
    Sampling of zero-inflated count distributions.

    A uniform gate returns 0 with the inflation probability; the remaining
    variates are drawn from the base count distribution.

    Parameters
    ----------
    inflation : Callable[[Parametrization], float]
        Probability of the structural zero.
    base : Callable[[Parametrization, Generator, int], NumericArray]
        Draws ``n`` variates from the base distribution.
    """

    def __init__(self, inflation: Callable[[Any], float], base: Draw) -> None:
        self._inflation = inflation
        self._base = base

    def _draw(self, parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        zero = rng.random(n) < self._inflation(parameters)
        out = np.zeros(n, dtype=np.float64)
        count = int(n - np.count_nonzero(zero))
        if count:
            out[~zero] = self._base(parameters, rng, count)
        return out
