"""
Characteristic Graph Registry
=============================

A directed graph over characteristic names for a fixed
:class:`~pysatl_extra.types.DistributionType`.

- Nodes: ``GenericCharacteristicName``.
- Edges: unary :class:`~pysatl_extra.distributions.computation.ComputationMethod`
  (``1 source -> 1 target``).

The default configuration registers, per univariate kind:

- continuous: ``pdf -> cdf -> ppf``, ``pdf -> logpdf``;
- discrete: ``pmf -> cdf -> ppf``, ``pmf -> logpmf``;
- both: ``var -> std``, ``ppf -> median``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections import deque
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pysatl_extra.distributions.computation import ComputationMethod
from pysatl_extra.distributions.fitters import (
    fit_cdf_to_ppf_1C,
    fit_cdf_to_ppf_1D,
    fit_pdf_to_cdf_1C,
    fit_pdf_to_logpdf_1C,
    fit_pmf_to_cdf_1D,
    fit_pmf_to_logpmf_1D,
    fit_ppf_to_median,
    fit_var_to_std,
)
from pysatl_extra.types import (
    CharacteristicName,
    DistributionType,
    GenericCharacteristicName,
    UnivariateContinuous,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_COMPUTATION_KEY: str = "PySATL_default_computation"


@dataclass(slots=True, frozen=True)
class CharacteristicGraph:
    """
    Directed characteristic graph for a fixed :class:`DistributionType`.

    Notes
    -----
    Edges are stored as nested mappings
    ``adjacency[src][dst] = dict[method_name, ComputationMethod]`` with a
    reserved key :data:`DEFAULT_COMPUTATION_KEY` for the default method.
    """

    distribution_type: DistributionType
    _adj: dict[
        GenericCharacteristicName,
        dict[GenericCharacteristicName, dict[str, ComputationMethod[Any, Any]]],
    ] = field(default_factory=dict, repr=False)

    def add_conversion(
        self, method: ComputationMethod[Any, Any], *, name: str = DEFAULT_COMPUTATION_KEY
    ) -> None:
        """
        Add a unary conversion ``source -> target``.

        Raises
        ------
        ValueError
            If the method does not have exactly one source.
        """
        if len(method.sources) != 1:
            raise ValueError("Only unary methods are supported for edges (1 source -> 1 target).")
        source = method.sources[0]
        self._adj.setdefault(source, {}).setdefault(method.target, {})[name] = method
        self._adj.setdefault(method.target, {})

    def nodes(self) -> frozenset[GenericCharacteristicName]:
        """Return the set of all graph nodes."""
        return frozenset(self._adj)

    def successors(self, node: GenericCharacteristicName) -> frozenset[GenericCharacteristicName]:
        """Return characteristics directly derivable from ``node``."""
        return frozenset(self._adj.get(node, {}))

    @staticmethod
    def _pick_method(
        methods: dict[str, ComputationMethod[Any, Any]],
    ) -> ComputationMethod[Any, Any]:
        """Pick a deterministic method for an edge (prefer default key)."""
        if DEFAULT_COMPUTATION_KEY in methods:
            return methods[DEFAULT_COMPUTATION_KEY]
        return methods[min(methods)]

    def find_path(
        self,
        src: GenericCharacteristicName,
        dst: GenericCharacteristicName,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """
        Find a shortest conversion chain ``src -> ... -> dst`` using BFS.

        Returns
        -------
        list[ComputationMethod] or None
            Conversions along the path, ``[]`` when ``src == dst`` and ``None``
            when ``dst`` is unreachable.
        """
        if src == dst:
            return []

        parent: dict[
            GenericCharacteristicName, tuple[GenericCharacteristicName, ComputationMethod[Any, Any]]
        ] = {}
        visited: set[GenericCharacteristicName] = {src}
        queue: deque[GenericCharacteristicName] = deque([src])

        while queue:
            v = queue.popleft()
            for w, methods in self._adj.get(v, {}).items():
                if w in visited or not methods:
                    continue
                visited.add(w)
                parent[w] = (v, self._pick_method(methods))
                if w == dst:
                    path: list[ComputationMethod[Any, Any]] = []
                    cur = dst
                    while cur != src:
                        prev, method = parent[cur]
                        path.append(method)
                        cur = prev
                    path.reverse()
                    return path
                queue.append(w)
        return None

    def find_shortest_path(
        self,
        sources: Iterable[GenericCharacteristicName],
        dst: GenericCharacteristicName,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """Shortest path to ``dst`` from any of ``sources`` (first wins on ties)."""
        best: list[ComputationMethod[Any, Any]] | None = None
        for src in sources:
            path = self.find_path(src, dst)
            if path is not None and (best is None or len(path) < len(best)):
                best = path
        return best


class CharacteristicRegistry:
    """Singleton registry that maps :class:`DistributionType` to its graph."""

    _instance: ClassVar[Self | None] = None
    _graphs: dict[DistributionType, CharacteristicGraph]

    def __new__(cls) -> Self:
        if cls._instance is None:
            self = super().__new__(cls)
            self._graphs = {}
            cls._instance = self
        return cls._instance

    def get(self, distribution_type: DistributionType) -> CharacteristicGraph:
        """Get (or create) the graph for a distribution type."""
        graph = self._graphs.get(distribution_type)
        if graph is None:
            graph = CharacteristicGraph(distribution_type=distribution_type)
            self._graphs[distribution_type] = graph
        return graph

    __call__ = get


def _configure(reg: CharacteristicRegistry) -> None:
    """Register the default univariate conversions."""
    CN = CharacteristicName

    continuous = reg.get(UnivariateContinuous)
    continuous.add_conversion(ComputationMethod(CN.CDF, [CN.PDF], fit_pdf_to_cdf_1C))
    continuous.add_conversion(ComputationMethod(CN.PPF, [CN.CDF], fit_cdf_to_ppf_1C))
    continuous.add_conversion(ComputationMethod(CN.LOGPDF, [CN.PDF], fit_pdf_to_logpdf_1C))

    discrete = reg.get(UnivariateDiscrete)
    discrete.add_conversion(ComputationMethod(CN.CDF, [CN.PMF], fit_pmf_to_cdf_1D))
    discrete.add_conversion(ComputationMethod(CN.PPF, [CN.CDF], fit_cdf_to_ppf_1D))
    discrete.add_conversion(ComputationMethod(CN.LOGPMF, [CN.PMF], fit_pmf_to_logpmf_1D))

    for graph in (continuous, discrete):
        graph.add_conversion(ComputationMethod(CN.STD, [CN.VAR], fit_var_to_std))
        graph.add_conversion(ComputationMethod(CN.MEDIAN, [CN.PPF], fit_ppf_to_median))


@lru_cache(maxsize=1)
def characteristic_registry() -> CharacteristicRegistry:
    """Return the cached :class:`CharacteristicRegistry` configured with defaults."""
    reg = CharacteristicRegistry()
    _configure(reg)
    return reg


def reset_characteristic_registry() -> None:
    """Reset the cached characteristic registry (test helper)."""
    characteristic_registry.cache_clear()
    CharacteristicRegistry._instance = None
