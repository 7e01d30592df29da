"""
Characteristic Graph Registry
=============================

A directed graph over characteristic names whose edges are unary
:class:`~pysatl_discrete.distributions.computation.ComputationMethod`
conversions (``1 source -> 1 target``). Every edge is guarded by the set of
distribution kinds it applies to; a distribution sees a filtered
:class:`RegistryView` of the global graph.

Invariants (per view)
---------------------
1. The subgraph induced by the definitive characteristics is strongly connected.
2. Every indefinitive characteristic is reachable from some definitive one.
3. No path leads from an indefinitive characteristic back to a definitive one.

The default configuration covers univariate discrete distributions:
``pmf``, ``cdf`` and ``ppf`` are definitive and pairwise reachable, while
``logpmf``, ``logcdf`` and ``sf`` are derived.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from collections import deque
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pysatl_discrete.distributions.computation import ComputationMethod
from pysatl_discrete.distributions.fitters import (
    fit_cdf_to_logcdf_1D,
    fit_cdf_to_pmf_1D,
    fit_cdf_to_ppf_1D,
    fit_cdf_to_sf_1D,
    fit_pmf_to_cdf_1D,
    fit_pmf_to_logpmf_1D,
    fit_ppf_to_cdf_1D,
)
from pysatl_discrete.types import CharacteristicName, Kind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pysatl_discrete.distributions.distribution import Distribution
    from pysatl_discrete.types import GenericCharacteristicName

logger = logging.getLogger(__name__)

DEFAULT_COMPUTATION_KEY: str = "PySATL_default_computation"
"""Default label for computation edges when no specific label is provided."""


class GraphInvariantError(RuntimeError):
    """Raised when a registry view violates the graph invariants."""


@dataclass(frozen=True, slots=True)
class EdgeMeta:
    """
    A labeled conversion edge.

    Parameters
    ----------
    method : ComputationMethod
        The conversion the edge performs.
    kinds : frozenset[Kind] | None
        Distribution kinds the edge applies to; ``None`` means all kinds.
    """

    method: ComputationMethod[Any, Any]
    kinds: frozenset[Kind] | None = None

    def allows(self, distr: Distribution) -> bool:
        if self.kinds is None:
            return True
        return distr.distribution_type.registry_features.get("kind") in self.kinds


class CharacteristicRegistry:
    """
    Global characteristic graph.

    Nodes must be declared with :meth:`add_characteristic` before edges
    touching them are added with :meth:`add_computation`. Invariants are
    checked per view, not during mutation.
    """

    def __init__(self) -> None:
        # src -> dst -> label -> EdgeMeta
        self._adj: dict[
            GenericCharacteristicName, dict[GenericCharacteristicName, dict[str, EdgeMeta]]
        ] = {}
        self._definitive: set[GenericCharacteristicName] = set()

    def add_characteristic(self, name: GenericCharacteristicName, is_definitive: bool) -> None:
        """
        Declare a characteristic node.

        Re-declaring a node is ignored with a warning.
        """
        if name in self._adj:
            warnings.warn(
                f"Node {name} have been already added. Declaration is ignored",
                UserWarning,
                stacklevel=2,
            )
            return
        self._adj[name] = {}
        if is_definitive:
            self._definitive.add(name)

    def add_computation(
        self,
        method: ComputationMethod[Any, Any],
        *,
        label: str = DEFAULT_COMPUTATION_KEY,
        kinds: frozenset[Kind] | None = None,
    ) -> None:
        """
        Add a labeled unary conversion edge.

        Raises
        ------
        ValueError
            If the method is not unary or touches an undeclared node.
        """
        if len(method.sources) != 1:
            raise ValueError("Only unary computations are supported (1 source -> 1 target).")

        src = method.sources[0]
        dst = method.target
        if src not in self._adj or dst not in self._adj:
            raise ValueError("Source characteristic or destination characteristic is invalid.")

        self._adj[src].setdefault(dst, {})[label] = EdgeMeta(method=method, kinds=kinds)

    def view(self, distr: Distribution) -> RegistryView:
        """Build the validated view of the graph applicable to ``distr``."""
        adj: dict[
            GenericCharacteristicName, dict[GenericCharacteristicName, dict[str, EdgeMeta]]
        ] = {name: {} for name in self._adj}
        for src, targets in self._adj.items():
            for dst, variants in targets.items():
                kept = {label: edge for label, edge in variants.items() if edge.allows(distr)}
                if kept:
                    adj[src][dst] = kept
        return RegistryView(adj, set(self._definitive))


class RegistryView:
    """
    Per-distribution filtered graph.

    Parameters
    ----------
    adj : Mapping[src, Mapping[dst, Mapping[label, EdgeMeta]]]
        Filtered adjacency.
    definitive_nodes : set of GenericCharacteristicName
        Definitive characteristics.

    Raises
    ------
    GraphInvariantError
        If the view violates the graph invariants.
    """

    def __init__(
        self,
        adj: Mapping[
            GenericCharacteristicName,
            Mapping[GenericCharacteristicName, Mapping[str, EdgeMeta]],
        ],
        definitive_nodes: set[GenericCharacteristicName],
    ) -> None:
        self._adj = {s: {t: dict(v) for t, v in d.items()} for s, d in adj.items()}
        self.definitive_characteristics = definitive_nodes & set(self._adj)
        self.all_characteristics = set(self._adj)
        self._validate_invariants()

    @property
    def indefinitive_characteristics(self) -> set[GenericCharacteristicName]:
        return self.all_characteristics - self.definitive_characteristics

    def successors_nodes(self, v: GenericCharacteristicName) -> set[GenericCharacteristicName]:
        return set(self._adj.get(v, {}))

    def find_path(
        self,
        src: GenericCharacteristicName,
        dst: GenericCharacteristicName,
        *,
        prefer_label: str | None = None,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """
        Find the shortest conversion chain ``src -> ... -> dst`` (BFS).

        Per edge the label is chosen as ``prefer_label`` if present, then
        :data:`DEFAULT_COMPUTATION_KEY`, then the smallest label.

        Returns
        -------
        list[ComputationMethod] | None
            Ordered methods, ``[]`` when ``src == dst``, ``None`` if unreachable.
        """
        if src == dst:
            return []

        parent: dict[GenericCharacteristicName, tuple[GenericCharacteristicName, Any]] = {}
        visited = {src}
        queue = deque([src])
        while queue:
            v = queue.popleft()
            for w, variants in self._adj.get(v, {}).items():
                if w in visited:
                    continue
                visited.add(w)
                parent[w] = (v, self._pick_method(variants, prefer_label))
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

    def _validate_invariants(self) -> None:
        defs = self.definitive_characteristics
        for d in defs:
            if not (defs - {d}) <= self._reachable_from(d):
                raise GraphInvariantError("Definitive subgraph must be strongly connected.")

        reachable: set[GenericCharacteristicName] = set()
        for d in defs:
            reachable |= self._reachable_from(d)
        if not self.indefinitive_characteristics <= reachable:
            raise GraphInvariantError(
                "Every indefinitive characteristic must be reachable from some definitive."
            )

        if any(self._reachable_from(i) & defs for i in self.indefinitive_characteristics):
            raise GraphInvariantError(
                "No path from any indefinitive characteristic back to a definitive is allowed."
            )

    def _reachable_from(self, src: GenericCharacteristicName) -> set[GenericCharacteristicName]:
        visited: set[GenericCharacteristicName] = set()
        stack = [src]
        while stack:
            v = stack.pop()
            for w in self.successors_nodes(v):
                if w not in visited:
                    visited.add(w)
                    stack.append(w)
        visited.discard(src)
        return visited

    @staticmethod
    def _pick_method(variants: Mapping[str, EdgeMeta], prefer_label: str | None) -> Any:
        if prefer_label and prefer_label in variants:
            return variants[prefer_label].method
        if DEFAULT_COMPUTATION_KEY in variants:
            return variants[DEFAULT_COMPUTATION_KEY].method
        return variants[sorted(variants)[0]].method


def _configure(reg: CharacteristicRegistry) -> None:
    """Default configuration: univariate discrete conversions."""
    PMF = CharacteristicName.PMF
    CDF = CharacteristicName.CDF
    PPF = CharacteristicName.PPF

    reg.add_characteristic(PMF, is_definitive=True)
    reg.add_characteristic(CDF, is_definitive=True)
    reg.add_characteristic(PPF, is_definitive=True)
    reg.add_characteristic(CharacteristicName.LOGPMF, is_definitive=False)
    reg.add_characteristic(CharacteristicName.LOGCDF, is_definitive=False)
    reg.add_characteristic(CharacteristicName.SF, is_definitive=False)

    discrete = frozenset({Kind.DISCRETE})
    edges = [
        (CDF, PMF, fit_pmf_to_cdf_1D),
        (PMF, CDF, fit_cdf_to_pmf_1D),
        (PPF, CDF, fit_cdf_to_ppf_1D),
        (CDF, PPF, fit_ppf_to_cdf_1D),
        (CharacteristicName.LOGPMF, PMF, fit_pmf_to_logpmf_1D),
        (CharacteristicName.LOGCDF, CDF, fit_cdf_to_logcdf_1D),
        (CharacteristicName.SF, CDF, fit_cdf_to_sf_1D),
    ]
    for target, source, fitter in edges:
        reg.add_computation(
            ComputationMethod[float, float](target=target, sources=[source], fitter=fitter),
            kinds=discrete,
        )


@lru_cache(maxsize=1)
def characteristic_registry() -> CharacteristicRegistry:
    """Return the configured global characteristic registry."""
    reg = CharacteristicRegistry()
    _configure(reg)
    logger.debug("Characteristic registry configured with nodes %s", sorted(reg._adj))
    return reg


def reset_characteristic_registry() -> None:
    """Drop the cached registry (test helper)."""
    characteristic_registry.cache_clear()
