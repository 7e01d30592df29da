"""
Computation and Sampling Strategies
===================================

Pluggable strategy interfaces and their default implementations:

- :class:`ComputationStrategy`: resolves characteristic methods.
- :class:`DefaultComputationStrategy`: returns analytical characteristics,
  otherwise walks the characteristic graph and fits the conversions on the
  way, optionally caching them.
- :class:`SamplingStrategy`: draws samples from a distribution.
- :class:`DefaultSamplingUnivariateStrategy`: inverse transform sampling
  through ``ppf``.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_discrete.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
)
from pysatl_discrete.types import CharacteristicName, GenericCharacteristicName

from .registry import characteristic_registry
from .sampling import ArraySample, Sample

if TYPE_CHECKING:
    from .distribution import Distribution

logger = logging.getLogger(__name__)

type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    enable_caching: bool

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If the distribution provides an analytical implementation, return it.
    2. Else, if caching is enabled and a fitted method is cached, return it.
    3. Else find a path in the characteristic graph from some analytical
       characteristic to the target and fit its edges in order (fitters may
       recursively resolve their own sources through this strategy).

    Parameters
    ----------
    enable_caching : bool, default False
        Cache fitted conversions keyed by distribution and target.

    Raises
    ------
    RuntimeError
        If the distribution has no analytical base, no conversion path
        exists, or a cycle is detected during resolution.
    """

    def __init__(self, enable_caching: bool = False) -> None:
        self.enable_caching = enable_caching
        self._cache: dict[tuple[int, GenericCharacteristicName], FittedComputationMethod[In, Out]]
        self._cache = {}
        self._resolving: dict[int, set[GenericCharacteristicName]] = {}

    def _push_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        seen = self._resolving.setdefault(id(distr), set())
        if state in seen:
            raise RuntimeError(
                f"Cycle detected while resolving '{state}'. "
                "Provide at least one analytical base characteristic in the distribution."
            )
        seen.add(state)

    def _pop_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        seen = self._resolving.get(id(distr))
        if seen is not None:
            seen.discard(state)
            if not seen:
                self._resolving.pop(id(distr), None)

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]:
        """
        Resolve an analytical or fitted method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name.
        distr : Distribution
            The distribution providing the analytical base and type.
        **options
            Passed to the fitters when conversions are required.
        """
        analytical = distr.analytical_computations
        if state in analytical:
            return analytical[state]

        cache_key = (id(distr), state)
        if self.enable_caching:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        if not analytical:
            raise RuntimeError(
                "Distribution provides no analytical computations to ground conversions."
            )

        view = characteristic_registry().view(distr)

        self._push_guard(distr, state)
        try:
            for src in analytical:
                path = view.find_path(src, state)
                if not path:
                    continue

                logger.debug(
                    "Resolving '%s' from '%s' through %s",
                    state,
                    src,
                    [edge.target for edge in path],
                )
                last_fitted: FittedComputationMethod[In, Out] | None = None
                for edge in path:
                    last_fitted = edge.fit(distr, **options)
                    if self.enable_caching:
                        self._cache[(id(distr), edge.target)] = last_fitted

                if last_fitted is None:
                    raise RuntimeError(f"Empty path when resolving '{state}' from '{src}'.")
                return last_fitted

            raise RuntimeError(
                f"No conversion path from any analytical characteristic to '{state}'."
            )
        finally:
            self._pop_guard(distr, state)


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`Sample`)."""

    def sample(self, n: int, distr: "Distribution", **options: Any) -> Sample: ...


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """
    Inverse transform sampler: applies the distribution's ``ppf`` to i.i.d.
    uniforms ``U ~ U(0, 1)``.

    Options
    -------
    seed : int | None
        Seed of the uniform generator.

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, 1)``.
    """

    def sample(self, n: int, distr: "Distribution", **options: Any) -> ArraySample:
        if n < 0:
            raise ValueError(f"Number of samples must be non-negative, got {n}")
        seed = options.pop("seed", None)
        ppf = distr.query_method(CharacteristicName.PPF, **options)
        rng = np.random.default_rng(seed)
        U = rng.random(n)
        vals = np.array([ppf(Ui) for Ui in U], dtype=np.float64).reshape(n, 1)
        return ArraySample(vals)
