"""
Provider-backed sampling strategy.

Draws binomial variates directly from the provider's generator instead of
inverting the quantile function.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_discrete.distributions.sampling import ArraySample
from pysatl_discrete.distributions.strategies import SamplingStrategy

if TYPE_CHECKING:
    from pysatl_discrete.distributions.distribution import Distribution
    from pysatl_discrete.stats.provider import BinomialFunctionProvider


def _trials_and_prob(distr: Distribution) -> tuple[int, float]:
    params = getattr(distr, "params", None)
    if params is None:
        raise TypeError(
            f"{type(distr).__name__} does not expose binomial parameters (n, p)."
        )
    n, p = params
    return int(n), float(p)


class ProviderSamplingStrategy(SamplingStrategy):
    """
    Sampling through :meth:`BinomialFunctionProvider.rvs`.

    Parameters
    ----------
    provider : BinomialFunctionProvider
        Source of the variates.
    seed : int | None, default None
        Seed of the strategy's own generator, used when a call passes
        neither ``seed`` nor ``rng``.

    Options
    -------
    seed : int | None
        Per-call seed; a fresh generator is built from it.
    rng : numpy.random.Generator | None
        Per-call generator, takes precedence over ``seed``.
    """

    def __init__(self, provider: BinomialFunctionProvider, seed: int | None = None) -> None:
        self.provider = provider
        self._rng = np.random.default_rng(seed)

    def _generator(self, options: dict[str, Any]) -> np.random.Generator:
        rng = options.pop("rng", None)
        if rng is not None:
            return rng
        if "seed" in options:
            return np.random.default_rng(options.pop("seed"))
        return self._rng

    def sample(self, n: int, distr: Distribution, **options: Any) -> ArraySample:
        if n < 0:
            raise ValueError(f"Number of samples must be non-negative, got {n}")
        trials, p = _trials_and_prob(distr)
        draws = self.provider.rvs(trials, p, size=n, rng=self._generator(options))
        return ArraySample.from_values(draws)

    def draw(self, distr: Distribution, **options: Any) -> int:
        trials, p = _trials_and_prob(distr)
        return int(self.provider.rvs(trials, p, rng=self._generator(options)))  # type: ignore[arg-type]
