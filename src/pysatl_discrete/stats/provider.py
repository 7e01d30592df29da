"""
Special-Function Provider
=========================

The binomial family delegates its scalar characteristics (``pmf``,
``logpmf``, ``cdf``, ``logcdf``, ``sf``, ``ppf``) and variate generation to a
provider keyed by ``(n, p)``. The provider is injected when the family is
configured, so the family's own algorithms (the range recurrence, the
moments, the fit) can be checked against any reference implementation.

:class:`ScipyBinomialProvider` is the default: the mass is evaluated in log
space through ``gammaln`` so large trial counts neither overflow nor
underflow prematurely, the cumulative functions use the incomplete beta
based ``bdtr``/``bdtrc`` and variates come from NumPy's generator.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache
from typing import TYPE_CHECKING, Protocol, cast, runtime_checkable

import numpy as np
from scipy.special import bdtr, bdtrc, gammaln, xlog1py, xlogy
from scipy.stats import binom

from pysatl_discrete.errors import DomainError

if TYPE_CHECKING:
    import numpy.typing as npt

    from pysatl_discrete.types import FloatArray, IntArray


@runtime_checkable
class BinomialFunctionProvider(Protocol):
    """
    Scalar and element-wise binomial functions keyed by ``(n, p)``.

    Every function accepts a scalar or an array of points and returns a
    ``float`` or an array of the same shape. Points outside ``[0, n]`` get
    mass ``0`` (``-inf`` in log space).
    """

    def pmf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray: ...
    def logpmf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray: ...
    def cdf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray: ...
    def logcdf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray: ...
    def sf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray: ...
    def ppf(self, q: npt.ArrayLike, n: int, p: float) -> float | FloatArray: ...
    def rvs(
        self,
        n: int,
        p: float,
        size: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> int | IntArray: ...


def _unwrap(values: npt.NDArray[np.float64]) -> float | FloatArray:
    if np.ndim(values) == 0:
        return float(values)
    return cast("FloatArray", values)


class ScipyBinomialProvider:
    """Default provider backed by :mod:`scipy.special` and :mod:`numpy.random`."""

    def logpmf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray:
        kf = np.asarray(k, dtype=float)
        inside = (kf == np.floor(kf)) & (kf >= 0) & (kf <= n)
        kk = np.where(inside, kf, 0.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            log_coef = gammaln(n + 1.0) - gammaln(kk + 1.0) - gammaln(n - kk + 1.0)
            values = log_coef + xlogy(kk, p) + xlog1py(n - kk, -p)
        return _unwrap(np.where(inside, values, -np.inf))

    def pmf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray:
        return _unwrap(np.exp(np.asarray(self.logpmf(k, n, p))))

    def cdf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray:
        kf = np.floor(np.asarray(k, dtype=float))
        inner = bdtr(np.clip(kf, 0.0, float(n)), n, p)
        return _unwrap(np.where(kf < 0, 0.0, np.where(kf >= n, 1.0, inner)))

    def logcdf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray:
        with np.errstate(divide="ignore"):
            return _unwrap(np.log(np.asarray(self.cdf(k, n, p))))

    def sf(self, k: npt.ArrayLike, n: int, p: float) -> float | FloatArray:
        kf = np.floor(np.asarray(k, dtype=float))
        inner = bdtrc(np.clip(kf, 0.0, float(n)), n, p)
        return _unwrap(np.where(kf < 0, 1.0, np.where(kf >= n, 0.0, inner)))

    def ppf(self, q: npt.ArrayLike, n: int, p: float) -> float | FloatArray:
        """
        Leftmost ``k`` with ``cdf(k) >= q``.

        Raises
        ------
        DomainError
            If any level lies outside ``[0, 1]``.
        """
        qf = np.asarray(q, dtype=float)
        if np.any((qf < 0) | (qf > 1)):
            raise DomainError("Probability must be in [0, 1]")
        # scipy maps q == 0 to -1, the support starts at 0
        return _unwrap(np.maximum(binom.ppf(qf, n, p), 0.0))

    def rvs(
        self,
        n: int,
        p: float,
        size: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> int | IntArray:
        generator = rng if rng is not None else np.random.default_rng()
        draws = generator.binomial(n, p, size=size)
        if size is None:
            return int(draws)
        return cast("IntArray", np.asarray(draws, dtype=np.int64))


@lru_cache(maxsize=1)
def default_binomial_provider() -> ScipyBinomialProvider:
    """Return the shared SciPy-backed provider."""
    return ScipyBinomialProvider()
