"""
Discrete Conversion Fitters
===========================

Fitters turn a resolvable source characteristic of a univariate discrete
distribution into a target characteristic. They are the payload of the
characteristic graph edges:

- ``pmf -> cdf`` by prefix summation over the support,
- ``cdf -> pmf`` as jump sizes between consecutive support points,
- ``cdf -> ppf`` as the leftmost support point with ``cdf >= q``,
- ``ppf -> cdf`` by bisection on the quantile level,
- ``pmf -> logpmf``, ``cdf -> logcdf`` and ``cdf -> sf``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable
from math import isfinite
from typing import TYPE_CHECKING, Any, cast

import numpy as np
from mypy_extensions import KwArg

from pysatl_discrete.distributions.computation import FittedComputationMethod
from pysatl_discrete.distributions.support import DiscreteSupport
from pysatl_discrete.types import CharacteristicName

if TYPE_CHECKING:
    from pysatl_discrete.distributions.distribution import Distribution
    from pysatl_discrete.types import GenericCharacteristicName, ScalarFunc


def _resolve(distribution: Distribution, name: GenericCharacteristicName) -> ScalarFunc:
    """
    Resolve a scalar characteristic from the distribution.

    Raises
    ------
    RuntimeError
        If the distribution does not provide a computation strategy.
    """
    try:
        fn = distribution.query_method(name)
    except AttributeError as e:
        raise RuntimeError(
            "Distribution must provide computation_strategy.query_method(name, distribution)."
        ) from e

    def _wrap(x: float, **kwargs: Any) -> float:
        return float(fn(x, **kwargs))

    return _wrap


def _discrete_support(distribution: Distribution, conversion: str) -> DiscreteSupport:
    support = distribution.support
    if support is None or not isinstance(support, DiscreteSupport):
        raise RuntimeError(f"Discrete support is required for {conversion}.")
    return support


def _fitted(
    target: GenericCharacteristicName,
    source: GenericCharacteristicName,
    func: Callable[..., float],
) -> FittedComputationMethod[float, float]:
    return FittedComputationMethod[float, float](
        target=target,
        sources=[source],
        func=cast(Callable[[float, KwArg(Any)], float], func),
    )


def fit_pmf_to_cdf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """
    Build ``cdf`` from ``pmf`` as the prefix sum over support points ``k <= x``.
    """
    support = _discrete_support(distribution, "pmf->cdf")
    pmf_func = _resolve(distribution, CharacteristicName.PMF)

    def _cdf(x: float, **kwargs: Any) -> float:
        s = 0.0
        for k in support.iter_leq(x):
            s += pmf_func(float(k), **kwargs)
        return float(np.clip(s, 0.0, 1.0))

    return _fitted(CharacteristicName.CDF, CharacteristicName.PMF, _cdf)


def fit_cdf_to_pmf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """
    Extract ``pmf`` from ``cdf`` as jump sizes.

    Notes
    -----
    ``pmf(x) = cdf(x) - cdf(prev(x))`` for support points and ``0`` elsewhere,
    with ``cdf(prev) := 0`` when ``x`` is the first point.
    """
    support = _discrete_support(distribution, "cdf->pmf")
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _pmf(x: float, **kwargs: Any) -> float:
        if not support.contains(x):
            return 0.0
        p = support.prev(x)
        left = 0.0 if p is None else cdf_func(float(p), **kwargs)
        mass = cdf_func(x, **kwargs) - left
        return float(np.clip(mass, 0.0, 1.0))

    return _fitted(CharacteristicName.PMF, CharacteristicName.CDF, _pmf)


def fit_cdf_to_ppf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """
    Step quantile: the leftmost support point ``x`` with ``cdf(x) >= q``.

    The support must be finite; ``cdf`` is tabulated once at fit time.
    """
    support = _discrete_support(distribution, "cdf->ppf")
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    xs = np.fromiter((float(x) for x in support.iter_points()), dtype=float)
    if xs.size == 0:
        raise RuntimeError("Discrete support is empty.")

    # monotone against floating point noise
    cdf_vals = np.asarray([cdf_func(float(x)) for x in xs], dtype=float)
    cdf_vals = np.clip(np.maximum.accumulate(cdf_vals), 0.0, 1.0)

    def _ppf(q: float, **kwargs: Any) -> float:
        if not isfinite(q):
            return float("nan")
        if q <= 0.0:
            return float(xs[0])
        if q >= 1.0:
            return float(xs[-1])
        idx = min(int(np.searchsorted(cdf_vals, q, side="left")), xs.size - 1)
        return float(xs[idx])

    return _fitted(CharacteristicName.PPF, CharacteristicName.CDF, _ppf)


def fit_ppf_to_cdf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Build ``cdf`` from ``ppf`` as ``sup { q : ppf(q) <= x }`` found by bisection.

    Options
    -------
    q_tol : float, default 1e-12
    max_iter : int, default 100
    """
    ppf_func = _resolve(distribution, CharacteristicName.PPF)
    q_tol = float(options.get("q_tol", 1e-12))
    max_iter = int(options.get("max_iter", 100))

    lowest = ppf_func(0.0)
    highest = ppf_func(1.0)

    def _cdf(x: float, **kwargs: Any) -> float:
        if math.isnan(x):
            return float("nan")
        if x < lowest:
            return 0.0
        if x >= highest:
            return 1.0

        lo, hi = 0.0, 1.0
        for _ in range(max_iter):
            if hi - lo <= q_tol:
                break
            mid = 0.5 * (lo + hi)
            if ppf_func(mid, **kwargs) <= x:
                lo = mid
            else:
                hi = mid
        return float(np.clip(lo, 0.0, 1.0))

    return _fitted(CharacteristicName.CDF, CharacteristicName.PPF, _cdf)


def fit_pmf_to_logpmf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """``logpmf = log(pmf)``, ``-inf`` where the mass is zero."""
    pmf_func = _resolve(distribution, CharacteristicName.PMF)

    def _logpmf(x: float, **kwargs: Any) -> float:
        mass = pmf_func(x, **kwargs)
        return math.log(mass) if mass > 0.0 else -math.inf

    return _fitted(CharacteristicName.LOGPMF, CharacteristicName.PMF, _logpmf)


def fit_cdf_to_logcdf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """``logcdf = log(cdf)``, ``-inf`` left of the support."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _logcdf(x: float, **kwargs: Any) -> float:
        prob = cdf_func(x, **kwargs)
        return math.log(prob) if prob > 0.0 else -math.inf

    return _fitted(CharacteristicName.LOGCDF, CharacteristicName.CDF, _logcdf)


def fit_cdf_to_sf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Survival function ``sf = 1 - cdf``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _sf(x: float, **kwargs: Any) -> float:
        return float(np.clip(1.0 - cdf_func(x, **kwargs), 0.0, 1.0))

    return _fitted(CharacteristicName.SF, CharacteristicName.CDF, _sf)
