"""
Sufficient Statistics and Closed-Form MLE
=========================================

A binomial sample ``x_1, ..., x_m`` drawn with a known trial count ``n`` is
summarized by the total number of successes ``ns`` and the (possibly
weighted) number of experiments ``ne``. The maximum-likelihood estimate of
the success probability is then ``ns / (ne * n)``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np

from pysatl_discrete.errors import DomainError, ShapeMismatchError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class SufficientStats(Protocol):
    """Marker protocol for per-family sufficient statistics records."""


@dataclass(frozen=True, slots=True)
class BinomialStats:
    """
    Sufficient statistics of a binomial sample.

    Attributes
    ----------
    ns : float
        Total (weighted) number of successes.
    ne : float
        Effective number of experiments.
    n : int
        Trial count shared by every experiment.
    """

    ns: float
    ne: float
    n: int


def _outcomes(n: int, x: npt.ArrayLike) -> npt.NDArray[np.float64]:
    values = np.asarray(x, dtype=np.float64).reshape(-1)
    if np.any(values != np.floor(values)):
        raise DomainError("Binomial outcomes must be integral.")
    outside = (values < 0) | (values > n)
    if np.any(outside):
        bad = values[outside][0]
        raise DomainError(f"Outcome {bad:g} is outside the support [0, {n}].")
    return values


def _weights(w: npt.ArrayLike, size: int) -> npt.NDArray[np.float64]:
    weights = np.asarray(w, dtype=np.float64).reshape(-1)
    if weights.shape[0] != size:
        raise ShapeMismatchError(
            f"Got {weights.shape[0]} weights for a sample of size {size}."
        )
    if np.any(np.isnan(weights)) or np.any(weights < 0):
        raise DomainError("Weights must be non-negative numbers.")
    return weights


def binomial_suffstats(
    n: int, x: npt.ArrayLike, w: npt.ArrayLike | None = None
) -> BinomialStats:
    """
    Aggregate a sample of success counts.

    Parameters
    ----------
    n : int
        Trial count of every experiment.
    x : array_like
        Observed success counts, each an integer in ``[0, n]``.
    w : array_like, optional
        Non-negative weights, one per outcome.

    Returns
    -------
    BinomialStats
        ``ns = sum(x * w)`` and ``ne = sum(w)``; unit weights when ``w`` is
        omitted.

    Raises
    ------
    DomainError
        On a negative trial count, a non-integral or out-of-support outcome,
        or a negative/NaN weight.
    ShapeMismatchError
        If ``w`` and ``x`` differ in length.
    """
    if n < 0:
        raise DomainError(f"Trial count must be non-negative, got {n}.")
    values = _outcomes(n, x)
    if w is None:
        ns, ne = float(values.sum()), float(values.shape[0])
    else:
        weights = _weights(w, values.shape[0])
        ns, ne = float(np.dot(values, weights)), float(weights.sum())
    logger.debug("Binomial sufficient statistics: n=%d, ns=%g, ne=%g", n, ns, ne)
    return BinomialStats(ns=ns, ne=ne, n=n)


def binomial_mle(stats: BinomialStats) -> tuple[int, float]:
    """
    Closed-form MLE ``p = ns / (ne * n)``.

    Returns
    -------
    tuple[int, float]
        The trial count and the estimated success probability.

    Raises
    ------
    DomainError
        If the sample is empty (``ne == 0``) or ``n == 0``.
    """
    denominator = stats.ne * stats.n
    if denominator == 0:
        raise DomainError("MLE is undefined for an empty sample or zero trials.")
    # rounding of the weighted sums may step just outside [0, 1]
    p = min(max(stats.ns / denominator, 0.0), 1.0)
    logger.debug("Binomial MLE: n=%d, p=%g", stats.n, p)
    return stats.n, p
