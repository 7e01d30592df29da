"""
Binomial moments and summary values as pure functions of ``(n, p)``.

``mode`` and ``median`` are rounding approximations: ``round((n + 1) p)``
and ``round(n p)``. They are exact for most parameters but not for all of
them (ties at integral ``(n + 1) p`` have two modes, only one is reported).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np


def _ieee_div(num: float, den: float) -> float:
    # degenerate variance: +-inf or nan instead of ZeroDivisionError
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(num) / np.float64(den))


def mean(n: int, p: float) -> float:
    return n * p


def variance(n: int, p: float) -> float:
    return n * p * (1.0 - p)


def mode(n: int, p: float) -> int:
    return round((n + 1) * p) if n > 0 else 0


def modes(n: int, p: float) -> list[int]:
    return [mode(n, p)]


def median(n: int, p: float) -> int:
    return round(mean(n, p))


def skewness(n: int, p: float) -> float:
    q = 1.0 - p
    return _ieee_div(q - p, math.sqrt(n * p * q))


def kurtosis(n: int, p: float) -> float:
    """Excess kurtosis ``(1 - 6pq) / (npq)``."""
    u = p * (1.0 - p)
    return _ieee_div(1.0 - 6.0 * u, n * u)


def entropy(n: int, p: float, approx: bool = False) -> float:
    """
    Shannon entropy in nats.

    Parameters
    ----------
    n : int
        Number of trials.
    p : float
        Success probability.
    approx : bool, default False
        Use the Gaussian surrogate ``0.5 (log(2 pi n p q) + 1)`` instead of
        the exact sum.

    Notes
    -----
    The exact value sums ``-P(k) log P(k)`` with the log-probabilities
    produced by the recurrence ``lp_k = lp_{k-1} + log((n-k+1)/k) + log(p/q)``
    seeded at ``lp_0 = n log q``, so no binomial coefficient is evaluated.
    """
    if p == 0.0 or p == 1.0 or n == 0:
        return 0.0
    q = 1.0 - p
    if approx:
        return 0.5 * (math.log(2.0 * math.pi * n * p * q) + 1.0)

    lg = math.log(p / q)
    lp = n * math.log(q)
    s = math.exp(lp) * lp
    for k in range(1, n + 1):
        lp += math.log((n - k + 1) / k) + lg
        s += math.exp(lp) * lp
    return -s
