"""
Recursive Range Mass Evaluation
===============================

Fills an array with the mass of every integer in a range ``[lo, hi]``.
Only one value (the seed) is computed by the exact mass function; each
neighbour follows from the previous one through the ratio of consecutive
masses, so the whole range costs ``O(hi - lo)``. For the binomial family the
ratio is

    pmf(v) / pmf(v - 1) = (n - v + 1) / v * p / (1 - p),

a factor that stays moderate where the binomial coefficient itself would
overflow.

Two scan directions exist. With ``p <= 1/2`` the scan runs upward from the
left end of the range with coefficient ``p / (1 - p)``; otherwise it runs
downward from the right end with ``(1 - p) / p``. The denominator of the
coefficient is therefore never a zero probability, ``p == 1`` included.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, cast

import numpy as np

from pysatl_discrete.distributions.support import IntegerIntervalSupport
from pysatl_discrete.errors import ShapeMismatchError

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_discrete.types import FloatArray

logger = logging.getLogger(__name__)


class RecursiveProbabilityEvaluator(Protocol):
    """Step of a mass recurrence: the mass at ``x`` from the mass ``pv`` of its predecessor."""

    def next_pmf(self, pv: float, x: int) -> float: ...


@dataclass(frozen=True, slots=True)
class RecursiveBinomialProbEvaluator:
    """
    Binomial mass recurrence.

    Parameters
    ----------
    n : int
        Number of trials.
    coef : float
        Odds ratio of the scan direction, ``p / (1 - p)`` upward or
        ``(1 - p) / p`` downward.
    """

    n: int
    coef: float

    @classmethod
    def forward(cls, n: int, p: float) -> RecursiveBinomialProbEvaluator:
        return cls(n, p / (1.0 - p))

    @classmethod
    def backward(cls, n: int, p: float) -> RecursiveBinomialProbEvaluator:
        return cls(n, (1.0 - p) / p)

    def next_pmf(self, pv: float, x: int) -> float:
        return ((self.n - x + 1) / x) * self.coef * pv


def allocate_range_output(lo: int, hi: int, out: FloatArray | None = None) -> FloatArray:
    """
    Return the buffer for the range ``[lo, hi]``.

    Raises
    ------
    ShapeMismatchError
        If ``out`` is given and is not a 1D array of length ``hi - lo + 1``.
    """
    length = max(hi - lo + 1, 0)
    if out is None:
        return np.zeros(length, dtype=np.float64)
    if out.ndim != 1 or out.shape[0] != length:
        raise ShapeMismatchError(
            f"Output buffer of shape {out.shape} does not match range [{lo}, {hi}]."
        )
    return out


def fill_outside(
    out: FloatArray, support: IntegerIntervalSupport, lo: int, hi: int
) -> tuple[int, int]:
    """
    Zero the cells of ``out`` that lie outside ``support``.

    Returns
    -------
    tuple[int, int]
        Bounds ``(vl, vr)`` of the in-support part; ``vl > vr`` when empty.
    """
    vl, vr = support.clip(lo, hi)
    if vl > vr:
        out[:] = 0.0
    else:
        out[: vl - lo] = 0.0
        out[vr - lo + 1 :] = 0.0
    return vl, vr


def pmf_range_elementwise(
    pmf: Callable[[float], float],
    support: IntegerIntervalSupport,
    lo: int,
    hi: int,
    out: FloatArray | None = None,
) -> FloatArray:
    """Range evaluation without a recurrence: one ``pmf`` call per in-support cell."""
    result = allocate_range_output(lo, hi, out)
    if result.size == 0:
        return result
    vl, vr = fill_outside(result, support, lo, hi)
    for v in range(vl, vr + 1):
        result[v - lo] = float(pmf(float(v)))
    return result


def binomial_pmf_range(
    n: int,
    p: float,
    lo: int,
    hi: int,
    *,
    seed_pmf: Callable[[int], float],
    out: FloatArray | None = None,
) -> FloatArray:
    """
    Binomial mass of every integer in ``[lo, hi]``.

    Parameters
    ----------
    n, p : int, float
        Distribution parameters.
    lo, hi : int
        Inclusive range bounds; ``lo > hi`` gives an empty result.
    seed_pmf : Callable[[int], float]
        Exact scalar mass used once, at the first cell of the scan.
    out : FloatArray, optional
        Caller-owned buffer of length ``hi - lo + 1`` to fill in place.

    Returns
    -------
    FloatArray
        ``out`` (or a new array) holding ``pmf(lo), ..., pmf(hi)``.
    """
    result = allocate_range_output(lo, hi, out)
    if result.size == 0:
        return result

    vl, vr = fill_outside(result, IntegerIntervalSupport(0, n), lo, hi)
    if vl > vr:
        return result

    if p <= 0.5:
        rpe: RecursiveProbabilityEvaluator = RecursiveBinomialProbEvaluator.forward(n, p)
        logger.debug("Forward fill of [%d, %d] for n=%d, p=%g", vl, vr, n, p)
        result[vl - lo] = pv = float(seed_pmf(vl))
        for v in range(vl + 1, vr + 1):
            result[v - lo] = pv = rpe.next_pmf(pv, v)
    else:
        # downward scan keeps 1 - p out of the denominator
        rpe = RecursiveBinomialProbEvaluator.backward(n, p)
        logger.debug("Backward fill of [%d, %d] for n=%d, p=%g", vl, vr, n, p)
        result[vr - lo] = pv = float(seed_pmf(vr))
        for v in range(vr - 1, vl - 1, -1):
            result[v - lo] = pv = rpe.next_pmf(pv, n - v)
    return cast("FloatArray", result)
