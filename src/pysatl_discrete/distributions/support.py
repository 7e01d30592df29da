"""
Discrete Supports
=================

Support objects describe the set of outcomes with non-zero mass. Discrete
supports additionally provide ordered traversal, which the generic
``pmf <-> cdf <-> ppf`` conversions rely on, and range clipping, which the
range mass evaluators use to split a request into its in-support part and
the part that is zero by definition.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from math import ceil, floor
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_discrete.types import BoolArray, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


@runtime_checkable
class DiscreteSupport(Support, Protocol):
    def iter_points(self) -> Iterator[int]: ...

    def iter_leq(self, x: Number) -> Iterator[int]: ...

    def prev(self, x: Number) -> int | None: ...


@dataclass(frozen=True, slots=True)
class IntegerIntervalSupport(DiscreteSupport):
    """
    Finite set of consecutive integers ``{min_k, min_k + 1, ..., max_k}``.

    Parameters
    ----------
    min_k : int
        Smallest support point (inclusive).
    max_k : int
        Largest support point (inclusive).

    Raises
    ------
    ValueError
        If ``max_k < min_k``.
    """

    min_k: int
    max_k: int

    def __post_init__(self) -> None:
        if self.max_k < self.min_k:
            raise ValueError(f"Empty integer interval [{self.min_k}, {self.max_k}].")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        result = (xf == np.floor(xf)) & (xf >= self.min_k) & (xf <= self.max_k)

        if np.ndim(xf) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def __len__(self) -> int:
        return self.max_k - self.min_k + 1

    def iter_points(self) -> Iterator[int]:
        return iter(range(self.min_k, self.max_k + 1))

    def iter_leq(self, x: Number) -> Iterator[int]:
        last = min(int(floor(float(x))), self.max_k)
        return iter(range(self.min_k, last + 1))

    def prev(self, x: Number) -> int | None:
        candidate = min(int(ceil(float(x))) - 1, self.max_k)
        if candidate < self.min_k:
            return None
        return candidate

    def first(self) -> int:
        return self.min_k

    def last(self) -> int:
        return self.max_k

    def next(self, current: int) -> int | None:
        nxt = max(current + 1, self.min_k)
        if nxt > self.max_k:
            return None
        return nxt

    def clip(self, lo: int, hi: int) -> tuple[int, int]:
        """
        Intersect the integer range ``[lo, hi]`` with the support.

        Returns
        -------
        tuple[int, int]
            Bounds ``(vl, vr)`` of the intersection; ``vl > vr`` when it is empty.
        """
        return max(lo, self.min_k), min(hi, self.max_k)

    @property
    def points(self) -> NumericArray:
        return cast(NumericArray, np.arange(self.min_k, self.max_k + 1))

    __iter__ = iter_points


__all__ = [
    "Support",
    "DiscreteSupport",
    "IntegerIntervalSupport",
]
