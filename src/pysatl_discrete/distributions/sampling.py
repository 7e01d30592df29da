"""
Sampling Interfaces
===================

Protocols and array-backed containers for samples drawn from distributions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed sample container of shape ``(n_samples, n_dimensions)``.

    Parameters
    ----------
    data : numpy.ndarray
        2D array; integer draws are stored as ``float64``.

    Raises
    ------
    ValueError
        If data is not 2D.
    """

    dimension: int
    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[Any]) -> None:
        if data.ndim != 2:
            raise ValueError("ArraySample expects 2D array of shape (n, d).")
        self.data = np.asarray(data, dtype=np.float64)
        self.dimension = int(data.shape[1])

    @classmethod
    def from_values(cls, values: npt.ArrayLike) -> ArraySample:
        """Build a univariate sample from a flat sequence of draws."""
        return cls(np.asarray(values, dtype=np.float64).reshape(-1, 1))

    def __len__(self) -> int:
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[npt.NDArray[np.floating[Any]]]:
        yield from self.data

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        n, d = self.data.shape
        return int(n), int(d)

    def outcomes(self) -> npt.NDArray[np.int64]:
        """
        Flat integer view of a univariate sample of counts.

        Raises
        ------
        ValueError
            If the sample is not univariate or holds non-integral values.
        """
        if self.dimension != 1:
            raise ValueError("outcomes() is defined for univariate samples only.")
        flat = self.data[:, 0]
        if not np.all(flat == np.round(flat)):
            raise ValueError("Sample holds non-integral values.")
        return flat.astype(np.int64)
