"""
Shared types of the discrete families package.

Distribution type descriptors, numeric array aliases and the enumerations of
characteristic and family names.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """Whether the support is countable (``DISCRETE``) or not."""

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DistributionType:
    """
    Descriptor of the space a distribution lives on.

    The characteristic registry matches conversions against
    :attr:`registry_features`, so two descriptors with equal features
    select the same conversion graph.
    """

    __slots__ = ()

    @property
    def registry_features(self) -> Mapping[str, Any]:
        """Dataclass fields of the descriptor as a ``name -> value`` mapping."""
        fields = getattr(self, "__dataclass_fields__", None) or {}
        return {name: getattr(self, name) for name in fields}


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType(DistributionType):
    """
    Distribution on ``R^dimension`` (or a lattice of it when discrete).

    Parameters
    ----------
    kind : Kind
    dimension : int
        1 for univariate families such as the binomial.
    """

    kind: Kind
    dimension: int


UnivariateDiscrete = EuclideanDistributionType(kind=Kind.DISCRETE, dimension=1)
"""Descriptor shared by every family of this package."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""NumPy integer or floating scalar."""

Number = NumPyNumber | int | float
"""Any real scalar accepted as a point or parameter."""

NumericArray = NDArray[NumPyNumber]
"""Array of NumPy numbers."""

FloatArray = NDArray[np.float64]
"""Masses, probabilities and weights."""

IntArray = NDArray[np.integer[Any]]
"""Outcomes (numbers of successes)."""

ComplexArray = NDArray[np.complexfloating[Any]]
"""Characteristic function values."""

BoolArray = NDArray[np.bool_]
"""Support membership masks."""

type GenericCharacteristicName = str
"""Name of a characteristic node, see :class:`CharacteristicName`."""

type ParametrizationName = str
"""Name of a parametrization within a family."""

ScalarFunc = Callable[[float], float]
"""Real function of one real argument."""


class CharacteristicName(StrEnum):
    """
    Standard names of distribution characteristics.

    Note
    ----
    ``PMF``, ``CDF`` and ``PPF`` are definitive nodes of the conversion graph
    for discrete distributions, ``LOGPMF``, ``LOGCDF`` and ``SF`` are derived
    nodes. The remaining names are only available analytically.
    """

    PMF = "pmf"
    LOGPMF = "logpmf"
    CDF = "cdf"
    LOGCDF = "logcdf"
    SF = "sf"
    PPF = "ppf"
    MGF = "mgf"
    CF = "cf"
    MEAN = "mean"
    VAR = "var"
    MODE = "mode"
    MODES = "modes"
    MEDIAN = "median"
    SKEW = "skewness"
    KURT = "kurtosis"
    ENTROPY = "entropy"


class FamilyName(StrEnum):
    BINOMIAL = "Binomial"


__all__ = [
    "Kind",
    "EuclideanDistributionType",
    "UnivariateDiscrete",
    "GenericCharacteristicName",
    "ParametrizationName",
    "DistributionType",
    "ScalarFunc",
    "BoolArray",
    "ComplexArray",
    "FloatArray",
    "IntArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "CharacteristicName",
    "FamilyName",
]
