"""
Moment-generating and characteristic functions of the binomial family.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import cast

import numpy as np
import numpy.typing as npt

from pysatl_discrete.types import ComplexArray, FloatArray


def mgf(n: int, p: float, t: npt.ArrayLike) -> float | FloatArray:
    """``M(t) = (1 - p + p e^t)^n`` for scalar or array ``t``."""
    values = (1.0 - p + p * np.exp(np.asarray(t, dtype=float))) ** n
    if np.ndim(values) == 0:
        return float(values)
    return cast(FloatArray, values)


def cf(n: int, p: float, t: npt.ArrayLike) -> complex | ComplexArray:
    """``phi(t) = (1 - p + p e^{it})^n`` for scalar or array ``t``."""
    values = (1.0 - p + p * np.exp(1j * np.asarray(t, dtype=float))) ** n
    if np.ndim(values) == 0:
        return complex(values)
    return cast(ComplexArray, values)
