"""
Common fixtures and utilities for discrete distribution tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np


class BaseDiscreteDistributionTest:
    """Base class for discrete families' tests"""

    # Relative tolerance for floating point comparisons
    CALCULATION_PRECISION = 1e-10

    @staticmethod
    def assert_arrays_close(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], rtol: float | None = None
    ) -> None:
        """Compare masses and probabilities with a relative tolerance."""
        if rtol is None:
            rtol = BaseDiscreteDistributionTest.CALCULATION_PRECISION
        np.testing.assert_allclose(actual, expected, rtol=rtol, atol=1e-15)
