"""
Tests for binomial moments and entropy.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import binom

from pysatl_discrete.stats import moments


class TestBinomialMoments:
    @pytest.mark.parametrize("n, p", [(20, 0.3), (20, 0.75), (7, 0.5)])
    def test_mean_and_variance_match_direct_summation(self, n, p):
        k = np.arange(n + 1)
        mass = binom.pmf(k, n, p)
        direct_mean = float(np.sum(k * mass))
        direct_var = float(np.sum((k - direct_mean) ** 2 * mass))

        assert moments.mean(n, p) == pytest.approx(direct_mean, rel=1e-12)
        assert moments.variance(n, p) == pytest.approx(direct_var, rel=1e-10)

    @pytest.mark.parametrize("n, p", [(20, 0.3), (15, 0.9), (50, 0.02)])
    def test_skewness_and_kurtosis_match_reference(self, n, p):
        _, _, skew, kurt = binom.stats(n, p, moments="mvsk")
        assert moments.skewness(n, p) == pytest.approx(float(skew), rel=1e-10)
        assert moments.kurtosis(n, p) == pytest.approx(float(kurt), rel=1e-10)

    @pytest.mark.parametrize(
        "n, p, expected",
        [(10, 0.3, 3), (10, 0.5, 6), (0, 0.4, 0), (4, 0.0, 0), (4, 0.9, 4)],
    )
    def test_mode_is_rounded_approximation(self, n, p, expected):
        assert moments.mode(n, p) == expected
        assert moments.modes(n, p) == [expected]

    @pytest.mark.parametrize("n, p, expected", [(10, 0.3, 3), (10, 0.25, 2), (9, 0.5, 4)])
    def test_median_is_rounded_mean(self, n, p, expected):
        # ties round to even: 2.5 -> 2, 4.5 -> 4
        assert moments.median(n, p) == expected

    @pytest.mark.parametrize("p", [0.0, 1.0])
    def test_degenerate_shape_moments_follow_ieee(self, p):
        skew = moments.skewness(10, p)
        assert math.isinf(skew)
        assert math.copysign(1.0, skew) == (1.0 if p == 0.0 else -1.0)
        assert moments.kurtosis(10, p) == math.inf

    def test_zero_trials_give_nan_for_symmetric_case(self):
        assert math.isnan(moments.skewness(0, 0.5))


class TestBinomialEntropy:
    @pytest.mark.parametrize("n, p", [(10, 0.3), (30, 0.5), (25, 0.9), (1, 0.2)])
    def test_exact_matches_reference(self, n, p):
        assert moments.entropy(n, p) == pytest.approx(float(binom.entropy(n, p)), rel=1e-10)

    @pytest.mark.parametrize("n, p", [(5, 0.0), (5, 1.0), (0, 0.4)])
    def test_degenerate_is_zero(self, n, p):
        assert moments.entropy(n, p) == 0.0
        assert moments.entropy(n, p, approx=True) == 0.0

    def test_approximation_close_for_large_n(self):
        exact = moments.entropy(1000, 0.5)
        approx = moments.entropy(1000, 0.5, approx=True)
        assert approx == pytest.approx(exact, rel=0.01)
