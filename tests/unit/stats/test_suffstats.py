"""
Tests for binomial sufficient statistics and the closed-form MLE.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses

import numpy as np
import pytest

from pysatl_discrete.errors import DomainError, ShapeMismatchError
from pysatl_discrete.stats.suffstats import BinomialStats, binomial_mle, binomial_suffstats


class TestBinomialSuffstats:
    def test_unweighted(self):
        stats = binomial_suffstats(10, [2, 3, 4])
        assert stats == BinomialStats(ns=9.0, ne=3.0, n=10)
        assert binomial_mle(stats) == (10, pytest.approx(0.3))

    def test_weighted(self):
        stats = binomial_suffstats(10, [2, 4], [1.0, 3.0])
        assert stats.ns == pytest.approx(14.0)
        assert stats.ne == pytest.approx(4.0)
        assert binomial_mle(stats)[1] == pytest.approx(0.35)

    def test_unit_weights_agree_with_unweighted(self):
        x = np.array([0, 5, 7, 10, 3])
        plain = binomial_suffstats(10, x)
        weighted = binomial_suffstats(10, x, np.ones_like(x, dtype=float))
        assert plain == weighted

    def test_record_is_immutable(self):
        stats = binomial_suffstats(4, [1])
        with pytest.raises(dataclasses.FrozenInstanceError):
            stats.ns = 2.0  # type: ignore[misc]

    def test_column_sample_is_flattened(self):
        stats = binomial_suffstats(6, np.array([[1.0], [2.0]]))
        assert (stats.ns, stats.ne) == (3.0, 2.0)

    @pytest.mark.parametrize("x", [[11], [-1], [2.5], [1, 2, np.nan]])
    def test_invalid_outcomes(self, x):
        with pytest.raises(DomainError):
            binomial_suffstats(10, x)

    def test_negative_trials(self):
        with pytest.raises(DomainError):
            binomial_suffstats(-1, [])

    def test_weights_length_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            binomial_suffstats(10, [1, 2, 3], [1.0, 1.0])

    @pytest.mark.parametrize("w", [[1.0, -0.5], [1.0, np.nan]])
    def test_invalid_weights(self, w):
        with pytest.raises(DomainError):
            binomial_suffstats(10, [1, 2], w)


class TestBinomialMle:
    def test_empty_sample_is_undefined(self):
        with pytest.raises(DomainError):
            binomial_mle(binomial_suffstats(10, []))

    def test_zero_trials_is_undefined(self):
        with pytest.raises(DomainError):
            binomial_mle(binomial_suffstats(0, [0, 0]))

    def test_zero_weights_are_undefined(self):
        with pytest.raises(DomainError):
            binomial_mle(binomial_suffstats(10, [1, 2], [0.0, 0.0]))

    @pytest.mark.parametrize("x, expected", [([0, 0, 0], 0.0), ([5, 5], 1.0)])
    def test_boundary_estimates(self, x, expected):
        assert binomial_mle(binomial_suffstats(5, x)) == (5, expected)

    def test_weighted_saturated_sample_stays_in_unit_interval(self):
        stats = binomial_suffstats(14, [14, 14, 14], [1 / 3, 0.1, 0.6])
        assert binomial_mle(stats) == (14, 1.0)
