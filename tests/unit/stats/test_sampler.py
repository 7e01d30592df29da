"""
Tests for the provider-backed sampling strategy.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass

import numpy as np
import pytest

from pysatl_discrete.distributions.sampling import ArraySample
from pysatl_discrete.stats.provider import ScipyBinomialProvider
from pysatl_discrete.stats.sampler import ProviderSamplingStrategy


@dataclass
class _Params:
    params: tuple[int, float]


class TestProviderSamplingStrategy:
    def setup_method(self):
        self.strategy = ProviderSamplingStrategy(ScipyBinomialProvider(), seed=5)
        self.distr = _Params((10, 0.3))

    def test_sample_shape_and_range(self):
        sample = self.strategy.sample(400, self.distr)
        assert isinstance(sample, ArraySample)
        assert sample.shape == (400, 1)
        outcomes = sample.outcomes()
        assert outcomes.min() >= 0 and outcomes.max() <= 10
        assert float(outcomes.mean()) == pytest.approx(3.0, abs=0.3)

    def test_seed_and_rng_options_are_reproducible(self):
        a = self.strategy.sample(20, self.distr, seed=42).array
        b = self.strategy.sample(20, self.distr, seed=42).array
        np.testing.assert_array_equal(a, b)

        c = self.strategy.sample(20, self.distr, rng=np.random.default_rng(42)).array
        np.testing.assert_array_equal(a, c)

    def test_constructor_seed_is_reproducible(self):
        other = ProviderSamplingStrategy(ScipyBinomialProvider(), seed=5)
        np.testing.assert_array_equal(
            self.strategy.sample(15, self.distr).array, other.sample(15, self.distr).array
        )

    def test_draw_returns_int(self):
        value = self.strategy.draw(self.distr, seed=1)
        assert isinstance(value, int)
        assert 0 <= value <= 10

    def test_degenerate_parameters(self):
        assert self.strategy.sample(5, _Params((7, 1.0))).outcomes().tolist() == [7] * 5
        assert self.strategy.draw(_Params((7, 0.0))) == 0

    def test_zero_and_negative_sizes(self):
        assert self.strategy.sample(0, self.distr).shape == (0, 1)
        with pytest.raises(ValueError):
            self.strategy.sample(-3, self.distr)

    def test_distribution_without_parameters(self):
        with pytest.raises(TypeError):
            self.strategy.sample(3, object())
