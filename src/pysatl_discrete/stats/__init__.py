"""
Statistics subpackage

Numerical building blocks of the binomial family: the special-function
provider, moments, range recurrence, transforms, sufficient statistics and
the provider-backed sampler.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .provider import (
    BinomialFunctionProvider,
    ScipyBinomialProvider,
    default_binomial_provider,
)
from .recursive import (
    RecursiveBinomialProbEvaluator,
    RecursiveProbabilityEvaluator,
    binomial_pmf_range,
    pmf_range_elementwise,
)
from .sampler import ProviderSamplingStrategy
from .suffstats import BinomialStats, SufficientStats, binomial_mle, binomial_suffstats

__all__ = [
    # provider
    "BinomialFunctionProvider",
    "ScipyBinomialProvider",
    "default_binomial_provider",
    # range recurrence
    "RecursiveProbabilityEvaluator",
    "RecursiveBinomialProbEvaluator",
    "binomial_pmf_range",
    "pmf_range_elementwise",
    # sampling
    "ProviderSamplingStrategy",
    # fitting
    "SufficientStats",
    "BinomialStats",
    "binomial_suffstats",
    "binomial_mle",
]
