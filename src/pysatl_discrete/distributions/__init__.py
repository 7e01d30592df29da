"""
Distributions subpackage

Interfaces and default implementations for discrete distributions:

- distribution protocol (:mod:`.distribution`);
- discrete supports (:mod:`.support`);
- conversion fitters (:mod:`.fitters`) and the characteristic graph
  (:mod:`.registry`);
- sampling protocol and array-backed samples (:mod:`.sampling`);
- pluggable strategies (:mod:`.strategies`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from .distribution import Distribution
from .registry import (
    DEFAULT_COMPUTATION_KEY,
    CharacteristicRegistry,
    GraphInvariantError,
    RegistryView,
    characteristic_registry,
    reset_characteristic_registry,
)
from .sampling import ArraySample, Sample
from .strategies import (
    ComputationStrategy,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    SamplingStrategy,
)
from .support import DiscreteSupport, IntegerIntervalSupport, Support

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "ComputationMethod",
    "FittedComputationMethod",
    # distribution
    "Distribution",
    # support
    "Support",
    "DiscreteSupport",
    "IntegerIntervalSupport",
    # sampling
    "Sample",
    "ArraySample",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    # registry
    "DEFAULT_COMPUTATION_KEY",
    "CharacteristicRegistry",
    "RegistryView",
    "GraphInvariantError",
    "characteristic_registry",
    "reset_characteristic_registry",
]
