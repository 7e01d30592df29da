"""
Parametric families of discrete distributions.

Families, their parametrizations and constraints, concrete distributions,
the global family register and the configuration of the built-in families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .builtins import configure_binomial_family
from .configuration import configure_families_register, reset_families_register
from .distribution import ParametricFamilyDistribution
from .parametric_family import ParametricFamily
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import ParametricFamilyRegister

__all__ = [
    "ParametricFamilyRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "ParametricFamily",
    "ParametricFamilyDistribution",
    "constraint",
    "parametrization",
    "configure_binomial_family",
    "configure_families_register",
    "reset_families_register",
]
