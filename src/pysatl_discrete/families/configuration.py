"""
Family Configuration
====================

Registers the built-in discrete families in the global
:class:`ParametricFamilyRegister`:

- :data:`FamilyName.BINOMIAL`: number of successes in ``n`` Bernoulli trials.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_discrete.families.builtins import configure_binomial_family
from pysatl_discrete.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Register every built-in family and return the register.

    Repeated calls return the same register without reconfiguring it.
    """
    configure_binomial_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """Forget the configured register (test helper)."""
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
