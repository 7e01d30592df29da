"""
Built-in distribution families for PySATL Discrete.

Families defined here are registered by
:func:`pysatl_discrete.families.configuration.configure_families_register`.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_discrete.families.builtins.discrete import configure_binomial_family

__all__ = [
    "configure_binomial_family",
]
