"""
Built-in discrete distribution families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_discrete.families.builtins.discrete.binomial import configure_binomial_family

__all__ = [
    "configure_binomial_family",
]
