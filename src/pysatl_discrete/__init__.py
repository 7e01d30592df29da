"""
PySATL Discrete
===============

Discrete parametric families for PySATL: the binomial family with a
recursive mass evaluator, moment and transform characteristics, sufficient
statistics and maximum-likelihood fitting, built on a small framework of
families, parametrizations and characteristic computation strategies.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from importlib.metadata import version

from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import DomainError, ShapeMismatchError
from .families import *
from .families import __all__ as _family_all
from .stats import *
from .stats import __all__ as _stats_all
from .types import *
from .types import __all__ as _types_all

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = version("pysatl-discrete")
__all__ = [
    "__version__",
    "DomainError",
    "ShapeMismatchError",
    *_distr_all,
    *_family_all,
    *_stats_all,
    *_types_all,
]

del _distr_all
del _family_all
del _stats_all
del _types_all
