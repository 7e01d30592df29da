"""
Tests of the distribution layer: supports, samples, the characteristic graph,
conversion fitters and strategies.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
