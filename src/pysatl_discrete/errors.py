"""
Error types raised by parameter validation and data aggregation.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class DomainError(ValueError):
    """
    Raised when a value lies outside the domain an operation is defined on.

    Covers invalid distribution parameters, sample outcomes outside the
    support, invalid weights and undefined estimates.
    """


class ShapeMismatchError(ValueError):
    """
    Raised when paired arrays have incompatible lengths.

    Sample/weights pairs and caller-provided output buffers are never
    truncated or broadcast.
    """


__all__ = [
    "DomainError",
    "ShapeMismatchError",
]
