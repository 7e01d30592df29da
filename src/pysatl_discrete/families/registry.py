"""
Process-wide register of parametric families.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import ClassVar

    from pysatl_discrete.families.parametric_family import ParametricFamily

logger = logging.getLogger(__name__)


class ParametricFamilyRegister:
    """
    Singleton mapping family names to :class:`ParametricFamily` objects.

    Distributions keep only the name of their family and resolve it here.
    """

    _instance: ClassVar[ParametricFamilyRegister | None] = None
    _registered_families: dict[str, ParametricFamily]

    def __new__(cls) -> ParametricFamilyRegister:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered_families = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> ParametricFamily:
        """
        Family registered under ``name``.

        Raises
        ------
        ValueError
            If no family with that name is registered.
        """
        self = cls()
        if name not in self._registered_families:
            raise ValueError(f"No family {name} found in register")
        return self._registered_families[name]

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._registered_families

    @classmethod
    def register(cls, family: ParametricFamily) -> None:
        """
        Add ``family`` under its name.

        Raises
        ------
        ValueError
            If a family with the same name is already registered.
        """
        self = cls()
        if family.name in self._registered_families:
            raise ValueError(f"Family {family.name} already found in register")
        self._registered_families[family.name] = family
        logger.debug("Registered family '%s'", family.name)

    @classmethod
    def list_registered_families(cls) -> list[str]:
        return list(cls()._registered_families)

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None
