"""
Parametrizations of distribution families.

A parametrization is a frozen dataclass holding one way of writing down the
parameters of a family, together with declarative constraints on them and a
conversion to the family's base parametrization.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

from pysatl_discrete.errors import DomainError
from pysatl_discrete.types import ParametrizationName

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from pysatl_discrete.families.parametric_family import ParametricFamily


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Named predicate over the values of a parametrization.

    Parameters
    ----------
    description : str
        Human-readable statement of the constraint, e.g. ``"0 <= p <= 1"``.
    check : Callable[[Any], bool]
        Predicate returning ``True`` when the constraint holds.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Base class of family parametrizations.

    Subclasses are turned into frozen dataclasses by :func:`parametrization`,
    which also attaches the owning family and the parametrization name.
    """

    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Parameter values keyed by field name, in declaration order."""
        if is_dataclass(self):
            return {f.name: getattr(self, f.name) for f in fields(self)}
        ann = getattr(self, "__annotations__", {})
        return {k: getattr(self, k) for k in ann}

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        return self._constraints

    def validate(self) -> None:
        """
        Check every declared constraint.

        Raises
        ------
        DomainError
            Naming the first violated constraint.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise DomainError(
                    f'Constraint "{constraint.description}" does not hold '
                    f"for {self.name} parameters {self.parameters}"
                )

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Equivalent parameters in the base parametrization.

        The base parametrization itself returns ``self``; other
        parametrizations override this.
        """
        return self


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Mark an instance method as a parameter constraint.

    The decorated predicate is collected by :func:`parametrization` and run
    by :meth:`Parametrization.validate`.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return bool(func(*args, **kwargs))

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _collect_constraints(cls: type[Parametrization]) -> list[ParametrizationConstraint]:
    constraints: list[ParametrizationConstraint] = []
    for attr_name, attr in cls.__dict__.items():
        if isinstance(attr, (staticmethod, classmethod)):
            if getattr(attr.__func__, "__is_constraint", False):
                raise TypeError(f"@constraint '{attr_name}' must be an instance method")
            continue
        if not isfunction(attr) or not getattr(attr, "__is_constraint", False):
            continue
        desc = getattr(attr, "__constraint_description", attr.__name__)
        constraints.append(ParametrizationConstraint(description=desc, check=attr))
    return constraints


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Register a class as a parametrization of ``family`` under ``name``.

    The class becomes a frozen slotted dataclass (unless it already is a
    dataclass) and its ``@constraint`` methods are collected.

    Raises
    ------
    ValueError
        If ``name`` is already registered in the family.
    """

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__family__ = family
        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)

        family.register_parametrization(name, cls)
        return cls

    return decorator
