"""
Characteristic callables.

A characteristic of a distribution is either known in closed form
(:class:`AnalyticalComputation`, e.g. the binomial ``pmf`` bound to ``(n, p)``)
or obtained from another characteristic by a conversion edge of the
characteristic graph. An edge (:class:`ComputationMethod`) is turned into a
callable for one distribution by fitting it, which yields a
:class:`FittedComputationMethod`.

All of them are called with a single point and optional keyword options.
Whole ranges of masses are produced by the family's ``pmf_range`` instead.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mypy_extensions import KwArg

from pysatl_discrete.types import GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_discrete.distributions.distribution import Distribution


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """
    Closed-form characteristic of one distribution.

    Parameters
    ----------
    target : str
        Name of the characteristic, e.g. ``"pmf"`` or ``"mean"``.
    func : Callable[[In, KwArg(Any)], Out]
        Family function with the distribution parameters already bound.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """
    Conversion bound to a distribution, ready to evaluate.

    ``sources`` records which characteristics the value is derived from.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class ComputationMethod[In, Out]:
    """
    Edge ``source -> target`` of the characteristic graph.

    Parameters
    ----------
    target : str
        Characteristic produced by the conversion.
    sources : Sequence[str]
        Characteristic consumed; the graph accepts exactly one.
    fitter : Callable
        ``fitter(distribution, **options)`` building the bound conversion.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    fitter: Callable[["Distribution", KwArg(Any)], FittedComputationMethod[In, Out]]

    def fit(self, distribution: "Distribution", **options: Any) -> FittedComputationMethod[In, Out]:
        """Bind the conversion to ``distribution``."""
        return self.fitter(distribution, **options)
