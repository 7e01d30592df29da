"""
Concrete distributions of parametric families.

A :class:`ParametricFamilyDistribution` is an immutable pairing of a family
with validated parameter values. Characteristics, sampling and range
evaluation are delegated to the family it belongs to.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysatl_discrete.distributions.distribution import Distribution
from pysatl_discrete.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_discrete.distributions.computation import AnalyticalComputation
    from pysatl_discrete.distributions.sampling import Sample
    from pysatl_discrete.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_discrete.distributions.support import Support
    from pysatl_discrete.families.parametric_family import ParametricFamily
    from pysatl_discrete.families.parametrizations import Parametrization
    from pysatl_discrete.types import (
        DistributionType,
        FloatArray,
        GenericCharacteristicName,
    )


@dataclass(frozen=True, slots=True)
class ParametricFamilyDistribution(Distribution):
    """
    A distribution of a registered parametric family.

    Parameters
    ----------
    family_name : str
        Name under which the family is registered.
    _distribution_type : DistributionType
        Type of this distribution.
    parameters : Parametrization
        Validated parameter values, in any parametrization of the family.
    _support : Support or None
        Support of this distribution.
    """

    family_name: str
    _distribution_type: DistributionType
    parameters: Parametrization
    _support: Support | None
    _analytical_cache: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] | None = (
        field(default=None, init=False, repr=False, compare=False)
    )

    @property
    def distribution_type(self) -> DistributionType:
        return self._distribution_type

    @property
    def family(self) -> ParametricFamily:
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def parametrization_name(self) -> str:
        return self.parameters.name

    @property
    def base_parameters(self) -> Parametrization:
        """Parameters converted to the family's base parametrization."""
        return self.family.to_base(self.parameters)

    @property
    def params(self) -> tuple[Any, ...]:
        """Base parameter values as a tuple, in declaration order."""
        return tuple(self.base_parameters.parameters.values())

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """Analytical characteristics, built on first access and kept for the instance."""
        cache = self._analytical_cache
        if cache is None:
            cache = self.family._build_analytical_computations(self.parameters)
            object.__setattr__(self, "_analytical_cache", cache)
        return cache

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self.family.computation_strategy

    @property
    def support(self) -> Support | None:
        return self._support

    def pmf_range(self, lo: int, hi: int, out: FloatArray | None = None) -> FloatArray:
        """
        Mass at every integer of ``[lo, hi]``.

        Parameters
        ----------
        lo, hi : int
            Inclusive bounds; ``lo > hi`` gives an empty array.
        out : FloatArray, optional
            Buffer of length ``hi - lo + 1`` filled in place and returned.
        """
        return self.family.pmf_range(self, lo, hi, out)

    def sample(self, n: int, **options: Any) -> Sample:
        """
        Draw ``n`` independent values.

        Returns
        -------
        Sample
            A sample of shape ``(n, 1)``.
        """
        return self.sampling_strategy.sample(n, distr=self, **options)

    def draw(self, **options: Any) -> Any:
        """
        Draw a single value.

        Uses the strategy's own ``draw`` when it has one, otherwise the only
        point of a sample of size one.
        """
        strategy = self.sampling_strategy
        draw = getattr(strategy, "draw", None)
        if draw is not None:
            return draw(self, **options)
        return strategy.sample(1, distr=self, **options).array[0, 0]
