"""
Distribution Interface
======================

The :class:`Distribution` protocol is the interface strategies, fitters and
families work against. Default method bodies resolve characteristics through
the distribution's computation strategy.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pysatl_discrete.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_discrete.distributions.computation import AnalyticalComputation
    from pysatl_discrete.distributions.sampling import Sample
    from pysatl_discrete.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from pysatl_discrete.distributions.support import Support
    from pysatl_discrete.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies and fitters."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def sampling_strategy(self) -> SamplingStrategy: ...
    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def support(self) -> Support | None: ...

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name, **options)(value)

    def sample(self, n: int, **options: Any) -> Sample:
        return self.sampling_strategy.sample(n, distr=self, **options)

    def log_likelihood(self, sample: Sample) -> float:
        """
        Sum of ``logpmf`` over the points of a univariate sample.

        Returns ``-inf`` as soon as a point lies outside the support.
        """
        logpmf = self.query_method(CharacteristicName.LOGPMF)
        support = self.support
        total = 0.0
        for row in sample.array:
            x = float(row[0])
            if support is not None and not support.contains(x):
                return -math.inf
            total += float(logpmf(x))
        return total
