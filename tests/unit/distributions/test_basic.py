from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

from mypy_extensions import KwArg

from pysatl_discrete.distributions.computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from pysatl_discrete.distributions.support import IntegerIntervalSupport
from pysatl_discrete.types import CharacteristicName
from tests.utils.mocks import StandaloneDiscreteUnivariateDistribution

if TYPE_CHECKING:
    from collections.abc import Sequence


class DistributionTestBase:
    PMF = CharacteristicName.PMF
    CDF = CharacteristicName.CDF
    PPF = CharacteristicName.PPF

    # three-point distribution on {0, 1, 2}
    MASSES = {0.0: 0.2, 1.0: 0.5, 2.0: 0.3}
    CDF_VALUES = {0.0: 0.2, 1.0: 0.7, 2.0: 1.0}

    def make_point_pmf_distribution(
        self, is_with_support: bool = True
    ) -> StandaloneDiscreteUnivariateDistribution:
        masses = self.MASSES

        def pmf(x: float, **_: Any) -> float:
            return masses.get(float(x), 0.0)

        pmf_func = cast(Callable[[float, KwArg(Any)], float], pmf)
        return StandaloneDiscreteUnivariateDistribution.from_computations(
            [AnalyticalComputation[float, float](target=self.PMF, func=pmf_func)],
            support=IntegerIntervalSupport(0, 2) if is_with_support else None,
        )

    def make_point_cdf_distribution(self) -> StandaloneDiscreteUnivariateDistribution:
        def cdf(x: float, **_: Any) -> float:
            if x < 0.0:
                return 0.0
            return self.CDF_VALUES[float(min(int(x), 2))]

        cdf_func = cast(Callable[[float, KwArg(Any)], float], cdf)
        return StandaloneDiscreteUnivariateDistribution.from_computations(
            [AnalyticalComputation[float, float](target=self.CDF, func=cdf_func)],
            support=IntegerIntervalSupport(0, 2),
        )

    def make_point_ppf_distribution(self) -> StandaloneDiscreteUnivariateDistribution:
        def ppf(q: float, **_: Any) -> float:
            if q <= 0.2:
                return 0.0
            if q <= 0.7:
                return 1.0
            return 2.0

        ppf_func = cast(Callable[[float, KwArg(Any)], float], ppf)
        return StandaloneDiscreteUnivariateDistribution.from_computations(
            [AnalyticalComputation[float, float](target=self.PPF, func=ppf_func)],
            support=IntegerIntervalSupport(0, 2),
        )

    @staticmethod
    def make_fictitious_computation_method(
        target: str, sources: Sequence[str]
    ) -> ComputationMethod[Any, Any]:
        def _fitted_const(val: Any) -> FittedComputationMethod[Any, Any]:
            def _impl(*_args: Any, **_kwargs: Any) -> Any:
                return val

            return cast(FittedComputationMethod[Any, Any], _impl)

        return ComputationMethod(
            target=target, sources=sources, fitter=lambda *_a, **_k: _fitted_const(None)
        )
