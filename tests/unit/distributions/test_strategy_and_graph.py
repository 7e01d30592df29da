from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from pysatl_discrete.distributions.computation import AnalyticalComputation
from pysatl_discrete.distributions.strategies import DefaultComputationStrategy
from pysatl_discrete.types import CharacteristicName
from tests.unit.distributions.test_basic import DistributionTestBase
from tests.utils.mocks import StandaloneDiscreteUnivariateDistribution


class TestComputationStrategy(DistributionTestBase):
    @pytest.mark.parametrize(
        "factory",
        ["make_point_pmf_distribution", "make_point_cdf_distribution", "make_point_ppf_distribution"],
        ids=["pmf_only", "cdf_only", "ppf_only"],
    )
    def test_definitive_characteristics_from_any_base(self, factory: str) -> None:
        distr = getattr(self, factory)()
        strategy = distr.computation_strategy

        pmf = strategy.query_method(self.PMF, distr)
        cdf = strategy.query_method(self.CDF, distr)
        ppf = strategy.query_method(self.PPF, distr)

        for x, mass in self.MASSES.items():
            assert pmf(x) == pytest.approx(mass, abs=1e-9)
            assert cdf(x) == pytest.approx(self.CDF_VALUES[x], abs=1e-9)
        assert pmf(0.5) == pytest.approx(0.0, abs=1e-12)
        assert cdf(-1.0) == pytest.approx(0.0, abs=1e-12)
        assert cdf(5.0) == pytest.approx(1.0, abs=1e-12)

        for q, expected in [(0.1, 0.0), (0.5, 1.0), (0.9, 2.0)]:
            assert ppf(q) == pytest.approx(expected)

    def test_derived_characteristics(self) -> None:
        distr = self.make_point_pmf_distribution()

        logpmf = distr.query_method(CharacteristicName.LOGPMF)
        logcdf = distr.query_method(CharacteristicName.LOGCDF)
        sf = distr.query_method(CharacteristicName.SF)

        assert logpmf(1.0) == pytest.approx(math.log(0.5))
        assert logpmf(7.0) == -math.inf
        assert logcdf(1.0) == pytest.approx(math.log(0.7))
        assert logcdf(-1.0) == -math.inf
        assert sf(0.0) == pytest.approx(0.8)
        assert sf(2.0) == pytest.approx(0.0, abs=1e-12)

    def test_analytical_is_returned_as_is(self) -> None:
        distr = self.make_point_pmf_distribution()
        assert distr.query_method(self.PMF) is distr.analytical_computations[self.PMF]

    def test_calculate_characteristic(self) -> None:
        distr = self.make_point_pmf_distribution()
        assert distr.calculate_characteristic(self.CDF, 1.0) == pytest.approx(0.7)

    def test_caching_of_fitted_methods(self) -> None:
        distr = self.make_point_pmf_distribution()
        strategy = DefaultComputationStrategy[float, float](enable_caching=True)

        ppf = strategy.query_method(self.PPF, distr)
        assert strategy.query_method(self.PPF, distr) is ppf
        # intermediate conversions of the path are cached too
        cdf = strategy.query_method(self.CDF, distr)
        assert strategy.query_method(self.CDF, distr) is cdf

    def test_no_caching_by_default(self) -> None:
        distr = self.make_point_pmf_distribution()
        strategy = DefaultComputationStrategy[float, float]()

        assert strategy.query_method(self.CDF, distr) is not strategy.query_method(self.CDF, distr)

    def test_no_analytical_base_raises(self) -> None:
        distr = StandaloneDiscreteUnivariateDistribution.from_computations()
        with pytest.raises(RuntimeError):
            distr.query_method(self.CDF)

    def test_unknown_characteristic_raises(self) -> None:
        distr = self.make_point_pmf_distribution()
        with pytest.raises(RuntimeError):
            distr.query_method(CharacteristicName.MEAN)

    def test_discrete_conversion_requires_support(self) -> None:
        distr = self.make_point_pmf_distribution(is_with_support=False)
        with pytest.raises(RuntimeError):
            distr.query_method(self.CDF)

    def test_options_are_forwarded_to_analytical(self) -> None:
        def pmf(x: float, scale: float = 1.0) -> float:
            return scale * self.MASSES.get(float(x), 0.0)

        distr = StandaloneDiscreteUnivariateDistribution.from_computations(
            [AnalyticalComputation[float, float](target=self.PMF, func=pmf)]
        )
        assert distr.query_method(self.PMF)(1.0, scale=2.0) == pytest.approx(1.0)
