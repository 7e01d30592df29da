"""
Parametric family definitions.

A :class:`ParametricFamily` owns the parametrizations of a family, its
analytical characteristics, the strategies shared by its distributions and
the family-wide capability hooks used for range evaluation and fitting.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from functools import partial
from typing import TYPE_CHECKING, dataclass_transform

from pysatl_discrete.distributions.computation import AnalyticalComputation
from pysatl_discrete.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from pysatl_discrete.distributions.support import IntegerIntervalSupport
from pysatl_discrete.families.distribution import ParametricFamilyDistribution
from pysatl_discrete.stats.recursive import pmf_range_elementwise
from pysatl_discrete.types import CharacteristicName, DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    import numpy.typing as npt

    from pysatl_discrete.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_discrete.distributions.support import Support
    from pysatl_discrete.families.parametrizations import Parametrization
    from pysatl_discrete.stats.suffstats import SufficientStats
    from pysatl_discrete.types import (
        FloatArray,
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[..., Any]
    type SupportArg = Callable[[Parametrization], Support | None] | None
    type SupportResolver = Callable[[Parametrization], Support | None]
    type PmfRangeHook = Callable[[Parametrization, int, int, FloatArray | None], FloatArray]
    type SuffstatsHook = Callable[[Any, npt.ArrayLike | None], SufficientStats]
    type MleHook = Callable[[SufficientStats], Mapping[str, Any]]

logger = logging.getLogger(__name__)


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Parameters
    ----------
    name : str
        Name of the family.
    distr_type : DistributionType or Callable[[Parametrization], DistributionType]
        Distribution type, or a function inferring it from base parameters.
    distr_parametrizations : list[ParametrizationName]
        Parametrization names; the first one is the base parametrization.
    distr_characteristics : dict
        Characteristic name to a function ``f(parameters, x, **options)`` or
        to a mapping of such functions by parametrization name. A bare
        function is defined for the base parametrization.
    sampling_strategy : SamplingStrategy, optional
        Strategy drawing samples; inverse transform through ``ppf`` by default.
    computation_strategy : ComputationStrategy, optional
        Strategy resolving characteristics; :class:`DefaultComputationStrategy`
        by default.
    support_by_parametrization : Callable, optional
        Support of the distribution for given parameters.
    pmf_range : Callable, optional
        ``f(base_parameters, lo, hi, out)`` filling the mass over an integer
        range. Families without it evaluate their ``pmf`` element-wise.
    suffstats : Callable, optional
        ``f(data, weights)`` aggregating a sample into sufficient statistics.
    mle : Callable, optional
        ``f(stats)`` returning the base parameter values maximizing the
        likelihood.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType | Callable[[Parametrization], DistributionType],
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportArg = None,
        *,
        pmf_range: PmfRangeHook | None = None,
        suffstats: SuffstatsHook | None = None,
        mle: MleHook | None = None,
    ):
        self._name = name
        self._distr_type: Callable[[Parametrization], DistributionType] = (
            (lambda params: distr_type) if isinstance(distr_type, DistributionType) else distr_type
        )

        self.computation_strategy = (
            DefaultComputationStrategy() if computation_strategy is None else computation_strategy
        )
        self.sampling_strategy = (
            DefaultSamplingUnivariateStrategy() if sampling_strategy is None else sampling_strategy
        )

        self._support_resolver: SupportResolver
        if support_by_parametrization is None:
            self._support_resolver = lambda _params: None
        else:
            self._support_resolver = support_by_parametrization

        self._pmf_range = pmf_range
        self._suffstats = suffstats
        self._mle = mle

        self.parametrization_names: list[ParametrizationName] = distr_parametrizations
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        def _process_char_val(
            value: dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ) -> dict[ParametrizationName, ParametrizedFunction]:
            return value if isinstance(value, dict) else {self.base_parametrization_name: value}

        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {key: _process_char_val(val) for key, val in distr_characteristics.items()}

        # characteristic -> parametrization whose form is used, base as fallback
        self._analytical_plan: dict[
            ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]
        ] = {}
        base_name = self.base_parametrization_name
        for pname in self.parametrization_names:
            plan_for_p: dict[GenericCharacteristicName, ParametrizationName] = {}
            for characteristic, forms in self.distr_characteristics.items():
                if pname in forms:
                    plan_for_p[characteristic] = pname
                elif base_name in forms:
                    plan_for_p[characteristic] = base_name
            self._analytical_plan[pname] = plan_for_p

    @property
    def name(self) -> str:
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Base parametrization class.

        Raises
        ------
        ValueError
            If the base parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    @property
    def support_resolver(self) -> SupportResolver:
        return self._support_resolver

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class under ``name``.

        Raises
        ------
        ValueError
            If ``name`` is already registered.
        """
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """Convert parameters of any parametrization to the base one."""
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        plan = self._analytical_plan.get(parameters.name, {})
        result: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}
        base_params: Parametrization | None = None

        for characteristic, provider_name in plan.items():
            if provider_name == parameters.name:
                params_obj = parameters
            else:
                if base_params is None:
                    base_params = self.to_base(parameters)
                params_obj = base_params

            func_factory = self.distr_characteristics[characteristic][provider_name]
            result[characteristic] = AnalyticalComputation(
                target=characteristic,
                func=partial(func_factory, params_obj),
            )

        return result

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution of this family.

        Parameters
        ----------
        parametrization_name : str, optional
            Parametrization of ``parameters_values``; the base one by default.
        **parameters_values
            Parameter values. Fields with defaults may be omitted.

        Raises
        ------
        KeyError
            If the parametrization is not registered.
        DomainError
            If the parameters violate a constraint.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(**parameters_values)
        parameters.validate()
        base_parameters = self.to_base(parameters)
        distribution_type = self._distr_type(base_parameters)
        return ParametricFamilyDistribution(
            self.name, distribution_type, parameters, self.support_resolver(base_parameters)
        )

    def pmf_range(
        self,
        distribution: ParametricFamilyDistribution,
        lo: int,
        hi: int,
        out: FloatArray | None = None,
    ) -> FloatArray:
        """
        Mass of ``distribution`` at every integer of ``[lo, hi]``.

        Uses the family's recurrence when one is configured and falls back to
        one ``pmf`` evaluation per in-support point otherwise.

        Raises
        ------
        RuntimeError
            If the fallback is needed but the support is not an integer interval.
        """
        if self._pmf_range is not None:
            return self._pmf_range(distribution.base_parameters, lo, hi, out)

        support = distribution.support
        if not isinstance(support, IntegerIntervalSupport):
            raise RuntimeError(
                f"Family '{self.name}' has no range evaluator and no integer interval support."
            )
        pmf = distribution.query_method(CharacteristicName.PMF)
        return pmf_range_elementwise(pmf, support, lo, hi, out)

    def suffstats(
        self, data: Any, weights: npt.ArrayLike | None = None
    ) -> SufficientStats:
        """
        Sufficient statistics of ``data``, optionally weighted.

        Raises
        ------
        RuntimeError
            If the family does not aggregate sufficient statistics.
        """
        if self._suffstats is None:
            raise RuntimeError(f"Family '{self.name}' does not provide sufficient statistics.")
        return self._suffstats(data, weights)

    def fit_mle(self, stats: SufficientStats) -> ParametricFamilyDistribution:
        """
        Maximum-likelihood distribution for precomputed sufficient statistics.

        Raises
        ------
        RuntimeError
            If the family has no closed-form MLE.
        """
        if self._mle is None:
            raise RuntimeError(f"Family '{self.name}' does not provide a closed-form MLE.")
        values = self._mle(stats)
        logger.debug("Fitted %s parameters: %s", self.name, dict(values))
        return self.distribution(**values)

    def fit(self, data: Any, weights: npt.ArrayLike | None = None) -> ParametricFamilyDistribution:
        """Aggregate ``data`` and return the maximum-likelihood distribution."""
        return self.fit_mle(self.suffstats(data, weights))

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Class decorator registering a parametrization of this family.

        Equivalent to ``parametrization(family=self, name=name)``.
        """
        from pysatl_discrete.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)

    __call__ = distribution
