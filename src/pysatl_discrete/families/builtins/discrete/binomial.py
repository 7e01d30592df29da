"""
Binomial distribution family implementation.

Contains the Binomial family with the trials/probability and mean/trials
parametrizations, the recursive range evaluator and the closed-form MLE.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numbers
from typing import TYPE_CHECKING, cast

from pysatl_discrete.distributions.sampling import ArraySample
from pysatl_discrete.distributions.support import IntegerIntervalSupport
from pysatl_discrete.errors import DomainError
from pysatl_discrete.families.parametric_family import ParametricFamily
from pysatl_discrete.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_discrete.families.registry import ParametricFamilyRegister
from pysatl_discrete.stats import moments, transforms
from pysatl_discrete.stats.provider import default_binomial_provider
from pysatl_discrete.stats.recursive import binomial_pmf_range
from pysatl_discrete.stats.sampler import ProviderSamplingStrategy
from pysatl_discrete.stats.suffstats import (
    BinomialStats,
    SufficientStats,
    binomial_mle,
    binomial_suffstats,
)
from pysatl_discrete.types import (
    CharacteristicName,
    FamilyName,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    from pysatl_discrete.stats.provider import BinomialFunctionProvider
    from pysatl_discrete.types import ComplexArray, FloatArray


def _is_count(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value >= 0


def configure_binomial_family(provider: BinomialFunctionProvider | None = None) -> None:
    """
    Configure and register the Binomial distribution family.

    Parameters
    ----------
    provider : BinomialFunctionProvider, optional
        Special-function provider behind ``pmf``, ``cdf``, ``ppf`` and the
        variates; the shared SciPy provider by default. Ignored when the
        family is already registered.
    """

    if ParametricFamilyRegister.contains(FamilyName.BINOMIAL):
        return

    fp = default_binomial_provider() if provider is None else provider

    BINOMIAL_DOC = """
    Binomial distribution.

    Number of successes in ``n`` independent Bernoulli trials with success
    probability ``p``. Supported on the integers ``0, 1, ..., n``.

    Probability mass function:
        P(X = k) = C(n, k) * p^k * (1 - p)^(n - k)

    Defaults to ``n = 1, p = 0.5``; ``p`` defaults to ``0.5`` when only ``n``
    is given.
    """

    def _np(parameters: Parametrization) -> tuple[int, float]:
        parameters = cast(_TrialsProb, parameters)
        return int(parameters.n), float(parameters.p)

    def pmf(parameters: Parametrization, x: npt.ArrayLike) -> float | FloatArray:
        """Probability mass at ``x``; zero outside ``[0, n]`` and at non-integers."""
        n, p = _np(parameters)
        return fp.pmf(x, n, p)

    def logpmf(parameters: Parametrization, x: npt.ArrayLike) -> float | FloatArray:
        n, p = _np(parameters)
        return fp.logpmf(x, n, p)

    def cdf(parameters: Parametrization, x: npt.ArrayLike) -> float | FloatArray:
        n, p = _np(parameters)
        return fp.cdf(x, n, p)

    def logcdf(parameters: Parametrization, x: npt.ArrayLike) -> float | FloatArray:
        n, p = _np(parameters)
        return fp.logcdf(x, n, p)

    def sf(parameters: Parametrization, x: npt.ArrayLike) -> float | FloatArray:
        n, p = _np(parameters)
        return fp.sf(x, n, p)

    def ppf(parameters: Parametrization, q: npt.ArrayLike) -> float | FloatArray:
        """
        Smallest outcome ``k`` with ``cdf(k) >= q``.

        Raises
        ------
        DomainError
            If a level is outside [0, 1].
        """
        n, p = _np(parameters)
        return fp.ppf(q, n, p)

    def mgf(parameters: Parametrization, t: npt.ArrayLike) -> float | FloatArray:
        n, p = _np(parameters)
        return transforms.mgf(n, p, t)

    def char_func(parameters: Parametrization, t: npt.ArrayLike) -> complex | ComplexArray:
        n, p = _np(parameters)
        return transforms.cf(n, p, t)

    def mean_func(parameters: Parametrization, _: Any = None) -> float:
        return moments.mean(*_np(parameters))

    def var_func(parameters: Parametrization, _: Any = None) -> float:
        return moments.variance(*_np(parameters))

    def mode_func(parameters: Parametrization, _: Any = None) -> int:
        return moments.mode(*_np(parameters))

    def modes_func(parameters: Parametrization, _: Any = None) -> list[int]:
        return moments.modes(*_np(parameters))

    def median_func(parameters: Parametrization, _: Any = None) -> int:
        return moments.median(*_np(parameters))

    def skew_func(parameters: Parametrization, _: Any = None) -> float:
        return moments.skewness(*_np(parameters))

    def kurt_func(parameters: Parametrization, _: Any = None, excess: bool = True) -> float:
        """Excess kurtosis, or raw kurtosis with ``excess=False``."""
        value = moments.kurtosis(*_np(parameters))
        return value if excess else value + 3.0

    def entropy_func(parameters: Parametrization, _: Any = None, approx: bool = False) -> float:
        """Exact entropy in nats, or its Gaussian approximation with ``approx=True``."""
        n, p = _np(parameters)
        return moments.entropy(n, p, approx=approx)

    def _support(parameters: Parametrization) -> IntegerIntervalSupport:
        n, _ = _np(parameters)
        return IntegerIntervalSupport(0, n)

    def _pmf_range(
        parameters: Parametrization, lo: int, hi: int, out: FloatArray | None
    ) -> FloatArray:
        n, p = _np(parameters)
        return binomial_pmf_range(
            n, p, lo, hi, seed_pmf=lambda k: float(fp.pmf(k, n, p)), out=out
        )

    def _suffstats(data: Any, weights: npt.ArrayLike | None) -> BinomialStats:
        n, outcomes = data
        if isinstance(outcomes, ArraySample):
            outcomes = outcomes.array
        if not _is_count(n):
            raise DomainError(f"Trial count must be a non-negative integer, got {n!r}.")
        return binomial_suffstats(int(n), outcomes, weights)

    def _mle(stats: SufficientStats) -> dict[str, Any]:
        if not isinstance(stats, BinomialStats):
            raise TypeError(f"Expected BinomialStats, got {type(stats).__name__}.")
        n, p = binomial_mle(stats)
        return {"n": n, "p": p}

    Binomial = ParametricFamily(
        name=FamilyName.BINOMIAL,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["trialsProb", "meanTrials"],
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOGPMF: logpmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.LOGCDF: logcdf,
            CharacteristicName.SF: sf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MGF: mgf,
            CharacteristicName.CF: char_func,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.MODES: modes_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.ENTROPY: entropy_func,
        },
        sampling_strategy=ProviderSamplingStrategy(fp),
        support_by_parametrization=_support,
        pmf_range=_pmf_range,
        suffstats=_suffstats,
        mle=_mle,
    )
    Binomial.__doc__ = BINOMIAL_DOC

    @parametrization(family=Binomial, name="trialsProb")
    class _TrialsProb(Parametrization):
        """
        Trials/probability parametrization of the binomial distribution.

        Parameters
        ----------
        n : int
            Number of trials, a non-negative integer.
        p : float
            Success probability in [0, 1].
        """

        n: int = 1
        p: float = 0.5

        @constraint(description="n is a non-negative integer")
        def check_n_count(self) -> bool:
            return _is_count(self.n)

        @constraint(description="0 <= p <= 1")
        def check_p_probability(self) -> bool:
            return isinstance(self.p, numbers.Real) and 0.0 <= self.p <= 1.0

        @property
        def trials(self) -> int:
            return self.n

        @property
        def success_prob(self) -> float:
            return self.p

        @property
        def fail_prob(self) -> float:
            return 1.0 - self.p

        @property
        def params(self) -> tuple[int, float]:
            return self.n, self.p

    @parametrization(family=Binomial, name="meanTrials")
    class _MeanTrials(Parametrization):
        """
        Mean/trials parametrization, ``p = mean / n``.

        Parameters
        ----------
        n : int
            Number of trials, a positive integer.
        mean : float
            Expected number of successes in [0, n].
        """

        n: int
        mean: float

        @constraint(description="n is a positive integer")
        def check_n_positive(self) -> bool:
            return _is_count(self.n) and self.n > 0

        @constraint(description="0 <= mean <= n")
        def check_mean_in_range(self) -> bool:
            return isinstance(self.mean, numbers.Real) and 0.0 <= self.mean <= self.n

        def transform_to_base_parametrization(self) -> Parametrization:
            return _TrialsProb(n=self.n, p=self.mean / self.n)  # type: ignore[call-arg]

    ParametricFamilyRegister.register(Binomial)
