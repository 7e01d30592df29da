from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np
import pytest

from pysatl_discrete.errors import ShapeMismatchError
from pysatl_discrete.families import ParametricFamilyRegister
from tests.unit.families.test_basic import TestBaseFamily


class TestFamilyHooks(TestBaseFamily):
    def test_pmf_range_falls_back_to_pointwise_pmf(self) -> None:
        fam = self.make_uniform_counts_family()
        ParametricFamilyRegister.register(fam)

        result = fam(k=3).pmf_range(-1, 5)
        np.testing.assert_allclose(result, [0.0, 0.25, 0.25, 0.25, 0.25, 0.0, 0.0])

        out = np.empty(2)
        assert fam(k=3).pmf_range(2, 3, out=out) is out
        with pytest.raises(ShapeMismatchError):
            fam(k=3).pmf_range(0, 3, out=np.empty(3))

    def test_pmf_range_fallback_needs_integer_interval(self) -> None:
        fam = self.make_default_family()
        ParametricFamilyRegister.register(fam)

        with pytest.raises(RuntimeError):
            fam.distribution(value=1.0).pmf_range(0, 3)

    def test_pmf_range_hook_receives_base_parameters(self) -> None:
        seen: list[Any] = []

        def pmf_range(params: Any, lo: int, hi: int, out: Any) -> Any:
            seen.append((type(params).__name__, params.value, lo, hi, out))
            return np.zeros(hi - lo + 1)

        fam = self.make_default_family(pmf_range=pmf_range)
        ParametricFamilyRegister.register(fam)

        result = fam.distribution("alt", value=2.0).pmf_range(1, 4)
        assert result.shape == (4,)
        assert seen == [("Base", 2.0, 1, 4, None)]

    def test_fitting_without_hooks(self) -> None:
        fam = self.make_default_family()
        with pytest.raises(RuntimeError):
            fam.suffstats([1, 2, 3])
        with pytest.raises(RuntimeError):
            fam.fit_mle(object())
        with pytest.raises(RuntimeError):
            fam.fit([1, 2, 3])

    def test_fit_chains_suffstats_and_mle(self) -> None:
        def suffstats(data: Any, weights: Any) -> float:
            w = np.ones(len(data)) if weights is None else np.asarray(weights, dtype=float)
            return float(np.dot(data, w) / w.sum())

        fam = self.make_default_family(suffstats=suffstats, mle=lambda stats: {"value": stats})
        ParametricFamilyRegister.register(fam)

        assert fam.suffstats([1.0, 3.0]) == pytest.approx(2.0)
        fitted = fam.fit([1.0, 3.0], weights=[3.0, 1.0])
        assert fitted.parametrization_name == "base"
        assert fitted.parameters.value == pytest.approx(1.5)  # type: ignore[attr-defined]
