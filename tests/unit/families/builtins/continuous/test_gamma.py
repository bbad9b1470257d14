"""
Tests for Gamma, Chi-Squared and Erlang Distribution Families

This module tests the gamma family and its two integer-parametrized views:
parameterizations, characteristics against scipy, and sampling.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.special import digamma, polygamma
from scipy.stats import chi2, erlang, gamma

from pysatl_rand.errors import ParameterClampWarning
from pysatl_rand.families.configuration import configure_families_register
from pysatl_rand.generators.gamma import GammaRegime
from pysatl_rand.types import ContinuousSupportShape1D, FamilyName

from .base import BaseDistributionTest


class TestGammaFamily(BaseDistributionTest):
    """Test suite for Gamma distribution family."""

    QUANTILE_PRECISION = 1e-8

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.gamma_family = registry.get(FamilyName.GAMMA)
        self.gamma_dist_example = self.gamma_family(shape=2.5, rate=2.0)

    def test_family_properties(self):
        assert self.gamma_family.name == FamilyName.GAMMA
        assert set(self.gamma_family.parametrization_names) == {"shapeRate", "shapeScale"}
        assert self.gamma_family.base_parametrization_name == "shapeRate"

    def test_shape_scale_parametrization_creation(self):
        dist = self.gamma_family(shape=2.5, scale=0.5, parametrization_name="shapeScale")

        assert dist.shape == 2.5
        assert dist.rate == 2.0
        assert dist.scale == 0.5
        assert repr(dist) == "Gamma(shape=2.5, rate=2.0)"

    def test_derived_parameters(self):
        dist = self.gamma_dist_example

        assert abs(dist.log_shape - math.log(2.5)) < self.CALCULATION_PRECISION
        assert abs(dist.log_rate - math.log(2.0)) < self.CALCULATION_PRECISION
        assert abs(dist.lgamma_shape - math.lgamma(2.5)) < self.CALCULATION_PRECISION

    def test_nearly_integral_shape_is_snapped(self):
        dist = self.gamma_family(shape=3.0000001, rate=1.0)
        assert dist.shape == 3.0
        assert dist.sampler.regime is GammaRegime.INTEGER_SHAPE

    @pytest.mark.parametrize(
        "values, expected",
        [
            ({"shape": -1.0, "rate": 2.0}, (1.0, 2.0)),
            ({"shape": 2.0, "rate": 0.0}, (2.0, 1.0)),
            ({"shape": math.nan, "rate": math.inf}, (1.0, 1.0)),
        ],
    )
    def test_parametrization_constraints(self, values, expected):
        with pytest.warns(ParameterClampWarning):
            dist = self.gamma_family(**values)
        assert (dist.shape, dist.rate) == expected

    def test_scale_constraint(self):
        with pytest.warns(ParameterClampWarning, match="scale"):
            dist = self.gamma_family(shape=2.0, scale=-1.0, parametrization_name="shapeScale")
        assert dist.rate == 1.0

    @pytest.mark.parametrize(
        "char_func_getter, expected",
        [
            (lambda distr: distr.mean(), 1.25),
            (lambda distr: distr.variance(), 0.625),
            (lambda distr: distr.skewness(), 2.0 / math.sqrt(2.5)),
            (lambda distr: distr.excess_kurtosis(), 2.4),
            (lambda distr: distr.mode(), 0.75),
            (lambda distr: distr.mean_of_log(), digamma(2.5) - math.log(2.0)),
            (lambda distr: distr.variance_of_log(), polygamma(1, 2.5)),
        ],
    )
    def test_moments(self, char_func_getter, expected):
        actual = char_func_getter(self.gamma_dist_example)
        assert abs(actual - expected) < 1e-9

    def test_mode_of_small_shape(self):
        assert self.gamma_family(shape=0.5, rate=1.0).mode() == 0.0

    @pytest.mark.parametrize(
        "method_name, test_data",
        [
            ("pdf", [-1.0, 0.1, 0.5, 1.0, 2.0, 5.0]),
            ("log_pdf", [0.1, 0.5, 1.0, 2.0, 5.0]),
            ("cdf", [-1.0, 0.0, 0.1, 0.5, 1.0, 2.0, 5.0]),
            ("sf", [-1.0, 0.0, 0.1, 0.5, 1.0, 2.0, 5.0]),
        ],
    )
    def test_array_input_for_characteristics(self, method_name, test_data):
        method = getattr(self.gamma_dist_example, method_name)
        scipy_func = {
            "pdf": gamma.pdf,
            "log_pdf": gamma.logpdf,
            "cdf": gamma.cdf,
            "sf": gamma.sf,
        }[method_name]

        input_array = np.array(test_data)
        result_array = method(input_array)

        assert result_array.shape == input_array.shape
        expected_array = scipy_func(input_array, 2.5, scale=0.5)
        self.assert_arrays_almost_equal(result_array, expected_array)

    @pytest.mark.parametrize("shape", [0.7, 1.0, 2.5, 9.0])
    def test_quantile(self, shape):
        dist = self.gamma_family(shape=shape, rate=2.0)
        p = np.array([0.05, 0.25, 0.5, 0.75, 0.95])

        expected = gamma.ppf(p, shape, scale=0.5)
        self.assert_arrays_almost_equal(dist.quantile(p), expected, self.QUANTILE_PRECISION)

    @pytest.mark.parametrize(
        "shape, p",
        [
            (0.05, 0.1),
            (0.05, 0.2),
            (0.05, 0.3),
            (0.1, 0.1),
            (0.1, 0.2),
            (0.1, 0.3),
            (0.3, 0.001),
        ],
    )
    def test_quantile_of_small_shape(self, shape, p):
        dist = self.gamma_family(shape=shape, rate=1.0)
        result = dist.quantile(p)

        assert result == pytest.approx(gamma.ppf(p, shape), rel=1e-6)
        assert dist.cdf(result) == pytest.approx(p, abs=1e-6)

    @pytest.mark.parametrize("shape", [0.05, 0.3, 1.0, 2.5, 40.0, 1e6])
    def test_quantile_initial_guess_is_finite(self, shape):
        dist = self.gamma_family(shape=shape, rate=3.0)
        for p in (1e-6, 0.1, 0.5, 0.9, 1 - 1e-6):
            guess = dist._quantile_initial_guess(p)
            assert math.isfinite(guess)
            assert guess > 0.0

    @pytest.mark.parametrize("shape", [1e6, 1e8, 1e10])
    def test_cdf_of_large_shape(self, shape):
        dist = self.gamma_family(shape=shape, rate=1.0)
        x = np.array([shape - math.sqrt(shape), shape, shape + math.sqrt(shape)])

        np.testing.assert_allclose(dist.cdf(x), gamma.cdf(x, shape), rtol=0, atol=1e-9)

    def test_quantile_boundaries(self):
        dist = self.gamma_dist_example
        assert dist.quantile(0.0) == 0.0
        assert dist.quantile(1.0) == math.inf
        assert math.isnan(dist.quantile(2.0))

    @pytest.mark.parametrize(
        "shape, expected_pdf, expected_log_pdf",
        [
            (0.5, math.inf, math.inf),
            (1.0, 2.0, math.log(2.0)),
            (2.5, 0.0, -math.inf),
        ],
    )
    def test_density_at_zero(self, shape, expected_pdf, expected_log_pdf):
        dist = self.gamma_family(shape=shape, rate=2.0)
        assert dist.pdf(0.0) == expected_pdf
        assert dist.log_pdf(0.0) == expected_log_pdf

    def test_characteristic_function(self):
        t_array = np.array([-3.0, 0.0, 1.0, 4.0])
        cf_array = self.gamma_dist_example.cf(t_array)
        expected = (1.0 - 1j * t_array / 2.0) ** -2.5

        self.assert_arrays_almost_equal(cf_array.real, expected.real)
        self.assert_arrays_almost_equal(cf_array.imag, expected.imag)

    def test_gamma_support(self):
        support = self.gamma_dist_example.support
        assert support.bounds == (0.0, math.inf)
        assert support.shape == ContinuousSupportShape1D.RAY_RIGHT

    @pytest.mark.parametrize("shape", [0.3, 1.5, 4.0, 12.0])
    def test_sampling(self, shape):
        dist = self.gamma_family(shape=shape, rate=2.0)
        sample = dist.sample(1000).array
        assert np.all(sample > 0.0)
        self.assert_sample_mean(dist)

    def test_set_parameters_replaces_sampler(self):
        dist = self.gamma_family(shape=0.5, rate=1.0)
        assert dist.sampler.regime is GammaRegime.HALF_INTEGER_SHAPE

        dist.set_parameters(7.5, 4.0)
        assert dist.sampler.regime is GammaRegime.LARGE_SHAPE
        assert dist.sampler.scale == 0.25
        assert dist.parameters.shape == 7.5

    def test_rejected_parameters_keep_sampler_consistent(self):
        dist = self.gamma_family(shape=2.5, rate=1.0)
        with pytest.warns(ParameterClampWarning):
            dist.set_parameters(-2.0, 1.0)
        assert dist.shape == 1.0
        assert dist.sampler.shape == 1.0


class TestChiSquaredFamily(BaseDistributionTest):
    """Test suite for Chi-squared distribution family."""

    def setup_method(self):
        registry = configure_families_register()
        self.chi_squared_family = registry.get(FamilyName.CHI_SQUARED)
        self.chi_squared_dist_example = self.chi_squared_family(degree=5)

    def test_family_properties(self):
        assert self.chi_squared_family.name == FamilyName.CHI_SQUARED
        assert self.chi_squared_family.parametrization_names == ["degree"]

    def test_equivalent_gamma(self):
        dist = self.chi_squared_dist_example
        core = dist.parameters.to_gamma()

        assert (core.shape, core.rate) == (2.5, 0.5)
        assert dist.sampler.regime is GammaRegime.HALF_INTEGER_SHAPE

    @pytest.mark.parametrize(
        "degree, expected",
        [(0, 1), (-3, 1), (2.5, 2), (math.nan, 1)],
    )
    def test_degree_constraint(self, degree, expected):
        with pytest.warns(ParameterClampWarning, match="degree"):
            dist = self.chi_squared_family(degree=degree)
        assert dist.degree == expected
        assert isinstance(dist.degree, int)

    @pytest.mark.parametrize(
        "char_func_getter, expected",
        [
            (lambda distr: distr.mean(), 5.0),
            (lambda distr: distr.variance(), 10.0),
            (lambda distr: distr.skewness(), math.sqrt(8.0 / 5.0)),
            (lambda distr: distr.excess_kurtosis(), 12.0 / 5.0),
            (lambda distr: distr.mode(), 3.0),
            (lambda distr: distr.mean_of_log(), digamma(2.5) + math.log(2.0)),
            (lambda distr: distr.variance_of_log(), polygamma(1, 2.5)),
        ],
    )
    def test_moments(self, char_func_getter, expected):
        actual = char_func_getter(self.chi_squared_dist_example)
        assert abs(actual - expected) < 1e-9

    @pytest.mark.parametrize(
        "method_name, scipy_func",
        [("pdf", chi2.pdf), ("cdf", chi2.cdf), ("sf", chi2.sf)],
    )
    def test_against_scipy(self, method_name, scipy_func):
        x = np.array([0.5, 1.0, 3.0, 5.0, 11.0])
        result = getattr(self.chi_squared_dist_example, method_name)(x)
        self.assert_arrays_almost_equal(result, scipy_func(x, 5))

    def test_quantile(self):
        p = np.array([0.05, 0.5, 0.95])
        result = self.chi_squared_dist_example.quantile(p)
        self.assert_arrays_almost_equal(result, chi2.ppf(p, 5), 1e-8)

    def test_set_degree(self):
        dist = self.chi_squared_dist_example
        dist.set_degree(2)

        assert dist.degree == 2
        assert dist.mean() == 2.0
        assert dist.sampler.regime is GammaRegime.INTEGER_SHAPE

    def test_sampling(self):
        self.assert_sample_mean(self.chi_squared_dist_example)


class TestErlangFamily(BaseDistributionTest):
    """Test suite for Erlang distribution family."""

    def setup_method(self):
        registry = configure_families_register()
        self.erlang_family = registry.get(FamilyName.ERLANG)
        self.erlang_dist_example = self.erlang_family(shape=3, rate=1.5)

    def test_family_properties(self):
        assert self.erlang_family.name == FamilyName.ERLANG
        assert self.erlang_family.parametrization_names == ["shapeRate"]

    def test_parameters(self):
        dist = self.erlang_dist_example

        assert (dist.shape, dist.rate) == (3, 1.5)
        assert abs(dist.scale - 1 / 1.5) < self.CALCULATION_PRECISION
        assert repr(dist) == "Erlang(shape=3, rate=1.5)"
        assert dist.sampler.regime is GammaRegime.INTEGER_SHAPE

    @pytest.mark.parametrize(
        "values, expected",
        [
            ({"shape": 2.7, "rate": 1.0}, (2, 1.0)),
            ({"shape": 0, "rate": 1.0}, (1, 1.0)),
            ({"shape": 4, "rate": -1.0}, (4, 1.0)),
        ],
    )
    def test_parametrization_constraints(self, values, expected):
        with pytest.warns(ParameterClampWarning):
            dist = self.erlang_family(**values)
        assert (dist.shape, dist.rate) == expected

    @pytest.mark.parametrize(
        "char_func_getter, expected",
        [
            (lambda distr: distr.mean(), 2.0),
            (lambda distr: distr.variance(), 3.0 / 2.25),
            (lambda distr: distr.mode(), 2.0 / 1.5),
            (lambda distr: distr.skewness(), 2.0 / math.sqrt(3.0)),
            (lambda distr: distr.excess_kurtosis(), 2.0),
        ],
    )
    def test_moments(self, char_func_getter, expected):
        actual = char_func_getter(self.erlang_dist_example)
        assert abs(actual - expected) < self.CALCULATION_PRECISION

    @pytest.mark.parametrize(
        "method_name, scipy_func",
        [("pdf", erlang.pdf), ("cdf", erlang.cdf), ("sf", erlang.sf)],
    )
    def test_against_scipy(self, method_name, scipy_func):
        x = np.array([0.2, 1.0, 2.0, 4.0, 8.0])
        result = getattr(self.erlang_dist_example, method_name)(x)
        self.assert_arrays_almost_equal(result, scipy_func(x, 3, scale=1 / 1.5))

    def test_hazard(self):
        x = np.array([0.5, 2.0])
        expected = erlang.pdf(x, 3, scale=1 / 1.5) / erlang.sf(x, 3, scale=1 / 1.5)
        self.assert_arrays_almost_equal(self.erlang_dist_example.hazard(x), expected)

    def test_set_parameters(self):
        dist = self.erlang_dist_example
        dist.set_parameters(1, 4.0)

        assert dist.mean() == 0.25
        assert dist.sampler.scale == 0.25

    def test_engine_is_shared_with_core(self):
        dist = self.erlang_dist_example
        dist.seed(7)
        first = dist.sample(5).array
        dist.seed(7)
        assert np.array_equal(first, dist.sample(5).array)

    def test_sampling(self):
        self.assert_sample_mean(self.erlang_dist_example)
