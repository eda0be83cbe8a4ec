import logging

import numpy as np
import pytest
from scipy.integrate import trapezoid
from scipy.stats import norm

from parzenmi import ParzenDensity1, CubicSpline, PreconditionViolation


def _kernel_sum(x, d, var, factor):
    x = np.atleast_1d(x)
    return factor * np.exp(-0.5 * (x[:, None] - d[None, :]) ** 2 / var).sum(axis=1)


# Construction
# --------------------------------------------------------------------

def test_five_point_sample(small_sample):
    dens = ParzenDensity1(small_sample, n_div=5)

    assert dens.n == 5
    assert np.isclose(dens.var, 0.16)
    assert np.isclose(dens.std, 0.4)
    np.testing.assert_allclose(dens.normalized[:, 0], norm.ppf(np.arange(1, 6) / 6.0))
    assert np.isclose(dens.factor, 1.0 / (5 * np.sqrt(2.0 * np.pi * 0.16)))
    assert np.isclose(dens.high, 3.0 + 3.0 * 0.4)
    assert dens.low == -dens.high
    assert not dens.interpolated
    assert dens.interpolator is None


def test_exact_density_matches_kernel_sum(small_sample):
    dens = ParzenDensity1(small_sample, n_div=5)
    d = dens.normalized[:, 0]
    x = np.array([-2.0, -0.3, 0.0, 0.7, 3.1])
    np.testing.assert_allclose(dens.density(x), _kernel_sum(x, d, dens.var, dens.factor), rtol=1e-12)


@pytest.mark.parametrize("n, interpolated", [(100, False), (101, True)])
def test_interpolation_threshold(rng, n, interpolated):
    dens = ParzenDensity1(rng.normal(size=n), n_div=5)
    assert dens.interpolated is interpolated


def test_interpolate_keyword_forces_path(rng):
    assert ParzenDensity1(rng.normal(size=20), 5, interpolate=True).interpolated
    assert not ParzenDensity1(rng.normal(size=500), 5, interpolate=False).interpolated


def test_sample_is_copied_and_normalized_is_read_only(normal_sample):
    original = normal_sample.copy()
    dens = ParzenDensity1(normal_sample, n_div=5)
    np.testing.assert_array_equal(normal_sample, original)
    with pytest.raises(ValueError):
        dens.normalized[0, 0] = 1.0


@pytest.mark.parametrize("n_div", [0, -3, np.nan, [1, 2]])
def test_rejects_bad_resolution(small_sample, n_div):
    with pytest.raises(PreconditionViolation):
        ParzenDensity1(small_sample, n_div)


def test_rejects_degenerate_sample():
    with pytest.raises(PreconditionViolation):
        ParzenDensity1([1.0, 1.0, 1.0], 5)


# Spline grid
# --------------------------------------------------------------------

def test_spline_grid_layout(normal_sample):
    dens = ParzenDensity1(normal_sample, n_div=5)
    spline = dens.interpolator

    assert isinstance(spline, CubicSpline)
    assert spline.n == 1001
    assert spline.x[0] == dens.low
    assert np.isclose(spline.x[-1], dens.high)
    assert np.all(np.diff(spline.x) > 0)
    # nodes are packed densest in the center
    assert np.diff(spline.x[100:900]).max() < np.diff(spline.x[:100]).min()


def test_spline_is_exact_at_grid_nodes(normal_sample):
    dens = ParzenDensity1(normal_sample, n_div=5)
    nodes = dens.interpolator.x
    np.testing.assert_allclose(dens.density(nodes), dens.exact_density(nodes), rtol=1e-10, atol=1e-15)
    np.testing.assert_allclose(
        dens.density(nodes),
        _kernel_sum(nodes, dens.normalized[:, 0], dens.var, dens.factor),
        rtol=1e-10, atol=1e-15,
    )


def test_interpolated_agrees_with_exact_across_threshold(rng):
    sample = rng.normal(size=101)
    interp = ParzenDensity1(sample, n_div=5)
    exact = ParzenDensity1(sample, n_div=5, interpolate=False)
    smaller = ParzenDensity1(sample[:100], n_div=5)

    assert interp.interpolated and not exact.interpolated and not smaller.interpolated

    x = np.linspace(-3.0, 3.0, 601)
    np.testing.assert_allclose(interp.density(x), exact.density(x), rtol=0, atol=1e-5)
    np.testing.assert_allclose(interp.density(x), smaller.density(x), rtol=0, atol=0.05)


# Density properties
# --------------------------------------------------------------------

@pytest.mark.parametrize("n", [30, 300])
def test_density_is_nonnegative(rng, n):
    dens = ParzenDensity1(rng.standard_cauchy(size=n), n_div=8)
    x = np.linspace(-20.0, 20.0, 4001)
    assert np.all(dens.density(x) >= 0.0)


@pytest.mark.parametrize("interpolate", [False, True])
def test_density_integrates_to_one(rng, interpolate):
    dens = ParzenDensity1(rng.normal(size=500), n_div=5, interpolate=interpolate)
    x = np.linspace(dens.low, dens.high, 20001)
    assert abs(trapezoid(dens.density(x), x) - 1.0) < 0.03


def test_density_is_rank_based(rng):
    sample = rng.normal(size=150)
    a = ParzenDensity1(sample, n_div=6)
    b = ParzenDensity1(np.exp(3.0 * sample), n_div=6)
    x = np.linspace(-4, 4, 101)
    np.testing.assert_allclose(a.density(x), b.density(x))


def test_query_shapes_and_log_density(normal_sample):
    dens = ParzenDensity1(normal_sample, n_div=5)

    assert isinstance(dens.density(0.0), float)
    assert isinstance(dens.log_density(0.0), float)
    assert dens.density(np.zeros((3, 4))).shape == (3, 4)
    assert dens(0.25) == dens.density(0.25)

    x = np.linspace(-2, 2, 9)
    np.testing.assert_allclose(dens.log_density(x), np.log(dens.density(x)))


def test_wrong_number_of_coordinates(normal_sample):
    dens = ParzenDensity1(normal_sample, n_div=5)
    with pytest.raises(TypeError):
        dens.exact_density(0.0, 1.0)


# Allocation failure
# --------------------------------------------------------------------

def test_memory_error_falls_back_to_exact(normal_sample, monkeypatch, caplog):
    def no_memory(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr("parzenmi.densities.univariate.three_segment_grid", no_memory)

    with caplog.at_level(logging.WARNING, logger="parzenmi.densities.base"):
        dens = ParzenDensity1(normal_sample, n_div=5)

    assert not dens.interpolated
    assert "exact evaluation" in caplog.text
    x = np.linspace(-3, 3, 13)
    np.testing.assert_allclose(dens.density(x), dens.exact_density(x))
