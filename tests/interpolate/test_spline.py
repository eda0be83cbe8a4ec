import unittest
import warnings

import numpy as np
import pytest

from parzenmi import CubicSpline, PreconditionViolation


class TestCubicSpline(unittest.TestCase):

    def setUp(self):
        self.x = np.array([0.0, 1.0, 2.5, 3.0, 4.5])
        self.y = np.array([1.0, -2.0, 0.5, 3.0, 2.0])
        self.spline = CubicSpline(self.x, self.y)

    def test_passes_through_nodes(self):
        np.testing.assert_allclose(self.spline.evaluate(self.x), self.y, rtol=0, atol=1e-12)

    def test_natural_boundary(self):
        self.assertEqual(self.spline.y2[0], 0.0)
        self.assertEqual(self.spline.y2[-1], 0.0)

    def test_flat_extrapolation(self):
        # exact end-node values, not a linear continuation
        self.assertEqual(self.spline.evaluate(-10.0), self.y[0])
        self.assertEqual(self.spline.evaluate(-1e-9), self.y[0])
        self.assertEqual(self.spline.evaluate(100.0), self.y[-1])
        self.assertEqual(self.spline.evaluate(4.5 + 1e-9), self.y[-1])

    def test_scalar_and_array_shapes(self):
        out0 = self.spline.evaluate(1.7)
        self.assertIsInstance(out0, float)

        out1 = self.spline.evaluate(np.linspace(0, 4, 7))
        self.assertEqual(out1.shape, (7,))

        out2 = self.spline(np.zeros((2, 3)))
        self.assertEqual(out2.shape, (2, 3))

    def test_properties_are_read_only(self):
        self.assertEqual(self.spline.n, 5)
        with self.assertRaises(ValueError):
            self.spline.x[0] = 5.0


def test_collinear_nodes_give_the_line():
    spline = CubicSpline([0.0, 1.0, 2.0], [0.0, 1.0, 2.0])
    assert np.isclose(spline.evaluate(0.5), 0.5, rtol=0, atol=1e-12)
    assert np.isclose(spline.evaluate(1.5), 1.5, rtol=0, atol=1e-12)
    np.testing.assert_allclose(spline.y2, 0.0, atol=1e-12)


def test_unsorted_nodes_are_sorted_with_their_values():
    spline = CubicSpline([2.0, 0.0, 3.0, 1.0], [4.0, 0.0, 9.0, 1.0])
    np.testing.assert_array_equal(spline.x, [0.0, 1.0, 2.0, 3.0])
    np.testing.assert_array_equal(spline.y, [0.0, 1.0, 4.0, 9.0])
    assert spline.evaluate(-1.0) == 0.0
    assert spline.evaluate(5.0) == 9.0


def test_approximates_smooth_function():
    # sin has zero curvature at 0 and 2*pi, matching the natural boundary
    x = np.linspace(0.0, 2.0 * np.pi, 50)
    spline = CubicSpline(x, np.sin(x))
    q = np.linspace(0.0, 2.0 * np.pi, 997)
    np.testing.assert_allclose(spline.evaluate(q), np.sin(q), atol=1e-4)


def test_second_derivatives_match_known_system():
    # For three equally spaced nodes the interior equation is
    # 4 h y2[1] = 6 (y0 - 2 y1 + y2) / h
    h = 0.5
    spline = CubicSpline([0.0, h, 2 * h], [1.0, 3.0, 2.0])
    expected = 6.0 * (1.0 - 6.0 + 2.0) / h / (4.0 * h)
    assert np.isclose(spline.y2[1], expected)


def test_does_not_modify_inputs():
    x = np.array([2.0, 0.0, 1.0])
    y = np.array([4.0, 0.0, 1.0])
    CubicSpline(x, y)
    np.testing.assert_array_equal(x, [2.0, 0.0, 1.0])
    np.testing.assert_array_equal(y, [4.0, 0.0, 1.0])


@pytest.mark.parametrize("x, y", [
    ([0.0, 1.0], [0.0, 1.0]),                 # fewer than 3 nodes
    ([0.0, 1.0, 2.0], [0.0, 1.0]),            # length mismatch
    ([0.0, np.nan, 2.0], [0.0, 1.0, 2.0]),    # non-finite
])
def test_rejects_degenerate_nodes(x, y):
    with pytest.raises(PreconditionViolation):
        CubicSpline(x, y)


def test_coincident_nodes_are_merged():
    spline = CubicSpline([0.0, 1.0, 1.0, 2.0, 3.0], [0.0, 1.0, 1.0, 2.0, 3.0])
    np.testing.assert_array_equal(spline.x, [0.0, 1.0, 2.0, 3.0])
    assert np.all(np.isfinite(spline.y2))
    np.testing.assert_allclose(spline.evaluate([0.5, 1.5, 2.5]), [0.5, 1.5, 2.5], atol=1e-12)


def test_coincident_nodes_take_the_mean_value():
    spline = CubicSpline([0.0, 1.0, 1.0, 1.0, 3.0], [0.0, 0.0, 3.0, 6.0, 1.0])
    assert spline.n == 3
    assert np.isclose(spline.evaluate(1.0), 3.0, rtol=0, atol=1e-12)
    assert np.all(np.isfinite(spline.evaluate(np.linspace(-1.0, 4.0, 51))))


def test_two_distinct_abscissae_give_the_line():
    spline = CubicSpline([0.0, 0.0, 2.0], [1.0, 1.0, 5.0])
    np.testing.assert_array_equal(spline.y2, [0.0, 0.0])
    assert np.isclose(spline.evaluate(1.0), 3.0)


def test_all_nodes_coincident_is_rejected():
    with pytest.raises(PreconditionViolation):
        CubicSpline([1.0, 1.0, 1.0], [0.0, 1.0, 2.0])


def test_far_queries_are_quiet():
    spline = CubicSpline([0.0, 1.0, 2.5, 3.0], [1.0, -2.0, 0.5, 3.0])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert spline.evaluate(1e300) == 3.0
        assert spline.evaluate(-1e300) == 1.0
        out = spline.evaluate(np.array([-1e308, 1.2, 1e308]))
    assert out[0] == 1.0 and out[2] == 3.0
