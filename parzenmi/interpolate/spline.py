# interpolate/spline.py
from __future__ import annotations

import numpy as np
from scipy.linalg import solve_banded

from ..custom_types import Array, ArrayLike
from ..exceptions import PreconditionViolation
from ..normalize import sort_with_companion
from ..array_backend.utils import (
    _ensure_vector,
    _ensure_query,
    _restore_query,
    _readonly,
)

__all__ = ["CubicSpline"]

# Keeps the interval width nonzero when two nodes coincide.
_EPS = 1e-60


class CubicSpline:
    """
    Natural cubic spline through a set of nodes, with flat extrapolation.

    Args:
        x: array-like, shape (n,), n >= 3
            Node abscissae; need not be sorted. Coincident abscissae are
            merged into one node carrying the mean of their values, so at
            least two distinct abscissae are required.
        y: array-like, shape (n,)
            Node values.

    Notes
    -----
    - The second derivative is zero at both end nodes (natural boundary).
    - Outside [x.min(), x.max()] the spline returns the value of the nearest
      end node rather than extrapolating the end cubic.
    - Evaluation is O(log n) per point (binary search for the interval).
    """

    def __init__(self, x: ArrayLike, y: ArrayLike):
        x = _ensure_vector(x, name="x", min_length=3)
        y = _ensure_vector(y, name="y", length=x.size)

        x, y = sort_with_companion(x, y)
        x, y = self._merge_coincident(x, y)
        if x.size < 2:
            raise PreconditionViolation("x needs at least 2 distinct values; all nodes coincide.")

        self._n = x.size
        self._x = _readonly(x)
        self._y = _readonly(y)
        self._y2 = _readonly(self._second_derivatives(x, y))

    @staticmethod
    def _merge_coincident(x: Array, y: Array) -> tuple[Array, Array]:
        """Collapse equal abscissae of a sorted node set, averaging their values."""
        xs, inverse, counts = np.unique(x, return_inverse=True, return_counts=True)
        if xs.size == x.size:
            return x, y
        ys = np.bincount(inverse, weights=y, minlength=xs.size) / counts
        return xs, ys

    @staticmethod
    def _second_derivatives(x: Array, y: Array) -> Array:
        """Solve the natural-spline tridiagonal system for y''."""
        n = x.size
        h = np.diff(x)                      # (n-1,)
        slope = np.diff(y) / h              # (n-1,)

        # Row i (interior node i = 1..n-2):
        #   h[i-1] y2[i-1] + 2 (h[i-1] + h[i]) y2[i] + h[i] y2[i+1] = 6 (slope[i] - slope[i-1])
        ab = np.zeros((3, n - 2))
        ab[0, 1:] = h[1:-1]
        ab[1, :] = 2.0 * (h[:-1] + h[1:])
        ab[2, :-1] = h[1:-1]
        rhs = 6.0 * np.diff(slope)

        y2 = np.zeros(n)
        if n < 3:
            return y2
        y2[1:-1] = solve_banded((1, 1), ab, rhs, check_finite=False)
        return y2

    @property
    def n(self) -> int:
        """Number of nodes."""
        return self._n

    @property
    def x(self) -> Array:
        """Sorted node abscissae, shape (n,)."""
        return self._x

    @property
    def y(self) -> Array:
        """Node values in sorted-abscissa order, shape (n,)."""
        return self._y

    @property
    def y2(self) -> Array:
        """Second derivatives at the nodes, shape (n,)."""
        return self._y2

    def evaluate(self, x: ArrayLike) -> float | Array:
        """
        Evaluate the spline at `x`.

        Accepts a scalar (returns a float) or an array of any shape (returns
        an array of the same shape).
        """
        (q,), shape, is_scalar = _ensure_query(x)
        xs, ys, y2 = self._x, self._y, self._y2

        khi = np.clip(np.searchsorted(xs, q, side="right"), 1, self._n - 1)
        klo = khi - 1

        # Out-of-range points are replaced below; clipping keeps the cubic finite.
        qc = np.clip(q, xs[0], xs[-1])
        dist = xs[khi] - xs[klo] + _EPS
        a = (xs[khi] - qc) / dist
        b = (qc - xs[klo]) / dist
        aa = a * (a * a - 1.0)
        bb = b * (b * b - 1.0)
        val = a * ys[klo] + b * ys[khi] + (aa * y2[klo] + bb * y2[khi]) * dist * dist / 6.0

        val = np.where(q < xs[0], ys[0], val)
        val = np.where(q > xs[-1], ys[-1], val)
        return _restore_query(val, shape, is_scalar)

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"CubicSpline(n={self._n}, x=[{self._x[0]:.6g}, {self._x[-1]:.6g}])"
