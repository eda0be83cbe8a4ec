# interpolate/bilinear.py
from __future__ import annotations

import numpy as np

from ..custom_types import Array, ArrayLike
from ..exceptions import PreconditionViolation
from ..array_backend.utils import (
    _ensure_vector,
    _ensure_matrix,
    _ensure_query,
    _restore_query,
    _readonly,
)

__all__ = ["Bilinear2D"]

# Offsets of the four nodes that can influence a point in cell [i, i+1].
_STENCIL = np.arange(-1, 3)


def _lagrange3(p0: Array, p1: Array, p2: Array, q: Array) -> tuple[Array, Array, Array]:
    """Quadratic Lagrange weights of nodes (p0, p1, p2) at q."""
    w0 = (q - p1) * (q - p2) / ((p0 - p1) * (p0 - p2))
    w1 = (q - p0) * (q - p2) / ((p1 - p0) * (p1 - p2))
    w2 = (q - p0) * (q - p1) / ((p2 - p0) * (p2 - p1))
    return w0, w1, w2


class Bilinear2D:
    """
    Interpolation on a rectangular, possibly non-uniform grid.

    Args:
        x: array-like, shape (nx,), strictly increasing
        y: array-like, shape (ny,), strictly increasing
        z: array-like, shape (nx, ny); z[i, j] is the value at (x[i], y[j]).
        quadratic: bool, default False
            If False, plain bilinear interpolation inside the bracketing cell.
            If True, each axis blends the two quadratics through the node
            triples (i-1, i, i+1) and (i, i+1, i+2) linearly across the cell,
            giving the bilinear surface plus a quadratic correction. Cells on
            the grid edge use the single triple that fits.

    Notes
    -----
    - Both modes reproduce z exactly at every grid node.
    - Query coordinates outside the grid are clamped to its bounds, so the
      surface is extended flat beyond the edges.
    """

    def __init__(self, x: ArrayLike, y: ArrayLike, z: ArrayLike, *, quadratic: bool = False):
        min_nodes = 3 if quadratic else 2
        x = _ensure_vector(x, name="x", min_length=min_nodes)
        y = _ensure_vector(y, name="y", min_length=min_nodes)
        z = _ensure_matrix(z, name="z", num_rows=x.size, num_cols=y.size)

        for name, axis in (("x", x), ("y", y)):
            if np.any(np.diff(axis) <= 0):
                raise PreconditionViolation(f"Bilinear2D grid axis {name} must be strictly increasing.")

        self._x = _readonly(x)
        self._y = _readonly(y)
        self._z = _readonly(z)
        self._quadratic = bool(quadratic)

    @property
    def x(self) -> Array:
        return self._x

    @property
    def y(self) -> Array:
        return self._y

    @property
    def z(self) -> Array:
        return self._z

    @property
    def shape(self) -> tuple[int, int]:
        return self._z.shape

    @property
    def quadratic(self) -> bool:
        return self._quadratic

    def _axis_weights(self, nodes: Array, q: Array) -> tuple[Array, Array]:
        """
        Node indices and weights along one axis.

        Returns (idx, w), both of shape (m, 4): the value at q is
        sum_k w[:, k] * f(nodes[idx[:, k]]).
        """
        n = nodes.size
        q = np.clip(q, nodes[0], nodes[-1])
        i = np.clip(np.searchsorted(nodes, q, side="right"), 1, n - 1) - 1
        t = (q - nodes[i]) / (nodes[i + 1] - nodes[i])

        idx = np.clip(i[:, None] + _STENCIL, 0, n - 1)
        w = np.zeros(idx.shape)

        if not self._quadratic:
            w[:, 1] = 1.0 - t
            w[:, 2] = t
            return idx, w

        has_left = i >= 1
        has_right = i + 2 <= n - 1
        # Blend factor of the right-hand triple
        s = np.where(has_left & has_right, t, np.where(has_right, 1.0, 0.0))

        p = nodes[idx]
        # Rows without a valid triple see coincident clipped nodes and give
        # nan; they are dropped below before combining.
        with np.errstate(divide="ignore", invalid="ignore"):
            l0, l1, l2 = _lagrange3(p[:, 0], p[:, 1], p[:, 2], q)
            r0, r1, r2 = _lagrange3(p[:, 1], p[:, 2], p[:, 3], q)
        left = np.where(has_left[:, None], np.stack([l0, l1, l2], axis=1), 0.0)
        right = np.where(has_right[:, None], np.stack([r0, r1, r2], axis=1), 0.0)

        w[:, 0:3] += (1.0 - s)[:, None] * left
        w[:, 1:4] += s[:, None] * right
        return idx, w

    def evaluate(self, x: ArrayLike, y: ArrayLike) -> float | Array:
        """
        Interpolate at (x, y). The two coordinates broadcast against each
        other; scalar inputs return a float.
        """
        (qx, qy), shape, is_scalar = _ensure_query(x, y)
        ix, wx = self._axis_weights(self._x, qx)
        iy, wy = self._axis_weights(self._y, qy)

        vals = np.zeros(qx.shape)
        for a in range(_STENCIL.size):
            for b in range(_STENCIL.size):
                vals += wx[:, a] * wy[:, b] * self._z[ix[:, a], iy[:, b]]
        return _restore_query(vals, shape, is_scalar)

    __call__ = evaluate

    def __repr__(self) -> str:
        nx, ny = self._z.shape
        return f"Bilinear2D(nx={nx}, ny={ny}, quadratic={self._quadratic})"
