# densities/grid.py
"""
Interpolation grids for the Parzen densities.

Nodes are packed densest on [-1.5, 1.5], where most of the mass of the
normalized (standard-normal) variables lies: 10% of the nodes cover
[low, -1.5), 80% cover [-1.5, 1.5) and the remaining ~10% run up to `high`,
which is the last node.
"""
from __future__ import annotations

import numpy as np

from ..custom_types import Array
from ..exceptions import PreconditionViolation

__all__ = [
    "INTERPOLATION_THRESHOLD",
    "SPLINE_POINTS",
    "BILINEAR_POINTS",
    "INNER_BOUND",
    "use_interpolation",
    "three_segment_grid",
]

# Grids are built only for samples larger than this.
INTERPOLATION_THRESHOLD = 100
SPLINE_POINTS = 1001
BILINEAR_POINTS = 200
INNER_BOUND = 1.5


def use_interpolation(interpolate: bool | None, n: int) -> bool:
    """Resolve the `interpolate` keyword: None means "only for large samples"."""
    if interpolate is None:
        return n > INTERPOLATION_THRESHOLD
    return bool(interpolate)


def three_segment_grid(low: float, high: float, n_points: int,
                       inner: float = INNER_BOUND) -> Array:
    """
    Strictly increasing grid of `n_points` nodes from `low` to `high`.

    The first int(0.1 * n_points) nodes start at `low` and step evenly toward
    -inner; the next int(0.8 * n_points) continue evenly toward +inner without
    reaching it; the rest continue evenly and end at `high`.
    """
    if n_points < 10:
        raise PreconditionViolation(f"n_points must be at least 10; got {n_points}.")
    if not low < -inner < inner < high:
        raise PreconditionViolation(
            f"Grid bounds must satisfy low < -{inner} < {inner} < high; got low={low}, high={high}."
        )

    k0 = int(0.1 * n_points)
    k1 = int(0.8 * n_points)
    k2 = n_points - k0 - k1

    x = np.empty(n_points)
    x[:k0] = low + np.arange(k0) * ((-inner - low) / k0)

    xbot = x[k0 - 1]
    x[k0:k0 + k1] = xbot + np.arange(1, k1 + 1) * ((inner - xbot) / (k1 + 1))

    xbot = x[k0 + k1 - 1]
    x[k0 + k1:] = xbot + np.arange(1, k2 + 1) * ((high - xbot) / k2)
    return x
