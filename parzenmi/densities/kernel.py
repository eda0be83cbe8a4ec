# densities/kernel.py
"""
Exact Gaussian kernel sums.

For query points q (m of them) and kernel centers d (n of them), in D
dimensions with per-axis variances var:

    S(q) = sum_k exp(-0.5 * sum_a (q_a - d_a[k])^2 / var_a)

The sum is not normalized; the estimators multiply by their own factor.
Work is split into blocks of query points so that a block never holds more
than `KERNEL_BLOCK_SIZE` kernel terms at once.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from ..custom_types import Array

__all__ = ["KERNEL_BLOCK_SIZE", "gaussian_kernel_sum", "gaussian_kernel_matrix"]

KERNEL_BLOCK_SIZE = 2 ** 20


def gaussian_kernel_matrix(q: Array, d: Array, var: float) -> Array:
    """One-axis kernel terms, shape (m, n): exp(-0.5 * (q_i - d_k)^2 / var)."""
    diff = q[:, np.newaxis] - d[np.newaxis, :]
    return np.exp(-0.5 * diff * diff / var)


def gaussian_kernel_sum(queries: Sequence[Array], centers: Sequence[Array],
                        var: Sequence[float]) -> Array:
    """
    Unnormalized Gaussian kernel sum at each query point.

    Args:
        queries: one 1-D array per axis, all of length m.
        centers: one 1-D array per axis, all of length n.
        var: one variance per axis.

    Returns:
        Array of shape (m,).
    """
    m = queries[0].size
    n = centers[0].size
    block = max(1, KERNEL_BLOCK_SIZE // n)

    out = np.empty(m)
    for start in range(0, m, block):
        stop = min(start + block, m)
        expo = np.zeros((stop - start, n))
        for q, d, v in zip(queries, centers, var):
            diff = q[start:stop, np.newaxis] - d[np.newaxis, :]
            expo += diff * diff / v
        out[start:stop] = np.exp(-0.5 * expo).sum(axis=1)
    return out
