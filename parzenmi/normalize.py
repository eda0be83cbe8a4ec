# normalize.py
"""
Rank normalization of a raw sample.

Each value is replaced by the standard-normal quantile of its rank:

    normalized[i] = Phi^{-1}((rank_i + 1) / (n + 1))

where `rank_i` is the zero-based position of element i in ascending order.
This removes scale and shape differences between variables so a single
bandwidth (2 / n_div) works for all of them. The transform is irreversible,
which is why the densities in this package describe the *normalized*
variables and are not suitable for general-purpose density estimation.

Ties are broken by original index: of two equal values, the one that comes
first in the sample gets the lower rank. The default sorter is stable so
this holds by construction; an injected sorter must honor the same rule if
reproducible tie handling matters.
"""
from __future__ import annotations

import numpy as np
from scipy.stats import norm

from .custom_types import Array, ArrayLike, Sorter, QuantileFunction
from .exceptions import PreconditionViolation
from .array_backend.utils import _ensure_vector

__all__ = [
    "sort_with_companion",
    "standard_normal_quantile",
    "rank_normalize",
]


def sort_with_companion(values: Array, companion: Array) -> tuple[Array, Array]:
    """Sort `values` ascending and permute `companion` identically.

    The sort is stable. Neither input is modified; new arrays are returned.

    Args:
        values: shape (n,)
        companion: shape (n,), carried along with `values`.

    Returns:
        (sorted_values, permuted_companion)
    """
    values = np.asarray(values)
    companion = np.asarray(companion)
    if values.shape != companion.shape:
        raise PreconditionViolation(
            f"values and companion must have the same shape; got {values.shape} and {companion.shape}."
        )
    order = np.argsort(values, kind="stable")
    return values[order], companion[order]


def standard_normal_quantile(p: ArrayLike) -> Array:
    """Standard-normal quantile function Phi^{-1}(p), vectorized.

    `p` must lie in the open interval (0, 1); the endpoints map to -inf/+inf
    and values outside give nan.
    """
    return norm.ppf(p)


def rank_normalize(
    sample: ArrayLike,
    *,
    sorter: Sorter = sort_with_companion,
    quantile: QuantileFunction = standard_normal_quantile,
    name: str = "sample",
) -> Array:
    """Convert a raw sample into standard-normal quantiles of its ranks.

    Args:
        sample: array-like, shape (n,), n >= 2 with at least two distinct values.
        sorter: strategy sorting values while carrying a companion array.
        quantile: vectorized standard-normal quantile function.
        name: used in error messages.

    Returns:
        Array of shape (n,); element i is the quantile for the rank of sample[i].

    Raises:
        PreconditionViolation: fewer than two values, fewer than two distinct
            values, non-finite values, or a sorter returning the wrong length.
    """
    values = _ensure_vector(sample, name=name, min_length=2)
    n = values.size
    if np.all(values == values[0]):
        raise PreconditionViolation(f"{name} needs at least two distinct values.")

    sorted_values, order = sorter(values, np.arange(n))
    sorted_values = np.asarray(sorted_values)
    order = np.asarray(order, dtype=np.intp)
    if sorted_values.shape != (n,) or order.shape != (n,):
        raise PreconditionViolation(
            f"sorter must return two arrays of length {n}; got {sorted_values.shape} and {order.shape}."
        )

    probs = np.arange(1, n + 1, dtype=float) / (n + 1)
    out = np.empty(n, dtype=float)
    out[order] = np.asarray(quantile(probs), dtype=float)
    return out
