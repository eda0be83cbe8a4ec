# densities/base.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

import numpy as np

from ..custom_types import Array, ArrayLike, Sorter, QuantileFunction
from ..exceptions import PreconditionViolation
from ..normalize import rank_normalize, sort_with_companion, standard_normal_quantile
from ..array_backend.utils import (
    _ensure_positive_real,
    _ensure_query,
    _restore_query,
    _readonly,
)
from .kernel import gaussian_kernel_sum

__all__ = ["ParzenDensity", "TAU", "TINY"]

logger = logging.getLogger(__name__)

TINY = np.finfo(float).tiny
TAU = 2.0 * np.pi


class ParzenDensity(ABC):
    """
    Abstract base class for the Gaussian Parzen-window densities.

    Each variable is rank normalized (see `parzenmi.normalize`) and a Gaussian
    kernel with variance (2 / n_div)^2 is centered on every normalized point:

        p(x) = factor * sum_k exp(-0.5 * sum_a (x_a - d_a[k])^2 / var)
        factor = 1 / (n * (2 pi var)^(dim / 2))

    Subclasses fix `dim`, and may install an interpolator at construction
    time that answers queries in place of the exact O(n) sum.

    Args:
        samples: sequence of `dim` array-likes, each of shape (n,)
        n_div: positive number, the resolution; larger values give narrower
            kernels.
        sorter: sorting strategy used by the rank normalization.
        quantile: standard-normal quantile function used by the rank
            normalization.
    """

    dim: int = 0

    def __init__(
        self,
        samples: Sequence[ArrayLike],
        n_div: float,
        *,
        sorter: Sorter = sort_with_companion,
        quantile: QuantileFunction = standard_normal_quantile,
    ):
        if len(samples) != self.dim:
            raise PreconditionViolation(f"{type(self).__name__} needs {self.dim} samples; got {len(samples)}.")
        lengths = {np.size(s) for s in samples}
        if len(lengths) != 1:
            raise PreconditionViolation(f"All samples must have the same length; got lengths {sorted(lengths)}.")

        self._n_div = _ensure_positive_real(n_div, "n_div")
        columns = [
            rank_normalize(s, sorter=sorter, quantile=quantile, name=f"sample{a}")
            for a, s in enumerate(samples)
        ]
        self._data = _readonly(np.column_stack(columns))  # (n, dim)
        self._n = self._data.shape[0]

        self._std = 2.0 / self._n_div
        self._var = self._std * self._std
        self._factor = 1.0 / (self._n * (TAU * self._var) ** (self.dim / 2.0))
        self._interpolator: Any = None

    # ------------------- basic properties -------------------

    @property
    def n(self) -> int:
        """Number of sample points."""
        return self._n

    @property
    def n_div(self) -> float:
        return self._n_div

    @property
    def std(self) -> float:
        """Kernel standard deviation, 2 / n_div, the same on every axis."""
        return self._std

    @property
    def var(self) -> float:
        """Kernel variance, (2 / n_div)^2, the same on every axis."""
        return self._var

    @property
    def factor(self) -> float:
        """Normalizing factor applied to the kernel sum."""
        return self._factor

    @property
    def normalized(self) -> Array:
        """Read-only normalized sample, shape (n, dim)."""
        return self._data

    @property
    def interpolator(self) -> Any:
        """The interpolator answering queries, or None on the exact path."""
        return self._interpolator

    @property
    def interpolated(self) -> bool:
        return self._interpolator is not None

    # ------------------- interpolation -------------------

    def _build_interpolator(self) -> Any:
        """Evaluate the exact density on a grid and fit an interpolator to it."""
        raise NotImplementedError(f"{type(self).__name__} does not interpolate.")

    def _try_interpolator(self) -> Any:
        """
        Build the interpolator, or return None if the grid does not fit in
        memory. The estimator then keeps answering with the exact sum.
        """
        try:
            return self._build_interpolator()
        except MemoryError:
            logger.warning(
                "Not enough memory for the %s interpolation grid (n=%d); using exact evaluation.",
                type(self).__name__, self._n,
            )
            return None

    # ------------------- evaluation -------------------

    def exact_density(self, *coords: ArrayLike) -> float | Array:
        """Density from the exact kernel sum, bypassing any interpolator."""
        flat, shape, is_scalar = self._check_query(coords)
        return _restore_query(self._kernel_density(flat), shape, is_scalar)

    def _kernel_density(self, flat: Sequence[Array]) -> Array:
        centers = [self._data[:, a] for a in range(self.dim)]
        return self._factor * gaussian_kernel_sum(flat, centers, [self._var] * self.dim)

    def _check_query(self, coords: Sequence[ArrayLike]):
        if len(coords) != self.dim:
            raise TypeError(f"{type(self).__name__} takes {self.dim} coordinates; got {len(coords)}.")
        return _ensure_query(*coords)

    def _density(self, *coords: ArrayLike) -> float | Array:
        flat, shape, is_scalar = self._check_query(coords)
        if self._interpolator is None:
            vals = self._kernel_density(flat)
        else:
            # Interpolants can dip slightly below zero in the tails.
            vals = np.maximum(np.asarray(self._interpolator(*flat), dtype=float), 0.0)
        return _restore_query(vals, shape, is_scalar)

    @abstractmethod
    def density(self, *coords: ArrayLike) -> float | Array:
        """
        Density of the normalized variables at the given coordinates.

        Coordinates broadcast against each other; scalar input gives a float.
        """
        raise NotImplementedError("This method should be implemented by subclasses")

    def log_density(self, *coords: ArrayLike) -> float | Array:
        """log of `density`; -inf where the density is zero."""
        with np.errstate(divide="ignore"):
            out = np.log(self.density(*coords))
        return float(out) if np.ndim(out) == 0 else out

    def __call__(self, *coords: ArrayLike) -> float | Array:
        return self.density(*coords)

    def __repr__(self) -> str:
        path = "interpolated" if self.interpolated else "exact"
        return f"{type(self).__name__}(n={self._n}, n_div={self._n_div:g}, {path})"
