# array_backend/utils.py
"""
Utility functions for array canonicalization used by parzenmi.

Two kinds of arrays flow through the package:

- *samples*: the raw data handed to an estimator or interpolator. These are
  canonicalized to 1-D float vectors and validated (finite values, minimum
  length) before anything else touches them.
- *queries*: the coordinates at which a density or interpolant is evaluated.
  Queries may be Python scalars, numpy scalars or arrays of any shape; all
  coordinates are broadcast together, flattened for the computation and the
  result is reshaped back. Scalar queries give back a Python float.

All functions that return arrays accept `copy: bool = True`. When `copy=True`
the returned array is guaranteed to be a different object from the input, so
estimators never alias (and never mutate) caller data.
"""

from __future__ import annotations

import numpy as np
from typing import Any, Tuple

from ..custom_types import Array, ArrayLike
from ..exceptions import PreconditionViolation


def _as_array(x: Any) -> Array:
    try:
        return np.asarray(x, dtype=float)
    except Exception as e:
        raise TypeError(
            f"Could not convert input to a float array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Input value: {repr(x)}\n"
            f"Original error: {e}"
        ) from e


def _ensure_positive_real(x: Any, name: str) -> float:
    """
    Return `x` as a Python float, requiring a single finite value > 0.

    Raises:
      PreconditionViolation if the input is not a single positive finite number.
    """
    arr = _as_array(x)
    if arr.size != 1:
        raise PreconditionViolation(f"{name} must be a single number; got shape {arr.shape}.")
    value = float(arr.reshape(()))
    if not np.isfinite(value) or value <= 0:
        raise PreconditionViolation(f"{name} must be a positive finite number; got {value!r}.")
    return value


def _ensure_vector(x: ArrayLike, *, name: str = "x", length: int | None = None,
                   min_length: int | None = None, copy: bool = True) -> Array:
    """
    Ensure input is returned as a finite 1-D float vector of shape (n,).

    Accepts:
      - 1D arrays -> (n,)
      - 2D arrays shaped (n,1) or (1,n) -> flattened to (n,)

    Raises:
      PreconditionViolation for scalars, incompatible shapes (ndim > 2 or 2D
      with both dims > 1), wrong length and non-finite entries.
    """
    arr = _as_array(x)

    if arr.ndim == 1:
        out = arr
    elif arr.ndim == 2 and 1 in arr.shape:
        out = np.ravel(arr)
    else:
        raise PreconditionViolation(f"{name} must be a 1-D vector; got shape {arr.shape}.")

    if length is not None and out.size != length:
        raise PreconditionViolation(f"{name} must have length {length}; got {out.size}.")

    if min_length is not None and out.size < min_length:
        raise PreconditionViolation(f"{name} needs at least {min_length} values; got {out.size}.")

    if not np.all(np.isfinite(out)):
        raise PreconditionViolation(f"{name} contains non-finite values.")

    return out.copy() if copy else out


def _ensure_matrix(x: ArrayLike, *, name: str = "z", num_rows: int, num_cols: int,
                   copy: bool = True) -> Array:
    """Ensure input is a finite 2D float matrix of shape (num_rows, num_cols)."""
    arr = _as_array(x)
    if arr.shape != (num_rows, num_cols):
        raise PreconditionViolation(
            f"{name} must have shape ({num_rows}, {num_cols}); got {arr.shape}."
        )
    if not np.all(np.isfinite(arr)):
        raise PreconditionViolation(f"{name} contains non-finite values.")
    return arr.copy() if copy else arr


def _ensure_query(*coords: ArrayLike) -> Tuple[list[Array], Tuple[int, ...], bool]:
    """Broadcast query coordinates together and flatten them.

    Returns:
        (flat, shape, is_scalar) where `flat` holds one 1-D float array per
        coordinate, `shape` is the broadcast shape and `is_scalar` is True when
        every coordinate was a scalar (0-D).
    """
    arrays = [_as_array(c) for c in coords]
    try:
        arrays = np.broadcast_arrays(*arrays)
    except ValueError as e:
        raise ValueError(
            f"Query coordinates could not be broadcast together; shapes "
            f"{[np.shape(c) for c in coords]}."
        ) from e
    shape = arrays[0].shape
    is_scalar = all(np.ndim(c) == 0 for c in coords)
    return [np.ravel(a) for a in arrays], shape, is_scalar


def _restore_query(values: Array, shape: Tuple[int, ...], is_scalar: bool) -> float | Array:
    """Inverse of `_ensure_query` for the computed values."""
    if is_scalar:
        return float(values[0])
    return values.reshape(shape)


def _readonly(x: Array) -> Array:
    """Flag an owned array as non-writeable and return it."""
    x.flags.writeable = False
    return x
