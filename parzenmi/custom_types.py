# custom_types.py
"""
Type definitions and aliases shared across parzenmi.

We generally following the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`

The two injected numerical strategies are typed here as well:
- `Sorter`: (values, companion) -> (sorted values, companion permuted alike)
- `QuantileFunction`: probabilities in (0, 1) -> standard-normal quantiles
"""
from __future__ import annotations
from typing import Callable, Tuple, TypeAlias

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike

Sorter: TypeAlias = Callable[[Array, Array], Tuple[Array, Array]]
QuantileFunction: TypeAlias = Callable[[Array], Array]
