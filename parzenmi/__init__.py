from parzenmi.exceptions import PreconditionViolation
from parzenmi.normalize import (
    rank_normalize,
    sort_with_companion,
    standard_normal_quantile,
)
from parzenmi.interpolate import CubicSpline, Bilinear2D
from parzenmi.densities import (
    ParzenDensity,
    ParzenDensity1,
    ParzenDensity2,
    ParzenDensity3,
)
from parzenmi.mutual_information import MutualInformationParzen

__all__ = [
    "PreconditionViolation",
    "rank_normalize",
    "sort_with_companion",
    "standard_normal_quantile",
    "CubicSpline",
    "Bilinear2D",
    "ParzenDensity",
    "ParzenDensity1",
    "ParzenDensity2",
    "ParzenDensity3",
    "MutualInformationParzen",
]
