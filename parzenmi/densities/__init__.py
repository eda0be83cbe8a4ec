from .base import ParzenDensity
from .univariate import ParzenDensity1
from .bivariate import ParzenDensity2
from .trivariate import ParzenDensity3

__all__ = ["ParzenDensity", "ParzenDensity1", "ParzenDensity2", "ParzenDensity3"]
