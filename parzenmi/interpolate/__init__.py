from .spline import CubicSpline
from .bilinear import Bilinear2D

__all__ = ["CubicSpline", "Bilinear2D"]
