"""Camera distortion models."""

from .abstract import AbstractDistortion, PIXEL_DIM
from .radial import RadialDistortion
from .brown_conrady import BrownConradyDistortion

__all__ = [
    "AbstractDistortion",
    "PIXEL_DIM",
    "RadialDistortion",
    "BrownConradyDistortion",
]
