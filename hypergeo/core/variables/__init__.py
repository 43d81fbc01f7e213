"""Parameter-block variables: vectors, pixels, poses and distortions."""

from .variable import Variable, Cartesian, Pixel
from .groups import SE3, SE3Tangent, group_plus
from .distortions import AbstractDistortion, RadialDistortion, BrownConradyDistortion

__all__ = [
    "Variable",
    "Cartesian",
    "Pixel",
    "SE3",
    "SE3Tangent",
    "group_plus",
    "AbstractDistortion",
    "RadialDistortion",
    "BrownConradyDistortion",
]
