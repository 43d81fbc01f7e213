"""Distance metrics with analytic Jacobians."""

from .metric import Metric
from .cartesian import CartesianMetric
from .angular import AngularMetric
from .manifold import ManifoldMetric

__all__ = [
    "Metric",
    "CartesianMetric",
    "AngularMetric",
    "ManifoldMetric",
]
