"""hypergeo - differentiable geometry for parameter estimation

Variables on vector spaces and manifolds, invertible camera distortions and
distance metrics, all with analytic Jacobians.
"""

__version__ = "0.1.0"

# Numeric configuration
from .core.math.numeric import NumericTraits, numeric_traits, set_numeric_traits

# Variables
from .core.variables.variable import Variable, Cartesian, Pixel
from .core.variables.groups import SE3, SE3Tangent, group_plus

# Distortions
from .core.variables.distortions import (
    AbstractDistortion,
    RadialDistortion,
    BrownConradyDistortion,
)

# Metrics
from .core.metrics import Metric, CartesianMetric, AngularMetric, ManifoldMetric

__all__ = [
    # Version
    "__version__",
    # Numeric configuration
    "NumericTraits",
    "numeric_traits",
    "set_numeric_traits",
    # Variables
    "Variable",
    "Cartesian",
    "Pixel",
    "SE3",
    "SE3Tangent",
    "group_plus",
    # Distortions
    "AbstractDistortion",
    "RadialDistortion",
    "BrownConradyDistortion",
    # Metrics
    "Metric",
    "CartesianMetric",
    "AngularMetric",
    "ManifoldMetric",
]
