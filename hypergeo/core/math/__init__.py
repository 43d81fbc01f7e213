"""Math primitives for hypergeo."""

from .numeric import NumericTraits, numeric_traits, set_numeric_traits
from .se3 import (
    se3_exp,
    se3_log,
    compose,
    invert,
    se3_adjoint,
    se3_left_jacobian,
    se3_left_jacobian_inverse,
)
from .quaternions import quat_normalize, quat_exp, quat_log, quat_to_matrix
from .jacobians import (
    jacobian_view,
    finite_difference_jacobian,
    manifold_finite_difference_jacobian,
    check_jacobian,
    is_approx,
    JacobianTester,
)

__all__ = [
    "NumericTraits",
    "numeric_traits",
    "set_numeric_traits",
    "se3_exp",
    "se3_log",
    "compose",
    "invert",
    "se3_adjoint",
    "se3_left_jacobian",
    "se3_left_jacobian_inverse",
    "quat_normalize",
    "quat_exp",
    "quat_log",
    "quat_to_matrix",
    "jacobian_view",
    "finite_difference_jacobian",
    "manifold_finite_difference_jacobian",
    "check_jacobian",
    "is_approx",
    "JacobianTester",
]
