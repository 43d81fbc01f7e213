"""Tangent-space distance between Lie group elements."""

import numpy as np

from .metric import Metric
from ..math.se3 import se3_left_jacobian_inverse
from ..variables.groups import SE3


class ManifoldMetric(Metric):
    """Distance log(rhs^-1 * lhs) between two poses.

    Jacobians are taken with respect to left perturbations exp(eps) * x of
    either operand (see group_plus):

        J_lhs = Jl^-1(d) * Ad(rhs^-1)
        J_rhs = -J_lhs
    """

    def __init__(self):
        super().__init__(SE3.tangent_dim, SE3.tangent_dim)

    def _distance(self, lhs: SE3, rhs: SE3, J_lhs, J_rhs) -> np.ndarray:
        if not isinstance(lhs, SE3) or not isinstance(rhs, SE3):
            raise ValueError("ManifoldMetric expects SE3 operands")

        rhs_inv = rhs.group_inverse()
        d = np.asarray(rhs_inv.group_plus(lhs).to_tangent(), dtype=np.float64)

        if J_lhs is not None or J_rhs is not None:
            J = se3_left_jacobian_inverse(d) @ rhs_inv.adjoint()
            if J_lhs is not None:
                J_lhs[...] = J
            if J_rhs is not None:
                J_rhs[...] = -J

        return d
