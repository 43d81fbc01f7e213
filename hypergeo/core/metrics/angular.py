"""Angle between two direction vectors."""

import numpy as np

from .metric import Metric
from ..math.numeric import numeric_traits


class AngularMetric(Metric):
    """Angle theta = arccos(u.v / (|u| |v|)) in [0, pi].

    The gradient with respect to u is -(v_hat - cos(theta) u_hat) / (|u| sin(theta)),
    symmetric in v. It is undefined for parallel vectors; there the Jacobians
    are set to zero. Zero-length operands raise ValueError.
    """

    def __init__(self, dim: int = 3):
        super().__init__(dim, 1)

    def _distance(self, lhs, rhs, J_lhs, J_rhs) -> np.ndarray:
        u = self._vector(lhs)
        v = self._vector(rhs)

        u_norm = np.linalg.norm(u)
        v_norm = np.linalg.norm(v)
        if u_norm == 0.0 or v_norm == 0.0:
            raise ValueError("AngularMetric is undefined for zero-length vectors")

        u_hat = u / u_norm
        v_hat = v / v_norm

        cos_theta = np.clip(u_hat @ v_hat, -1.0, 1.0)
        theta = np.arccos(cos_theta)

        if J_lhs is None and J_rhs is None:
            return np.array([theta])

        # |v_hat - cos u_hat| == |u_hat - cos v_hat| == sin(theta), without cancellation
        u_perp = v_hat - cos_theta * u_hat
        v_perp = u_hat - cos_theta * v_hat
        sin_theta = np.linalg.norm(u_perp)
        degenerate = sin_theta < numeric_traits(np.result_type(u, v, np.float32)).small_angle_tolerance

        if J_lhs is not None:
            J_lhs[...] = 0.0 if degenerate else -u_perp / (u_norm * sin_theta)
        if J_rhs is not None:
            J_rhs[...] = 0.0 if degenerate else -v_perp / (v_norm * sin_theta)

        return np.array([theta])
