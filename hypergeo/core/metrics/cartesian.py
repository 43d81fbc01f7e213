"""Vector-space difference metric."""

import numpy as np

from .metric import Metric


class CartesianMetric(Metric):
    """Distance lhs - rhs; its norm is the Euclidean distance."""

    def __init__(self, dim: int = 3):
        super().__init__(dim, dim)

    def _distance(self, lhs, rhs, J_lhs, J_rhs) -> np.ndarray:
        lhs = self._vector(lhs)
        rhs = self._vector(rhs)

        if J_lhs is not None:
            J_lhs[...] = np.eye(self.input_dim)
        if J_rhs is not None:
            J_rhs[...] = -np.eye(self.input_dim)

        return lhs - rhs
