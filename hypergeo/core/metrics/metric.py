"""Base class for distance metrics between two variables."""

import numpy as np
from abc import ABC, abstractmethod
from typing import Optional

from ..math.jacobians import jacobian_view


class Metric(ABC):
    """Distance between two inputs with Jacobians for both operands.

    Jacobian buffers have shape (output_dim, input_dim) where input_dim is the
    dimension of the space the operands are perturbed in. Passing None skips
    that Jacobian.
    """

    def __init__(self, input_dim: int, output_dim: int):
        self.input_dim = input_dim
        self.output_dim = output_dim

    def distance(
        self,
        lhs,
        rhs,
        J_lhs: Optional[np.ndarray] = None,
        J_rhs: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """Compute the distance from rhs to lhs.

        Args:
            lhs: Left operand
            rhs: Right operand
            J_lhs: Optional output for d(distance)/d(lhs)
            J_rhs: Optional output for d(distance)/d(rhs)

        Returns:
            Distance vector of length output_dim
        """
        if J_lhs is not None:
            J_lhs = jacobian_view(J_lhs, self.output_dim, self.input_dim)
        if J_rhs is not None:
            J_rhs = jacobian_view(J_rhs, self.output_dim, self.input_dim)
        return self._distance(lhs, rhs, J_lhs, J_rhs)

    @abstractmethod
    def _distance(self, lhs, rhs, J_lhs: Optional[np.ndarray], J_rhs: Optional[np.ndarray]) -> np.ndarray:
        """Distance with validated Jacobian views."""

    def _vector(self, value) -> np.ndarray:
        value = np.asarray(value)
        if value.shape != (self.input_dim,):
            raise ValueError(f"{type(self).__name__} expects {self.input_dim}-element vectors, "
                             f"got shape {value.shape}")
        return value
