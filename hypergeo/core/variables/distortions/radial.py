"""Polynomial radial distortion."""

import numpy as np
from typing import Optional

from .abstract import AbstractDistortion


class RadialDistortion(AbstractDistortion):
    """Radial distortion p' = p * (1 + k1 r^2 + k2 r^4 + ... + kn r^2n).

    Parameters are [k1, ..., kn] where n is the order.
    """

    def __init__(self, buffer: np.ndarray, read_only: bool = False):
        self.num_parameters = np.asarray(buffer).size
        if self.num_parameters < 1:
            raise ValueError("RadialDistortion needs at least one coefficient")
        super().__init__(buffer, read_only)

    @classmethod
    def create(cls, order: int = 2, dtype=np.float64) -> "RadialDistortion":
        """Create an identity distortion owning a new buffer."""
        return cls(np.zeros(order, dtype=dtype))

    @property
    def order(self) -> int:
        return self.size

    def _bind_like(self, buffer: np.ndarray, read_only: bool) -> "RadialDistortion":
        return RadialDistortion(buffer, read_only)

    def _default_parameters(self) -> np.ndarray:
        return np.zeros(self.size, dtype=self.dtype)

    def _distort(self, pixel: np.ndarray, J_pixel: Optional[np.ndarray], J_params: Optional[np.ndarray]) -> np.ndarray:
        k = self._data
        r2 = pixel @ pixel

        exponents = np.arange(self.order, dtype=self.dtype)
        # 1, r^2, ..., r^2(n-1)
        lower = r2 ** exponents
        powers = lower * r2
        factor = 1 + k @ powers

        if J_pixel is not None:
            d_factor = k @ ((exponents + 1) * lower)
            J_pixel[...] = factor * np.eye(2, dtype=self.dtype) + 2 * d_factor * np.outer(pixel, pixel)

        if J_params is not None:
            J_params[...] = np.outer(pixel, powers)

        return factor * pixel
