"""Brown-Conrady radial and tangential distortion."""

import numpy as np
from typing import Optional

from .abstract import AbstractDistortion


class BrownConradyDistortion(AbstractDistortion):
    """Radial plus tangential (decentering) distortion.

    Parameters follow the OpenCV ordering [k1, k2, p1, p2, k3]:

        x' = x * radial + 2 p1 x y + p2 (r^2 + 2 x^2)
        y' = y * radial + p1 (r^2 + 2 y^2) + 2 p2 x y
        radial = 1 + k1 r^2 + k2 r^4 + k3 r^6
    """

    num_parameters = 5

    @classmethod
    def create(cls, dtype=np.float64) -> "BrownConradyDistortion":
        """Create an identity distortion owning a new buffer."""
        return cls(np.zeros(cls.num_parameters, dtype=dtype))

    def _bind_like(self, buffer: np.ndarray, read_only: bool) -> "BrownConradyDistortion":
        return BrownConradyDistortion(buffer, read_only)

    def _default_parameters(self) -> np.ndarray:
        return np.zeros(self.num_parameters, dtype=self.dtype)

    def _distort(self, pixel: np.ndarray, J_pixel: Optional[np.ndarray], J_params: Optional[np.ndarray]) -> np.ndarray:
        k1, k2, p1, p2, k3 = self._data
        x, y = pixel
        xx, xy, yy = x * x, x * y, y * y
        r2 = xx + yy
        r4 = r2 * r2
        r6 = r4 * r2
        radial = 1 + k1 * r2 + k2 * r4 + k3 * r6

        if J_pixel is not None:
            d_radial = k1 + 2 * k2 * r2 + 3 * k3 * r4
            J_pixel[0, 0] = radial + 2 * xx * d_radial + 2 * p1 * y + 6 * p2 * x
            J_pixel[0, 1] = 2 * xy * d_radial + 2 * p1 * x + 2 * p2 * y
            J_pixel[1, 0] = J_pixel[0, 1]
            J_pixel[1, 1] = radial + 2 * yy * d_radial + 6 * p1 * y + 2 * p2 * x

        if J_params is not None:
            J_params[0] = [x * r2, x * r4, 2 * xy, r2 + 2 * xx, x * r6]
            J_params[1] = [y * r2, y * r4, r2 + 2 * yy, 2 * xy, y * r6]

        return np.array([
            x * radial + 2 * p1 * xy + p2 * (r2 + 2 * xx),
            y * radial + p1 * (r2 + 2 * yy) + 2 * p2 * xy,
        ], dtype=self.dtype)
