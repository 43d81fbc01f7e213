"""Abstract camera distortion with generic Newton inversion."""

import logging
import numpy as np
from abc import abstractmethod
from typing import Optional
from scipy import linalg

from ..variable import Pixel, Variable
from ...math.jacobians import jacobian_view
from ...math.numeric import numeric_traits

logger = logging.getLogger(__name__)

PIXEL_DIM = Pixel.num_parameters


def _inverse(J: np.ndarray) -> np.ndarray:
    """Invert a square Jacobian, in closed form for 2x2.

    Larger square Jacobians go through scipy.linalg.inv.
    """
    if J.shape == (2, 2):
        a, b = J[0]
        c, d = J[1]
        return np.array([[d, -b], [-c, a]]) / (a * d - b * c)
    return linalg.inv(J)


class AbstractDistortion(Variable):
    """Distortion model bound to a parameter buffer.

    Concrete models implement distort(); undistort() inverts it for any model.
    Pixels are normalized image coordinates. Views created with
    read_only=True expose distort/undistort/map only, mutable views may also
    set_default() and perturb() their parameters in place.
    """

    def __init__(self, buffer: np.ndarray, read_only: bool = False):
        super().__init__(buffer, read_only)

    def _pixel(self, pixel) -> np.ndarray:
        pixel = np.asarray(pixel, dtype=self.dtype)
        if pixel.shape != (PIXEL_DIM,):
            raise ValueError(f"pixel must be {PIXEL_DIM}-element vector, got shape {pixel.shape}")
        return pixel

    def _outputs(self, J_pixel: Optional[np.ndarray], J_params: Optional[np.ndarray]):
        if J_pixel is not None:
            J_pixel = jacobian_view(J_pixel, PIXEL_DIM, PIXEL_DIM)
        if J_params is not None:
            J_params = jacobian_view(J_params, PIXEL_DIM, self.size)
        return J_pixel, J_params

    def allocate_pixel_distortion_jacobian(self) -> np.ndarray:
        """Allocate a (2, num_parameters) buffer for parameter Jacobians."""
        return np.zeros((PIXEL_DIM, self.size), dtype=self.dtype)

    @abstractmethod
    def _distort(self, pixel: np.ndarray, J_pixel: Optional[np.ndarray], J_params: Optional[np.ndarray]) -> np.ndarray:
        """Forward map on a validated pixel into validated Jacobian views."""

    @abstractmethod
    def _bind_like(self, buffer: np.ndarray, read_only: bool) -> "AbstractDistortion":
        """Create a view of the same model and configuration on buffer."""

    def distort(
        self,
        pixel,
        J_pixel: Optional[np.ndarray] = None,
        J_params: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """Distort a pixel.

        Args:
            pixel: Undistorted pixel
            J_pixel: Optional (2, 2) output for d(distorted)/d(pixel)
            J_params: Optional (2, num_parameters) output for
                d(distorted)/d(parameters)

        Returns:
            Distorted pixel
        """
        J_pixel, J_params = self._outputs(J_pixel, J_params)
        return self._distort(self._pixel(pixel), J_pixel, J_params)

    def undistort(
        self,
        pixel,
        J_pixel: Optional[np.ndarray] = None,
        J_params: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """Undistort a pixel by Newton iteration on distort().

        Jacobians come from the implicit function theorem at the solution:
        d(undistorted)/d(pixel) = J^-1 and d(undistorted)/d(parameters) =
        -J^-1 * J_params, with J and J_params the forward Jacobians there.

        Args:
            pixel: Distorted pixel
            J_pixel: Optional (2, 2) output for d(undistorted)/d(pixel)
            J_params: Optional (2, num_parameters) output for
                d(undistorted)/d(parameters)

        Returns:
            Undistorted pixel
        """
        J_pixel, J_params = self._outputs(J_pixel, J_params)
        pixel = self._pixel(pixel)
        traits = numeric_traits(self.dtype)

        output = pixel.copy()
        J = np.empty((PIXEL_DIM, PIXEL_DIM), dtype=self.dtype)
        singular_reported = False

        for step in range(traits.max_num_distortion_steps + 1):
            b = self._distort(output, J, None) - pixel
            b2 = float(b @ b)
            if b2 <= traits.distortion_tolerance2:
                break

            if step == traits.max_num_distortion_steps:
                logger.warning("Maximum number of undistortion iterations reached (%d), residual %.3e",
                               step, np.sqrt(b2))
                break

            det = float(np.linalg.det(J))
            if abs(det) < traits.small_angle_tolerance and not singular_reported:
                logger.warning("Numerical issues detected: near-singular distortion Jacobian (det=%.3e)", det)
                singular_reported = True

            output -= _inverse(J) @ b

        J_inv = _inverse(J)

        if J_pixel is not None:
            J_pixel[...] = J_inv

        if J_params is not None:
            J_d = self.allocate_pixel_distortion_jacobian()
            self._distort(output, None, J_d)
            J_params[...] = -J_inv @ J_d

        return output

    def map(self, buffer: np.ndarray) -> "AbstractDistortion":
        """Bind a same-size buffer as a read-only view of this model."""
        return self._map(buffer, read_only=True)

    def map_mutable(self, buffer: np.ndarray) -> "AbstractDistortion":
        """Bind a same-size writeable buffer as a mutable view of this model."""
        return self._map(buffer, read_only=False)

    def _map(self, buffer: np.ndarray, read_only: bool) -> "AbstractDistortion":
        if not isinstance(buffer, np.ndarray) or buffer.size != self.size:
            size = getattr(buffer, "size", None)
            raise ValueError(f"{type(self).__name__} expects {self.size} parameters, got buffer of size {size}")
        return self._bind_like(buffer, read_only)

    @abstractmethod
    def _default_parameters(self) -> np.ndarray:
        """Parameters of the identity distortion."""

    def set_default(self) -> "AbstractDistortion":
        """Reset the bound parameters to the identity distortion."""
        self._require_mutable()
        self._data[:] = self._default_parameters()
        return self

    def perturb(self, scale: float, rng: Optional[np.random.Generator] = None) -> "AbstractDistortion":
        """Add uniform noise in [-scale, scale] to the bound parameters."""
        self._require_mutable()
        rng = rng or np.random.default_rng()
        self._data += (scale * rng.uniform(-1.0, 1.0, self.size)).astype(self.dtype)
        return self
