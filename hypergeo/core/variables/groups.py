"""Lie group variables: SE(3) poses and their tangent increments."""

import numpy as np
from typing import Optional, Union

from .variable import Variable
from ..math.quaternions import quat_normalize, quat_to_matrix
from ..math.se3 import compose, invert, se3_adjoint, se3_exp, se3_log


class SE3(Variable):
    """Rigid-body transform stored as [qw, qx, qy, qz, tx, ty, tz].

    Poses are manifold elements: they are never added component-wise, only
    composed, inverted and perturbed through group_plus.
    """

    num_parameters = 7
    tangent_dim = 6

    @classmethod
    def from_qt(cls, q: np.ndarray, t: np.ndarray, dtype=np.float64) -> "SE3":
        """Create a pose owning a new buffer."""
        return cls(np.concatenate([q, t]).astype(dtype))

    @classmethod
    def identity(cls, dtype=np.float64) -> "SE3":
        return cls.from_qt(np.array([1.0, 0.0, 0.0, 0.0]), np.zeros(3), dtype)

    @classmethod
    def random(cls, rng: Optional[np.random.Generator] = None, scale: float = 1.0, dtype=np.float64) -> "SE3":
        """Create a random pose exp(xi), xi uniform in [-scale, scale]^6."""
        rng = rng or np.random.default_rng()
        return SE3Tangent(scale * rng.uniform(-1.0, 1.0, 6).astype(dtype)).to_manifold()

    @property
    def rotation(self) -> np.ndarray:
        return self._data[:4]

    @property
    def translation(self) -> np.ndarray:
        return self._data[4:]

    def rotation_matrix(self) -> np.ndarray:
        return quat_to_matrix(self.rotation)

    def group_inverse(self) -> "SE3":
        q, t = invert(self.rotation, self.translation)
        return SE3.from_qt(q, t, self.dtype)

    def group_plus(self, other: "SE3") -> "SE3":
        """Compose self * other."""
        q, t = compose(self.rotation, self.translation, other.rotation, other.translation)
        return SE3.from_qt(quat_normalize(q), t, other.dtype)

    def __matmul__(self, other: "SE3") -> "SE3":
        return self.group_plus(other)

    def to_tangent(self) -> "SE3Tangent":
        """Logarithm map."""
        return SE3Tangent(se3_log(self.rotation, self.translation).astype(self.dtype))

    def adjoint(self) -> np.ndarray:
        return se3_adjoint(self.rotation, self.translation)

    def transform(self, points: np.ndarray) -> np.ndarray:
        """Apply the pose to Nx3 points."""
        points = np.atleast_2d(points)
        return points @ self.rotation_matrix().T + self.translation


class SE3Tangent(Variable):
    """Element [rho, phi] of the tangent space se(3)."""

    num_parameters = 6

    @property
    def linear(self) -> np.ndarray:
        return self._data[:3]

    @property
    def angular(self) -> np.ndarray:
        return self._data[3:]

    def to_manifold(self) -> SE3:
        """Exponential map."""
        q, t = se3_exp(np.asarray(self._data, dtype=np.float64))
        return SE3.from_qt(q, t, self.dtype)


def group_plus(delta: Union[np.ndarray, SE3Tangent], element: SE3) -> SE3:
    """Perturb a pose by a tangent increment: exp(delta) * element.

    Returns a pose owning a new buffer. A zero increment returns an exact copy.
    """
    delta = np.asarray(delta)
    if delta.shape != (SE3.tangent_dim,):
        raise ValueError(f"delta must be {SE3.tangent_dim}-element vector, got shape {delta.shape}")

    if not np.any(delta):
        return SE3(element.data.copy())

    return SE3Tangent(delta.astype(element.dtype)).to_manifold().group_plus(element)
