"""Unit quaternion operations, [w, x, y, z] ordering."""

import numpy as np


def quat_normalize(q: np.ndarray) -> np.ndarray:
    """Normalize quaternion to unit length."""
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    norm = np.linalg.norm(q)
    if norm < 1e-12:
        raise ValueError("Cannot normalize zero quaternion")

    return q / norm


def quat_exp(phi: np.ndarray) -> np.ndarray:
    """Map a rotation vector to a unit quaternion.

    Args:
        phi: 3-element rotation vector (axis * angle)

    Returns:
        Unit quaternion [w, x, y, z]; exactly [1, 0, 0, 0] for phi == 0
    """
    if phi.shape != (3,):
        raise ValueError(f"phi must be 3-element vector, got shape {phi.shape}")

    theta = np.linalg.norm(phi)
    half = 0.5 * theta

    if theta < 1e-6:
        # sin(theta / 2) / theta, Taylor expanded
        k = 0.5 - theta**2 / 48.0
    else:
        k = np.sin(half) / theta

    return np.concatenate([[np.cos(half)], k * phi])


def quat_log(q: np.ndarray) -> np.ndarray:
    """Map a unit quaternion to its rotation vector, angle in [0, pi]."""
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    # q and -q are the same rotation
    if q[0] < 0:
        q = -q

    w = q[0]
    v = q[1:]
    n = np.linalg.norm(v)

    if n < 1e-12:
        return 2.0 * v / w

    theta = 2.0 * np.arctan2(n, w)
    return (theta / n) * v


def quat_to_matrix(q: np.ndarray) -> np.ndarray:
    """Convert quaternion to rotation matrix.

    Args:
        q: Unit quaternion [w, x, y, z]

    Returns:
        3x3 rotation matrix
    """
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    q = quat_normalize(q)
    w, x, y, z = q

    return np.array([
        [1 - 2*(y**2 + z**2), 2*(x*y - w*z), 2*(x*z + w*y)],
        [2*(x*y + w*z), 1 - 2*(x**2 + z**2), 2*(y*z - w*x)],
        [2*(x*z - w*y), 2*(y*z + w*x), 1 - 2*(x**2 + y**2)]
    ])


def quat_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Hamilton product q1 * q2."""
    if q1.shape != (4,) or q2.shape != (4,):
        raise ValueError("Both quaternions must be 4-element vectors")

    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2

    return np.array([
        w1*w2 - x1*x2 - y1*y2 - z1*z2,
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2
    ])


def quat_conjugate(q: np.ndarray) -> np.ndarray:
    """Return quaternion conjugate (the inverse for unit quaternions)."""
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    return np.array([q[0], -q[1], -q[2], -q[3]])
