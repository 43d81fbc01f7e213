"""SE(3) Lie group operations for 3D poses.

Poses are (q, t) pairs: unit quaternion [w, x, y, z] and translation. Tangent
vectors are 6-element [rho, phi] where rho is the translation part and phi the
rotation part. Jacobians follow the left-perturbation convention
exp(delta) * T.
"""

import numpy as np
from typing import Tuple

from .quaternions import quat_conjugate, quat_exp, quat_log, quat_multiply, quat_to_matrix

# Below this angle the closed forms are replaced by their Taylor expansions
SMALL_ANGLE = 1e-5
SMALL_ANGLE_Q = 1e-2


def skew_symmetric(v: np.ndarray) -> np.ndarray:
    """Create skew-symmetric matrix from 3D vector."""
    if v.shape != (3,):
        raise ValueError(f"v must be 3-element vector, got shape {v.shape}")

    return np.array([
        [0, -v[2], v[1]],
        [v[2], 0, -v[0]],
        [-v[1], v[0], 0]
    ])


def so3_left_jacobian(phi: np.ndarray) -> np.ndarray:
    """Left Jacobian of SO(3), also the V matrix of the SE(3) exponential."""
    theta = np.linalg.norm(phi)
    Phi = skew_symmetric(phi)

    if theta < SMALL_ANGLE:
        a = 0.5 - theta**2 / 24.0
        b = 1.0 / 6.0 - theta**2 / 120.0
    else:
        a = (1.0 - np.cos(theta)) / theta**2
        b = (theta - np.sin(theta)) / theta**3

    return np.eye(3) + a * Phi + b * Phi @ Phi


def so3_left_jacobian_inverse(phi: np.ndarray) -> np.ndarray:
    """Inverse of the SO(3) left Jacobian, singular at theta = 2 * pi."""
    theta = np.linalg.norm(phi)
    Phi = skew_symmetric(phi)

    if theta < SMALL_ANGLE:
        c = 1.0 / 12.0 + theta**2 / 720.0
    else:
        c = 1.0 / theta**2 - (1.0 + np.cos(theta)) / (2.0 * theta * np.sin(theta))

    return np.eye(3) - 0.5 * Phi + c * Phi @ Phi


def _se3_q_matrix(rho: np.ndarray, phi: np.ndarray) -> np.ndarray:
    """Coupling block Q(rho, phi) of the SE(3) left Jacobian."""
    theta = np.linalg.norm(phi)
    P = skew_symmetric(phi)
    R = skew_symmetric(rho)

    if theta < SMALL_ANGLE_Q:
        t2 = theta**2
        c1 = 1.0 / 6.0 - t2 / 120.0
        c2 = 1.0 / 24.0 - t2 / 720.0
        c3 = 1.0 / 120.0 - t2 / 2520.0
    else:
        s = np.sin(theta)
        c = np.cos(theta)
        c1 = (theta - s) / theta**3
        c2 = (theta**2 + 2.0 * c - 2.0) / (2.0 * theta**4)
        c3 = (2.0 * theta - 3.0 * s + theta * c) / (2.0 * theta**5)

    PR = P @ R
    RP = R @ P
    PRP = PR @ P
    PP = P @ P

    return (
        0.5 * R
        + c1 * (PR + RP + PRP)
        + c2 * (PP @ R + RP @ P - 3.0 * PRP)
        + c3 * (PRP @ P + P @ PRP)
    )


def _split_tangent(xi: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    if xi.shape != (6,):
        raise ValueError(f"xi must be 6-element vector, got shape {xi.shape}")
    return xi[:3], xi[3:]


def se3_left_jacobian(xi: np.ndarray) -> np.ndarray:
    """Left Jacobian of SE(3): exp(xi + d) ~ exp(J d) * exp(xi)."""
    rho, phi = _split_tangent(xi)
    J = so3_left_jacobian(phi)

    out = np.zeros((6, 6))
    out[:3, :3] = J
    out[:3, 3:] = _se3_q_matrix(rho, phi)
    out[3:, 3:] = J
    return out


def se3_left_jacobian_inverse(xi: np.ndarray) -> np.ndarray:
    """Inverse left Jacobian of SE(3): log(exp(d) * exp(xi)) ~ xi + J d."""
    rho, phi = _split_tangent(xi)
    J_inv = so3_left_jacobian_inverse(phi)

    out = np.zeros((6, 6))
    out[:3, :3] = J_inv
    out[:3, 3:] = -J_inv @ _se3_q_matrix(rho, phi) @ J_inv
    out[3:, 3:] = J_inv
    return out


def se3_exp(xi: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Convert se(3) algebra element to SE(3) group (q, t).

    Args:
        xi: 6-element vector [rho, phi] where rho is translation, phi is rotation

    Returns:
        Tuple of (q, t) where q is a unit quaternion, t is 3-element translation
    """
    rho, phi = _split_tangent(xi)
    q = quat_exp(phi)
    t = so3_left_jacobian(phi) @ rho
    return q, t


def se3_log(q: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Convert SE(3) group element (q, t) to se(3) algebra.

    Args:
        q: Unit quaternion [w, x, y, z]
        t: 3-element translation vector

    Returns:
        6-element se(3) vector [rho, phi]
    """
    if t.shape != (3,):
        raise ValueError(f"t must be 3-element vector, got shape {t.shape}")

    phi = quat_log(q)
    rho = so3_left_jacobian_inverse(phi) @ t
    return np.concatenate([rho, phi])


def compose(q1: np.ndarray, t1: np.ndarray, q2: np.ndarray, t2: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Compose two SE(3) transformations: T1 * T2."""
    q = quat_multiply(q1, q2)
    t = quat_to_matrix(q1) @ t2 + t1
    return q, t


def invert(q: np.ndarray, t: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Invert SE(3) transformation."""
    q_inv = quat_conjugate(q)
    t_inv = -quat_to_matrix(q_inv) @ t
    return q_inv, t_inv


def se3_adjoint(q: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Adjoint of T = (q, t): T * exp(xi) * T^-1 = exp(Ad(T) xi)."""
    R = quat_to_matrix(q)

    Ad = np.zeros((6, 6))
    Ad[:3, :3] = R
    Ad[:3, 3:] = skew_symmetric(t) @ R
    Ad[3:, 3:] = R
    return Ad
