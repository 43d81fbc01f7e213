"""Jacobian buffers and finite-difference checking utilities.

Jacobians are dense row-major arrays of shape (output_dim, input_dim).
"""

import numpy as np
from typing import Callable, Optional


def jacobian_view(buffer: np.ndarray, rows: int, cols: int) -> np.ndarray:
    """Get a writeable (rows, cols) view on a caller-provided Jacobian buffer.

    Args:
        buffer: Either a (rows, cols) array or a flat C-contiguous buffer of
            rows * cols elements
        rows: Output dimension
        cols: Input dimension

    Returns:
        View sharing memory with buffer
    """
    if not isinstance(buffer, np.ndarray):
        raise ValueError(f"Jacobian buffer must be a numpy array, got {type(buffer).__name__}")
    if not buffer.flags.writeable:
        raise ValueError("Jacobian buffer is read-only")

    if buffer.shape == (rows, cols):
        return buffer

    if buffer.ndim == 1 and buffer.size == rows * cols:
        if not buffer.flags.c_contiguous:
            raise ValueError("Flat Jacobian buffer must be C-contiguous")
        return buffer.reshape(rows, cols)

    raise ValueError(f"Jacobian buffer must have shape ({rows}, {cols}) "
                     f"or {rows * cols} elements, got shape {buffer.shape}")


def finite_difference_jacobian(
    func: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    h: float = 1e-8,
    method: str = "central"
) -> np.ndarray:
    """Compute Jacobian using finite differences.

    Args:
        func: Function that takes x and returns residual vector
        x: Input parameters
        h: Step size for finite differences
        method: Finite difference method ("forward", "central")

    Returns:
        Jacobian matrix J where J[i,j] = df_i/dx_j
    """
    x = np.atleast_1d(np.asarray(x, dtype=float))

    def plus(value, j, step):
        out = value.copy()
        out[j] += step
        return out

    return _difference_jacobian(func, x, plus, x.size, h, method)


def manifold_finite_difference_jacobian(
    func: Callable,
    element,
    plus: Callable,
    tangent_dim: int,
    h: float = 1e-8,
    method: str = "central"
) -> np.ndarray:
    """Compute a Jacobian with respect to tangent-space perturbations.

    Column j is the derivative of func(plus(element, j, eps)) at eps = 0, so
    elements that do not support coordinate-wise addition (rotations, poses)
    are perturbed through their own retraction.

    Args:
        func: Function of the element returning a vector
        element: Point at which to differentiate
        plus: plus(element, j, eps) returns element perturbed by eps along
            tangent basis vector j
        tangent_dim: Dimension of the tangent space
        h: Step size
        method: "forward" or "central"

    Returns:
        Jacobian matrix of shape (output_dim, tangent_dim)
    """
    return _difference_jacobian(func, element, plus, tangent_dim, h, method)


def _difference_jacobian(func, x, plus, n, h, method):
    f0 = np.atleast_1d(func(x))
    J = np.zeros((f0.size, n))

    if method == "forward":
        for j in range(n):
            f_plus = np.atleast_1d(func(plus(x, j, h)))
            J[:, j] = (f_plus - f0) / h

    elif method == "central":
        for j in range(n):
            f_plus = np.atleast_1d(func(plus(x, j, h)))
            f_minus = np.atleast_1d(func(plus(x, j, -h)))
            J[:, j] = (f_plus - f_minus) / (2 * h)

    else:
        raise ValueError(f"Unknown finite difference method: {method}")

    return J


def is_approx(a: np.ndarray, b: np.ndarray, precision: float) -> bool:
    """Relative comparison in Frobenius norm: |a - b| <= p * min(|a|, |b|).

    Falls back to an absolute comparison when both matrices are zero.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        return False

    diff = np.linalg.norm(a - b)
    scale = min(np.linalg.norm(a), np.linalg.norm(b))
    if scale == 0.0:
        return diff <= precision
    return diff <= precision * scale


def check_jacobian(
    func: Callable[[np.ndarray], np.ndarray],
    jacobian_func: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    h: float = 1e-6,
    atol: float = 1e-6,
    rtol: float = 1e-6
) -> tuple[bool, float, np.ndarray]:
    """Check analytic Jacobian against central finite differences.

    Args:
        func: Function that computes residuals
        jacobian_func: Function that computes analytic Jacobian
        x: Input parameters
        h: Step size for finite differences
        atol: Absolute tolerance
        rtol: Relative tolerance

    Returns:
        Tuple of (is_correct, max_error, error_matrix)
    """
    J_analytic = jacobian_func(x)
    J_numeric = finite_difference_jacobian(func, x, h)

    error = np.abs(J_analytic - J_numeric)
    is_correct = np.allclose(J_analytic, J_numeric, atol=atol, rtol=rtol)

    return is_correct, float(np.max(error)), error


class JacobianTester:
    """Helper class for testing Jacobian implementations at random points."""

    def __init__(self, atol: float = 1e-6, rtol: float = 1e-6, h: float = 1e-6):
        """Initialize tester with tolerances and step size."""
        self.atol = atol
        self.rtol = rtol
        self.h = h

    def test_jacobian(
        self,
        func: Callable[[np.ndarray], np.ndarray],
        jacobian_func: Callable[[np.ndarray], np.ndarray],
        test_points: list[np.ndarray]
    ) -> bool:
        """Test Jacobian at multiple points.

        Returns:
            True if every test point passes
        """
        return all(
            check_jacobian(func, jacobian_func, x, h=self.h, atol=self.atol, rtol=self.rtol)[0]
            for x in test_points
        )

    def generate_random_test_points(
        self,
        n_dims: int,
        n_points: int = 10,
        scale: float = 1.0,
        seed: Optional[int] = None
    ) -> list[np.ndarray]:
        """Generate uniform random test points in [-scale, scale]^n_dims."""
        rng = np.random.default_rng(seed)
        return [scale * rng.uniform(-1.0, 1.0, n_dims) for _ in range(n_points)]
