"""Tests for Jacobian computation utilities."""

import numpy as np
import pytest

from hypergeo.core.math.jacobians import (
    JacobianTester,
    check_jacobian,
    finite_difference_jacobian,
    is_approx,
    jacobian_view,
    manifold_finite_difference_jacobian,
)
from hypergeo.core.variables.groups import SE3, group_plus


class TestJacobians:
    """Test Jacobian computation utilities."""

    def test_finite_difference_linear(self):
        """Test finite difference for linear function."""
        A = np.array([[1, 2], [3, 4], [5, 6]])

        def func(x):
            return A @ x

        J = finite_difference_jacobian(func, np.array([1.0, 2.0]))

        np.testing.assert_allclose(J, A, atol=1e-6)

    def test_finite_difference_quadratic(self):
        """Test finite difference for quadratic function."""
        def func(x):
            return np.array([x[0]**2, x[0]*x[1], x[1]**2])

        x = np.array([3.0, 4.0])
        J_analytic = np.array([
            [2*x[0], 0],
            [x[1], x[0]],
            [0, 2*x[1]]
        ])

        np.testing.assert_allclose(finite_difference_jacobian(func, x, h=1e-6), J_analytic, atol=1e-6)

    def test_finite_difference_methods(self):
        """Central differences are exact on quadratics, forward are not."""
        def func(x):
            return np.array([x[0]**2 + x[1]])

        x = np.array([2.0, 3.0])
        J_exact = np.array([[4.0, 1.0]])

        J_forward = finite_difference_jacobian(func, x, h=1e-4, method="forward")
        J_central = finite_difference_jacobian(func, x, h=1e-4, method="central")

        error_forward = np.max(np.abs(J_forward - J_exact))
        error_central = np.max(np.abs(J_central - J_exact))

        assert error_central < error_forward
        assert error_central < 1e-9

    def test_finite_difference_scalar_function(self):
        """Test finite difference for scalar function."""
        J = finite_difference_jacobian(lambda x: x[0]**3, np.array([2.0]), h=1e-6)

        np.testing.assert_allclose(J, [[12.0]], atol=1e-6)

    def test_invalid_finite_difference_method(self):
        """Test error handling for invalid finite difference method."""
        with pytest.raises(ValueError):
            finite_difference_jacobian(lambda x: x**2, np.array([1.0]), method="backward")

    def test_manifold_finite_difference(self):
        """Tangent-space differences of log(x) at the identity give the identity."""
        def plus(element, j, eps):
            delta = np.zeros(6)
            delta[j] = eps
            return group_plus(delta, element)

        J = manifold_finite_difference_jacobian(
            lambda x: np.asarray(x.to_tangent()), SE3.identity(), plus, 6, h=1e-6
        )

        np.testing.assert_allclose(J, np.eye(6), atol=1e-9)

    def test_check_jacobian_correct(self):
        """Test Jacobian checker with correct implementation."""
        def func(x):
            return np.array([x[0]**2, x[0]*x[1]])

        def jacobian(x):
            return np.array([
                [2*x[0], 0],
                [x[1], x[0]]
            ])

        is_correct, max_error, _ = check_jacobian(func, jacobian, np.array([1.5, 2.5]))

        assert is_correct
        assert max_error < 1e-6

    def test_check_jacobian_incorrect(self):
        """Test Jacobian checker with incorrect implementation."""
        is_correct, max_error, _ = check_jacobian(
            lambda x: np.array([x[0]**2]), lambda x: np.array([[x[0]]]), np.array([2.0])
        )

        assert not is_correct
        assert max_error > 1e-3

    def test_jacobian_tester_class(self):
        """Test JacobianTester helper class."""
        def func(x):
            return np.array([x[0]**2, x[0]*x[1], x[1]**3])

        def jacobian(x):
            return np.array([
                [2*x[0], 0],
                [x[1], x[0]],
                [0, 3*x[1]**2]
            ])

        tester = JacobianTester(atol=1e-6, rtol=1e-6)
        points = tester.generate_random_test_points(n_dims=2, n_points=5, scale=2.0, seed=42)

        assert len(points) == 5
        assert all(p.shape == (2,) and np.all(np.abs(p) <= 2.0) for p in points)
        assert tester.test_jacobian(func, jacobian, points)


class TestIsApprox:
    """Test relative matrix comparison."""

    def test_relative(self):
        a = np.array([[1000.0, 0.0], [0.0, 1000.0]])
        assert is_approx(a, a + 1e-6, 1e-7)
        assert not is_approx(a, a + 1.0, 1e-7)

    def test_zero(self):
        assert is_approx(np.zeros((2, 2)), np.zeros((2, 2)), 1e-7)
        assert not is_approx(np.zeros((2, 2)), np.full((2, 2), 1e-3), 1e-7)

    def test_shape_mismatch(self):
        assert not is_approx(np.zeros(3), np.zeros(4), 1e-7)


class TestJacobianView:
    """Test caller-provided Jacobian buffers."""

    def test_matrix_buffer(self):
        buffer = np.zeros((2, 3))
        assert jacobian_view(buffer, 2, 3) is buffer

    def test_flat_buffer_is_row_major(self):
        buffer = np.zeros(6)
        view = jacobian_view(buffer, 2, 3)
        view[0, 2] = 1.0
        view[1, 0] = 2.0

        np.testing.assert_array_equal(buffer, [0.0, 0.0, 1.0, 2.0, 0.0, 0.0])

    def test_wrong_size(self):
        with pytest.raises(ValueError):
            jacobian_view(np.zeros((3, 2)), 2, 3)

        with pytest.raises(ValueError):
            jacobian_view(np.zeros(5), 2, 3)

    def test_read_only_buffer(self):
        buffer = np.zeros((2, 2))
        buffer.flags.writeable = False

        with pytest.raises(ValueError):
            jacobian_view(buffer, 2, 2)

    def test_non_contiguous_flat_buffer(self):
        with pytest.raises(ValueError):
            jacobian_view(np.zeros(8)[::2], 2, 2)

    def test_not_an_array(self):
        with pytest.raises(ValueError):
            jacobian_view([0.0] * 4, 2, 2)
