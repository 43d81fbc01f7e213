"""Gauss-Newton on SE(3) using the manifold metric and group_plus retraction."""

import numpy as np

from hypergeo.core.metrics import ManifoldMetric
from hypergeo.core.variables.groups import SE3, group_plus


def gauss_newton(targets, estimate: SE3, iterations: int = 20):
    """Minimize sum ||log(target^-1 * T)||^2 over T."""
    metric = ManifoldMetric()

    for _ in range(iterations):
        H = np.zeros((6, 6))
        g = np.zeros(6)
        for target in targets:
            J = np.empty((6, 6))
            d = metric.distance(estimate, target, J_lhs=J)
            H += J.T @ J
            g += J.T @ d

        delta = -np.linalg.solve(H, g)
        estimate = group_plus(delta, estimate)
        if np.linalg.norm(delta) < 1e-14:
            break

    return estimate


class TestPoseAlignment:
    """Align poses by iterating tangent-space increments."""

    def test_converges_to_target(self):
        target = SE3.random(np.random.default_rng(21), scale=0.5)

        estimate = gauss_newton([target], SE3.identity())

        np.testing.assert_allclose(ManifoldMetric().distance(estimate, target), np.zeros(6), atol=1e-10)

    def test_pose_average_is_stationary(self):
        rng = np.random.default_rng(22)
        center = SE3.random(rng, scale=0.5)
        targets = [group_plus(0.1 * rng.uniform(-1.0, 1.0, 6), center) for _ in range(8)]

        estimate = gauss_newton(targets, center)

        metric = ManifoldMetric()
        gradient = np.zeros(6)
        for target in targets:
            J = np.empty((6, 6))
            d = metric.distance(estimate, target, J_lhs=J)
            gradient += J.T @ d

        np.testing.assert_allclose(gradient, np.zeros(6), atol=1e-10)
        assert np.linalg.norm(metric.distance(estimate, center)) < 0.2
