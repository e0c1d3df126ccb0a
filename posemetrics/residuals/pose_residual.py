import numpy as np

from posemetrics.metrics import SE3Metric
from posemetrics.utils import invsqrt


class PoseResidual:
    """Unary pose residual given absolute pose measurement in SE3."""

    def __init__(self, T_obs, stiffness, metric=None):
        self.T_obs = T_obs
        self.stiffness = stiffness
        self.metric = metric if metric is not None else SE3Metric()

    @classmethod
    def from_covariance(cls, T_obs, covariance, metric=None):
        return cls(T_obs, invsqrt(covariance), metric)

    def evaluate(self, params, compute_jacobians=None):
        T_est = params[0]

        if compute_jacobians:
            jacobians = [None for _ in enumerate(params)]

            distance, (J_est, _) = self.metric.evaluate(
                T_est, self.T_obs, [compute_jacobians[0], False])
            residual = np.dot(self.stiffness, distance)

            if compute_jacobians[0]:
                jacobians[0] = np.dot(self.stiffness, J_est)

            return residual, jacobians

        return np.dot(self.stiffness, self.metric.evaluate(T_est, self.T_obs))
