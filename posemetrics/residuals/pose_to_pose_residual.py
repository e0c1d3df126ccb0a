import numpy as np

from posemetrics.groups import se3
from posemetrics.metrics import SE3Metric
from posemetrics.utils import invsqrt


class PoseToPoseResidual:
    """Binary pose-to-pose residual given relative pose measurement in SE3.

        The residual is the distance between the estimated relative pose
        T_2_0 * T_1_0^-1 and the measured T_2_1_obs.
    """

    def __init__(self, T_2_1_obs, stiffness, metric=None):
        self.T_2_1_obs = T_2_1_obs
        self.stiffness = stiffness
        self.metric = metric if metric is not None else SE3Metric()

    @classmethod
    def from_covariance(cls, T_2_1_obs, covariance, metric=None):
        return cls(T_2_1_obs, invsqrt(covariance), metric)

    def evaluate(self, params, compute_jacobians=None):
        T_1_0_est = params[0]
        T_2_0_est = params[1]
        global_frame, coupled = self.metric.convention

        if not compute_jacobians or not any(compute_jacobians):
            T_0_1_est = se3.inverse(T_1_0_est, False, global_frame, coupled)
            T_2_1_est = se3.compose(T_2_0_est, T_0_1_est, None,
                                    global_frame, coupled)
            residual = np.dot(self.stiffness,
                              self.metric.evaluate(T_2_1_est, self.T_2_1_obs))
            if compute_jacobians:
                return residual, [None for _ in enumerate(params)]
            return residual

        jacobians = [None for _ in enumerate(params)]

        if compute_jacobians[0]:
            T_0_1_est, J_inv = se3.inverse(
                T_1_0_est, True, global_frame, coupled)
        else:
            T_0_1_est = se3.inverse(T_1_0_est, False, global_frame, coupled)

        T_2_1_est, (J_2, J_0_1) = se3.compose(
            T_2_0_est, T_0_1_est, [compute_jacobians[1], compute_jacobians[0]],
            global_frame, coupled)

        distance, (J_dist, _) = self.metric.evaluate(
            T_2_1_est, self.T_2_1_obs, [True, False])
        residual = np.dot(self.stiffness, distance)

        if compute_jacobians[0]:
            jacobians[0] = np.dot(self.stiffness,
                                  J_dist.dot(J_0_1.dot(J_inv)))

        if compute_jacobians[1]:
            jacobians[1] = np.dot(self.stiffness, J_dist.dot(J_2))

        return residual, jacobians
