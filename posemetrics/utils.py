import numpy as np
import scipy.linalg as splinalg

from posemetrics.conventions import DEFAULT_CONVENTION
from posemetrics.groups import se3


def invsqrt(x):
    """Convenience function to compute the inverse square root of a scalar or a square matrix.

        Turns a measurement covariance into the stiffness (square root of the
        precision) used to weight residuals.
    """
    if hasattr(x, 'shape'):
        return np.linalg.inv(splinalg.sqrtm(x))

    return 1. / np.sqrt(x)


def numerical_jacobians(func, lhs, rhs, step=1e-6,
                        global_frame=DEFAULT_CONVENTION.global_frame,
                        coupled=DEFAULT_CONVENTION.coupled):
    """Central finite-difference Jacobians of a binary function of SE3 poses.

        Args:
            func : function of (lhs, rhs) returning a vector
            lhs  : left SE3 pose
            rhs  : right SE3 pose
            step : perturbation size along each tangent direction

        Returns:
            [J_lhs, J_rhs], each func-output-size x 6, w.r.t. perturbations
            applied by se3.plus() in the given convention
    """
    out_size = np.size(func(lhs, rhs))
    J_lhs = np.empty((out_size, se3.DOF))
    J_rhs = np.empty((out_size, se3.DOF))

    for i in range(se3.DOF):
        delta = np.zeros(se3.DOF)
        delta[i] = step

        lhs_fwd = se3.plus(lhs, delta, global_frame, coupled)
        lhs_bwd = se3.plus(lhs, -delta, global_frame, coupled)
        J_lhs[:, i] = (func(lhs_fwd, rhs) - func(lhs_bwd, rhs)) / (2. * step)

        rhs_fwd = se3.plus(rhs, delta, global_frame, coupled)
        rhs_bwd = se3.plus(rhs, -delta, global_frame, coupled)
        J_rhs[:, i] = (func(lhs, rhs_fwd) - func(lhs, rhs_bwd)) / (2. * step)

    return [J_lhs, J_rhs]


def check_jacobians(metric, lhs, rhs, step=1e-6, tol=1e-6, verbose=False):
    """Compare a metric's analytic Jacobians against finite differences.

        Returns:
            True if both Jacobians agree to within tol (max absolute error)
    """
    global_frame, coupled = metric.convention
    _, analytic = metric.evaluate(lhs, rhs, [True, True])
    numeric = numerical_jacobians(metric.evaluate, lhs, rhs, step,
                                  global_frame, coupled)

    ok = True
    for name, J_analytic, J_numeric in zip(['J_lhs', 'J_rhs'],
                                           analytic, numeric):
        err = np.max(np.abs(J_analytic - J_numeric))
        ok = ok and err <= tol

        if verbose:
            print('{} | {} | max error: {:10e} | {}'.format(
                metric, name, err, 'ok' if err <= tol else 'FAILED'))

    return ok
