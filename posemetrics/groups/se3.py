import numpy as np

from liegroups import SE3, SO3

from posemetrics import kernels
from posemetrics.conventions import DEFAULT_CONVENTION

NUM_PARAMETERS = 7
"""Parameter block size: quaternion [qx, qy, qz, qw] then translation."""
DOF = 6
"""Tangent size: rotation [wx, wy, wz] then translation [vx, vy, vz]."""
NEAR_PI_COS = -0.9
"""Below this cosine the rotation axis is recovered from the symmetric part."""

_GLOBAL = DEFAULT_CONVENTION.global_frame
_COUPLED = DEFAULT_CONVENTION.coupled


def _rot(rot):
    return np.ascontiguousarray(rot.as_matrix(), dtype=np.float64)


def _rot_trans(T):
    return _rot(T.rot), np.ascontiguousarray(T.trans, dtype=np.float64)


def _swap(xi):
    # liegroups orders the se(3) algebra as [rho, phi]
    xi = np.asarray(xi, dtype=np.float64)
    return np.concatenate((xi[3:], xi[:3]))


def _so3_log(rot):
    """Rotation vector of an SO3 element, valid up to and including pi.

        liegroups' SO3.log divides the antisymmetric part by sin(angle),
        which vanishes at pi.
    """
    mat = _rot(rot)
    axis_sin = 0.5 * SO3.vee(mat - mat.T)
    sin_angle = np.linalg.norm(axis_sin)
    cos_angle = np.clip(0.5 * np.trace(mat) - 0.5, -1., 1.)
    angle = np.arctan2(sin_angle, cos_angle)

    if cos_angle < NEAR_PI_COS:
        # (R + R^T) / 2 == cos(angle) I + (1 - cos(angle)) a a^T
        outer = (0.5 * (mat + mat.T) - cos_angle * np.identity(3)) / \
            (1. - cos_angle)
        k = np.argmax(np.diag(outer))
        axis = outer[:, k] / np.linalg.norm(outer[:, k])
        if np.dot(axis, axis_sin) < 0.:
            axis = -axis
        return angle * axis

    if np.isclose(sin_angle, 0.):
        return axis_sin

    return (angle / sin_angle) * axis_sin


def _se3_log(T):
    """se(3) logarithm in liegroups order [rho, phi], valid up to pi."""
    phi = _so3_log(T.rot)
    rho = SO3.inv_left_jacobian(phi).dot(
        np.asarray(T.trans, dtype=np.float64))
    return np.concatenate((rho, phi))


def from_parameters(params):
    """Build an SE3 pose from a [qx, qy, qz, qw, tx, ty, tz] parameter block."""
    params = np.asarray(params, dtype=np.float64)
    qx, qy, qz, qw = params[:4]
    rot = SO3.from_quaternion(np.array([qw, qx, qy, qz]))
    return SE3(rot, params[4:NUM_PARAMETERS].copy())


def to_parameters(T, out=None):
    """Write an SE3 pose into a [qx, qy, qz, qw, tx, ty, tz] parameter block."""
    if out is None:
        out = np.empty(NUM_PARAMETERS)

    qw, qx, qy, qz = T.rot.to_quaternion()
    out[:4] = [qx, qy, qz, qw]
    out[4:NUM_PARAMETERS] = T.trans
    return out


def exp(tau, coupled=_COUPLED):
    """Map a tangent vector to a pose, inverting log() for the same chart."""
    tau = np.asarray(tau, dtype=np.float64)
    if coupled:
        return SE3.exp(_swap(tau))
    return SE3(SO3.exp(tau[:3]), tau[3:].copy())


def plus(T, tau, global_frame=_GLOBAL, coupled=_COUPLED):
    """Perturb a pose by a tangent vector in the given convention.

        All Jacobians in this module are derivatives with respect to
        perturbations applied by this function.
    """
    tau = np.asarray(tau, dtype=np.float64)
    if coupled:
        if global_frame:
            return SE3.exp(_swap(tau)).dot(T)
        return T.dot(SE3.exp(_swap(tau)))

    if global_frame:
        rot = SO3.exp(tau[:3]).dot(T.rot)
    else:
        rot = T.rot.dot(SO3.exp(tau[:3]))
    return SE3(rot, np.asarray(T.trans, dtype=np.float64) + tau[3:])


def minus(T_a, T_b, global_frame=_GLOBAL, coupled=_COUPLED):
    """Tangent vector tau such that plus(T_b, tau) == T_a."""
    if coupled:
        if global_frame:
            return _swap(_se3_log(T_a.dot(T_b.inv())))
        return _swap(_se3_log(T_b.inv().dot(T_a)))

    if global_frame:
        phi = _so3_log(T_a.rot.dot(T_b.rot.inv()))
    else:
        phi = _so3_log(T_b.rot.inv().dot(T_a.rot))
    return np.concatenate((np.asarray(phi, dtype=np.float64),
                           np.asarray(T_a.trans, dtype=np.float64) -
                           np.asarray(T_b.trans, dtype=np.float64)))


def inverse(T, compute_jacobian=False, global_frame=_GLOBAL, coupled=_COUPLED):
    """Group inverse, optionally with its 6x6 Jacobian."""
    T_inv = T.inv()

    if not compute_jacobian:
        return T_inv

    R, t = _rot_trans(T)
    if coupled:
        if global_frame:
            R_inv, t_inv = _rot_trans(T_inv)
            jacobian = -kernels.adjoint(R_inv, t_inv)
        else:
            jacobian = -kernels.adjoint(R, t)
    else:
        jacobian = kernels.decoupled_inverse_jacobian(R, t, global_frame)

    return T_inv, jacobian


def compose(T_a, T_b, compute_jacobians=None,
            global_frame=_GLOBAL, coupled=_COUPLED):
    """Group composition T_a * T_b.

        Args:
            compute_jacobians : optional [wrt T_a, wrt T_b] booleans

        Returns:
            T_a * T_b, or (T_a * T_b, [J_a, J_b]) when compute_jacobians is
            given, with None in place of each Jacobian not requested
    """
    T_ab = T_a.dot(T_b)

    if not compute_jacobians:
        return T_ab

    jacobians = [None, None]

    if compute_jacobians[0]:
        if coupled:
            if global_frame:
                jacobians[0] = np.identity(DOF)
            else:
                R_b_inv, t_b_inv = _rot_trans(T_b.inv())
                jacobians[0] = kernels.adjoint(R_b_inv, t_b_inv)
        else:
            R_a = _rot(T_a.rot)
            R_b, t_b = _rot_trans(T_b)
            jacobians[0] = kernels.decoupled_compose_lhs_jacobian(
                R_a, R_b, t_b, global_frame)

    if compute_jacobians[1]:
        if coupled:
            if global_frame:
                R_a, t_a = _rot_trans(T_a)
                jacobians[1] = kernels.adjoint(R_a, t_a)
            else:
                jacobians[1] = np.identity(DOF)
        else:
            R_a = _rot(T_a.rot)
            jacobians[1] = kernels.decoupled_compose_rhs_jacobian(
                R_a, global_frame)

    return T_ab, jacobians


def log(T, compute_jacobian=False, global_frame=_GLOBAL, coupled=_COUPLED):
    """Logarithmic map to the tangent space, optionally with its Jacobian.

        The coupled chart is the se(3) logarithm, the decoupled chart is
        [Log(R), t].
    """
    if coupled:
        xi = _se3_log(T)
        tau = _swap(xi)
    else:
        phi = _so3_log(T.rot)
        tau = np.concatenate((phi, np.asarray(T.trans, dtype=np.float64)))

    if not compute_jacobian:
        return tau

    if coupled:
        # Jr^-1(xi) == Jl^-1(-xi)
        if not global_frame:
            xi = -xi
        jacobian = kernels.swap_blocks(
            np.asarray(SE3.inv_left_jacobian(xi), dtype=np.float64))
    else:
        if not global_frame:
            phi = -phi
        jacobian = kernels.decoupled_log_jacobian(
            np.asarray(SO3.inv_left_jacobian(phi), dtype=np.float64))

    return tau, jacobian
