import numpy as np
from numba import njit

# Tangent vectors are ordered [rotation, translation] throughout.
# Every kernel takes and returns C-contiguous float64 arrays.


@njit(cache=True)
def skew(v):
    """Skew-symmetric matrix [v]x such that [v]x.dot(u) == cross(v, u)."""
    out = np.zeros((3, 3))
    out[0, 1] = -v[2]
    out[0, 2] = v[1]
    out[1, 0] = v[2]
    out[1, 2] = -v[0]
    out[2, 0] = -v[1]
    out[2, 1] = v[0]
    return out


@njit(cache=True)
def lower_block(top_left, bottom_left, bottom_right):
    """Assemble the 6x6 block lower-triangular matrix [[A, 0], [B, C]]."""
    out = np.zeros((6, 6))
    out[:3, :3] = top_left
    out[3:, :3] = bottom_left
    out[3:, 3:] = bottom_right
    return out


@njit(cache=True)
def swap_blocks(mat):
    """Reorder a 6x6 matrix between [rot, trans] and [trans, rot] tangents."""
    out = np.empty((6, 6))
    out[:3, :3] = mat[3:, 3:]
    out[:3, 3:] = mat[3:, :3]
    out[3:, :3] = mat[:3, 3:]
    out[3:, 3:] = mat[:3, :3]
    return out


@njit(cache=True)
def adjoint(R, t):
    """SE3 adjoint [[R, 0], [[t]x R, R]]."""
    return lower_block(R, np.dot(skew(t), R), R)


@njit(cache=True)
def decoupled_inverse_jacobian(R, t, global_frame):
    Rt = R.T.copy()
    if global_frame:
        return lower_block(-Rt, -np.dot(Rt, skew(t)), -Rt)
    return lower_block(-R, -skew(np.dot(Rt, t)), -Rt)


@njit(cache=True)
def decoupled_compose_lhs_jacobian(R_a, R_b, t_b, global_frame):
    if global_frame:
        return lower_block(np.eye(3), -skew(np.dot(R_a, t_b)), np.eye(3))
    return lower_block(R_b.T.copy(), -np.dot(R_a, skew(t_b)), np.eye(3))


@njit(cache=True)
def decoupled_compose_rhs_jacobian(R_a, global_frame):
    if global_frame:
        return lower_block(R_a, np.zeros((3, 3)), R_a)
    return lower_block(np.eye(3), np.zeros((3, 3)), R_a)


@njit(cache=True)
def decoupled_log_jacobian(J_rot):
    return lower_block(J_rot, np.zeros((3, 3)), np.eye(3))
