from enum import Enum

import numpy as np

from posemetrics.conventions import Convention, DEFAULT_CONVENTION
from posemetrics.groups import se3
from posemetrics.metrics.metric import Metric

_GLOBAL = DEFAULT_CONVENTION.global_frame
_COUPLED = DEFAULT_CONVENTION.coupled


class Derivatives(Enum):
    """Which Jacobians a distance evaluation computes."""
    NONE = 0
    LHS = 1
    RHS = 2
    BOTH = 3

    @classmethod
    def select(cls, want_lhs, want_rhs):
        if want_lhs and want_rhs:
            return cls.BOTH
        if want_lhs:
            return cls.LHS
        if want_rhs:
            return cls.RHS
        return cls.NONE


def _distance_none(lhs, rhs, global_frame, coupled):
    rhs_inv = se3.inverse(rhs, False, global_frame, coupled)
    lhs_rhs_inv = se3.compose(lhs, rhs_inv, None, global_frame, coupled)
    return se3.log(lhs_rhs_inv, False, global_frame, coupled), None, None


def _distance_lhs(lhs, rhs, global_frame, coupled):
    rhs_inv = se3.inverse(rhs, False, global_frame, coupled)
    lhs_rhs_inv, (J_p_l, _) = se3.compose(
        lhs, rhs_inv, [True, False], global_frame, coupled)
    tangent, J_t_p = se3.log(lhs_rhs_inv, True, global_frame, coupled)
    return tangent, J_t_p.dot(J_p_l), None


def _distance_rhs(lhs, rhs, global_frame, coupled):
    rhs_inv, J_ir_r = se3.inverse(rhs, True, global_frame, coupled)
    lhs_rhs_inv, (_, J_p_ir) = se3.compose(
        lhs, rhs_inv, [False, True], global_frame, coupled)
    tangent, J_t_p = se3.log(lhs_rhs_inv, True, global_frame, coupled)
    return tangent, None, J_t_p.dot(J_p_ir.dot(J_ir_r))


def _distance_both(lhs, rhs, global_frame, coupled):
    rhs_inv, J_ir_r = se3.inverse(rhs, True, global_frame, coupled)
    lhs_rhs_inv, (J_p_l, J_p_ir) = se3.compose(
        lhs, rhs_inv, [True, True], global_frame, coupled)
    tangent, J_t_p = se3.log(lhs_rhs_inv, True, global_frame, coupled)
    return tangent, J_t_p.dot(J_p_l), J_t_p.dot(J_p_ir.dot(J_ir_r))


_PATHS = {
    Derivatives.NONE: _distance_none,
    Derivatives.LHS: _distance_lhs,
    Derivatives.RHS: _distance_rhs,
    Derivatives.BOTH: _distance_both,
}


def se3_distance(lhs, rhs, compute_jacobians=None,
                 global_frame=_GLOBAL, coupled=_COUPLED):
    """Tangent-space displacement log(lhs * rhs^-1) between two SE3 poses.

        Args:
            lhs               : left SE3 pose
            rhs               : right SE3 pose
            compute_jacobians : optional [wrt lhs, wrt rhs] booleans
            global_frame      : perturb in the fixed frame instead of the body frame
            coupled           : SE3 instead of SO3 x R3 Jacobians

        Returns:
            6-vector [rotation, translation], or (6-vector, [J_lhs, J_rhs])
            when compute_jacobians is given, with None in place of each
            Jacobian not requested
    """
    if compute_jacobians:
        path = Derivatives.select(compute_jacobians[0], compute_jacobians[1])
    else:
        path = Derivatives.NONE

    tangent, J_lhs, J_rhs = _PATHS[path](lhs, rhs, global_frame, coupled)

    if compute_jacobians:
        return tangent, [J_lhs, J_rhs]

    return tangent


def _write(buffer, value):
    np.copyto(buffer, np.reshape(value, np.shape(buffer)))


def se3_distance_into(lhs, rhs, output, J_lhs=None, J_rhs=None,
                      global_frame=_GLOBAL, coupled=_COUPLED):
    """Raw-buffer form of se3_distance().

        lhs and rhs are [qx, qy, qz, qw, tx, ty, tz] parameter blocks. The
        distance is written into output and each Jacobian into its buffer
        (36 values in row-major order, or a 6x6 array) unless the buffer is
        None. Buffers of the wrong size raise ValueError.
    """
    path = Derivatives.select(J_lhs is not None, J_rhs is not None)
    tangent, jac_lhs, jac_rhs = _PATHS[path](se3.from_parameters(lhs),
                                             se3.from_parameters(rhs),
                                             global_frame, coupled)

    _write(output, tangent)
    if jac_lhs is not None:
        _write(J_lhs, jac_lhs)
    if jac_rhs is not None:
        _write(J_rhs, jac_rhs)


class SE3Metric(Metric):
    """Manifold distance between SE3 poses with analytic Jacobians."""

    INPUT_SIZE = se3.NUM_PARAMETERS
    OUTPUT_SIZE = se3.DOF

    def __init__(self, global_frame=_GLOBAL, coupled=_COUPLED):
        self.convention = Convention(global_frame=bool(global_frame),
                                     coupled=bool(coupled))
        """Jacobian convention of this metric, fixed at construction."""

    def __repr__(self):
        return '{}(global_frame={}, coupled={})'.format(
            self.__class__.__name__, *self.convention)

    def input_size(self):
        return self.INPUT_SIZE

    def output_size(self):
        return self.OUTPUT_SIZE

    def distance(self, lhs, rhs, output, J_lhs=None, J_rhs=None):
        se3_distance_into(lhs, rhs, output, J_lhs, J_rhs,
                          *self.convention)

    def evaluate(self, lhs, rhs, compute_jacobians=None):
        """Distance between two SE3 poses in this metric's convention."""
        return se3_distance(lhs, rhs, compute_jacobians, *self.convention)
