import itertools

import numpy as np
import pytest

from liegroups import SE3, SO3

from posemetrics import kernels
from posemetrics.groups import se3

np.random.seed(7)

CONVENTIONS = list(itertools.product([False, True], [False, True]))
STEP = 1e-6


def random_pose(scale=0.5):
    return SE3.exp(scale * np.random.uniform(-1., 1., 6))


def fail(*args):
    raise AssertionError('unrequested Jacobian was built')


def numerical_group_jacobian(func, T, global_frame, coupled):
    """Jacobian of a pose-valued function via plus() and minus()."""
    T_out = func(T)
    jacobian = np.empty((6, 6))
    for i in range(6):
        delta = np.zeros(6)
        delta[i] = STEP
        fwd = se3.minus(func(se3.plus(T, delta, global_frame, coupled)),
                        T_out, global_frame, coupled)
        bwd = se3.minus(func(se3.plus(T, -delta, global_frame, coupled)),
                        T_out, global_frame, coupled)
        jacobian[:, i] = (fwd - bwd) / (2. * STEP)
    return jacobian


class TestParameters:

    def test_round_trip(self):
        T = random_pose()
        params = se3.to_parameters(T)
        assert params.shape == (se3.NUM_PARAMETERS,)
        assert np.isclose(np.linalg.norm(params[:4]), 1.)
        assert np.allclose(se3.from_parameters(params).as_matrix(),
                           T.as_matrix())

    def test_layout(self):
        params = np.array([0., 0., 1., 0., 1., 2., 3.])
        T = se3.from_parameters(params)
        assert np.allclose(T.trans, [1., 2., 3.])
        assert np.allclose(T.rot.as_matrix(), np.diag([-1., -1., 1.]))

    def test_output_buffer(self):
        out = np.zeros(7)
        result = se3.to_parameters(SE3.identity(), out)
        assert result is out
        assert np.allclose(out, [0., 0., 0., 1., 0., 0., 0.])


class TestExpLog:

    @pytest.mark.parametrize('coupled', [False, True])
    def test_exp_log(self, coupled):
        T = random_pose()
        assert np.allclose(se3.exp(se3.log(T, coupled=coupled),
                                   coupled).as_matrix(), T.as_matrix())

    def test_coupled_chart(self):
        T = random_pose()
        xi = SE3.log(T)
        assert np.allclose(se3.log(T, coupled=True), np.hstack((xi[3:], xi[:3])))

    def test_decoupled_chart(self):
        T = random_pose()
        tau = se3.log(T, coupled=False)
        assert np.allclose(tau[:3], T.rot.log())
        assert np.allclose(tau[3:], T.trans)

    @pytest.mark.parametrize('global_frame,coupled', CONVENTIONS)
    def test_plus_minus(self, global_frame, coupled):
        T_a = random_pose()
        T_b = random_pose()
        tau = se3.minus(T_a, T_b, global_frame, coupled)
        assert np.allclose(se3.plus(T_b, tau, global_frame, coupled).as_matrix(),
                           T_a.as_matrix())

    @pytest.mark.parametrize('global_frame', [False, True])
    def test_plus_zero(self, global_frame):
        T = random_pose()
        for coupled in [False, True]:
            assert np.allclose(
                se3.plus(T, np.zeros(6), global_frame, coupled).as_matrix(),
                T.as_matrix())


class TestPrimitiveJacobians:

    @pytest.mark.parametrize('global_frame,coupled', CONVENTIONS)
    def test_inverse(self, global_frame, coupled):
        T = random_pose()
        T_inv, jacobian = se3.inverse(T, True, global_frame, coupled)
        assert np.allclose(T_inv.as_matrix(), T.inv().as_matrix())
        assert np.allclose(jacobian, numerical_group_jacobian(
            lambda X: X.inv(), T, global_frame, coupled), atol=1e-6)

    @pytest.mark.parametrize('global_frame,coupled', CONVENTIONS)
    def test_compose(self, global_frame, coupled):
        T_a = random_pose()
        T_b = random_pose()
        T_ab, (J_a, J_b) = se3.compose(T_a, T_b, [True, True],
                                       global_frame, coupled)
        assert np.allclose(T_ab.as_matrix(), T_a.dot(T_b).as_matrix())
        assert np.allclose(J_a, numerical_group_jacobian(
            lambda X: X.dot(T_b), T_a, global_frame, coupled), atol=1e-6)
        assert np.allclose(J_b, numerical_group_jacobian(
            lambda X: T_a.dot(X), T_b, global_frame, coupled), atol=1e-6)

    @pytest.mark.parametrize('global_frame,coupled', CONVENTIONS)
    def test_log(self, global_frame, coupled):
        T = random_pose()
        tau, jacobian = se3.log(T, True, global_frame, coupled)
        assert np.allclose(tau, se3.log(T, False, global_frame, coupled))

        numeric = np.empty((6, 6))
        for i in range(6):
            delta = np.zeros(6)
            delta[i] = STEP
            fwd = se3.log(se3.plus(T, delta, global_frame, coupled),
                          coupled=coupled)
            bwd = se3.log(se3.plus(T, -delta, global_frame, coupled),
                          coupled=coupled)
            numeric[:, i] = (fwd - bwd) / (2. * STEP)
        assert np.allclose(jacobian, numeric, atol=1e-6)

    def test_compose_requests(self):
        T_a = random_pose()
        T_b = random_pose()
        assert isinstance(se3.compose(T_a, T_b), SE3)
        _, jac1 = se3.compose(T_a, T_b, [True, False])
        _, jac2 = se3.compose(T_a, T_b, [False, True])
        _, jac3 = se3.compose(T_a, T_b, [False, False])
        assert jac1[0].shape == (6, 6) and jac1[1] is None
        assert jac2[0] is None and jac2[1].shape == (6, 6)
        assert jac3[0] is None and jac3[1] is None

    def test_inverse_without_jacobian(self, monkeypatch):
        T = random_pose()
        for kernel in ['adjoint', 'decoupled_inverse_jacobian']:
            monkeypatch.setattr(kernels, kernel, fail)
        assert isinstance(se3.inverse(T), SE3)

    @pytest.mark.parametrize('global_frame,coupled,kernel', [
        (False, False, 'decoupled_compose_rhs_jacobian'),
        (True, False, 'decoupled_compose_rhs_jacobian'),
        (True, True, 'adjoint'),
    ])
    def test_compose_skips_rhs_jacobian(self, monkeypatch,
                                        global_frame, coupled, kernel):
        T_a = random_pose()
        T_b = random_pose()
        monkeypatch.setattr(kernels, kernel, fail)
        _, (J_a, J_b) = se3.compose(T_a, T_b, [True, False],
                                    global_frame, coupled)
        assert J_a.shape == (6, 6)
        assert J_b is None

    @pytest.mark.parametrize('global_frame,coupled,kernel', [
        (False, False, 'decoupled_compose_lhs_jacobian'),
        (True, False, 'decoupled_compose_lhs_jacobian'),
        (False, True, 'adjoint'),
    ])
    def test_compose_skips_lhs_jacobian(self, monkeypatch,
                                        global_frame, coupled, kernel):
        T_a = random_pose()
        T_b = random_pose()
        monkeypatch.setattr(kernels, kernel, fail)
        _, (J_a, J_b) = se3.compose(T_a, T_b, [False, True],
                                    global_frame, coupled)
        assert J_a is None
        assert J_b.shape == (6, 6)


class TestLogNearPi:
    AXIS = np.array([1., 2., -2.]) / 3.

    @pytest.mark.parametrize('coupled', [False, True])
    def test_half_turn(self, coupled):
        T = se3.from_parameters([0., 0., 1., 0., 1., 2., 3.])
        tau = se3.log(T, coupled=coupled)
        assert np.allclose(np.abs(tau[:3]), [0., 0., np.pi])
        assert np.allclose(se3.exp(tau, coupled).as_matrix(), T.as_matrix())

    @pytest.mark.parametrize('coupled', [False, True])
    def test_half_turn_about_oblique_axis(self, coupled):
        T = SE3(SO3.exp(np.pi * self.AXIS), np.array([0.5, -1., 2.]))
        tau = se3.log(T, coupled=coupled)
        assert np.isclose(np.linalg.norm(tau[:3]), np.pi)
        assert np.allclose(se3.exp(tau, coupled).as_matrix(), T.as_matrix())

    @pytest.mark.parametrize('coupled', [False, True])
    def test_just_below_half_turn(self, coupled):
        angle = np.pi - 1e-9
        T = SE3(SO3.exp(angle * self.AXIS), np.array([0.5, -1., 2.]))
        tau = se3.log(T, coupled=coupled)
        assert np.isclose(np.linalg.norm(tau[:3]), angle, rtol=0., atol=1e-12)
        assert np.allclose(tau[:3] / np.linalg.norm(tau[:3]), self.AXIS)
        assert np.allclose(se3.exp(tau, coupled).as_matrix(), T.as_matrix())

    @pytest.mark.parametrize('global_frame,coupled', CONVENTIONS)
    def test_plus_minus(self, global_frame, coupled):
        T_b = random_pose()
        T_a = SE3(SO3.exp((np.pi - 1e-9) * self.AXIS),
                  np.array([0.5, -1., 2.])).dot(T_b)
        tau = se3.minus(T_a, T_b, global_frame, coupled)
        assert np.allclose(se3.plus(T_b, tau, global_frame, coupled).as_matrix(),
                           T_a.as_matrix())

