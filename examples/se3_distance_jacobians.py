import itertools

import numpy as np

from liegroups import SE3, SO3

from posemetrics.groups import se3
from posemetrics.metrics import SE3Metric
from posemetrics.utils import check_jacobians

T_1_0 = SE3(SO3.rotz(np.pi / 4), np.array([1., 0.5, 0.]))
T_2_0 = SE3(SO3.rotx(-np.pi / 6), np.array([0.2, -0.3, 1.]))

# Value form
for global_frame, coupled in itertools.product([False, True], [False, True]):
    metric = SE3Metric(global_frame, coupled)
    distance = metric.evaluate(T_1_0, T_2_0)
    print('{}: {}'.format(metric, distance))
    check_jacobians(metric, T_1_0, T_2_0, verbose=True)

print()

# Raw-buffer form, as driven by an optimizer passing flat parameter blocks
metric = SE3Metric()
lhs = se3.to_parameters(T_1_0)
rhs = se3.to_parameters(T_2_0)
output = np.empty(metric.output_size())
J_rhs = np.empty(metric.output_size() * metric.output_size())

metric.distance(lhs, rhs, output, None, J_rhs)
print('distance: {}'.format(output))
print('J_rhs:\n{}'.format(J_rhs.reshape(6, 6)))
