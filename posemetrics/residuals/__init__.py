from posemetrics.residuals.pose_residual import PoseResidual
from posemetrics.residuals.pose_to_pose_residual import PoseToPoseResidual
