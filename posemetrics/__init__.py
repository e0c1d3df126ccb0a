from posemetrics.conventions import Convention, DEFAULT_CONVENTION
from posemetrics.metrics import Metric, SE3Metric, se3_distance, se3_distance_into
