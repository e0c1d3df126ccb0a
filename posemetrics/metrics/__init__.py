from posemetrics.metrics.metric import Metric
from posemetrics.metrics.se3_metric import (Derivatives, SE3Metric,
                                            se3_distance, se3_distance_into)
