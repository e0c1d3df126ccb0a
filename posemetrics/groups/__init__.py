from posemetrics.groups import se3
