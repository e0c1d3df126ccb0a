class Metric:
    """Distance between two elements of a manifold.

        Subclasses evaluate distances over flat float arrays so that callers
        can drive them with raw parameter, residual and Jacobian blocks.
    """

    def input_size(self):
        """Number of parameters of one input element."""
        raise NotImplementedError

    def output_size(self):
        """Number of components of the distance."""
        raise NotImplementedError

    def distance(self, lhs, rhs, output, J_lhs=None, J_rhs=None):
        """Write the distance between lhs and rhs into output.

            Args:
                lhs    : input_size() parameters of the left element
                rhs    : input_size() parameters of the right element
                output : output_size() array to write the distance into
                J_lhs  : optional output_size() x output_size() array for the
                         Jacobian w.r.t. lhs, None to skip it
                J_rhs  : as J_lhs, w.r.t. rhs
        """
        raise NotImplementedError
