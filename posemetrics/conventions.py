import os
from collections import namedtuple


Convention = namedtuple('Convention', ['global_frame', 'coupled'])
"""Jacobian convention shared by every primitive in one distance evaluation.

    global_frame -- perturb in the fixed frame (Exp(d) * T) instead of the
                    body frame (T * Exp(d))
    coupled      -- use the SE3 tangent instead of SO3 x R3
"""

GLOBAL_ENV_VAR = 'POSEMETRICS_GLOBAL_DERIVATIVES'
COUPLED_ENV_VAR = 'POSEMETRICS_COUPLED_DERIVATIVES'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')


def _parse_flag(environ, name, default):
    value = environ.get(name)
    if value is None or not value.strip():
        return default

    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False

    raise ValueError('{} must be one of {}, got \'{}\''.format(
        name, ', '.join(_TRUE_VALUES + _FALSE_VALUES), value))


def convention_from_environment(environ=None):
    """Build the default convention from environment variables.

        Args:
            environ : mapping to read from (defaults to os.environ)

        Returns:
            Convention, global_frame defaults to False and coupled to True
    """
    if environ is None:
        environ = os.environ

    return Convention(global_frame=_parse_flag(environ, GLOBAL_ENV_VAR, False),
                      coupled=_parse_flag(environ, COUPLED_ENV_VAR, True))


DEFAULT_CONVENTION = convention_from_environment()
"""Process-wide default convention, resolved once at import."""
