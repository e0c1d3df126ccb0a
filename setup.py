from setuptools import setup

setup(
    name='posemetrics',
    version='0.0.0',
    description='SE3 manifold distances with analytic Jacobians in Python using numpy and liegroups.',
    author='posemetrics developers',
    license='MIT',
    packages=['posemetrics', 'posemetrics.groups',
              'posemetrics.metrics', 'posemetrics.residuals'],
    install_requires=['numpy', 'scipy', 'numba', 'liegroups'],
    extras_require={'test': ['pytest']}
)
