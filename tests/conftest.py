"""Test configuration for the starTOV test suite."""

import numpy as np
import pytest
import jax.numpy as jnp

from starTOV import eos
from starTOV.config import SequenceConfig, TOVConfig
from starTOV.tov import GRTOVSolver, StellarModel


@pytest.fixture
def polytrope():
    """Gamma = 2 polytrope with K = 100, the standard numerical-relativity test EOS."""
    return eos.Polytrope(100.0, 2.0)


@pytest.fixture
def piecewise_polytrope():
    """Three-segment polytrope stiffening with density."""
    return eos.PiecewisePolytrope(
        boundaries=[1e-3, 3e-3], gammas=[2.0, 2.5, 3.0], K=100.0
    )


@pytest.fixture
def tabulated_polytrope():
    """Tabulated samples of the K = 100, Gamma = 2 polytrope, starting at zero."""
    rho = np.concatenate([[0.0], np.logspace(-12, -1, 600)])
    p = 100.0 * rho**2
    e = rho + p
    return eos.TabulatedEOS(rho, p, e)


@pytest.fixture
def constant_density():
    """Incompressible matter with unit energy density."""
    return eos.ConstantDensity(1.0)


@pytest.fixture
def solver():
    """GR solver with default tolerances and no progress bar."""
    return GRTOVSolver(TOVConfig(sequence=SequenceConfig(show_progress=False)))


@pytest.fixture(scope="module")
def polytrope_star():
    """Polytrope K = 100, Gamma = 2 star at P_c = 1e-3 (shared, solving is slow)."""
    return GRTOVSolver().solve(eos.Polytrope(100.0, 2.0), 1e-3)


@pytest.fixture
def model_factory():
    """Build a StellarModel from hand-made profiles for analysis tests."""

    def make_model(r, p, epsilon, m=None, mass=1.0):
        r = jnp.asarray(r, dtype=float)
        p = jnp.asarray(p, dtype=float)
        epsilon = jnp.asarray(epsilon, dtype=float)
        m = jnp.zeros_like(r) if m is None else jnp.asarray(m, dtype=float)
        return StellarModel(
            central_pressure=float(p[0]),
            mass=mass,
            radius=float(r[-1]),
            r=r,
            p=p,
            epsilon=epsilon,
            m=m,
            mb=m,
            nu=jnp.zeros_like(r),
        )

    return make_model
