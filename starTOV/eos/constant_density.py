r"""Incompressible (constant energy density) matter."""

import numpy as np
import jax.numpy as jnp

from starTOV.eos.base import EquationOfState
from starTOV.exceptions import InvalidEOSParameters


class ConstantDensity(EquationOfState):
    r"""
    Constant energy density :math:`\varepsilon \equiv \varepsilon_0`.

    The TOV equations then have the closed-form Schwarzschild interior
    solution, :math:`m(r) = \frac{4}{3}\pi\varepsilon_0 r^3`, which makes this
    model the standard check of the integrator. The rest-mass density is taken
    equal to :math:`\varepsilon_0`.

    Pressure is not a function of density for incompressible matter, so
    :meth:`pressure_from_density` returns NaN; solve these stars by central
    pressure.

    Args:
        epsilon_0: Energy density, positive.
    """

    epsilon_0: float

    def __init__(self, epsilon_0: float):
        epsilon_0 = float(epsilon_0)
        if not np.isfinite(epsilon_0) or epsilon_0 <= 0.0:
            raise InvalidEOSParameters(
                f"Constant energy density must be positive, got {epsilon_0}"
            )
        self.epsilon_0 = epsilon_0

    def pressure_from_density(self, rho):
        return jnp.full_like(jnp.asarray(rho, dtype=float), jnp.nan)

    def energy_density_from_density(self, rho):
        return jnp.full_like(jnp.asarray(rho, dtype=float), self.epsilon_0)

    def density_from_pressure(self, p):
        return jnp.full_like(jnp.asarray(p, dtype=float), self.epsilon_0)

    def energy_density_from_pressure(self, p):
        return jnp.full_like(jnp.asarray(p, dtype=float), self.epsilon_0)
