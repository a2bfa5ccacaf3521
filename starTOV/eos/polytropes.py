r"""
Single and piecewise polytropic equations of state.

A polytrope relates pressure and rest-mass density through

.. math::
    p = K \rho^\Gamma, \qquad
    \varepsilon = (1 + a)\rho + \frac{K \rho^\Gamma}{\Gamma - 1}

with :math:`a = 0` for a single polytrope. Piecewise polytropes glue several
such segments together at fixed densities, deriving :math:`K_i` and
:math:`a_i` for all but the lowest-density segment from continuity of
pressure and energy density (Read et al. 2009).
"""

from typing import Sequence as SequenceType

import numpy as np
import jax.numpy as jnp
from jaxtyping import Array, Float, Int

from starTOV.eos.base import EquationOfState
from starTOV.exceptions import InvalidEOSParameters


def _check_adiabatic_index(gamma: float) -> None:
    if not np.isfinite(gamma) or gamma <= 0.0:
        raise InvalidEOSParameters(f"Adiabatic index must be positive, got {gamma}")
    if gamma == 1.0:
        raise InvalidEOSParameters("Adiabatic index Gamma = 1 is not supported")


class Polytrope(EquationOfState):
    r"""
    Single polytrope :math:`p = K\rho^\Gamma`.

    Args:
        K: Polytropic constant, positive.
        gamma: Adiabatic index :math:`\Gamma`, positive and different from 1.

    Raises:
        InvalidEOSParameters: If K or gamma are out of range.
    """

    K: float
    gamma: float

    def __init__(self, K: float, gamma: float):
        K = float(K)
        gamma = float(gamma)
        if not np.isfinite(K) or K <= 0.0:
            raise InvalidEOSParameters(f"Polytropic constant must be positive, got {K}")
        _check_adiabatic_index(gamma)
        self.K = K
        self.gamma = gamma

    def pressure_from_density(self, rho):
        return self.K * jnp.power(rho, self.gamma)

    def energy_density_from_density(self, rho):
        return rho + self.pressure_from_density(rho) / (self.gamma - 1.0)

    def density_from_pressure(self, p):
        return jnp.power(p / self.K, 1.0 / self.gamma)

    def energy_density_from_pressure(self, p):
        return self.density_from_pressure(p) + p / (self.gamma - 1.0)


class PiecewisePolytrope(EquationOfState):
    r"""
    Piecewise polytrope with continuous pressure and energy density.

    Region :math:`i` covers :math:`\rho_{i-1} < \rho \le \rho_i` where
    :math:`\rho_i` are the ``boundaries``; the first region extends down to
    zero density and the last one has no upper bound. A density exactly on a
    boundary belongs to the lower-density region.

    Args:
        boundaries: Strictly increasing, positive transition densities.
        gammas: Adiabatic indices, one per region (``len(boundaries) + 1``).
        K: Polytropic constant of the lowest-density region.

    Attributes:
        Ks: Derived polytropic constants per region.
        a: Derived energy-density integration constants per region, ``a[0] = 0``.
        pressure_boundaries: Pressures at the transition densities.

    Raises:
        InvalidEOSParameters: On malformed boundaries, adiabatic indices or K.
    """

    boundaries: Float[Array, "n_boundaries"]
    gammas: Float[Array, "n_regions"]
    Ks: Float[Array, "n_regions"]
    a: Float[Array, "n_regions"]
    pressure_boundaries: Float[Array, "n_boundaries"]

    def __init__(
        self,
        boundaries: SequenceType[float],
        gammas: SequenceType[float],
        K: float,
    ):
        boundaries = np.asarray(boundaries, dtype=np.float64)
        gammas = np.asarray(gammas, dtype=np.float64)
        K = float(K)

        if boundaries.ndim != 1 or gammas.ndim != 1:
            raise InvalidEOSParameters("boundaries and gammas must be one-dimensional")
        if len(boundaries) == 0:
            raise InvalidEOSParameters(
                "At least one boundary is required, use Polytrope for a single segment"
            )
        if len(gammas) != len(boundaries) + 1:
            raise InvalidEOSParameters(
                f"Expected {len(boundaries) + 1} adiabatic indices for "
                f"{len(boundaries)} boundaries, got {len(gammas)}"
            )
        if not np.all(np.isfinite(boundaries)) or np.any(boundaries <= 0.0):
            raise InvalidEOSParameters("Boundary densities must be finite and positive")
        if np.any(np.diff(boundaries) <= 0.0):
            raise InvalidEOSParameters("Boundary densities must be strictly increasing")
        for gamma in gammas:
            _check_adiabatic_index(float(gamma))
        if not np.isfinite(K) or K <= 0.0:
            raise InvalidEOSParameters(f"Polytropic constant must be positive, got {K}")

        Ks = np.empty_like(gammas)
        a = np.empty_like(gammas)
        Ks[0] = K
        a[0] = 0.0
        for i, rho_i in enumerate(boundaries):
            # match p and eps at rho_i
            Ks[i + 1] = Ks[i] * rho_i ** (gammas[i] - gammas[i + 1])
            a[i + 1] = (
                a[i]
                + Ks[i] * rho_i ** (gammas[i] - 1.0) / (gammas[i] - 1.0)
                - Ks[i + 1] * rho_i ** (gammas[i + 1] - 1.0) / (gammas[i + 1] - 1.0)
            )
        pressure_boundaries = Ks[:-1] * boundaries ** gammas[:-1]

        self.boundaries = jnp.asarray(boundaries)
        self.gammas = jnp.asarray(gammas)
        self.Ks = jnp.asarray(Ks)
        self.a = jnp.asarray(a)
        self.pressure_boundaries = jnp.asarray(pressure_boundaries)

    @property
    def n_regions(self) -> int:
        return len(self.gammas)

    def region_from_density(self, rho) -> Int[Array, "..."]:
        """Index of the smallest boundary with ``rho <= boundary`` (last region above all)."""
        return jnp.searchsorted(self.boundaries, rho, side="left")

    def region_from_pressure(self, p) -> Int[Array, "..."]:
        """Same rule as :meth:`region_from_density` on the pressure boundaries."""
        return jnp.searchsorted(self.pressure_boundaries, p, side="left")

    def pressure_from_density(self, rho):
        i = self.region_from_density(rho)
        return self.Ks[i] * jnp.power(rho, self.gammas[i])

    def energy_density_from_density(self, rho):
        i = self.region_from_density(rho)
        gamma = self.gammas[i]
        p = self.Ks[i] * jnp.power(rho, gamma)
        return (1.0 + self.a[i]) * rho + p / (gamma - 1.0)

    def density_from_pressure(self, p):
        i = self.region_from_pressure(p)
        return jnp.power(p / self.Ks[i], 1.0 / self.gammas[i])

    def energy_density_from_pressure(self, p):
        i = self.region_from_pressure(p)
        gamma = self.gammas[i]
        rho = jnp.power(p / self.Ks[i], 1.0 / gamma)
        return (1.0 + self.a[i]) * rho + p / (gamma - 1.0)
