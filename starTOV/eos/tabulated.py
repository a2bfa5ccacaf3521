r"""Tabulated equation of state with piecewise-linear lookups."""

from typing import Sequence as SequenceType

import numpy as np
import equinox as eqx
import jax.numpy as jnp
from jaxtyping import Array, Float

from starTOV import utils
from starTOV.eos.base import EquationOfState
from starTOV.exceptions import InvalidEOSParameters, InvalidInput


class TabulatedEOS(EquationOfState):
    r"""
    Equation of state sampled on a density grid.

    The samples define monotonic lookup tables :math:`\rho \leftrightarrow p`
    and :math:`\rho, p \rightarrow \varepsilon`, evaluated by piecewise-linear
    interpolation. Outside the sampled range the behaviour is fixed by
    ``extrapolate``:

    - ``"clip"``: hold the first/last tabulated value.
    - ``"nan"``: return NaN, which makes a TOV solve that leaves the table
      fail with :class:`~starTOV.exceptions.IntegrationFailure`.

    Args:
        density: Rest-mass densities, strictly increasing and non-negative.
        pressure: Pressures, strictly increasing and non-negative.
        energy_density: Energy densities, non-decreasing and non-negative.
        extrapolate: Extrapolation policy, ``"clip"`` or ``"nan"``.

    Raises:
        InvalidEOSParameters: If the tables are malformed.
    """

    density: Float[Array, "n_points"]
    pressure: Float[Array, "n_points"]
    energy_density: Float[Array, "n_points"]
    extrapolate: str = eqx.field(static=True)

    def __init__(
        self,
        density: SequenceType[float],
        pressure: SequenceType[float],
        energy_density: SequenceType[float],
        extrapolate: utils.Extrapolation = "clip",
    ):
        density = np.asarray(density, dtype=np.float64)
        pressure = np.asarray(pressure, dtype=np.float64)
        energy_density = np.asarray(energy_density, dtype=np.float64)

        if extrapolate not in ("clip", "nan"):
            raise InvalidEOSParameters(
                f"extrapolate must be 'clip' or 'nan', got {extrapolate!r}"
            )
        if density.ndim != 1 or pressure.ndim != 1 or energy_density.ndim != 1:
            raise InvalidEOSParameters("EOS tables must be one-dimensional")
        if not len(density) == len(pressure) == len(energy_density):
            raise InvalidEOSParameters(
                "density, pressure and energy_density must have equal lengths, got "
                f"{len(density)}, {len(pressure)}, {len(energy_density)}"
            )
        if len(density) < 2:
            raise InvalidEOSParameters("EOS tables need at least two samples")
        for name, values in (
            ("density", density),
            ("pressure", pressure),
            ("energy_density", energy_density),
        ):
            if not np.all(np.isfinite(values)) or np.any(values < 0.0):
                raise InvalidEOSParameters(f"{name} must be finite and non-negative")
        if np.any(np.diff(density) <= 0.0):
            raise InvalidEOSParameters("density must be strictly increasing (density-sorted)")
        if np.any(np.diff(pressure) <= 0.0):
            raise InvalidEOSParameters("pressure must be strictly increasing with density")
        if np.any(np.diff(energy_density) < 0.0):
            raise InvalidEOSParameters("energy_density must not decrease with density")

        self.density = jnp.asarray(density)
        self.pressure = jnp.asarray(pressure)
        self.energy_density = jnp.asarray(energy_density)
        self.extrapolate = extrapolate

    @property
    def pressure_range(self) -> tuple[float, float]:
        return float(self.pressure[0]), float(self.pressure[-1])

    def pressure_from_density(self, rho):
        return utils.interp(rho, self.density, self.pressure, self.extrapolate)

    def energy_density_from_density(self, rho):
        return utils.interp(rho, self.density, self.energy_density, self.extrapolate)

    def density_from_pressure(self, p):
        return utils.interp(p, self.pressure, self.density, self.extrapolate)

    def energy_density_from_pressure(self, p):
        return utils.interp(p, self.pressure, self.energy_density, self.extrapolate)

    def validate_central_pressure(self, pc: float) -> None:
        """Reject central pressures above the tabulated range."""
        p_max = self.pressure_range[1]
        if pc > p_max:
            raise InvalidInput(
                f"Central pressure {pc} exceeds the tabulated maximum {p_max}"
            )
