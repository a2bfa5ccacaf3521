r"""
Utility functions and constants for stellar structure calculations.

**Units:** The solver works in geometric units where :math:`G = c = M_\odot = 1`.
Lengths are then measured in units of :math:`G M_\odot / c^2 \approx 1.4766` km
and masses in solar masses. The :class:`GeometricUnits` record holds the
conversion scale, computed once from the fundamental constants below.
"""

from dataclasses import dataclass
from typing import Literal

import jax.numpy as jnp
from jaxtyping import Array, Float

#################################
### PHYSICAL CONSTANTS AND UNIT CONVERSIONS ###
#################################

# Fundamental constants (SI units)
c = 299792458.0  # Speed of light [m/s]
G = 6.6743e-11  # Gravitational constant [m³/kg/s²]
Msun = 1.988409870698051e30  # Solar mass [kg]

# Derived constants
solar_mass_in_meter = Msun * G / c / c  # Solar mass in geometric units [m]
m_to_km = 1e-3


@dataclass(frozen=True)
class GeometricUnits:
    r"""
    Immutable conversion scale between geometric and physical units.

    In :math:`G = c = M_\odot = 1` units one unit of length equals
    ``length_km`` kilometres and one unit of mass equals one solar mass.

    Attributes:
        length_km: :math:`G M_\odot / c^2` in km.
    """

    length_km: float

    @classmethod
    def from_constants(
        cls, G: float = G, c: float = c, Msun: float = Msun
    ) -> "GeometricUnits":
        """Build the record from SI values of G, c and the solar mass."""
        return cls(length_km=Msun * G / c / c * m_to_km)

    def to_km(self, length):
        """Geometric length to kilometres."""
        return length * self.length_km

    def km_to_solar_mass(self, mass_km):
        """Mass expressed as a length in km (:math:`GM/c^2`) to solar masses."""
        return mass_km / self.length_km


GEOMETRIC_UNITS = GeometricUnits.from_constants()


#########################
### UTILITY FUNCTIONS ###
#########################

Extrapolation = Literal["clip", "nan"]


def interp(
    x,
    xs: Float[Array, "n"],
    ys: Float[Array, "n"],
    extrapolate: Extrapolation = "clip",
):
    r"""
    Piecewise-linear interpolation with an explicit extrapolation policy.

    Parameters
    ----------
    x : float or Array
        Point(s) at which to evaluate the interpolation
    xs : Array
        Known x-coordinates, strictly increasing
    ys : Array
        Known y-coordinates
    extrapolate : {"clip", "nan"}
        ``"clip"`` holds the end values outside ``[xs[0], xs[-1]]``;
        ``"nan"`` returns NaN there.

    Returns
    -------
    float or Array
        Interpolated value(s) at x
    """
    if extrapolate == "clip":
        return jnp.interp(x, xs, ys)
    if extrapolate == "nan":
        return jnp.interp(x, xs, ys, left=jnp.nan, right=jnp.nan)
    raise ValueError(f"Unknown extrapolation policy: {extrapolate!r}")
