"""
Immutable containers for the TOV state, single-star results and sequences.

Uses NamedTuple for immutability and automatic JAX pytree compatibility.
"""

from typing import Any, Literal, NamedTuple

import jax.numpy as jnp
from jaxtyping import Array, Float

from starTOV import analysis

StabilityLabel = Literal["stable", "unstable"]


class StellarState(NamedTuple):
    """
    TOV integration state at one radius.

    Used both for the state vector and for its radial derivative.
    """

    p: Float[Array, ""]  # Pressure
    m: Float[Array, ""]  # Enclosed gravitational mass
    nu: Float[Array, ""]  # Metric potential, unnormalised until shifted
    mb: Float[Array, ""]  # Enclosed baryonic mass


class StellarModel(NamedTuple):
    """
    Equilibrium star obtained from one TOV integration [geometric units].

    Profiles are sampled at the accepted integrator steps, ordered by
    increasing radius; the last sample is the surface. When
    ``metric_shifted`` is True, ``exp(2 * nu[-1]) == 1 - 2 M / R``.
    """

    central_pressure: float
    mass: float
    radius: float
    r: Float[Array, "n_samples"]
    p: Float[Array, "n_samples"]
    epsilon: Float[Array, "n_samples"]
    m: Float[Array, "n_samples"]
    mb: Float[Array, "n_samples"]
    nu: Float[Array, "n_samples"]
    metric_shifted: bool = True

    def __repr__(self) -> str:
        return f"StellarModel(M={self.mass}, R={self.radius}, P_c={self.central_pressure})"

    @property
    def baryonic_mass(self) -> float:
        return float(self.mb[-1])

    @property
    def binding_energy(self) -> float:
        """Baryonic minus gravitational mass, positive for a bound star."""
        return self.baryonic_mass - self.mass

    @property
    def compactness(self) -> float:
        return self.mass / self.radius

    @property
    def exp_lambda(self) -> Float[Array, "n_samples"]:
        r"""Radial metric factor :math:`e^\lambda = (1 - 2m/r)^{-1/2}`, 1 at the centre."""
        profile = 1.0 / jnp.sqrt(1.0 - 2.0 * self.m[1:] / self.r[1:])
        return jnp.concatenate([jnp.ones(1), profile])


class Sequence(NamedTuple):
    """
    Family of stellar models for one EOS, ordered by increasing central density.

    Build with :meth:`from_models`, which derives the causality and stability
    classification. A changed model list means building a new Sequence.
    """

    eos: Any
    central_densities: Float[Array, "n_models"]
    models: tuple[StellarModel, ...]
    stability: tuple[StabilityLabel, ...]
    max_mass_index: int
    causality: tuple[tuple[bool, float], ...]

    @classmethod
    def from_models(
        cls,
        eos,
        central_densities,
        models,
        causality_threshold: float = analysis.DEFAULT_CAUSALITY_THRESHOLD,
    ) -> "Sequence":
        models = tuple(models)
        central_densities = jnp.asarray(central_densities, dtype=float)
        if len(central_densities) != len(models):
            raise ValueError(
                f"Got {len(central_densities)} central densities for {len(models)} models"
            )
        if models:
            stability, max_mass_index = analysis.find_stability_branch(models)
        else:
            stability, max_mass_index = (), -1
        causality = tuple(
            analysis.check_causality(model, threshold=causality_threshold)
            for model in models
        )
        return cls(
            eos=eos,
            central_densities=central_densities,
            models=models,
            stability=tuple(stability),
            max_mass_index=max_mass_index,
            causality=causality,
        )

    @property
    def masses(self) -> Float[Array, "n_models"]:
        return jnp.array([model.mass for model in self.models])

    @property
    def radii(self) -> Float[Array, "n_models"]:
        return jnp.array([model.radius for model in self.models])

    @property
    def baryonic_masses(self) -> Float[Array, "n_models"]:
        return jnp.array([model.baryonic_mass for model in self.models])

    @property
    def central_pressures(self) -> Float[Array, "n_models"]:
        return jnp.array([model.central_pressure for model in self.models])
