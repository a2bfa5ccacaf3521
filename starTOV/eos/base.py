r"""Base class for equation of state models."""

import abc

import equinox as eqx


class EquationOfState(eqx.Module):
    r"""
    Capability contract for thermodynamic closure of the TOV equations.

    An equation of state relates rest-mass density :math:`\rho`, pressure
    :math:`p` and total energy density :math:`\varepsilon`. Every model exposes
    the same five conversions so the TOV integrand never needs to know which
    concrete model it was handed.

    All conversions are pure and accept scalars or arrays. Inputs must be
    non-negative; callers are responsible for guarding against negative values.

    Models are :class:`equinox.Module` instances, hence immutable pytrees that
    can be passed as ``args`` into a jitted ODE solve and shared between
    solves.
    """

    @abc.abstractmethod
    def pressure_from_density(self, rho):
        r"""Pressure :math:`p(\rho)`."""

    @abc.abstractmethod
    def energy_density_from_density(self, rho):
        r"""Total energy density :math:`\varepsilon(\rho)`."""

    @abc.abstractmethod
    def density_from_pressure(self, p):
        r"""Density :math:`\rho(p)`, the inverse of :meth:`pressure_from_density`."""

    @abc.abstractmethod
    def energy_density_from_pressure(self, p):
        r"""Total energy density :math:`\varepsilon(p)`."""

    def rest_mass_density_from_pressure(self, p):
        r"""
        Rest-mass density :math:`\rho_0(p)` entering the baryonic mass integral.

        The density variable of every model in this package is the rest-mass
        density, so this defaults to :meth:`density_from_pressure`.
        """
        return self.density_from_pressure(p)

    def validate_central_pressure(self, pc: float) -> None:
        """
        Hook for model-specific checks on a central pressure before a solve.

        Raises:
            InvalidInput: if the model cannot describe matter at ``pc``.
        """
        return None
