"""
TOV (Tolman-Oppenheimer-Volkoff) solver module.

Integrates the equilibrium structure of static, spherically symmetric stars
in General Relativity for any EquationOfState and builds sequences of such
stars.
"""

from starTOV.tov.data_classes import StellarState, StellarModel, Sequence
from starTOV.tov.integrand import tov_rhs, central_series, central_series_derivative
from starTOV.tov.base import TOVSolverBase
from starTOV.tov.gr import GRTOVSolver, shift_metric_potential

__all__ = [
    "StellarState",
    "StellarModel",
    "Sequence",
    "tov_rhs",
    "central_series",
    "central_series_derivative",
    "TOVSolverBase",
    "GRTOVSolver",
    "shift_metric_potential",
]
