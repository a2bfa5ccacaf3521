r"""Equation of state models for relativistic stellar structure."""

from .base import EquationOfState
from .polytropes import Polytrope, PiecewisePolytrope
from .tabulated import TabulatedEOS
from .constant_density import ConstantDensity

__all__ = [
    "EquationOfState",
    "Polytrope",
    "PiecewisePolytrope",
    "TabulatedEOS",
    "ConstantDensity",
]
