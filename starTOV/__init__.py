"""
starTOV: equilibrium structure of static relativistic stars.

Integrates the Tolman-Oppenheimer-Volkoff equations for a pluggable equation
of state and classifies families of the resulting stars.
"""

import jax

# Surface location and metric matching need double precision
jax.config.update("jax_enable_x64", True)

from starTOV import analysis, eos, tov, utils  # noqa: E402
from starTOV.analysis import check_causality, find_stability_branch  # noqa: E402
from starTOV.config import TOVConfig, load_config  # noqa: E402
from starTOV.exceptions import (  # noqa: E402
    DegenerateSurface,
    IntegrationFailure,
    InvalidEOSParameters,
    InvalidInput,
    TOVError,
)
from starTOV.tov import GRTOVSolver, Sequence, StellarModel  # noqa: E402

__all__ = [
    "analysis",
    "eos",
    "tov",
    "utils",
    "check_causality",
    "find_stability_branch",
    "TOVConfig",
    "load_config",
    "DegenerateSurface",
    "IntegrationFailure",
    "InvalidEOSParameters",
    "InvalidInput",
    "TOVError",
    "GRTOVSolver",
    "Sequence",
    "StellarModel",
]
