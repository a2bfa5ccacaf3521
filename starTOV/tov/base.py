r"""
Base class for TOV equation solvers.

This module defines the interface a single-star solver implements and the
sequence construction built on top of it.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
from tqdm import tqdm

from starTOV.config import TOVConfig
from starTOV.exceptions import IntegrationFailure, InvalidInput
from starTOV.logging_config import get_logger
from starTOV.tov.data_classes import Sequence, StellarModel

logger = get_logger(__name__)


class TOVSolverBase(ABC):
    """
    Abstract base class for TOV equation solvers.

    All TOV solvers must implement:
    - solve(): Solve TOV equations for a given central pressure

    Args:
        config: Solver and sequence settings; defaults are used if omitted.
    """

    def __init__(self, config: Optional[TOVConfig] = None):
        self.config = config if config is not None else TOVConfig()

    @abstractmethod
    def solve(self, eos, pc: float, **kwargs) -> StellarModel:
        r"""
        Solve TOV equations for given central pressure.

        Args:
            eos: Equation of state
            pc: Central pressure [geometric units]
            **kwargs: Additional solver-specific parameters

        Returns:
            StellarModel: Mass, radius and radial profiles [geometric units]
        """
        pass

    def construct_sequence(
        self,
        eos,
        central_densities=None,
        central_pressures=None,
        show_progress: Optional[bool] = None,
    ) -> Sequence:
        r"""
        Solve one star per central value and classify the resulting family.

        Give exactly one of ``central_densities`` or ``central_pressures``,
        strictly increasing. Stars whose solve fails are logged with their
        central value and left out; the remaining models keep the input order.

        Args:
            eos: Equation of state shared by all stars
            central_densities: Central rest-mass densities [geometric units]
            central_pressures: Central pressures [geometric units]
            show_progress: Show a progress bar; defaults to the configuration

        Returns:
            Sequence: Models with causality and stability classification.

        Raises:
            InvalidInput: If both or neither grids are given, or the grid is
                not strictly increasing.
        """
        if (central_densities is None) == (central_pressures is None):
            raise InvalidInput(
                "Give exactly one of central_densities or central_pressures"
            )
        by_density = central_densities is not None
        grid = np.asarray(
            central_densities if by_density else central_pressures, dtype=np.float64
        )
        label = "rho_c" if by_density else "P_c"

        if grid.ndim != 1 or len(grid) == 0:
            raise InvalidInput(f"Central {label} grid must be a non-empty 1-D sequence")
        if np.any(np.diff(grid) <= 0.0):
            raise InvalidInput(f"Central {label} grid must be strictly increasing")

        if show_progress is None:
            show_progress = self.config.sequence.show_progress

        models = []
        densities = []
        for value in tqdm(grid, desc="Solving sequence", disable=not show_progress):
            value = float(value)
            try:
                if not math.isfinite(value) or value <= 0.0:
                    raise InvalidInput(f"Central {label} must be positive, got {value}")
                if by_density:
                    rho_c = value
                    pc = float(eos.pressure_from_density(rho_c))
                else:
                    pc = value
                    rho_c = float(eos.density_from_pressure(pc))
                model = self.solve(eos, pc)
            except (InvalidInput, IntegrationFailure) as e:
                logger.warning(f"Failed to solve for {label} = {value}: {e}")
                continue
            models.append(model)
            densities.append(rho_c)

        logger.info(f"Solved {len(models)} of {len(grid)} stars in the sequence")

        return Sequence.from_models(
            eos,
            densities,
            models,
            causality_threshold=self.config.sequence.causality_threshold,
        )
