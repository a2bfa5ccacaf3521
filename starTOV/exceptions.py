"""Error kinds raised by the EOS constructors and the TOV solver."""

from typing import Any, Optional


class TOVError(Exception):
    """Base class for starTOV errors."""


class InvalidEOSParameters(TOVError, ValueError):
    """Malformed equation-of-state parameters or tables at construction."""


class InvalidInput(TOVError, ValueError):
    """Non-physical solver input (central pressure/density, sequence grid)."""


class IntegrationFailure(TOVError, RuntimeError):
    """
    A single-star solve did not produce a usable stellar model.

    Args:
        message: Human readable description of the failure.
        stage: Solver stage that failed, ``"seeding"`` or ``"integration"``.
        parameters: Inputs needed to reproduce the failure (EOS, pc, radii).
    """

    def __init__(
        self,
        message: str,
        stage: str,
        parameters: Optional[dict[str, Any]] = None,
    ):
        self.stage = stage
        self.parameters = dict(parameters or {})
        details = ", ".join(f"{k}={v}" for k, v in self.parameters.items())
        if details:
            message = f"[{stage}] {message} ({details})"
        else:
            message = f"[{stage}] {message}"
        super().__init__(message)


class DegenerateSurface(UserWarning):
    """Surface radius at or inside the Schwarzschild radius (R <= 2M)."""
