r"""Pydantic models for solver configuration validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SolverConfig(BaseModel):
    """Configuration for single-star TOV integrations.

    Attributes
    ----------
    r_init : float
        Radius at which the central series seeds the integration
    r_max : float
        Outer integration bound; no surface inside it is a failure
    rtol : float
        Relative tolerance of the adaptive step controller
    atol : float
        Absolute tolerance of the adaptive step controller
    max_steps : int
        Ceiling on solver steps before the solve is reported as failed
    root_rtol : float
        Relative tolerance of the surface root find
    root_atol : float
        Absolute tolerance of the surface root find
    """

    model_config = ConfigDict(extra="forbid")

    r_init: float = Field(default=1e-8, gt=0.0)
    r_max: float = Field(default=1000.0, gt=0.0)
    rtol: float = Field(default=1e-8, gt=0.0)
    atol: float = Field(default=1e-8, gt=0.0)
    max_steps: int = Field(default=16384, gt=0)
    root_rtol: float = Field(default=1e-12, gt=0.0)
    root_atol: float = Field(default=1e-12, gt=0.0)

    @field_validator("r_max")
    @classmethod
    def validate_r_max(cls, v: float, info) -> float:
        """Validate that the outer bound lies beyond the seed radius."""
        if "r_init" in info.data and v <= info.data["r_init"]:
            raise ValueError(
                f"r_max ({v}) must be larger than r_init ({info.data['r_init']})"
            )
        return v


class SequenceConfig(BaseModel):
    """Configuration for sequence solves and their classification.

    Attributes
    ----------
    causality_threshold : float
        Minimum energy-density difference used in sound-speed estimates
    show_progress : bool
        Show a progress bar while solving the sequence
    """

    model_config = ConfigDict(extra="forbid")

    causality_threshold: float = Field(default=1e-16, ge=0.0)
    show_progress: bool = True


class TOVConfig(BaseModel):
    """Top-level configuration.

    Attributes
    ----------
    solver : SolverConfig
        Single-star integration settings
    sequence : SequenceConfig
        Sequence solve settings
    """

    model_config = ConfigDict(extra="forbid")

    solver: SolverConfig = Field(default_factory=SolverConfig)
    sequence: SequenceConfig = Field(default_factory=SequenceConfig)
