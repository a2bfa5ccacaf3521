"""Configuration schema and YAML loading for starTOV."""

from .schema import SolverConfig, SequenceConfig, TOVConfig
from .parser import load_config

__all__ = ["SolverConfig", "SequenceConfig", "TOVConfig", "load_config"]
