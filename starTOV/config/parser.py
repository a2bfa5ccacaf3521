"""Configuration file parser for starTOV."""

import yaml
from pathlib import Path
from typing import Union

from starTOV.logging_config import get_logger
from .schema import TOVConfig

logger = get_logger(__name__)


def load_config(config_path: Union[str, Path]) -> TOVConfig:
    """Load and validate a solver configuration from a YAML file.

    Parameters
    ----------
    config_path : str or Path
        Path to YAML configuration file

    Returns
    -------
    TOVConfig
        Validated configuration object

    Raises
    ------
    FileNotFoundError
        If config file does not exist
    yaml.YAMLError
        If YAML parsing fails
    ValueError
        If the file is empty or fails validation

    Examples
    --------
    >>> config = load_config("tov.yaml")
    >>> print(config.solver.rtol)
    1e-08
    """
    config_path = Path(config_path).resolve()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        try:
            config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(
                f"Error parsing YAML configuration file {config_path}: {e}"
            ) from e

    if config_dict is None:
        raise ValueError(f"Configuration file is empty: {config_path}")

    try:
        config = TOVConfig(**config_dict)
    except Exception as e:
        raise ValueError(
            f"Error validating configuration from {config_path}: {e}"
        ) from e

    logger.debug(f"Loaded configuration from {config_path}: {config.model_dump()}")
    return config
