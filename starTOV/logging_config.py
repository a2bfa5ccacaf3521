"""
Logging configuration for the starTOV package.

A single stdout handler lives on the package logger ``"starTOV"``. Modules log
through child loggers named after themselves::

    logger = get_logger(__name__)  # e.g. "starTOV.tov.gr"

Child loggers carry no handler or level of their own, so their records reach
the package handler and :func:`set_log_level` on the package controls solver
and sequence output in one place.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "starTOV"
DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def setup_logger(
    level: int = logging.INFO, fmt: Optional[str] = None
) -> logging.Logger:
    """
    Attach the stdout handler to the package logger.

    Calling this again does not add a second handler; it only replaces the
    format if one is given.

    Parameters
    ----------
    level : int, optional
        Logging level of the package logger. Default is INFO.
    fmt : str, optional
        Format string; defaults to ``"[LEVEL] name: message"``.

    Returns
    -------
    logging.Logger
        The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        logger.addHandler(handler)
        # stellar-structure output stays out of the application's root logger
        logger.propagate = False
    elif fmt is not None:
        for handler in logger.handlers:
            handler.setFormatter(logging.Formatter(fmt))

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Logger for a starTOV module.

    Names outside the package are placed under it (``"sweep"`` becomes
    ``"starTOV.sweep"``), so every record goes through the package handler.

    Examples
    --------
    >>> from starTOV.logging_config import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Solving sequence...")
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """
    Change the verbosity of all starTOV output.

    Examples
    --------
    >>> import logging
    >>> from starTOV.logging_config import set_log_level
    >>> set_log_level(logging.DEBUG)  # show per-star solver diagnostics
    """
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


setup_logger()
