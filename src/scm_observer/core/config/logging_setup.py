"""Apply the logging section of an ObserverConfig."""

import logging

from .schema import ObserverConfig

ROOT_LOGGER_NAME = "scm_observer"


def configure_logging(config: ObserverConfig) -> logging.Logger:
    """Set the package logger level and any per-component overrides.

    Handlers are left to the application; this only adjusts levels.

    Args:
        config: Loaded configuration

    Returns:
        The ``scm_observer`` logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(config.logging.numeric_level())
    for name, level in config.logging.components.items():
        logging.getLogger(name).setLevel(level)
    return root
