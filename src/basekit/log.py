"""Logging setup for the basekit CLI.

The library modules only create loggers; handlers are installed here, and
only by the command-line entry point.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib

import basekit.config

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


@basekit.config.configurable("logging")
@dataclasses.dataclass
class LoggingConfig:
    level: str = "WARNING"
    format: str = DEFAULT_FORMAT


def setup_logging(
    level: str | None = None,
    root: pathlib.Path | None = None,
) -> LoggingConfig:
    """Configure the ``basekit`` logger from config, with *level* overriding it."""
    config = basekit.config.load("logging", root, level=level)
    if isinstance(config.level, int) and not isinstance(config.level, bool):
        numeric = config.level
    else:
        numeric = logging.getLevelName(str(config.level).upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {config.level}")

    logger = logging.getLogger("basekit")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.format))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return config
