from __future__ import annotations

import logging
from typing import Optional, TextIO

from schedcopy.errors import ConfigError

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

PACKAGE_LOGGER: str = "schedcopy"
LOG_FORMAT: str = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# -v count -> level of the schedcopy logger; everything else stays at ERROR.
_VERBOSITY_LEVELS: tuple[int, ...] = (
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
    TRACE,
)


def level_for_verbosity(verbosity: int) -> int:
    """Map a -v count (0..4) to a logging level. Raises ConfigError otherwise."""
    if verbosity < 0 or verbosity >= len(_VERBOSITY_LEVELS):
        raise ConfigError(
            f"invalid arg: 4 < {verbosity} number of verbose",
            details={"verbosity": verbosity},
        )
    return _VERBOSITY_LEVELS[verbosity]


def configure_logging(verbosity: int, *, stream: Optional[TextIO] = None) -> int:
    """
    Configure process logging for the command line.

    Returns:
        The level applied to the schedcopy logger.
    """
    level = level_for_verbosity(verbosity)
    logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT, stream=stream)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    return level
