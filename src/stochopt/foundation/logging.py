from __future__ import annotations

import logging
from typing import TextIO

LOGGER_NAME = "stochopt"


def configure_stochopt_logging(
    *,
    level: int = logging.INFO,
    fmt: str = "%(message)s",
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Attach a console handler to the "stochopt" logger and return it.

    Notes:
        - Opt-in only; library code never calls logging.basicConfig().
        - Nothing is attached when the root logger or the "stochopt" logger
          already has handlers, so an application's own setup wins.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    if logging.getLogger().handlers or package_logger.handlers:
        return package_logger

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return package_logger


__all__ = ["LOGGER_NAME", "configure_stochopt_logging"]
