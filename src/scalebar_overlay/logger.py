"""Console logging helper shared by the scale bar modules."""

from __future__ import annotations

import logging

_LOGGER_NAME = "scalebar_overlay"


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, installing the console handler once.

    Parameters
    ----------
    name : str
        Module name, typically ``__name__``.
    """
    base = logging.getLogger(_LOGGER_NAME)
    if not base.handlers:
        base.setLevel(logging.WARNING)
        handler = logging.StreamHandler()
        handler.setLevel(logging.WARNING)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] [%(levelname)s] %(module)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        base.addHandler(handler)
        base.propagate = False
    if name.startswith(f"{_LOGGER_NAME}.") or name == _LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def set_level(level: int) -> None:
    """Update log level for the package logger and its handlers."""
    base = logging.getLogger(_LOGGER_NAME)
    base.setLevel(level)
    for handler in base.handlers:
        handler.setLevel(level)
