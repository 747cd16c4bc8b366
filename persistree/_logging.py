"""Logger factory for persistree.

The library never configures logging itself. Every module asks for a
logger through :func:`null_logger`, which attaches a ``NullHandler`` so
nothing is printed unless the application sets up handlers.
"""

import logging


def null_logger(name: str) -> logging.Logger:
    """Return a module logger that stays silent by default."""
    logger = logging.getLogger(name)
    logger.addHandler(logging.NullHandler())
    return logger
