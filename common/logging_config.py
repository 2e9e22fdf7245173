"""
Logging Configuration.

All modules obtain their logger through `get_logger(__name__)` so that output
from the solvers, the batch layer and the consistency checker shares a single
format.
"""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the geodesy toolkit.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger
