"""Logging utilities."""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for an application embedding the engine.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
