"""Logger setup shared by the engine, the launcher and games."""

from __future__ import annotations
import logging
import sys

ROOT_LOGGER = "reflexes"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure(debug: bool = False) -> logging.Logger:
    """
    Install a single stderr handler on the root project logger.
    Safe to call more than once; later calls only adjust the level.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root
