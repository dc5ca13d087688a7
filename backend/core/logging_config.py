"""Logging setup shared by the risk services and the CLI scripts."""

import logging
from typing import Union


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name from `config.yml` (e.g. "debug") into a logging constant.

    Unknown names resolve to INFO.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if isinstance(resolved, int):
        return resolved
    logging.getLogger(__name__).warning("Unknown log level '%s'. Using INFO.", level)
    return logging.INFO


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Apply `level` to the root logger, adding the shared handler only once."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(resolve_level(level))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
