"""Per-module loggers for the tuner.

Modules call ``get_logger(__name__)`` at import time. Levels and handlers
are decided later by ``logging_config.setup_logging``.
"""
import logging
from typing import Dict

_loggers: Dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """Logger for a dotted module name such as ``ukulele_tuner.tuning_session``."""
    logger = _loggers.get(name)
    if logger is None:
        logger = _loggers[name] = logging.getLogger(name)
    return logger
