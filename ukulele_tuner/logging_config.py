"""Centralized logging configuration for the Ukulele Tuner.

This module provides a consistent way to configure logging across the application.
"""

import logging
import sys
from typing import Optional

# Log levels for different modules
MODULE_LOG_LEVELS = {
    # Core modules
    "ukulele_tuner": logging.INFO,
    "ukulele_tuner.tuning_session": logging.INFO,
    "ukulele_tuner.core": logging.INFO,
    # Detection pipeline, set to DEBUG to see every tick
    "ukulele_tuner.detection": logging.INFO,
    "ukulele_tuner.audio": logging.INFO,
    "ukulele_tuner.ui": logging.WARNING,  # Renderers are chatty, keep at WARNING
    "ukulele_tuner.cli": logging.INFO,
    # Libraries/third-party
    "sounddevice": logging.ERROR,
    # Root logger
    "": logging.ERROR,
}

# Shared console handler
_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'ukulele_tuner' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    # Create a single, shared console handler if it doesn't exist
    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)

    # Determine log levels
    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("ukulele_tuner"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    # Apply module-specific levels
    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name)
        logger.setLevel(module_level)

        # Only the top-level loggers own the handler, children propagate to them
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        if module_name in ("", "ukulele_tuner"):
            logger.addHandler(_console_handler)
            logger.propagate = False

    logging.getLogger("ukulele_tuner").info("Logging configuration complete")
