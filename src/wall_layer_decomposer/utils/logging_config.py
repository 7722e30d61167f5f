"""
Logging configuration for the wall layer decomposer.

Provides a single configure() call that sets up file and console output,
plus a custom TRACE level for per-point geometry diagnostics. The log
directory is always passed in explicitly; nothing is derived from the
location of the installed package.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional


class DecomposerLogger:
    """
    Configures logging for the decomposer with multiple levels.

    Supports:
    - Standard levels (CRITICAL, ERROR, WARNING, INFO, DEBUG)
    - Custom TRACE level for point-by-point geometry diagnostics
    - Optional file output next to console output
    """

    # Define custom TRACE level (between DEBUG and NOTSET)
    TRACE_LEVEL = 5
    logging.addLevelName(TRACE_LEVEL, "TRACE")

    @staticmethod
    def configure(
        debug_mode: bool = False,
        log_dir: Optional[str] = None,
        console: bool = True,
    ) -> Optional[str]:
        """
        Configure the logging system for the whole decomposer package.

        Args:
            debug_mode: If True, sets DEBUG level for all loggers
            log_dir: Directory to store log files. No file is written if None.
            console: If True, also log to stdout

        Returns:
            Path to the created log file, or None when file logging is off
        """
        package_logger = logging.getLogger("wall_layer_decomposer")
        level = logging.DEBUG if debug_mode else logging.INFO
        package_logger.setLevel(level)

        # Clear any existing handlers
        if package_logger.handlers:
            package_logger.handlers.clear()

        log_file = None
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = os.path.join(log_dir, f"wall_decomposition_{timestamp}.log")

            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            file_handler.setLevel(level)
            package_logger.addHandler(file_handler)

        if console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(
                logging.Formatter('%(name)s - %(levelname)s: %(message)s')
            )
            console_handler.setLevel(logging.INFO)
            package_logger.addHandler(console_handler)

        return log_file

    @staticmethod
    def get_logger(name: str, level: Optional[int] = None):
        """
        Get a logger for a specific module.

        Args:
            name: Logger name, typically __name__
            level: Optional specific level for this logger
        """
        logger = logging.getLogger(name)
        if level:
            logger.setLevel(level)
        return logger


def get_logger(name: str, level: Optional[int] = None):
    """Convenience function that delegates to DecomposerLogger.get_logger."""
    return DecomposerLogger.get_logger(name, level)
