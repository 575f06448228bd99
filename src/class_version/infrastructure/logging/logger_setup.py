#!/usr/bin/env python3

"""Logger setup and configuration for the application."""

import logging
import sys
from datetime import datetime
from pathlib import Path

from .utils import PACKAGE_LOGGER_NAME


class LoggerSetup:
    """Manages logging configuration for the application.

    Console output goes to stderr because stdout may carry the serialized
    reflection database.
    """

    _initialized = False
    _log_file_path: Path | None = None
    _handlers: list[logging.Handler] = []

    @classmethod
    def initialize(cls, log_dir: Path | None = None, verbose: bool = False) -> None:
        """
        Initialize the logging system with a console and an optional file handler.

        Args:
            log_dir: Directory for a timestamped debug log file, or None for
                console logging only
            verbose: If True, set console to DEBUG level; otherwise INFO
        """
        if cls._initialized:
            return

        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        package_logger.setLevel(logging.DEBUG)
        package_logger.propagate = False

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        package_logger.addHandler(console_handler)
        cls._handlers.append(console_handler)

        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            cls._log_file_path = log_dir / f"class_version_{timestamp}.log"

            file_handler = logging.FileHandler(cls._log_file_path, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            package_logger.addHandler(file_handler)
            cls._handlers.append(file_handler)

        cls._initialized = True

        logger = logging.getLogger(__name__)
        if cls._log_file_path is not None:
            logger.debug(f"Logging initialized. Log file: {cls._log_file_path}")
        logger.debug(f"Verbose mode: {verbose}")

    @classmethod
    def reset(cls) -> None:
        """Remove installed handlers so logging can be initialized again."""
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        for handler in cls._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        cls._handlers = []
        cls._log_file_path = None
        cls._initialized = False
        package_logger.propagate = True

    @classmethod
    def get_log_file_path(cls) -> Path | None:
        """Get the current log file path."""
        return cls._log_file_path

    @classmethod
    def is_initialized(cls) -> bool:
        """Check if logging has been initialized."""
        return cls._initialized
