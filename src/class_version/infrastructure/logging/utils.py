#!/usr/bin/env python3

"""Logging helpers shared by every layer of the extractor."""

import logging
from collections.abc import Callable
from functools import wraps
from time import perf_counter
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])

PACKAGE_LOGGER_NAME = "class_version"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module of this package.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance; handlers are installed by LoggerSetup
    """
    return logging.getLogger(name)


def log_timing(func: F) -> F:
    """Log how long a pipeline step took.

    The start and end of the call are logged at DEBUG level on the logger of
    the module that defines ``func``. A failure is logged at ERROR level with
    the exception type and re-raised unchanged.

    Args:
        func: Function to decorate

    Returns:
        Wrapped function that logs timing
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(func.__module__)
        step = func.__qualname__

        logger.debug(f"{step}: started")
        started = perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(
                f"{step}: failed after {perf_counter() - started:.3f}s "
                f"({type(e).__name__}: {e})"
            )
            raise
        logger.debug(f"{step}: finished in {perf_counter() - started:.3f}s")
        return result

    return cast("F", wrapper)
