# dubbo_config/core/utils/logger.py

"""
Logging configuration and utilities for dubbo_config.

This module provides centralized logging configuration and the helper
functions every engine component uses to report what it did, so that
resolution decisions and swallowed failures are never silent.

The logging system is designed to provide:
- Consistent log formatting across all modules
- Console output with an optional log file
- Module-tagged messages (``[RESOLVER] ...``) with optional context
- Stack traces for exceptions caught on best-effort paths

Key Features:
- Global logger instance with lazy initialization
- Level taken from ``DUBBO_CONFIG_LOG_LEVEL`` when not given explicitly
- Configuration override tracking (which source supplied a value)
"""

import logging
import os
import sys
from typing import Any

# Global logger instance for singleton pattern
_logger: logging.Logger | None = None

LOGGER_NAME = "dubbo_config"
LOG_LEVEL_ENV = "DUBBO_CONFIG_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Set up logging configuration for dubbo_config.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Falls
               back to ``DUBBO_CONFIG_LOG_LEVEL`` and then ``INFO``.
        log_file: Path to log file (optional). If provided, logs are written
                 to both console and file.
        format_string: Custom log format string (optional).

    Returns:
        Configured logger instance

    Note:
        Calling this again replaces the handlers of the previous setup,
        so it is safe to call from a CLI entry point after import time
        logging has already happened.
    """
    global _logger

    level = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, level, logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.disabled = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(format_string or DEFAULT_LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Get the global logger instance.

    If the logger hasn't been initialized yet, it is set up with the
    default configuration.
    """
    if _logger is None:
        return setup_logging()
    return _logger


def log_error(
    module: str, error: str, context: str = "", exception: Exception | None = None
) -> None:
    """
    Log a standardized error message.

    Args:
        module: Name of the module where the error occurred
        error: Error message describing what went wrong
        context: Additional context information (optional)
        exception: Exception object to include stack trace (optional)
    """
    logger = get_logger()
    message = f"[{module.upper()}] {error}"
    if context:
        message += f" | Context: {context}"

    if exception is not None:
        logger.error(message, exc_info=exception)
    else:
        logger.error(message)


def log_warning(
    module: str, warning: str, context: str = "", exception: Exception | None = None
) -> None:
    """
    Log a standardized warning message.

    Args:
        module: Name of the module where the warning occurred
        warning: Warning message describing the potential issue
        context: Additional context information (optional)
        exception: Exception object to include stack trace (optional)
    """
    logger = get_logger()
    message = f"[{module.upper()}] {warning}"
    if context:
        message += f" | Context: {context}"
    if exception is not None:
        logger.warning(message, exc_info=exception)
    else:
        logger.warning(message)


def log_info(module: str, message: str, context: str = "") -> None:
    """Log a standardized info message."""
    logger = get_logger()
    message = f"[{module.upper()}] {message}"
    if context:
        message += f" | Context: {context}"
    logger.info(message)


def log_debug(module: str, message: str, context: str = "") -> None:
    """Log a standardized debug message."""
    logger = get_logger()
    message = f"[{module.upper()}] {message}"
    if context:
        message += f" | Context: {context}"
    logger.debug(message)


def log_override(source: str, key: str, value: Any) -> None:
    """
    Log that a configuration value was taken from an override source.

    Args:
        source: Label of the source (e.g. "environment", "properties")
        key: Fully qualified key the value was read from
        value: Raw value that was found
    """
    logger = get_logger()
    logger.info(f"Use {source} {key}={value!r} to config dubbo")


def reset_logging() -> None:
    """
    Reset the global logger instance.

    This is useful for testing or when you need to reconfigure
    the logging system from scratch.
    """
    global _logger
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    _logger = None
