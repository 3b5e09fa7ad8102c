# turnscope/core/utils/logger.py

"""
Logging configuration and utilities for turnscope.

This module provides centralized logging configuration and utility functions
so that parsers, loaders and the analytics engine report problems the same
way.

Key Features:
- Global logger instance with lazy initialization
- Standardized "[MODULE] message | Context: ..." format
- Console and optional file output
- Performance timing and file operation logging
"""

import logging
import sys
from typing import Any

# Global logger instance for singleton pattern
_logger: logging.Logger | None = None

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FILE = "turnscope.log"


def setup_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_file: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Set up logging configuration for turnscope.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional). If provided, logs will be
                 written to both console and file.
        format_string: Custom log format string (optional).

    Returns:
        Configured logger instance

    Note:
        Calling this again replaces the handlers of the shared logger, so
        the CLI can reconfigure the level after the config file is loaded.
    """
    global _logger

    logger = logging.getLogger("turnscope")
    logger.disabled = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(format_string or DEFAULT_LOG_FORMAT)

    # Diagnostics go to stderr so JSON output on stdout stays parseable
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

    If the logger hasn't been initialized yet, it will be set up with the
    default configuration.
    """
    if _logger is None:
        return setup_logging()
    return _logger


def _format(module: str, message: str, context: str = "") -> str:
    formatted = f"[{module.upper()}] {message}"
    if context:
        formatted += f" | Context: {context}"
    return formatted


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
    message = _format(module, error, context)
    if exception:
        logger.error(message, exc_info=exception)
    else:
        logger.error(message)


def log_warning(module: str, warning: str, context: str = "") -> None:
    """Log a standardized warning message."""
    get_logger().warning(_format(module, warning, context))


def log_info(module: str, message: str, context: str = "") -> None:
    """Log a standardized info message."""
    get_logger().info(_format(module, message, context))


def log_debug(module: str, message: str, context: str = "") -> None:
    """Log a standardized debug message."""
    get_logger().debug(_format(module, message, context))


def log_configuration_change(setting: str, old_value: Any, new_value: Any) -> None:
    """
    Log a configuration change.

    Args:
        setting: Name of the setting that changed
        old_value: Previous value of the setting
        new_value: New value of the setting
    """
    get_logger().info(f"Configuration changed: {setting} = {old_value} -> {new_value}")


def log_file_operation(
    operation: str, file_path: str, success: bool, error: str | None = None
) -> None:
    """
    Log a file operation.

    Args:
        operation: Type of operation (read, parse, load, ...)
        file_path: Path to the file being operated on
        success: Whether the operation was successful
        error: Error message if the operation failed (optional)
    """
    logger = get_logger()
    if success:
        logger.info(f"File {operation}: {file_path}")
    else:
        logger.error(f"File {operation} failed: {file_path} - {error}")


def log_performance(operation: str, duration: float, context: str = "") -> None:
    """
    Log performance metrics.

    Args:
        operation: Name of the operation being measured
        duration: Duration of the operation in seconds
        context: Additional context about the operation (optional)
    """
    message = f"Performance: {operation} took {duration:.2f}s"
    if context:
        message += f" ({context})"
    get_logger().debug(message)


def reset_logging() -> None:
    """Drop handlers and forget the cached logger (used by tests)."""
    global _logger
    logger = logging.getLogger("turnscope")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    _logger = None
