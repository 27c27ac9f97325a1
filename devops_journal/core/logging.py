"""
Logging configuration and utilities for the DevOps Journal application.

This module provides centralized logging setup using Loguru with
structured logging and configurable output formats.
"""

import sys
from typing import TYPE_CHECKING, Dict, Any

from loguru import logger

if TYPE_CHECKING:
    from ..settings import LoggingSettings


# Store configured loggers to avoid reconfiguration
_configured_loggers: Dict[str, bool] = {}


def setup_logging(
    log_settings: "LoggingSettings",
    logger_name: str = "devops_journal"
) -> None:
    """
    Set up application logging with Loguru.

    Args:
        log_settings: Logging configuration settings
        logger_name: Name of the logger instance
    """
    if logger_name in _configured_loggers:
        return  # Already configured

    # Records from unbound loggers still need a module for the formats below
    logger.configure(extra={"module": "-"})

    # Remove default handler
    logger.remove()

    # Console handler with colored output
    logger.add(
        sys.stdout,
        level=log_settings.level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[module]}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False
    )

    # File handler if specified
    if log_settings.file:
        # Ensure log directory exists
        log_settings.file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_settings.file,
            level=log_settings.level,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss} | "
                "{level: <8} | "
                "{extra[module]}:{function}:{line} | "
                "{message}"
            ),
            rotation="10 MB",
            retention="1 month",
            compression="gz",
            encoding="utf-8",
            backtrace=True,
            diagnose=False
        )

    _configured_loggers[logger_name] = True
    logger.info(f"Logging configured for {logger_name} at level {log_settings.level}")


def get_logger(module_name: str) -> Any:
    """
    Get a logger instance for a specific module.

    Args:
        module_name: Name of the module requesting the logger

    Returns:
        Configured logger instance
    """
    return logger.bind(module=module_name)
