"""Core application modules and shared utilities."""

from .exceptions import DevOpsJournalError
from .logging import setup_logging, get_logger

__all__ = [
    "DevOpsJournalError",
    "setup_logging",
    "get_logger"
]
