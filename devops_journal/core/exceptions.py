"""
Custom exceptions for the DevOps Journal application.

This module defines application-specific exceptions that provide
clear error handling and debugging information.
"""

from pathlib import Path
from typing import Optional, Dict, Any, Union


class DevOpsJournalError(Exception):
    """Base exception for all DevOps Journal application errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(DevOpsJournalError):
    """Raised when there are configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None) -> None:
        super().__init__(message, "CONFIG_ERROR")
        self.config_key = config_key


class DevOpsIntegrationError(DevOpsJournalError):
    """Raised when the Azure DevOps MCP server or one of its tools fails."""

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        server: Optional[str] = None
    ) -> None:
        super().__init__(message, "DEVOPS_ERROR")
        self.tool_name = tool_name
        self.server = server


class CalendarIntegrationError(DevOpsJournalError):
    """Raised when calendar events cannot be retrieved."""

    def __init__(self, message: str, tool_name: Optional[str] = None) -> None:
        super().__init__(message, "CALENDAR_ERROR")
        self.tool_name = tool_name


class StorageError(DevOpsJournalError):
    """Raised when a journal entry cannot be written."""

    def __init__(self, message: str, file_path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message, "STORAGE_ERROR")
        self.file_path = str(file_path) if file_path is not None else None


class ValidationError(DevOpsJournalError):
    """Raised when data validation fails."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        invalid_value: Optional[Any] = None
    ) -> None:
        super().__init__(message, "VALIDATION_ERROR")
        self.field_name = field_name
        self.invalid_value = invalid_value
